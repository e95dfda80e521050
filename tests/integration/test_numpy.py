#
# dotip - NumPy Integration Tests
#

# Third party ----------------------------------------------------------------------------------------------------------
import pytest

np = pytest.importorskip("numpy")

# Local ----------------------------------------------------------------------------------------------------------------
from dotip.ip import format_ip, ip_formatter
from dotip.numeric import int_width, is_ndarray_type, type_width
from dotip.shapes import Shape, UnsupportedTypeError, shape_of, shape_of_type


# Tests ----------------------------------------------------------------------------------------------------------------


class TestNumpyScalars:
    """Test NumPy integer scalars and arrays."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(np.int8(-1), "255", id="int8"),
            pytest.param(np.int16(0), "0.0", id="int16"),
            pytest.param(np.uint16(258), "1.2", id="uint16"),
            pytest.param(np.int32(2130706433), "127.0.0.1", id="int32"),
            pytest.param(np.int64(8875824491850138409), "123.45.67.89.101.112.131.41", id="int64"),
            pytest.param(np.uint64(1), "0.0.0.0.0.0.0.1", id="uint64"),
        ],
    )
    def test_format(self, value, expected):
        assert format_ip(value) == expected

    @pytest.mark.parametrize(
        "dtype, expected",
        [(np.int8, 1), (np.uint16, 2), (np.int32, 4), (np.uint64, 8)],
    )
    def test_width(self, dtype, expected):
        assert int_width(dtype(0)) == expected
        assert type_width(dtype) == expected

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param(np.float32(1.0), id="float32"),
            pytest.param(np.bool_(True), id="bool"),
            pytest.param(np.array(5), id="0-d-array"),
        ],
    )
    def test_not_integer(self, value):
        assert int_width(value) is None
        with pytest.raises(UnsupportedTypeError):
            shape_of(value)


class TestNumpyTypes:
    """Test NumPy types as declared types."""

    def test_shape_of_type(self):
        assert shape_of_type(np.uint32) is Shape.INTEGER

    def test_abstract_integer_unsupported(self):
        assert type_width(np.integer) is None
        with pytest.raises(UnsupportedTypeError):
            shape_of_type(np.integer)

    def test_formatter(self):
        fmt = ip_formatter(np.uint32)
        assert fmt.width == 4
        assert fmt(np.uint32(2130706433)) == "127.0.0.1"

    def test_ndarray_annotation(self):
        assert shape_of_type(np.ndarray) is Shape.COLLECTION
        assert ip_formatter(np.ndarray)(np.array([192, 168, 0, 1])) == "192.168.0.1"

    def test_collection_of_numpy_ints(self):
        assert format_ip([np.uint8(10), np.uint8(1)]) == "10.1"


class TestNumpyArrays:
    """Test NumPy arrays as ordered collections."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(np.array([127, 0, 0, 1]), "127.0.0.1", id="int64-array"),
            pytest.param(np.array([10, 1], dtype=np.uint8), "10.1", id="uint8-array"),
            pytest.param(np.array([], dtype=np.int32), "", id="empty"),
            pytest.param(np.array([7]), "7", id="single"),
            pytest.param(np.arange(4), "0.1.2.3", id="arange"),
        ],
    )
    def test_format(self, value, expected):
        assert shape_of(value) is Shape.COLLECTION
        assert format_ip(value) == expected

    def test_zero_dim_rejected(self):
        with pytest.raises(UnsupportedTypeError, match="0-d arrays"):
            format_ip(np.array(5))

    def test_is_ndarray_type(self):
        assert is_ndarray_type(np.ndarray)
        assert is_ndarray_type(type(np.ma.masked_array([1])))
        assert not is_ndarray_type(np.int32)
