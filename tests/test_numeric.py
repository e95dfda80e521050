#
# dotip - Numeric Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import ctypes

# Third party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from dotip.numeric import (
    FIXED_INT_TYPES,
    FixedInt,
    Int8,
    Int16,
    Int32,
    Int64,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    int_to_octets,
    int_value,
    int_width,
    is_ndarray_type,
    type_width,
)


# Tests ----------------------------------------------------------------------------------------------------------------


class TestFixedInt:
    """Test C-style wrapping and rendering of fixed-width int types."""

    @pytest.mark.parametrize(
        "cls, value, expected",
        [
            pytest.param(Int8, 255, -1, id="int8-wrap-high"),
            pytest.param(Int8, -129, 127, id="int8-wrap-low"),
            pytest.param(UInt8, -1, 255, id="uint8-wrap-negative"),
            pytest.param(UInt8, 256, 0, id="uint8-wrap-high"),
            pytest.param(Int16, 65535, -1, id="int16"),
            pytest.param(UInt32, -1, 4294967295, id="uint32"),
            pytest.param(Int64, 2**63, -(2**63), id="int64"),
            pytest.param(Int32, 2130706433, 2130706433, id="in-range"),
        ],
    )
    def test_wraps_like_c_cast(self, cls, value, expected):
        assert cls(value) == expected

    def test_repr_and_str(self):
        assert repr(Int8(-1)) == "Int8(-1)"
        assert str(Int8(-1)) == "-1"
        assert f"{UInt16(7)}" == "7"

    def test_arithmetic_returns_plain_int(self):
        res = Int8(100) + 100
        assert res == 200
        assert type(res) is int

    @pytest.mark.parametrize(
        "cls, expected",
        [
            pytest.param(Int8, (-128, 127), id="int8"),
            pytest.param(UInt8, (0, 255), id="uint8"),
            pytest.param(Int32, (-(2**31), 2**31 - 1), id="int32"),
            pytest.param(UInt64, (0, 2**64 - 1), id="uint64"),
        ],
    )
    def test_bounds(self, cls, expected):
        assert cls.bounds() == expected

    def test_abstract_base_rejected(self):
        with pytest.raises(TypeError, match="abstract"):
            FixedInt(1)

    def test_registry_names(self):
        assert FIXED_INT_TYPES["int32"] is Int32
        assert FIXED_INT_TYPES["uint64"] is UInt64
        assert len(FIXED_INT_TYPES) == 8


class TestIntToOctets:
    """Test big-endian byte extraction."""

    @pytest.mark.parametrize(
        "value, width, expected",
        [
            pytest.param(2130706433, 4, (127, 0, 0, 1), id="loopback"),
            pytest.param(-1, 1, (255,), id="minus-one-byte"),
            pytest.param(-1, 4, (255, 255, 255, 255), id="minus-one-quad"),
            pytest.param(0, 2, (0, 0), id="zero"),
            pytest.param(0x0102, 2, (1, 2), id="msb-first"),
            pytest.param(0x1FF, 1, (255,), id="truncated-to-width"),
            pytest.param(8875824491850138409, 8, (123, 45, 67, 89, 101, 112, 131, 41), id="eight-bytes"),
            pytest.param(1, 3, (0, 0, 1), id="odd-width"),
        ],
    )
    def test_big_endian(self, value, width, expected):
        assert int_to_octets(value, width) == expected

    @pytest.mark.parametrize("width", [0, -1, True, 1.5, "4", None])
    def test_invalid_width(self, width):
        with pytest.raises(ValueError, match="width must be a positive integer"):
            int_to_octets(1, width)

    def test_non_integer_value(self):
        with pytest.raises(TypeError):
            int_to_octets(1.5, 4)


class TestIntWidth:
    """Test storage width detection for integer values."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(Int8(0), 1, id="Int8"),
            pytest.param(UInt16(0), 2, id="UInt16"),
            pytest.param(Int32(0), 4, id="Int32"),
            pytest.param(UInt64(0), 8, id="UInt64"),
            pytest.param(ctypes.c_int8(0), 1, id="c_int8"),
            pytest.param(ctypes.c_uint16(0), 2, id="c_uint16"),
            pytest.param(ctypes.c_int32(0), 4, id="c_int32"),
            pytest.param(ctypes.c_uint64(0), 8, id="c_uint64"),
        ],
    )
    def test_fixed_width(self, value, expected):
        assert int_width(value) == expected

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param(7, id="plain-int"),
            pytest.param(True, id="bool"),
            pytest.param("7", id="str"),
            pytest.param(7.0, id="float"),
            pytest.param(ctypes.c_double(7.0), id="c_double"),
        ],
    )
    def test_not_fixed_width(self, value):
        assert int_width(value) is None

    def test_int_value_unwraps_ctypes(self):
        assert int_value(ctypes.c_int8(-1)) == -1
        assert int_value(ctypes.c_uint32(2130706433)) == 2130706433
        assert int_value(Int16(5)) == 5


class TestTypeWidth:
    """Test storage width detection for integer types."""

    @pytest.mark.parametrize(
        "tp, expected",
        [
            pytest.param(Int8, 1, id="Int8"),
            pytest.param(UInt32, 4, id="UInt32"),
            pytest.param(ctypes.c_uint8, 1, id="c_uint8"),
            pytest.param(ctypes.c_int64, 8, id="c_int64"),
            pytest.param(int, None, id="int"),
            pytest.param(FixedInt, None, id="abstract"),
            pytest.param(str, None, id="str"),
        ],
    )
    def test_type_width(self, tp, expected):
        assert type_width(tp) == expected

    @pytest.mark.parametrize("tp", [list, tuple, int, Int32, ctypes.c_int32, "ndarray", None])
    def test_not_ndarray_type(self, tp):
        assert is_ndarray_type(tp) is False
