"""
Fixed-width integers and their big-endian byte view.

Python int has no storage width, so the width used to render an integer comes
from its type: the fixed-width int subclasses below, ctypes integer types, or
NumPy integer scalars. Bytes are always extracted by shift-and-mask, which gives
network (big-endian) order on every host.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import ctypes
import operator
from typing import Any, ClassVar, Mapping, Self

# Third-party ----------------------------------------------------------------------------------------------------------
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_type, fmt_value


# Classes --------------------------------------------------------------------------------------------------------------


class FixedInt(int):
    """
    Base class for integers held in a known number of bytes.

    Construction wraps the value into the range of the type, the way a C cast
    does: Int8(255) == -1, UInt8(-1) == 255. Arithmetic returns plain int.
    """

    width: ClassVar[int] = 0
    signed: ClassVar[bool] = True

    def __new__(cls, value: Any = 0) -> Self:
        if cls.width <= 0:
            raise TypeError(f"{fmt_type(cls)} is abstract, use a concrete fixed-width type")
        bits = 8 * cls.width
        v = operator.index(value) & ((1 << bits) - 1)
        if cls.signed and v >= 1 << (bits - 1):
            v -= 1 << bits
        return super().__new__(cls, v)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int.__repr__(self)})"

    def __str__(self) -> str:
        # int has no __str__ of its own, str() would pick up __repr__ above
        return int.__repr__(self)

    @classmethod
    def bounds(cls) -> tuple[int, int]:
        """Return (min, max) representable values."""
        bits = 8 * cls.width
        if cls.signed:
            return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
        return 0, (1 << bits) - 1


class Int8(FixedInt):
    width = 1


class UInt8(FixedInt):
    width = 1
    signed = False


class Int16(FixedInt):
    width = 2


class UInt16(FixedInt):
    width = 2
    signed = False


class Int32(FixedInt):
    width = 4


class UInt32(FixedInt):
    width = 4
    signed = False


class Int64(FixedInt):
    width = 8


class UInt64(FixedInt):
    width = 8
    signed = False


# Constants ------------------------------------------------------------------------------------------------------------

FIXED_INT_TYPES: Mapping[str, type[FixedInt]] = frozendict(
    {cls.__name__.lower(): cls for cls in (Int8, UInt8, Int16, UInt16, Int32, UInt32, Int64, UInt64)}
)

# Aliases (c_int8 is c_byte, c_long may be c_int...) collapse into one set entry
CTYPES_INTEGER_TYPES: frozenset[type] = frozenset(
    {
        ctypes.c_byte, ctypes.c_ubyte,
        ctypes.c_short, ctypes.c_ushort,
        ctypes.c_int, ctypes.c_uint,
        ctypes.c_long, ctypes.c_ulong,
        ctypes.c_longlong, ctypes.c_ulonglong,
        ctypes.c_int8, ctypes.c_uint8,
        ctypes.c_int16, ctypes.c_uint16,
        ctypes.c_int32, ctypes.c_uint32,
        ctypes.c_int64, ctypes.c_uint64,
        ctypes.c_size_t, ctypes.c_ssize_t,
    }
)


# Methods --------------------------------------------------------------------------------------------------------------


def int_to_octets(value: int, width: int) -> tuple[int, ...]:
    """
    Split an integer into `width` unsigned bytes, most significant first.

    Negative values yield their two's complement pattern; values wider than
    `width` bytes keep only their low `width` bytes.

    Examples:
        >>> int_to_octets(2130706433, 4)
        (127, 0, 0, 1)
        >>> int_to_octets(-1, 1)
        (255,)
        >>> int_to_octets(0, 2)
        (0, 0)
    """
    if isinstance(width, bool) or not isinstance(width, int) or width <= 0:
        raise ValueError(f"width must be a positive integer, but found {fmt_value(width)}")
    value = operator.index(value)
    return tuple((value >> (8 * (width - 1 - i))) & 0xFF for i in range(width))


def int_value(value: Any) -> int:
    """
    Return the plain int held by a fixed-width integer.

    ctypes integers expose it through .value, everything else through __index__.
    """
    if type(value) in CTYPES_INTEGER_TYPES:
        return value.value
    return operator.index(value)


def int_width(value: Any) -> int | None:
    """
    Return the storage width in bytes of a fixed-width integer, or None.

    None means the value is not a fixed-width integer, which includes plain int
    and bool. Detection order:

    1. FixedInt subclasses → cls.width
    2. ctypes integer instances → ctypes.sizeof()
    3. NumPy integer scalars → dtype.itemsize, detected by duck typing so
       NumPy stays optional

    Examples:
        >>> int_width(Int32(7))
        4
        >>> int_width(ctypes.c_uint16(7))
        2
        >>> int_width(7) is None
        True
    """
    if isinstance(value, FixedInt):
        return type(value).width
    if type(value) in CTYPES_INTEGER_TYPES:
        return ctypes.sizeof(value)
    return _numpy_int_width(value)


def type_width(tp: Any) -> int | None:
    """
    Return the storage width in bytes of a fixed-width integer type, or None.

    Type-level counterpart of int_width(), used when resolving annotations.
    """
    if not isinstance(tp, type):
        return None
    if issubclass(tp, FixedInt) and tp.width > 0:
        return tp.width
    if tp in CTYPES_INTEGER_TYPES:
        return ctypes.sizeof(tp)
    # A numpy type object implies numpy is already imported
    if tp.__module__ == "numpy":
        import numpy

        abstract = (numpy.integer, numpy.signedinteger, numpy.unsignedinteger)
        if issubclass(tp, numpy.integer) and tp not in abstract:
            return numpy.dtype(tp).itemsize
    return None


def is_ndarray_type(tp: Any) -> bool:
    """True for numpy.ndarray and its subclasses, checked without importing NumPy."""
    if not isinstance(tp, type):
        return False
    return any(c.__name__ == "ndarray" and c.__module__ == "numpy" for c in tp.__mro__)


# Private Methods ------------------------------------------------------------------------------------------------------


def _numpy_int_width(value: Any) -> int | None:
    cls = type(value)
    # Scalars only: ndarray is a container, even when 0-d
    if cls.__module__ != "numpy" or cls.__name__ == "ndarray":
        return None
    dtype = getattr(value, "dtype", None)
    if getattr(dtype, "kind", None) not in ("i", "u"):
        return None
    return int(dtype.itemsize)
