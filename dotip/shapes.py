"""
Shape dispatch for dotip.

Every supported input falls into exactly one Shape. shape_of() decides it for a
value with a closed, ordered type switch; shape_of_type() decides it for a
declared type (annotation) without any value, so a call site can be resolved
once and rejected before anything is formatted.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import logging
import types
import typing
from enum import StrEnum, unique
from typing import Any, get_args, get_origin

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_annotation, fmt_type, fmt_types, fmt_value
from .numeric import int_width, is_ndarray_type, type_width

logger = logging.getLogger(__name__)

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = [
    "Shape",
    "UnsupportedTypeError",
    "HeterogeneousTupleError",
    "HeterogeneousCollectionError",
    "EmptyTupleError",
    "shape_of",
    "shape_of_type",
    "check_homogeneous",
    "declared_elements",
]


# Classes --------------------------------------------------------------------------------------------------------------


@unique
class Shape(StrEnum):
    """
    Structural category of a formatter input.

    INTEGER: fixed-width integer, rendered as its big-endian bytes
    TEXT: str, passed through unchanged
    COLLECTION: ordered sequence or iterator of any length
    TUPLE: fixed-size tuple whose elements share one type
    """

    INTEGER = "integer"
    TEXT = "text"
    COLLECTION = "collection"
    TUPLE = "tuple"


class UnsupportedTypeError(TypeError):
    """Input matches none of the supported shapes."""


class HeterogeneousTupleError(TypeError):
    """Tuple elements, or declared tuple element types, are not all the same type."""


class HeterogeneousCollectionError(TypeError):
    """Collection elements are not all the same type (strict collections only)."""


class EmptyTupleError(ValueError):
    """A tuple must have at least one element to be formatted."""


# Methods --------------------------------------------------------------------------------------------------------------


def shape_of(value: Any, *, width: int | None = None, allow_bool: bool = False) -> Shape:
    """
    Select the shape of a value.

    The checks run in a fixed order and the first match wins; a value
    matching none of them raises, there is no fallback shape.

    Args:
        value: Value to classify.
        width: Byte width for a plain int. Plain int has no storage width of
            its own and is rejected without it.
        allow_bool: Accept bool as a 1-byte integer.

    Returns:
        The Shape of value.

    Raises:
        UnsupportedTypeError: If value is not one of the supported shapes.

    Dispatch Logic:
        - bool → INTEGER if allow_bool, else rejected
        - fixed-width integer (FixedInt, ctypes, NumPy scalar) → INTEGER
        - int with explicit width → INTEGER
        - str → TEXT
        - tuple → TUPLE
        - NumPy array with at least one dimension → COLLECTION
        - Mapping, Set → rejected
        - other Sequence, Iterator → COLLECTION

    Examples:
        >>> shape_of("10.0.0.1")
        <Shape.TEXT: 'text'>
        >>> shape_of([1, 2, 3, 4])
        <Shape.COLLECTION: 'collection'>
        >>> shape_of(7, width=4)
        <Shape.INTEGER: 'integer'>
    """
    # bool before int (is subclass of int)
    if isinstance(value, bool):
        if allow_bool:
            return Shape.INTEGER
        raise UnsupportedTypeError(
            f"bool is not formatted as an integer unless allow_bool is set, but found {fmt_value(value)}"
        )

    if int_width(value) is not None:
        return Shape.INTEGER

    if isinstance(value, int):
        if width is not None:
            return Shape.INTEGER
        raise UnsupportedTypeError(
            f"plain int has no byte width, pass width= or use a fixed-width type "
            f"such as Int32, but found {fmt_value(value)}"
        )

    if isinstance(value, str):
        return Shape.TEXT

    if isinstance(value, tuple):
        return Shape.TUPLE

    if is_ndarray_type(type(value)):
        if value.ndim >= 1:
            return Shape.COLLECTION
        raise UnsupportedTypeError(f"0-d arrays have no elements to format, but found {fmt_value(value)}")

    if isinstance(value, abc.Mapping):
        raise UnsupportedTypeError(f"mappings are not supported, but found {fmt_type(value)}")

    if isinstance(value, abc.Set):
        raise UnsupportedTypeError(f"unordered sets are not supported, but found {fmt_type(value)}")

    if isinstance(value, (abc.Sequence, abc.Iterator)):
        return Shape.COLLECTION

    raise UnsupportedTypeError(
        f"value must be a fixed-width integer, str, ordered collection or tuple, but found {fmt_type(value)}"
    )


def shape_of_type(tp: Any, *, width: int | None = None, allow_bool: bool = False) -> Shape:
    """
    Select the shape of a declared type.

    Resolves annotations such as Int32, ctypes.c_uint16, str, list[int],
    deque[str], tuple[int, int, int], tuple[int, ...] or a NamedTuple class.
    Tuple annotations are folded over their element types, so a mixed
    declaration like tuple[int, str] is rejected without any value.

    Args:
        tp: Type or generic alias to classify.
        width: Byte width when tp is plain int.
        allow_bool: Accept bool as a 1-byte integer.

    Returns:
        The Shape values of tp will have.

    Raises:
        UnsupportedTypeError: If tp does not describe a supported shape.
        HeterogeneousTupleError: If tp is a tuple type with mixed element types.
        EmptyTupleError: If tp is the empty tuple type, tuple[()].

    Examples:
        >>> shape_of_type(tuple[int, int, int, int])
        <Shape.TUPLE: 'tuple'>
        >>> shape_of_type(tuple[int, str])
        Traceback (most recent call last):
        ...
        dotip.shapes.HeterogeneousTupleError: ...
    """
    origin = get_origin(tp)
    args = get_args(tp)
    cls = origin if origin is not None else tp

    if not isinstance(cls, type):
        raise UnsupportedTypeError(f"type must be a class or a generic alias, but found {fmt_value(tp)}")

    if cls is bool:
        if allow_bool:
            return Shape.INTEGER
        raise UnsupportedTypeError("bool is not formatted as an integer unless allow_bool is set")

    if type_width(cls) is not None:
        return Shape.INTEGER

    if issubclass(cls, int):
        if width is not None:
            return Shape.INTEGER
        raise UnsupportedTypeError(
            f"plain int has no byte width, pass width= or use a fixed-width type, but found {fmt_type(cls)}"
        )

    if issubclass(cls, str):
        return Shape.TEXT

    if issubclass(cls, tuple):
        _check_tuple_type(tp, cls, origin, args)
        return Shape.TUPLE

    if is_ndarray_type(cls):
        return Shape.COLLECTION

    if issubclass(cls, (abc.Mapping, abc.Set)):
        raise UnsupportedTypeError(f"mappings and sets are not supported, but found {fmt_type(cls)}")

    if issubclass(cls, (abc.Sequence, abc.Iterator)):
        return Shape.COLLECTION

    raise UnsupportedTypeError(
        f"type must be a fixed-width integer, str, ordered collection or tuple type, but found {fmt_type(cls)}"
    )


def check_homogeneous(items: abc.Sequence, *, kind: type[TypeError] = HeterogeneousTupleError) -> type | None:
    """
    Check that all items have exactly the same type.

    Subclasses do not count as the same type: (1, True) is rejected.

    Returns:
        The common type, or None for an empty sequence.

    Raises:
        HeterogeneousTupleError (or `kind`): At the first mismatching position.
    """
    if not items:
        return None
    first = type(items[0])
    for i, item in enumerate(items):
        if type(item) is not first:
            raise kind(
                f"all elements must be of type {fmt_type(first)}, but element {i} is {fmt_value(item)}; "
                f"element types {fmt_types(items)}"
            )
    return first


def declared_elements(tp: Any) -> tuple[type | None, int | None]:
    """
    Return the element type and length a collection or tuple annotation declares.

    Either part is None when the annotation leaves it open. Call it on a type
    shape_of_type() has accepted.

    Examples:
        >>> declared_elements(tuple[int, int, int, int])
        (<class 'int'>, 4)
        >>> declared_elements(list[str])
        (<class 'str'>, None)
        >>> declared_elements(tuple[int, ...])
        (<class 'int'>, None)
        >>> declared_elements(list)
        (None, None)
    """
    origin = get_origin(tp)
    args = get_args(tp)
    cls = origin if origin is not None else tp

    if isinstance(cls, type) and issubclass(cls, tuple):
        args = _tuple_args(tp, cls, origin, args)
        if not args:
            return None, None
        if len(args) == 2 and args[1] is Ellipsis:
            return _element_class(args[0]), None
        return _element_class(args[0]), len(args)

    if len(args) == 1:
        return _element_class(args[0]), None
    return None, None


# Private Methods ------------------------------------------------------------------------------------------------------


def _check_tuple_type(tp: Any, cls: type, origin: Any, args: tuple) -> None:
    """Fold over declared tuple element types; bare tuple is checked per value."""
    args = _tuple_args(tp, cls, origin, args)
    if args is None:
        return

    if not args:
        raise EmptyTupleError("the empty tuple type has nothing to format")

    if len(args) == 2 and args[1] is Ellipsis:
        return

    first = args[0]
    for i, arg in enumerate(args):
        if arg != first:
            names = ", ".join(fmt_annotation(a) for a in args)
            raise HeterogeneousTupleError(
                f"all tuple element types must be {fmt_annotation(first)}, but element {i} is "
                f"{fmt_annotation(arg)}; declared tuple[{names}]"
            )
    logger.debug("tuple type %s resolved to %d x %s", fmt_annotation(cls), len(args), fmt_annotation(first))


def _tuple_args(tp: Any, cls: type, origin: Any, args: tuple) -> tuple | None:
    """Declared element types of a tuple type, None when it declares none."""
    if tp is typing.Tuple:
        return None
    if origin is not None:
        return args
    if not hasattr(cls, "_fields"):
        return None
    # NamedTuple: its field annotations are the declared element types
    try:
        hints = typing.get_type_hints(cls)
    except NameError as e:
        raise UnsupportedTypeError(f"cannot resolve the field types of {fmt_type(cls)}: {e}") from e
    return tuple(hints.values()) or None


def _element_class(arg: Any) -> type | None:
    """Class an element must have, None when arg does not pin one down."""
    cls = get_origin(arg) or arg
    if not isinstance(cls, type) or cls in (object, Any, types.UnionType):
        return None
    return cls
