"""
Dotted, IPv4-style rendering of integers, strings, collections and tuples.

format_ip() selects one of four strategies from the shape of its input:

    >>> format_ip(Int32(2130706433))
    '127.0.0.1'
    >>> format_ip("Hello, World!")
    'Hello, World!'
    >>> format_ip([1, 2, 3, 4])
    '1.2.3.4'
    >>> format_ip((1, 2, 3, 4))
    '1.2.3.4'

Unsupported inputs and mixed-type tuples raise before anything is rendered.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import logging
from dataclasses import dataclass, field
from typing import IO, Any, Callable, Mapping, get_origin

# Third-party ----------------------------------------------------------------------------------------------------------
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_annotation, fmt_type, fmt_value
from .numeric import int_to_octets, int_value, int_width, type_width
from .options import IpOptions, resolve_options
from .shapes import (
    EmptyTupleError,
    HeterogeneousCollectionError,
    Shape,
    UnsupportedTypeError,
    check_homogeneous,
    declared_elements,
    shape_of,
    shape_of_type,
)

logger = logging.getLogger(__name__)

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = ["format_ip", "print_ip", "ip_formatter", "IpFormatter"]


# Methods --------------------------------------------------------------------------------------------------------------


def format_ip(value: Any, *, width: int | None = None, options: IpOptions | None = None) -> str:
    """
    Format a value as dot-separated fields.

    Args:
        value: Fixed-width integer, str, ordered collection or tuple.
        width: Byte width for a plain int; must match the type width if given
            for a fixed-width integer and is rejected for other shapes.
        options: Per-call options, defaults to the module options.

    Returns:
        The formatted text, without a trailing newline.

    Raises:
        UnsupportedTypeError: If value matches none of the supported shapes.
        HeterogeneousTupleError: If tuple elements are not all the same type.
        HeterogeneousCollectionError: If options.strict_collections is set and
            collection elements are not all the same type.
        EmptyTupleError: If value is an empty tuple.
        ValueError: If width is invalid or does not apply to value.

    Strategies:
        - INTEGER → big-endian bytes of the storage width, 0..255 each
        - TEXT → the string unchanged
        - COLLECTION → str() of each element in order, "" when empty
        - TUPLE → str() of each element in order, after a homogeneity check

    Examples:
        >>> format_ip(Int8(-1))
        '255'
        >>> format_ip(0, width=2)
        '0.0'
        >>> format_ip([])
        ''
    """
    opts = resolve_options(options)
    shape = shape_of(value, width=width, allow_bool=opts.allow_bool)
    logger.debug("format_ip: %s dispatched to %s", fmt_type(value), shape)
    return _STRATEGIES[shape](value, width, opts)


def print_ip(
    value: Any,
    *,
    width: int | None = None,
    options: IpOptions | None = None,
    file: IO[str] | None = None,
) -> None:
    """
    Write format_ip(value) and a newline to file, sys.stdout by default.

    The text is fully formatted before writing, so a rejected value writes nothing.
    """
    text = format_ip(value, width=width, options=options)
    print(text, file=file)


@dataclass(frozen=True)
class IpFormatter:
    """
    Formatter bound to one declared type.

    The shape is resolved from the declared type once, when the formatter is
    created; calls verify that each value has that shape, and the element type
    and tuple length the type declares, before rendering it.
    Build instances with ip_formatter().
    """

    tp: Any
    shape: Shape
    width: int | None = None
    options: IpOptions = field(default_factory=IpOptions)
    element: type | None = None
    length: int | None = None

    def __call__(self, value: Any) -> str:
        actual = shape_of(value, width=self.width, allow_bool=self.options.allow_bool)
        if actual is not self.shape:
            raise UnsupportedTypeError(
                f"formatter for {fmt_annotation(self.tp)} accepts {self.shape} values, "
                f"but found {actual} value {fmt_value(value)}"
            )
        if self.element is not None and not isinstance(value, abc.Sequence):
            # One-shot iterator: materialise before the element check
            value = list(value)
        self._check_declared(value)
        return _STRATEGIES[self.shape](value, self.width, self.options)

    def _check_declared(self, value: Any) -> None:
        if self.length is not None and len(value) != self.length:
            raise UnsupportedTypeError(
                f"formatter for {fmt_annotation(self.tp)} accepts {self.length} elements, "
                f"but found {len(value)} in {fmt_value(value)}"
            )
        if self.element is None:
            return
        for i, item in enumerate(value):
            if type(item) is not self.element:
                raise UnsupportedTypeError(
                    f"formatter for {fmt_annotation(self.tp)} accepts {fmt_type(self.element)} elements, "
                    f"but element {i} is {fmt_value(item)}"
                )


def ip_formatter(tp: Any, *, width: int | None = None, options: IpOptions | None = None) -> IpFormatter:
    """
    Resolve the formatting strategy for a declared type.

    Errors that depend only on the type, such as an unsupported type or a
    tuple[int, str] declaration, are raised here instead of at the first call.
    The element type and length the type declares are enforced on every call,
    by exact type as for tuple homogeneity: tuple[int, int] rejects (1,) and
    (Int8(1), Int8(2)).
    Options are resolved once as well: the module options current at creation
    time apply when options is None.

    Examples:
        >>> as_quad = ip_formatter(tuple[int, int, int, int])
        >>> as_quad((192, 168, 0, 1))
        '192.168.0.1'
        >>> ip_formatter(Int16)(258)
        '1.2'
        >>> ip_formatter(Int16)(Int32(258))
        Traceback (most recent call last):
        ...
        ValueError: width=2 conflicts with the 4-byte storage of <Int32: Int32(258)>
    """
    opts = resolve_options(options)
    shape = shape_of_type(tp, width=width, allow_bool=opts.allow_bool)
    if shape is Shape.INTEGER and width is None:
        # Declared Int16 renders any integer, plain int included, in 2 bytes
        width = type_width(get_origin(tp) or tp)
    element, length = None, None
    if shape in (Shape.COLLECTION, Shape.TUPLE):
        element, length = declared_elements(tp)
    logger.debug("ip_formatter: %s resolved to %s", fmt_annotation(tp), shape)
    return IpFormatter(tp=tp, shape=shape, width=width, options=opts, element=element, length=length)


# Private Methods ------------------------------------------------------------------------------------------------------


def _format_integer(value: Any, width: int | None, opts: IpOptions) -> str:
    storage = int_width(value)
    if storage is None:
        # Plain int (width required by dispatch) or bool
        storage = 1 if isinstance(value, bool) and width is None else width
    elif width is not None and width != storage:
        raise ValueError(f"width={width} conflicts with the {storage}-byte storage of {fmt_value(value)}")
    octets = int_to_octets(int_value(value), storage)
    return opts.sep.join(str(b) for b in octets)


def _format_text(value: str, width: int | None, opts: IpOptions) -> str:
    _reject_width(value, width)
    return value


def _format_collection(value: abc.Iterable, width: int | None, opts: IpOptions) -> str:
    _reject_width(value, width)
    items = value if isinstance(value, abc.Sequence) else list(value)
    if opts.strict_collections:
        check_homogeneous(items, kind=HeterogeneousCollectionError)
    return opts.sep.join(str(item) for item in items)


def _format_tuple(value: tuple, width: int | None, opts: IpOptions) -> str:
    _reject_width(value, width)
    if not value:
        raise EmptyTupleError("a tuple must have at least one element")
    check_homogeneous(value)
    return opts.sep.join(str(value[i]) for i in range(len(value)))


def _reject_width(value: Any, width: int | None) -> None:
    if width is not None:
        raise ValueError(f"width applies to integers only, but found {fmt_type(value)}")


_STRATEGIES: Mapping[Shape, Callable[[Any, int | None, IpOptions], str]] = frozendict(
    {
        Shape.INTEGER: _format_integer,
        Shape.TEXT: _format_text,
        Shape.COLLECTION: _format_collection,
        Shape.TUPLE: _format_tuple,
    }
)
