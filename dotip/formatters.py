"""
Short type and value renderings for exception and log messages.

Every helper tolerates broken __repr__ and very long reprs, so it is safe to call
while building an error message about a value of unknown type.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Iterable, get_args

# Constants ------------------------------------------------------------------------------------------------------------

ELLIPSIS = "..."


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(obj: Any, fully_qualified: bool = False) -> str:
    """
    Get the class name of an object or a class.

    Builtins are never module qualified, so both `class_name(10)` and
    `class_name(int, fully_qualified=True)` return 'int'.

    Examples:
        >>> class_name(10)
        'int'
        >>> import ctypes
        >>> class_name(ctypes.c_int8, fully_qualified=True)
        'ctypes.c_byte'
    """
    cls = obj if isinstance(obj, type) else type(obj)
    name = getattr(cls, "__name__", None) or repr(cls)
    module = getattr(cls, "__module__", None)
    if fully_qualified and module and module != "builtins":
        return f"{module}.{name}"
    return name


def fmt_type(obj: Any, *, fully_qualified: bool = False) -> str:
    """Format type information of a type object or an instance.

    Examples:
        >>> fmt_type(42)
        '<int>'
        >>> fmt_type(str)
        '<str>'
    """
    return f"<{class_name(obj, fully_qualified=fully_qualified)}>"


def fmt_value(obj: Any, *, max_repr: int = 60) -> str:
    """
    Format a single value as a type-value pair.

    Args:
        obj: Any Python object.
        max_repr: Maximum length of the repr part before truncation.

    Returns:
        String like "<int: 42>" or "<set: {1, 2}>".

    Examples:
        >>> fmt_value(42)
        '<int: 42>'
        >>> fmt_value("abcdef", max_repr=3)
        "<str: 'abc'...>"
    """
    repr_ = _fmt_truncate(_safe_repr(obj), max_repr)
    # Inner ">" would be mistaken for the closing bracket
    repr_ = repr_.replace(">", "\\>")
    return f"<{class_name(obj)}: {repr_}>"


def fmt_annotation(tp: Any) -> str:
    """Render a class or generic alias as written, e.g. 'Int32' or 'tuple[int, int]'."""
    return tp.__name__ if isinstance(tp, type) and not get_args(tp) else repr(tp)


def fmt_types(objs: Iterable[Any], *, max_items: int = 8) -> str:
    """
    Format the element types of an iterable, e.g. "(<int>, <int>, <str>)".

    Shows at most `max_items` entries followed by an ellipsis.
    """
    parts = []
    for i, obj in enumerate(objs):
        if i >= max_items:
            parts.append(ELLIPSIS)
            break
        parts.append(fmt_type(obj))
    return "(" + ", ".join(parts) + ")"


# Private Methods ------------------------------------------------------------------------------------------------------


def _fmt_truncate(repr_: str, max_len: int) -> str:
    """
    Truncate repr_ to at most max_len visible characters before appending the ellipsis.

    Quoted reprs keep their quotes, the ellipsis goes after the closing quote.
    """
    if max_len <= 0:
        return ""
    if len(repr_) <= max_len:
        return repr_

    if len(repr_) >= 2 and repr_[0] in ("'", '"') and repr_[-1] == repr_[0]:
        quote = repr_[0]
        inner = repr_[1 : 1 + max(1, max_len)]
        return f"{quote}{inner}{quote}{ELLIPSIS}"

    return repr_[: max(1, max_len)] + ELLIPSIS


def _safe_repr(obj: Any) -> str:
    """
    repr() that survives a broken __repr__
    """
    try:
        return repr(obj)
    except Exception as e:
        return f"<{type(obj).__name__} object (repr failed: {type(e).__name__})>"
