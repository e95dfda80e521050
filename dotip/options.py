"""
Formatting options for dotip.

IpOptions is immutable; the module keeps one current default instance which
configure() replaces and get_options() returns. Per-call options passed to the
formatters take precedence over the module default.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import dataclasses
import logging
import threading
from dataclasses import dataclass
from typing import Literal, Mapping, Self

# Third-party ----------------------------------------------------------------------------------------------------------
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_value

logger = logging.getLogger(__name__)

Preset = Literal["default", "strict"]


# Classes --------------------------------------------------------------------------------------------------------------


@dataclass(frozen=True)
class IpOptions:
    """
    Options shared by all dotip formatters.

    Attributes:
        sep: Field separator placed between rendered fields.
        strict_collections: If True, collections must hold elements of one type,
            checked before any output like tuples are.
        allow_bool: If True, bool is accepted as a 1-byte integer. Off by default
            since bool is an int subclass and usually a bug at this call site.
    """

    sep: str = "."
    strict_collections: bool = False
    allow_bool: bool = False

    def __post_init__(self):
        if not isinstance(self.sep, str):
            raise ValueError(f"sep must be a string, but found {fmt_value(self.sep)}")
        for name in ("strict_collections", "allow_bool"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValueError(f"{name} must be a bool, but found {fmt_value(value)}")

    @classmethod
    def default(cls) -> Self:
        return cls()

    @classmethod
    def strict(cls) -> Self:
        """Homogeneity is enforced for collections too."""
        return cls(strict_collections=True)

    def merge(self, **overrides) -> Self:
        """Return a copy with the given fields replaced; unknown names raise TypeError."""
        return dataclasses.replace(self, **overrides)


PRESETS: Mapping[str, IpOptions] = frozendict(
    {
        "default": IpOptions.default(),
        "strict": IpOptions.strict(),
    }
)

_lock = threading.Lock()
_options: IpOptions = PRESETS["default"]


# Methods --------------------------------------------------------------------------------------------------------------


def configure(preset: Preset | None = None, **overrides) -> IpOptions:
    """
    Set the module default options.

    A preset replaces the current options before overrides are applied; with
    preset=None the overrides are merged into the current options.

    Args:
        preset: Name of a preset in PRESETS, or None to keep current options.
        **overrides: IpOptions fields to replace.

    Returns:
        The new module default options.

    Raises:
        ValueError: If preset is unknown or an override value is invalid.
        TypeError: If an override names an unknown field.

    Examples:
        >>> configure(preset="strict", sep=":")
        IpOptions(sep=':', strict_collections=True, allow_bool=False)
        >>> configure(preset="default").sep
        '.'
    """
    global _options

    if preset is not None and preset not in PRESETS:
        raise ValueError(f"preset must be one of {sorted(PRESETS)}, but found {fmt_value(preset)}")

    with _lock:
        base = PRESETS[preset] if preset is not None else _options
        _options = base.merge(**overrides)
        logger.debug("dotip options configured: %r", _options)
        return _options


def get_options() -> IpOptions:
    """Return the current module default options."""
    return _options


def resolve_options(options: IpOptions | None) -> IpOptions:
    """Return per-call options if given, otherwise the module default."""
    if options is None:
        return _options
    if not isinstance(options, IpOptions):
        raise TypeError(f"options must be IpOptions or None, but found {fmt_value(options)}")
    return options
