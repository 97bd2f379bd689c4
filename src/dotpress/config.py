"""ContextVar-based format configuration for dotpress.

Provides context-local configuration using Python's ContextVars (PEP 567).
Config is set once per Formatter call and read by the interpreter.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from dotpress.config import FormatConfig, format_config_context

    with format_config_context(FormatConfig(strict=False)):
        doc = Interpreter().run(lines)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

# Left padding applied by `.fill`, in indent units (10 units of 10pt = 100pt)
DEFAULT_FILL_PADDING_UNITS = 10


@dataclass(frozen=True, slots=True)
class FormatConfig:
    """Immutable format configuration.

    Attributes:
        strict: Abort on the first malformed directive line. When False the
            line is skipped and recorded as a diagnostic on the Document.
        fill_padding_units: Indent units given to paragraphs opened by `.fill`
        accept_italic_alias: Accept `.italic` as well as `.italics`

    """

    strict: bool = True
    fill_padding_units: int = DEFAULT_FILL_PADDING_UNITS
    accept_italic_alias: bool = True

    def __post_init__(self) -> None:
        if self.fill_padding_units < 0:
            msg = f"fill_padding_units must be >= 0, got {self.fill_padding_units}"
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "FormatConfig":
        """Create FormatConfig from dictionary.

        Only includes keys that are valid FormatConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = FormatConfig.from_dict({"strict": False, "color": "red"})
            >>> config.strict
            False

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


_DEFAULT_CONFIG: FormatConfig = FormatConfig()

_format_config: ContextVar[FormatConfig] = ContextVar(
    "format_config",
    default=_DEFAULT_CONFIG,
)


def get_format_config() -> FormatConfig:
    """Get current format configuration (context-local)."""
    return _format_config.get()


def set_format_config(config: FormatConfig) -> None:
    """Set format configuration for current context.

    Args:
        config: FormatConfig instance to use for this context.

    """
    _format_config.set(config)


def reset_format_config() -> None:
    """Reset to default configuration."""
    _format_config.set(_DEFAULT_CONFIG)


@contextmanager
def format_config_context(config: FormatConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with format_config_context(FormatConfig(strict=False)):
        ...     get_format_config().strict
        False

    """
    previous = _format_config.get()
    _format_config.set(config)
    try:
        yield
    finally:
        _format_config.set(previous)


__all__ = [
    "DEFAULT_FILL_PADDING_UNITS",
    "FormatConfig",
    "get_format_config",
    "set_format_config",
    "reset_format_config",
    "format_config_context",
]
