"""ContextVar-based parse configuration for dollarmark.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per parse call, read by every parser in the context,
including the sub-parsers that handle block quote and list item content.

Thread Safety:
    ContextVars are thread-local. Each thread has independent storage,
    so no locks are needed.

Usage:
    # In the Markdown class
    md = Markdown(plugins=["math"])
    html = md("Euler: $e^{i\\pi} + 1 = 0$")  # Sets config internally

    # Direct parser usage
    from dollarmark.config import ParseConfig, parse_config_context

    with parse_config_context(ParseConfig(math_enabled=True)):
        blocks = Parser(source).parse()

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Note: source_file is intentionally excluded. It is per-call state,
    not configuration, and stays on the Parser instance.

    Attributes:
        math_enabled: Recognize $inline$, $$one-line$$ and fenced $$ math
        render_hints: Attach HTML render hints to math nodes after parsing
        inline_math_double: Give one-line $$...$$ math the extra
            ``inlineMathDouble`` class in its render hint

    """

    math_enabled: bool = False
    render_hints: bool = True
    inline_math_double: bool = False

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Only includes keys that are valid ParseConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "math_enabled": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.math_enabled
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.
    """
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Example:
        >>> with parse_config_context(ParseConfig(math_enabled=True)):
        ...     blocks = Parser("$x$").parse()
        >>> # Previous config restored here

    Thread Safety:
        Only affects the current thread's context. Restores the previous
        config even if an exception is raised.

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
