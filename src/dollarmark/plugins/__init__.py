"""Plugin system for the dollarmark Markdown parser.

Plugins switch optional syntax on:
- math: $inline$, one-line $$display$$ and fenced $$ math

Usage:
    >>> from dollarmark import Markdown
    >>>
    >>> md = Markdown(plugins=["math"])
    >>> html = md("Euler: $e^{i\\pi}$")
    >>>
    >>> # Enable all plugins
    >>> md = Markdown(plugins=["all"])

Plugin Architecture:
A plugin never patches lexer or parser classes. It maps the immutable
ParseConfig to a new one, and the Markdown processor installs the result
in the config ContextVar for the duration of each parse. The lexer and the
inline dispatch table read their switches from that config.

Thread Safety:
All plugins are stateless. Multiple threads can use the same plugin
instances concurrently.

"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Protocol, runtime_checkable

from dollarmark.config import ParseConfig
from dollarmark.errors import PluginError
from dollarmark.utils.logger import get_logger

logger = get_logger(__name__)

__all__ = [
    "DollarmarkPlugin",
    "BUILTIN_PLUGINS",
    "apply_plugins",
    "expand_plugin_names",
    "get_plugin",
    "register_plugin",
]


@runtime_checkable
class DollarmarkPlugin(Protocol):
    """Protocol for dollarmark plugins.

    Thread Safety:
        Plugins must be stateless. All state should be in AST nodes.

    """

    @property
    def name(self) -> str:
        """Plugin identifier."""
        ...

    def configure(self, config: ParseConfig) -> ParseConfig:
        """Return config with this plugin's syntax enabled."""
        ...


# Registry of built-in plugins
BUILTIN_PLUGINS: dict[str, type[DollarmarkPlugin]] = {}


def register_plugin(
    name: str,
) -> Callable[[type[DollarmarkPlugin]], type[DollarmarkPlugin]]:
    """Decorator to register a plugin.

    Args:
        name: Plugin name for lookup

    Returns:
        Decorator function that registers and returns the class

    Usage:
        @register_plugin("math")
        class MathPlugin:
                ...

    """

    def decorator(cls: type[DollarmarkPlugin]) -> type[DollarmarkPlugin]:
        BUILTIN_PLUGINS[name] = cls
        return cls

    return decorator


def get_plugin(name: str) -> DollarmarkPlugin:
    """Get a plugin instance by name.

    Args:
        name: Plugin name (e.g., "math")

    Returns:
        Plugin instance

    Raises:
        PluginError: If plugin name is not recognized (also a KeyError)

    """
    if name not in BUILTIN_PLUGINS:
        available = ", ".join(sorted(BUILTIN_PLUGINS.keys()))
        raise PluginError(name, f"unknown plugin. Available: {available}")
    return BUILTIN_PLUGINS[name]()


def expand_plugin_names(plugins: Iterable[str] | None) -> list[str]:
    """Resolve a plugin list, expanding "all" to every registered plugin."""
    raw_plugins = list(plugins or [])
    if "all" in raw_plugins:
        return list(BUILTIN_PLUGINS.keys())
    return raw_plugins


def apply_plugins(plugins: Iterable[str] | None, config: ParseConfig | None = None) -> ParseConfig:
    """Build the parse configuration for a set of plugins.

    Args:
        plugins: Plugin names; "all" enables every registered plugin
        config: Starting configuration (defaults to ParseConfig())

    Returns:
        New ParseConfig with every plugin applied in order.

    Raises:
        PluginError: If a plugin name is not recognized

    """
    result = config if config is not None else ParseConfig()
    for plugin_name in expand_plugin_names(plugins):
        plugin = get_plugin(plugin_name)
        logger.debug("Applying plugin %r", plugin.name)
        result = plugin.configure(result)
    return result


# Import built-in plugins to register them
# These imports trigger the @register_plugin decorators
from dollarmark.plugins.math import MathPlugin  # noqa: E402

__all__ += ["MathPlugin"]
