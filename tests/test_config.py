"""Tests for ContextVar-based parse configuration.

Validates thread isolation, context manager behavior, and config inheritance
for sub-parsers.
"""

from threading import Thread

import pytest

from dollarmark import (
    Markdown,
    ParseConfig,
    Parser,
    get_parse_config,
    parse,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from dollarmark.errors import ParseError
from dollarmark.nodes import BlockQuote, InlineMath, Math, Paragraph, Text


class TestParseConfigDataclass:
    """Test ParseConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        """Default config has math disabled and hints enabled."""
        config = ParseConfig()
        assert config.math_enabled is False
        assert config.render_hints is True
        assert config.inline_math_double is False

    def test_immutability(self) -> None:
        """Config is frozen and cannot be modified."""
        config = ParseConfig()
        with pytest.raises(AttributeError):
            config.math_enabled = True  # type: ignore[misc]

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = ParseConfig.from_dict({"math_enabled": True, "tables_enabled": True})
        assert config == ParseConfig(math_enabled=True)

    def test_from_dict_empty(self) -> None:
        assert ParseConfig.from_dict({}) == ParseConfig()


class TestContextVarFunctions:
    """Test get/set/reset functions."""

    def teardown_method(self) -> None:
        """Reset config after each test."""
        reset_parse_config()

    def test_default_config(self) -> None:
        """Default config is returned when not explicitly set."""
        assert get_parse_config() == ParseConfig()

    def test_set_and_get(self) -> None:
        """set_parse_config() changes the current config."""
        set_parse_config(ParseConfig(math_enabled=True))
        assert get_parse_config().math_enabled is True

    def test_reset(self) -> None:
        """reset_parse_config() restores defaults."""
        set_parse_config(ParseConfig(math_enabled=True))
        reset_parse_config()
        assert get_parse_config().math_enabled is False


class TestParseConfigContext:
    """Test the parse_config_context() context manager."""

    def test_restores_previous(self) -> None:
        """The previous config is restored on exit."""
        with parse_config_context(ParseConfig(math_enabled=True)):
            assert get_parse_config().math_enabled is True
        assert get_parse_config().math_enabled is False

    def test_restores_on_exception(self) -> None:
        """The previous config is restored when the body raises."""
        with pytest.raises(RuntimeError), parse_config_context(ParseConfig(math_enabled=True)):
            raise RuntimeError("boom")
        assert get_parse_config().math_enabled is False

    def test_parser_reads_context(self) -> None:
        """A bare Parser sees math only when the context enables it."""
        (para,) = Parser("$x$").parse()
        assert isinstance(para.children[0], Text)

        with parse_config_context(ParseConfig(math_enabled=True)):
            (para,) = Parser("$x$").parse()
        assert isinstance(para.children[0], InlineMath)

    def test_sub_parsers_inherit(self) -> None:
        """Block quote content is parsed with the same config."""
        with parse_config_context(ParseConfig(math_enabled=True)):
            (quote,) = Parser("> $$\n> x\n> $$").parse()
        assert isinstance(quote, BlockQuote)
        assert isinstance(quote.children[0], Math)

        (quote,) = Parser("> $$\n> x\n> $$").parse()
        assert isinstance(quote.children[0], Paragraph)


class TestParseResetsConfig:
    """High-level entry points leave the context clean."""

    def test_parse_resets(self) -> None:
        parse("$x$")
        assert get_parse_config() == ParseConfig()

    def test_markdown_resets(self) -> None:
        Markdown(plugins=["math"]).parse("$x$")
        assert get_parse_config() == ParseConfig()

    def test_parse_resets_after_error(self) -> None:
        with pytest.raises(ParseError):
            parse(None)  # type: ignore[arg-type]
        assert get_parse_config() == ParseConfig()


class TestThreadIsolation:
    """Configs set in one thread are invisible to others."""

    def test_thread_sees_default(self) -> None:
        seen: list[ParseConfig] = []
        set_parse_config(ParseConfig(math_enabled=True))
        try:
            thread = Thread(target=lambda: seen.append(get_parse_config()))
            thread.start()
            thread.join()
        finally:
            reset_parse_config()
        assert seen == [ParseConfig()]
