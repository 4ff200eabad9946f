"""Error-path and malformed input tests.

Tokenization never raises: unmatched delimiters become text. These tests
cover the API seams that do raise, and inputs that must degrade quietly.
"""

import pytest

from dollarmark import Markdown, Parser, parse, render, serialize
from dollarmark.errors import DollarmarkError, ParseError, PluginError, SerializeError


class TestParseErrorFormatting:
    """Verify ParseError produces well-formatted messages."""

    def test_message_only(self) -> None:
        err = ParseError("unexpected input")
        assert str(err) == "unexpected input"
        assert err.lineno is None

    def test_with_line_and_column(self) -> None:
        err = ParseError("bad", lineno=10, col_offset=5)
        assert str(err) == "10:5 bad"

    def test_with_source_file(self) -> None:
        err = ParseError("bad", lineno=3, source_file="doc.md")
        assert str(err) == "doc.md:3 bad"


class TestErrorHierarchy:
    """All errors share a base class."""

    @pytest.mark.parametrize("cls", [ParseError, PluginError, SerializeError])
    def test_subclass(self, cls: type) -> None:
        assert issubclass(cls, DollarmarkError)

    def test_serialize_error_message(self) -> None:
        err = SerializeError("math", "value must be a str, got int")
        assert err.node_type == "math"
        assert str(err) == "Cannot serialize math: value must be a str, got int"


class TestNonStringSource:
    """Parsing something that is not text."""

    @pytest.mark.parametrize("source", [None, 42, b"$x$", ["$x$"]])
    def test_parse_rejects(self, source: object) -> None:
        with pytest.raises(ParseError, match="expected str source"):
            parse(source)  # type: ignore[arg-type]

    def test_parser_rejects(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            Parser(b"x", source_file="doc.md")  # type: ignore[arg-type]
        assert exc_info.value.source_file == "doc.md"

    def test_markdown_rejects(self) -> None:
        with pytest.raises(ParseError):
            Markdown(plugins=["math"]).parse(None)  # type: ignore[arg-type]


class TestGracefulDegradation:
    """Malformed math never raises."""

    @pytest.mark.parametrize(
        "source",
        [
            "$",
            "$$",
            "$unclosed",
            "$$unclosed",
            "a $$ b",
            "$$\nno close",
            "> $$\n> no close",
            "- $$\n  no close",
            "`$` $`",
            "\\$\\$\\$",
            "$$$$$$\n$$\n$$$$$$",
            "\t$$\n\tx",
            "$\n$",
        ],
    )
    def test_round_trip_does_not_raise(self, source: str) -> None:
        doc = parse(source)
        render(doc)
        serialize(parse(serialize(doc)))
