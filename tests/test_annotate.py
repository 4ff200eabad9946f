"""Tests for math render hints."""

import dataclasses

import pytest

from dollarmark import parse
from dollarmark.annotate import annotate, annotate_tree, render_hint_for
from dollarmark.config import ParseConfig, parse_config_context
from dollarmark.location import SourceLocation
from dollarmark.nodes import InlineMath, Math, Paragraph, RenderHint, Text

LOC = SourceLocation(lineno=1, col_offset=1)


class TestRenderHintShape:
    """The fixed hint shape for each math node kind."""

    def test_inline_math(self) -> None:
        """InlineMath becomes a span with the inlineMath class."""
        (para,) = parse("$\\alpha$").children
        hint = para.children[0].render_hint
        assert hint.as_dict() == {
            "tag": "span",
            "attributes": {"class": "inlineMath"},
            "children": [{"type": "text", "value": "\\alpha"}],
        }

    def test_block_math(self) -> None:
        """Block math becomes a div with the math class."""
        (math,) = parse("$$\n\\beta+\\gamma\n$$").children
        assert math.render_hint.as_dict() == {
            "tag": "div",
            "attributes": {"class": "math"},
            "children": [{"type": "text", "value": "\\beta+\\gamma"}],
        }

    def test_one_line_double_default(self) -> None:
        """One-line $$ math uses the plain math class by default."""
        (para,) = parse("a $$x$$ b").children
        math = para.children[1]
        assert math.render_hint.properties == {"class": "math"}

    def test_one_line_double_opt_in(self) -> None:
        """The inlineMathDouble class is opt-in."""
        (para,) = parse("a $$x$$ b", inline_math_double=True).children
        math = para.children[1]
        assert math.render_hint.properties == {"class": "math inlineMathDouble"}

    def test_opt_in_leaves_fenced_math_alone(self) -> None:
        """Fenced math never gets the inlineMathDouble class."""
        (math,) = parse("$$\nx\n$$", inline_math_double=True).children
        assert math.render_hint.properties == {"class": "math"}

    def test_children_are_literal_text(self) -> None:
        """The hint child is the raw value, not parsed Markdown."""
        hint = render_hint_for(InlineMath(location=LOC, value="*a* <b>"))
        (child,) = hint.children
        assert isinstance(child, Text)
        assert child.content == "*a* <b>"

    def test_hints_disabled(self) -> None:
        """render_hints=False leaves math nodes bare."""
        (math,) = parse("$$\nx\n$$", render_hints=False).children
        assert math.render_hint is None


class TestAnnotate:
    """annotate() and annotate_tree()."""

    def test_non_math_unchanged(self) -> None:
        """Other nodes are returned as-is."""
        node = Text(location=LOC, content="x")
        assert annotate(node) is node

    def test_idempotent(self) -> None:
        """Annotating an annotated node returns the same object."""
        node = annotate(Math(location=LOC, value="x"), inline_math_double=False)
        assert annotate(node, inline_math_double=False) is node

    def test_returns_copy(self) -> None:
        """The original frozen node is not modified."""
        node = InlineMath(location=LOC, value="x")
        annotated = annotate(node)
        assert node.render_hint is None
        assert annotated.render_hint is not None
        assert annotated.value == "x"

    def test_reads_config_when_unset(self) -> None:
        """Without an explicit flag the current config decides."""
        node = Math(location=LOC, value="x", inline=True)
        with parse_config_context(ParseConfig(math_enabled=True, inline_math_double=True)):
            hinted = annotate(node)
        assert hinted.render_hint.properties["class"] == "math inlineMathDouble"

    def test_explicit_flag_overrides_config(self) -> None:
        """An explicit flag wins over the config."""
        node = Math(location=LOC, value="x", inline=True)
        with parse_config_context(ParseConfig(inline_math_double=True)):
            hinted = annotate(node, inline_math_double=False)
        assert hinted.render_hint.properties == {"class": "math"}

    @pytest.mark.parametrize(
        "source",
        [
            "$x$",
            "$$\nx\n$$",
            "a $$b$$ c",
            "> $$\n> x\n> $$",
            "- $y$\n- $$\n  z\n  $$",
        ],
    )
    def test_tree_matches_parse(self, source: str) -> None:
        """Annotating an unhinted parse equals parsing with hints."""
        bare = parse(source, render_hints=False)
        assert annotate_tree(bare) == parse(source)

    def test_value_change_reannotates(self) -> None:
        """A stale hint is replaced when the value changes."""
        node = annotate(InlineMath(location=LOC, value="x"))
        changed = dataclasses.replace(node, value="y")
        hint = annotate(changed).render_hint
        assert hint.children[0].content == "y"


class TestRenderHintValue:
    """RenderHint as a value object."""

    def test_properties_mapping(self) -> None:
        """Attribute pairs are exposed as a dict."""
        hint = RenderHint(tag="div", attributes=(("class", "math"), ("id", "m1")))
        assert hint.properties == {"class": "math", "id": "m1"}

    def test_frozen(self) -> None:
        """Hints cannot be mutated."""
        hint = RenderHint(tag="div")
        with pytest.raises(dataclasses.FrozenInstanceError):
            hint.tag = "span"  # type: ignore[misc]

    def test_paragraph_has_no_hint_field(self) -> None:
        """Only math nodes carry hints."""
        (para,) = parse("plain").children
        assert isinstance(para, Paragraph)
        assert not hasattr(para, "render_hint")
