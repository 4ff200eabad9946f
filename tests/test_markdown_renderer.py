"""Tests for serializing the AST back to Markdown."""

from dataclasses import fields, is_dataclass

import pytest

from dollarmark import parse, serialize
from dollarmark.errors import SerializeError
from dollarmark.location import SourceLocation
from dollarmark.nodes import (
    BlockQuote,
    CodeSpan,
    Document,
    FencedCode,
    InlineMath,
    List,
    ListItem,
    Math,
    Node,
    Paragraph,
    Text,
)
from dollarmark.renderers.markdown import (
    MarkdownRenderer,
    code_span_markup,
    escape_text,
    list_item_lines,
    math_fence_for,
    prefix_lines,
    quote_line,
    render_markdown,
)

LOC = SourceLocation(lineno=1, col_offset=1)


def doc(*children: Node) -> Document:
    return Document(location=LOC, children=children)


class TestMathStringify:
    """Math comes out in canonical fenced form."""

    def test_block_math(self) -> None:
        assert serialize(parse("$$\n\\alpha\n$$")) == "$$\n\\alpha\n$$\n"

    def test_paragraph_and_block(self) -> None:
        source = "Math $\\alpha$\n\n$$\n\\beta+\\gamma\n$$"
        assert serialize(parse(source)) == "Math $\\alpha$\n\n$$\n\\beta+\\gamma\n$$\n"

    def test_one_line_double_becomes_fence(self) -> None:
        assert serialize(parse("$$\\alpha$$")) == "$$\n\\alpha\n$$\n"

    def test_one_line_double_splits_paragraph(self) -> None:
        assert serialize(parse("a $$b$$ c")) == "a\n\n$$\nb\n$$\n\nc\n"

    def test_trailing_text_dropped(self) -> None:
        assert serialize(parse("$$ meta\nx\n$$ tail")) == "$$\nx\n$$\n"

    def test_inline_math_node(self) -> None:
        assert render_markdown(InlineMath(location=LOC, value="x")) == "$x$"

    def test_math_node(self) -> None:
        assert render_markdown(Math(location=LOC, value="x")) == "$$\nx\n$$"

    def test_fence_grows_past_value_runs(self) -> None:
        """A value line starting with $$ gets a longer fence."""
        assert render_markdown(Math(location=LOC, value="$$x")) == "$$$\n$$x\n$$$"

    def test_empty_value(self) -> None:
        assert render_markdown(Math(location=LOC, value="")) == "$$\n\n$$"


class TestContainerStringify:
    """Container prefixes are re-applied to every math line."""

    def test_block_quote(self) -> None:
        source = "> $$\n> \\alpha\\beta\n> $$\n"
        assert serialize(parse(source)) == source

    def test_quote_with_two_blocks(self) -> None:
        """The blank line between quoted blocks keeps its marker."""
        assert serialize(parse("> a\n>\n> $$\n> x\n> $$")) == "> a\n>\n> $$\n> x\n> $$\n"

    def test_list_item(self) -> None:
        source = "- $$\n  x\n  $$\n"
        assert serialize(parse(source)) == source

    def test_ordered_list(self) -> None:
        assert serialize(parse("3. a\n4. $b$")) == "3. a\n4. $b$\n"

    def test_tight_list(self) -> None:
        assert serialize(parse("- a\n- b")) == "- a\n- b\n"

    def test_loose_list(self) -> None:
        assert serialize(parse("- a\n\n- b")) == "- a\n\n- b\n"

    def test_quote_in_list(self) -> None:
        source = "- > $$\n  > x\n  > $$\n"
        assert serialize(parse(source)) == source

    def test_list_line_transform(self) -> None:
        """A line transform prefixes a node rendered on its own."""
        text = render_markdown(Math(location=LOC, value="x"), list_item_lines("1."))
        assert text == "1. $$\n   x\n   $$"


class TestHostStringify:
    """Host constructs around math."""

    def test_empty_document(self) -> None:
        assert serialize(parse("")) == ""

    def test_code_fence(self) -> None:
        assert serialize(parse("```py\nx\n```")) == "```py\nx\n```\n"

    def test_code_fence_grows(self) -> None:
        """A fence longer than any backtick run in the code."""
        code = FencedCode(location=LOC, code="````")
        assert render_markdown(code) == "`````\n````\n`````"

    def test_code_span(self) -> None:
        assert serialize(parse("`a$b`")) == "`a$b`\n"

    def test_escaped_dollars(self) -> None:
        assert serialize(parse("\\$5 and \\$6")) == "\\$5 and \\$6\n"

    def test_soft_break(self) -> None:
        assert serialize(parse("a\nb")) == "a\nb\n"

    def test_hard_break(self) -> None:
        assert serialize(parse("a\\\nb")) == "a\\\nb\n"

    def test_line_start_marker_escaped(self) -> None:
        para = Paragraph(location=LOC, children=(Text(location=LOC, content="- x"),))
        assert serialize(doc(para)) == "\\- x\n"


def shape(value: object) -> object:
    """Node fields without source locations, for comparing trees."""
    if is_dataclass(value) and not isinstance(value, type):
        return (
            type(value).__name__,
            tuple(
                (f.name, shape(getattr(value, f.name)))
                for f in fields(value)
                if f.name != "location"
            ),
        )
    if isinstance(value, tuple):
        return tuple(shape(item) for item in value)
    return value


class TestTextRuns:
    """Adjacent Text nodes are escaped as one run."""

    def test_split_tilde_fence_stays_text(self) -> None:
        """An escaped ~~~ spans two Text nodes and must not open a fence."""
        source = "\\~~~ x\n\nafter $y$\n"
        text = serialize(parse(source))
        assert text == source
        reparsed = parse(text)
        assert [type(block).__name__ for block in reparsed.children] == ["Paragraph", "Paragraph"]
        assert reparsed.children[1].children[1].value == "y"

    @pytest.mark.parametrize("source", ["\\~~~ x", "\\> q", "\\- x", "\\+ x", "12\\. x", "3\\) x"])
    def test_split_line_start_marker(self, source: str) -> None:
        tree = parse(source)
        assert len(tree.children[0].children) == 2
        assert serialize(tree) == source + "\n"

    def test_marker_after_soft_break(self) -> None:
        """A marker escaped on a continuation line keeps its escape."""
        source = "a\n\\- b $x$"
        assert serialize(parse(source)) == source + "\n"

    def test_escape_inside_text(self) -> None:
        """An escape in mid-line splits Text, and the split survives."""
        tree = parse("a\\.b")
        assert [c.content for c in tree.children[0].children] == ["a.", "b"]
        assert serialize(tree) == "a\\.b\n"


class TestMinimalEscaping:
    """Text is escaped only where the bare form would read differently."""

    @pytest.mark.parametrize(
        "source",
        [
            "costs $5",
            "$\\alpha`$` foo",
            "a $$ b",
            "a\n2. x",
            "a\n-",
            "`` x",
            "a\\$`x`$b$",
            "\\\\$x$",
            "$5 `a$b` \\$",
        ],
    )
    def test_source_comes_back(self, source: str) -> None:
        assert serialize(parse(source)) == source + "\n"

    @pytest.mark.parametrize(
        "source",
        [
            "costs $5",
            "$\\alpha`$` foo",
            "\\$5 and \\$6",
            "a\n2. x",
            "a\\\\\\$",
            "x `$` $y$ \\`",
            "> costs $5\n>\n> $$\n> x\n> $$",
            "- a $b\n- `c` \\$d",
        ],
    )
    def test_tree_comes_back(self, source: str) -> None:
        tree = parse(source)
        assert shape(parse(serialize(tree))) == shape(tree)

    def test_ambiguous_text_falls_back_to_full_escaping(self) -> None:
        """A bare dollar that would open math is escaped after all."""
        para = Paragraph(
            location=LOC,
            children=(Text(location=LOC, content="$a "), InlineMath(location=LOC, value="b")),
        )
        text = serialize(doc(para))
        assert text == "\\$a $b$\n"
        (reparsed,) = parse(text).children
        assert [type(c).__name__ for c in reparsed.children] == ["Text", "Text", "InlineMath"]
        assert reparsed.children[-1].value == "b"

    def test_trailing_dollar_before_math(self) -> None:
        """A dollar ending a Text node is escaped so it cannot join the math fence."""
        para = Paragraph(
            location=LOC,
            children=(Text(location=LOC, content="a$"), InlineMath(location=LOC, value="b")),
        )
        assert serialize(doc(para)) == "a\\$$b$\n"


class TestEscapeText:
    """escape_text() output parses back to the same literal."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("a$b", "a\\$b"),
            ("a`b", "a\\`b"),
            ("\\alpha", "\\alpha"),
            ("a\\", "a\\\\"),
            ("\\*", "\\\\*"),
            ("plain", "plain"),
        ],
    )
    def test_inline(self, text: str, expected: str) -> None:
        assert escape_text(text) == expected

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("> q", "\\> q"),
            ("- x", "\\- x"),
            ("+", "\\+"),
            ("-x", "-x"),
            ("12. x", "12\\. x"),
            ("1) x", "1\\) x"),
            ("1.5", "1.5"),
            ("~~~", "\\~~~"),
            ("$x", "\\$x"),
        ],
    )
    def test_line_start(self, text: str, expected: str) -> None:
        assert escape_text(text, line_start=True) == expected

    @pytest.mark.parametrize("text", ["- x", "12. x", "> q", "a$b`c\\"])
    def test_reparses_to_same_text(self, text: str) -> None:
        """The escaped form parses back to the original characters."""
        (para,) = parse(escape_text(text, line_start=True)).children
        assert "".join(c.content for c in para.children) == text


class TestHelpers:
    """Markup helpers."""

    @pytest.mark.parametrize(
        "code,expected",
        [
            ("x", "`x`"),
            ("a`b", "``a`b``"),
            ("`x", "`` `x ``"),
            (" x ", "`  x  `"),
        ],
    )
    def test_code_span_markup(self, code: str, expected: str) -> None:
        assert code_span_markup(code) == expected

    @pytest.mark.parametrize(
        "value,fence",
        [
            ("x", "$$"),
            ("$x", "$$"),
            ("$$", "$$$"),
            ("a\n$$$$ b", "$$$$$"),
        ],
    )
    def test_math_fence_for(self, value: str, fence: str) -> None:
        assert math_fence_for(value) == fence

    def test_prefix_lines(self) -> None:
        assert prefix_lines("$$\nx\n$$", quote_line) == "> $$\n> x\n> $$"
        assert prefix_lines("a\n\nb", quote_line) == "> a\n>\n> b"
        assert prefix_lines("a", None) == "a"

    def test_list_item_lines(self) -> None:
        assert prefix_lines("a\n\nb", list_item_lines("-")) == "- a\n\n  b"


class TestSerializeErrors:
    """Nodes the serializer cannot express."""

    def test_non_string_value(self) -> None:
        with pytest.raises(SerializeError) as exc_info:
            render_markdown(Math(location=LOC, value=123))  # type: ignore[arg-type]
        assert exc_info.value.node_type == "math"

    def test_non_string_inline_value(self) -> None:
        with pytest.raises(SerializeError):
            render_markdown(InlineMath(location=LOC, value=None))  # type: ignore[arg-type]

    def test_unknown_block(self) -> None:
        with pytest.raises(SerializeError):
            serialize(doc(Node(location=LOC)))

    def test_unknown_inline(self) -> None:
        para = Paragraph(location=LOC, children=(BlockQuote(location=LOC, children=()),))
        with pytest.raises(SerializeError):
            serialize(doc(para))


class TestNodeLevel:
    """Rendering individual nodes without a document."""

    def test_list(self) -> None:
        item = ListItem(
            location=LOC,
            children=(Paragraph(location=LOC, children=(Text(location=LOC, content="a"),)),),
        )
        lst = List(location=LOC, items=(item, item), ordered=True, start=1, tight=True, marker=".")
        assert MarkdownRenderer().render_node(lst) == "1. a\n2. a"

    def test_code_span_node(self) -> None:
        assert render_markdown(CodeSpan(location=LOC, code="x")) == "`x`"
