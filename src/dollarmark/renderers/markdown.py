"""Markdown renderer: turns a dollarmark AST back into Markdown text.

Math nodes always come out in fenced form:

    Math        -> "$$\\n" + value + "\\n$$"
    InlineMath  -> "$" + value + "$"

A one-line ``$$...$$`` span written inside a paragraph is lifted out onto
its own fence lines, so the paragraph is split around it. The output is not
byte-identical to the input, but parsing it again yields the same math and
code values in the same order. Paragraph text is escaped as little as will
read back unchanged, so a document without one-line ``$$`` math parses
back to the same tree.

Container prefixes are applied through a line transform: each container
hands its children's rendered text to ``prefix_lines`` with a callable that
prefixes one line. Math and code fences never know which container they sit
in.

Thread Safety:
MarkdownRenderer holds no per-render state. Safe to share across threads.

"""

from __future__ import annotations

from typing import TypeAlias

from collections.abc import Callable, Sequence

from dollarmark.config import ParseConfig, parse_config_context
from dollarmark.errors import SerializeError
from dollarmark.nodes import (
    Block,
    BlockQuote,
    CodeSpan,
    Document,
    FencedCode,
    Inline,
    InlineMath,
    LineBreak,
    List,
    ListItem,
    Math,
    Node,
    Paragraph,
    SoftBreak,
    Text,
)
from dollarmark.parser import Parser
from dollarmark.parsing.charsets import ASCII_PUNCTUATION, DIGITS
from dollarmark.stringbuilder import StringBuilder
from dollarmark.utils.logger import get_logger
from dollarmark.utils.text import longest_run

logger = get_logger(__name__)

LineTransform: TypeAlias = Callable[[str, int], str]

MATH_FENCE = "$$"
BLOCK_SEPARATOR = "\n\n"
TIGHT_SEPARATOR = "\n"


# =============================================================================
# Line transforms
# =============================================================================


def prefix_lines(text: str, transform: LineTransform | None) -> str:
    """Apply a line transform to every line of text.

    Args:
        text: Rendered block text, lines separated by "\\n"
        transform: Called with (line, index); None leaves text unchanged

    Returns:
        Transformed text.

    Example:
        >>> prefix_lines("$$\\nx\\n$$", quote_line)
        '> $$\\n> x\\n> $$'
    """
    if transform is None:
        return text
    return "\n".join(transform(line, index) for index, line in enumerate(text.split("\n")))


def quote_line(line: str, index: int) -> str:
    """Block quote prefix; blank lines get a bare marker."""
    return f"> {line}" if line else ">"


def list_item_lines(marker: str) -> LineTransform:
    """Build the line transform for one list item.

    The marker goes on the first line and every other non-blank line is
    indented to the item's content column.
    """
    indent = " " * (len(marker) + 1)

    def transform(line: str, index: int) -> str:
        if index == 0:
            return f"{marker} {line}" if line else marker
        return f"{indent}{line}" if line else ""

    return transform


# =============================================================================
# Text escaping
# =============================================================================


def _line_start_marker(text: str) -> int:
    """Index of a block marker that would open a block at the start of a line.

    Returns -1 when the text starts no block.
    """
    if not text:
        return -1

    first = text[0]
    if first == ">":
        return 0
    if first in "-*+":
        if len(text) == 1 or text[1] in " \t":
            return 0
        return -1
    if text.startswith("~~~"):
        return 0
    if first in DIGITS:
        pos = 0
        while pos < len(text) and text[pos] in DIGITS:
            pos += 1
        if pos < len(text) and text[pos] in ".)":
            after = pos + 1
            if after == len(text) or text[after] in " \t":
                return pos
    return -1


def _escape_run(contents: Sequence[str], *, line_start: bool, minimal: bool) -> str:
    """Escape the contents of adjacent Text nodes as one run of source.

    The parser only ends a Text node where an escaped character is followed
    by plain text, so the last character of every content but the final one
    is escaped again. Block markers are looked up on the joined text: the
    parser splits ``\\~~~`` into ``~`` and ``~~``.

    With minimal set, dollars and backticks stay bare except in the
    trailing run of a node, where escaping them keeps the node intact.
    Otherwise every dollar and backtick is escaped.
    """
    text = "".join(contents)
    text_len = len(text)
    escaped: set[int] = set()

    end = 0
    for content in contents:
        start, end = end, end + len(content)
        if not content:
            continue
        if end < text_len and text[end - 1] in ASCII_PUNCTUATION:
            escaped.add(end - 1)
        if minimal:
            pos = end - 1
            while pos >= start and text[pos] in "$`\\":
                escaped.add(pos)
                pos -= 1

    if line_start:
        marker = _line_start_marker(text)
        if marker >= 0:
            escaped.add(marker)

    for i, char in enumerate(text):
        if char == "\\":
            if i + 1 == text_len or text[i + 1] in ASCII_PUNCTUATION:
                escaped.add(i)
        elif char in "$`" and not minimal:
            escaped.add(i)

    if minimal:
        # Escaped text must run to the end of its node or the node splits.
        end = 0
        for content in contents:
            start, end = end, end + len(content)
            first = min((i for i in escaped if start <= i < end), default=end)
            for i in range(first, end):
                if text[i] not in ASCII_PUNCTUATION:
                    break
                escaped.add(i)

    return "".join("\\" + char if i in escaped else char for i, char in enumerate(text))


def escape_text(text: str, *, line_start: bool = False) -> str:
    """Escape Text content so it parses back to the same literal text.

    Dollars and backticks are always escaped. A backslash is escaped when a
    punctuation character follows it or when it ends the text, since the
    next node could begin with punctuation or a line ending.

    Args:
        text: Literal text
        line_start: The text begins a line, so block markers need escaping

    Returns:
        Markdown source for the text.
    """
    return _escape_run((text,), line_start=line_start, minimal=False)


def code_span_markup(code: str) -> str:
    """Wrap code in a backtick run that cannot occur inside it."""
    fence = "`" * (longest_run(code, "`") + 1)
    pad = ""
    if code.startswith("`") or code.endswith("`"):
        pad = " "
    elif len(code) >= 2 and code[0] == " " and code[-1] == " " and code.strip():
        pad = " "
    return f"{fence}{pad}{code}{pad}{fence}"


def math_fence_for(value: str) -> str:
    """Pick a fence no value line can close.

    A value line that starts with a run of two or more dollars would close a
    ``$$`` fence, so the fence grows one dollar past the longest such run.
    """
    longest = 0
    for line in value.split("\n"):
        run = len(line) - len(line.lstrip("$"))
        if run > longest:
            longest = run
    if longest < len(MATH_FENCE):
        return MATH_FENCE
    return "$" * (longest + 1)


# =============================================================================
# Renderer
# =============================================================================


class MarkdownRenderer:
    """Render AST back to Markdown.

    Usage:
        >>> doc = parse("Euler: $$e^{i\\\\pi} + 1 = 0$$ ok")
        >>> MarkdownRenderer().render(doc)
        'Euler:\\n\\n$$\\ne^{i\\\\pi} + 1 = 0\\n$$\\n\\nok\\n'

    Thread Safety:
        Stateless. Multiple threads can share one instance.
    """

    __slots__ = ()

    def render(self, node: Document) -> str:
        """Render a document.

        Blocks are separated by one blank line and the output ends with a
        newline. An empty document renders as the empty string.
        """
        text = self._render_blocks(node.children, BLOCK_SEPARATOR)
        if not text:
            return ""
        return text + "\n"

    def render_node(self, node: Node, line_transform: LineTransform | None = None) -> str:
        """Render any node on its own, without a trailing newline.

        Args:
            node: Document, block or inline node
            line_transform: Container prefix applied to every output line

        Raises:
            SerializeError: For an unknown node type or a math value that is
                not a string
        """
        match node:
            case Document():
                text = self._render_blocks(node.children, BLOCK_SEPARATOR)
            case InlineMath():
                text = self._render_inline_math(node)
            case Text() | CodeSpan() | LineBreak() | SoftBreak():
                text = self._render_inlines((node,))
            case _:
                text = self._render_blocks((node,), BLOCK_SEPARATOR)  # type: ignore[arg-type]
        return prefix_lines(text, line_transform)

    # =========================================================================
    # Block rendering
    # =========================================================================

    def _render_blocks(self, blocks: Sequence[Block], separator: str) -> str:
        """Render sibling blocks joined by separator."""
        parts: list[str] = []
        for block in blocks:
            parts.extend(self._render_block(block))
        return separator.join(parts)

    def _render_block(self, block: Block) -> list[str]:
        """Render one block.

        Returns a list because a paragraph holding one-line ``$$`` math
        renders as several blocks.
        """
        match block:
            case Paragraph():
                return self._render_paragraph(block)
            case Math():
                return [self._render_math(block)]
            case FencedCode():
                return [self._render_fenced_code(block)]
            case BlockQuote():
                return [self._render_block_quote(block)]
            case List():
                return [self._render_list(block)]
            case ListItem():
                return [self._render_list_item(block, "-", tight=True)]
            case _:
                raise SerializeError(
                    getattr(block, "node_type", type(block).__name__),
                    "not a block node",
                )

    def _render_paragraph(self, para: Paragraph) -> list[str]:
        """Render a paragraph, lifting one-line $$ math onto its own fence."""
        parts: list[str] = []
        segment: list[Inline] = []

        def flush() -> None:
            text = self._render_segment(_trim_segment(segment))
            if text.strip():
                parts.append(text)
            segment.clear()

        for child in para.children:
            if isinstance(child, Math):
                flush()
                parts.append(self._render_math(child))
            else:
                segment.append(child)
        flush()
        return parts

    def _render_math(self, math: Math) -> str:
        """Render display math in fenced form."""
        value = _math_value(math)
        fence = math_fence_for(value)
        return f"{fence}\n{value}\n{fence}"

    def _render_fenced_code(self, code: FencedCode) -> str:
        """Render fenced code with a fence longer than any run inside it."""
        info = code.info or ""
        marker = code.marker
        if marker == "`" and "`" in info:
            marker = "~"
        length = max(3, longest_run(code.code, marker) + 1)
        fence = marker * length
        info = info.replace("\\", "\\\\")
        if code.code:
            return f"{fence}{info}\n{code.code}\n{fence}"
        return f"{fence}{info}\n{fence}"

    def _render_block_quote(self, quote: BlockQuote) -> str:
        """Render a block quote by prefixing its children's lines."""
        inner = self._render_blocks(quote.children, BLOCK_SEPARATOR)
        return prefix_lines(inner, quote_line)

    def _render_list(self, lst: List) -> str:
        """Render list items; tight lists have no blank lines between items."""
        separator = TIGHT_SEPARATOR if lst.tight else BLOCK_SEPARATOR
        rendered: list[str] = []
        for index, item in enumerate(lst.items):
            if lst.ordered:
                marker = f"{lst.start + index}{lst.marker}"
            else:
                marker = lst.marker
            rendered.append(self._render_list_item(item, marker, tight=lst.tight))
        return separator.join(rendered)

    def _render_list_item(self, item: ListItem, marker: str, *, tight: bool) -> str:
        separator = TIGHT_SEPARATOR if tight else BLOCK_SEPARATOR
        inner = self._render_blocks(item.children, separator)
        return prefix_lines(inner, list_item_lines(marker))

    # =========================================================================
    # Inline rendering
    # =========================================================================

    def _render_segment(self, segment: Sequence[Inline]) -> str:
        """Render paragraph inlines with the fewest escapes that read back.

        The minimal form leaves dollars and backticks bare inside Text. It
        is parsed again and kept when it yields the same inlines. Otherwise
        every dollar and backtick is escaped, which keeps all math and code
        values but may split Text nodes at the new escapes.
        """
        if not segment:
            return ""
        text = self._render_inlines(segment, minimal=True)
        if _reads_back(text, segment):
            return text
        logger.debug("Paragraph text needs full escaping: %r", text)
        return self._render_inlines(segment)

    def _render_inlines(self, inlines: Sequence[Inline], *, minimal: bool = False) -> str:
        """Render a run of inline nodes.

        Adjacent Text nodes are escaped together. With minimal set, block
        markers are escaped on the first line only; a later line that would
        open a block fails the read-back check instead.
        """
        sb = StringBuilder()
        run: list[str] = []
        run_line_start = at_line_start = True
        for inline in inlines:
            if isinstance(inline, Text):
                if not run:
                    run_line_start = at_line_start
                run.append(inline.content)
                at_line_start = False
                continue
            if run:
                sb.append(_escape_run(run, line_start=run_line_start, minimal=minimal))
                run.clear()
            match inline:
                case CodeSpan():
                    sb.append(code_span_markup(inline.code))
                case InlineMath():
                    sb.append(self._render_inline_math(inline))
                case LineBreak():
                    sb.append("\\\n")
                case SoftBreak():
                    sb.append("\n")
                case Math():
                    sb.append(self._render_math(inline))
                case _:
                    raise SerializeError(
                        getattr(inline, "node_type", type(inline).__name__),
                        "not an inline node",
                    )
            at_line_start = not minimal and isinstance(inline, (LineBreak, SoftBreak))
        if run:
            sb.append(_escape_run(run, line_start=run_line_start, minimal=minimal))
        return sb.build()

    def _render_inline_math(self, math: InlineMath) -> str:
        return f"${_math_value(math)}$"


def _math_value(node: Math | InlineMath) -> str:
    if not isinstance(node.value, str):
        raise SerializeError(node.node_type, f"value must be a str, got {type(node.value).__name__}")
    return node.value


_READ_BACK_CONFIG = ParseConfig(math_enabled=True, render_hints=False)


def _inline_key(node: Inline) -> tuple[str, ...]:
    match node:
        case Text():
            return ("text", node.content)
        case CodeSpan():
            return ("inlineCode", node.code)
        case InlineMath():
            return ("inlineMath", node.value)
        case _:
            return (node.node_type,)


def _reads_back(source: str, inlines: Sequence[Inline]) -> bool:
    """Check that source parses to one paragraph holding the same inlines."""
    with parse_config_context(_READ_BACK_CONFIG):
        blocks = Parser(source).parse()
    match blocks:
        case [Paragraph(children=children)]:
            return [_inline_key(node) for node in children] == [
                _inline_key(node) for node in inlines
            ]
        case _:
            return False


def _trim_segment(segment: list[Inline]) -> list[Inline]:
    """Drop edge line breaks and edge whitespace from a paragraph segment."""
    start = 0
    end = len(segment)
    while start < end and isinstance(segment[start], (LineBreak, SoftBreak)):
        start += 1
    while end > start and isinstance(segment[end - 1], (LineBreak, SoftBreak)):
        end -= 1

    trimmed = list(segment[start:end])
    if trimmed and isinstance(trimmed[0], Text):
        trimmed[0] = Text(location=trimmed[0].location, content=trimmed[0].content.lstrip(" \t"))
    if trimmed and isinstance(trimmed[-1], Text):
        trimmed[-1] = Text(location=trimmed[-1].location, content=trimmed[-1].content.rstrip(" \t"))
    return [node for node in trimmed if not (isinstance(node, Text) and not node.content)]


_DEFAULT_RENDERER = MarkdownRenderer()


def render_markdown(node: Node, line_transform: LineTransform | None = None) -> str:
    """Serialize a node back to Markdown.

    A Document renders with a trailing newline; any other node renders on
    its own without one.

    Example:
        >>> render_markdown(InlineMath(location=loc, value="x"))
        '$x$'
    """
    if isinstance(node, Document) and line_transform is None:
        return _DEFAULT_RENDERER.render(node)
    return _DEFAULT_RENDERER.render_node(node, line_transform)


serialize = render_markdown


__all__ = [
    "LineTransform",
    "MarkdownRenderer",
    "code_span_markup",
    "escape_text",
    "list_item_lines",
    "math_fence_for",
    "prefix_lines",
    "quote_line",
    "render_markdown",
    "serialize",
]
