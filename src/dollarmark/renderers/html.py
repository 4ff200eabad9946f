"""HTML renderer using StringBuilder pattern.

Renders typed AST to HTML with O(n) performance using StringBuilder.

Math nodes are rendered from their render hint: the hint names the element
and its attributes, and its literal children become the escaped element
text. A math node without a hint is rendered as if it carried the default
one, so annotation is an optimization for consumers, not a requirement.

Thread Safety:
HtmlRenderer holds no per-render state. Multiple threads can safely share a
single instance and call render() concurrently without synchronization.
"""

from __future__ import annotations

import html

from dollarmark.annotate import render_hint_for
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
    Paragraph,
    RenderHint,
    SoftBreak,
    Text,
)
from dollarmark.stringbuilder import StringBuilder


def html_escape(s: str) -> str:
    """Escape HTML special characters.

    CommonMark-compliant: escapes <, >, &, " but NOT single quotes.
    Python's html.escape() escapes ' to &#x27; which CommonMark doesn't require.
    """
    return html.escape(s, quote=False).replace('"', "&quot;")


def _open_tag(hint: RenderHint) -> str:
    attrs = "".join(f' {name}="{html_escape(value)}"' for name, value in hint.attributes)
    return f"<{hint.tag}{attrs}>"


class HtmlRenderer:
    """Render AST to HTML using StringBuilder pattern.

    Usage:
        >>> doc = parse("Euler: $e^{i\\\\pi}$")
        >>> HtmlRenderer().render(doc)
        '<p>Euler: <span class="inlineMath">e^{i\\\\pi}</span></p>\\n'

    Thread Safety:
        Multiple threads can safely share a single HtmlRenderer instance.
    """

    __slots__ = ()

    def render(self, node: Document) -> str:
        """Render document AST to HTML string.

        Args:
            node: Document AST root

        Returns:
            HTML string
        """
        sb = StringBuilder()
        for child in node.children:
            self._render_block(child, sb)
        return sb.build()

    # =========================================================================
    # Block rendering
    # =========================================================================

    def _render_block(self, block: Block, sb: StringBuilder) -> None:
        """Render a block node."""
        match block:
            case Paragraph():
                sb.append("<p>")
                self._render_inlines(block.children, sb)
                sb.append("</p>\n")
            case Math():
                self._render_math(block, sb)
                sb.append("\n")
            case FencedCode():
                self._render_fenced_code(block, sb)
            case BlockQuote():
                sb.append("<blockquote>\n")
                for child in block.children:
                    self._render_block(child, sb)
                sb.append("</blockquote>\n")
            case List():
                self._render_list(block, sb)
            case ListItem():
                # Should be rendered by list, but handle standalone
                self._render_list_item(block, sb, tight=True)

    def _render_fenced_code(self, code: FencedCode, sb: StringBuilder) -> None:
        """Render fenced code block."""
        # CommonMark: decode HTML entities in info string, then take first word as language
        info = html.unescape(code.info) if code.info else None
        lang = info.split()[0] if info else None
        lang_class = f' class="language-{html_escape(lang)}"' if lang else ""

        sb.append(f"<pre><code{lang_class}>")
        if code.code:
            sb.append(html_escape(code.code)).append("\n")
        sb.append("</code></pre>\n")

    def _render_list(self, lst: List, sb: StringBuilder) -> None:
        """Render ordered or unordered list."""
        if lst.ordered:
            start_attr = f' start="{lst.start}"' if lst.start != 1 else ""
            sb.append(f"<ol{start_attr}>\n")
        else:
            sb.append("<ul>\n")

        for item in lst.items:
            self._render_list_item(item, sb, lst.tight)

        sb.append("</ol>\n" if lst.ordered else "</ul>\n")

    def _render_list_item(self, item: ListItem, sb: StringBuilder, tight: bool) -> None:
        """Render list item.

        CommonMark:
        - Tight lists: paragraphs render as bare text (no <p> tags)
        - Loose lists: All paragraphs wrapped in <p> tags
        """
        sb.append("<li>")
        if not item.children:
            pass
        elif tight and len(item.children) == 1 and isinstance(item.children[0], Paragraph):
            self._render_inlines(item.children[0].children, sb)
        elif tight:
            first = item.children[0]
            if not isinstance(first, Paragraph):
                sb.append("\n")
            for i, child in enumerate(item.children):
                if isinstance(child, Paragraph):
                    self._render_inlines(child.children, sb)
                    if i < len(item.children) - 1:
                        sb.append("\n")
                else:
                    self._render_block(child, sb)
        else:
            sb.append("\n")
            for child in item.children:
                self._render_block(child, sb)
        sb.append("</li>\n")

    # =========================================================================
    # Inline rendering
    # =========================================================================

    def _render_inlines(self, inlines: tuple[Inline, ...], sb: StringBuilder) -> None:
        """Render a sequence of inline nodes."""
        for inline in inlines:
            self._render_inline(inline, sb)

    def _render_inline(self, inline: Inline, sb: StringBuilder) -> None:
        """Render an inline node."""
        match inline:
            case Text():
                sb.append(html_escape(inline.content))
            case CodeSpan():
                sb.append("<code>")
                sb.append(html_escape(inline.code))
                sb.append("</code>")
            case InlineMath() | Math():
                self._render_math(inline, sb)
            case LineBreak():
                sb.append("<br />\n")
            case SoftBreak():
                sb.append("\n")

    def _render_math(self, math: Math | InlineMath, sb: StringBuilder) -> None:
        """Render a math node as the element its render hint names."""
        hint = math.render_hint or render_hint_for(math)
        sb.append(_open_tag(hint))
        for child in hint.children:
            sb.append(html_escape(child.content))
        sb.append(f"</{hint.tag}>")
