"""Typed AST nodes for dollarmark.

All AST nodes are frozen dataclasses with slots for:
- Type safety: IDE autocomplete, catch errors at dev time
- Immutability: Safe sharing across threads
- Pattern matching: match statements work naturally

Node Hierarchy:
Node (base)
├── Block (block-level elements)
│   ├── Document
│   ├── Paragraph
│   ├── FencedCode
│   ├── Math            (fenced $$ block; also one-line $$...$$ inside a paragraph)
│   ├── BlockQuote
│   ├── List
│   └── ListItem
└── Inline (inline elements)
    ├── Text
    ├── CodeSpan
    ├── InlineMath      ($...$)
    ├── Math            (one-line $$...$$, inline=True)
    ├── LineBreak
    └── SoftBreak

Every node class also carries a ``node_type`` tag ("math", "inlineMath",
"paragraph", ...) for consumers that dispatch on names rather than classes.

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from typing import TypeAlias

from dataclasses import dataclass
from typing import ClassVar, Literal

from dollarmark.location import SourceLocation

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    All nodes track their source location for error messages and debugging.

    """

    location: SourceLocation

    node_type: ClassVar[str] = "node"


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Plain text content.

    The most common inline node, representing literal text. Backslash
    escapes are already resolved in ``content``.

    """

    content: str

    node_type: ClassVar[str] = "text"


@dataclass(frozen=True, slots=True)
class CodeSpan(Node):
    """Inline code.

    Markdown: `code`
    HTML: <code>code</code>

    """

    code: str

    node_type: ClassVar[str] = "inlineCode"


@dataclass(frozen=True, slots=True)
class LineBreak(Node):
    """Hard line break.

    Markdown: backslash or two+ spaces before a newline
    HTML: <br />

    """

    node_type: ClassVar[str] = "break"


@dataclass(frozen=True, slots=True)
class SoftBreak(Node):
    """Soft line break (a plain newline inside a paragraph)."""

    node_type: ClassVar[str] = "softBreak"


@dataclass(frozen=True, slots=True)
class RenderHint:
    """How a downstream HTML compiler should wrap a math node.

    Fixed shape: an element name, its attributes, and the literal text
    children to place inside it. Math content is opaque, so the children
    are always a single Text holding the node's value.

    Attributes:
        tag: Element name ("div" or "span")
        attributes: Element attributes as ordered (name, value) pairs
        children: Literal child run

    """

    tag: str
    attributes: tuple[tuple[str, str], ...] = ()
    children: tuple[Text, ...] = ()

    @property
    def properties(self) -> dict[str, str]:
        """Attributes as a mapping."""
        return dict(self.attributes)

    def as_dict(self) -> dict[str, object]:
        """Plain-data view of the hint.

        Example:
            >>> hint.as_dict()
            {'tag': 'span', 'attributes': {'class': 'inlineMath'},
             'children': [{'type': 'text', 'value': 'x'}]}
        """
        return {
            "tag": self.tag,
            "attributes": self.properties,
            "children": [{"type": "text", "value": child.content} for child in self.children],
        }


@dataclass(frozen=True, slots=True)
class InlineMath(Node):
    """Inline math between single dollars.

    Markdown: $\\alpha$
    HTML: <span class="inlineMath">\\alpha</span>

    ``value`` is verbatim: escapes inside it are not resolved and it may
    contain backticks.

    """

    value: str
    render_hint: RenderHint | None = None

    node_type: ClassVar[str] = "inlineMath"


@dataclass(frozen=True, slots=True)
class Math(Node):
    """Display math.

    Markdown: a fenced block

        $$
        \\beta + \\gamma
        $$

    or a one-line ``$$\\alpha$$`` span inside a paragraph (``inline=True``).
    Both serialize to the fenced form.
    HTML: <div class="math">...</div>

    """

    value: str
    inline: bool = False
    render_hint: RenderHint | None = None

    node_type: ClassVar[str] = "math"


Inline: TypeAlias = Text | CodeSpan | InlineMath | Math | LineBreak | SoftBreak


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Paragraph(Node):
    """Paragraph block."""

    children: tuple[Inline, ...]

    node_type: ClassVar[str] = "paragraph"


@dataclass(frozen=True, slots=True)
class FencedCode(Node):
    """Fenced code block.

    Markdown:
        ```python
        code
        ```

    ``code`` has the opening fence's indentation removed and no trailing
    newline.

    """

    code: str
    info: str | None = None
    marker: Literal["`", "~"] = "`"
    fence_length: int = 3

    node_type: ClassVar[str] = "code"


@dataclass(frozen=True, slots=True)
class BlockQuote(Node):
    """Block quote.

    Markdown: > quoted text

    """

    children: tuple[Block, ...]

    node_type: ClassVar[str] = "blockquote"


@dataclass(frozen=True, slots=True)
class ListItem(Node):
    """List item."""

    children: tuple[Block, ...]

    node_type: ClassVar[str] = "listItem"


@dataclass(frozen=True, slots=True)
class List(Node):
    """Ordered or unordered list.

    ``marker`` is the bullet character for unordered lists and the
    delimiter ("." or ")") for ordered ones.

    """

    items: tuple[ListItem, ...]
    ordered: bool = False
    start: int = 1
    tight: bool = True
    marker: str = "-"

    node_type: ClassVar[str] = "list"


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root document node."""

    children: tuple[Block, ...]

    node_type: ClassVar[str] = "root"


Block: TypeAlias = Paragraph | FencedCode | Math | BlockQuote | List | ListItem
