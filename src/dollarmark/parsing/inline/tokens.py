"""Typed inline tokens for the dollarmark parser.

Uses NamedTuples for inline token representation, providing:
- Immutability by default
- Tuple unpacking support
- Lower memory footprint than dataclasses
- Pattern matching on class and fields

Thread Safety:
All tokens are immutable and safe to share across threads.

Usage:
    from dollarmark.parsing.inline.tokens import TextToken, NodeToken

    match token:
        case TextToken(content=content, escaped=True):
            print(f"escaped {content!r}")

"""

from __future__ import annotations

from typing import TypeAlias

from typing import Literal, NamedTuple


class TextToken(NamedTuple):
    """Plain text token.

    Attributes:
        content: The text content.
        escaped: True when the text came from a backslash escape. Escaped
            text joins the text before it; ordinary text right after an
            escape starts a new Text node.

    """

    content: str
    escaped: bool = False

    @property
    def type(self) -> Literal["text"]:
        """Token type identifier for dispatch."""
        return "text"


class CodeSpanToken(NamedTuple):
    """Inline code span token.

    Attributes:
        code: The code content (line endings folded, edge space stripped).

    """

    code: str

    @property
    def type(self) -> Literal["code_span"]:
        """Token type identifier for dispatch."""
        return "code_span"


class NodeToken(NamedTuple):
    """Pre-built AST node token (inline math).

    Attributes:
        node: The inline AST node.

    """

    node: object

    @property
    def type(self) -> Literal["node"]:
        """Token type identifier for dispatch."""
        return "node"


class HardBreakToken(NamedTuple):
    """Hard line break (backslash + newline or two trailing spaces)."""

    @property
    def type(self) -> Literal["hard_break"]:
        """Token type identifier for dispatch."""
        return "hard_break"


class SoftBreakToken(NamedTuple):
    """Soft line break (single newline in paragraph)."""

    @property
    def type(self) -> Literal["soft_break"]:
        """Token type identifier for dispatch."""
        return "soft_break"


# PEP 695 type alias for all inline tokens
InlineToken: TypeAlias = TextToken | CodeSpanToken | NodeToken | HardBreakToken | SoftBreakToken
