"""
dollarmark: dollar-sign math for a typed Markdown AST

Parses ``$inline$``, one-line ``$$display$$`` and fenced ``$$`` math blocks
alongside paragraphs, code, block quotes and lists. Math nodes carry render
hints for HTML compilers, and the AST serializes back to Markdown with math
in canonical fenced form. Zero runtime dependencies.

Quick Start:
    >>> from dollarmark import parse, render, serialize
    >>> doc = parse("Euler: $e^{i\\\\pi} + 1 = 0$")
    >>> render(doc)
    '<p>Euler: <span class="inlineMath">e^{i\\\\pi} + 1 = 0</span></p>\\n'
    >>> serialize(parse("$$\\\\alpha$$"))
    '$$\\n\\\\alpha\\n$$\\n'

    >>> # Or use the high-level Markdown class
    >>> from dollarmark import Markdown
    >>> md = Markdown(plugins=["math"])
    >>> html = md("$$\\nE = mc^2\\n$$")

Installation:
    pip install dollarmark
"""

from collections.abc import Iterable

from dollarmark.annotate import annotate, annotate_tree
from dollarmark.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from dollarmark.errors import DollarmarkError, ParseError, PluginError, SerializeError
from dollarmark.lexer import Lexer
from dollarmark.location import SourceLocation
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
    RenderHint,
    SoftBreak,
    Text,
)
from dollarmark.parser import Parser
from dollarmark.plugins import BUILTIN_PLUGINS, apply_plugins, get_plugin, register_plugin
from dollarmark.renderers.html import HtmlRenderer
from dollarmark.renderers.markdown import LineTransform, MarkdownRenderer, render_markdown
from dollarmark.renderers.protocol import ASTRenderer
from dollarmark.tokens import Token, TokenType
from dollarmark.visitor import transform

__version__ = "0.1.0"


def _build_document(source: str, source_file: str | None) -> Document:
    """Parse under the current config and wrap the blocks in a Document."""
    parser = Parser(source, source_file=source_file)
    blocks = parser.parse()
    loc = SourceLocation(
        lineno=1,
        col_offset=1,
        offset=0,
        end_offset=len(source),
        source_file=source_file,
    )
    doc = Document(location=loc, children=tuple(blocks))
    if get_parse_config().render_hints:
        doc = annotate_tree(doc)
    return doc


def parse(
    source: str,
    *,
    source_file: str | None = None,
    math: bool = True,
    render_hints: bool = True,
    inline_math_double: bool = False,
) -> Document:
    """Parse Markdown source into a typed AST.

    Args:
        source: Markdown source text
        source_file: Optional source file path for error messages
        math: Recognize dollar math
        render_hints: Attach render hints to math nodes
        inline_math_double: Give one-line $$ math the ``inlineMathDouble`` class

    Returns:
        Document AST root node

    Raises:
        ParseError: If source is not a string

    Example:
        >>> doc = parse("$$\\nx^2\\n$$")
        >>> doc.children[0]
        Math(value='x^2', inline=False, ...)
    """
    config = ParseConfig(
        math_enabled=math,
        render_hints=render_hints,
        inline_math_double=inline_math_double,
    )
    set_parse_config(config)
    try:
        return _build_document(source, source_file)
    finally:
        reset_parse_config()


def render(doc: Document) -> str:
    """Render an AST Document to HTML.

    Example:
        >>> render(parse("$x$"))
        '<p><span class="inlineMath">x</span></p>\\n'
    """
    return HtmlRenderer().render(doc)


def serialize(node: Node) -> str:
    """Serialize an AST back to Markdown.

    Documents end with a newline; a single node renders without one.

    Example:
        >>> serialize(parse("a $$b$$ c"))
        'a\\n\\n$$\\nb\\n$$\\n\\nc\\n'
    """
    return render_markdown(node)


class Markdown:
    """High-level Markdown processor combining parser and renderers.

    Usage:
        >>> md = Markdown(plugins=["math"])
        >>> html = md("Euler: $e^{i\\\\pi}$")
        '<p>Euler: <span class="inlineMath">e^{i\\\\pi}</span></p>\\n'

        >>> # Access the AST
        >>> doc = md.parse("$$\\nx\\n$$")
        >>> doc.children[0].value
        'x'

        >>> # Back to Markdown
        >>> md.serialize(doc)
        '$$\\nx\\n$$\\n'

    Without the math plugin, dollars are plain text.

    Thread Safety:
        Uses ContextVar for thread-local configuration. Safe to use multiple
        Markdown instances concurrently from different threads.

    """

    __slots__ = ("_config", "_plugins")

    def __init__(
        self,
        *,
        plugins: list[str] | None = None,
        render_hints: bool = True,
    ) -> None:
        """Initialize Markdown processor.

        Args:
            plugins: List of plugin names to enable (e.g., ["math"]).
                Use ["all"] to enable all built-in plugins.
            render_hints: Attach render hints to math nodes

        Raises:
            PluginError: If a plugin name is not recognized
        """
        self._plugins = list(plugins or [])
        # Build immutable config once (thread-safe, reused across calls)
        self._config = apply_plugins(self._plugins, ParseConfig(render_hints=render_hints))

    @property
    def config(self) -> ParseConfig:
        """The parse configuration every call of this processor uses."""
        return self._config

    def __call__(self, source: str) -> str:
        """Parse and render Markdown to HTML in one call."""
        return self.render(self.parse(source))

    def parse(self, source: str, *, source_file: str | None = None) -> Document:
        """Parse Markdown source into AST.

        Args:
            source: Markdown source text
            source_file: Optional source file path for error messages

        Returns:
            Document AST root node

        Thread Safety:
            Sets config via ContextVar (thread-local). Safe for concurrent use.

        """
        set_parse_config(self._config)
        try:
            return _build_document(source, source_file)
        finally:
            # Reset to default (reuses module-level singleton, no allocation)
            reset_parse_config()

    def parse_many(
        self,
        sources: Iterable[str],
        *,
        source_file: str | None = None,
    ) -> list[Document]:
        """Parse multiple Markdown sources into AST documents.

        Sets config once, parses all, resets once.

        Example:
            >>> md = Markdown(plugins=["math"])
            >>> docs = md.parse_many(["$a$", "$$\\nb\\n$$"])
        """
        set_parse_config(self._config)
        try:
            return [_build_document(source, source_file) for source in sources]
        finally:
            reset_parse_config()

    def render(self, doc: Document) -> str:
        """Render AST to HTML."""
        return HtmlRenderer().render(doc)

    def serialize(self, doc: Document) -> str:
        """Render AST back to Markdown."""
        return MarkdownRenderer().render(doc)


__all__ = [  # noqa: RUF022 (grouped by category)
    # Version
    "__version__",
    # Core API
    "parse",
    "render",
    "serialize",
    # Block nodes
    "Block",
    "BlockQuote",
    "Document",
    "FencedCode",
    "List",
    "ListItem",
    "Math",
    "Paragraph",
    # Inline nodes
    "Inline",
    "CodeSpan",
    "InlineMath",
    "LineBreak",
    "SoftBreak",
    "Text",
    # Node base and render hints
    "Node",
    "RenderHint",
    "annotate",
    "annotate_tree",
    # Parser components
    "Lexer",
    "Parser",
    # Renderers
    "ASTRenderer",
    "HtmlRenderer",
    "LineTransform",
    "MarkdownRenderer",
    "render_markdown",
    # Tree rewriting
    "transform",
    # Configuration (ContextVar-based)
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Plugins
    "BUILTIN_PLUGINS",
    "apply_plugins",
    "get_plugin",
    "register_plugin",
    # Errors
    "DollarmarkError",
    "ParseError",
    "PluginError",
    "SerializeError",
    # Location
    "SourceLocation",
    # Tokens
    "Token",
    "TokenType",
    # High-level
    "Markdown",
]
