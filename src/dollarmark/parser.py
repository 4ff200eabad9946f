"""Recursive descent parser producing typed AST.

Consumes token stream from Lexer and builds typed AST nodes.
Produces immutable (frozen) dataclass nodes for thread-safety.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `TokenNavigationMixin`: Token stream traversal
- `InlineParsingMixin`: Inline content (escapes, code spans, math)
- `BlockParsingMixin`: Block-level content (paragraphs, fences, containers)

Thread Safety:
- Parser produces immutable AST (frozen dataclasses)
- Configuration is read from ContextVar (thread-local)
- Safe to share AST across threads

"""

from __future__ import annotations

from collections.abc import Sequence

from dollarmark.config import ParseConfig, get_parse_config
from dollarmark.errors import ParseError
from dollarmark.lexer import Lexer
from dollarmark.location import SourceLocation
from dollarmark.nodes import Block
from dollarmark.parsing import (
    BlockParsingMixin,
    InlineParsingMixin,
    TokenNavigationMixin,
)
from dollarmark.tokens import Token, TokenType


class Parser(
    TokenNavigationMixin,
    InlineParsingMixin,
    BlockParsingMixin,
):
    """Recursive descent parser for Markdown with dollar math.

    Consumes tokens from Lexer and builds typed AST.

    Usage:
            >>> with parse_config_context(ParseConfig(math_enabled=True)):
            ...     blocks = Parser("Euler: $e^{i\\\\pi}$").parse()
            >>> blocks[0].children[1]
        InlineMath(value='e^{i\\\\pi}', ...)

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. Configuration is read from ContextVar (thread-local).
        The resulting AST is immutable and thread-safe.

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_tokens",
        "_tokens_len",
        "_pos",
        "_current",
        # Bound inline tokenizers, built on first use
        "_inline_handlers",
        # Set when a blank line separates two top-level blocks of this parse
        "_blank_between_blocks",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
    ) -> None:
        """Initialize parser with source text.

        Configuration is read from ContextVar, not passed as parameters.
        Use set_parse_config() or parse_config_context() before creating
        a Parser if you need non-default configuration.

        Args:
            source: Markdown source text
            source_file: Optional source file path for error messages

        Raises:
            ParseError: If source is not a string
        """
        if not isinstance(source, str):
            raise ParseError(
                f"expected str source, got {type(source).__name__}",
                source_file=source_file,
            )
        self._source = source
        self._source_file = source_file
        self._tokens: list[Token] = []
        self._tokens_len = 0
        self._pos = 0
        self._current: Token | None = None
        self._inline_handlers = None
        self._blank_between_blocks = False

    # =========================================================================
    # Configuration Properties (read from ContextVar)
    # =========================================================================

    @property
    def _config(self) -> ParseConfig:
        """Get current parse configuration (thread-local)."""
        return get_parse_config()

    @property
    def _math_enabled(self) -> bool:
        """Whether $inline$ and $$block$$ math is enabled."""
        return self._config.math_enabled

    def parse(self) -> Sequence[Block]:
        """Parse source into AST blocks.

        Returns:
            Sequence of Block nodes

        Thread Safety:
            Returns immutable AST (frozen dataclasses).
        """
        lexer = Lexer(self._source, self._source_file, math_enabled=self._math_enabled)
        self._tokens = list(lexer.tokenize())
        self._tokens_len = len(self._tokens)
        self._pos = 0
        self._current = self._tokens[0] if self._tokens else None

        blocks: list[Block] = []
        pending_blank = False
        while not self._at_end():
            token = self._current
            assert token is not None
            if token.type == TokenType.BLANK_LINE:
                pending_blank = bool(blocks)
                self._advance()
                continue

            block = self._parse_block()
            if block is not None:
                if pending_blank:
                    self._blank_between_blocks = True
                pending_blank = False
                blocks.append(block)

        return tuple(blocks)

    def _parse_nested_content(
        self,
        content: str,
        location: SourceLocation,
    ) -> tuple[Block, ...]:
        """Parse nested content as blocks (for block quotes, list items).

        Creates a sub-parser to handle nested block-level content.
        Configuration is automatically inherited via ContextVar, so a math
        fence inside a container is recognized exactly as at top level.

        Args:
            content: De-prefixed container content to parse as blocks
            location: Source location of the container

        Returns:
            Tuple of Block nodes
        """
        blocks, _ = self._parse_item_content(content, location)
        return blocks

    def _parse_item_content(
        self,
        content: str,
        location: SourceLocation,
    ) -> tuple[tuple[Block, ...], bool]:
        """Parse nested content and report blank lines between its blocks.

        Returns:
            (blocks, blank_between_blocks)
        """
        if not content.strip():
            return (), False

        sub_parser = Parser(content, self._source_file)
        blocks = sub_parser.parse()
        return tuple(blocks), sub_parser._blank_between_blocks
