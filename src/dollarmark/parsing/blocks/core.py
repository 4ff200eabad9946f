"""Core block parsing for the dollarmark parser.

Provides block dispatch and the host blocks: paragraphs, fenced code and
block quotes.
"""

from __future__ import annotations

import re

from dollarmark.nodes import Block, BlockQuote, FencedCode, Inline, Paragraph
from dollarmark.tokens import Token, TokenType
from dollarmark.utils.logger import get_logger

logger = get_logger(__name__)

# Pattern to find backslash escapes (CommonMark ASCII punctuation)
_ESCAPE_PATTERN = re.compile(r"\\([!\"#$%&'()*+,\-./:;<=>?@\[\\\]^_`{|}~])")


def _process_escapes(text: str) -> str:
    """Process backslash escapes in info strings."""
    return _ESCAPE_PATTERN.sub(r"\1", text)


def split_fence_value(value: str) -> tuple[int, str]:
    """Split a fence start token value "I{indent}:{fence}{info}".

    Returns:
        (indent, fence_and_info)
    """
    if value.startswith("I") and ":" in value:
        prefix, rest = value.split(":", 1)
        return int(prefix[1:]), rest
    return 0, value


class BlockParsingCoreMixin:
    """Core block parsing methods.

    Required Host Attributes:
        - _tokens: list[Token]
        - _pos: int
        - _current: Token | None

    Required Host Methods:
        - _at_end() -> bool
        - _advance() -> Token | None
        - _parse_inline(text, location) -> tuple[Inline, ...]
        - _parse_nested_content(content, location) -> tuple[Block, ...]
        - _parse_list() -> List
        - _parse_math_block() -> Math

    """

    def _parse_block(self) -> Block | None:
        """Parse a single block element."""
        if self._at_end():
            return None

        token = self._current
        assert token is not None

        match token.type:
            case TokenType.PARAGRAPH_LINE:
                return self._parse_paragraph()

            case TokenType.MATH_BLOCK_START:
                return self._parse_math_block()

            case TokenType.FENCED_CODE_START:
                return self._parse_fenced_code()

            case TokenType.BLOCK_QUOTE:
                return self._parse_block_quote()

            case TokenType.LIST_ITEM:
                return self._parse_list()

            case _:
                # Skip unknown tokens
                self._advance()
                return None

    def _parse_paragraph(self) -> Paragraph:
        """Parse consecutive paragraph lines.

        The lexer has already ended the run at any line that starts another
        block, a math fence included.
        """
        start_token = self._current
        assert start_token is not None and start_token.type == TokenType.PARAGRAPH_LINE

        lines: list[str] = []
        last_token: Token = start_token
        while not self._at_end():
            token = self._current
            assert token is not None
            if token.type != TokenType.PARAGRAPH_LINE:
                break
            lines.append(token.value)
            last_token = token
            self._advance()

        location = start_token.location.through(last_token.location)
        content = "\n".join(lines).rstrip(" \t")
        children: tuple[Inline, ...] = self._parse_inline(content, location)
        return Paragraph(location=location, children=children)

    def _parse_fenced_code(self) -> FencedCode:
        """Parse fenced code block."""
        start_token = self._current
        assert start_token is not None and start_token.type == TokenType.FENCED_CODE_START
        self._advance()

        _, value = split_fence_value(start_token.value)
        marker = value[0]
        fence_length = 0
        while fence_length < len(value) and value[fence_length] == marker:
            fence_length += 1

        info: str | None = None
        info_str = value[fence_length:].strip()
        if info_str:
            info = _process_escapes(info_str)

        lines: list[str] = []
        last_token = start_token
        closed = False
        while not self._at_end():
            token = self._current
            assert token is not None
            if token.type == TokenType.FENCED_CODE_CONTENT:
                lines.append(token.value)
                last_token = token
                self._advance()
            elif token.type == TokenType.FENCED_CODE_END:
                last_token = token
                closed = True
                self._advance()
                break
            else:
                break

        if not closed:
            logger.debug("Unterminated code fence at %s, closed at end of scope", start_token.location)

        return FencedCode(
            location=start_token.location.through(last_token.location),
            code="\n".join(lines),
            info=info,
            marker=marker,  # type: ignore[arg-type]
            fence_length=fence_length,
        )

    def _parse_block_quote(self) -> BlockQuote:
        """Parse a block quote from its collected, de-prefixed content."""
        token = self._current
        assert token is not None and token.type == TokenType.BLOCK_QUOTE
        self._advance()

        children = self._parse_nested_content(token.value, token.location)
        return BlockQuote(location=token.location, children=children)
