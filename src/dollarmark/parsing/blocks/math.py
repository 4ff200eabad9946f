"""Fenced math block parsing.

The lexer has already stripped the opening fence's indentation from every
content line and dropped the trailing text of both fence lines. This mixin
joins the content lines into the node value.
"""

from __future__ import annotations

from dollarmark.nodes import Math
from dollarmark.parsing.blocks.core import split_fence_value
from dollarmark.tokens import Token, TokenType
from dollarmark.utils.logger import get_logger

logger = get_logger(__name__)


class MathBlockParsingMixin:
    """Mixin for ``$$`` fenced math blocks.

    Required Host Methods:
        - _at_end() -> bool
        - _advance() -> Token | None

    """

    _current: Token | None

    def _parse_math_block(self) -> Math:
        """Parse a fenced math block.

        An unterminated fence runs to the end of the document or of the
        enclosing container.
        """
        start_token = self._current
        assert start_token is not None and start_token.type == TokenType.MATH_BLOCK_START
        self._advance()

        indent, fence = split_fence_value(start_token.value)

        lines: list[str] = []
        last_token = start_token
        closed = False
        while not self._at_end():
            token = self._current
            assert token is not None
            if token.type == TokenType.MATH_BLOCK_CONTENT:
                lines.append(token.value)
                last_token = token
                self._advance()
            elif token.type == TokenType.MATH_BLOCK_END:
                last_token = token
                closed = True
                self._advance()
                break
            else:
                break

        if not closed:
            logger.debug(
                "Unterminated math fence %r (indent %d) at %s, closed at end of scope",
                fence,
                indent,
                start_token.location,
            )

        return Math(
            location=start_token.location.through(last_token.location),
            value="\n".join(lines),
        )
