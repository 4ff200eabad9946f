"""Token navigation utilities for the dollarmark parser.

Provides mixin for token stream navigation.
"""

from __future__ import annotations

from collections.abc import Sequence

from dollarmark.tokens import Token, TokenType


class TokenNavigationMixin:
    """Mixin providing token stream navigation methods.

    Required Host Attributes:
        - _tokens: Sequence[Token]
        - _tokens_len: int (cached len(_tokens) for hot loops)
        - _pos: int
        - _current: Token | None

    """

    _tokens: Sequence[Token]
    _tokens_len: int
    _pos: int
    _current: Token | None

    def _at_end(self) -> bool:
        """Check if at end of token stream."""
        return self._current is None or self._current.type == TokenType.EOF

    def _advance(self) -> Token | None:
        """Advance to next token and return it."""
        self._pos += 1
        if self._pos < self._tokens_len:
            self._current = self._tokens[self._pos]
        else:
            self._current = None
        return self._current

    def _peek(self, offset: int = 1) -> Token | None:
        """Peek at token at offset from current position."""
        pos = self._pos + offset
        if pos < self._tokens_len:
            return self._tokens[pos]
        return None
