"""Scanner for lines inside a code or math fence.

Content lines are raw: no block classification and no inline tokenization
happens until the closing fence. Code lines lose up to the opening fence's
indent in columns. Math lines lose exactly the opening fence's indentation
characters, or fewer if they have fewer.
"""

from collections.abc import Iterator

from dollarmark.lexer.modes import LexerMode
from dollarmark.tokens import Token, TokenType

# Fence mode -> (content token type, end token type)
_FENCE_TOKENS = {
    LexerMode.CODE_FENCE: (TokenType.FENCED_CODE_CONTENT, TokenType.FENCED_CODE_END),
    LexerMode.MATH_FENCE: (TokenType.MATH_BLOCK_CONTENT, TokenType.MATH_BLOCK_END),
}


class FenceScannerMixin:
    """Mixin scanning one line in CODE_FENCE or MATH_FENCE mode."""

    # These will be set by the Lexer class
    _source: str
    _pos: int
    _mode: LexerMode
    _fence_indent: int

    def _save_location(self) -> None:
        raise NotImplementedError

    def _find_line_end(self) -> int:
        raise NotImplementedError

    def _commit_to(self, line_end: int) -> None:
        raise NotImplementedError

    def _strip_columns(self, text: str, count: int) -> str:
        raise NotImplementedError

    def _make_token(
        self,
        token_type: TokenType,
        value: str,
        start_pos: int,
        *,
        start_col: int | None = None,
        end_pos: int | None = None,
        line_indent: int = -1,
    ) -> Token:
        raise NotImplementedError

    # Provided by FenceClassifierMixin
    def _strip_fence_indent(self, line: str) -> str:
        raise NotImplementedError

    def _closes_code_fence(self, line: str) -> bool:
        raise NotImplementedError

    def _closes_math_fence(self, stripped: str) -> bool:
        raise NotImplementedError

    def _close_fence(self) -> str:
        raise NotImplementedError

    def _scan_fence_content(self) -> Iterator[Token]:
        """Scan one line inside the open fence.

        Yields:
            A content token (indentation removed, no newline), or the end
            token at the closing fence, whose trailing text is dropped.
        """
        self._save_location()

        line_start = self._pos
        line_end = self._find_line_end()
        line = self._source[line_start:line_end]
        self._commit_to(line_end)

        content_type, end_type = _FENCE_TOKENS[self._mode]
        if self._mode is LexerMode.MATH_FENCE:
            content = self._strip_fence_indent(line)
            closed = self._closes_math_fence(content)
        else:
            content = self._strip_columns(line, self._fence_indent)
            closed = self._closes_code_fence(line)

        if closed:
            yield self._make_token(end_type, self._close_fence(), line_start, line_indent=0)
            return
        yield self._make_token(content_type, content, line_start, line_indent=0)
