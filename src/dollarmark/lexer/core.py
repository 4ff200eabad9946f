"""State-machine lexer with O(n) block scanning.

Implements a window-based approach: scan entire lines, classify, then commit.
This eliminates position rewinds and guarantees forward progress.

No regex in the hot path.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator

from dollarmark.lexer.classifiers import (
    FenceClassifierMixin,
    ListClassifierMixin,
    QuoteClassifierMixin,
)
from dollarmark.lexer.modes import LexerMode
from dollarmark.lexer.scanners import (
    BlockScannerMixin,
    ContainerScannerMixin,
    FenceScannerMixin,
)
from dollarmark.tokens import Token, TokenType


class Lexer(
    # Classifiers (pure logic, no position mutation)
    FenceClassifierMixin,
    QuoteClassifierMixin,
    ListClassifierMixin,
    # Scanners (mode-specific scanning logic)
    ContainerScannerMixin,
    BlockScannerMixin,
    FenceScannerMixin,
):
    """State-machine lexer for block structure.

    Uses a window-based approach for block scanning:
    1. Scan to end of line (find window)
    2. Classify the line (pure logic, no position changes)
    3. Commit position (always advances)

    Usage:
            >>> lexer = Lexer("Euler\\n\\n$$\\ne^{i\\\\pi}\\n$$", math_enabled=True)
            >>> for token in lexer.tokenize():
            ...     print(token)
        Token(PARAGRAPH_LINE, 'Euler', 1:1)
        Token(BLANK_LINE, '', 2:1)
        Token(MATH_BLOCK_START, 'I0:$$', 3:1)
        Token(MATH_BLOCK_CONTENT, 'e^{i\\\\pi}', 4:1)
        Token(MATH_BLOCK_END, '$$', 5:1)
        Token(EOF, '', 5:3)

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_pos",
        "_lineno",
        "_col",
        "_mode",
        "_source_file",
        "_math_enabled",
        "_fence_char",
        "_fence_count",
        "_fence_indent",
        "_in_paragraph",
        "_consumed_newline",
        "_saved_lineno",
        "_saved_col",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
        *,
        math_enabled: bool = False,
    ) -> None:
        """Initialize lexer with source text.

        Args:
            source: Markdown source text
            source_file: Optional source file path for error messages
            math_enabled: Recognize ``$$`` math fences
        """
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._lineno = 1
        self._col = 1
        self._mode = LexerMode.BLOCK
        self._source_file = source_file
        self._math_enabled = math_enabled

        # Open fence state, shared by code and math fences
        self._fence_char: str = ""
        self._fence_count: int = 0
        self._fence_indent: int = 0

        # Paragraph tracking (list items interrupting paragraphs)
        self._in_paragraph: bool = False

        self._consumed_newline: bool = False

        self._saved_lineno: int = 1
        self._saved_col: int = 1

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into token stream.

        Yields:
            Token objects one at a time, ending with EOF

        Complexity: O(n) where n = len(source)
        """
        source_len = self._source_len
        while self._pos < source_len:
            yield from self._dispatch_mode()

        yield self._make_token_at_current(TokenType.EOF, "", line_indent=0)

    def _dispatch_mode(self) -> Iterator[Token]:
        """Dispatch to appropriate scanner based on current mode."""
        if self._mode == LexerMode.BLOCK:
            yield from self._scan_block()
        else:
            yield from self._scan_fence_content()

    # =========================================================================
    # Window navigation helpers
    # =========================================================================

    def _find_line_end(self) -> int:
        """Find the end of the current line (position of \\n or EOF)."""
        idx = self._source.find("\n", self._pos)
        return idx if idx != -1 else self._source_len

    def _calc_indent(self, line: str) -> tuple[int, int]:
        """Calculate indent level and content start position.

        Spaces count as 1, tabs expand to next multiple of 4.

        Returns:
            (indent_columns, content_start_index)
        """
        indent = 0
        pos = 0
        line_len = len(line)
        while pos < line_len:
            char = line[pos]
            if char == " ":
                indent += 1
                pos += 1
            elif char == "\t":
                indent += 4 - (indent % 4)
                pos += 1
            else:
                break
        return indent, pos

    def _strip_columns(self, text: str, count: int) -> str:
        """Strip up to 'count' columns of whitespace/tabs from start of text."""
        col = 0
        pos = 0
        while pos < len(text) and col < count:
            char = text[pos]
            if char == " ":
                col += 1
                pos += 1
            elif char == "\t":
                expansion = 4 - (col % 4)
                if col + expansion <= count:
                    col += expansion
                    pos += 1
                else:
                    # Partial tab consumption
                    needed = count - col
                    return " " * (expansion - needed) + text[pos + 1 :]
            else:
                break
        return text[pos:]

    def _commit_to(self, line_end: int) -> None:
        """Commit position to line_end, consuming newline if present.

        line_end may lie several lines ahead (container collection); line
        and column tracking counts the newlines skipped.
        """
        if line_end > self._pos:
            segment = self._source[self._pos : line_end]
            newline_count = segment.count("\n")
            if newline_count > 0:
                last_nl = segment.rfind("\n")
                self._lineno += newline_count
                self._col = len(segment) - last_nl
            else:
                self._col += len(segment)
            self._pos = line_end

        self._consumed_newline = False
        if self._pos < self._source_len and self._source[self._pos] == "\n":
            self._pos += 1
            self._lineno += 1
            self._col = 1
            self._consumed_newline = True

    # =========================================================================
    # Location tracking
    # =========================================================================

    def _save_location(self) -> None:
        """Save current location for O(1) token location creation.

        Call this at the START of scanning a line, before any position changes.
        """
        self._saved_lineno = self._lineno
        self._saved_col = self._col

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
        """Create a Token starting on the line saved by _save_location."""
        return Token(
            type=token_type,
            value=value,
            lineno=self._saved_lineno,
            col=start_col if start_col is not None else self._saved_col,
            offset=start_pos,
            end_offset=end_pos if end_pos is not None else self._pos,
            line_indent=line_indent,
            source_file=self._source_file,
        )

    def _make_token_at_current(
        self,
        token_type: TokenType,
        value: str,
        *,
        line_indent: int = 0,
    ) -> Token:
        """Create a Token at current position (for EOF)."""
        return Token(
            type=token_type,
            value=value,
            lineno=self._lineno,
            col=self._col,
            offset=self._pos,
            end_offset=self._pos,
            line_indent=line_indent,
            source_file=self._source_file,
        )
