"""Block mode scanner mixin."""

from __future__ import annotations

from collections.abc import Iterator

from dollarmark.lexer.classifiers.list import ListMarker
from dollarmark.parsing.charsets import FENCE_CHARS
from dollarmark.tokens import Token, TokenType


class BlockScannerMixin:
    """Mixin providing block mode scanning logic.

    Scans for block-level elements using window approach:
    1. Find end of current line (window)
    2. Classify the line content (pure logic)
    3. Emit token and commit position (always advances)

    Math fences are tried before paragraph text, so a fence line always
    interrupts an open paragraph.

    """

    # These will be set by the Lexer class or other mixins
    _source: str
    _pos: int
    _math_enabled: bool
    _in_paragraph: bool

    def _save_location(self) -> None:
        """Save current location for O(1) token location creation."""
        raise NotImplementedError

    def _find_line_end(self) -> int:
        """Find end of current line."""
        raise NotImplementedError

    def _calc_indent(self, line: str) -> tuple[int, int]:
        """Calculate indent level and content start position."""
        raise NotImplementedError

    def _commit_to(self, line_end: int) -> None:
        """Commit position to line_end."""
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

    # Classifier methods (provided by classifier mixins)
    def _try_classify_fence_start(
        self, content: str, line_start: int, indent: int = 0
    ) -> Token | None:
        raise NotImplementedError

    def _try_classify_math_fence_start(
        self, content: str, line_start: int, indent_chars: int = 0
    ) -> Token | None:
        raise NotImplementedError

    def _try_classify_list_marker(self, content: str, indent: int = 0) -> ListMarker | None:
        raise NotImplementedError

    # Container scanners (provided by ContainerScannerMixin)
    def _scan_block_quote(self, line_start: int, indent: int) -> Iterator[Token]:
        raise NotImplementedError

    def _scan_list_item(self, line_start: int, indent: int, marker: ListMarker) -> Iterator[Token]:
        raise NotImplementedError

    def _scan_block(self) -> Iterator[Token]:
        """Scan for block-level elements using window approach."""
        self._save_location()
        line_start = self._pos
        line_end = self._find_line_end()
        line = self._source[line_start:line_end]

        indent, content_start = self._calc_indent(line)
        content = line[content_start:]

        if not content or content.isspace():
            self._commit_to(line_end)
            self._in_paragraph = False
            yield self._make_token(TokenType.BLANK_LINE, "", line_start, line_indent=0)
            return

        if self._math_enabled and content[0] == "$":
            token = self._try_classify_math_fence_start(content, line_start, content_start)
            if token:
                self._commit_to(line_end)
                self._in_paragraph = False
                yield token
                return

        if indent < 4:
            if content[0] in FENCE_CHARS:
                token = self._try_classify_fence_start(content, line_start, indent)
                if token:
                    self._commit_to(line_end)
                    self._in_paragraph = False
                    yield token
                    return

            if content[0] == ">":
                self._in_paragraph = False
                yield from self._scan_block_quote(line_start, indent)
                return

            marker = self._try_classify_list_marker(content, indent)
            if marker is not None and self._can_start_list_item(marker):
                self._in_paragraph = False
                yield from self._scan_list_item(line_start, indent, marker)
                return

        self._commit_to(line_end)
        self._in_paragraph = True
        yield self._make_token(
            TokenType.PARAGRAPH_LINE,
            content,
            line_start,
            start_col=content_start + 1,
            line_indent=indent,
        )

    def _can_start_list_item(self, marker: ListMarker) -> bool:
        """Check whether a marker may start an item at this point.

        Inside a paragraph only non-empty items start a list, and an ordered
        one only when it starts at 1.
        """
        if not self._in_paragraph:
            return True
        if marker.empty:
            return False
        return not marker.ordered or marker.start == 1
