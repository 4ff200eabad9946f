"""Container collection scanner mixin.

Block quotes and list items are lexed as a whole: the scanner gathers every
physical line that belongs to the container, strips the container's own
prefix from each, and emits one token holding the de-prefixed content. The
parser hands that content to a sub-parser, so nested blocks (math fences
included) only ever see de-prefixed lines.

There is no lazy continuation. A block quote ends at the first line without
a ``>`` marker; a list item ends at the first non-blank line indented less
than its content offset.
"""

from __future__ import annotations

from collections.abc import Iterator

from dollarmark.lexer.classifiers.list import ListMarker
from dollarmark.tokens import Token, TokenType


class ContainerScannerMixin:
    """Mixin providing block quote and list item collection."""

    # These will be set by the Lexer class
    _source: str
    _source_len: int
    _pos: int

    def _commit_to(self, line_end: int) -> None:
        """Commit position to line_end."""
        raise NotImplementedError

    def _calc_indent(self, line: str) -> tuple[int, int]:
        """Calculate indent level and content start position."""
        raise NotImplementedError

    def _strip_columns(self, text: str, count: int) -> str:
        """Strip up to count columns of indentation. Implemented by Lexer."""
        raise NotImplementedError

    def _strip_quote_marker(self, line: str) -> str | None:
        """Implemented by QuoteClassifierMixin."""
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
        """Create token with raw coordinates. Implemented by Lexer."""
        raise NotImplementedError

    def _iter_lines(self, start: int) -> Iterator[tuple[int, int]]:
        """Yield (line_start, line_end) windows from start to end of source."""
        pos = start
        source = self._source
        while pos < self._source_len:
            end = source.find("\n", pos)
            if end == -1:
                end = self._source_len
            yield pos, end
            pos = end + 1

    def _scan_block_quote(self, line_start: int, indent: int) -> Iterator[Token]:
        """Collect consecutive ``>`` lines into one BLOCK_QUOTE token.

        Args:
            line_start: Position where the first quote line starts
            indent: Indentation of the first ``>`` marker

        Yields:
            BLOCK_QUOTE token whose value is the de-prefixed content.
        """
        lines: list[str] = []
        last_end = line_start
        for start, end in self._iter_lines(line_start):
            content = self._strip_quote_marker(self._source[start:end])
            if content is None:
                break
            lines.append(content)
            last_end = end

        self._commit_to(last_end)
        yield self._make_token(
            TokenType.BLOCK_QUOTE,
            "\n".join(lines),
            line_start,
            start_col=indent + 1,
            end_pos=last_end,
            line_indent=indent,
        )

    def _scan_list_item(self, line_start: int, indent: int, marker: ListMarker) -> Iterator[Token]:
        """Collect a list item's lines into one LIST_ITEM token.

        Continuation lines are those indented at least to the item's content
        offset; they lose exactly that many columns. Blank lines are kept only
        when more item content follows them, so trailing blank lines stay
        outside the item and show up as BLANK_LINE tokens.

        Token value format: "{marker}:{content}".

        Args:
            line_start: Position where the marker line starts
            indent: Columns of indentation before the marker
            marker: The classified marker

        Yields:
            LIST_ITEM token.
        """
        lines = [marker.first_line]
        pending_blank: list[str] = []
        last_end = self._source.find("\n", line_start)
        if last_end == -1:
            last_end = self._source_len

        windows = self._iter_lines(line_start)
        next(windows)  # marker line
        for start, end in windows:
            line = self._source[start:end]
            if not line.strip():
                # An item can start with at most one blank line
                if marker.empty and len(lines) == 1 and not lines[0]:
                    break
                pending_blank.append("")
                continue
            line_indent, _ = self._calc_indent(line)
            if line_indent < marker.content_offset:
                break
            lines.extend(pending_blank)
            pending_blank.clear()
            lines.append(self._strip_columns(line, marker.content_offset))
            last_end = end

        self._commit_to(last_end)
        content = "\n".join(lines)
        yield self._make_token(
            TokenType.LIST_ITEM,
            f"{marker.marker}:{content}",
            line_start,
            start_col=indent + 1,
            end_pos=last_end,
            line_indent=indent,
        )
