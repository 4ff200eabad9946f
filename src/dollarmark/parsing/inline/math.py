"""Inline math tokenizer.

Handles the two dollar forms that can appear inside paragraph text:

- ``$...$`` produces InlineMath. The closing dollar is the next live
  single dollar; longer live runs in between stay part of the content, and
  the span may run across soft line breaks.
- ``$$...$$`` on one line produces Math with ``inline=True``. The closing
  run is the next live run of two or more dollars on the same line and is
  consumed whole.

Values are verbatim source text: escapes inside math are not resolved.

Thread Safety:
All methods are stateless. Safe for concurrent use.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dollarmark.nodes import InlineMath, Math
from dollarmark.parsing.inline.delimiters import find_closing_run, is_live_dollar, run_length
from dollarmark.parsing.inline.tokens import InlineToken, NodeToken, TextToken
from dollarmark.utils.logger import get_logger

if TYPE_CHECKING:
    from dollarmark.location import SourceLocation

logger = get_logger(__name__)


class MathInlineMixin:
    """Mixin for ``$`` and ``$$`` inline math."""

    def _try_parse_math(
        self, text: str, pos: int, location: SourceLocation
    ) -> tuple[InlineToken, int] | None:
        """Try to parse inline math at a dollar.

        Args:
            text: Paragraph inline content
            pos: Position of the dollar
            location: Location given to the produced node

        Returns:
            (token, new_pos) when the dollar run is claimed, None when the
            single dollar is literal text.
        """
        if not is_live_dollar(text, pos):
            return None

        count = run_length(text, pos)
        if count == 1:
            return self._try_parse_single_dollar(text, pos, location)

        start = pos + count
        close = find_closing_run(text, start, min_length=2, stop_at_newline=True)
        if close == -1:
            # The whole opening run is literal
            return TextToken(content="$" * count), start

        node = Math(location=location, value=text[start:close], inline=True)
        return NodeToken(node=node), close + run_length(text, close)

    def _try_parse_single_dollar(
        self, text: str, pos: int, location: SourceLocation
    ) -> tuple[InlineToken, int] | None:
        start = pos + 1
        close = find_closing_run(text, start, min_length=1, max_length=1)
        if close == -1:
            return None

        if self._code_span_claims(text, start, close):
            logger.debug(
                "Math opener at %s offset %d left as text: closing dollar is inside a code span",
                location,
                pos,
            )
            return None

        node = InlineMath(location=location, value=text[start:close])
        return NodeToken(node=node), close + 1

    def _code_span_claims(self, text: str, start: int, close: int) -> bool:
        """Check whether a code span opened in text[start:close] covers close.

        Walks the would-be math content the way the code span tokenizer
        would walk it. A backtick run with a matching run after ``close``
        means the dollar at ``close`` belongs to that code span.

        Run positions seen while searching are kept by length, so once a
        search has reached the end of the text an opener with no closer is
        rejected without scanning again.
        """
        last_run: dict[int, int] = {}
        scanned_all = False
        text_len = len(text)
        pos = start
        while pos < close:
            char = text[pos]
            if char == "\\":
                pos += 2
                continue
            if char != "`":
                pos += 1
                continue

            end = pos
            while end < text_len and text[end] == "`":
                end += 1
            count = end - pos
            if scanned_all and last_run.get(count, -1) < end:
                span_close = -1
            else:
                span_close = _scan_backtick_runs(text, end, count, last_run)
                scanned_all = scanned_all or span_close == -1

            if span_close == -1:
                pos = end
            elif span_close > close:
                return True
            else:
                pos = span_close + count
        return False


def _scan_backtick_runs(text: str, pos: int, count: int, last_run: dict[int, int]) -> int:
    """Find the next run of exactly count backticks at or after pos.

    Keeps the furthest position seen of each run length in last_run.

    Returns:
        Position of the run, or -1 if there is none.
    """
    text_len = len(text)
    while (idx := text.find("`", pos)) != -1:
        end = idx
        while end < text_len and text[end] == "`":
            end += 1
        last_run[end - idx] = max(last_run.get(end - idx, -1), idx)
        if end - idx == count:
            return idx
        pos = end
    return -1
