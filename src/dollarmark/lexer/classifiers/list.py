"""List marker classifier mixin."""

from __future__ import annotations

from typing import NamedTuple

from dollarmark.parsing.charsets import DIGITS, UNORDERED_LIST_MARKERS


class ListMarker(NamedTuple):
    """A recognized list item marker.

    Attributes:
        marker: Marker text without padding ("-", "*", "+", "1.", "3)")
        content_offset: Column where item content starts, relative to the line
        first_line: Content of the marker line after the padding
        empty: True when nothing follows the marker on its line

    """

    marker: str
    content_offset: int
    first_line: str
    empty: bool

    @property
    def ordered(self) -> bool:
        return self.marker[0] in DIGITS

    @property
    def start(self) -> int:
        return int(self.marker[:-1]) if self.ordered else 1


class ListClassifierMixin:
    """Mixin providing list marker classification."""

    def _try_classify_list_marker(self, content: str, indent: int = 0) -> ListMarker | None:
        """Try to classify content as a list item marker.

        Bullets are ``-``, ``*`` and ``+``; ordered markers are 1-9 digits
        followed by ``.`` or ``)``. The marker must be followed by whitespace
        or the end of the line.

        Args:
            content: Line content with leading whitespace stripped
            indent: Columns of indentation before the marker

        Returns:
            ListMarker if the line starts a list item, None otherwise.
        """
        if not content:
            return None

        if content[0] in UNORDERED_LIST_MARKERS:
            marker_len = 1
        elif content[0] in DIGITS:
            pos = 0
            while pos < len(content) and content[pos] in DIGITS:
                pos += 1
            if pos > 9 or pos >= len(content) or content[pos] not in ".)":
                return None
            marker_len = pos + 1
        else:
            return None

        marker = content[:marker_len]
        rest = content[marker_len:]
        if rest and rest[0] not in " \t":
            return None

        if not rest.strip():
            return ListMarker(marker, indent + marker_len + 1, "", True)

        if rest[0] == "\t":
            return ListMarker(marker, indent + marker_len + 1, rest[1:], False)

        spaces = len(rest) - len(rest.lstrip(" "))
        # Five or more spaces: content is indented code-like text, padding is one space
        padding = spaces if spaces <= 4 else 1
        return ListMarker(marker, indent + marker_len + padding, rest[padding:], False)
