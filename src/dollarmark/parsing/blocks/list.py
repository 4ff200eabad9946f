"""List parsing for the dollarmark parser.

The lexer emits one LIST_ITEM token per item with the marker and the
de-indented item content. This mixin groups consecutive compatible items
into a List and decides whether the list is tight or loose.

Two items are compatible when they share the bullet character, or for
ordered lists, the delimiter ("." or ")").
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dollarmark.nodes import Block, List, ListItem
from dollarmark.parsing.charsets import DIGITS
from dollarmark.tokens import Token, TokenType

if TYPE_CHECKING:
    from dollarmark.location import SourceLocation


def split_item_value(value: str) -> tuple[str, str]:
    """Split a LIST_ITEM token value into (marker, content)."""
    marker, _, content = value.partition(":")
    return marker, content


def list_marker_kind(marker: str) -> str:
    """Return the character that decides list compatibility.

    Example:
        >>> list_marker_kind("-")
        '-'
        >>> list_marker_kind("12)")
        ')'
    """
    if marker[0] in DIGITS:
        return marker[-1]
    return marker


class ListParsingMixin:
    """Mixin for list parsing.

    Required Host Attributes:
        - _tokens: list[Token]
        - _pos: int
        - _current: Token | None

    Required Host Methods:
        - _at_end() -> bool
        - _advance() -> Token | None
        - _parse_item_content(content, location) -> tuple[tuple[Block, ...], bool]

    """

    _tokens: list[Token]
    _pos: int
    _current: Token | None

    def _parse_item_content(
        self, content: str, location: SourceLocation
    ) -> tuple[tuple[Block, ...], bool]:
        raise NotImplementedError

    def _parse_list(self) -> List:
        """Parse consecutive compatible list items into a List.

        A list is loose when a blank line separates two of its items or two
        direct children of one item.
        """
        first = self._current
        assert first is not None and first.type == TokenType.LIST_ITEM

        first_marker, _ = split_item_value(first.value)
        kind = list_marker_kind(first_marker)
        ordered = first_marker[0] in DIGITS
        start = int(first_marker[:-1]) if ordered else 1

        items: list[ListItem] = []
        last = first
        loose = False

        while not self._at_end():
            token = self._current
            assert token is not None
            if token.type != TokenType.LIST_ITEM:
                break
            marker, content = split_item_value(token.value)
            if list_marker_kind(marker) != kind:
                break

            children, item_loose = self._parse_item_content(content, token.location)
            loose = loose or item_loose
            items.append(ListItem(location=token.location, children=children))
            last = token
            self._advance()

            # Blank lines count toward looseness only if another item follows
            blank_start = self._pos
            saw_blank = False
            while self._current is not None and self._current.type == TokenType.BLANK_LINE:
                saw_blank = True
                self._advance()

            following = self._current
            if (
                following is not None
                and following.type == TokenType.LIST_ITEM
                and list_marker_kind(split_item_value(following.value)[0]) == kind
            ):
                loose = loose or saw_blank
                continue

            self._pos = blank_start
            self._current = self._tokens[blank_start] if blank_start < len(self._tokens) else None
            break

        return List(
            location=first.location.through(last.location),
            items=tuple(items),
            ordered=ordered,
            start=start,
            tight=not loose,
            marker=kind,
        )
