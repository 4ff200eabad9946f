"""Block parsing subsystem for the dollarmark parser.

Provides mixins for parsing block-level Markdown content:
- Paragraphs
- Fenced code blocks
- Fenced ``$$`` math blocks
- Block quotes
- Lists (ordered and unordered)

Architecture:
Block parsing is split into logical modules:
- core: Block dispatch and basic blocks
- math: Math fence assembly
- list: Item grouping and tight/loose detection

"""

from dollarmark.parsing.blocks.core import BlockParsingCoreMixin
from dollarmark.parsing.blocks.list import ListParsingMixin
from dollarmark.parsing.blocks.math import MathBlockParsingMixin


class BlockParsingMixin(
    BlockParsingCoreMixin,
    ListParsingMixin,
    MathBlockParsingMixin,
):
    """Combined block parsing mixin.

    Combines all block parsing functionality into a single mixin
    that can be inherited by the Parser class.

    Required Host Attributes:
        - _tokens: list[Token]
        - _pos: int
        - _current: Token | None

    Required Host Methods:
        - _at_end() -> bool
        - _advance() -> Token | None
        - _parse_inline(text, location) -> tuple[Inline, ...]
        - _parse_nested_content(content, location) -> tuple[Block, ...]
        - _parse_item_content(content, location) -> tuple[tuple[Block, ...], bool]

    """


__all__ = [
    "BlockParsingCoreMixin",
    "BlockParsingMixin",
    "ListParsingMixin",
    "MathBlockParsingMixin",
]
