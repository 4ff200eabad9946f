"""Parsing subsystem for the dollarmark Markdown parser.

Provides mixin classes for modular parsing functionality:
- `TokenNavigationMixin`: Token stream traversal
- `InlineParsingMixin`: Inline content (escapes, code spans, math)
- `BlockParsingMixin`: Block-level content (paragraphs, fences, containers)

Example:
    >>> from dollarmark.parsing import (
    ...     TokenNavigationMixin,
    ...     InlineParsingMixin,
    ...     BlockParsingMixin,
    ... )
    >>> class Parser(TokenNavigationMixin, InlineParsingMixin, BlockParsingMixin):
    ...     pass

"""

from dollarmark.parsing.blocks import BlockParsingMixin
from dollarmark.parsing.inline import InlineParsingMixin
from dollarmark.parsing.token_nav import TokenNavigationMixin

__all__ = [
    "TokenNavigationMixin",
    "InlineParsingMixin",
    "BlockParsingMixin",
]
