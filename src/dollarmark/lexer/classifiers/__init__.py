"""Block-level content classifiers for the dollarmark lexer.

Each classifier is a mixin that provides classification logic for
a specific block type. Classifiers decide whether a line matches a block
pattern; scanners own position changes.
"""

from dollarmark.lexer.classifiers.fence import FenceClassifierMixin
from dollarmark.lexer.classifiers.list import ListClassifierMixin, ListMarker
from dollarmark.lexer.classifiers.quote import QuoteClassifierMixin

__all__ = [
    "FenceClassifierMixin",
    "ListClassifierMixin",
    "ListMarker",
    "QuoteClassifierMixin",
]
