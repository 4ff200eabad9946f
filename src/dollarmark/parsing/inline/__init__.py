"""Inline parsing subsystem for the dollarmark parser.

Provides:
- InlineParsingCoreMixin: tokenization loop, escapes, code spans, line endings
- MathInlineMixin: ``$...$`` and one-line ``$$...$$`` math
- delimiters: live-dollar and run-length scanning shared with the lexer
- dispatch: ordered tokenizer table keyed by trigger character

"""

from dollarmark.parsing.inline.core import InlineParsingCoreMixin
from dollarmark.parsing.inline.math import MathInlineMixin


class InlineParsingMixin(
    InlineParsingCoreMixin,
    MathInlineMixin,
):
    """Combined inline parsing mixin."""

    pass


__all__ = [
    "InlineParsingCoreMixin",
    "InlineParsingMixin",
    "MathInlineMixin",
]
