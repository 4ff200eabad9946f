"""Ordered inline tokenizer dispatch table.

At each position of the inline stream the parser looks up the tokenizers
registered for the current character and tries them in registration
order. A tokenizer either claims a range (returning a token and the
position after it) or declines (returning None). The first claim wins;
when every tokenizer declines the character is literal text.

Precedence falls out of the left-to-right scan: whichever construct's
opening delimiter comes first claims its range, so a code span that opens
before a ``$`` hides that dollar, and a math span that opens first keeps
its backticks as content. The one exception is a single-dollar math span
whose closing dollar sits inside a code span that opened after the math
opener: the code span claims that dollar and the math opener becomes
literal text. See ``MathInlineMixin._try_parse_math``.
"""

from __future__ import annotations

from typing import TypeAlias

from collections.abc import Callable
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from dollarmark.location import SourceLocation
    from dollarmark.parsing.inline.tokens import InlineToken

InlineHandler: TypeAlias = Callable[[str, int, "SourceLocation"], tuple["InlineToken", int] | None]


class InlineTokenizer(NamedTuple):
    """One registered inline tokenizer.

    Attributes:
        name: Identifier used in logs and tests
        trigger: Character that activates the tokenizer
        method: Name of the parser method implementing it
        flag: Name of the parser property that must be true for the
            tokenizer to run, or None if always active

    """

    name: str
    trigger: str
    method: str
    flag: str | None = None


INLINE_DISPATCH: tuple[InlineTokenizer, ...] = (
    InlineTokenizer("escape", "\\", "_try_parse_escape"),
    InlineTokenizer("code_span", "`", "_try_parse_code_span"),
    InlineTokenizer("math", "$", "_try_parse_math", "_math_enabled"),
    InlineTokenizer("line_ending", "\n", "_try_parse_line_ending"),
)


def build_handlers(host: object) -> dict[str, tuple[InlineHandler, ...]]:
    """Bind the active tokenizers of a parser, grouped by trigger character.

    Args:
        host: Parser instance providing the tokenizer methods and flags

    Returns:
        Mapping of trigger character to bound handlers in registration order.
    """
    handlers: dict[str, list[InlineHandler]] = {}
    for entry in INLINE_DISPATCH:
        if entry.flag is not None and not getattr(host, entry.flag):
            continue
        handlers.setdefault(entry.trigger, []).append(getattr(host, entry.method))
    return {char: tuple(bound) for char, bound in handlers.items()}


__all__ = ["INLINE_DISPATCH", "InlineHandler", "InlineTokenizer", "build_handlers"]
