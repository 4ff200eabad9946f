"""Math plugin for dollarmark.

Adds support for dollar-delimited math.

Usage:
    >>> md = Markdown(plugins=["math"])
    >>> md("Inline: $E = mc^2$")
    '<p>Inline: <span class="inlineMath">E = mc^2</span></p>\\n'
    >>> md("$$\\nE = mc^2\\n$$")
    '<div class="math">E = mc^2</div>\\n'

Syntax:
Inline math: $expression$
One-line display math: $$expression$$ inside a paragraph
Block math: a $$ fence line, content lines, a closing $$ fence line

Escaping:
- ``\\$`` for literal dollar sign
- Inside code spans, $ is literal

Thread Safety:
This plugin is stateless and thread-safe.

"""

from __future__ import annotations

import dataclasses

from dollarmark.config import ParseConfig
from dollarmark.plugins import register_plugin


@register_plugin("math")
class MathPlugin:
    """Plugin adding $math$ and $$math$$ support.

    Options mirror the render-hint configuration: ``inline_math_double``
    adds the ``inlineMathDouble`` class to one-line $$ math.

    """

    __slots__ = ("_inline_math_double",)

    def __init__(self, *, inline_math_double: bool = False) -> None:
        self._inline_math_double = inline_math_double

    @property
    def name(self) -> str:
        return "math"

    def configure(self, config: ParseConfig) -> ParseConfig:
        """Enable math recognition."""
        return dataclasses.replace(
            config,
            math_enabled=True,
            inline_math_double=config.inline_math_double or self._inline_math_double,
        )
