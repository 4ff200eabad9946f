"""Lexer operating modes.

This module defines the finite state machine modes for the lexer.
"""

from __future__ import annotations

from enum import Enum, auto


class LexerMode(Enum):
    """Lexer operating modes.

    The lexer switches between modes based on context:
    - BLOCK: Between blocks, scanning for block starts
    - CODE_FENCE: Inside fenced code block
    - MATH_FENCE: Inside fenced $$ math block

    """

    BLOCK = auto()  # Between blocks
    CODE_FENCE = auto()  # Inside fenced code block
    MATH_FENCE = auto()  # Inside fenced math block
