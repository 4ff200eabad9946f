"""Modular state-machine lexer for dollarmark.

This package provides a window-based lexer for block structure.
The lexer scans entire lines, classifies them, then commits position.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, LexerMode
├── core.py              # Lexer class (mixin composition + navigation)
├── modes.py             # LexerMode enum
├── classifiers/         # Block-type classification mixins
│   ├── fence.py         # Code and $$ math fences
│   ├── quote.py         # Block quote prefix
│   └── list.py          # List markers
└── scanners/            # Mode-specific scanners
    ├── block.py         # Block mode (main dispatch)
    ├── container.py     # Block quote / list item collection
    └── fence.py         # Code and math fence modes

"""

from dollarmark.lexer.core import Lexer
from dollarmark.lexer.modes import LexerMode

__all__ = ["Lexer", "LexerMode"]
