"""Mode-specific scanners for the dollarmark lexer.

Each scanner is a mixin that provides scanning logic for a specific
lexer mode (BLOCK, CODE_FENCE, MATH_FENCE), plus the container scanner
that BLOCK mode delegates block quotes and list items to.
"""

from __future__ import annotations

from dollarmark.lexer.scanners.block import BlockScannerMixin
from dollarmark.lexer.scanners.container import ContainerScannerMixin
from dollarmark.lexer.scanners.fence import FenceScannerMixin

__all__ = [
    "BlockScannerMixin",
    "ContainerScannerMixin",
    "FenceScannerMixin",
]
