"""Utility modules for dollarmark.

Provides:
- text: longest_run for picking fences
- logger: get_logger for logging
"""

from dollarmark.utils.logger import get_logger
from dollarmark.utils.text import longest_run

__all__ = [
    "get_logger",
    "longest_run",
]
