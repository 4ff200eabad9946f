"""Positions of AST nodes in the parsed buffer.

Thread Safety:
SourceLocation is frozen and safe to share across threads.

"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Start position and buffer span of a node.

    ``lineno`` and ``col_offset`` are 1-indexed. Nodes from a block quote or
    list item sub-parse are positioned within the de-prefixed container
    content, not the original document.

    Example:
        >>> str(SourceLocation(3, 5, source_file="notes.md"))
        'notes.md:3:5'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    def through(self, end: SourceLocation) -> SourceLocation:
        """This location stretched to cover ``end`` as well."""
        return dataclasses.replace(self, end_offset=max(end.offset, end.end_offset))
