"""Block tokens passed from the lexer to the parser.

The lexer classifies source lines; the parser groups them into blocks. Fence
starts encode the fence line as ``"I{indent}:{fence}{meta}"`` so the parser
can strip the same indentation from content lines. Container tokens carry
their content with the prefix already removed.

Thread Safety:
Token is frozen and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from dollarmark.location import SourceLocation


class TokenType(Enum):
    """What a lexed line (or line group) is."""

    EOF = auto()
    BLANK_LINE = auto()

    FENCED_CODE_START = auto()  # ``` or ~~~
    FENCED_CODE_CONTENT = auto()
    FENCED_CODE_END = auto()

    MATH_BLOCK_START = auto()  # $$ or longer
    MATH_BLOCK_CONTENT = auto()
    MATH_BLOCK_END = auto()

    BLOCK_QUOTE = auto()  # all quoted lines, "> " removed
    LIST_ITEM = auto()  # "{marker}:{content}", content de-indented

    PARAGRAPH_LINE = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A lexed line.

    Attributes:
        type: Line classification
        value: Line text, or the encoded form for fences and containers
        lineno: 1-indexed line of the first character
        col: 1-indexed column of the first character
        offset: Buffer offset where the token starts
        end_offset: Buffer offset where it ends
        line_indent: Leading indent in columns, tabs to 4; -1 if unmeasured
        source_file: Path given to the parser, if any

    """

    type: TokenType
    value: str
    lineno: int
    col: int
    offset: int
    end_offset: int
    line_indent: int = -1
    source_file: str | None = None

    @property
    def location(self) -> SourceLocation:
        return SourceLocation(
            lineno=self.lineno,
            col_offset=self.col,
            offset=self.offset,
            end_offset=self.end_offset,
            source_file=self.source_file,
        )

    def __repr__(self) -> str:
        val = self.value if len(self.value) <= 20 else self.value[:17] + "..."
        return f"Token({self.type.name}, {val!r}, {self.lineno}:{self.col})"
