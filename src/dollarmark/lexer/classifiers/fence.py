"""Fence classification for code and math blocks.

Both fence kinds share one piece of lexer state: the fence character, the
opening run length and the opening indentation. They differ in what opens
and closes them:

- Code fences open with three or more backticks or tildes, indented at most
  three columns. A backtick fence's info string may not contain a backtick.
  The closing run needs nothing but whitespace after it.
- Math fences open with two or more live dollars at any indentation, and
  the rest of the line may not contain a dollar: ``$$\\alpha$$`` alone on a
  line is a one-line span for the inline tokenizer. Text after either
  fence run is ignored.
"""

from dollarmark.lexer.modes import LexerMode
from dollarmark.parsing.charsets import FENCE_CHARS
from dollarmark.parsing.inline.delimiters import is_live_dollar, run_length
from dollarmark.tokens import Token, TokenType

MIN_CODE_FENCE = 3
MIN_MATH_FENCE = 2


class FenceClassifierMixin:
    """Mixin opening and closing code and math fences."""

    # These will be set by the Lexer class
    _fence_char: str
    _fence_count: int
    _fence_indent: int
    _mode: LexerMode

    def _make_token(
        self,
        token_type: TokenType,
        value: str,
        start_pos: int,
        *,
        start_col: int | None = None,
        end_pos: int | None = None,
        line_indent: int = -1,
    ) -> Token:
        raise NotImplementedError

    def _open_fence(
        self, mode: LexerMode, char: str, count: int, indent: int, meta: str, line_start: int
    ) -> Token:
        """Enter a fence mode and build its start token.

        The token value is ``"I{indent}:{fence}{meta}"``.
        """
        self._fence_char = char
        self._fence_count = count
        self._fence_indent = indent
        self._mode = mode
        token_type = (
            TokenType.MATH_BLOCK_START if mode is LexerMode.MATH_FENCE else TokenType.FENCED_CODE_START
        )
        value = f"I{indent}:{char * count}{meta}"
        return self._make_token(token_type, value, line_start, line_indent=indent)

    def _close_fence(self) -> str:
        """Leave fence mode, returning the opening fence run."""
        fence = self._fence_char * self._fence_count
        self._fence_char = ""
        self._fence_count = 0
        self._fence_indent = 0
        self._mode = LexerMode.BLOCK
        return fence

    def _try_classify_fence_start(
        self, content: str, line_start: int, indent: int = 0
    ) -> Token | None:
        """Open a code fence if content starts with one.

        Args:
            content: Line content with leading whitespace stripped
            line_start: Position in source where line starts
            indent: Indent in columns, stripped again from content lines
        """
        if not content or content[0] not in FENCE_CHARS:
            return None

        char = content[0]
        count = len(content) - len(content.lstrip(char))
        if count < MIN_CODE_FENCE:
            return None

        info = content[count:].strip()
        if char == "`" and "`" in info:
            return None
        return self._open_fence(LexerMode.CODE_FENCE, char, count, indent, info, line_start)

    def _try_classify_math_fence_start(
        self, content: str, line_start: int, indent_chars: int = 0
    ) -> Token | None:
        """Open a math fence if content starts with one.

        Args:
            content: Line content with leading whitespace stripped
            line_start: Position in source where line starts
            indent_chars: Leading whitespace characters on the line; exactly
                this many are stripped from each content line
        """
        if not content or not is_live_dollar(content, 0):
            return None

        count = run_length(content, 0)
        meta = content[count:]
        if count < MIN_MATH_FENCE or "$" in meta:
            return None
        return self._open_fence(
            LexerMode.MATH_FENCE, "$", count, indent_chars, meta.strip(), line_start
        )

    def _strip_fence_indent(self, line: str) -> str:
        """Strip up to the math fence's indentation, one character per tab."""
        limit = self._fence_indent
        pos = 0
        while pos < limit and pos < len(line) and line[pos] in " \t":
            pos += 1
        return line[pos:]

    def _closes_code_fence(self, line: str) -> bool:
        """Check a raw line against the open code fence."""
        content = line.lstrip(" ")
        if len(line) - len(content) >= 4:
            return False
        count = len(content) - len(content.lstrip(self._fence_char))
        return count >= self._fence_count and not content[count:].strip()

    def _closes_math_fence(self, stripped: str) -> bool:
        """Check a de-indented line against the open math fence."""
        return is_live_dollar(stripped, 0) and run_length(stripped, 0) >= self._fence_count
