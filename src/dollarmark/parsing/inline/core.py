"""Core inline parsing for the dollarmark parser.

Provides the inline tokenization loop, the host tokenizers (escapes,
code spans, line endings) and AST building.

Thread Safety:
All methods are stateless or use instance-local state only.
Safe for concurrent use when each parser instance is used by one thread.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dollarmark.nodes import CodeSpan, Inline, LineBreak, SoftBreak, Text
from dollarmark.parsing.charsets import ASCII_PUNCTUATION, INLINE_SPECIAL
from dollarmark.parsing.inline.dispatch import InlineHandler, build_handlers
from dollarmark.parsing.inline.tokens import (
    CodeSpanToken,
    HardBreakToken,
    InlineToken,
    NodeToken,
    SoftBreakToken,
    TextToken,
)

if TYPE_CHECKING:
    from dollarmark.location import SourceLocation


class InlineParsingCoreMixin:
    """Core inline parsing methods.

    Required Host Attributes:
        - _math_enabled: bool
        - _inline_handlers: dict[str, tuple[InlineHandler, ...]] | None

    Required Host Methods (from other mixins):
        - _try_parse_math(text, pos, location) -> tuple | None

    """

    _inline_handlers: dict[str, tuple[InlineHandler, ...]] | None

    def _parse_inline(self, text: str, location: SourceLocation) -> tuple[Inline, ...]:
        """Parse inline content into inline nodes."""
        if not text:
            return ()

        tokens = self._tokenize_inline(text, location)
        return self._build_inline_ast(tokens, location)

    def _tokenize_inline(self, text: str, location: SourceLocation) -> list[InlineToken]:
        """Tokenize inline content into typed token objects.

        Walks the text left to right. At a special character the registered
        tokenizers are tried in order; runs of ordinary characters become
        text tokens directly.
        """
        if self._inline_handlers is None:
            self._inline_handlers = build_handlers(self)
        handlers = self._inline_handlers

        tokens: list[InlineToken] = []
        tokens_append = tokens.append
        pos = 0
        text_len = len(text)

        while pos < text_len:
            char = text[pos]

            if char in INLINE_SPECIAL:
                claimed = None
                for handler in handlers.get(char, ()):
                    claimed = handler(text, pos, location)
                    if claimed is not None:
                        break

                if claimed is None:
                    tokens_append(TextToken(content=char))
                    pos += 1
                    continue

                token, pos = claimed
                if isinstance(token, (HardBreakToken, SoftBreakToken)):
                    self._strip_trailing_spaces(tokens)
                tokens_append(token)
                continue

            text_start = pos
            while pos < text_len and text[pos] not in INLINE_SPECIAL:
                pos += 1
            tokens_append(TextToken(content=text[text_start:pos]))

        return tokens

    def _strip_trailing_spaces(self, tokens: list[InlineToken]) -> None:
        """Drop spaces before a line ending from the preceding text token."""
        if not tokens:
            return
        last = tokens[-1]
        if isinstance(last, TextToken) and not last.escaped:
            content = last.content.rstrip(" ")
            if content:
                tokens[-1] = TextToken(content=content)
            else:
                tokens.pop()

    # =========================================================================
    # Host tokenizers
    # =========================================================================

    def _try_parse_escape(
        self, text: str, pos: int, location: SourceLocation
    ) -> tuple[InlineToken, int] | None:
        """Backslash escape or backslash hard break.

        Declines a backslash before anything but punctuation or a newline;
        that backslash is literal.
        """
        if pos + 1 >= len(text):
            return None
        next_char = text[pos + 1]
        if next_char == "\n":
            return HardBreakToken(), self._skip_line_indent(text, pos + 2)
        if next_char in ASCII_PUNCTUATION:
            return TextToken(content=next_char, escaped=True), pos + 2
        return None

    def _try_parse_code_span(
        self, text: str, pos: int, location: SourceLocation
    ) -> tuple[InlineToken, int] | None:
        """Code span. An unmatched backtick run is claimed as literal text."""
        text_len = len(text)
        end = pos
        while end < text_len and text[end] == "`":
            end += 1
        count = end - pos

        close_pos = self._find_code_span_close(text, end, count)
        if close_pos == -1:
            return TextToken(content="`" * count), end

        code = text[end:close_pos].replace("\n", " ")
        # Strip one space from each end if both present, unless all spaces
        if len(code) >= 2 and code[0] == " " and code[-1] == " " and code.strip():
            code = code[1:-1]
        return CodeSpanToken(code=code), close_pos + count

    def _try_parse_line_ending(
        self, text: str, pos: int, location: SourceLocation
    ) -> tuple[InlineToken, int] | None:
        """Soft break, or hard break after two or more trailing spaces."""
        space_count = 0
        check_pos = pos - 1
        while check_pos >= 0 and text[check_pos] == " ":
            space_count += 1
            check_pos -= 1

        new_pos = self._skip_line_indent(text, pos + 1)
        if space_count >= 2:
            return HardBreakToken(), new_pos
        return SoftBreakToken(), new_pos

    def _skip_line_indent(self, text: str, pos: int) -> int:
        """Skip leading spaces on a continuation line."""
        text_len = len(text)
        while pos < text_len and text[pos] in " \t":
            pos += 1
        return pos

    def _find_code_span_close(self, text: str, start: int, backtick_count: int) -> int:
        """Find closing backticks for code span.

        Returns:
            Position of the closing run, or -1 if there is none.
        """
        pos = start
        text_len = len(text)
        while True:
            idx = text.find("`", pos)
            if idx == -1:
                return -1
            count = 0
            check_pos = idx
            while check_pos < text_len and text[check_pos] == "`":
                count += 1
                check_pos += 1
            if count == backtick_count:
                return idx
            pos = check_pos

    # =========================================================================
    # AST building
    # =========================================================================

    def _build_inline_ast(
        self, tokens: list[InlineToken], location: SourceLocation
    ) -> tuple[Inline, ...]:
        """Build AST from tokens.

        Adjacent text merges into one Text node, except that ordinary text
        right after an escape starts a new node. Escaped text always joins
        the text before it.
        """
        result: list[Inline] = []
        parts: list[str] = []
        after_escape = False

        def flush_text() -> None:
            if parts:
                result.append(Text(location=location, content="".join(parts)))
                parts.clear()

        for token in tokens:
            match token:
                case TextToken(content=content, escaped=True):
                    parts.append(content)
                    after_escape = True
                    continue

                case TextToken(content=content):
                    if after_escape:
                        flush_text()
                    parts.append(content)

                case CodeSpanToken(code=code):
                    flush_text()
                    result.append(CodeSpan(location=location, code=code))

                case NodeToken(node=node):
                    flush_text()
                    result.append(node)  # type: ignore[arg-type]

                case HardBreakToken():
                    flush_text()
                    result.append(LineBreak(location=location))

                case SoftBreakToken():
                    flush_text()
                    result.append(SoftBreak(location=location))

            after_escape = False

        flush_text()
        return tuple(result)
