"""Block quote classifier mixin."""


class QuoteClassifierMixin:
    """Mixin providing block quote line classification."""

    def _calc_indent(self, line: str) -> tuple[int, int]:
        """Calculate indent level. Implemented by Lexer."""
        raise NotImplementedError

    def _strip_quote_marker(self, line: str) -> str | None:
        """Strip the block quote prefix from a full line.

        The ``>`` may be indented 0-3 spaces and one following space or tab
        belongs to the marker.

        Args:
            line: Full line content including leading whitespace

        Returns:
            The de-prefixed content, or None if the line is not a quote line.
        """
        indent, content_start = self._calc_indent(line)
        if indent >= 4 or content_start >= len(line) or line[content_start] != ">":
            return None

        rest = line[content_start + 1 :]
        if rest and rest[0] in " \t":
            rest = rest[1:]
        return rest
