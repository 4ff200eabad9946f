"""Exception classes for dollarmark.

Tokenization itself never raises: unmatched delimiters fall back to text and
unterminated fences run to the end of their scope. These exceptions mark
contract violations at the API seams.
"""

from __future__ import annotations


class DollarmarkError(Exception):
    """Base exception for all dollarmark errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(DollarmarkError):
    """Error during Markdown parsing.

    Raised when the parser is handed input it cannot accept at all,
    for example a source that is not a string.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class SerializeError(DollarmarkError):
    """Error while serializing an AST back to Markdown.

    Raised for nodes the serializer does not know, or math nodes whose
    value is not a string.
    """

    def __init__(self, node_type: str, message: str) -> None:
        self.node_type = node_type
        super().__init__(f"Cannot serialize {node_type}: {message}")


class PluginError(DollarmarkError, KeyError):
    """Error in plugin lookup or initialization.

    Also a KeyError so registry lookups can be handled dict-style.
    """

    def __init__(self, plugin_name: str, message: str) -> None:
        """Initialize plugin error.

        Args:
            plugin_name: Name of the failing plugin
            message: Description of the error
        """
        self.plugin_name = plugin_name
        self.message = f"Plugin '{plugin_name}': {message}"
        super().__init__(self.message)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.message
