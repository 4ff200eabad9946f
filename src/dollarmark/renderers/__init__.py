"""dollarmark renderers.

Renderers convert typed AST nodes into output formats.

Available Renderers:
- HtmlRenderer: Renders AST to HTML, wrapping math per its render hint
- MarkdownRenderer: Serializes AST back to Markdown with fenced math

Thread Safety:
All renderers use StringBuilder local to each render() call.
Safe for concurrent use from multiple threads.

"""

from dollarmark.renderers.html import HtmlRenderer
from dollarmark.renderers.markdown import MarkdownRenderer, render_markdown, serialize
from dollarmark.renderers.protocol import ASTRenderer

__all__ = ["ASTRenderer", "HtmlRenderer", "MarkdownRenderer", "render_markdown", "serialize"]
