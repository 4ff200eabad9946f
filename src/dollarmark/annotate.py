"""Render-hint annotation for math nodes.

Attaches to every ``Math`` and ``InlineMath`` node the element a downstream
HTML compiler should wrap it in, so the compiler does not have to know about
math at all:

    Math        -> <div class="math">value</div>
    InlineMath  -> <span class="inlineMath">value</span>

The hint's children are a single literal Text holding the node value. Math
content is opaque and is never parsed as Markdown.

Example:
    >>> node = annotate(InlineMath(location=loc, value="x"))
    >>> node.render_hint.as_dict()
    {'tag': 'span', 'attributes': {'class': 'inlineMath'},
     'children': [{'type': 'text', 'value': 'x'}]}

Thread Safety:
    Pure functions over frozen nodes. Safe to call from any thread.

"""

from __future__ import annotations

import dataclasses

from dollarmark.config import get_parse_config
from dollarmark.nodes import Document, InlineMath, Math, Node, RenderHint, Text
from dollarmark.visitor import transform

MATH_TAG = "div"
MATH_CLASS = "math"
INLINE_MATH_TAG = "span"
INLINE_MATH_CLASS = "inlineMath"
INLINE_MATH_DOUBLE_CLASS = "inlineMathDouble"


def render_hint_for(node: Math | InlineMath, *, inline_math_double: bool = False) -> RenderHint:
    """Build the render hint for a math node.

    Args:
        node: Math or InlineMath node
        inline_math_double: Add the ``inlineMathDouble`` class to one-line
            ``$$...$$`` math written inside a paragraph

    Returns:
        RenderHint with a single literal Text child.
    """
    child = Text(location=node.location, content=node.value)
    if isinstance(node, InlineMath):
        return RenderHint(
            tag=INLINE_MATH_TAG,
            attributes=(("class", INLINE_MATH_CLASS),),
            children=(child,),
        )

    css_class = MATH_CLASS
    if node.inline and inline_math_double:
        css_class = f"{MATH_CLASS} {INLINE_MATH_DOUBLE_CLASS}"
    return RenderHint(tag=MATH_TAG, attributes=(("class", css_class),), children=(child,))


def annotate(node: Node, *, inline_math_double: bool | None = None) -> Node:
    """Return node with its render hint set, or node itself if not math.

    Args:
        node: Any AST node
        inline_math_double: Override ``ParseConfig.inline_math_double``;
            None reads the current configuration

    Returns:
        A copy of a Math/InlineMath node carrying its render hint. Every
        other node is returned unchanged.
    """
    if not isinstance(node, (Math, InlineMath)):
        return node
    if inline_math_double is None:
        inline_math_double = get_parse_config().inline_math_double
    hint = render_hint_for(node, inline_math_double=inline_math_double)
    if node.render_hint == hint:
        return node
    return dataclasses.replace(node, render_hint=hint)


def annotate_tree(doc: Document, *, inline_math_double: bool | None = None) -> Document:
    """Annotate every math node in a document, bottom-up."""
    if inline_math_double is None:
        inline_math_double = get_parse_config().inline_math_double
    return transform(doc, lambda node: annotate(node, inline_math_double=inline_math_double))


__all__ = [
    "INLINE_MATH_CLASS",
    "INLINE_MATH_DOUBLE_CLASS",
    "MATH_CLASS",
    "annotate",
    "annotate_tree",
    "render_hint_for",
]
