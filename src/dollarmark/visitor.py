"""Bottom-up rewriting of frozen dollarmark trees.

``annotate_tree`` uses ``transform`` to attach render hints to math nodes.
It is exported for callers that rewrite math the same way, for example to
trim display math values:

    def trim_math(node: Node) -> Node:
        if isinstance(node, Math):
            return dataclasses.replace(node, value=node.value.strip())
        return node

    new_doc = transform(doc, trim_math)

Render hint children are not visited: they mirror the math value and are
rebuilt by ``annotate``.

Thread Safety:
    Pure function over frozen nodes. Safe to call from any thread.

"""

import dataclasses
from collections.abc import Callable
from typing import TypeAlias

from dollarmark.nodes import BlockQuote, Document, List, ListItem, Node, Paragraph

Rewrite: TypeAlias = Callable[[Node], Node | None]

# Node type -> the field holding its child nodes
_CHILD_FIELDS: dict[type[Node], str] = {
    Document: "children",
    Paragraph: "children",
    BlockQuote: "children",
    ListItem: "children",
    List: "items",
}


def transform(doc: Document, fn: Rewrite) -> Document:
    """Rewrite every node of a document, children before their parent.

    ``fn`` returns the node to keep, a replacement, or None to drop it. A
    parent is copied only when one of its children changed, so a rewrite
    that changes nothing returns ``doc`` itself.

    Raises:
        TypeError: If fn drops the Document or replaces it with another type
    """
    result = _rewrite(doc, fn)
    if not isinstance(result, Document):
        msg = "transform fn must return a Document for the root"
        raise TypeError(msg)
    return result


def _rewrite(node: Node, fn: Rewrite) -> Node | None:
    field = _CHILD_FIELDS.get(type(node))
    if field is not None:
        children: tuple[Node, ...] = getattr(node, field)
        kept = tuple(new for child in children if (new := _rewrite(child, fn)) is not None)
        if len(kept) != len(children) or any(
            new is not old for new, old in zip(kept, children, strict=True)
        ):
            node = dataclasses.replace(node, **{field: kept})
    return fn(node)


__all__ = ["Rewrite", "transform"]
