"""Math inside block quotes and lists.

Container content reaches a sub-parser with its prefixes stripped, so math
inside a container must behave exactly like math at the top level.
"""

from dollarmark import parse
from dollarmark.nodes import BlockQuote, InlineMath, List, ListItem, Math, Paragraph


class TestBlockQuote:
    """Math inside > quotes."""

    def test_fence_in_quote(self) -> None:
        """A quoted fence becomes a Math child of the quote."""
        (quote,) = parse("> $$\n> \\alpha\\beta\n> $$").children
        assert isinstance(quote, BlockQuote)
        (math,) = quote.children
        assert isinstance(math, Math)
        assert math.value == "\\alpha\\beta"

    def test_paragraph_then_fence(self) -> None:
        """A quoted fence interrupts a quoted paragraph."""
        (quote,) = parse("> a\n> $$\n> x\n> $$").children
        assert [type(b) for b in quote.children] == [Paragraph, Math]

    def test_inline_math_in_quote(self) -> None:
        """Inline math works inside quoted paragraphs."""
        (quote,) = parse("> $x$").children
        (para,) = quote.children
        assert isinstance(para.children[0], InlineMath)

    def test_unterminated_fence_closes_with_quote(self) -> None:
        """An unterminated fence ends where the quote ends."""
        children = parse("> $$\n> x\n\nafter").children
        assert [type(b) for b in children] == [BlockQuote, Paragraph]
        (math,) = children[0].children
        assert math.value == "x"

    def test_nested_quote(self) -> None:
        """Math two quote levels deep."""
        (outer,) = parse("> > $$\n> > y\n> > $$").children
        (inner,) = outer.children
        assert isinstance(inner, BlockQuote)
        assert inner.children[0].value == "y"


class TestList:
    """Math inside list items."""

    def test_fence_in_item(self) -> None:
        """A fence at the item's content column belongs to the item."""
        (lst,) = parse("- $$\n  \\alpha\n  $$").children
        assert isinstance(lst, List)
        (item,) = lst.items
        assert isinstance(item, ListItem)
        (math,) = item.children
        assert isinstance(math, Math)
        assert math.value == "\\alpha"

    def test_fence_in_ordered_item(self) -> None:
        """Ordered items use their own content offset."""
        (lst,) = parse("1. a\n2. $$\n   x\n   $$").children
        assert lst.ordered is True
        assert len(lst.items) == 2
        assert lst.items[1].children[0].value == "x"

    def test_quote_in_item(self) -> None:
        """Math in a quote in a list item."""
        (lst,) = parse("- > $$\n  > x\n  > $$").children
        (quote,) = lst.items[0].children
        assert isinstance(quote, BlockQuote)
        assert quote.children[0].value == "x"

    def test_inline_math_in_item(self) -> None:
        """Inline math inside a list item paragraph."""
        (lst,) = parse("- $x$ and $y$").children
        (para,) = lst.items[0].children
        values = [c.value for c in para.children if isinstance(c, InlineMath)]
        assert values == ["x", "y"]

    def test_fence_with_blank_line_in_item(self) -> None:
        """A blank line inside an item's fence is math content."""
        (lst,) = parse("- $$\n  a\n\n  b\n  $$").children
        assert lst.items[0].children[0].value == "a\n\nb"


class TestListShape:
    """Tight and loose lists, markers and starts."""

    def test_tight(self) -> None:
        """Items on consecutive lines form a tight list."""
        (lst,) = parse("- a\n- b").children
        assert lst.tight is True
        assert lst.marker == "-"
        assert len(lst.items) == 2

    def test_loose(self) -> None:
        """A blank line between items makes the list loose."""
        (lst,) = parse("- a\n\n- b").children
        assert lst.tight is False

    def test_loose_inside_item(self) -> None:
        """A blank line between blocks of one item makes the list loose."""
        (lst,) = parse("- a\n\n  b\n- c").children
        assert lst.tight is False
        assert len(lst.items[0].children) == 2

    def test_ordered_start(self) -> None:
        """Ordered lists keep their start number and delimiter."""
        (lst,) = parse("3) a\n4) b").children
        assert lst.ordered is True
        assert lst.start == 3
        assert lst.marker == ")"

    def test_marker_change_starts_new_list(self) -> None:
        """Switching bullet characters starts a new list."""
        children = parse("- a\n* b").children
        assert [type(b) for b in children] == [List, List]

    def test_trailing_blank_does_not_loosen(self) -> None:
        """A blank line after the last item leaves the list tight."""
        children = parse("- a\n- b\n\nafter").children
        assert [type(b) for b in children] == [List, Paragraph]
        assert children[0].tight is True
