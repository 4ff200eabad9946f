"""Thread safety tests.

Configuration lives in a ContextVar and the AST is immutable, so parsers
with different settings must not interfere when run concurrently.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed

from dollarmark import Markdown, parse, serialize
from dollarmark.nodes import InlineMath, Text
from dollarmark.renderers.html import HtmlRenderer


class TestConcurrentParsing:
    """Concurrent parses with differing configs."""

    def test_math_on_and_off(self) -> None:
        """Threads with and without math each see their own config."""
        with_math = Markdown(plugins=["math"])
        without_math = Markdown()

        def work(index: int) -> tuple[bool, type]:
            md = with_math if index % 2 == 0 else without_math
            (para,) = md.parse(f"$x_{index}$").children
            return index % 2 == 0, type(para.children[0])

        with ThreadPoolExecutor(max_workers=8) as executor:
            futures = [executor.submit(work, i) for i in range(64)]
            for future in as_completed(futures):
                math_on, node_type = future.result()
                assert node_type is (InlineMath if math_on else Text)

    def test_inline_math_double_isolated(self) -> None:
        """The render-hint option does not leak between threads."""

        def work(flag: bool) -> tuple[bool, str]:
            (para,) = parse("a $$x$$ b", inline_math_double=flag).children
            return flag, para.children[1].render_hint.properties["class"]

        with ThreadPoolExecutor(max_workers=4) as executor:
            results = list(executor.map(work, [True, False] * 20))

        for flag, css_class in results:
            assert css_class == ("math inlineMathDouble" if flag else "math")

    def test_shared_renderer(self) -> None:
        """One renderer instance serves many threads."""
        renderer = HtmlRenderer()
        sources = [f"$$\n{i}\n$$" for i in range(32)]

        def work(source: str) -> str:
            return renderer.render(parse(source))

        with ThreadPoolExecutor(max_workers=8) as executor:
            outputs = list(executor.map(work, sources))

        assert outputs == [f'<div class="math">{i}</div>\n' for i in range(32)]

    def test_concurrent_serialize(self) -> None:
        """Serialization is stateless."""
        sources = [f"> $${i}$$\n\n- ${i}$" for i in range(32)]

        with ThreadPoolExecutor(max_workers=8) as executor:
            outputs = list(executor.map(lambda s: serialize(parse(s)), sources))

        assert outputs == [f"> $$\n> {i}\n> $$\n\n- ${i}$\n" for i in range(32)]
