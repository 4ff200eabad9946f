"""Text utilities shared by the renderers."""

from __future__ import annotations


def longest_run(text: str, char: str) -> int:
    """Length of the longest run of ``char`` in ``text``.

    Used to pick fences and code-span delimiters that cannot collide
    with the content they wrap.

    Examples:
        >>> longest_run("a``b```c", "`")
        3
        >>> longest_run("abc", "$")
        0
    """
    best = 0
    current = 0
    for c in text:
        if c == char:
            current += 1
            if current > best:
                best = current
        else:
            current = 0
    return best
