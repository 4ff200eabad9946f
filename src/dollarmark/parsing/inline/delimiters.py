"""Dollar delimiter scanning.

Pure text inspection shared by the inline math tokenizer and the math
fence classifier. Nothing here builds nodes or moves a cursor.

A ``$`` is *live* when the run of backslashes right before it has even
length: ``\\\\$`` is a literal backslash followed by a live dollar, while
``\\$`` is an escaped, literal dollar.
"""

from __future__ import annotations


def is_live_dollar(text: str, pos: int) -> bool:
    """Check whether ``text[pos]`` is a dollar that can act as a delimiter.

    Examples:
        >>> is_live_dollar("$x$", 0)
        True
        >>> is_live_dollar("\\\\$x", 1)
        False
        >>> is_live_dollar("\\\\\\\\$x", 2)
        True
    """
    if pos < 0 or pos >= len(text) or text[pos] != "$":
        return False

    backslashes = 0
    check = pos - 1
    while check >= 0 and text[check] == "\\":
        backslashes += 1
        check -= 1
    return backslashes % 2 == 0


def run_length(text: str, pos: int) -> int:
    """Number of consecutive ``$`` characters starting at ``pos``.

    Examples:
        >>> run_length("$$x", 0)
        2
        >>> run_length("x$", 0)
        0
    """
    end = pos
    text_len = len(text)
    while end < text_len and text[end] == "$":
        end += 1
    return end - pos


def find_closing_run(
    text: str,
    start: int,
    *,
    min_length: int = 1,
    max_length: int | None = None,
    stop_at_newline: bool = False,
) -> int:
    """Find the next live dollar run whose length is within bounds.

    Backslash escapes are stepped over pairwise, so an escaped dollar is
    never returned. Runs outside the length bounds are skipped whole.
    ``start`` must not sit inside a backslash run.

    Args:
        text: Inline content
        start: Position to start scanning from
        min_length: Shortest acceptable run
        max_length: Longest acceptable run (None for unbounded)
        stop_at_newline: Give up at the end of the current line

    Returns:
        Position of the first character of the run, or -1 if none.

    Examples:
        >>> find_closing_run("a$$b$c", 0, max_length=1)
        4
        >>> find_closing_run("a\\\\$b", 0)
        -1
    """
    pos = start
    text_len = len(text)
    while pos < text_len:
        char = text[pos]
        if char == "\\":
            if stop_at_newline and pos + 1 < text_len and text[pos + 1] == "\n":
                return -1
            pos += 2
            continue
        if char == "\n" and stop_at_newline:
            return -1
        if char == "$":
            length = run_length(text, pos)
            if length >= min_length and (max_length is None or length <= max_length):
                return pos
            pos += length
            continue
        pos += 1
    return -1


__all__ = ["find_closing_run", "is_live_dollar", "run_length"]
