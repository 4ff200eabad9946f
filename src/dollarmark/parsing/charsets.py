"""Character sets for O(1) classification.

All sets are frozensets for:
- O(1) membership testing (vs O(n) for strings)
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Usage:
    from dollarmark.parsing.charsets import ASCII_PUNCTUATION

    if char in ASCII_PUNCTUATION:  # O(1) lookup
        ...
"""

# CommonMark: ASCII punctuation characters (the escapable set)
ASCII_PUNCTUATION: frozenset[str] = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")

# Inline characters that can start something other than plain text
INLINE_SPECIAL: frozenset[str] = frozenset("`\\\n$")

# Valid code fence characters
FENCE_CHARS: frozenset[str] = frozenset("`~")

# List marker characters
UNORDERED_LIST_MARKERS: frozenset[str] = frozenset("-*+")

# Digits for ordered list detection
DIGITS: frozenset[str] = frozenset("0123456789")
