"""Split raw text into displayable word tokens.

WHY: An RSVP reader shows one word per tick. Punctuation, whitespace and
symbols carry no reading value on their own and would waste a tick, so
the document is reduced to its words before playback starts.

HOW: A single regex pass collects maximal runs of alphanumeric
characters. Everything between runs (whitespace, punctuation, symbols)
is a separator and is dropped.

RULES:
- A word is a maximal run of characters for which str.isalnum() is True
- Separator runs never produce a token (no empty strings)
- No case normalization, no deduplication, no length truncation
- Empty or separator-only input yields an empty list
"""

from __future__ import annotations

import re
from typing import List

# \w in a str pattern is isalnum() plus "_"; excluding "_" leaves exactly
# the alphanumeric characters.
_WORD_RE = re.compile(r"[^\W_]+")


def tokenize(text: str) -> List[str]:
    """Convert raw text into an ordered list of word tokens.

    Args:
        text: The full document.

    Returns:
        Tokens in document order. ``"Hello, World!! 123-abc"`` becomes
        ``["Hello", "World", "123", "abc"]``.
    """
    if not text:
        return []
    return _WORD_RE.findall(text)
