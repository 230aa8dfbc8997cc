"""Reversal into fresh storage."""

from __future__ import annotations

from strme.primitives.buffer import CString, CStringLike, adopt, allocate, content_of


def reverse(s: CStringLike | None) -> CString:
    """Return a new cstring with the bytes of ``s`` in reverse order."""
    content = content_of(s, "s", "reverse")
    size = len(content)
    buffer = allocate(size + 1, "reverse")
    for i in range(size):
        buffer[i] = content[size - i - 1]
    return adopt(buffer)
