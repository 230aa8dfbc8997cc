"""Concatenation family."""

from __future__ import annotations

from strme.primitives.buffer import (
    CString,
    CStringLike,
    adopt,
    allocate,
    as_size,
    content_of,
)


def concatenate(a: CStringLike | None, b: CStringLike | None) -> CString:
    """Return a new cstring holding ``a`` followed by ``b``."""
    head = content_of(a, "a", "concatenate")
    tail = content_of(b, "b", "concatenate")
    buffer = allocate(len(head) + len(tail) + 1, "concatenate")
    buffer[: len(head)] = head
    buffer[len(head) : len(head) + len(tail)] = tail
    return adopt(buffer)


def concatenate_bounded(a: CStringLike | None, b: CStringLike | None, n: int) -> CString:
    """Return ``b`` followed by at most ``n`` bytes of ``a``.

    Note the argument order: ``a`` is the source of the appended bytes and
    ``b`` the leading content. Neither argument is modified; rebind the
    caller's variable to the result (``b = concatenate_bounded(a, b, n)``).
    """
    appended = content_of(a, "a", "concatenate_bounded")
    leading = content_of(b, "b", "concatenate_bounded")
    limit = as_size(n, "n", "concatenate_bounded")
    appended = appended[:limit]
    buffer = allocate(len(leading) + len(appended) + 1, "concatenate_bounded")
    buffer[: len(leading)] = leading
    buffer[len(leading) : len(leading) + len(appended)] = appended
    return adopt(buffer)
