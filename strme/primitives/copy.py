"""Copy family: whole and bounded copies into fresh storage."""

from __future__ import annotations

import logging

from strme.primitives.buffer import (
    CString,
    CStringLike,
    adopt,
    allocate,
    as_size,
    content_of,
)

logger = logging.getLogger("strme.primitives.copy")


def copy(source: CStringLike | None) -> CString:
    """Copy the content and sentinel of ``source`` into new storage.

    There is no destination argument: the returned value is the copy.
    """
    content = content_of(source, "source", "copy")
    buffer = allocate(len(content) + 1, "copy")
    buffer[: len(content)] = content
    return adopt(buffer)


def copy_bounded(source: CStringLike | None, n: int) -> CString:
    """Copy at most ``n`` bytes of ``source``.

    If the sentinel comes first the copy stops there, so the result can be
    shorter than ``n``; otherwise exactly ``n`` bytes are kept and a sentinel
    is appended.
    """
    content = content_of(source, "source", "copy_bounded")
    limit = as_size(n, "n", "copy_bounded")
    content = content[:limit]
    buffer = allocate(len(content) + 1, "copy_bounded")
    buffer[: len(content)] = content
    logger.debug("copy_bounded kept %d of at most %d bytes", len(content), limit)
    return adopt(buffer)
