"""Length of a cstring."""

from __future__ import annotations

from strme.primitives.buffer import CStringLike, as_bytes, scan_length


def length(s: CStringLike | None) -> int:
    """Return the number of bytes before the sentinel.

    Raises:
        NullInputError: if ``s`` is None.
    """
    return scan_length(as_bytes(s, "s", "length"))
