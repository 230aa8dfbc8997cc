"""Content exchange under the return-and-reassign convention."""

from __future__ import annotations

from strme.errors import require
from strme.primitives.buffer import CString, CStringLike
from strme.primitives.copy import copy


def swap(a: CStringLike | None, b: CStringLike | None) -> tuple[CString, CString]:
    """Return ``(copy of b, copy of a)``.

    Use as ``a, b = swap(a, b)``; the exchange is visible only through the
    rebinding, the inputs themselves are never changed.
    """
    require(a, "a", "swap")
    require(b, "b", "swap")
    return copy(b), copy(a)
