"""Byte-wise comparison with an inverted sign and a last-byte tie-break."""

from __future__ import annotations

from strme.primitives.buffer import SENTINEL, CStringLike, content_of


def _last_byte(content: bytes) -> int:
    return content[-1] if content else SENTINEL


def compare(a: CStringLike | None, b: CStringLike | None) -> int:
    """Compare two cstrings.

    At the first differing index the result is ``b[i] - a[i]``, so a result
    greater than zero means ``a`` sorts *before* ``b``. This is the opposite
    sign of the usual ``strcmp`` convention.

    When the scan reaches the end of either string without a difference, the
    result is ``last(b) - last(a)``, the difference of the final content bytes
    (the sentinel for an empty string), not a length comparison. Hence
    ``compare("ab", "abc") == ord("c") - ord("b")`` and
    ``compare("ab", "abb") == 0``.

    Raises:
        NullInputError: if either argument is None.
    """
    left = content_of(a, "a", "compare")
    right = content_of(b, "b", "compare")
    for x, y in zip(left, right):
        if x != y:
            return y - x
    return _last_byte(right) - _last_byte(left)
