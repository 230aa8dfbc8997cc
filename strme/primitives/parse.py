"""Decimal-digit integer parsing in bases 2 through 10."""

from __future__ import annotations

import logging

from strme.errors import InvalidArgumentError
from strme.primitives.buffer import CStringLike, content_of

logger = logging.getLogger("strme.primitives.parse")

MAX_BASE = 10
_MINUS = ord("-")
_ZERO = ord("0")


def parse_integer(s: CStringLike | None, base: int) -> int:
    """Parse ``s`` as a signed integer written in ``base``.

    Returns 0 when ``s`` is None or ``base`` is below 2. An optional leading
    ``-`` negates the value; an empty string or a bare ``-`` gives 0.

    Every digit is read as ``byte - ord('0')``, so only the characters
    ``0``-``9`` are digits. Bases above 10 would need alphabetic digits and are
    rejected rather than half supported.

    Unlike C ``strtol``-style parsers that skip or stop at stray input, any
    byte outside ``0``-``9`` is an error, and so is a decimal digit that is
    not valid in ``base``: ``parse_integer("19", 8)`` raises because 9 >= 8.

    Raises:
        InvalidArgumentError: if ``base`` exceeds 10 or is not an integer, if a
            byte is not one of ``0``-``9``, or if a digit is ``>= base``.
    """
    if s is None:
        return 0
    if isinstance(base, bool) or not isinstance(base, int):
        raise InvalidArgumentError(
            f"base must be an integer, got {type(base).__name__}", "parse_integer"
        )
    if base < 2:
        logger.debug("parse_integer: base %d below 2, returning 0", base)
        return 0
    if base > MAX_BASE:
        raise InvalidArgumentError(
            f"base {base} needs alphabetic digits, which are not supported (max {MAX_BASE})",
            "parse_integer",
        )

    content = content_of(s, "s", "parse_integer")
    negative = bool(content) and content[0] == _MINUS
    digits = content[1:] if negative else content

    value = 0
    for position, byte in enumerate(digits):
        digit = byte - _ZERO
        if not 0 <= digit < base:
            raise InvalidArgumentError(
                f"byte {bytes([byte])!r} at offset {position + int(negative)} "
                f"is not a base-{base} digit",
                "parse_integer",
            )
        value = value * base + digit
    return -value if negative else value
