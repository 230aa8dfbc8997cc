"""Bounded byte search over raw buffers."""

from __future__ import annotations

from typing import Union

from strme.errors import InvalidArgumentError
from strme.primitives.buffer import ENCODING, CStringLike, as_bytes, as_size

ByteLike = Union[int, bytes, str]


def _target_value(target: ByteLike) -> int:
    if isinstance(target, bool):
        raise InvalidArgumentError("target must be a byte, got bool", "find_byte")
    if isinstance(target, int):
        return target & 0xFF
    if isinstance(target, str) and len(target) == 1:
        try:
            return target.encode(ENCODING)[0]
        except UnicodeEncodeError as exc:
            raise InvalidArgumentError(
                f"target {target!r} is outside the single-byte range", "find_byte"
            ) from exc
    if isinstance(target, bytes) and len(target) == 1:
        return target[0]
    raise InvalidArgumentError(
        f"target must be an int or a single byte, got {target!r}", "find_byte"
    )


def find_byte(buffer: CStringLike | None, target: ByteLike, length: int) -> int | None:
    """Return the index of the first ``target`` byte in ``buffer[:length]``.

    The buffer is not treated as null-terminated: embedded 0x00 bytes are
    searched like any other, and a CString is searched over its storage
    including the sentinel. ``length`` past the end of the buffer is clamped.
    Returns None when nothing matches or ``buffer`` is None; an absent buffer
    is reported before ``target`` or ``length`` are checked.

    An int target is compared by its low eight bits; a str target must be a
    single character in the Latin-1 range.
    """
    if buffer is None:
        return None
    data = as_bytes(buffer, "buffer", "find_byte")
    value = _target_value(target)
    limit = as_size(length, "length", "find_byte")
    index = data.find(value, 0, limit)
    return None if index < 0 else index
