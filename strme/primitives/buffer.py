"""The cstring value type, input coercion and checked allocation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union
import logging

from strme.config import current_policy
from strme.errors import AllocationFailureError, InvalidArgumentError, require

logger = logging.getLogger("strme.primitives.buffer")

SENTINEL = 0
ENCODING = "latin-1"


@dataclass(frozen=True)
class CString:
    """Owned byte storage holding the content followed by one sentinel byte.

    Instances are immutable; every operation that produces a cstring returns
    a new instance sized exactly ``len(content) + 1``.
    """

    storage: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.storage, bytes):
            raise InvalidArgumentError(
                f"CString storage must be bytes, got {type(self.storage).__name__}"
            )
        if not self.storage or self.storage[-1] != SENTINEL:
            raise InvalidArgumentError("CString storage must end with the sentinel byte")
        if self.storage.find(SENTINEL) != len(self.storage) - 1:
            raise InvalidArgumentError("CString storage holds a sentinel before its end")

    @classmethod
    def from_content(cls, value: "CStringLike") -> "CString":
        """Build a cstring from text or bytes, stopping at the first 0x00 byte."""
        return cls(content_of(value, "value", "CString.from_content") + bytes([SENTINEL]))

    @property
    def content(self) -> bytes:
        return self.storage[:-1]

    @property
    def text(self) -> str:
        return self.content.decode(ENCODING)

    def __len__(self) -> int:
        return len(self.storage) - 1

    def __bytes__(self) -> bytes:
        return self.content

    def __str__(self) -> str:
        return self.text


CStringLike = Union[CString, bytes, bytearray, memoryview, str]


def as_bytes(value: CStringLike | None, name: str, operation: str) -> bytes:
    """Return the raw bytes behind an input, sentinel included for CString."""
    require(value, name, operation)
    if isinstance(value, CString):
        return value.storage
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        try:
            return value.encode(ENCODING)
        except UnicodeEncodeError as exc:
            raise InvalidArgumentError(
                f"{name} holds characters outside the single-byte range", operation
            ) from exc
    raise InvalidArgumentError(
        f"{name} must be a CString, bytes-like or str, got {type(value).__name__}",
        operation,
    )


def scan_length(data: bytes) -> int:
    """Count bytes before the first sentinel; the buffer end acts as one."""
    end = data.find(SENTINEL)
    return len(data) if end < 0 else end


def content_of(value: CStringLike | None, name: str, operation: str) -> bytes:
    data = as_bytes(value, name, operation)
    return data[: scan_length(data)]


def as_size(n: int, name: str, operation: str) -> int:
    """Validate a byte count argument."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidArgumentError(
            f"{name} must be an integer, got {type(n).__name__}", operation
        )
    if n < 0:
        raise InvalidArgumentError(f"{name} must be non-negative, got {n}", operation)
    return n


def allocate(size: int, operation: str) -> bytearray:
    """Obtain zero-filled storage of ``size`` bytes or raise AllocationFailureError."""
    policy = current_policy()
    if not policy.permits(size):
        logger.debug(
            "%s: refusing %d byte allocation (limit %s)", operation, size, policy.max_bytes
        )
        raise AllocationFailureError(
            f"requested {size} bytes exceeds the allocation limit of {policy.max_bytes}",
            operation,
            requested=size,
        )
    try:
        return bytearray(size)
    except MemoryError as exc:
        logger.debug("%s: interpreter could not allocate %d bytes", operation, size)
        raise AllocationFailureError(
            f"could not allocate {size} bytes", operation, requested=size
        ) from exc


def adopt(buffer: bytearray) -> CString:
    """Terminate a filled buffer and hand it out as a CString."""
    buffer[-1] = SENTINEL
    return CString(bytes(buffer))
