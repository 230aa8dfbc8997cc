"""Allocation limit configuration from the environment and scoped overrides."""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
import logging
import os

from strme.errors import ConfigurationError, InvalidArgumentError

logger = logging.getLogger("strme.config")

MAX_ALLOCATION_ENV = "STRME_MAX_ALLOCATION"


@dataclass(frozen=True)
class AllocationPolicy:
    """Upper bound, in bytes, on a single cstring allocation."""

    max_bytes: int | None = None

    def permits(self, size: int) -> bool:
        return self.max_bytes is None or size <= self.max_bytes


_ALLOCATION_POLICY: ContextVar[AllocationPolicy | None] = ContextVar(
    "strme_allocation_policy",
    default=None,
)


def _parse_limit(raw: str, source: str) -> int | None:
    text = raw.strip()
    if not text:
        return None
    try:
        value = int(text)
    except ValueError as exc:
        raise ConfigurationError(
            f"{source} must be a non-negative integer, got {raw!r}"
        ) from exc
    if value < 0:
        raise ConfigurationError(f"{source} must be non-negative, got {value}")
    return value


def policy_from_environment() -> AllocationPolicy:
    """Resolve the allocation policy from STRME_MAX_ALLOCATION."""
    raw = os.environ.get(MAX_ALLOCATION_ENV, "")
    return AllocationPolicy(max_bytes=_parse_limit(raw, MAX_ALLOCATION_ENV))


def current_policy() -> AllocationPolicy:
    """Return the scoped policy if one is active, else the environment policy."""
    scoped = _ALLOCATION_POLICY.get()
    if scoped is not None:
        return scoped
    return policy_from_environment()


@contextmanager
def allocation_limit(max_bytes: int | None):
    """Apply an allocation limit for the duration of the block."""
    if max_bytes is not None:
        if isinstance(max_bytes, bool) or not isinstance(max_bytes, int):
            raise InvalidArgumentError(
                f"allocation limit must be an integer, got {type(max_bytes).__name__}"
            )
        if max_bytes < 0:
            raise InvalidArgumentError(
                f"allocation limit must be non-negative, got {max_bytes}"
            )
    policy = AllocationPolicy(max_bytes=max_bytes)
    token = _ALLOCATION_POLICY.set(policy)
    logger.debug("Allocation limit set to %s", max_bytes)
    try:
        yield policy
    finally:
        _ALLOCATION_POLICY.reset(token)
