"""
strme Error module - typed failures for the string primitives
"""

import logging
from typing import Optional

logger = logging.getLogger("strme.errors")

NULL_INPUT = "NullInput"
INVALID_ARGUMENT = "InvalidArgument"
ALLOCATION_FAILURE = "AllocationFailure"
CONFIGURATION = "Configuration"


class StrMeException(Exception):
    """Base exception for strme with an error kind tag"""

    kind: str = "Error"

    def __init__(self, msg: str, operation: Optional[str] = None):
        self.msg = msg
        self.operation = operation
        super().__init__(self.format_message())

    def format_message(self) -> str:
        if not self.operation:
            return self.msg
        return f"{self.operation}: {self.msg}"


class NullInputError(StrMeException):
    """A required cstring argument was absent"""

    kind = NULL_INPUT


class InvalidArgumentError(StrMeException, ValueError):
    """A size, base or digit was out of range, or text could not be encoded"""

    kind = INVALID_ARGUMENT


class AllocationFailureError(StrMeException, MemoryError):
    """Storage for a new cstring could not be obtained"""

    kind = ALLOCATION_FAILURE

    def __init__(self, msg: str, operation: Optional[str] = None, requested: int = 0):
        self.requested = requested
        super().__init__(msg, operation)


class ConfigurationError(StrMeException, ValueError):
    """The environment holds an unusable setting"""

    kind = CONFIGURATION


ERROR_KINDS = (NULL_INPUT, INVALID_ARGUMENT, ALLOCATION_FAILURE)


def require(value, name: str, operation: Optional[str] = None):
    """Return value, raising NullInputError when it is None"""
    if value is None:
        logger.debug("Null input for %s in %s", name, operation or "<unknown>")
        raise NullInputError(f"{name} must not be None", operation)
    return value

