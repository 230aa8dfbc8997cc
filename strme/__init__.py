"""
strme - null-terminated string primitives with explicit ownership
"""

from strme.config import allocation_limit
from strme.errors import (
    AllocationFailureError,
    ConfigurationError,
    InvalidArgumentError,
    NullInputError,
    StrMeException,
)
from strme.primitives import (
    SENTINEL,
    CString,
    compare,
    concatenate,
    concatenate_bounded,
    copy,
    copy_bounded,
    find_byte,
    length,
    parse_integer,
    reverse,
    swap,
)
from strme.version import __version__

__all__ = [
    "AllocationFailureError",
    "CString",
    "ConfigurationError",
    "InvalidArgumentError",
    "NullInputError",
    "SENTINEL",
    "StrMeException",
    "__version__",
    "allocation_limit",
    "compare",
    "concatenate",
    "concatenate_bounded",
    "copy",
    "copy_bounded",
    "find_byte",
    "length",
    "parse_integer",
    "reverse",
    "swap",
]
