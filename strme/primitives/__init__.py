"""
String primitives over null-terminated byte sequences.

Each operation lives in its own module and returns new ``CString`` values;
inputs are never modified.
"""

from strme.primitives.buffer import SENTINEL, CString, CStringLike
from strme.primitives.compare import compare
from strme.primitives.concatenate import concatenate, concatenate_bounded
from strme.primitives.copy import copy, copy_bounded
from strme.primitives.length import length
from strme.primitives.parse import parse_integer
from strme.primitives.reverse import reverse
from strme.primitives.search import find_byte
from strme.primitives.swap import swap

__all__ = [
    "SENTINEL",
    "CString",
    "CStringLike",
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
