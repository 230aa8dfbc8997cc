"""
This module defines all strme features using a unified registry system.
Each string primitive is wrapped once here and shared by the CLI and the API.
"""

from typing import (
    Dict,
    Any,
    Callable,
    Optional,
    TypeVar,
    Generic,
)
from dataclasses import dataclass
import functools
import logging

from strme.errors import StrMeException
from strme.primitives import (
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

logger = logging.getLogger("strme.features")

T = TypeVar("T")


class OperationResult(Generic[T]):
    """Wrapper for operation results with success/error handling"""

    def __init__(
        self,
        success: bool,
        data: Optional[T] = None,
        error: Optional[str] = None,
        error_kind: Optional[str] = None,
    ):
        self.success = success
        self.data = data
        self.error = error
        self.error_kind = error_kind

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "OperationResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, error_kind: Optional[str] = None) -> "OperationResult[T]":
        return cls(success=False, error=error, error_kind=error_kind)


@dataclass
class Feature:
    """A named operation exposed through the CLI and the API"""

    name: str
    description: str
    handler: Callable
    cli_options: Optional[Dict[str, Any]] = None
    api_endpoint: Optional[Dict[str, Any]] = None


class FeatureRegistry:
    """Registry for all strme features"""

    _features: Dict[str, Feature] = {}

    @classmethod
    def register(cls, feature: Feature) -> Feature:
        """Register a new feature"""
        cls._features[feature.name] = feature
        return feature

    @classmethod
    def get_feature(cls, name: str) -> Optional[Feature]:
        """Get a feature by name"""
        return cls._features.get(name)

    @classmethod
    def get_all_features(cls) -> Dict[str, Feature]:
        """Get all registered features"""
        return cls._features.copy()


def cstring_payload(value: CString) -> Dict[str, Any]:
    """JSON-friendly view of a cstring: text, length and raw storage bytes"""
    return {
        "text": value.text,
        "length": len(value),
        "storage": list(value.storage),
    }


def _guarded(handler: Callable[..., Any]) -> Callable[..., OperationResult[Dict[str, Any]]]:
    """Turn library errors raised by a handler into failed results"""

    @functools.wraps(handler)
    def wrapper(**kwargs: Any) -> OperationResult[Dict[str, Any]]:
        try:
            return OperationResult.ok(handler(**kwargs))
        except StrMeException as e:
            logger.debug("Feature %s failed: %s", handler.__name__, e)
            return OperationResult.fail(str(e), e.kind)

    return wrapper


# ----------------- Feature Handlers -----------------


def handle_version(**kwargs) -> OperationResult[Dict[str, str]]:
    """Handle version request"""
    from strme.version import get_version

    return OperationResult.ok({"version": get_version()})


@_guarded
def handle_length(s: Optional[str] = None, **kwargs) -> Dict[str, Any]:
    return {"length": length(s)}


@_guarded
def handle_copy(source: Optional[str] = None, **kwargs) -> Dict[str, Any]:
    return {"result": cstring_payload(copy(source))}


@_guarded
def handle_copy_bounded(
    source: Optional[str] = None, n: int = 0, **kwargs
) -> Dict[str, Any]:
    return {"result": cstring_payload(copy_bounded(source, n))}


@_guarded
def handle_compare(
    a: Optional[str] = None, b: Optional[str] = None, **kwargs
) -> Dict[str, Any]:
    return {"result": compare(a, b)}


@_guarded
def handle_find_byte(
    buffer: Optional[str] = None,
    target: str = "",
    length: Optional[int] = None,
    **kwargs,
) -> Dict[str, Any]:
    """Search the text buffer; length defaults to the whole buffer"""
    if length is None:
        length = len(buffer) if buffer is not None else 0
    return {"position": find_byte(buffer, target, length)}


@_guarded
def handle_concatenate(
    a: Optional[str] = None, b: Optional[str] = None, **kwargs
) -> Dict[str, Any]:
    return {"result": cstring_payload(concatenate(a, b))}


@_guarded
def handle_concatenate_bounded(
    a: Optional[str] = None, b: Optional[str] = None, n: int = 0, **kwargs
) -> Dict[str, Any]:
    return {"result": cstring_payload(concatenate_bounded(a, b, n))}


@_guarded
def handle_swap(
    a: Optional[str] = None, b: Optional[str] = None, **kwargs
) -> Dict[str, Any]:
    first, second = swap(a, b)
    return {"a": cstring_payload(first), "b": cstring_payload(second)}


@_guarded
def handle_reverse(s: Optional[str] = None, **kwargs) -> Dict[str, Any]:
    return {"result": cstring_payload(reverse(s))}


@_guarded
def handle_parse_integer(
    s: Optional[str] = None, base: int = 10, **kwargs
) -> Dict[str, Any]:
    return {"value": parse_integer(s, base)}


def handle_list_operations(**kwargs) -> OperationResult[Dict[str, Any]]:
    """Handle listing the registered operations"""
    operations = {
        name: feature.description
        for name, feature in FeatureRegistry.get_all_features().items()
        if name not in {"version", "list_operations"}
    }
    return OperationResult.ok({"operations": operations})


# Register all features
FeatureRegistry.register(
    Feature(
        name="version",
        description="Get the strme version",
        handler=handle_version,
        api_endpoint={"path": "/version", "methods": ["GET"]},
    )
)

FeatureRegistry.register(
    Feature(
        name="list_operations",
        description="List the available string operations",
        handler=handle_list_operations,
        api_endpoint={"path": "/operations", "methods": ["GET"]},
    )
)

FeatureRegistry.register(
    Feature(
        name="length",
        description="Count the bytes before the sentinel",
        handler=handle_length,
        cli_options={"s": {"type": str, "required": True, "help": "Input string"}},
        api_endpoint={"path": "/length", "methods": ["POST"]},
    )
)

FeatureRegistry.register(
    Feature(
        name="copy",
        description="Copy a string into new storage",
        handler=handle_copy,
        cli_options={"source": {"type": str, "required": True, "help": "String to copy"}},
        api_endpoint={"path": "/copy", "methods": ["POST"]},
    )
)

FeatureRegistry.register(
    Feature(
        name="copy_bounded",
        description="Copy at most n bytes of a string into new storage",
        handler=handle_copy_bounded,
        cli_options={
            "source": {"type": str, "required": True, "help": "String to copy"},
            "n": {"type": int, "required": True, "help": "Maximum bytes to copy"},
        },
        api_endpoint={"path": "/copy-bounded", "methods": ["POST"]},
    )
)

FeatureRegistry.register(
    Feature(
        name="compare",
        description="Compare two strings (positive when a sorts before b)",
        handler=handle_compare,
        cli_options={
            "a": {"type": str, "required": True, "help": "First string"},
            "b": {"type": str, "required": True, "help": "Second string"},
        },
        api_endpoint={"path": "/compare", "methods": ["POST"]},
    )
)

FeatureRegistry.register(
    Feature(
        name="find_byte",
        description="Find the first occurrence of a byte within a length",
        handler=handle_find_byte,
        cli_options={
            "buffer": {"type": str, "required": True, "help": "Buffer to search"},
            "target": {"type": str, "required": True, "help": "Byte to find"},
            "length": {"type": int, "required": False, "help": "Bytes to scan"},
        },
        api_endpoint={"path": "/find-byte", "methods": ["POST"]},
    )
)

FeatureRegistry.register(
    Feature(
        name="concatenate",
        description="Join two strings into new storage",
        handler=handle_concatenate,
        cli_options={
            "a": {"type": str, "required": True, "help": "Leading string"},
            "b": {"type": str, "required": True, "help": "Trailing string"},
        },
        api_endpoint={"path": "/concatenate", "methods": ["POST"]},
    )
)

FeatureRegistry.register(
    Feature(
        name="concatenate_bounded",
        description="Append at most n bytes of a to b",
        handler=handle_concatenate_bounded,
        cli_options={
            "a": {"type": str, "required": True, "help": "Source of appended bytes"},
            "b": {"type": str, "required": True, "help": "Leading string"},
            "n": {"type": int, "required": True, "help": "Maximum bytes of a"},
        },
        api_endpoint={"path": "/concatenate-bounded", "methods": ["POST"]},
    )
)

FeatureRegistry.register(
    Feature(
        name="swap",
        description="Exchange the contents of two strings",
        handler=handle_swap,
        cli_options={
            "a": {"type": str, "required": True, "help": "First string"},
            "b": {"type": str, "required": True, "help": "Second string"},
        },
        api_endpoint={"path": "/swap", "methods": ["POST"]},
    )
)

FeatureRegistry.register(
    Feature(
        name="reverse",
        description="Reverse a string into new storage",
        handler=handle_reverse,
        cli_options={"s": {"type": str, "required": True, "help": "String to reverse"}},
        api_endpoint={"path": "/reverse", "methods": ["POST"]},
    )
)

FeatureRegistry.register(
    Feature(
        name="parse_integer",
        description="Parse a decimal-digit integer in bases 2 to 10",
        handler=handle_parse_integer,
        cli_options={
            "s": {"type": str, "required": True, "help": "Digits to parse"},
            "base": {"type": int, "required": False, "default": 10, "help": "Number base"},
        },
        api_endpoint={"path": "/parse-integer", "methods": ["POST"]},
    )
)
