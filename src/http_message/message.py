"""
HTTP message primitives for http_message.

This module defines the Message value object shared by requests and
responses. Messages are immutable: every "with_" method returns a new
Message and leaves the original untouched.
"""

from collections.abc import Mapping as MappingABC
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import (
    Any,
    Dict,
    FrozenSet,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from .exceptions import ValidationError
from .streams import Stream, StreamContent


KNOWN_VERSIONS: FrozenSet[str] = frozenset({"1.0", "1.1"})

# Type aliases for better readability
HeaderValue = Union[str, Sequence[str]]
HeadersInput = Mapping[str, HeaderValue]
Headers = Mapping[str, Tuple[str, ...]]


def _validate_version(version: Any) -> str:
    if not isinstance(version, str) or version not in KNOWN_VERSIONS:
        raise ValidationError(f"{version!r} is not a known http version")
    return version


def _normalize_value(value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    
    # bytes are a sequence of ints, not of strings
    if not isinstance(value, (list, tuple)):
        raise ValidationError("header values must be string or string sequences")
    
    if not all(isinstance(item, str) for item in value):
        raise ValidationError("header values must be string or string sequences")
    
    return tuple(value)


def _normalize_name(name: Any) -> str:
    if not isinstance(name, str) or not name:
        raise ValidationError("header names must be non-empty strings")
    return name.lower()


def _normalize_headers(headers: Any) -> Headers:
    """Validate headers and index them by lower-cased name."""
    if not isinstance(headers, MappingABC):
        raise ValidationError("headers must be a mapping")
    
    normalized: Dict[str, Tuple[str, ...]] = {}
    for name, value in headers.items():
        key = _normalize_name(name)
        normalized[key] = normalized.get(key, ()) + _normalize_value(value)
    
    return MappingProxyType(normalized)


@dataclass(frozen=True)
class Message:
    """
    Immutable HTTP message representation.
    
    A message bundles a protocol version, a header multimap and a body
    stream. Header names are matched case-insensitively and stored
    lower-cased; the original casing is not kept.
    
    Messages compare and hash on version, headers and the identity of
    their body stream.
    
    The body stream is shared, not copied. It has its own lifecycle and
    can still be read, written or closed through any message that
    references it.
    """
    
    protocol_version: str = "1.1"
    headers: Headers = field(default_factory=dict)
    body: Optional[Stream] = None
    
    def __post_init__(self) -> None:
        """Validate and normalize message data after initialization."""
        _validate_version(self.protocol_version)
        
        object.__setattr__(self, "headers", _normalize_headers(self.headers))
        
        if self.body is None:
            object.__setattr__(self, "body", Stream())
        elif not isinstance(self.body, Stream):
            raise ValidationError("body must be a Stream")
    
    def __hash__(self) -> int:
        return hash((self.protocol_version, frozenset(self.headers.items()), self.body))
    
    @classmethod
    def create(
        cls,
        protocol_version: str = "1.1",
        headers: Optional[HeadersInput] = None,
        body: Optional[Union[Stream, StreamContent]] = None,
    ) -> "Message":
        """
        Create a Message with proper type conversion.
        
        Args:
            protocol_version: HTTP version, "1.0" or "1.1"
            headers: Optional mapping of header names to values
            body: Optional Stream, or str/bytes to seed a new Stream with
            
        Returns:
            New Message instance
        """
        if headers is None:
            headers = {}
        
        if isinstance(body, (str, bytes)):
            body = Stream(body)
        
        return cls(protocol_version=protocol_version, headers=headers, body=body)
    
    def get_protocol_version(self) -> str:
        return self.protocol_version
    
    def with_protocol_version(self, version: str) -> "Message":
        """Create a new message with a different protocol version."""
        return Message(protocol_version=version, headers=self.headers, body=self.body)
    
    def get_headers(self) -> Dict[str, List[str]]:
        """Get a copy of all headers, keyed by lower-cased name."""
        return {name: list(values) for name, values in self.headers.items()}
    
    def has_header(self, name: str) -> bool:
        """Check if a header exists (case-insensitive)."""
        return _normalize_name(name) in self.headers
    
    def get_header(self, name: str) -> List[str]:
        """Get all values of a header (case-insensitive), or an empty list."""
        return list(self.headers.get(_normalize_name(name), ()))
    
    def get_header_line(self, name: str) -> str:
        """Get the values of a header joined with commas, or an empty string."""
        return ",".join(self.get_header(name))
    
    def with_header(self, name: str, value: HeaderValue) -> "Message":
        """
        Create a new message whose only header is name.
        
        All existing headers are dropped, not just earlier values of name.
        Use with_added_header to keep the rest of the header set.
        """
        return Message(
            protocol_version=self.protocol_version,
            headers={_normalize_name(name): value},
            body=self.body,
        )
    
    def with_added_header(self, name: str, value: HeaderValue) -> "Message":
        """
        Create a new message with name set to value.
        
        Other headers are kept. Earlier values of name are overwritten,
        not appended to.
        """
        headers: Dict[str, HeaderValue] = dict(self.headers)
        headers[_normalize_name(name)] = value
        return Message(
            protocol_version=self.protocol_version,
            headers=headers,
            body=self.body,
        )
    
    def without_header(self, name: str) -> "Message":
        """Create a new message without a header, or return self if absent."""
        key = _normalize_name(name)
        if key not in self.headers:
            return self
        
        headers = {k: v for k, v in self.headers.items() if k != key}
        return Message(
            protocol_version=self.protocol_version,
            headers=headers,
            body=self.body,
        )
    
    def get_body(self) -> Stream:
        return self.body  # type: ignore[return-value]
    
    def with_body(self, body: Stream) -> "Message":
        """Create a new message with a different body stream."""
        if not isinstance(body, Stream):
            raise ValidationError("body must be a Stream")
        return Message(
            protocol_version=self.protocol_version,
            headers=self.headers,
            body=body,
        )
