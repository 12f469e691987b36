"""
http_message - Immutable HTTP messages with buffered body streams

A small library of standards-shaped HTTP message value objects,
meant to be passed between client, server and middleware layers
without shared mutable state.
"""

__version__ = "0.1.0"
__author__ = "Developer"
__email__ = "dev@example.com"

# Import main components for easy access
from .message import KNOWN_VERSIONS, Message
from .exceptions import HTTPMessageError, ValidationError, StreamError
from .streams import DEFAULT_MAX_MEMORY_SIZE, SeekWhence, Stream

__all__ = [
    "KNOWN_VERSIONS",
    "Message",
    "HTTPMessageError",
    "ValidationError",
    "StreamError",
    "DEFAULT_MAX_MEMORY_SIZE",
    "SeekWhence",
    "Stream",
]
