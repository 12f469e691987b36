"""
Custom exceptions for http_message.

This module defines the exception hierarchy raised by messages
and their body streams.
"""

from typing import Optional


class HTTPMessageError(Exception):
    """Base exception for all http_message errors."""
    
    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ValidationError(HTTPMessageError):
    """Raised when a message is built from invalid input."""
    
    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Validation error: {message}", cause)


class StreamError(HTTPMessageError):
    """Raised when there's an error with stream operations."""
    
    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Stream error: {message}", cause)
