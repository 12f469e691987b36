"""
Unit tests for custom exceptions.

Tests the exception hierarchy to ensure proper error handling
and cause tracking.
"""

import pytest

from http_message.exceptions import (
    HTTPMessageError,
    ValidationError,
    StreamError,
)


class TestHTTPMessageError:
    """Test base HTTPMessageError class."""
    
    def test_basic_creation(self) -> None:
        """Test creating basic HTTPMessageError."""
        error = HTTPMessageError("Test error message")
        assert str(error) == "Test error message"
        assert error.message == "Test error message"
        assert error.cause is None
    
    def test_with_cause(self) -> None:
        """Test creating HTTPMessageError with cause."""
        original_error = ValueError("Original error")
        error = HTTPMessageError("Test error message", cause=original_error)
        assert error.message == "Test error message"
        assert error.cause is original_error


class TestValidationError:
    """Test ValidationError class."""
    
    def test_basic_creation(self) -> None:
        error = ValidationError("headers must be a mapping")
        assert str(error) == "Validation error: headers must be a mapping"
        assert error.message == "Validation error: headers must be a mapping"
        assert error.cause is None


class TestStreamError:
    """Test StreamError class."""
    
    def test_basic_creation(self) -> None:
        error = StreamError("Stream is not seekable")
        assert "Stream error: Stream is not seekable" in str(error)
        assert error.cause is None
    
    def test_with_cause(self) -> None:
        original_error = OSError("disk full")
        error = StreamError("write failed", cause=original_error)
        assert error.cause is original_error


class TestExceptionHierarchy:
    """Test that every error can be caught through the base class."""
    
    @pytest.mark.parametrize("error_class", [ValidationError, StreamError])
    def test_inherits_from_base(self, error_class) -> None:
        assert issubclass(error_class, HTTPMessageError)
        
        with pytest.raises(HTTPMessageError):
            raise error_class("boom")
    
    def test_not_interchangeable(self) -> None:
        assert not issubclass(ValidationError, StreamError)
        assert not issubclass(StreamError, ValidationError)
