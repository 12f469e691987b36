"""
Pytest configuration for http_message tests.

This file contains shared fixtures and configuration
for all tests in the project.
"""

import pytest

from http_message import Message, Stream


@pytest.fixture
def sample_headers():
    """Sample headers for testing."""
    return {
        "Content-Type": "application/json",
        "Authorization": "Bearer token123",
        "Accept": ["text/html", "application/json"],
    }


@pytest.fixture
def stream_factory():
    """Create streams and close whatever the test left attached."""
    created = []
    
    def _create_stream(content="", **flags) -> Stream:
        stream = Stream(content, **flags)
        created.append(stream)
        return stream
    
    yield _create_stream
    
    for stream in created:
        if not stream.closed:
            stream.close()


@pytest.fixture
def sample_message(sample_headers, stream_factory) -> Message:
    """A message with headers and a small body."""
    return Message("1.1", sample_headers, stream_factory("body"))
