"""
Example usage of http_message.

This example demonstrates building messages, deriving new ones with
the "with_" methods, and working with the shared body stream.
"""

import logging

from http_message import Message, SeekWhence, Stream, StreamError


def headers_example():
    """Example: Case-insensitive headers on an immutable message."""
    print("=== Headers Example ===")

    message = Message.create(
        headers={"Content-Type": "application/json", "Accept": ["text/html", "*/*"]},
        body='{"hello": "world"}',
    )

    print(f"Protocol version: {message.get_protocol_version()}")
    print(f"Accept: {message.get_header_line('ACCEPT')}")

    traced = message.with_added_header("X-Trace-Id", "abc123")
    print(f"Derived message headers: {traced.get_headers()}")
    print(f"Original still untraced: {not message.has_header('x-trace-id')}")

    stripped = traced.without_header("accept")
    print(f"Headers after removal: {sorted(stripped.get_headers())}")
    print()


def body_stream_example():
    """Example: Reading and writing a body stream."""
    print("=== Body Stream Example ===")

    body = Stream("Hello")
    body.seek(0, SeekWhence.END)
    body.write(", World!")

    message = Message("1.1", {"Content-Type": "text/plain"}, body)
    print(f"Body: {message.get_body()}")
    print(f"Body size: {body.get_size()} bytes")

    read_only = message.with_body(Stream("fixed", writable=False))
    try:
        read_only.get_body().write("more")
    except StreamError as e:
        print(f"Write rejected: {e}")

    body.close()
    print(f"Body after close: {str(message.get_body())!r}")
    print()


def main():
    """Run all examples."""
    logging.basicConfig(level=logging.DEBUG)

    headers_example()
    body_stream_example()


if __name__ == "__main__":
    main()
