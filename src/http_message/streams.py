"""
Body streams for http_message.

This module provides the buffered, seekable byte stream used as the body
of a Message. Content is held in memory and spills over to a temporary
file once it grows past a configurable threshold.
"""

from enum import IntEnum
from tempfile import SpooledTemporaryFile
from typing import (
    IO,
    Any,
    Dict,
    Optional,
    Type,
    Union,
)
from types import TracebackType
import logging

from .exceptions import StreamError


logger = logging.getLogger(__name__)

# Content size kept in memory before rolling over to a temporary file
DEFAULT_MAX_MEMORY_SIZE = 2 * 1024 * 1024

StreamContent = Union[str, bytes]


class SeekWhence(IntEnum):
    """Reference points for Stream.seek, matching os.SEEK_*."""
    START = 0
    CURRENT = 1
    END = 2


def _to_bytes(data: StreamContent) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"stream data must be str or bytes, not {type(data).__name__}")


class Stream:
    """
    Buffered byte stream with fixed capabilities.
    
    The readable, writable and seekable flags are set once at construction
    and are not derived from the storage, so a Stream can act as a
    restricted view (e.g. read-only) over storage that supports more.
    
    A stream is usable until detach() or close() is called. After that,
    every operation except the capability queries raises StreamError.
    """
    
    def __init__(
        self,
        initial_content: StreamContent = "",
        readable: bool = True,
        writable: bool = True,
        seekable: bool = True,
        max_memory_size: int = DEFAULT_MAX_MEMORY_SIZE,
    ) -> None:
        """
        Initialize Stream.
        
        Args:
            initial_content: Data the stream starts with. Strings are UTF-8 encoded
            readable: Whether read operations are allowed
            writable: Whether write operations are allowed
            seekable: Whether seek operations are allowed
            max_memory_size: Bytes kept in memory before using a temporary file.
                0 keeps the content in memory regardless of size
        """
        if max_memory_size < 0:
            raise ValueError("max_memory_size must be non-negative")
        
        content = _to_bytes(initial_content)
        
        self._readable = bool(readable)
        self._writable = bool(writable)
        self._seekable = bool(seekable)
        self._max_memory_size = max_memory_size
        
        # Seeding bypasses the capability flags
        self._file: Optional[IO[bytes]] = SpooledTemporaryFile(
            max_size=max_memory_size, mode="w+b"
        )
        self._file.write(content)
        self._file.seek(0)
        
        logger.debug(
            f"Stream allocated with {len(content)} bytes "
            f"(readable={self._readable}, writable={self._writable}, "
            f"seekable={self._seekable})"
        )
    
    def _check_attached(self) -> IO[bytes]:
        """Return the storage, failing if the stream was detached."""
        if self._file is None:
            raise StreamError("Stream is detached and unusable")
        return self._file
    
    def _size_of(self, file: IO[bytes]) -> int:
        position = file.tell()
        file.seek(0, SeekWhence.END)
        size = file.tell()
        file.seek(position)
        return size
    
    def _read_all(self) -> bytes:
        """Read the whole buffer from position 0 without raising."""
        if not self._readable or self._file is None:
            return b""
        
        try:
            self._file.seek(0)
            return self._file.read()
        except (OSError, ValueError) as e:
            logger.debug(f"Suppressed error while reading whole stream: {e}")
            return b""
    
    def __str__(self) -> str:
        return self._read_all().decode("utf-8", errors="replace")
    
    def __bytes__(self) -> bytes:
        return self._read_all()
    
    def __repr__(self) -> str:
        state = "closed" if self.closed else "attached"
        return (
            f"<Stream [{state}] readable={self._readable} "
            f"writable={self._writable} seekable={self._seekable}>"
        )
    
    def __enter__(self) -> "Stream":
        return self
    
    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        if not self.closed:
            self.close()
    
    def close(self) -> None:
        """Close the stream and release the underlying storage."""
        self._check_attached()
        file = self.detach()
        if file is not None:
            file.close()
        logger.debug("Stream closed")
    
    def detach(self) -> Optional[IO[bytes]]:
        """
        Separate the underlying storage from the stream.
        
        The stream is unusable afterwards; ownership of the storage
        passes to the caller.
        
        Returns:
            The storage file object, or None if already detached
        """
        file = self._file
        self._file = None
        if file is not None:
            logger.debug("Stream detached")
        return file
    
    def get_size(self) -> Optional[int]:
        """Get the size of the stream in bytes."""
        file = self._check_attached()
        try:
            return self._size_of(file)
        except (OSError, ValueError) as e:
            logger.debug(f"Unable to determine stream size: {e}")
            return None
    
    def tell(self) -> int:
        """Return the current position of the cursor."""
        file = self._check_attached()
        try:
            return file.tell()
        except (OSError, ValueError) as e:
            raise StreamError(f"Unable to determine position: {e}", cause=e) from e
    
    def eof(self) -> bool:
        """Return True if the cursor is at or past the end of the stream."""
        file = self._check_attached()
        try:
            return file.tell() >= self._size_of(file)
        except (OSError, ValueError) as e:
            raise StreamError(f"Unable to determine end of stream: {e}", cause=e) from e
    
    def is_seekable(self) -> bool:
        return self._seekable
    
    def seek(self, offset: int, whence: int = SeekWhence.START) -> None:
        """
        Move the cursor.
        
        Args:
            offset: Offset in bytes relative to whence
            whence: One of SeekWhence.START, CURRENT or END
            
        Raises:
            StreamError: If the stream is detached or not seekable, whence is
                unknown, or the resulting position would be negative.
        """
        file = self._check_attached()
        
        if not self._seekable:
            raise StreamError("Stream is not seekable")
        
        try:
            reference = SeekWhence(whence)
        except ValueError as e:
            raise StreamError(f"Invalid whence value: {whence!r}", cause=e) from e
        
        try:
            if reference is SeekWhence.START:
                target = offset
            elif reference is SeekWhence.CURRENT:
                target = file.tell() + offset
            else:
                target = self._size_of(file) + offset
            
            if target < 0:
                raise StreamError(f"Stream seek failed: position {target} is negative")
            
            file.seek(target)
        except (OSError, ValueError) as e:
            logger.debug(f"Storage seek failed: {e}")
            raise StreamError(f"Stream seek failed: {e}", cause=e) from e
    
    def rewind(self) -> None:
        """Seek to the beginning of the stream."""
        self.seek(0)
    
    def is_writable(self) -> bool:
        return self._writable
    
    def write(self, data: StreamContent) -> int:
        """
        Write data at the cursor.
        
        Args:
            data: Bytes to write. Strings are UTF-8 encoded
            
        Returns:
            Number of bytes written
            
        Raises:
            StreamError: If the stream is detached, not writable, or
                nothing could be written.
        """
        file = self._check_attached()
        
        if not self._writable:
            raise StreamError("Stream cannot be written to")
        
        try:
            written = file.write(_to_bytes(data))
        except (OSError, ValueError) as e:
            logger.debug(f"Storage write failed: {e}")
            raise StreamError(f"Stream cannot be written to: {e}", cause=e) from e
        
        if not written:
            raise StreamError("Stream cannot be written to")
        
        return written
    
    def is_readable(self) -> bool:
        return self._readable
    
    def read(self, length: int) -> bytes:
        """
        Read up to length bytes from the cursor.
        
        A read that returns no bytes, including one at the end of the
        stream, is reported as an error.
        
        Args:
            length: Maximum number of bytes to read
            
        Returns:
            The bytes read
            
        Raises:
            StreamError: If the stream is detached, not readable, or the
                read yields no data.
        """
        file = self._check_attached()
        
        if not self._readable:
            raise StreamError("Unable to read from stream")
        
        if length < 0:
            raise StreamError("length must be non-negative")
        
        try:
            data = file.read(length)
        except (OSError, ValueError) as e:
            logger.debug(f"Storage read failed: {e}")
            raise StreamError(f"Unable to read from stream: {e}", cause=e) from e
        
        if not data:
            raise StreamError("Unable to read from stream")
        
        return data
    
    def get_contents(self) -> bytes:
        """Return the bytes remaining between the cursor and the end."""
        file = self._check_attached()
        
        if not self._readable:
            raise StreamError("Unable to read from stream")
        
        try:
            remaining = self._size_of(file) - file.tell()
        except (OSError, ValueError) as e:
            raise StreamError(f"Unable to read from stream: {e}", cause=e) from e
        
        if remaining <= 0:
            return b""
        
        return self.read(remaining)
    
    def get_metadata(self, key: Optional[str] = None) -> Any:
        """
        Get stream metadata as a dict, or a single value by key.
        
        Args:
            key: Specific metadata entry to retrieve
            
        Returns:
            The full metadata dict if no key is given, otherwise the value
            for key or None if it is unknown.
        """
        file = self._check_attached()
        
        metadata: Dict[str, Any] = {
            "mode": "w+b",
            "readable": self._readable,
            "writable": self._writable,
            "seekable": self._seekable,
            "eof": self.eof(),
            "size": self._size_of(file),
            "max_memory_size": self._max_memory_size,
        }
        
        if key is None:
            return metadata
        return metadata.get(key)
    
    @property
    def readable(self) -> bool:
        """Get whether the stream allows reads."""
        return self._readable
    
    @property
    def writable(self) -> bool:
        """Get whether the stream allows writes."""
        return self._writable
    
    @property
    def seekable(self) -> bool:
        """Get whether the stream allows seeking."""
        return self._seekable
    
    @property
    def closed(self) -> bool:
        """Get whether the stream has been closed or detached."""
        return self._file is None
