"""
Byte stream interface for tcpip_stream.

This module defines the ByteStream interface that stream implementations
follow, so the framing layer above can push and pull raw bytes without
knowing what transport carries them.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class ByteStream(ABC):
    """
    Interface for synchronous, timeout-bounded byte streams.
    
    A stream is created around already-established transport resources,
    marked connected with ``connect`` and released with ``disconnect``.
    Reads and writes move opaque bytes; no framing happens here.
    """
    
    @abstractmethod
    def connect(self) -> None:
        """
        Mark the stream as connected.
        
        The transport is expected to be connected already, so this is a
        state transition only.
        """
        pass
    
    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """
        Check if the stream is connected.
        
        Returns:
            True between ``connect`` and ``disconnect`` while at least one
            handle is open, False otherwise.
        """
        pass
    
    @abstractmethod
    def read(self, max_bytes: Optional[int] = None) -> bytes:
        """
        Read data from the stream, waiting up to the read timeout.
        
        Args:
            max_bytes: Maximum number of bytes to return.
        
        Returns:
            The bytes available, or an empty bytes object when the peer
            closed the connection.
        
        Raises:
            UsageError: If the stream cannot read; ``detail`` holds the
                        unprefixed text "Attempt to read from write only stream".
                        Its message is "Usage error: " followed by that text.
            TimeoutError: If no data arrives within the read timeout.
            TransportError: If the transport fails.
        """
        pass
    
    @abstractmethod
    def read_nonblock(self, max_bytes: Optional[int] = None) -> bytes:
        """
        Read whatever data is immediately available without waiting.
        
        Args:
            max_bytes: Maximum number of bytes to return.
        
        Returns:
            The bytes available, possibly empty.
        
        Raises:
            UsageError: If the stream cannot read.
            TransportError: If the transport fails.
        """
        pass
    
    @abstractmethod
    def write(self, data: bytes) -> int:
        """
        Write all of ``data`` to the stream, waiting up to the write timeout.
        
        Args:
            data: The data to write.
        
        Returns:
            The number of bytes written, always ``len(data)``.
        
        Raises:
            UsageError: If the stream cannot write.
            TimeoutError: If the transport stays unwritable past the timeout.
            TransportError: If the transport fails.
        """
        pass
    
    @abstractmethod
    def disconnect(self) -> None:
        """
        Close the stream and release its resources.
        
        Calling this more than once is allowed and does nothing after the
        first call.
        """
        pass
    
    @abstractmethod
    def get_extra_info(self, name: str) -> Optional[Any]:
        """
        Get extra information about the stream.
        
        Args:
            name: The name of the information to retrieve.
        
        Returns:
            The requested information or None if not available.
        """
        pass
