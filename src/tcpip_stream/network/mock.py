"""
Mock socket implementation for testing.

This module provides MockSocket, an in-memory stand-in for a connected,
non-blocking socket. It can be scripted to accept only part of each
write, to report would-block, to hang up or to reset, so stream behavior
can be verified without real network I/O.
"""

from typing import Any, Dict, List, Optional, Union

BytesLike = Union[bytes, bytearray, memoryview]


class MockSocket:
    """
    Mock non-blocking socket for testing.
    
    Incoming data queued with ``feed`` is returned by ``recv``; an empty
    queue raises BlockingIOError until ``peer_close`` is called, after which
    ``recv`` returns end of stream. Every accepted ``send`` chunk is
    recorded in ``sent_chunks``.
    """
    
    _next_fileno = 1000
    
    def __init__(
        self,
        data: bytes = b"",
        max_send: Optional[int] = None,
        send_blocks: int = 0,
        always_block: bool = False,
    ):
        """
        Initialize the mock socket.
        
        Args:
            data: Initial data to be available for reading.
            max_send: Maximum bytes accepted by a single ``send``, None for all.
            send_blocks: Number of ``send`` calls that raise BlockingIOError
                        before writes are accepted.
            always_block: Make every ``send`` raise BlockingIOError.
        """
        self._data = bytearray(data)
        self._max_send = max_send
        self._send_blocks = send_blocks
        self._always_block = always_block
        self._peer_closed = False
        self._recv_error: Optional[Exception] = None
        self._send_error: Optional[Exception] = None
        self._closed = False
        self._blocking = True
        self._fileno = MockSocket._next_fileno
        MockSocket._next_fileno += 1
        
        self.sent_chunks: List[bytes] = []
        self.send_calls = 0
        self.recv_calls = 0
        self.close_calls = 0
        self.shutdown_calls = 0
        self._extra_info: Dict[str, Any] = {}
    
    def recv(self, bufsize: int) -> bytes:
        self.recv_calls += 1
        if self._closed:
            raise OSError(9, "Bad file descriptor")
        if self._recv_error is not None:
            raise self._recv_error
        if not self._data:
            if self._peer_closed:
                return b""
            raise BlockingIOError(11, "Resource temporarily unavailable")
        
        result = bytes(self._data[:bufsize])
        del self._data[:bufsize]
        return result
    
    def send(self, data: BytesLike) -> int:
        self.send_calls += 1
        if self._closed:
            raise OSError(9, "Bad file descriptor")
        if self._send_error is not None:
            raise self._send_error
        if self._always_block or self._send_blocks > 0:
            self._send_blocks = max(0, self._send_blocks - 1)
            raise BlockingIOError(11, "Resource temporarily unavailable")
        
        chunk = bytes(data)
        if self._max_send is not None:
            chunk = chunk[:self._max_send]
        self.sent_chunks.append(chunk)
        return len(chunk)
    
    def setblocking(self, flag: bool) -> None:
        self._blocking = flag
    
    def shutdown(self, how: int) -> None:
        self.shutdown_calls += 1
    
    def close(self) -> None:
        """Close the mock socket."""
        self.close_calls += 1
        self._closed = True
    
    def fileno(self) -> int:
        return -1 if self._closed else self._fileno
    
    def getpeername(self) -> Any:
        if "peername" not in self._extra_info:
            raise OSError(107, "Transport endpoint is not connected")
        return self._extra_info["peername"]
    
    def getsockname(self) -> Any:
        if "sockname" not in self._extra_info:
            raise OSError(107, "Transport endpoint is not connected")
        return self._extra_info["sockname"]
    
    @property
    def closed(self) -> bool:
        """Check if the mock socket is closed."""
        return self._closed
    
    @property
    def blocking(self) -> bool:
        return self._blocking
    
    @property
    def sent_data(self) -> bytes:
        """Get all data that was accepted by ``send``."""
        return b"".join(self.sent_chunks)
    
    def feed(self, data: bytes) -> None:
        """
        Add data to be available for reading.
        
        Args:
            data: The data to add.
        """
        self._data += data
    
    def peer_close(self) -> None:
        """Simulate the peer closing its end once queued data is consumed."""
        self._peer_closed = True
    
    def fail_recv(self, error: Exception) -> None:
        """Make every subsequent ``recv`` raise ``error``."""
        self._recv_error = error
    
    def fail_send(self, error: Exception) -> None:
        """Make every subsequent ``send`` raise ``error``."""
        self._send_error = error
    
    def set_extra_info(self, name: str, value: Any) -> None:
        """
        Set endpoint information for the mock socket.
        
        Args:
            name: "peername" or "sockname".
            value: The address to report.
        """
        self._extra_info[name] = value
