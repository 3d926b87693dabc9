"""
TCP/IP socket stream for tcpip_stream.

This module implements TcpipSocketStream, a synchronous byte stream over
an optional write socket and an optional read socket. The two may be the
same connection. Reads and writes use non-blocking socket calls and wait
for readiness with ``select`` so that every blocking operation is bounded
by its configured timeout.
"""

import errno
import logging
import select
import socket
import ssl
import threading
import time
from enum import Enum
from typing import Any, List, Optional

from typing_extensions import Self

from .stream import ByteStream
from .utils import close_socket, get_socket_info, is_socket_closed, set_nonblocking
from ..exceptions import TimeoutError, TransportError, UsageError

logger = logging.getLogger(__name__)

# Raised by non-blocking socket calls that would have had to wait
WOULD_BLOCK_ERRORS = (BlockingIOError, ssl.SSLWantReadError, ssl.SSLWantWriteError)

# Raised when the peer tore the connection down
PEER_CLOSED_ERRORS = (ConnectionResetError, ConnectionAbortedError)

# errno values from calls on a handle that was closed on this side
LOCALLY_CLOSED_ERRNOS = (errno.EBADF, errno.ENOTSOCK)


class StreamState(Enum):
    """States of a TcpipSocketStream."""
    UNCONNECTED = "unconnected"    # Stream created, connect not called yet
    CONNECTED = "connected"        # Stream usable for reads and writes
    DISCONNECTED = "disconnected"  # Handles released, cannot be reused


class TcpipSocketStream(ByteStream):
    """
    Byte stream over a pair of independently optional socket handles.
    
    The stream owns its handles: ``disconnect`` closes each distinct
    handle exactly once, even when the same socket serves both directions.
    Handles are switched to non-blocking mode on construction. Would-block
    conditions are retried internally until the direction's timeout runs
    out; a timeout of None waits indefinitely.
    
    The stream supports one reader and one writer at a time. Concurrent
    writes are serialized so their bytes never interleave.
    """
    
    # Largest chunk requested from the read handle by default
    DEFAULT_READ_SIZE = 65535
    
    def __init__(
        self,
        write_handle: Optional[Any] = None,
        read_handle: Optional[Any] = None,
        write_timeout: Optional[float] = None,
        read_timeout: Optional[float] = None,
    ):
        """
        Initialize the stream.
        
        Args:
            write_handle: Connected socket used for writing, or None
            read_handle: Connected socket used for reading, or None
            write_timeout: Seconds to wait for write readiness, None for no limit
            read_timeout: Seconds to wait for read readiness, None for no limit
        
        Raises:
            ValueError: If a timeout is negative
        """
        for name, value in (("write_timeout", write_timeout), ("read_timeout", read_timeout)):
            if value is not None and value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        
        self._write_handle = write_handle
        self._read_handle = read_handle
        self._write_timeout = write_timeout
        self._read_timeout = read_timeout
        self._state = StreamState.UNCONNECTED
        self._write_lock = threading.Lock()
        self._peer_closed = False
        
        # Metrics
        self._bytes_read = 0
        self._bytes_written = 0
        
        for handle in self._handles():
            set_nonblocking(handle)
        
        # Written to by disconnect to wake a read waiting in select
        self._wakeup_reader: Optional[socket.socket] = None
        self._wakeup_writer: Optional[socket.socket] = None
        if read_handle is not None:
            self._wakeup_reader, self._wakeup_writer = socket.socketpair()
            self._wakeup_reader.setblocking(False)
            self._wakeup_writer.setblocking(False)
        
        logger.debug(
            f"Socket stream initialized: write_timeout={write_timeout}, "
            f"read_timeout={read_timeout}"
        )
    
    def __enter__(self) -> Self:
        self.connect()
        return self
    
    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.disconnect()
    
    def __del__(self) -> None:
        for sock in (getattr(self, "_wakeup_reader", None), getattr(self, "_wakeup_writer", None)):
            if sock is not None:
                sock.close()
    
    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(state={self._state.value}, "
            f"readable={self._read_handle is not None}, "
            f"writable={self._write_handle is not None})"
        )
    
    @property
    def state(self) -> StreamState:
        """Current lifecycle state."""
        return self._state
    
    @property
    def read_timeout(self) -> Optional[float]:
        return self._read_timeout
    
    @property
    def write_timeout(self) -> Optional[float]:
        return self._write_timeout
    
    @property
    def peer_closed(self) -> bool:
        """
        Check if the peer has closed the connection.
        
        Reads return an empty result both when no data is pending and when
        the peer has gone away. This flag tells the two apart: it turns True
        once end of stream or a connection reset was seen on the read handle.
        """
        return self._peer_closed
    
    @property
    def bytes_read(self) -> int:
        return self._bytes_read
    
    @property
    def bytes_written(self) -> int:
        return self._bytes_written
    
    def connect(self) -> None:
        """
        Mark the stream as connected.
        
        The handles arrive already connected, so no socket calls are made.
        A disconnected stream stays disconnected.
        """
        if self._state is StreamState.DISCONNECTED:
            logger.debug("Ignoring connect on a disconnected stream")
            return
        self._state = StreamState.CONNECTED
        logger.debug("Socket stream connected")
    
    @property
    def is_connected(self) -> bool:
        """
        Check if the stream is connected.
        
        Returns:
            True if ``connect`` was called, ``disconnect`` was not, and at
            least one handle is present and open.
        """
        if self._state is not StreamState.CONNECTED:
            return False
        return any(not is_socket_closed(handle) for handle in self._handles())
    
    def read_nonblock(self, max_bytes: Optional[int] = None) -> bytes:
        """
        Read whatever data is immediately available without waiting.
        
        Args:
            max_bytes: Maximum number of bytes to return, defaults to
                      DEFAULT_READ_SIZE.
        
        Returns:
            The bytes available. Empty if nothing is pending or if the peer
            closed the connection.
        
        Raises:
            UsageError: If there is no read handle or the stream is disconnected.
            TransportError: If the socket fails.
        """
        handle = self._readable_handle()
        try:
            return self._recv(handle, max_bytes)
        except WOULD_BLOCK_ERRORS:
            return b""
    
    def read(self, max_bytes: Optional[int] = None) -> bytes:
        """
        Read data, waiting up to the read timeout for some to arrive.
        
        Returns as soon as any bytes are available; the result may be
        shorter than a logical message.
        
        Args:
            max_bytes: Maximum number of bytes to return, defaults to
                      DEFAULT_READ_SIZE.
        
        Returns:
            The bytes read. Empty if the peer closed the connection, the
            read handle was closed on this side, or the stream was
            disconnected while waiting.
        
        Raises:
            UsageError: If there is no read handle or the stream is disconnected.
            TimeoutError: If no data arrives within the read timeout.
            TransportError: If the socket fails.
        """
        handle = self._readable_handle()
        deadline = self._deadline(self._read_timeout)
        
        while True:
            try:
                return self._recv(handle, max_bytes)
            except WOULD_BLOCK_ERRORS:
                pass
            
            if not self._wait_ready(handle, deadline, writable=False):
                logger.debug(f"Read timed out after {self._read_timeout}s")
                raise TimeoutError("Read timeout", self._read_timeout)
            
            if self._state is StreamState.DISCONNECTED:
                return b""
    
    def write(self, data: bytes) -> int:
        """
        Write all of ``data``, waiting up to the write timeout for buffer space.
        
        Sockets may accept fewer bytes than offered; the remainder is resent
        until everything is written or the timeout expires. The timeout
        bounds the whole call, not each individual wait.
        
        Args:
            data: The bytes to write.
        
        Returns:
            The number of bytes written, equal to ``len(data)``.
        
        Raises:
            UsageError: If there is no write handle or the stream is disconnected.
            TimeoutError: If the socket stays unwritable past the write timeout.
            TransportError: If the socket fails.
        """
        handle = self._writable_handle()
        view = memoryview(data)
        total = len(view)
        if total == 0:
            return 0
        
        with self._write_lock:
            deadline = self._deadline(self._write_timeout)
            offset = 0
            waited = False
            while offset < total:
                blocked = True
                wait_writable = True
                try:
                    sent = handle.send(view[offset:])
                    blocked = False
                except ssl.SSLWantReadError:
                    # TLS needs to read a record before it can write
                    sent = 0
                    wait_writable = False
                except WOULD_BLOCK_ERRORS:
                    sent = 0
                except OSError as e:
                    raise TransportError("Write failed", cause=e) from e

                if sent:
                    offset += sent
                    self._bytes_written += sent
                    waited = False
                    continue

                if not blocked and waited:
                    raise TransportError(
                        f"Socket accepted no data after reporting writable "
                        f"({offset}/{total} bytes sent)"
                    )

                waited = True
                if not self._wait_ready(handle, deadline, writable=wait_writable):
                    logger.debug(
                        f"Write timed out after {self._write_timeout}s "
                        f"with {offset}/{total} bytes sent"
                    )
                    raise TimeoutError("Write timeout", self._write_timeout)
                
                if self._state is StreamState.DISCONNECTED:
                    raise UsageError("Attempt to write to disconnected stream")
        
        return total
    
    def disconnect(self) -> None:
        """
        Close every distinct handle exactly once.
        
        Handles that are already closed are left alone, and a socket used
        for both directions is closed a single time. A read blocked waiting
        for data is woken and returns an empty result. Calling this again
        does nothing.
        """
        if self._state is StreamState.DISCONNECTED:
            return
        self._state = StreamState.DISCONNECTED
        
        closed = 0
        for handle in self._handles():
            try:
                if close_socket(handle):
                    closed += 1
            except OSError as e:
                logger.warning(f"Error closing socket handle: {e}")
        
        self._release_wakeup()
        logger.debug(f"Socket stream disconnected, closed {closed} handle(s)")
    
    def get_extra_info(self, name: str) -> Optional[Any]:
        """
        Get extra information about the stream.
        
        Args:
            name: One of "read_handle", "write_handle", "peername",
                 "sockname", "state", "bytes_read" or "bytes_written".
        
        Returns:
            The requested information or None if not available.
        """
        if name == "read_handle":
            return self._read_handle
        elif name == "write_handle":
            return self._write_handle
        elif name in ("peername", "sockname"):
            for handle in self._handles():
                value = get_socket_info(handle)[name]
                if value is not None:
                    return value
            return None
        elif name == "state":
            return self._state.value
        elif name == "bytes_read":
            return self._bytes_read
        elif name == "bytes_written":
            return self._bytes_written
        return None
    
    def _handles(self) -> List[Any]:
        """Distinct handles by identity, write handle first."""
        handles: List[Any] = []
        for handle in (self._write_handle, self._read_handle):
            if handle is not None and not any(handle is seen for seen in handles):
                handles.append(handle)
        return handles
    
    def _readable_handle(self) -> Any:
        if self._read_handle is None:
            raise UsageError("Attempt to read from write only stream")
        if self._state is StreamState.DISCONNECTED:
            raise UsageError("Attempt to read from disconnected stream")
        return self._read_handle
    
    def _writable_handle(self) -> Any:
        if self._write_handle is None:
            raise UsageError("Attempt to write to read only stream")
        if self._state is StreamState.DISCONNECTED:
            raise UsageError("Attempt to write to disconnected stream")
        return self._write_handle
    
    def _recv(self, handle: Any, max_bytes: Optional[int]) -> bytes:
        """Single non-blocking receive; would-block errors propagate."""
        if max_bytes is None:
            max_bytes = self.DEFAULT_READ_SIZE
        elif max_bytes <= 0:
            raise ValueError(f"max_bytes must be positive, got {max_bytes}")
        
        if is_socket_closed(handle):
            logger.debug("Read handle is closed locally")
            return b""

        try:
            data = handle.recv(max_bytes)
        except WOULD_BLOCK_ERRORS:
            raise
        except PEER_CLOSED_ERRORS as e:
            logger.debug(f"Connection reset by peer: {e}")
            data = b""
        except OSError as e:
            if e.errno in LOCALLY_CLOSED_ERRNOS:
                logger.debug(f"Read handle closed during read: {e}")
                return b""
            raise TransportError("Read failed", cause=e) from e
        
        if not data:
            if not self._peer_closed:
                logger.debug("Peer closed the connection")
            self._peer_closed = True
            return b""
        
        self._bytes_read += len(data)
        return data
    
    @staticmethod
    def _deadline(timeout: Optional[float]) -> Optional[float]:
        if timeout is None:
            return None
        return time.monotonic() + timeout
    
    def _wait_ready(self, handle: Any, deadline: Optional[float], writable: bool) -> bool:
        """
        Wait until ``handle`` is ready or the deadline passes.
        
        Read waits also watch the wakeup socket so that ``disconnect`` can
        end them early.
        
        Returns:
            True if something became ready, False on timeout.
        """
        if is_socket_closed(handle):
            return True

        timeout = None if deadline is None else max(0.0, deadline - time.monotonic())
        try:
            if writable:
                _, ready, _ = select.select([], [handle], [], timeout)
            else:
                watched = [handle]
                if self._wakeup_reader is not None:
                    watched.append(self._wakeup_reader)
                ready, _, _ = select.select(watched, [], [], timeout)
        except (OSError, ValueError) as e:
            # Handles closed under a pending wait
            if self._state is StreamState.DISCONNECTED or is_socket_closed(handle):
                return True
            raise TransportError("Readiness wait failed", cause=e) from e
        return bool(ready)
    
    def _release_wakeup(self) -> None:
        reader, writer = self._wakeup_reader, self._wakeup_writer
        self._wakeup_reader = None
        self._wakeup_writer = None
        if writer is not None:
            try:
                writer.send(b".")
            except OSError:
                pass
            writer.close()
        if reader is not None:
            reader.close()
