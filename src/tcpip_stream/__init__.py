"""
tcpip_stream - timeout-bounded byte streams over TCP/IP sockets

A small transport layer that moves raw bytes over already-connected
sockets, absorbing partial writes and would-block conditions and
closing its handles exactly once.
"""

__version__ = "0.1.0"
__author__ = "Developer"
__email__ = "dev@example.com"

# Import main components for easy access
from .network import ByteStream, StreamState, TcpipSocketStream
from .exceptions import StreamCoreError, UsageError, TimeoutError, TransportError

__all__ = [
    "ByteStream",
    "StreamState",
    "TcpipSocketStream",
    "StreamCoreError",
    "UsageError",
    "TimeoutError",
    "TransportError",
]
