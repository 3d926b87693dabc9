"""
Network components for tcpip_stream.

This module provides the byte stream interface, its socket
implementation and the helpers and mocks that go with it.
"""

from .stream import ByteStream
from .socket_stream import StreamState, TcpipSocketStream
from .mock import MockSocket
from .utils import (
    is_socket_closed,
    set_nonblocking,
    close_socket,
    get_socket_info,
)

__all__ = [
    "ByteStream",
    "StreamState",
    "TcpipSocketStream",
    "MockSocket",
    "is_socket_closed",
    "set_nonblocking",
    "close_socket",
    "get_socket_info",
]
