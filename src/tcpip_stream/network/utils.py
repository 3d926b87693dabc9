"""
Socket utilities for tcpip_stream.

This module provides helpers for working with socket-like handles:
querying their closed state, switching them to non-blocking mode,
closing them and describing their endpoints.
"""

import socket
from typing import Any, Dict, Optional


def is_socket_closed(sock: Any) -> bool:
    """
    Check if a socket-like handle has been closed.
    
    Handles exposing a boolean ``closed`` attribute are trusted directly;
    otherwise a closed socket is recognised by ``fileno()`` returning -1.
    
    Args:
        sock: Socket-like object
    
    Returns:
        True if the handle is closed
    """
    closed = getattr(sock, "closed", None)
    if isinstance(closed, bool):
        return closed
    try:
        return sock.fileno() == -1
    except (OSError, ValueError):
        return True


def set_nonblocking(sock: Any) -> None:
    """
    Put a socket-like handle into non-blocking mode.
    
    Handles without ``setblocking`` are assumed to be non-blocking already.
    
    Args:
        sock: Socket-like object
    """
    setblocking = getattr(sock, "setblocking", None)
    if setblocking is not None and not is_socket_closed(sock):
        setblocking(False)


def close_socket(sock: Optional[Any]) -> bool:
    """
    Shut down and close a socket-like handle if it is still open.
    
    The shutdown is best effort: a peer that already went away makes
    ``shutdown`` fail, which does not prevent the close.
    
    Args:
        sock: Socket-like object or None
    
    Returns:
        True if ``close`` was called, False if there was nothing to close
    
    Raises:
        OSError: If closing the handle fails
    """
    if sock is None or is_socket_closed(sock):
        return False
    
    shutdown = getattr(sock, "shutdown", None)
    if shutdown is not None:
        try:
            shutdown(socket.SHUT_RDWR)
        except (OSError, socket.error):
            pass
    
    sock.close()
    return True


def get_socket_info(sock: Optional[Any]) -> Dict[str, Any]:
    """
    Get information about a socket.
    
    Args:
        sock: Socket-like object or None
    
    Returns:
        Dictionary with socket information
    """
    info: Dict[str, Any] = {'peername': None, 'sockname': None, 'fileno': None}
    if sock is None:
        return info
    
    for key in ('peername', 'sockname', 'fileno'):
        getter = getattr(sock, key if key == 'fileno' else f"get{key}", None)
        if getter is None:
            continue
        try:
            info[key] = getter()
        except (OSError, socket.error):
            info[key] = None
    
    return info
