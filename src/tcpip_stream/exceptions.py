"""
Custom exceptions for tcpip_stream.

This module defines the exception hierarchy raised by the byte stream
when it is misused, when a readiness wait times out or when the
underlying socket fails.
"""

from typing import Optional


class StreamCoreError(Exception):
    """Base exception for all tcpip_stream errors."""
    
    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class UsageError(StreamCoreError):
    """
    Raised when an operation is invoked without the handle it needs.
    
    ``message`` carries the ``"Usage error: "`` prefix like the other
    errors; ``detail`` keeps the unprefixed text, for example
    ``"Attempt to read from write only stream"``.
    """
    
    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Usage error: {message}", cause)
        self.detail = message


class TimeoutError(StreamCoreError):
    """Raised when a readiness wait exceeds its configured bound."""
    
    def __init__(self, message: str, timeout: Optional[float] = None) -> None:
        if timeout is not None:
            message = f"{message} (timeout: {timeout}s)"
        super().__init__(f"Timeout error: {message}")
        self.timeout = timeout


class TransportError(StreamCoreError):
    """Raised when the underlying socket fails for a reason other than would-block."""
    
    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Transport error: {message}", cause)
