"""
Unit tests for custom exceptions.

Tests the exception hierarchy to ensure proper error handling
and cause tracking.
"""

import pytest

from tcpip_stream.exceptions import (
    StreamCoreError,
    UsageError,
    TimeoutError,
    TransportError,
)


class TestStreamCoreError:
    """Test base StreamCoreError class."""
    
    def test_basic_creation(self) -> None:
        """Test creating basic StreamCoreError."""
        error = StreamCoreError("Test error message")
        assert str(error) == "Test error message"
        assert error.message == "Test error message"
        assert error.cause is None
    
    def test_with_cause(self) -> None:
        """Test creating StreamCoreError with cause."""
        original_error = ValueError("Original error")
        error = StreamCoreError("Test error message", cause=original_error)
        assert str(error) == "Test error message"
        assert error.cause == original_error


class TestUsageError:
    """Test UsageError class."""
    
    def test_basic_creation(self) -> None:
        """Test creating basic UsageError."""
        error = UsageError("Attempt to read from write only stream")
        assert str(error) == "Usage error: Attempt to read from write only stream"
        assert error.cause is None


class TestTimeoutError:
    """Test TimeoutError class."""
    
    def test_basic_creation(self) -> None:
        """Test creating TimeoutError without a timeout value."""
        error = TimeoutError("Read timeout")
        assert str(error) == "Timeout error: Read timeout"
        assert error.timeout is None
    
    def test_with_timeout(self) -> None:
        """Test that the timeout value is included in the message."""
        error = TimeoutError("Write timeout", timeout=0.5)
        assert str(error) == "Timeout error: Write timeout (timeout: 0.5s)"
        assert error.timeout == 0.5
    
    def test_is_stream_core_error(self) -> None:
        """Test that it is caught as a library error, not a builtin one."""
        with pytest.raises(StreamCoreError):
            raise TimeoutError("Read timeout")


class TestTransportError:
    """Test TransportError class."""
    
    def test_with_cause(self) -> None:
        """Test creating TransportError with the socket error as cause."""
        original_error = BrokenPipeError(32, "Broken pipe")
        error = TransportError("Write failed", cause=original_error)
        assert "Transport error: Write failed" in str(error)
        assert error.cause is original_error


class TestExceptionHierarchy:
    """Test exception inheritance."""
    
    @pytest.mark.parametrize("cls", [UsageError, TimeoutError, TransportError])
    def test_subclasses(self, cls) -> None:
        """Test that every error derives from StreamCoreError."""
        assert issubclass(cls, StreamCoreError)
        assert issubclass(cls, Exception)


class TestUsageErrorDetail:
    """Test the unprefixed text kept on UsageError."""
    
    def test_detail(self) -> None:
        """Test that detail holds the message without its prefix."""
        error = UsageError("Attempt to write to read only stream")
        assert error.detail == "Attempt to write to read only stream"
        assert error.message == "Usage error: Attempt to write to read only stream"
