"""
Tests for socket utilities.
"""

import socket

import pytest

from tcpip_stream.network import (
    MockSocket,
    close_socket,
    get_socket_info,
    is_socket_closed,
    set_nonblocking,
)


class TestIsSocketClosed:
    """Test cases for is_socket_closed."""
    
    def test_real_socket(self):
        """Test closed-state detection on a real socket."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        assert not is_socket_closed(sock)
        
        sock.close()
        assert is_socket_closed(sock)
    
    def test_closed_attribute(self):
        """Test that a boolean closed attribute is trusted."""
        sock = MockSocket()
        assert not is_socket_closed(sock)
        
        sock.close()
        assert is_socket_closed(sock)
    
    def test_fileno_error(self):
        """Test that a handle whose fileno fails counts as closed."""
        class Broken:
            def fileno(self):
                raise ValueError("I/O operation on closed file")
        
        assert is_socket_closed(Broken())


class TestSetNonblocking:
    """Test cases for set_nonblocking."""
    
    def test_real_socket(self):
        """Test switching a real socket to non-blocking mode."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            set_nonblocking(sock)
            assert sock.getblocking() is False
        finally:
            sock.close()
    
    def test_handle_without_setblocking(self):
        """Test that handles without setblocking are left alone."""
        class Plain:
            closed = False
        
        set_nonblocking(Plain())


class TestCloseSocket:
    """Test cases for close_socket."""
    
    def test_close_open_socket(self):
        """Test that an open handle is shut down and closed."""
        sock = MockSocket()
        
        assert close_socket(sock) is True
        assert sock.closed
        assert sock.shutdown_calls == 1
        assert sock.close_calls == 1
    
    def test_already_closed(self):
        """Test that a closed handle is not closed again."""
        sock = MockSocket()
        sock.close()
        
        assert close_socket(sock) is False
        assert sock.close_calls == 1
    
    def test_none(self):
        """Test that None is accepted."""
        assert close_socket(None) is False
    
    def test_shutdown_failure_still_closes(self):
        """Test that a failing shutdown does not prevent the close."""
        class Unconnected(MockSocket):
            def shutdown(self, how):
                raise OSError(107, "Transport endpoint is not connected")
        
        sock = Unconnected()
        assert close_socket(sock) is True
        assert sock.closed
    
    def test_real_socket(self, tcp_pair):
        """Test closing a real connected socket."""
        client, _ = tcp_pair
        
        assert close_socket(client) is True
        assert client.fileno() == -1


class TestGetSocketInfo:
    """Test cases for get_socket_info."""
    
    def test_none(self):
        """Test information for a missing handle."""
        assert get_socket_info(None) == {'peername': None, 'sockname': None, 'fileno': None}
    
    def test_real_socket(self, tcp_pair):
        """Test information for a connected socket."""
        client, peer = tcp_pair
        info = get_socket_info(client)
        
        assert info['peername'] == peer.getsockname()
        assert info['sockname'] == client.getsockname()
        assert info['fileno'] == client.fileno()
    
    def test_unconnected_mock(self):
        """Test that lookup errors become None."""
        sock = MockSocket()
        info = get_socket_info(sock)
        
        assert info['peername'] is None
        assert info['fileno'] == sock.fileno()
