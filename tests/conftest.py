"""
Pytest configuration for tcpip_stream tests.

This file contains shared fixtures and configuration
for all tests in the project.
"""

import socket
from typing import Iterator, Tuple

import pytest

from tcpip_stream.network import MockSocket


@pytest.fixture
def tcp_pair() -> Iterator[Tuple[socket.socket, socket.socket]]:
    """Create a connected loopback TCP pair as (client, server-side peer)."""
    server = socket.create_server(("127.0.0.1", 0))
    try:
        client = socket.create_connection(server.getsockname(), timeout=5)
        peer, _ = server.accept()
    finally:
        server.close()
    
    yield client, peer
    
    for sock in (client, peer):
        sock.close()


@pytest.fixture
def mock_socket():
    """Create a scriptable mock socket for testing."""
    def _create_socket(*args, **kwargs) -> MockSocket:
        return MockSocket(*args, **kwargs)
    return _create_socket


@pytest.fixture
def sample_data() -> bytes:
    """Sample payload for testing."""
    return b"test"


@pytest.fixture
def sample_large_data() -> bytes:
    """Sample large payload for testing."""
    return bytes(range(256)) * 4096  # 1MB of data
