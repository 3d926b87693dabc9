"""
Echo example using tcpip_stream.

This example starts a small echo server on the loopback interface and
talks to it through a TcpipSocketStream, showing reads, writes,
timeouts and teardown.
"""

import logging
import socket
import threading

from tcpip_stream import TcpipSocketStream, TimeoutError

# Configure logging
logging.basicConfig(level=logging.DEBUG)
logger = logging.getLogger(__name__)


def run_echo_server(server: socket.socket) -> None:
    """Echo everything received on one connection until the peer hangs up."""
    conn, _ = server.accept()
    with conn:
        while True:
            data = conn.recv(65535)
            if not data:
                break
            conn.sendall(data)


def main() -> None:
    server = socket.create_server(("127.0.0.1", 0))
    thread = threading.Thread(target=run_echo_server, args=(server,), daemon=True)
    thread.start()
    
    # The same connection serves both directions
    sock = socket.create_connection(server.getsockname())
    
    with TcpipSocketStream(sock, sock, write_timeout=5.0, read_timeout=1.0) as stream:
        written = stream.write(b"hello, stream")
        logger.info(f"Wrote {written} bytes")
        
        echoed = stream.read()
        logger.info(f"Read back: {echoed!r}")
        
        try:
            stream.read()
        except TimeoutError as e:
            logger.info(f"Nothing more to read: {e}")
        
        logger.info(f"Stream info: peer={stream.get_extra_info('peername')}")
    
    logger.info(f"Connected after exit: {stream.is_connected}")
    thread.join(timeout=1.0)
    server.close()


if __name__ == "__main__":
    main()
