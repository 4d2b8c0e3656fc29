"""Socket and line-reading helpers shared by the server and the client."""

from __future__ import annotations

import socket
from typing import BinaryIO

LISTEN_BACKLOG = 1024


def readline(stream: BinaryIO, maxlen: int) -> bytes:
    """Read one line from a binary stream.

    At most ``maxlen - 1`` bytes are read, stopping after a newline.
    The newline, if read, is kept. An empty result means end of stream.
    """
    if maxlen < 1:
        raise ValueError(f"maxlen must be at least 1, got {maxlen}")
    return stream.readline(maxlen - 1)


def open_client_socket(hostname: str, port: int) -> socket.socket:
    """Open an IPv4 TCP connection to ``hostname``:``port``.

    Raises ``socket.gaierror`` when the name cannot be resolved and
    ``OSError`` when the connection fails.
    """
    address = socket.gethostbyname(hostname)
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.connect((address, port))
    except OSError:
        sock.close()
        raise
    return sock


def open_listen_socket(port: int) -> socket.socket:
    """Create an IPv4 TCP socket listening on ``port`` on every address."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        # Avoid "Address already in use" when the server restarts.
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind(("", port))
        sock.listen(LISTEN_BACKLOG)
    except OSError:
        sock.close()
        raise
    return sock