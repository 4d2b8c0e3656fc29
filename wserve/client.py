"""Minimal HTTP client: sends one GET request and prints the response."""

from __future__ import annotations

import socket
import sys
from typing import BinaryIO, TextIO

from wserve.io_helper import open_client_socket, readline

MAXBUF = 8192

USAGE = "Usage: wclient <host> <port> <filepath>"


def send_request(sock: socket.socket, filename: str) -> None:
    """Send a GET request for ``filename`` over ``sock``."""
    hostname = socket.gethostname()
    request = f"GET {filename} HTTP/1.1\nhost: {hostname}\n\r\n"
    sock.sendall(request.encode("utf-8"))


def _decode(line: bytes) -> str:
    return line.decode("utf-8", errors="replace")


def print_response(stream: BinaryIO, out: TextIO) -> None:
    """Print the headers (each prefixed with ``Header: ``) and then the body."""
    while True:
        line = readline(stream, MAXBUF)
        if not line or line == b"\r\n":
            break
        out.write("Header: " + _decode(line))

    while line := readline(stream, MAXBUF):
        out.write(_decode(line))


def _atoi(text: str) -> int:
    digits = ""
    for char in text.strip():
        if not char.isdigit():
            break
        digits += char
    return int(digits) if digits else 0


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point of the client."""
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) != 3:
        print(USAGE, file=sys.stderr)
        raise SystemExit(1)

    host, port_text, filename = argv
    try:
        sock = open_client_socket(host, _atoi(port_text))
    except OSError as exc:
        print(f"wclient: {exc}", file=sys.stderr)
        return 1

    with sock, sock.makefile("rb") as stream:
        send_request(sock, filename)
        print_response(stream, sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())