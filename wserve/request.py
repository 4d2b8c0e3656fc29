"""HTTP request handling, the shared request buffer and worker logic."""

from __future__ import annotations

import os
import random
import socket
import stat
import sys
import threading
from dataclasses import dataclass
from enum import IntEnum

from wserve.io_helper import readline

MAXBUF = 8192

DEFAULT_BUFFER_SIZE = 64
DEFAULT_THREADS = 4


class SchedulingPolicy(IntEnum):
    """Order in which buffered requests are handed to workers."""

    FIFO = 0
    SFF = 1
    RANDOM = 2


DEFAULT_SCHED_ALGO = SchedulingPolicy.FIFO


@dataclass
class PendingRequest:
    """A static file request waiting to be served."""

    conn: socket.socket
    filename: str
    filesize: int


class RequestBuffer:
    """Bounded, thread-safe buffer of pending requests.

    ``put`` blocks while the buffer is full and ``get`` blocks while it is
    empty. After ``close``, ``get`` drains what is left and then returns
    ``None``.
    """

    def __init__(
        self,
        max_size: int = DEFAULT_BUFFER_SIZE,
        policy: SchedulingPolicy = DEFAULT_SCHED_ALGO,
    ) -> None:
        if max_size < 1:
            raise ValueError(f"buffer size must be at least 1, got {max_size}")
        self.max_size = max_size
        self.policy = SchedulingPolicy(policy)
        self._items: list[PendingRequest] = []
        self._closed = False
        self._cond = threading.Condition()

    def put(self, item: PendingRequest) -> None:
        """Add a request, waiting for room if the buffer is full."""
        with self._cond:
            self._cond.wait_for(
                lambda: self._closed or len(self._items) < self.max_size
            )
            if self._closed:
                raise RuntimeError("request buffer is closed")
            self._items.append(item)
            self._cond.notify_all()

    def get(self) -> PendingRequest | None:
        """Take the next request by policy, or ``None`` once closed and empty."""
        with self._cond:
            self._cond.wait_for(lambda: self._closed or bool(self._items))
            if not self._items:
                return None
            item = self._items.pop(self._next_index())
            self._cond.notify_all()
            return item

    def close(self) -> None:
        """Stop accepting requests and wake every waiting thread."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    def _next_index(self) -> int:
        if self.policy is SchedulingPolicy.SFF:
            return min(
                enumerate(self._items), key=lambda pair: pair[1].filesize
            )[0]
        if self.policy is SchedulingPolicy.RANDOM:
            return random.randrange(len(self._items))
        return 0


def request_error(
    conn: socket.socket, cause: str, errnum: str, shortmsg: str, longmsg: str
) -> None:
    """Send an HTML error response and close the connection."""
    body = (
        "<!doctype html>\r\n"
        "<head>\r\n"
        "  <title>CYB-3053 WebServer Error</title>\r\n"
        "</head>\r\n"
        "<body>\r\n"
        f"  <h2>{errnum}: {shortmsg}</h2>\r\n"
        f"  <p>{longmsg}: {cause}</p>\r\n"
        "</body>\r\n"
        "</html>\r\n"
    ).encode("utf-8", errors="replace")
    header = (
        f"HTTP/1.0 {errnum} {shortmsg}\r\n"
        "Content-Type: text/html\r\n"
        f"Content-Length: {len(body)}\r\n\r\n"
    ).encode("utf-8", errors="replace")
    try:
        conn.sendall(header + body)
    finally:
        conn.close()


def read_headers(stream) -> list[bytes]:
    """Read header lines up to the blank line (or end of stream) and return them."""
    headers = []
    while True:
        line = readline(stream, MAXBUF)
        if not line or line == b"\r\n":
            return headers
        headers.append(line)


def parse_uri(uri: str) -> tuple[bool, str, str]:
    """Split a URI into ``(is_static, filename, cgiargs)``.

    URIs containing ``cgi`` are dynamic; their query string becomes the
    CGI arguments. Static URIs ending in ``/`` map to ``index.html``.
    """
    if "cgi" not in uri:
        filename = "." + uri
        if uri.endswith("/"):
            filename += "index.html"
        return True, filename, ""
    path, _, cgiargs = uri.partition("?")
    return False, "." + path, cgiargs


def get_filetype(filename: str) -> str:
    """Return the content type for a file name."""
    if ".html" in filename:
        return "text/html"
    if ".gif" in filename:
        return "image/gif"
    if ".jpg" in filename:
        return "image/jpeg"
    return "text/plain"


def serve_static(conn: socket.socket, filename: str, filesize: int) -> None:
    """Send a 200 response with the contents of a static file."""
    filetype = get_filetype(filename)
    with open(filename, "rb") as source:
        content = source.read(filesize)
    header = (
        "HTTP/1.0 200 OK\r\n"
        "Server: OSTEP WebServer\r\n"
        f"Content-Length: {filesize}\r\n"
        f"Content-Type: {filetype}\r\n\r\n"
    ).encode("ascii")
    conn.sendall(header + content)


def handle_request(conn: socket.socket, buffer: RequestBuffer) -> None:
    """Read a request from ``conn`` and either queue it or answer with an error.

    Valid static requests are put into ``buffer``; the worker that takes
    them serves the file and closes the connection.
    """
    with conn.makefile("rb") as stream:
        line = readline(stream, MAXBUF).decode("iso-8859-1")
        method, uri, version = (line.split() + ["", "", ""])[:3]
        print(f"method:{method} uri:{uri} version:{version}")

        if method.upper() != "GET":
            request_error(
                conn, method, "501", "Not Implemented",
                "server does not implement this method",
            )
            return
        read_headers(stream)

    is_static, filename, _cgiargs = parse_uri(uri)

    try:
        info = os.stat(filename)
    except OSError:
        request_error(
            conn, filename, "404", "Not found", "server could not find this file"
        )
        return

    if not is_static:
        request_error(
            conn, filename, "501", "Not Implemented",
            "server does not serve dynamic content request",
        )
        return

    if not stat.S_ISREG(info.st_mode) or not info.st_mode & stat.S_IRUSR:
        request_error(
            conn, filename, "403", "Forbidden", "server could not read this file"
        )
        return

    buffer.put(PendingRequest(conn, filename, info.st_size))


def serve_worker(buffer: RequestBuffer) -> None:
    """Serve requests from ``buffer`` until it is closed and empty."""
    while (item := buffer.get()) is not None:
        try:
            serve_static(item.conn, item.filename, item.filesize)
        except OSError as exc:
            print(f"failed to serve {item.filename}: {exc}", file=sys.stderr)
        finally:
            item.conn.close()