import io
import socket
import threading

import pytest

from wserve.client import main, print_response, send_request


def test_send_request_wire_format():
    left, right = socket.socketpair()
    with left, right:
        send_request(left, "/index.html")
        left.shutdown(socket.SHUT_WR)
        received = b""
        while chunk := right.recv(4096):
            received += chunk
    expected = f"GET /index.html HTTP/1.1\nhost: {socket.gethostname()}\n\r\n"
    assert received == expected.encode()


def test_print_response_headers_and_body():
    stream = io.BytesIO(
        b"HTTP/1.0 200 OK\r\nContent-Type: text/html\r\n\r\nhello\nworld\n"
    )
    out = io.StringIO()
    print_response(stream, out)
    assert out.getvalue() == (
        "Header: HTTP/1.0 200 OK\r\n"
        "Header: Content-Type: text/html\r\n"
        "hello\nworld\n"
    )


def test_print_response_without_blank_line_prints_only_headers():
    stream = io.BytesIO(b"HTTP/1.0 200 OK\r\n")
    out = io.StringIO()
    print_response(stream, out)
    assert out.getvalue() == "Header: HTTP/1.0 200 OK\r\n"


def test_print_response_empty_stream():
    out = io.StringIO()
    print_response(io.BytesIO(b""), out)
    assert out.getvalue() == ""


@pytest.mark.parametrize("argv", [[], ["localhost"], ["a", "1", "/", "extra"]])
def test_main_wrong_argument_count(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 1
    assert capsys.readouterr().err.startswith("Usage: wclient")


def test_main_fetches_from_server(capsys):
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    port = listener.getsockname()[1]
    seen = []

    def serve():
        conn, _ = listener.accept()
        with conn, conn.makefile("rb") as stream:
            while (line := stream.readline()) not in (b"", b"\r\n"):
                seen.append(line)
            conn.sendall(b"HTTP/1.0 200 OK\r\n\r\nbody text\n")

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    try:
        status = main(["127.0.0.1", str(port), "/page.html"])
    finally:
        thread.join(timeout=5)
        listener.close()

    assert status == 0
    assert seen[0] == b"GET /page.html HTTP/1.1\n"
    assert capsys.readouterr().out == "Header: HTTP/1.0 200 OK\r\nbody text\n"


def test_main_connection_refused_returns_one(capsys):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.bind(("127.0.0.1", 0))
        port = probe.getsockname()[1]
    assert main(["127.0.0.1", str(port), "/"]) == 1
    assert capsys.readouterr().err.startswith("wclient:")