"""Multi-threaded static file web server."""

from __future__ import annotations

import getopt
import os
import sys
import threading
from dataclasses import dataclass

from wserve.io_helper import open_listen_socket
from wserve.request import (
    DEFAULT_BUFFER_SIZE,
    DEFAULT_SCHED_ALGO,
    DEFAULT_THREADS,
    RequestBuffer,
    SchedulingPolicy,
    handle_request,
    serve_worker,
)

DEFAULT_PORT = 10000
DEFAULT_ROOT = "."

USAGE = (
    "usage: wserver [-d basedir] [-p port] [-t threads] [-b buffersize] "
    "[-s schedalg (0 - FIFO, 1 - SFF, 2 - Random)]"
)


@dataclass
class ServerConfig:
    """Settings the server runs with."""

    root_dir: str = DEFAULT_ROOT
    port: int = DEFAULT_PORT
    num_threads: int = DEFAULT_THREADS
    buffer_max_size: int = DEFAULT_BUFFER_SIZE
    scheduling_algo: SchedulingPolicy = DEFAULT_SCHED_ALGO


def _atoi(text: str) -> int:
    """Parse the leading integer of ``text``; 0 when there is none."""
    text = text.lstrip()
    end = 0
    if text[:1] in ("+", "-"):
        end = 1
    while end < len(text) and text[end].isdigit():
        end += 1
    try:
        return int(text[:end])
    except ValueError:
        return 0


def _usage_error() -> SystemExit:
    print(USAGE, file=sys.stderr)
    return SystemExit(1)


def parse_args(argv: list[str] | None = None) -> ServerConfig:
    """Build a configuration from command-line options.

    ``-h`` prints the usage and exits with status 0; an unknown option or
    an unknown scheduling policy prints it to stderr and exits with 1.
    """
    if argv is None:
        argv = sys.argv[1:]
    try:
        options, _rest = getopt.getopt(argv, "hd:p:t:b:s:")
    except getopt.GetoptError:
        raise _usage_error() from None

    config = ServerConfig()
    for flag, value in options:
        if flag == "-h":
            print(USAGE)
            raise SystemExit(0)
        if flag == "-d":
            config.root_dir = value
        elif flag == "-p":
            config.port = _atoi(value)
        elif flag == "-t":
            config.num_threads = _atoi(value)
        elif flag == "-b":
            config.buffer_max_size = _atoi(value)
        elif flag == "-s":
            try:
                config.scheduling_algo = SchedulingPolicy(_atoi(value))
            except ValueError:
                raise _usage_error() from None
    return config


def run(config: ServerConfig) -> None:
    """Serve files from ``config.root_dir`` until interrupted."""
    os.chdir(config.root_dir)
    buffer = RequestBuffer(config.buffer_max_size, config.scheduling_algo)
    workers = [
        threading.Thread(
            target=serve_worker, args=(buffer,), name=f"worker-{n}", daemon=True
        )
        for n in range(config.num_threads)
    ]
    for worker in workers:
        worker.start()

    try:
        with open_listen_socket(config.port) as listener:
            while True:
                conn, _address = listener.accept()
                try:
                    handle_request(conn, buffer)
                except OSError as exc:
                    print(f"request failed: {exc}", file=sys.stderr)
                    conn.close()
    finally:
        buffer.close()


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point of the server."""
    config = parse_args(argv)
    try:
        run(config)
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        print(f"wserver: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())