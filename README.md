# wserve

A small web server that serves static files over HTTP/1.0. Accepted requests
are checked on the main thread and then placed in a bounded buffer; a fixed
pool of worker threads takes them out, in the order a scheduling policy sets,
and sends the files. A minimal command-line client comes with it.

## Installation

```
pip install .
```

## Running the server

```
wserver [-d basedir] [-p port] [-t threads] [-b buffersize] [-s schedalg]
```

| Option | Meaning | Default |
|--------|---------|---------|
| `-d`   | directory to serve files from (the process changes into it) | `.` |
| `-p`   | port to listen on, on every IPv4 address | `10000` |
| `-t`   | number of worker threads | `4` |
| `-b`   | most requests the buffer holds at once | `64` |
| `-s`   | scheduling policy: `0` FIFO, `1` smallest file first, `2` random | `0` |
| `-h`   | print usage and exit | |

Numeric options are read like C's `atoi`: the leading integer is used and
anything that is not a number counts as `0`. An unknown option, or a
scheduling policy other than `0`, `1` or `2`, prints the usage to standard
error and exits with status 1. The server runs until interrupted (Ctrl-C),
and prints a `method:... uri:... version:...` line for every request.

Only `GET` requests are answered (the method is compared without regard to
case). The request path is taken relative to the served directory, and a path
that ends in `/` serves `index.html` from that directory. Otherwise the server
sends an HTML error page and closes the connection:

- `501 Not Implemented` for methods other than `GET`
- `404 Not found` when the file does not exist
- `501 Not Implemented` for an existing path that contains `cgi`
- `403 Forbidden` when the path is not a regular file readable by its owner

The content type is chosen from what the file name contains: `.html` gives
`text/html`, `.gif` gives `image/gif`, `.jpg` gives `image/jpeg`, and anything
else `text/plain`.

## Fetching a file

```
wclient localhost 10000 /index.html
```

The client sends one `GET` request and prints each response header on a line
that starts with `Header: `, followed by the body. With the wrong number of
arguments it prints its usage and exits with status 1; when it cannot connect
it reports the error and exits with status 1.

## Using it from Python

```python
from wserve.server import parse_args, run

config = parse_args(["-d", "public", "-p", "8080", "-t", "8", "-s", "1"])
run(config)  # blocks, serving until interrupted
```

`parse_args` returns a `ServerConfig` dataclass (`root_dir`, `port`,
`num_threads`, `buffer_max_size`, `scheduling_algo`), which can also be built
directly.

`wserve.request` holds the building blocks:

- `RequestBuffer(max_size, policy)` is a thread-safe buffer of
  `PendingRequest` items (`conn`, `filename`, `filesize`). `put` waits while
  it is full and `get` waits while it is empty. With `SchedulingPolicy.FIFO`
  the oldest request comes out first, with `SFF` the one with the smallest
  file, and with `RANDOM` any one at random. After `close`, `get` hands out
  what is left and then returns `None`, and `put` raises `RuntimeError`.
- `handle_request(conn, buffer)` reads a request and either answers it with an
  error or queues it; `serve_worker(buffer)` serves queued requests until the
  buffer is closed and empty.
- `parse_uri(uri)` returns `(is_static, filename, cgiargs)`, `get_filetype`
  maps a file name to its content type, `serve_static` sends a file, and
  `request_error` sends an error page.

`wserve.io_helper` provides `readline`, `open_client_socket` and
`open_listen_socket`; `wserve.client` provides `send_request` and
`print_response`.

## What it does not do

- It does not run CGI programs or serve any other dynamic content.
- It speaks HTTP/1.0 only: one request per connection, no keep-alive, no TLS.
- It does not reject paths containing `..`, so it should not be exposed to
  untrusted clients.

## Tests

```
pip install .[test]
pytest
```