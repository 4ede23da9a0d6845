# minihttpd

A small static-file HTTP/1.1 server. It answers `GET` requests by sending
files from a web root directory, handling all of its connections in one
single-threaded event loop.

## What it does

- Serves files from a web root, `./www` by default. A request for `/` is
  answered with `/index.html`.
- Answers only `GET`; any other method gets `405 Method Not Allowed`.
  A URI that does not start with `/` gets `400 Bad Request`.
- Requires a request line with a method, a URI and a version, and a
  `Host:` header. A request that lacks them, or that is 8192 characters or
  longer, gets `400 Bad Request` and the connection is closed.
- Refuses paths that leave the web root, directories and unreadable files
  with `403 Forbidden`. Missing files get `404 Not Found`; failures on the
  server side get `500 Internal Server Error`.
- Keeps the connection open unless the client sends a `Connection:`
  header containing `close`.
- Sends a `Content-Type` based on the file extension: `.html`, `.css`,
  `.js`, `.png`, `.jpg` and `.jpeg` are recognised. Every other file is
  sent as `application/octet-stream`.

New connections, disconnections and each request (file descriptor, method,
URI and the client's `User-Agent`) are logged to standard output.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running

Put your files in a `www` directory and start the server from the
directory that contains it:

```
minihttpd
```

The server listens on port 8080 on all interfaces until it is interrupted
with Ctrl-C. The port and the web root can be changed:

```
minihttpd --port 9000 --root /srv/site
```

(`-p` and `-r` are the short forms.) If the listening socket cannot be set
up, the command prints the reason and exits with status 1. Then try:

```
curl -i http://localhost:8080/
```

## Using it from Python

The building blocks can be used on their own:

```python
from minihttpd.mime import get_mime
from minihttpd.http import parse_http, build_response

get_mime("www/index.html")   # "text/html"
get_mime("www/archive.tar")  # "application/octet-stream"

req = parse_http(
    "GET /style.css HTTP/1.1\r\n"
    "Host: localhost\r\n"
    "User-Agent: curl/8.0\r\n"
    "Connection: close\r\n"
    "\r\n"
)
req.method      # "GET"
req.uri         # "/style.css"
req.user_agent  # "curl/8.0"
req.keep_alive  # False

build_response(req, "./www")  # status line, headers and file body as bytes
```

- `parse_http` accepts `str` or `bytes` and raises `RequestError` for a
  request it cannot accept.
- `error_response(code, message)` builds an empty-bodied response;
  `send_response(sock, req, www_root)` writes the response for a request
  to a socket.
- `minihttpd.files.open_file(uri, www_root)` resolves a URI inside a web
  root and returns a `FileInfo` (usable as a context manager), or raises
  `FileNotFound`, `FileForbidden` or `FileServerError`, all subclasses of
  `FileError`.
- `minihttpd.sockets.passive_tcp(service, qlen)` and
  `passive_sock(service, transport, qlen)` create bound sockets on the
  wildcard address and raise `SocketSetupError` on failure.

To run the server from your own code:

```python
from minihttpd.server import init_server, run_server

listener = init_server("8080")
run_server(listener, "./www")
```

For finer control, `Server(listener, www_root)` exposes `serve_once(timeout)`,
`serve_forever()`, `handle_client(conn)` and `close()`, and can be used as a
context manager.

## What it does not do

There is no TLS, no directory listing, no support for `HEAD`, `POST` or
range requests, and no configuration file. Each request is read with a
single receive of up to 8191 bytes.