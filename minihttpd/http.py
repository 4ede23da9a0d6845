"""Request parsing and response building for a static GET-only server."""

from __future__ import annotations

import re
import socket
from dataclasses import dataclass

from .files import FileForbidden, FileInfo, FileNotFound, FileServerError, open_file
from .mime import get_mime

BUF_SIZE = 8192
MAX_URI = 2048
MAX_METHOD = 15
MAX_USER_AGENT = 511
WWW_ROOT = "./www"

_LINE_BREAK = re.compile(r"[\r\n]")


class RequestError(ValueError):
    """The raw request could not be parsed."""


@dataclass
class HttpRequest:
    """The parts of a request the server acts on."""

    method: str
    uri: str
    user_agent: str = "Unknown"
    keep_alive: bool = True


def parse_http(raw: str | bytes) -> HttpRequest:
    """Parse a raw request; raise RequestError if it is malformed."""
    if isinstance(raw, bytes):
        raw = raw.split(b"\0", 1)[0].decode("latin-1")
    else:
        raw = raw.split("\0", 1)[0]

    if len(raw) >= BUF_SIZE:
        raise RequestError("request too large")

    line_end = raw.find("\r\n")
    if line_end < 0:
        raise RequestError("request line not terminated")

    tokens = [token for token in raw[:line_end].split(" ") if token]
    if len(tokens) < 3:
        raise RequestError("malformed request line")
    if "Host:" not in raw:
        raise RequestError("missing Host header")

    method, uri = tokens[0], tokens[1]
    if len(uri) >= MAX_URI:
        raise RequestError("URI too long")

    ua_pos = raw.find("User-Agent:")
    if ua_pos >= 0:
        rest = raw[ua_pos + len("User-Agent:"):].lstrip(" ")
        user_agent = _LINE_BREAK.split(rest, maxsplit=1)[0][:MAX_USER_AGENT]
    else:
        user_agent = "Unknown"

    conn_pos = raw.find("Connection:")
    keep_alive = not (conn_pos >= 0 and "close" in raw[conn_pos:])

    return HttpRequest(
        method=method[:MAX_METHOD],
        uri=uri,
        user_agent=user_agent,
        keep_alive=keep_alive,
    )


def error_response(code: int, message: str) -> bytes:
    """Return an empty-bodied response that closes the connection."""
    return (
        f"HTTP/1.1 {code} {message}\r\n"
        "Content-Length: 0\r\n"
        "Connection: close\r\n"
        "\r\n"
    ).encode("latin-1")


def _prepare(req: HttpRequest, www_root: str) -> tuple[bytes, FileInfo | None]:
    """Return the response header and, on success, the opened file."""
    if not req.uri.startswith("/"):
        return error_response(400, "Bad Request"), None
    if not req.method.startswith("GET"):
        return error_response(405, "Method Not Allowed"), None

    try:
        info = open_file(req.uri, www_root)
    except FileNotFound:
        return error_response(404, "Not Found"), None
    except FileForbidden:
        return error_response(403, "Forbidden"), None
    except FileServerError:
        return error_response(500, "Internal Server Error"), None

    header = (
        "HTTP/1.1 200 OK\r\n"
        f"Content-Type: {get_mime(info.path)}\r\n"
        f"Content-Length: {info.size}\r\n"
        f"Connection: {'keep-alive' if req.keep_alive else 'close'}\r\n"
        "\r\n"
    ).encode("latin-1")
    return header, info


def build_response(req: HttpRequest, www_root: str = WWW_ROOT) -> bytes:
    """Return the complete response, header and body, for *req*."""
    header, info = _prepare(req, www_root)
    if info is None:
        return header
    with info:
        return header + info.read()


def send_response(sock: socket.socket, req: HttpRequest, www_root: str = WWW_ROOT) -> None:
    """Write the response for *req* to *sock*."""
    header, info = _prepare(req, www_root)
    sock.sendall(header)
    if info is None:
        return
    with info:
        if info.size:
            sock.sendfile(info.file, 0, info.size)