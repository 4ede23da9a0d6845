import re
import socket
import threading

import pytest

from minihttpd.http import error_response
from minihttpd.server import Server, init_server

PAGE = b"<h1>hello</h1>"


@pytest.fixture
def server(tmp_path):
    root = tmp_path / "www"
    root.mkdir()
    (root / "index.html").write_bytes(PAGE)
    srv = Server(init_server("0"), www_root=str(root))
    yield srv
    srv.close()


def _connect(listener):
    port = listener.getsockname()[1]
    host = "::1" if listener.family == socket.AF_INET6 else "127.0.0.1"
    return socket.create_connection((host, port), timeout=5)


def _pump(srv, times=2):
    for _ in range(times):
        srv.serve_once(2)


def _read_response(sock):
    data = b""
    while b"\r\n\r\n" not in data:
        chunk = sock.recv(4096)
        if not chunk:
            return data, b""
        data += chunk
    head, _, body = data.partition(b"\r\n\r\n")
    length = int(re.search(rb"Content-Length: (\d+)", head).group(1))
    while len(body) < length:
        chunk = sock.recv(4096)
        if not chunk:
            break
        body += chunk
    return head, body


def _read_all(sock):
    data = b""
    while True:
        chunk = sock.recv(4096)
        if not chunk:
            return data
        data += chunk


def test_init_server_returns_nonblocking_listener():
    listener = init_server("0")
    try:
        assert listener.getblocking() is False
        assert listener.type == socket.SOCK_STREAM
    finally:
        listener.close()


def test_serve_once_without_activity_returns_zero(server):
    assert server.serve_once(0) == 0


def test_serves_file_and_keeps_connection(server):
    with _connect(server.listener) as client:
        client.sendall(b"GET / HTTP/1.1\r\nHost: localhost\r\n\r\n")
        _pump(server)
        head, body = _read_response(client)
        assert head.startswith(b"HTTP/1.1 200 OK")
        assert b"Content-Type: text/html" in head
        assert b"Connection: keep-alive" in head
        assert body == PAGE
        assert len(server.clients) == 1

        client.sendall(b"GET /index.html HTTP/1.1\r\nHost: localhost\r\n\r\n")
        assert server.serve_once(2) == 1
        _, body = _read_response(client)
        assert body == PAGE


def test_connection_close_closes_socket(server):
    with _connect(server.listener) as client:
        client.sendall(
            b"GET / HTTP/1.1\r\nHost: localhost\r\nConnection: close\r\n\r\n"
        )
        _pump(server)
        head, body = _read_response(client)
        assert b"Connection: close" in head
        assert body == PAGE
        assert client.recv(16) == b""
        assert server.clients == []


def test_malformed_request_gets_400_and_close(server):
    with _connect(server.listener) as client:
        client.sendall(b"GET / HTTP/1.1\r\n\r\n")
        _pump(server)
        assert _read_all(client) == error_response(400, "Bad Request")
        assert server.clients == []


def test_missing_file_gets_404(server):
    with _connect(server.listener) as client:
        client.sendall(b"GET /missing.html HTTP/1.1\r\nHost: localhost\r\n\r\n")
        _pump(server)
        head, body = _read_response(client)
        assert head + b"\r\n\r\n" + body == error_response(404, "Not Found")


def test_client_disconnect_is_handled(server, capsys):
    client = _connect(server.listener)
    server.serve_once(2)
    assert len(server.clients) == 1
    client.close()
    server.serve_once(2)
    assert server.clients == []
    assert "disconnected" in capsys.readouterr().out


def test_serve_forever_stops_after_close(server):
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    with _connect(server.listener) as client:
        client.sendall(
            b"GET / HTTP/1.1\r\nHost: localhost\r\nConnection: close\r\n\r\n"
        )
        _, body = _read_response(client)
    assert body == PAGE
    server.close()
    thread.join(timeout=5)
    assert thread.is_alive() is False


def test_close_closes_listener(server):
    server.close()
    assert server.listener.fileno() == -1
    assert server.clients == []