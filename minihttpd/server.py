"""Single-threaded, readiness-driven static file server."""

from __future__ import annotations

import selectors
import socket
import sys
from typing import Callable

from .http import BUF_SIZE, WWW_ROOT, RequestError, error_response, parse_http, send_response
from .sockets import passive_tcp

_POLL_INTERVAL = 0.5


def init_server(port: str | int = "8080") -> socket.socket:
    """Return a non-blocking listening socket on *port*.

    Raises SocketSetupError when the socket cannot be set up.
    """
    listener = passive_tcp(port, socket.SOMAXCONN)
    listener.setblocking(False)
    return listener


class Server:
    """Accepts clients on a listening socket and answers their requests."""

    def __init__(self, listener: socket.socket, www_root: str = WWW_ROOT) -> None:
        self.listener = listener
        self.www_root = www_root
        self.listener.setblocking(False)
        self._selector = selectors.DefaultSelector()
        self._selector.register(listener, selectors.EVENT_READ)
        self._closed = False

    @property
    def clients(self) -> list[socket.socket]:
        """The client connections currently being watched."""
        if self._closed:
            return []
        return [
            key.fileobj
            for key in self._selector.get_map().values()
            if key.fileobj is not self.listener
        ]

    def __enter__(self) -> Server:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _accept(self) -> None:
        try:
            conn, _ = self.listener.accept()
        except BlockingIOError:
            return
        except OSError as exc:
            print(f"accept: {exc}", file=sys.stderr)
            return
        conn.setblocking(False)
        self._selector.register(conn, selectors.EVENT_READ)
        print(f"\nClient FD {conn.fileno()} connected.", flush=True)

    def _drop(self, conn: socket.socket) -> int:
        fd = conn.fileno()
        try:
            self._selector.unregister(conn)
        except (KeyError, ValueError):
            pass
        conn.close()
        return fd

    @staticmethod
    def _send(conn: socket.socket, action: Callable[[], None]) -> bool:
        """Run *action* with *conn* in blocking mode; report whether it succeeded."""
        try:
            conn.setblocking(True)
            action()
        except OSError:
            return False
        try:
            conn.setblocking(False)
        except OSError:
            return False
        return True

    def handle_client(self, conn: socket.socket) -> bool:
        """Read one request from *conn* and answer it.

        Returns True if the connection stays open, False if it was closed.
        """
        try:
            data = conn.recv(BUF_SIZE - 1)
        except (BlockingIOError, InterruptedError):
            return True
        except OSError:
            data = b""

        if not data:
            fd = self._drop(conn)
            print(f"Client FD {fd} disconnected.", flush=True)
            return False

        try:
            req = parse_http(data)
        except RequestError:
            bad = error_response(400, "Bad Request")
            self._send(conn, lambda: conn.sendall(bad))
            self._drop(conn)
            return False

        print(
            f"REQUEST FD {conn.fileno()}: {req.method} {req.uri} | UA: {req.user_agent}",
            flush=True,
        )
        sent = self._send(conn, lambda: send_response(conn, req, self.www_root))
        if not sent or not req.keep_alive:
            self._drop(conn)
            return False
        return True

    def serve_once(self, timeout: float | None = None) -> int:
        """Wait up to *timeout* seconds for activity and handle it.

        Returns the number of ready sockets that were handled.
        """
        events = self._selector.select(timeout)
        for key, _mask in events:
            if key.fileobj is self.listener:
                self._accept()
            else:
                self.handle_client(key.fileobj)
        return len(events)

    def serve_forever(self) -> None:
        """Handle activity until the server is closed or waiting fails."""
        while not self._closed:
            try:
                self.serve_once(_POLL_INTERVAL)
            except (OSError, ValueError) as exc:
                if not self._closed:
                    print(f"select: {exc}", file=sys.stderr)
                break

    def close(self) -> None:
        """Close every client connection and the listening socket."""
        if self._closed:
            return
        self._closed = True
        keys = list(self._selector.get_map().values())
        for key in keys:
            if key.fileobj is not self.listener:
                key.fileobj.close()
        self._selector.close()
        self.listener.close()


def run_server(listener: socket.socket, www_root: str = WWW_ROOT) -> None:
    """Serve requests on *listener* until waiting for activity fails."""
    server = Server(listener, www_root)
    try:
        server.serve_forever()
    finally:
        server.close()