"""Creation of passive (listening) sockets for servers."""

from __future__ import annotations

import socket


class SocketSetupError(OSError):
    """A passive socket could not be created, bound or put into listening mode."""


def passive_sock(service: str | int, transport: str = "tcp", qlen: int = socket.SOMAXCONN) -> socket.socket:
    """Return a socket bound to *service* on the wildcard address.

    *transport* ``"udp"`` gives a datagram socket; anything else gives a
    stream socket, which is also put into listening mode with backlog *qlen*.
    """
    socktype = socket.SOCK_DGRAM if transport == "udp" else socket.SOCK_STREAM

    try:
        candidates = socket.getaddrinfo(
            None, service, socket.AF_UNSPEC, socktype, 0, socket.AI_PASSIVE
        )
    except socket.gaierror as exc:
        raise SocketSetupError(f"getaddrinfo error: {exc}") from exc

    for family, kind, proto, _canonname, address in candidates:
        try:
            sock = socket.socket(family, kind, proto)
        except OSError:
            continue
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind(address)
        except OSError:
            sock.close()
            continue
        break
    else:
        raise SocketSetupError(f"could not bind to service {service}")

    if socktype == socket.SOCK_STREAM:
        try:
            sock.listen(qlen)
        except OSError as exc:
            sock.close()
            raise SocketSetupError(f"can't listen on {service} port") from exc

    return sock


def passive_tcp(service: str | int, qlen: int = socket.SOMAXCONN) -> socket.socket:
    """Return a listening TCP socket bound to *service*."""
    return passive_sock(service, "tcp", qlen)