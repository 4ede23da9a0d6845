"""Command-line entry point for the static file server."""

from __future__ import annotations

import argparse
import sys

from .http import WWW_ROOT
from .server import init_server, run_server
from .sockets import SocketSetupError

PORT = "8080"


def main(argv: list[str] | None = None) -> int:
    """Start the server and serve until interrupted; return the exit status."""
    parser = argparse.ArgumentParser(prog="minihttpd", description="Serve static files over HTTP.")
    parser.add_argument("-p", "--port", default=PORT, help="port or service to listen on")
    parser.add_argument("-r", "--root", default=WWW_ROOT, help="directory to serve files from")
    args = parser.parse_args(argv)

    try:
        listener = init_server(args.port)
    except SocketSetupError as exc:
        print(exc, file=sys.stderr)
        print("Error starting server", file=sys.stderr)
        return 1

    print(f"Server listening on port {args.port}", flush=True)

    try:
        run_server(listener, args.root)
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())