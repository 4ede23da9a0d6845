"""A small static-file HTTP/1.1 server with MIME lookup, request parsing and socket helpers."""

__version__ = "0.1.0"