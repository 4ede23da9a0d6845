"""Resolve request paths inside a document root and open the files they name."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from typing import BinaryIO

PATH_MAX = 4096


class FileError(Exception):
    """A requested file cannot be served."""


class FileNotFound(FileError):
    """The requested file does not exist."""


class FileForbidden(FileError):
    """The requested path is outside the root, not a regular file, or unreadable."""


class FileServerError(FileError):
    """The file could not be served because of a server-side failure."""


@dataclass
class FileInfo:
    """An opened file ready to be sent."""

    path: str
    size: int
    file: BinaryIO | None

    def close(self) -> None:
        """Close the underlying file; closing twice is harmless."""
        if self.file is not None:
            self.file.close()
            self.file = None

    def read(self) -> bytes:
        """Return the remaining contents of the file."""
        if self.file is None:
            raise ValueError("file is closed")
        return self.file.read()

    def __enter__(self) -> FileInfo:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def open_file(uri: str, www_root: str) -> FileInfo:
    """Open the file that *uri* names below *www_root*.

    Raises FileNotFound, FileForbidden or FileServerError.
    """
    try:
        resolved_root = os.path.realpath(www_root, strict=True)
    except (OSError, ValueError) as exc:
        raise FileServerError(f"cannot resolve document root {www_root!r}") from exc

    if uri == "/":
        uri = "/index.html"

    full_path = f"{www_root}{uri}"
    if len(os.fsencode(full_path)) >= PATH_MAX:
        raise FileServerError("path too long")

    try:
        resolved = os.path.realpath(full_path, strict=True)
    except (OSError, ValueError) as exc:
        if "../" in uri or "..\\" in uri:
            raise FileForbidden(uri) from exc
        raise FileNotFound(uri) from exc

    if not resolved.startswith(resolved_root):
        raise FileForbidden(uri)

    try:
        st = os.stat(resolved)
    except OSError as exc:
        raise FileServerError(f"cannot stat {resolved!r}") from exc

    if not stat.S_ISREG(st.st_mode):
        raise FileForbidden(uri)

    if not os.access(resolved, os.R_OK):
        raise FileForbidden(uri)

    try:
        handle = open(resolved, "rb")
    except OSError as exc:
        raise FileServerError(f"cannot open {resolved!r}") from exc

    return FileInfo(path=resolved, size=st.st_size, file=handle)