"""Content-type lookup by file extension."""

DEFAULT_MIME = "application/octet-stream"

_MIME_TYPES = {
    ".html": "text/html",
    ".css": "text/css",
    ".js": "application/javascript",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}


def get_mime(path: str) -> str:
    """Return the MIME type for *path*, judged by the text after its last dot."""
    dot = path.rfind(".")
    if dot < 0:
        return DEFAULT_MIME
    return _MIME_TYPES.get(path[dot:], DEFAULT_MIME)