"""Content type and archive-entry helpers."""

import mimetypes
from pathlib import PurePosixPath

DEFAULT_MIME_TYPE = "application/octet-stream"

# Archive tools frequently mislabel these, so they are never guessed
FORCED_MIME_TYPES = {
    ".svg": "image/svg+xml",
}

# Web asset types missing from some platform mimetypes tables
WEB_MIME_TYPES = {
    ".webp": "image/webp",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".otf": "font/otf",
    ".ttf": "font/ttf",
    ".js": "text/javascript",
    ".mjs": "text/javascript",
    ".css": "text/css",
    ".json": "application/json",
    ".mp4": "video/mp4",
    ".webm": "video/webm",
}

# Basename prefixes of entries that archivers add for their own bookkeeping
METADATA_PREFIXES = (".", "__MACOSX")


def guess_mime_type(basename: str) -> str:
    """Return the MIME type to embed an asset with.

    Args:
        basename: Asset filename without directories

    Returns:
        A MIME type, falling back to application/octet-stream
    """
    suffix = PurePosixPath(basename).suffix.lower()
    if suffix in FORCED_MIME_TYPES:
        return FORCED_MIME_TYPES[suffix]

    guessed, _ = mimetypes.guess_type(basename, strict=False)
    if guessed:
        return guessed
    return WEB_MIME_TYPES.get(suffix, DEFAULT_MIME_TYPE)


def is_metadata_entry(basename: str) -> bool:
    """Check if an entry is hidden or archiver metadata."""
    return basename.startswith(METADATA_PREFIXES)
