"""MIME type inference from file extensions."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import PurePath

logger = logging.getLogger(__name__)

FALLBACK_MIME_TYPE = "application/octet-stream"

# Extensions whose registry entry is missing or differs across platforms.
EXTENSION_OVERRIDES = {
    ".md": "text/markdown",
    ".markdown": "text/markdown",
    ".csv": "text/csv",
    ".json": "application/json",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
    ".mp4": "video/mp4",
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".yaml": "application/yaml",
    ".yml": "application/yaml",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
}

# mimetypes reports compression as an encoding; the bytes on the wire are the
# compressed stream, so the encoding decides the type.
ENCODING_MIME_TYPES = {
    "gzip": "application/gzip",
    "bzip2": "application/x-bzip2",
    "xz": "application/x-xz",
    "compress": "application/x-compress",
    "br": "application/x-brotli",
}


def infer_mime_type(filename: str) -> str:
    """Return the MIME type for filename, or application/octet-stream."""
    suffix = PurePath(filename).suffix.lower()
    if suffix in EXTENSION_OVERRIDES:
        return EXTENSION_OVERRIDES[suffix]

    mime_type = None
    if suffix:
        mime_type, encoding = mimetypes.guess_type(PurePath(filename).name, strict=False)
        if encoding:
            mime_type = ENCODING_MIME_TYPES.get(encoding)
    if not mime_type:
        logger.warning(
            'Could not detect MIME type for "%s". Using %s.', filename, FALLBACK_MIME_TYPE
        )
        return FALLBACK_MIME_TYPE
    return mime_type
