"""
Local file acquisition.

Resolves a path, checks what is actually there, and reads regular files
into memory. Every failure is raised as a FileAccessError with a kind
that says exactly what went wrong.
"""

from __future__ import annotations

import errno
import logging
import os
import stat
from pathlib import Path
from typing import Union

from .errors import ErrorKind, FileAccessError
from .models import FileHandle

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

_ERRNO_KINDS = {
    errno.ENOENT: ErrorKind.NOT_FOUND,
    errno.ENOTDIR: ErrorKind.NOT_FOUND,
    errno.EISDIR: ErrorKind.IS_DIRECTORY,
    errno.EACCES: ErrorKind.PERMISSION_DENIED,
    errno.EPERM: ErrorKind.OPERATION_NOT_PERMITTED,
    errno.EMFILE: ErrorKind.RESOURCE_EXHAUSTED,
    errno.ENFILE: ErrorKind.RESOURCE_EXHAUSTED,
    errno.ENAMETOOLONG: ErrorKind.PATH_TOO_LONG,
}

_KIND_MESSAGES = {
    ErrorKind.NOT_FOUND: "File not found: {path}",
    ErrorKind.IS_DIRECTORY: "Path is a directory, not a file: {path}",
    ErrorKind.NOT_A_REGULAR_FILE: "Path is not a regular file: {path}",
    ErrorKind.PERMISSION_DENIED: "Permission denied: {path}",
    ErrorKind.OPERATION_NOT_PERMITTED: "Operation not permitted (file may be locked or restricted): {path}",
    ErrorKind.RESOURCE_EXHAUSTED: "Too many open files while reading: {path}",
    ErrorKind.PATH_TOO_LONG: "Path is too long: {path}",
}


def resolve_path(path: PathLike) -> Path:
    """Return an absolute, normalized path with ~ expanded."""
    return Path(os.path.abspath(os.path.expanduser(os.fspath(path))))


def _error(kind: ErrorKind, path: str) -> FileAccessError:
    return FileAccessError(_KIND_MESSAGES[kind].format(path=path), kind, path)


def _classify(exc: Exception, path: str) -> FileAccessError:
    """Map an error from stat/read onto a FileAccessError kind."""
    # ValueError covers NUL bytes and unencodable (surrogate) characters.
    kind = _ERRNO_KINDS.get(getattr(exc, "errno", None), ErrorKind.IO_ERROR)
    if kind is ErrorKind.IO_ERROR:
        detail = getattr(exc, "strerror", None) or exc
        return FileAccessError(f"Failed to read file {path!r}: {detail}", kind, path)
    return _error(kind, path)


def acquire(path: PathLike) -> FileHandle:
    """
    Read a local file for upload.

    Args:
        path: Absolute or relative path; relative paths resolve against
            the current working directory at call time.

    Returns:
        FileHandle with the full file content and its basename

    Raises:
        FileAccessError: with kind NotFound, IsDirectory, NotARegularFile,
            PermissionDenied, OperationNotPermitted, ResourceExhausted,
            PathTooLong or IOError
    """
    resolved = resolve_path(path)
    display = str(resolved)

    try:
        mode = resolved.stat().st_mode
    except (OSError, ValueError) as exc:
        raise _classify(exc, display) from exc

    if stat.S_ISDIR(mode):
        raise _error(ErrorKind.IS_DIRECTORY, display)
    if not stat.S_ISREG(mode):
        raise _error(ErrorKind.NOT_A_REGULAR_FILE, display)

    try:
        content = resolved.read_bytes()
    except (OSError, ValueError) as exc:
        raise _classify(exc, display) from exc

    logger.debug("Read %d bytes from %s", len(content), display)
    return FileHandle(content=content, filename=resolved.name)
