"""
Data types for the upload pipeline.

FileHandle and UploadRequest live for a single call. UploadResponse is
the wire contract returned by the storage service. UploadResult is the
tagged outcome handed back to the MCP and REST layers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, StrictBool, StrictStr

from .errors import ErrorKind, MissingUrl, UploadError, UploadRejected


@dataclass(frozen=True)
class FileHandle:
    """File bytes plus the basename they were read from."""
    content: bytes
    filename: str

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class UploadRequest:
    """One upload: file, its MIME type, and the expiration in seconds."""
    handle: FileHandle
    mime_type: str
    expire_after: int


class UploadResponse(BaseModel):
    """JSON body returned by POST /upload_volatile."""
    result: StrictBool
    url: Optional[StrictStr] = None
    error: Optional[StrictStr] = None

    def require_url(self, body: str) -> str:
        """Apply the contract: a false result or an empty URL is a failure."""
        if not self.result:
            raise UploadRejected(self.error, body)
        if not self.url:
            raise MissingUrl(body)
        return self.url


@dataclass(frozen=True)
class UploadResult:
    url: Optional[str] = None
    error: Optional[UploadError] = None

    @classmethod
    def success(cls, url: str) -> "UploadResult":
        return cls(url=url)

    @classmethod
    def failure(cls, error: UploadError) -> "UploadResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None

    def to_dict(self) -> dict:
        if self.error is not None:
            return self.error.to_dict()
        return {"url": self.url}
