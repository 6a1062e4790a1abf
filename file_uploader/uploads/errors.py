"""
Error types for the upload pipeline.

Every failure the pipeline can produce is an UploadError carrying an
ErrorKind plus whatever context (path, status code, raw body, cause) a
caller needs to render a precise message.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

# Raw bodies are echoed into messages; keep them readable.
MAX_BODY_IN_MESSAGE = 2000


class ErrorKind(str, Enum):
    NOT_FOUND = "NotFound"
    IS_DIRECTORY = "IsDirectory"
    NOT_A_REGULAR_FILE = "NotARegularFile"
    PERMISSION_DENIED = "PermissionDenied"
    OPERATION_NOT_PERMITTED = "OperationNotPermitted"
    RESOURCE_EXHAUSTED = "ResourceExhausted"
    PATH_TOO_LONG = "PathTooLong"
    IO_ERROR = "IOError"
    INVALID_EXPIRATION = "InvalidExpiration"
    TRANSPORT_ERROR = "TransportError"
    HTTP_ERROR = "HttpError"
    MALFORMED_RESPONSE = "MalformedResponse"
    INVALID_RESPONSE_SCHEMA = "InvalidResponseSchema"
    UPLOAD_REJECTED = "UploadRejected"
    MISSING_URL = "MissingUrl"


def truncate_body(body: str, limit: int = MAX_BODY_IN_MESSAGE) -> str:
    if len(body) <= limit:
        return body
    return f"{body[:limit]}... ({len(body) - limit} more characters)"


class UploadError(Exception):
    """Base class for all classified upload failures."""

    kind: ErrorKind = ErrorKind.IO_ERROR

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    def to_dict(self) -> dict:
        return {"error": self.message, "kind": self.kind.value}


class FileAccessError(UploadError):
    """The local file could not be acquired."""

    def __init__(self, message: str, kind: ErrorKind, path: str):
        super().__init__(message, kind)
        self.path = path


class ExpirationError(UploadError):
    kind = ErrorKind.INVALID_EXPIRATION

    def __init__(self, message: str, expire_after: object, minimum: int):
        super().__init__(message)
        self.expire_after = expire_after
        self.minimum = minimum


class TransportError(UploadError):
    """No HTTP response was received; the cause is chained."""

    kind = ErrorKind.TRANSPORT_ERROR


class ResponseError(UploadError):
    """A response arrived but could not be accepted."""

    def __init__(self, message: str, body: str):
        super().__init__(message)
        self.body = body


class HttpError(ResponseError):
    kind = ErrorKind.HTTP_ERROR

    def __init__(self, status_code: int, body: str, reason: str = ""):
        detail = f"{status_code} {reason}".strip()
        super().__init__(
            f"Upload request failed with HTTP {detail}\nResponse: {truncate_body(body)}",
            body,
        )
        self.status_code = status_code


class MalformedResponse(ResponseError):
    kind = ErrorKind.MALFORMED_RESPONSE

    def __init__(self, body: str, detail: str):
        super().__init__(
            f"Invalid JSON in server response: {detail}, body: {truncate_body(body)}",
            body,
        )


class InvalidResponseSchema(ResponseError):
    kind = ErrorKind.INVALID_RESPONSE_SCHEMA

    def __init__(self, body: str, detail: str):
        super().__init__(
            f"Invalid response from server: {detail}, body: {truncate_body(body)}",
            body,
        )
        self.detail = detail


class UploadRejected(ResponseError):
    kind = ErrorKind.UPLOAD_REJECTED

    def __init__(self, server_error: Optional[str], body: str):
        self.server_error = server_error or "Unknown error"
        super().__init__(
            f"Upload failed: {self.server_error}\nResponse: {truncate_body(body)}",
            body,
        )


class MissingUrl(ResponseError):
    kind = ErrorKind.MISSING_URL

    def __init__(self, body: str):
        super().__init__(
            f"Upload succeeded but no URL returned\nResponse: {truncate_body(body)}",
            body,
        )

