"""
Volatile storage upload client.

Sends one multipart POST to {base_url}/upload_volatile and validates the
JSON reply against the UploadResponse contract. There is no retry: a
single attempt either returns the URL or raises a classified UploadError.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx
import requests
from pydantic import ValidationError

from .errors import HttpError, InvalidResponseSchema, MalformedResponse, TransportError
from .models import FileHandle, UploadRequest, UploadResponse

logger = logging.getLogger(__name__)

UPLOAD_PATH = "/upload_volatile"


def build_upload_url(base_url: str) -> str:
    return base_url.rstrip("/") + UPLOAD_PATH


def build_headers(auth_token: Optional[str]) -> dict[str, str]:
    """Bearer auth only when a token is configured; the server decides the rest."""
    if auth_token:
        return {"Authorization": f"Bearer {auth_token}"}
    return {}


def build_multipart(request: UploadRequest) -> tuple[dict, dict]:
    """Return (files, data) for requests/httpx: the file part and the expire_after field."""
    handle = request.handle
    files = {"file": (handle.filename, handle.content, request.mime_type)}
    data = {"expire_after": str(request.expire_after)}
    return files, data


def check_response(status_code: int, reason: str, body: str) -> str:
    """Reject non-2xx statuses, then validate the body."""
    if not 200 <= status_code < 300:
        raise HttpError(status_code, body, reason)
    return parse_upload_response(body)


def _log_upload(request: UploadRequest, upload_url: str) -> None:
    logger.info(
        "Uploading %s (%d bytes, %s, expire_after=%ss) to %s",
        request.handle.filename,
        request.handle.size,
        request.mime_type,
        request.expire_after,
        upload_url,
    )


def parse_upload_response(body: str) -> str:
    """
    Validate a 2xx response body and return the uploaded file's URL.

    Raises:
        MalformedResponse: body is not JSON
        InvalidResponseSchema: JSON does not match UploadResponse
        UploadRejected: result is false
        MissingUrl: result is true but url is missing or empty
    """
    try:
        parsed = UploadResponse.model_validate_json(body)
    except ValidationError as exc:
        if any(err.get("type") == "json_invalid" for err in exc.errors()):
            raise MalformedResponse(body, str(exc)) from exc
        raise InvalidResponseSchema(body, str(exc)) from exc
    return parsed.require_url(body)


class UploadClient:
    """HTTP client for the volatile storage endpoint."""

    def __init__(
        self,
        base_url: str,
        auth_token: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url
        self.auth_token = auth_token
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def upload_url(self) -> str:
        return build_upload_url(self.base_url)

    def send(self, request: UploadRequest) -> str:
        """Upload the file once and return the URL exactly as the server sent it."""
        files, data = build_multipart(request)
        _log_upload(request, self.upload_url)

        try:
            response = self.session.post(
                self.upload_url,
                files=files,
                data=data,
                headers=build_headers(self.auth_token),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as exc:
            raise TransportError(f"Upload request to {self.upload_url} failed: {exc}") from exc

        return check_response(response.status_code, response.reason or "", response.text)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "UploadClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class AsyncUploadClient:
    """
    Async HTTP client for the volatile storage endpoint.

    Cancelling a pending send() closes the connection, so the upload
    stops as soon as the awaiting task is cancelled.
    """

    def __init__(
        self,
        base_url: str,
        auth_token: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url
        self.auth_token = auth_token
        self.timeout = timeout
        self.client = client or httpx.AsyncClient()

    @property
    def upload_url(self) -> str:
        return build_upload_url(self.base_url)

    async def send(self, request: UploadRequest) -> str:
        files, data = build_multipart(request)
        _log_upload(request, self.upload_url)

        try:
            response = await self.client.post(
                self.upload_url,
                files=files,
                data=data,
                headers=build_headers(self.auth_token),
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"Upload request to {self.upload_url} failed: {exc}") from exc

        return check_response(response.status_code, response.reason_phrase or "", response.text)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "AsyncUploadClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def send_upload(
    handle: FileHandle,
    mime_type: str,
    expire_after: int,
    base_url: str,
    auth_token: Optional[str] = None,
    *,
    timeout: Optional[float] = None,
) -> str:
    """One-shot upload with a short-lived client."""
    request = UploadRequest(handle=handle, mime_type=mime_type, expire_after=expire_after)
    with UploadClient(base_url, auth_token, timeout=timeout) as client:
        return client.send(request)
