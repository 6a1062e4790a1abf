"""
Upload pipeline: acquire -> infer -> send.

Each call is independent. Settings are the only shared state and are
never mutated. Failures come back as a tagged UploadResult instead of an
exception so the MCP layer can render them directly.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from ..config.settings import Settings, get_settings
from .client import AsyncUploadClient, UploadClient
from .errors import ExpirationError, UploadError
from .inspector import PathLike, acquire
from .mime import infer_mime_type
from .models import UploadRequest, UploadResult

logger = logging.getLogger(__name__)

ClientFactory = Callable[[Settings], UploadClient]
AsyncClientFactory = Callable[[Settings], AsyncUploadClient]


def default_client_factory(settings: Settings) -> UploadClient:
    return UploadClient(
        settings.OAP_STORAGE_BASE_URL,
        settings.OAP_CLIENT_KEY,
        timeout=settings.OAP_UPLOAD_TIMEOUT,
    )


def default_async_client_factory(settings: Settings) -> AsyncUploadClient:
    return AsyncUploadClient(
        settings.OAP_STORAGE_BASE_URL,
        settings.OAP_CLIENT_KEY,
        timeout=settings.OAP_UPLOAD_TIMEOUT,
    )


def resolve_expire_after(expire_after: Optional[int], minimum: int) -> int:
    """Default to the minimum; reject anything below it before any I/O."""
    if expire_after is None:
        return minimum
    # JSON clients may send 120.0 for an integer field.
    if isinstance(expire_after, float) and expire_after.is_integer():
        expire_after = int(expire_after)
    if isinstance(expire_after, bool) or not isinstance(expire_after, int):
        raise ExpirationError(
            f"expire_after must be an integer number of seconds, got {expire_after!r}",
            expire_after,
            minimum,
        )
    if expire_after < minimum:
        raise ExpirationError(
            f"expire_after must be at least {minimum} seconds, got {expire_after}",
            expire_after,
            minimum,
        )
    return expire_after


class UploadPipeline:
    """Composes file acquisition, MIME inference and the upload client."""

    def __init__(
        self,
        settings: Settings | None = None,
        client_factory: ClientFactory = default_client_factory,
        async_client_factory: AsyncClientFactory = default_async_client_factory,
    ):
        self.settings = settings or get_settings()
        self.client_factory = client_factory
        self.async_client_factory = async_client_factory

    @property
    def min_expire_after(self) -> int:
        return self.settings.OAP_MIN_EXPIRE_AFTER

    def upload(self, path: PathLike, expire_after: Optional[int] = None) -> UploadResult:
        """Upload a local file and return its URL or a classified error."""
        client = None
        try:
            expire_seconds = resolve_expire_after(expire_after, self.min_expire_after)
            handle = acquire(path)
            mime_type = infer_mime_type(handle.filename)
            client = self.client_factory(self.settings)
            return self._send(client, UploadRequest(handle, mime_type, expire_seconds))
        except UploadError as exc:
            return self._failed(path, exc)
        finally:
            if client is not None:
                client.close()

    async def upload_async(self, path: PathLike, expire_after: Optional[int] = None) -> UploadResult:
        """
        Async upload() for event-loop hosts such as the MCP server.

        The file is read in a worker thread and sent with an async client.
        Cancelling the awaiting task closes the in-flight connection and
        re-raises asyncio.CancelledError, so the task ends up cancelled.
        """
        try:
            expire_seconds = resolve_expire_after(expire_after, self.min_expire_after)
            handle = await asyncio.to_thread(acquire, path)
            mime_type = infer_mime_type(handle.filename)
            request = UploadRequest(handle, mime_type, expire_seconds)
            async with self.async_client_factory(self.settings) as client:
                url = await client.send(request)
        except UploadError as exc:
            return self._failed(path, exc)
        except asyncio.CancelledError:
            logger.warning("Upload of %s cancelled; request aborted", path)
            raise
        return self._succeeded(request, url)

    def _send(self, client: UploadClient, request: UploadRequest) -> UploadResult:
        return self._succeeded(request, client.send(request))

    def _succeeded(self, request: UploadRequest, url: str) -> UploadResult:
        logger.info("Uploaded %s -> %s", request.handle.filename, url)
        return UploadResult.success(url)

    def _failed(self, path: PathLike, exc: UploadError) -> UploadResult:
        logger.warning("Upload of %s failed (%s): %s", path, exc.kind.value, exc.message)
        return UploadResult.failure(exc)


def upload_file(
    path: PathLike,
    expire_after: Optional[int] = None,
    settings: Settings | None = None,
) -> UploadResult:
    """Upload using process settings unless explicit ones are given."""
    return UploadPipeline(settings).upload(path, expire_after)
