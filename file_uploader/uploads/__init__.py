"""
Upload pipeline for File Uploader.

Reads a local file, infers its MIME type and posts it to volatile storage.
"""

from .client import AsyncUploadClient, UploadClient, send_upload
from .errors import ErrorKind, UploadError
from .inspector import acquire
from .mime import FALLBACK_MIME_TYPE, infer_mime_type
from .models import FileHandle, UploadRequest, UploadResponse, UploadResult
from .pipeline import UploadPipeline, upload_file
from .tool import TOOL_DEFINITION, build_tool_definition

__all__ = [
    "AsyncUploadClient",
    "UploadClient",
    "send_upload",
    "ErrorKind",
    "UploadError",
    "acquire",
    "FALLBACK_MIME_TYPE",
    "infer_mime_type",
    "FileHandle",
    "UploadRequest",
    "UploadResponse",
    "UploadResult",
    "UploadPipeline",
    "upload_file",
    "TOOL_DEFINITION",
    "build_tool_definition",
]
