"""
File Uploader

Uploads local files to volatile storage and returns a temporary URL.
Exposed as an MCP tool.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("file-uploader-mcp")
except PackageNotFoundError:
    __version__ = "0.0.0"
