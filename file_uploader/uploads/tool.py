"""
Upload File tool definition.

The minimum expiration is configurable, so the schema is built from the
active settings; TOOL_DEFINITION uses the default minimum.
"""

from ..config.settings import DEFAULT_MIN_EXPIRE_AFTER

TOOL_NAME = "upload_file"


def build_tool_definition(min_expire_after: int = DEFAULT_MIN_EXPIRE_AFTER) -> dict:
    """Tool definition for the MCP server."""
    return {
        "name": TOOL_NAME,
        "title": "Upload File",
        "description": """Upload a file to storage and get a URL.
Automatically detects MIME type from file extension.
This is a temporary storage, files will be deleted after some time.""",
        "inputSchema": {
            "type": "object",
            "properties": {
                "file_path": {
                    "type": "string",
                    "description": "Path to the file to upload"
                },
                "expire_after": {
                    "type": "integer",
                    "minimum": min_expire_after,
                    "description": (
                        f"Seconds until the file expires and is deleted "
                        f"(minimum: {min_expire_after}, default: {min_expire_after})"
                    )
                }
            },
            "required": ["file_path"]
        },
        "outputSchema": {
            "type": "object",
            "properties": {
                "url": {
                    "type": "string",
                    "description": "URL to access the uploaded file"
                }
            },
            "required": ["url"]
        }
    }


TOOL_DEFINITION = build_tool_definition()
