"""Data components: Json and File."""

import json as jsonlib
from typing import Any, Optional

from pydantic import BaseModel, ValidationError, model_validator

from promptweave.prompt.element import Element, ElementKind, create_element
from promptweave.prompt.errors import InvalidFileError


IMAGE_EXTENSIONS = ("jpg", "jpeg", "png", "gif", "webp", "svg")

MIME_TYPES = {
    # Images
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "svg": "image/svg+xml",
    # Documents
    "pdf": "application/pdf",
    # Audio
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    # Video
    "mp4": "video/mp4",
    "webm": "video/webm",
}

DEFAULT_MIME_TYPE = "application/octet-stream"


# =============================================================================
# Json
# =============================================================================

def Json(data: Any, pretty: bool = False, indent: int = 2) -> Element:
    """
    Serialize data as JSON text.

    The original value is kept on the element so a ToolResult whose only
    child is a Json element reports it as a structured result.

    Example:
        User("Here is the data: ", Json({"name": "Alice", "age": 30}))
        # Here is the data: {"name":"Alice","age":30}
    """
    if pretty:
        text = jsonlib.dumps(data, indent=indent, ensure_ascii=False)
    else:
        text = jsonlib.dumps(data, separators=(",", ":"), ensure_ascii=False)
    return create_element(ElementKind.JSON, {"data": data}, text)


# =============================================================================
# File
# =============================================================================

class FileProps(BaseModel):
    """Validated File attributes."""

    url: Optional[str] = None
    base64: Optional[str] = None
    mime_type: Optional[str] = None
    filename: Optional[str] = None

    @model_validator(mode="after")
    def check_source(self) -> "FileProps":
        if not self.url and not self.base64:
            raise ValueError("File requires either 'url' or 'base64'")
        if self.base64 and not self.mime_type:
            raise ValueError("File requires 'mime_type' when using 'base64'")
        return self


def infer_mime_type(url: Optional[str]) -> str:
    """Infer a MIME type from a URL's file extension."""
    if not url:
        return DEFAULT_MIME_TYPE
    ext = url.rsplit(".", 1)[-1].lower()
    return MIME_TYPES.get(ext, DEFAULT_MIME_TYPE)


def _is_image(props: FileProps) -> bool:
    if props.mime_type:
        return props.mime_type.startswith("image/")
    if props.url:
        return props.url.lower().endswith(tuple(f".{ext}" for ext in IMAGE_EXTENSIONS))
    return False


def File(
    url: Optional[str] = None,
    base64: Optional[str] = None,
    mime_type: Optional[str] = None,
    filename: Optional[str] = None,
) -> Element:
    """
    Attach a file or image to the current message.

    Args:
        url: URL of the file
        base64: Base64-encoded data (no data: prefix)
        mime_type: Required with base64; inferred from the URL otherwise
        filename: Optional filename

    Raises:
        InvalidFileError: If no source is given, or base64 lacks a mime type
    """
    try:
        props = FileProps(url=url, base64=base64, mime_type=mime_type, filename=filename)
    except ValidationError as e:
        message = e.errors()[0]["msg"].removeprefix("Value error, ")
        raise InvalidFileError(message) from e

    return create_element(ElementKind.FILE, {
        "type": "image" if _is_image(props) else "file",
        "data": props.url or props.base64,
        "is_url": bool(props.url),
        "mime_type": props.mime_type or infer_mime_type(props.url),
        "filename": props.filename,
    })
