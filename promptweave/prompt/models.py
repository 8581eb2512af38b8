"""Prompt intermediate representation (IR) models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union


class Role(str, Enum):
    """Message roles for rendered conversations."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class WrapUserMode(str, Enum):
    """Where WrapUser content goes relative to the wrapped original."""
    PREFIX = "prefix"
    SUFFIX = "suffix"


class _Unset:
    """Marker for "no structured tool result" (None is valid JSON)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class WrapUserContext:
    """Context passed to WrapUser conditional functions."""
    has_user: bool


# A deferred WrapUser child: receives the context, returns any node
ConditionFn = Callable[[WrapUserContext], Any]


@dataclass(frozen=True)
class IRToolCall:
    """A tool invocation requested by the assistant."""
    id: str
    name: str
    input: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "input": self.input}


@dataclass(frozen=True)
class TextPart:
    """Plain text content part."""
    text: str

    @property
    def type(self) -> str:
        return "text"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "text", "text": self.text}


@dataclass(frozen=True)
class FilePart:
    """File or image content part.

    Attributes:
        type: "image" or "file"
        mime_type: MIME type of the payload
        data: Base64-encoded data or a URL
        is_url: Whether `data` is a URL
        filename: Optional display filename
    """
    type: str
    mime_type: str
    data: str
    is_url: bool = False
    filename: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "type": self.type,
            "mimeType": self.mime_type,
            "data": self.data,
            "isUrl": self.is_url,
        }
        if self.filename:
            result["filename"] = self.filename
        return result


ContentPart = Union[TextPart, FilePart]


@dataclass(frozen=True)
class IRMessage:
    """A finalized, role-tagged message.

    Optional fields stay at their defaults unless the source element set
    them; `to_dict()` omits anything left unset.
    """
    role: Role
    content: str
    parts: Optional[Tuple[ContentPart, ...]] = None
    tool_calls: Optional[Tuple[IRToolCall, ...]] = None

    # Tool results
    tool_call_id: Optional[str] = None
    tool_name: Optional[str] = None
    tool_result_json: Any = UNSET
    tool_result_is_error: bool = False

    # Native SDK passthrough
    is_native: bool = False
    native_content: Any = None

    # WrapUser markers
    is_wrap_user: bool = False
    wrap_user_tag: Optional[str] = None
    wrap_user_mode: Optional[WrapUserMode] = None
    wrap_user_conditions: Optional[Tuple[ConditionFn, ...]] = None

    @property
    def has_tool_result_json(self) -> bool:
        """Whether a structured tool result was supplied or detected."""
        return self.tool_result_json is not UNSET

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary, omitting unset fields."""
        if self.is_native:
            return {
                "role": self.role.value,
                "content": "",
                "isNative": True,
                "nativeContent": self.native_content,
            }

        result: Dict[str, Any] = {"role": self.role.value, "content": self.content}
        if self.parts:
            result["parts"] = [p.to_dict() for p in self.parts]
        if self.tool_calls:
            result["toolCalls"] = [tc.to_dict() for tc in self.tool_calls]
        if self.tool_call_id:
            result["toolCallId"] = self.tool_call_id
        if self.tool_name:
            result["toolName"] = self.tool_name
        if self.has_tool_result_json:
            result["toolResultJson"] = self.tool_result_json
        if self.tool_result_is_error:
            result["toolResultIsError"] = True
        if self.is_wrap_user:
            result["isWrapUser"] = True
            result["wrapUserTag"] = self.wrap_user_tag
            result["wrapUserMode"] = self.wrap_user_mode.value if self.wrap_user_mode else None
            if self.wrap_user_conditions:
                result["wrapUserConditions"] = list(self.wrap_user_conditions)
        return result


@dataclass
class RenderedContent:
    """Text and file parts rendered from a content fragment."""
    content: str
    parts: List[ContentPart] = field(default_factory=list)
