"""Anthropic Messages API adapter.

System text is returned separately from the conversation; tool results are
sent as `tool_result` blocks inside user messages.

Example:
    from promptweave import System, User
    from promptweave.adapters import anthropic

    result = anthropic.prompt([System("You are Claude."), User("Hello!")])
    result.system    # "You are Claude."
    result.messages  # [{"role": "user", "content": "Hello!"}]
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from promptweave.adapters.base import BasePromptAdapter, WireMessage
from promptweave.prompt.models import ContentPart, IRMessage, Role


PDF_MIME_TYPE = "application/pdf"


@dataclass
class AnthropicPrompt:
    """Anthropic prompt: system text plus conversation messages."""
    system: Optional[str] = None
    messages: List[WireMessage] = field(default_factory=list)

    def to_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for `client.messages.create`, omitting no system."""
        kwargs: Dict[str, Any] = {"messages": self.messages}
        if self.system is not None:
            kwargs["system"] = self.system
        return kwargs


class AnthropicAdapter(BasePromptAdapter):
    """Separate system field; tool_use / tool_result content blocks."""

    @property
    def format_name(self) -> str:
        return "anthropic"

    def convert_part(self, part: ContentPart) -> Dict[str, Any]:
        if part.type == "text":
            return {"type": "text", "text": part.text}

        if part.type == "image":
            if part.is_url:
                return {"type": "image", "source": {"type": "url", "url": part.data}}
            return {
                "type": "image",
                "source": {"type": "base64", "media_type": part.mime_type, "data": part.data},
            }

        if part.mime_type == PDF_MIME_TYPE:
            if part.is_url:
                return {"type": "document", "source": {"type": "url", "url": part.data}}
            return {
                "type": "document",
                "source": {"type": "base64", "media_type": PDF_MIME_TYPE, "data": part.data},
            }

        # Unsupported file type
        return {
            "type": "text",
            "text": f"[File: {part.filename or 'attachment'} ({part.mime_type})]",
        }

    def convert_message(self, message: IRMessage) -> Optional[WireMessage]:
        if message.is_native:
            return message.native_content

        if message.role == Role.SYSTEM:
            return None  # returned via AnthropicPrompt.system

        if message.role == Role.TOOL:
            content = message.content
            if not content and message.has_tool_result_json:
                content = json.dumps(message.tool_result_json, ensure_ascii=False)
            block: Dict[str, Any] = {
                "type": "tool_result",
                "tool_use_id": message.tool_call_id or "",
                "content": content,
            }
            if message.tool_result_is_error:
                block["is_error"] = True
            return {"role": "user", "content": [block]}

        if message.role == Role.ASSISTANT:
            if message.tool_calls:
                blocks: List[Dict[str, Any]] = []
                if message.content:
                    blocks.append({"type": "text", "text": message.content})
                blocks.extend(
                    {"type": "tool_use", "id": call.id, "name": call.name, "input": call.input}
                    for call in message.tool_calls
                )
                return {"role": "assistant", "content": blocks}
            return {"role": "assistant", "content": message.content}

        if message.parts:
            return {"role": "user", "content": [self.convert_part(p) for p in message.parts]}

        return {"role": "user", "content": message.content}

    def shape_output(self, messages: List[WireMessage], ir: List[IRMessage]) -> AnthropicPrompt:
        systems = [
            m.content for m in ir
            if m.role == Role.SYSTEM and not m.is_native and not m.is_wrap_user
        ]
        system = "\n\n".join(systems) if systems else None
        return AnthropicPrompt(system=system, messages=messages)


_adapter = AnthropicAdapter()


def prompt(nodes: Any, messages: Optional[Sequence[WireMessage]] = None) -> AnthropicPrompt:
    """
    Render nodes to an Anthropic system string and message list.

    Args:
        nodes: A node or list of top-level nodes
        messages: Existing conversation; its last user message is wrapped
                  by any WrapUser elements

    Returns:
        AnthropicPrompt with `system` (None when there is no system text)
        and `messages`
    """
    return _adapter.prompt(nodes, messages=messages)
