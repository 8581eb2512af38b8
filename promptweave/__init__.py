"""
promptweave - compose LLM prompts as node trees and render them to
OpenAI, AI SDK and Anthropic message formats.

Example:
    from promptweave import System, User, Group, prompt_to_openai

    messages = prompt_to_openai([
        System("You are a helpful assistant."),
        User(Group("Summarize this.", tag="task")),
    ])
"""

import logging

from promptweave.prompt import (
    Role,
    WrapUserMode,
    WrapUserContext,
    IRMessage,
    IRToolCall,
    TextPart,
    FilePart,
    Element,
    ElementKind,
    Conditional,
    create_element,
    is_element,
    PromptError,
    InvalidFileError,
    InvalidAttributeError,
    render,
    render_to_content,
    render_to_string,
)
from promptweave.prompt.components import (
    System,
    User,
    Assistant,
    ToolCall,
    ToolResult,
    If,
    Show,
    Each,
    Fragment,
    Linebreak,
    Json,
    File,
    Group,
    Native,
    WrapUser,
    List,
    Item,
    Heading,
    Code,
    Bold,
    Italic,
    Strike,
    Quote,
    Hr,
)
from promptweave.adapters import (
    AnthropicPrompt,
    messages_to_string,
    prompt_to_openai,
    prompt_to_ai_sdk,
    prompt_to_anthropic,
)

logging.getLogger("promptweave").addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Models
    "Role",
    "WrapUserMode",
    "WrapUserContext",
    "IRMessage",
    "IRToolCall",
    "TextPart",
    "FilePart",
    "Element",
    "ElementKind",
    "Conditional",
    "create_element",
    "is_element",
    # Errors
    "PromptError",
    "InvalidFileError",
    "InvalidAttributeError",
    # Rendering
    "render",
    "render_to_content",
    "render_to_string",
    # Components
    "System",
    "User",
    "Assistant",
    "ToolCall",
    "ToolResult",
    "If",
    "Show",
    "Each",
    "Fragment",
    "Linebreak",
    "Json",
    "File",
    "Group",
    "Native",
    "WrapUser",
    "List",
    "Item",
    "Heading",
    "Code",
    "Bold",
    "Italic",
    "Strike",
    "Quote",
    "Hr",
    # Adapters
    "AnthropicPrompt",
    "messages_to_string",
    "prompt_to_openai",
    "prompt_to_ai_sdk",
    "prompt_to_anthropic",
]
