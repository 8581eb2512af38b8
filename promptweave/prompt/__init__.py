"""Prompt tree model, components and renderer."""

from promptweave.prompt.models import (
    Role,
    WrapUserMode,
    WrapUserContext,
    IRMessage,
    IRToolCall,
    TextPart,
    FilePart,
    RenderedContent,
    UNSET,
)
from promptweave.prompt.element import (
    Element,
    ElementKind,
    Conditional,
    create_element,
    is_element,
)
from promptweave.prompt.errors import (
    PromptError,
    InvalidFileError,
    InvalidAttributeError,
)
from promptweave.prompt.render import (
    PromptRenderer,
    MessageBuilder,
    render,
    render_to_content,
    render_to_string,
)
from promptweave.prompt.deferred import (
    evaluate_wrap_user_content,
    process_wrap_users,
    resolve_wrap_users,
)

__all__ = [
    # Models
    "Role",
    "WrapUserMode",
    "WrapUserContext",
    "IRMessage",
    "IRToolCall",
    "TextPart",
    "FilePart",
    "RenderedContent",
    "UNSET",
    # Elements
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
    "PromptRenderer",
    "MessageBuilder",
    "render",
    "render_to_content",
    "render_to_string",
    # WrapUser
    "evaluate_wrap_user_content",
    "process_wrap_users",
    "resolve_wrap_users",
]
