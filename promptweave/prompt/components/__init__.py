"""Built-in prompt components."""

from promptweave.prompt.components.message import (
    System,
    User,
    Assistant,
    ToolCall,
    ToolResult,
    MESSAGE_ROLES,
    is_message_kind,
    get_role_from_kind,
)
from promptweave.prompt.components.control import If, Show, Each, Fragment, Linebreak
from promptweave.prompt.components.data import Json, File, FileProps, infer_mime_type
from promptweave.prompt.components.xml import Group, wrap_xml, indent_lines
from promptweave.prompt.components.native import Native
from promptweave.prompt.components.wrap_user import WrapUser
from promptweave.prompt.components.markdown import (
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

__all__ = [
    # Messages
    "System",
    "User",
    "Assistant",
    "ToolCall",
    "ToolResult",
    "MESSAGE_ROLES",
    "is_message_kind",
    "get_role_from_kind",
    # Control flow
    "If",
    "Show",
    "Each",
    "Fragment",
    "Linebreak",
    # Data
    "Json",
    "File",
    "FileProps",
    "infer_mime_type",
    # XML
    "Group",
    "wrap_xml",
    "indent_lines",
    # Passthrough
    "Native",
    "WrapUser",
    # Markdown
    "List",
    "Item",
    "Heading",
    "Code",
    "Bold",
    "Italic",
    "Strike",
    "Quote",
    "Hr",
]
