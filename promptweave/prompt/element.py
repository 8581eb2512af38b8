"""Prompt tree node model.

A node is one of:
    - None / bool            ignored
    - str / int / float      text leaf
    - list / tuple           flattened, order-preserving
    - Element                built-in marker or component invocation
    - Conditional            deferred WrapUser child
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from promptweave.prompt.models import ConditionFn, WrapUserContext


# Hole left in WrapUser text where a Conditional's output is spliced later.
# NUL-delimited so it can never collide with authored text.
CONDITION_PLACEHOLDER_PATTERN = re.compile(r"\x00COND_(\d+)\x00")


def condition_placeholder(index: int) -> str:
    """Placeholder token for the index-th deferred condition."""
    return f"\x00COND_{index}\x00"


def scalar_text(value: Union[str, int, float]) -> str:
    """Text of a scalar leaf; integral floats drop their `.0`."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class ElementKind(str, Enum):
    """Built-in marker kinds understood by the renderer."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL_CALL = "tool-call"
    TOOL_RESULT = "tool-result"
    GROUP = "group"
    JSON = "json"
    FILE = "file"
    NATIVE = "native"
    WRAP_USER = "wrap-user"
    IF = "if"
    SHOW = "show"
    EACH = "each"
    FRAGMENT = "fragment"


ComponentFunction = Callable[..., Any]


@dataclass(frozen=True)
class Conditional:
    """A WrapUser child evaluated later against the conversation history."""
    fn: ConditionFn

    def __call__(self, context: WrapUserContext) -> Any:
        return self.fn(context)


@dataclass(frozen=True)
class Element:
    """A tagged node carrying a kind, attributes and children.

    `kind` is an ElementKind for built-in markers, a callable for component
    functions, or any other string (rendered transparently).
    """
    kind: Union[ElementKind, ComponentFunction, str]
    attributes: Dict[str, Any] = field(default_factory=dict)
    children: List[Any] = field(default_factory=list)

    @property
    def is_component(self) -> bool:
        return callable(self.kind) and not isinstance(self.kind, str)

    def invoke(self) -> Any:
        """Call a component function with its attributes and children."""
        return self.kind(**{**self.attributes, "children": list(self.children)})


def _resolve_kind(kind):
    if isinstance(kind, ElementKind) or callable(kind):
        return kind
    try:
        return ElementKind(kind)
    except ValueError:
        return str(kind)


def flatten_children(children) -> List[Any]:
    """Flatten nested child sequences and drop None/boolean values.

    Bare callables become Conditional nodes.
    """
    result: List[Any] = []
    for child in children:
        if child is None or isinstance(child, bool):
            continue
        if isinstance(child, (list, tuple)):
            result.extend(flatten_children(child))
        elif isinstance(child, (Element, Conditional)):
            result.append(child)
        elif callable(child):
            result.append(Conditional(child))
        else:
            result.append(child)
    return result


def create_element(
    kind: Union[ElementKind, ComponentFunction, str],
    attributes: Optional[Dict[str, Any]] = None,
    *children: Any,
) -> Element:
    """Create a prompt element.

    Args:
        kind: Marker kind (ElementKind or its string value), a component
              function, or an arbitrary string
        attributes: Element attributes (None means empty)
        children: Child nodes, flattened in order

    Returns:
        Element
    """
    return Element(
        kind=_resolve_kind(kind),
        attributes=dict(attributes or {}),
        children=flatten_children(children),
    )


def is_element(value: Any) -> bool:
    """Check if a value is a prompt element."""
    return isinstance(value, Element)
