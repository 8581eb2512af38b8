"""Prompt construction error types.

Malformed attributes fail loudly when the element is built, before the
tree ever reaches the renderer. The renderer and adapters themselves never
raise for unknown kinds or missing history; they degrade instead.
"""


class PromptError(Exception):
    """Base class for prompt construction errors."""

    pass


class InvalidFileError(PromptError):
    """File element has no usable source.

    Raised when neither `url` nor `base64` is given, or when inline
    `base64` data is given without a `mime_type`.
    """

    def __init__(self, message: str):
        self.reason = message
        super().__init__(f"Invalid file element: {message}")


class InvalidAttributeError(PromptError):
    """An element attribute is outside its allowed range or vocabulary."""

    def __init__(self, component: str, attribute: str, value):
        self.component = component
        self.attribute = attribute
        self.value = value
        super().__init__(f"Invalid {attribute}={value!r} for {component}")
