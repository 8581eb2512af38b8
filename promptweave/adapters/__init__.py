"""Wire-format adapters.

Each adapter module exposes `prompt(nodes, messages=None)`:

    - openai:    flat list, system first, `tool` role results
    - ai_sdk:    flat list, system first, typed tool-call/tool-result parts
    - anthropic: AnthropicPrompt(system, messages), tool results as user blocks
"""

from promptweave.adapters.base import BasePromptAdapter, sort_system_first
from promptweave.adapters.openai import OpenAIAdapter
from promptweave.adapters.openai import prompt as prompt_to_openai
from promptweave.adapters.ai_sdk import AISDKAdapter, messages_to_string
from promptweave.adapters.ai_sdk import prompt as prompt_to_ai_sdk
from promptweave.adapters.anthropic import AnthropicAdapter, AnthropicPrompt
from promptweave.adapters.anthropic import prompt as prompt_to_anthropic

__all__ = [
    "BasePromptAdapter",
    "sort_system_first",
    "OpenAIAdapter",
    "AISDKAdapter",
    "AnthropicAdapter",
    "AnthropicPrompt",
    "prompt_to_openai",
    "prompt_to_ai_sdk",
    "prompt_to_anthropic",
    "messages_to_string",
]
