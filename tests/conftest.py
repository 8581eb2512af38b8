"""
Shared pytest fixtures for all tests.

Provides conversation histories for WrapUser tests and logging isolation.
"""

import logging

import pytest

from promptweave.settings import get_settings


# =============================================================================
# CONVERSATION HISTORY FIXTURES
# =============================================================================

@pytest.fixture
def openai_history():
    """OpenAI-style history ending with a user question."""
    return [
        {"role": "system", "content": "Be concise."},
        {"role": "user", "content": "What is 2+2?"},
        {"role": "assistant", "content": "4"},
        {"role": "user", "content": "And 3+3?"},
    ]


@pytest.fixture
def single_question_history():
    """History holding one user message."""
    return [{"role": "user", "content": "Q"}]


@pytest.fixture
def assistant_only_history():
    """History with no user message."""
    return [{"role": "assistant", "content": "How can I help?"}]


# =============================================================================
# ISOLATION
# =============================================================================

@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Settings are cached; clear between tests so env changes apply."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clean_promptweave_logger():
    """Restore the promptweave logger after tests that configure it."""
    logger = logging.getLogger("promptweave")
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
