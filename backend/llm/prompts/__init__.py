"""LLM prompts for various use cases."""

from llm.prompts.analysis import (
    ANALYSIS_SYSTEM_PROMPT,
    IMAGE_ANALYSIS_PROMPT,
    IMAGE_ANALYSIS_SCHEMA,
    TEXT_ANALYSIS_PROMPT,
    TEXT_ANALYSIS_SCHEMA,
)
from llm.prompts.chat import (
    CHAT_SYSTEM_PROMPT,
    GENERAL_CHAT_PROMPT,
    GROUNDED_CHAT_PROMPT,
    TRUNCATION_MARKER,
)

__all__ = [
    "ANALYSIS_SYSTEM_PROMPT",
    "IMAGE_ANALYSIS_PROMPT",
    "IMAGE_ANALYSIS_SCHEMA",
    "TEXT_ANALYSIS_PROMPT",
    "TEXT_ANALYSIS_SCHEMA",
    "CHAT_SYSTEM_PROMPT",
    "GENERAL_CHAT_PROMPT",
    "GROUNDED_CHAT_PROMPT",
    "TRUNCATION_MARKER",
]
