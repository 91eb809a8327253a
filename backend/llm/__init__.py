"""LLM module - unified interface for language model interactions.

Usage:
    from llm import LLMService, LLMError

    llm = LLMService()
    completion = await llm.generate(prompt, system)
    if completion.text: ...

Structure:
    - base.py: Abstract interface (BaseLLMService) and error types
    - anthropic.py: Claude implementation (AnthropicService)
    - prompts/: Analysis and chat prompt templates
"""

from llm.anthropic import AnthropicService
from llm.base import BaseLLMService, LLMError, LLMRateLimitError, LLMTimeoutError
from llm.prompts import (
    ANALYSIS_SYSTEM_PROMPT,
    CHAT_SYSTEM_PROMPT,
    IMAGE_ANALYSIS_PROMPT,
    TEXT_ANALYSIS_PROMPT,
)

# Default provider - can be swapped by changing this alias
LLMService = AnthropicService

__all__ = [
    "BaseLLMService",
    "LLMService",
    "LLMError",
    "LLMRateLimitError",
    "LLMTimeoutError",
    "AnthropicService",
    "ANALYSIS_SYSTEM_PROMPT",
    "CHAT_SYSTEM_PROMPT",
    "IMAGE_ANALYSIS_PROMPT",
    "TEXT_ANALYSIS_PROMPT",
]
