"""LLM module - unified interface for language model interactions.

Usage:
    from llm import LLMService, LLMError

    llm = LLMService()
    answer = await llm.generate(prompt)

Structure:
    - base.py: Abstract interface (BaseLLMService) and errors
    - gemini.py: Gemini REST implementation (GeminiService)
"""

from llm.base import BaseLLMService, LLMError, UpstreamAPIError
from llm.gemini import NO_RESPONSE_TEXT, GeminiService, extract_answer

# Default provider - can be swapped by changing this alias
LLMService = GeminiService

__all__ = [
    "BaseLLMService",
    "LLMService",
    "LLMError",
    "UpstreamAPIError",
    "GeminiService",
    "NO_RESPONSE_TEXT",
    "extract_answer",
]
