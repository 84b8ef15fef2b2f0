"""Sanitize-Core LLM Integration.

One adapter per provider behind a single capability:
- Text generation (sanitization transforms)
- Exactly-one structured tool invocation (tool selection)
"""

from .anthropic_client import AnthropicClient
from .client import (
    LLMAuthError,
    LLMClient,
    LLMConfigError,
    LLMError,
    LLMRateLimitError,
    LLMValidationError,
    ToolInvocation,
)
from .gemini_client import GeminiClient
from .openai_client import OpenAIClient
from .router import PROVIDERS, LLMRouter

__all__ = [
    "LLMClient",
    "LLMRouter",
    "PROVIDERS",
    "ToolInvocation",
    "OpenAIClient",
    "GeminiClient",
    "AnthropicClient",
    "LLMError",
    "LLMAuthError",
    "LLMConfigError",
    "LLMRateLimitError",
    "LLMValidationError",
]
