"""Base LLM client interface.

Defines the contract that every provider adapter must implement:
plain text generation, and exactly-one structured tool invocation.
"""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field


class ToolInvocation(BaseModel):
    """A single tool invocation proposed by a model."""

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class LLMClient(ABC):
    """Abstract base class for LLM clients."""

    provider: str = ""

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.1,
        max_tokens: int = 2000,
        **kwargs: Any,
    ) -> str:
        """Generate text completion from prompt.

        Args:
            prompt: User prompt or input text
            system_prompt: Optional system instructions
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            **kwargs: Additional model-specific parameters

        Returns:
            Generated text response

        Raises:
            LLMError: If generation fails
        """
        pass

    @abstractmethod
    async def generate_tool_calls(
        self,
        prompt: str,
        tools: list[dict[str, Any]],
        system_prompt: str | None = None,
        temperature: float = 0.1,
        **kwargs: Any,
    ) -> list[ToolInvocation]:
        """Ask the model to invoke one of the given tools.

        Args:
            prompt: User prompt describing the decision
            tools: Tool specs, each with ``name``, ``description`` and
                ``parameters`` (JSON schema of the arguments)
            system_prompt: Optional system instructions
            temperature: Sampling temperature
            **kwargs: Additional model-specific parameters

        Returns:
            Tool invocations in the order the model produced them
            (possibly empty)

        Raises:
            LLMError: If generation fails
            LLMValidationError: If the model output cannot be read as an invocation
        """
        pass

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Return the model identifier (e.g., 'gpt-3.5-turbo', 'gemini-1.5-flash')."""
        pass


class LLMError(Exception):
    """Base exception for LLM client errors."""

    pass


class LLMAuthError(LLMError):
    """Authentication error with LLM provider."""

    pass


class LLMRateLimitError(LLMError):
    """Rate limit exceeded."""

    pass


class LLMValidationError(LLMError):
    """Generated output failed validation."""

    pass


class LLMConfigError(LLMError):
    """Provider unknown or not configured."""

    pass
