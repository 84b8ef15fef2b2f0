"""Anthropic Claude client.

Tool selection uses Claude's native ``tool_use`` content blocks.
"""

import os
from typing import Any

from anthropic import AsyncAnthropic
from anthropic import APIError, AuthenticationError, RateLimitError

from .client import (
    LLMClient,
    LLMError,
    LLMAuthError,
    LLMRateLimitError,
    LLMValidationError,
    ToolInvocation,
)


class AnthropicClient(LLMClient):
    """Claude client for sanitization and tool selection."""

    provider = "anthropic"

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "claude-sonnet-4-5-20250929",
    ):
        """Initialize Anthropic client.

        Args:
            api_key: Anthropic API key (defaults to ANTHROPIC_API_KEY env var)
            model: Model to use (default: claude-sonnet-4-5-20250929)
        """
        self.api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not self.api_key:
            raise LLMAuthError("ANTHROPIC_API_KEY not found in environment")

        self.client = AsyncAnthropic(api_key=self.api_key)
        self._model = model

    @property
    def model_name(self) -> str:
        """Return model identifier."""
        return self._model

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.1,
        max_tokens: int = 2000,
        **kwargs: Any,
    ) -> str:
        """Generate text completion using Claude.

        Args:
            prompt: User prompt
            system_prompt: System instructions
            temperature: Sampling temperature (0.0-1.0)
            max_tokens: Maximum tokens to generate
            **kwargs: Additional Anthropic parameters

        Returns:
            Generated text

        Raises:
            LLMAuthError: Invalid API key
            LLMRateLimitError: Rate limit exceeded
            LLMError: Other API errors
        """
        try:
            response = await self.client.messages.create(
                model=self._model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system_prompt or "",
                messages=[{"role": "user", "content": prompt}],
                **kwargs,
            )

            # Extract text from content blocks
            text_blocks = [
                block.text for block in response.content if hasattr(block, "text")
            ]
            return "\n".join(text_blocks)

        except AuthenticationError as e:
            raise LLMAuthError(f"Anthropic authentication failed: {e}")
        except RateLimitError as e:
            raise LLMRateLimitError(f"Anthropic rate limit exceeded: {e}")
        except APIError as e:
            raise LLMError(f"Anthropic API error: {e}")

    async def generate_tool_calls(
        self,
        prompt: str,
        tools: list[dict[str, Any]],
        system_prompt: str | None = None,
        temperature: float = 0.1,
        max_tokens: int = 1024,
        **kwargs: Any,
    ) -> list[ToolInvocation]:
        """Select tools via ``tool_use`` blocks (``tool_choice={"type": "any"}``)."""
        tool_defs = [
            {
                "name": tool["name"],
                "description": tool["description"],
                "input_schema": tool["parameters"],
            }
            for tool in tools
        ]

        try:
            response = await self.client.messages.create(
                model=self._model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system_prompt or "",
                messages=[{"role": "user", "content": prompt}],
                tools=tool_defs,
                tool_choice={"type": "any"},
                **kwargs,
            )

            invocations = []
            for block in response.content:
                if getattr(block, "type", None) != "tool_use":
                    continue
                arguments = block.input if block.input is not None else {}
                if not isinstance(arguments, dict):
                    raise LLMValidationError(f"Tool input for '{block.name}' is not an object")
                invocations.append(ToolInvocation(name=block.name, arguments=arguments))
            return invocations

        except AuthenticationError as e:
            raise LLMAuthError(f"Anthropic authentication failed: {e}")
        except RateLimitError as e:
            raise LLMRateLimitError(f"Anthropic rate limit exceeded: {e}")
        except APIError as e:
            raise LLMError(f"Anthropic API error: {e}")
