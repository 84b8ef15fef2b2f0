"""OpenAI client.

Used for:
- Sanitization text transforms (executor)
- Tool selection through native function calling
"""

import json
import os
from typing import Any

from openai import AsyncOpenAI
from openai import APIError, AuthenticationError, RateLimitError

from .client import (
    LLMClient,
    LLMError,
    LLMAuthError,
    LLMRateLimitError,
    LLMValidationError,
    ToolInvocation,
)


class OpenAIClient(LLMClient):
    """OpenAI chat-completions client with native tool calling."""

    provider = "openai"

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-3.5-turbo",
        organization: str | None = None,
    ):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (defaults to OPENAI_API_KEY env var)
            model: Model to use (default: gpt-3.5-turbo)
            organization: Optional organization ID
        """
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        if not self.api_key:
            raise LLMAuthError("OPENAI_API_KEY not found in environment")

        self.client = AsyncOpenAI(
            api_key=self.api_key,
            organization=organization,
        )
        self._model = model

    @property
    def model_name(self) -> str:
        """Return model identifier."""
        return self._model

    def _sampling_params(self, temperature: float, max_tokens: int | None = None) -> dict[str, Any]:
        # gpt-5 only supports the default temperature and renamed max_tokens
        if "gpt-5" in self._model:
            return {"max_completion_tokens": max_tokens} if max_tokens else {}

        params: dict[str, Any] = {"temperature": temperature}
        if max_tokens:
            params["max_tokens"] = max_tokens
        return params

    @staticmethod
    def _messages(prompt: str, system_prompt: str | None) -> list[dict[str, str]]:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        return messages

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.1,
        max_tokens: int = 2000,
        **kwargs: Any,
    ) -> str:
        """Generate text completion.

        Args:
            prompt: User prompt
            system_prompt: System instructions
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            **kwargs: Additional OpenAI parameters

        Returns:
            Generated text

        Raises:
            LLMAuthError: Invalid API key
            LLMRateLimitError: Rate limit exceeded
            LLMError: Other API errors
        """
        try:
            response = await self.client.chat.completions.create(
                model=self._model,
                messages=self._messages(prompt, system_prompt),
                **self._sampling_params(temperature, max_tokens),
                **kwargs,
            )
            return response.choices[0].message.content or ""

        except AuthenticationError as e:
            raise LLMAuthError(f"OpenAI authentication failed: {e}")
        except RateLimitError as e:
            raise LLMRateLimitError(f"OpenAI rate limit exceeded: {e}")
        except APIError as e:
            raise LLMError(f"OpenAI API error: {e}")

    async def generate_tool_calls(
        self,
        prompt: str,
        tools: list[dict[str, Any]],
        system_prompt: str | None = None,
        temperature: float = 0.1,
        **kwargs: Any,
    ) -> list[ToolInvocation]:
        """Select tools using native function calling.

        The request forces a tool call (``tool_choice="required"``).

        Raises:
            LLMValidationError: If the function arguments are not valid JSON
        """
        functions = [
            {
                "type": "function",
                "function": {
                    "name": tool["name"],
                    "description": tool["description"],
                    "parameters": tool["parameters"],
                },
            }
            for tool in tools
        ]

        try:
            response = await self.client.chat.completions.create(
                model=self._model,
                messages=self._messages(prompt, system_prompt),
                tools=functions,
                tool_choice="required",
                **self._sampling_params(temperature),
                **kwargs,
            )

            invocations = []
            for call in response.choices[0].message.tool_calls or []:
                arguments = json.loads(call.function.arguments or "{}")
                if not isinstance(arguments, dict):
                    raise LLMValidationError(
                        f"Tool arguments for '{call.function.name}' are not an object"
                    )
                invocations.append(ToolInvocation(name=call.function.name, arguments=arguments))
            return invocations

        except json.JSONDecodeError as e:
            raise LLMValidationError(f"Failed to parse tool arguments: {e}")
        except AuthenticationError as e:
            raise LLMAuthError(f"OpenAI authentication failed: {e}")
        except RateLimitError as e:
            raise LLMRateLimitError(f"OpenAI rate limit exceeded: {e}")
        except APIError as e:
            raise LLMError(f"OpenAI API error: {e}")
