"""Google Gemini client.

Gemini is driven without native function calling: the model is asked to
answer with a single JSON object ``{"tool": ..., "arguments": {...}}`` and
the adapter parses that text back into a tool invocation.
"""

import os
from typing import Any

from google import genai
from google.genai import errors, types

from .client import (
    LLMClient,
    LLMError,
    LLMAuthError,
    LLMRateLimitError,
    LLMValidationError,
    ToolInvocation,
)
from .parsing import extract_json_object

TOOL_CALL_FORMAT = (
    'Please respond with ONLY the tool name and parameters in this exact JSON format: '
    '{"tool": "tool_name", "arguments": {"text": "user_text"}}'
)


class GeminiClient(LLMClient):
    """Gemini client with a text-encoded tool-call adapter."""

    provider = "gemini"

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gemini-1.5-flash",
    ):
        """Initialize Gemini client.

        Args:
            api_key: Gemini API key (defaults to GEMINI_API_KEY env var)
            model: Model to use (default: gemini-1.5-flash)
        """
        self.api_key = api_key or os.getenv("GEMINI_API_KEY")
        if not self.api_key:
            raise LLMAuthError("GEMINI_API_KEY not found in environment")

        self.client = genai.Client(api_key=self.api_key)
        self._model = model

    @property
    def model_name(self) -> str:
        """Return model identifier."""
        return self._model

    async def _generate_content(
        self,
        prompt: str,
        system_prompt: str | None,
        temperature: float,
        max_tokens: int,
    ) -> str:
        config = types.GenerateContentConfig(
            system_instruction=system_prompt or None,
            temperature=temperature,
            max_output_tokens=max_tokens,
        )
        try:
            response = await self.client.aio.models.generate_content(
                model=self._model,
                contents=prompt,
                config=config,
            )
        except errors.ClientError as e:
            if e.code in (401, 403):
                raise LLMAuthError(f"Gemini authentication failed: {e}")
            if e.code == 429:
                raise LLMRateLimitError(f"Gemini rate limit exceeded: {e}")
            raise LLMError(f"Gemini API error: {e}")
        except errors.APIError as e:
            raise LLMError(f"Gemini API error: {e}")

        return response.text or ""

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.1,
        max_tokens: int = 2000,
        **kwargs: Any,
    ) -> str:
        """Generate text completion using Gemini.

        Raises:
            LLMAuthError: Invalid API key
            LLMRateLimitError: Rate limit exceeded
            LLMError: Other API errors
        """
        return await self._generate_content(prompt, system_prompt, temperature, max_tokens)

    async def generate_tool_calls(
        self,
        prompt: str,
        tools: list[dict[str, Any]],
        system_prompt: str | None = None,
        temperature: float = 0.1,
        **kwargs: Any,
    ) -> list[ToolInvocation]:
        """Select a tool from a text-encoded JSON answer.

        Only the first balanced JSON object in the output is considered, so
        the result holds at most one invocation.

        Raises:
            LLMValidationError: If no well-formed invocation can be parsed
        """
        tool_lines = "\n".join(f"- {tool['name']}: {tool['description']}" for tool in tools)
        full_prompt = f"{prompt}\n\nAvailable tools:\n{tool_lines}\n\n{TOOL_CALL_FORMAT}"

        text = await self._generate_content(full_prompt, system_prompt, temperature, 1024)

        parsed = extract_json_object(text)
        if parsed is None:
            raise LLMValidationError(f"Failed to parse Gemini response: {text[:200]}")

        name = parsed.get("tool")
        arguments = parsed.get("arguments", {})
        if not isinstance(name, str) or not name:
            raise LLMValidationError(f"Gemini response has no tool name: {text[:200]}")
        if not isinstance(arguments, dict):
            raise LLMValidationError(f"Gemini tool arguments are not an object: {text[:200]}")

        return [ToolInvocation(name=name, arguments=arguments)]
