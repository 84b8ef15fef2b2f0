"""Text-Transform Executor.

Runs a sanitization tool: one generation call with the tool's fixed system
instruction and the caller's text. No retries, no caching.
"""

from typing import Any

from pydantic import ValidationError

from sanitize_llm import LLMRouter
from sanitize_obs.logging import get_logger
from sanitize_tools.base import Tool
from sanitize_tools.catalog import instruction_for
from sanitize_tools.exceptions import ExecutionError
from sanitize_tools.schemas import ToolResult

logger = get_logger(__name__)


class TextTransformExecutor:
    """Executes sanitization tools against an LLM provider."""

    def __init__(
        self,
        router: LLMRouter,
        temperature: float = 0.1,
        max_tokens: int = 2000,
    ):
        self.router = router
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def execute(
        self,
        tool: Tool,
        arguments: dict[str, Any],
        provider: str | None = None,
    ) -> ToolResult:
        """Transform the ``text`` argument with the tool's instruction.

        Args:
            tool: Registered tool to run
            arguments: Caller arguments, validated against ``tool.input_schema``
            provider: LLM provider name, passed through to the router

        Returns:
            ToolResult with the sanitized text

        Raises:
            ExecutionError: Invalid arguments or empty model output
            LLMError: Provider failure (including unconfigured provider)
        """
        try:
            payload = tool.input_schema.model_validate(arguments)
        except ValidationError as e:
            raise ExecutionError(f"Invalid arguments for tool '{tool.name}': {e}")

        text: str = payload.text
        client = self.router.route(provider)

        logger.info(
            "tool_execution_start",
            tool=tool.name,
            provider=client.provider,
            model=client.model_name,
            text_length=len(text),
        )

        sanitized = await client.generate(
            prompt=text,
            system_prompt=instruction_for(tool.name),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

        if text.strip() and not sanitized.strip():
            raise ExecutionError(f"Model returned empty output for tool '{tool.name}'")

        return ToolResult(sanitized_text=sanitized)
