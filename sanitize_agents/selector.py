"""Tool-Selector - LLM-driven choice of exactly one tool.

Decision Policy:
- The prompt lists every tool as ``name: description`` and shows the intent
  plus the first 200 characters of the text
- No invocation is a decision failure (never defaulted to a fallback tool)
- Several invocations: the first one wins
- The chosen tool must be listed, and its arguments must satisfy the tool's
  input schema
"""

from typing import Any

import jsonschema

from sanitize_llm import LLMRouter, LLMValidationError
from sanitize_obs.logging import get_logger
from sanitize_obs.metrics import selection_failures_total, tool_selections_total
from sanitize_tools.schemas import ToolCall, ToolList

from .exceptions import ToolSelectionError

logger = get_logger(__name__)

TEXT_PREFIX_CHARS = 200

SELECTOR_SYSTEM_PROMPT = (
    "You are an assistant that picks exactly ONE tool from the list below "
    "to satisfy the user's request."
)


def build_selection_prompt(text: str, intent: str, tools: ToolList) -> str:
    """Decision prompt shown to the model."""
    tool_lines = "\n".join(f" - {tool.name}: {tool.description}" for tool in tools.tools)
    return (
        f'User request: "{intent}"\n'
        f'User text (first {TEXT_PREFIX_CHARS} chars): "{text[:TEXT_PREFIX_CHARS]}"\n\n'
        f"Available tools:\n{tool_lines}\n\n"
        "Call the best tool once and return its result."
    )


def tool_specs(tools: ToolList) -> list[dict[str, Any]]:
    """Provider-neutral tool specs for `LLMClient.generate_tool_calls`."""
    return [
        {"name": tool.name, "description": tool.description, "parameters": tool.input_schema}
        for tool in tools.tools
    ]


class ToolSelector:
    """Chooses one tool and its arguments for a user intent."""

    def __init__(self, router: LLMRouter, temperature: float = 0.1):
        self.router = router
        self.temperature = temperature

    async def select(
        self,
        text: str,
        intent: str,
        tools: ToolList,
        provider: str | None = None,
    ) -> ToolCall:
        """Select exactly one tool.

        The model only sees a prefix of the text, so the ``text`` argument
        of the returned call is always bound to the full caller text.

        Args:
            text: Full input text
            intent: Free-form sanitization request
            tools: Tools available on the dispatch server
            provider: LLM provider name (router default if None)

        Returns:
            ToolCall naming a listed tool with validated arguments

        Raises:
            ToolSelectionError: No usable invocation from the model
            LLMError: Provider failure
        """
        client = self.router.route(provider)
        provider_name = client.provider

        try:
            invocations = await client.generate_tool_calls(
                prompt=build_selection_prompt(text, intent, tools),
                tools=tool_specs(tools),
                system_prompt=SELECTOR_SYSTEM_PROMPT,
                temperature=self.temperature,
            )
        except LLMValidationError as e:
            selection_failures_total.labels(provider=provider_name).inc()
            raise ToolSelectionError(f"model did not select a valid tool: {e}")

        if not invocations:
            selection_failures_total.labels(provider=provider_name).inc()
            raise ToolSelectionError("model did not select a tool")

        if len(invocations) > 1:
            logger.warning(
                "extra_tool_calls_ignored",
                chosen=invocations[0].name,
                ignored=[inv.name for inv in invocations[1:]],
            )

        chosen = invocations[0]
        descriptor = tools.get(chosen.name)
        if descriptor is None:
            selection_failures_total.labels(provider=provider_name).inc()
            raise ToolSelectionError(f"model selected unknown tool '{chosen.name}'")

        model_text = chosen.arguments.get("text")
        if model_text is not None and not isinstance(model_text, str):
            selection_failures_total.labels(provider=provider_name).inc()
            raise ToolSelectionError(
                f"invalid arguments for tool '{chosen.name}': text must be a string"
            )
        if model_text is None:
            logger.warning("tool_text_argument_missing", tool=chosen.name, provider=provider_name)
        elif model_text != text:
            logger.info(
                "tool_text_argument_rebound",
                tool=chosen.name,
                model_text_length=len(model_text),
                text_length=len(text),
            )

        arguments = {**chosen.arguments, "text": text}
        try:
            jsonschema.validate(instance=arguments, schema=descriptor.input_schema)
        except jsonschema.ValidationError as e:
            selection_failures_total.labels(provider=provider_name).inc()
            raise ToolSelectionError(f"invalid arguments for tool '{chosen.name}': {e.message}")

        tool_selections_total.labels(tool_name=chosen.name, provider=provider_name).inc()
        logger.info("tool_selected", tool=chosen.name, provider=provider_name)
        return ToolCall(name=chosen.name, arguments=arguments)
