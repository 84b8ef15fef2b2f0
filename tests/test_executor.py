"""Text-Transform Executor Tests."""

import pytest

from sanitize_llm import LLMConfigError
from sanitize_tools.base import Tool
from sanitize_tools.catalog import ANONYMIZE_PII, SYSTEM_PROMPTS, instruction_for
from sanitize_tools.exceptions import ExecutionError
from sanitize_tools.executor import TextTransformExecutor


@pytest.mark.asyncio
async def test_execute_uses_tool_instruction(executor, fake_llm):
    """Test one generation call with the tool's instruction and the input text."""
    result = await executor.execute(ANONYMIZE_PII, {"text": "John Smith, email: john@x.com"})

    assert result.sanitized_text == "[REDACTED]"
    assert fake_llm.generate_calls == [
        {
            "prompt": "John Smith, email: john@x.com",
            "system_prompt": SYSTEM_PROMPTS["anonymize_pii"],
        }
    ]


@pytest.mark.asyncio
async def test_unknown_tool_falls_back_to_general_instruction(executor, fake_llm):
    """Test tools without a dedicated instruction use the general sanitizer."""
    custom = Tool(name="redact_legal", description="Redacts case numbers")

    await executor.execute(custom, {"text": "Case 2024-113"})

    assert fake_llm.generate_calls[0]["system_prompt"] == SYSTEM_PROMPTS["general_sanitize"]
    assert instruction_for("redact_legal") == SYSTEM_PROMPTS["general_sanitize"]


@pytest.mark.asyncio
async def test_invalid_arguments_rejected_before_generation(executor, fake_llm):
    """Test arguments failing the input schema never reach the model."""
    with pytest.raises(ExecutionError, match="Invalid arguments"):
        await executor.execute(ANONYMIZE_PII, {"content": "no text field"})

    assert fake_llm.generate_calls == []


@pytest.mark.asyncio
async def test_empty_output_for_non_empty_input_is_an_error(executor, fake_llm):
    """Test a blank model answer is treated as unusable output."""

    async def blank(*args, **kwargs):
        return "   "

    fake_llm.generate = blank

    with pytest.raises(ExecutionError, match="empty output"):
        await executor.execute(ANONYMIZE_PII, {"text": "Jane Doe"})


@pytest.mark.asyncio
async def test_unconfigured_provider_raises(executor):
    """Test a provider without client surfaces as a config error."""
    with pytest.raises(LLMConfigError, match="gemini"):
        await executor.execute(ANONYMIZE_PII, {"text": "Jane Doe"}, provider="gemini")


@pytest.mark.asyncio
async def test_provider_passed_through(llm_router, fake_llm, make_fake_llm):
    """Test the requested provider picks the client."""
    gemini = make_fake_llm(provider="gemini")
    llm_router._clients["gemini"] = gemini
    executor = TextTransformExecutor(llm_router)

    await executor.execute(ANONYMIZE_PII, {"text": "Jane Doe"}, provider="gemini")

    assert len(gemini.generate_calls) == 1
    assert fake_llm.generate_calls == []
