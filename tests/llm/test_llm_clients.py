"""Tests for LLM client implementations and the provider router."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from sanitize_config.settings import Settings
from sanitize_llm import (
    AnthropicClient,
    GeminiClient,
    LLMAuthError,
    LLMConfigError,
    LLMRateLimitError,
    LLMRouter,
    LLMValidationError,
    OpenAIClient,
    ToolInvocation,
)

TEXT_PARAMETERS = {"type": "object", "properties": {"text": {"type": "string"}}, "required": ["text"]}

TOOLS = [
    {
        "name": "anonymize_pii",
        "description": "Anonymizes personally identifiable information (PII).",
        "parameters": TEXT_PARAMETERS,
    },
    {
        "name": "general_sanitize",
        "description": "General sanitization.",
        "parameters": TEXT_PARAMETERS,
    },
]


def api_response(status_code: int, url: str) -> httpx.Response:
    return httpx.Response(status_code, request=httpx.Request("POST", url))


def openai_tool_response(name: str, raw_arguments: str) -> MagicMock:
    call = MagicMock()
    call.function.name = name
    call.function.arguments = raw_arguments

    mock_response = MagicMock()
    mock_response.choices = [MagicMock(message=MagicMock(tool_calls=[call]))]
    return mock_response


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def openai_client():
    return OpenAIClient(api_key="sk-test-key-12345", model="gpt-4o-mini")


@pytest.fixture
def anthropic_client():
    return AnthropicClient(api_key="sk-ant-test-key-12345")


@pytest.fixture
def gemini_client():
    return GeminiClient(api_key="gemini-test-key")


# ============================================================================
# OPENAI CLIENT TESTS
# ============================================================================


def test_openai_client_missing_api_key(monkeypatch):
    """Test OpenAI client raises error when API key missing."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    with pytest.raises(LLMAuthError, match="OPENAI_API_KEY not found"):
        OpenAIClient()


@pytest.mark.asyncio
async def test_openai_generate_success(openai_client):
    """Test text generation sends system + user messages."""
    mock_response = MagicMock()
    mock_response.choices = [MagicMock(message=MagicMock(content="Hello [NAME]"))]

    with patch.object(
        openai_client.client.chat.completions,
        "create",
        new_callable=AsyncMock,
    ) as mock_create:
        mock_create.return_value = mock_response

        result = await openai_client.generate(
            prompt="Hello Bob", system_prompt="Anonymize", temperature=0.2
        )

        assert result == "Hello [NAME]"
        call_kwargs = mock_create.call_args.kwargs
        assert call_kwargs["model"] == "gpt-4o-mini"
        assert call_kwargs["temperature"] == 0.2
        assert call_kwargs["messages"] == [
            {"role": "system", "content": "Anonymize"},
            {"role": "user", "content": "Hello Bob"},
        ]


@pytest.mark.asyncio
async def test_openai_generate_tool_calls(openai_client):
    """Test native function calling is forced and parsed."""
    with patch.object(
        openai_client.client.chat.completions,
        "create",
        new_callable=AsyncMock,
    ) as mock_create:
        mock_create.return_value = openai_tool_response("anonymize_pii", json.dumps({"text": "John"}))

        result = await openai_client.generate_tool_calls(prompt="pick", tools=TOOLS)

        assert result == [ToolInvocation(name="anonymize_pii", arguments={"text": "John"})]
        call_kwargs = mock_create.call_args.kwargs
        assert call_kwargs["tool_choice"] == "required"
        assert call_kwargs["tools"][0] == {"type": "function", "function": TOOLS[0]}


@pytest.mark.asyncio
async def test_openai_tool_calls_bad_arguments(openai_client):
    """Test malformed function arguments become a validation error."""
    with patch.object(
        openai_client.client.chat.completions,
        "create",
        new_callable=AsyncMock,
        return_value=openai_tool_response("anonymize_pii", "{not json"),
    ):
        with pytest.raises(LLMValidationError, match="Failed to parse tool arguments"):
            await openai_client.generate_tool_calls(prompt="pick", tools=TOOLS)


@pytest.mark.asyncio
@pytest.mark.parametrize("raw_arguments", [json.dumps(["John"]), json.dumps("John"), "42"])
async def test_openai_tool_calls_non_object_arguments(openai_client, raw_arguments):
    """Test valid JSON that is not an object is a validation error."""
    with patch.object(
        openai_client.client.chat.completions,
        "create",
        new_callable=AsyncMock,
        return_value=openai_tool_response("anonymize_pii", raw_arguments),
    ):
        with pytest.raises(LLMValidationError, match="not an object"):
            await openai_client.generate_tool_calls(prompt="pick", tools=TOOLS)


@pytest.mark.asyncio
async def test_openai_rate_limit_error(openai_client):
    """Test OpenAI rate limit error handling."""
    from openai import RateLimitError

    with patch.object(
        openai_client.client.chat.completions,
        "create",
        new_callable=AsyncMock,
    ) as mock_create:
        mock_create.side_effect = RateLimitError(
            message="Rate limit exceeded",
            response=api_response(429, "https://api.openai.com/v1/chat/completions"),
            body=None,
        )

        with pytest.raises(LLMRateLimitError, match="OpenAI rate limit exceeded"):
            await openai_client.generate(prompt="Test")


def test_openai_gpt5_sampling_params():
    """Test gpt-5 models drop temperature and use max_completion_tokens."""
    client = OpenAIClient(api_key="sk-test", model="gpt-5-mini")

    assert client._sampling_params(0.1, 500) == {"max_completion_tokens": 500}
    assert client._sampling_params(0.1) == {}


# ============================================================================
# ANTHROPIC CLIENT TESTS
# ============================================================================


@pytest.mark.asyncio
async def test_anthropic_generate_success(anthropic_client):
    """Test successful text generation."""
    mock_block = MagicMock()
    mock_block.text = "Generated response from Claude"

    mock_response = MagicMock()
    mock_response.content = [mock_block]

    with patch.object(
        anthropic_client.client.messages,
        "create",
        new_callable=AsyncMock,
    ) as mock_create:
        mock_create.return_value = mock_response

        result = await anthropic_client.generate(
            prompt="Test prompt",
            system_prompt="Test system",
            temperature=0.5,
        )

        assert result == "Generated response from Claude"
        call_kwargs = mock_create.call_args.kwargs
        assert call_kwargs["model"] == "claude-sonnet-4-5-20250929"
        assert call_kwargs["temperature"] == 0.5
        assert call_kwargs["system"] == "Test system"


@pytest.mark.asyncio
async def test_anthropic_generate_tool_calls(anthropic_client):
    """Test tool_use blocks are collected and text blocks ignored."""
    text_block = MagicMock(type="text", text="Let me pick a tool.")
    tool_block = MagicMock(type="tool_use", input={"text": "Jane"})
    tool_block.name = "anonymize_pii"

    mock_response = MagicMock()
    mock_response.content = [text_block, tool_block]

    with patch.object(
        anthropic_client.client.messages,
        "create",
        new_callable=AsyncMock,
    ) as mock_create:
        mock_create.return_value = mock_response

        result = await anthropic_client.generate_tool_calls(prompt="pick", tools=TOOLS)

        assert result == [ToolInvocation(name="anonymize_pii", arguments={"text": "Jane"})]
        call_kwargs = mock_create.call_args.kwargs
        assert call_kwargs["tool_choice"] == {"type": "any"}
        assert call_kwargs["tools"][0]["input_schema"] == TOOLS[0]["parameters"]


@pytest.mark.asyncio
async def test_anthropic_tool_input_not_object(anthropic_client):
    """Test a tool_use block whose input is not an object is a validation error."""
    tool_block = MagicMock(type="tool_use", input="John")
    tool_block.name = "anonymize_pii"

    with patch.object(
        anthropic_client.client.messages,
        "create",
        new_callable=AsyncMock,
        return_value=MagicMock(content=[tool_block]),
    ):
        with pytest.raises(LLMValidationError, match="not an object"):
            await anthropic_client.generate_tool_calls(prompt="pick", tools=TOOLS)


@pytest.mark.asyncio
async def test_anthropic_authentication_error(anthropic_client):
    """Test Anthropic authentication error handling."""
    from anthropic import AuthenticationError

    with patch.object(
        anthropic_client.client.messages,
        "create",
        new_callable=AsyncMock,
    ) as mock_create:
        mock_create.side_effect = AuthenticationError(
            message="Invalid API key",
            response=api_response(401, "https://api.anthropic.com/v1/messages"),
            body={"error": {"message": "Invalid API key"}},
        )

        with pytest.raises(LLMAuthError, match="Anthropic authentication failed"):
            await anthropic_client.generate_tool_calls(prompt="pick", tools=TOOLS)


# ============================================================================
# GEMINI CLIENT TESTS
# ============================================================================


@pytest.mark.asyncio
async def test_gemini_tool_call_from_fenced_json(gemini_client):
    """Test the text adapter parses a fenced JSON answer."""
    answer = 'Sure!\n```json\n{"tool": "anonymize_pii", "arguments": {"text": "Jane"}}\n```'

    with patch.object(
        gemini_client.client.aio.models,
        "generate_content",
        new_callable=AsyncMock,
    ) as mock_generate:
        mock_generate.return_value = MagicMock(text=answer)

        result = await gemini_client.generate_tool_calls(
            prompt='User request: "Anonymize"', tools=TOOLS
        )

        assert result == [ToolInvocation(name="anonymize_pii", arguments={"text": "Jane"})]
        contents = mock_generate.call_args.kwargs["contents"]
        assert "- anonymize_pii: Anonymizes personally identifiable information (PII)." in contents
        assert contents.endswith('{"tool": "tool_name", "arguments": {"text": "user_text"}}')


@pytest.mark.asyncio
async def test_gemini_tool_call_unparseable(gemini_client):
    """Test prose without a JSON object is a validation error, not a guess."""
    with patch.object(
        gemini_client.client.aio.models,
        "generate_content",
        new_callable=AsyncMock,
        return_value=MagicMock(text="I would use anonymize_pii for this."),
    ):
        with pytest.raises(LLMValidationError, match="Failed to parse Gemini response"):
            await gemini_client.generate_tool_calls(prompt="pick", tools=TOOLS)


@pytest.mark.asyncio
@pytest.mark.parametrize("arguments", ["[]", '""', "0"])
async def test_gemini_tool_call_falsy_non_object_arguments(gemini_client, arguments):
    """Test falsy arguments that are not objects are rejected, not defaulted."""
    with patch.object(
        gemini_client.client.aio.models,
        "generate_content",
        new_callable=AsyncMock,
        return_value=MagicMock(text='{"tool": "anonymize_pii", "arguments": %s}' % arguments),
    ):
        with pytest.raises(LLMValidationError, match="not an object"):
            await gemini_client.generate_tool_calls(prompt="pick", tools=TOOLS)


@pytest.mark.asyncio
async def test_gemini_tool_call_without_arguments(gemini_client):
    with patch.object(
        gemini_client.client.aio.models,
        "generate_content",
        new_callable=AsyncMock,
        return_value=MagicMock(text='{"tool": "general_sanitize"}'),
    ):
        result = await gemini_client.generate_tool_calls(prompt="pick", tools=TOOLS)

    assert result == [ToolInvocation(name="general_sanitize", arguments={})]


@pytest.mark.asyncio
async def test_gemini_tool_call_missing_name(gemini_client):
    with patch.object(
        gemini_client.client.aio.models,
        "generate_content",
        new_callable=AsyncMock,
        return_value=MagicMock(text='{"arguments": {"text": "x"}}'),
    ):
        with pytest.raises(LLMValidationError, match="no tool name"):
            await gemini_client.generate_tool_calls(prompt="pick", tools=TOOLS)


@pytest.mark.asyncio
async def test_gemini_generate_passes_system_instruction(gemini_client):
    with patch.object(
        gemini_client.client.aio.models,
        "generate_content",
        new_callable=AsyncMock,
        return_value=MagicMock(text="[PATIENT_ID] was seen"),
    ) as mock_generate:
        result = await gemini_client.generate("P-1234 was seen", system_prompt="Redact medical data")

        assert result == "[PATIENT_ID] was seen"
        config = mock_generate.call_args.kwargs["config"]
        assert config.system_instruction == "Redact medical data"
        assert config.max_output_tokens == 2000


@pytest.mark.asyncio
async def test_gemini_rate_limit_error(gemini_client):
    from google.genai import errors

    with patch.object(
        gemini_client.client.aio.models,
        "generate_content",
        new_callable=AsyncMock,
    ) as mock_generate:
        mock_generate.side_effect = errors.ClientError(
            429, {"error": {"code": 429, "message": "quota", "status": "RESOURCE_EXHAUSTED"}}
        )

        with pytest.raises(LLMRateLimitError, match="Gemini rate limit exceeded"):
            await gemini_client.generate("text")


# ============================================================================
# ROUTER TESTS
# ============================================================================


def test_router_from_settings_only_keyed_providers():
    """Test clients are built only for providers with an API key."""
    settings = Settings(_env_file=None, GEMINI_API_KEY="g-key", ANTHROPIC_API_KEY="a-key")

    router = LLMRouter.from_settings(settings)

    assert router.available_providers() == ["gemini", "anthropic"]
    # Configured default (openai) has no key
    assert router.default_provider == "gemini"
    assert isinstance(router.route(), GeminiClient)
    assert isinstance(router.route("anthropic"), AnthropicClient)


def test_router_unknown_and_unconfigured(make_fake_llm):
    router = LLMRouter({"openai": make_fake_llm()})

    with pytest.raises(LLMConfigError, match="Unknown provider: mistral"):
        router.route("mistral")
    with pytest.raises(LLMConfigError, match="Provider 'gemini' is not configured"):
        router.route("gemini")


def test_router_resolve_defaults(make_fake_llm):
    router = LLMRouter(
        {"openai": make_fake_llm(), "anthropic": make_fake_llm("anthropic")}, "anthropic"
    )

    assert router.resolve(None) == "anthropic"
    assert router.resolve("openai") == "openai"
