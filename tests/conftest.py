"""Pytest fixtures.

The fake LLM client stands in for every provider: it echoes the first tool
whose description contains a word of the user's intent, and "sanitizes"
text by replacing it with a fixed marker.
"""

import re
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from sanitize_agents import SanitizeOrchestrator, ToolSelector
from sanitize_llm import LLMClient, LLMRouter, ToolInvocation
from sanitize_tools.catalog import build_default_registry
from sanitize_tools.client import DispatchClient
from sanitize_tools.dispatcher import DispatchServer
from sanitize_tools.executor import TextTransformExecutor

SANITIZED_MARKER = "[REDACTED]"

_INTENT = re.compile(r'User request: "(.*)"')


class FakeLLMClient(LLMClient):
    """Deterministic LLM stub with call recording."""

    def __init__(self, provider: str = "openai", invocations: list[ToolInvocation] | None = None):
        self.provider = provider
        self.invocations = invocations
        self.generate_calls: list[dict[str, Any]] = []
        self.tool_call_prompts: list[str] = []

    @property
    def model_name(self) -> str:
        return f"fake-{self.provider}"

    async def generate(self, prompt, system_prompt=None, temperature=0.1, max_tokens=2000, **kwargs):
        self.generate_calls.append({"prompt": prompt, "system_prompt": system_prompt})
        return SANITIZED_MARKER if prompt.strip() else ""

    async def generate_tool_calls(self, prompt, tools, system_prompt=None, temperature=0.1, **kwargs):
        self.tool_call_prompts.append(prompt)
        if self.invocations is not None:
            return list(self.invocations)

        match = _INTENT.search(prompt)
        intent = match.group(1) if match else ""
        for word in re.findall(r"[a-z]+", intent.lower()):
            if len(word) < 3:
                continue
            for tool in tools:
                if word in tool["description"].lower():
                    return [ToolInvocation(name=tool["name"], arguments={"text": "ignored"})]
        return []


@pytest.fixture
def fake_llm():
    """Fake LLM client registered as the openai provider."""
    return FakeLLMClient()


@pytest.fixture
def llm_router(fake_llm):
    """Router with only the fake provider configured."""
    return LLMRouter({"openai": fake_llm}, default_provider="openai")


@pytest.fixture
def registry():
    """Registry with the four canonical tools."""
    return build_default_registry()


@pytest.fixture
def executor(llm_router):
    return TextTransformExecutor(llm_router)


@pytest.fixture
def dispatch_server(registry, executor):
    return DispatchServer(registry, executor)


@pytest.fixture
def mcp_app(dispatch_server):
    """Dispatch server app with injected state (lifespan not run)."""
    from apps.mcp_server.main import app

    app.state.dispatch_server = dispatch_server
    return app


@pytest.fixture
def client_factory(mcp_app):
    """Dispatch clients talking to the in-process dispatch app."""

    def factory() -> DispatchClient:
        return DispatchClient("http://dispatch", transport=httpx.ASGITransport(app=mcp_app))

    return factory


@pytest.fixture
def orchestrator(client_factory, llm_router):
    return SanitizeOrchestrator(client_factory=client_factory, selector=ToolSelector(llm_router))


@pytest.fixture
def mcp_client(mcp_app):
    """HTTP test client for the dispatch server."""
    return TestClient(mcp_app)


@pytest.fixture
def client(orchestrator, client_factory, llm_router):
    """HTTP test client for the core API."""
    from apps.core_api.main import app, settings

    app.state.settings = settings
    app.state.llm_router = llm_router
    app.state.client_factory = client_factory
    app.state.orchestrator = orchestrator
    return TestClient(app)


@pytest.fixture
def make_fake_llm():
    """Factory for extra fake clients (other providers, canned invocations)."""
    return FakeLLMClient
