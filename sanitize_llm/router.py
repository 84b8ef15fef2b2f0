"""LLM Router - resolves a provider name to a configured client.

Routing Strategy:
- The caller names a provider (openai, gemini, anthropic) or leaves it empty
- Empty names resolve to the configured default, falling back to the first
  provider that has an API key
"""

from sanitize_config.settings import Settings
from sanitize_obs.logging import get_logger

from .anthropic_client import AnthropicClient
from .client import LLMClient, LLMConfigError
from .gemini_client import GeminiClient
from .openai_client import OpenAIClient

logger = get_logger(__name__)

PROVIDERS = ("openai", "gemini", "anthropic")


class LLMRouter:
    """Routes requests to the LLM client of the requested provider."""

    def __init__(
        self,
        clients: dict[str, LLMClient],
        default_provider: str = "openai",
    ):
        """Initialize router with provider clients.

        Args:
            clients: Configured clients keyed by provider name
            default_provider: Provider used when none is requested
        """
        self._clients = dict(clients)
        self._default_provider = default_provider

    @classmethod
    def from_settings(cls, settings: Settings) -> "LLMRouter":
        """Build clients for every provider that has an API key."""
        clients: dict[str, LLMClient] = {}

        if settings.OPENAI_API_KEY:
            clients["openai"] = OpenAIClient(
                api_key=settings.OPENAI_API_KEY, model=settings.OPENAI_MODEL
            )
        if settings.GEMINI_API_KEY:
            clients["gemini"] = GeminiClient(
                api_key=settings.GEMINI_API_KEY, model=settings.GEMINI_MODEL
            )
        if settings.ANTHROPIC_API_KEY:
            clients["anthropic"] = AnthropicClient(
                api_key=settings.ANTHROPIC_API_KEY, model=settings.ANTHROPIC_MODEL
            )

        if not clients:
            logger.warning("no_llm_providers_configured")

        return cls(clients, default_provider=settings.DEFAULT_PROVIDER)

    def available_providers(self) -> list[str]:
        """Providers with a configured client, in canonical order."""
        return [p for p in PROVIDERS if p in self._clients]

    @property
    def default_provider(self) -> str:
        """Configured default if available, else the first available provider."""
        if self._default_provider in self._clients:
            return self._default_provider
        available = self.available_providers()
        return available[0] if available else self._default_provider

    def resolve(self, provider: str | None) -> str:
        """Return the provider name a request will actually use."""
        return provider or self.default_provider

    def route(self, provider: str | None = None) -> LLMClient:
        """Return the client for a provider.

        Raises:
            LLMConfigError: Unknown provider, or provider without API key
        """
        name = self.resolve(provider)
        if name not in PROVIDERS:
            raise LLMConfigError(f"Unknown provider: {name}")

        client = self._clients.get(name)
        if client is None:
            raise LLMConfigError(f"Provider '{name}' is not configured")
        return client
