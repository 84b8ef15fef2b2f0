"""
Application Settings (Pydantic Settings).

Loads configuration from environment variables (.env file or system env).

Both processes read the same settings:
- Dispatch server: `uvicorn apps.mcp_server.main:app --port 9003`
- Core API: `uvicorn apps.core_api.main:app --port 8000`
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Provider API keys are optional; a provider without a key is simply
    reported as unavailable by the LLM router.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # ========================================================================
    # LLM PROVIDERS
    # ========================================================================
    OPENAI_API_KEY: str = Field(default="")
    OPENAI_MODEL: str = Field(default="gpt-3.5-turbo")

    GEMINI_API_KEY: str = Field(default="")
    GEMINI_MODEL: str = Field(default="gemini-1.5-flash")

    ANTHROPIC_API_KEY: str = Field(default="")
    ANTHROPIC_MODEL: str = Field(default="claude-sonnet-4-5-20250929")

    DEFAULT_PROVIDER: str = Field(
        default="openai",
        description="Provider used when a request does not name one",
        pattern="^(openai|gemini|anthropic)$",
    )
    LLM_TEMPERATURE: float = Field(default=0.1, ge=0.0, le=2.0)
    LLM_MAX_TOKENS: int = Field(default=2000, ge=1)

    # ========================================================================
    # DISPATCH SERVER (tools/list, tools/call)
    # ========================================================================
    MCP_HOST: str = Field(default="localhost")
    MCP_PORT: int = Field(default=9003)
    MCP_BASE_URL: str = Field(
        default="",
        description="Dispatch server base URL (derived from MCP_HOST/MCP_PORT if empty)",
    )
    MCP_REQUEST_TIMEOUT: float | None = Field(
        default=None,
        description="Timeout for dispatch calls in seconds (None = unbounded)",
        gt=0,
    )

    # ========================================================================
    # CORE API
    # ========================================================================
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=8000)
    API_CORS_ORIGINS: str = Field(default="*")

    # ========================================================================
    # LOGGING
    # ========================================================================
    LOG_LEVEL: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    LOG_FORMAT: str = Field(default="json", pattern="^(json|text)$")

    # ========================================================================
    # OPENTELEMETRY
    # ========================================================================
    OTEL_EXPORTER_OTLP_ENDPOINT: str = Field(default="http://localhost:4317")
    OTEL_SERVICE_NAME: str = Field(default="sanitize-core")
    OTEL_TRACES_ENABLED: bool = Field(default=False)

    # ========================================================================
    # DEPLOYMENT
    # ========================================================================
    ENVIRONMENT: str = Field(
        default="development", pattern="^(development|staging|production)$"
    )

    @property
    def mcp_base_url(self) -> str:
        """Resolved dispatch server URL."""
        if self.MCP_BASE_URL:
            return self.MCP_BASE_URL.rstrip("/")
        return f"http://{self.MCP_HOST}:{self.MCP_PORT}"
