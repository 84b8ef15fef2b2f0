"""Sanitize pipeline request/response schemas."""

from typing import Literal

from pydantic import ConfigDict, Field

from sanitize_tools.schemas import WireModel


class SanitizeRequest(WireModel):
    """Caller input: text plus a free-form sanitization intent."""

    model_config = ConfigDict(
        protected_namespaces=(),
        json_schema_extra={
            "example": {
                "text": "John Smith, email: john@x.com",
                "sanitizationRequest": "Anonymize PII",
                "modelProvider": "openai",
            }
        },
    )

    text: str = Field(..., description="Text to sanitize")
    sanitization_request: str = Field(
        ..., min_length=1, description="Free-form user intent, e.g. 'Anonymize PII'"
    )
    model_provider: Literal["openai", "gemini", "anthropic"] | None = Field(
        None, description="LLM provider (server default if omitted)"
    )


class SanitizeResult(WireModel):
    """Final pipeline output."""

    model_config = ConfigDict(protected_namespaces=())

    sanitized_text: str
    tool_used: str
    model_used: str
