"""
Sanitize-Core Observability Package.

Provides:
- Structured logging (structlog)
- Metrics (Prometheus)
- Distributed tracing (OpenTelemetry, opt-in)
"""

__all__ = ["tracing", "metrics", "logging"]
