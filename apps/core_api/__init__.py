"""
Sanitize-Core FastAPI Application.

Main API server providing:
- /sanitize/stream, /sanitize: Sanitize pipeline
- /providers: Configured LLM providers
- /healthz, /readyz: Health checks
- /metrics: Prometheus metrics
"""

__all__ = ["app"]
