"""
FastAPI Routers.

Contains:
- sanitize: POST /sanitize/stream, POST /sanitize, GET /providers
- health: GET /healthz, /readyz
- metrics: GET /metrics
"""

__all__ = ["sanitize", "health", "metrics"]
