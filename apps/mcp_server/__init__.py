"""
Sanitize-Core Dispatch Server.

Serves the two-method tool protocol:
- POST /mcp: tools/list, tools/call
- /healthz, /metrics
"""

__all__ = ["app"]
