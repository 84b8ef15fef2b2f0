"""
Sanitize-Core Applications Package.

Contains:
- core_api: FastAPI application serving the sanitize pipeline and its progress stream
- mcp_server: Dispatch server (tools/list, tools/call)
"""

__version__ = "0.1.0"
