"""Sanitize-Core Tool System.

Tool definitions, registry, executor and the tools/list + tools/call
dispatch protocol (server and client sides).
"""

from sanitize_tools.base import Tool
from sanitize_tools.catalog import CANONICAL_TOOLS, build_default_registry
from sanitize_tools.registry import ToolRegistry
from sanitize_tools.schemas import ErrorCode, ToolCall, ToolList, ToolResult

__all__ = [
    "Tool",
    "ToolRegistry",
    "ToolCall",
    "ToolList",
    "ToolResult",
    "ErrorCode",
    "CANONICAL_TOOLS",
    "build_default_registry",
]
