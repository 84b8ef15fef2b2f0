"""Tool Registry.

Ordered, name-keyed collection of tools. Populated once at startup and
read-only afterwards.
"""

from sanitize_tools.base import Tool
from sanitize_tools.exceptions import ToolAlreadyRegisteredError
from sanitize_tools.schemas import ToolList


class ToolRegistry:
    """Tool registry with lookup by name, preserving registration order."""

    def __init__(self):
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        """Register a tool.

        Raises:
            ToolAlreadyRegisteredError: A tool with this name already exists
        """
        if tool.name in self._tools:
            raise ToolAlreadyRegisteredError(f"Tool '{tool.name}' is already registered")
        self._tools[tool.name] = tool

    def get(self, name: str) -> Tool | None:
        """Get tool by name."""
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def descriptors(self) -> ToolList:
        """Snapshot of tool descriptors for tools/list."""
        return ToolList(tools=[tool.descriptor() for tool in self._tools.values()])

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    # Defined last: the method name shadows the builtin in the class body.
    def list(self) -> list[Tool]:
        """All tools in registration order."""
        return list(self._tools.values())
