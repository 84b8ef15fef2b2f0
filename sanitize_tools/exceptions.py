"""Tool system exceptions.

Custom exception hierarchy for registry, execution and dispatch errors.
"""


class ToolError(Exception):
    """Base exception for the tool system."""

    pass


class ToolAlreadyRegisteredError(ToolError):
    """A tool with the same name is already registered."""

    pass


class ExecutionError(ToolError):
    """Tool execution failed or produced unusable output."""

    pass


class DispatchClientError(ToolError):
    """Dispatch server unreachable or returned an unreadable response."""

    pass


class DispatchProtocolError(DispatchClientError):
    """Dispatch server answered with a structured RPC error."""

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message
