"""Dispatch protocol Pydantic schemas.

Wire envelope for the two RPC methods and the tool input/output shapes.
Field names are snake_case in Python and camelCase on the wire.
"""

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base model serialized with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


# ============================================================================
# TOOL INPUT / OUTPUT SHAPES
# ============================================================================


class SanitizeInput(WireModel):
    """Input schema shared by all sanitization tools."""

    text: str = Field(..., description="The text to sanitize")


class ToolResult(WireModel):
    """Output schema shared by all sanitization tools."""

    sanitized_text: str = Field(..., description="The sanitized text")


# ============================================================================
# TOOL LISTING
# ============================================================================


class ToolDescriptor(WireModel):
    """Tool description as exposed by tools/list (no executable body)."""

    name: str
    description: str
    input_schema: dict[str, Any]
    output_schema: dict[str, Any]


class ToolList(WireModel):
    """Ordered snapshot of registered tools."""

    tools: list[ToolDescriptor] = Field(default_factory=list)

    def names(self) -> list[str]:
        return [tool.name for tool in self.tools]

    def get(self, name: str) -> ToolDescriptor | None:
        return next((tool for tool in self.tools if tool.name == name), None)


class ToolCall(WireModel):
    """A tool chosen for execution, with its arguments."""

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


# ============================================================================
# RPC ENVELOPE
# ============================================================================


class RpcMethod:
    LIST_TOOLS = "tools/list"
    CALL_TOOL = "tools/call"


class ErrorCode(IntEnum):
    """Fixed RPC error codes."""

    METHOD_NOT_FOUND = -32601
    TOOL_NOT_FOUND = -32004
    INTERNAL_ERROR = -32603


class RpcRequest(BaseModel):
    """Request envelope: ``{"method": ..., "params": {...}}``."""

    method: str
    params: dict[str, Any] = Field(default_factory=dict)


class CallToolParams(WireModel):
    """Params of a tools/call request."""

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)
    provider: str | None = None


class RpcError(BaseModel):
    code: int
    message: str


class RpcResponse(BaseModel):
    """Response envelope: exactly one of ``result`` or ``error``."""

    result: dict[str, Any] | None = None
    error: RpcError | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "RpcResponse":
        if (self.result is None) == (self.error is None):
            raise ValueError("RpcResponse must carry exactly one of result or error")
        return self

    @classmethod
    def success(cls, result: dict[str, Any]) -> "RpcResponse":
        return cls(result=result)

    @classmethod
    def failure(cls, code: ErrorCode, message: str) -> "RpcResponse":
        return cls(error=RpcError(code=int(code), message=message))

    def to_wire(self) -> dict[str, Any]:
        if self.error is not None:
            return {"error": self.error.model_dump()}
        return {"result": self.result}
