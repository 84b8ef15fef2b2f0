"""Dispatch Server.

Maps the two RPC methods onto the tool registry and executor:
- tools/list: registry descriptors, always succeeds
- tools/call: registry lookup, then executor

Every failure is turned into a well-formed RpcResponse; `handle` never raises.
"""

from typing import Any

from pydantic import ValidationError

from sanitize_obs.logging import get_logger
from sanitize_obs.metrics import tool_call_duration, tool_calls_total
from sanitize_tools.executor import TextTransformExecutor
from sanitize_tools.registry import ToolRegistry
from sanitize_tools.schemas import (
    CallToolParams,
    ErrorCode,
    RpcMethod,
    RpcRequest,
    RpcResponse,
)

logger = get_logger(__name__)


class DispatchServer:
    """Two-method RPC dispatcher over an injected registry and executor."""

    def __init__(self, registry: ToolRegistry, executor: TextTransformExecutor):
        self.registry = registry
        self.executor = executor

    async def handle(self, payload: Any) -> RpcResponse:
        """Handle one RPC request body."""
        try:
            request = RpcRequest.model_validate(payload)
        except ValidationError:
            logger.warning("rpc_request_malformed")
            return RpcResponse.failure(ErrorCode.METHOD_NOT_FOUND, "Malformed request")

        try:
            if request.method == RpcMethod.LIST_TOOLS:
                return self._list_tools()
            if request.method == RpcMethod.CALL_TOOL:
                return await self._call_tool(request.params)

            logger.warning("rpc_method_not_found", method=request.method)
            return RpcResponse.failure(
                ErrorCode.METHOD_NOT_FOUND, f"Method '{request.method}' not found"
            )
        except Exception as e:
            logger.error("rpc_internal_error", method=request.method, error=str(e), exc_info=True)
            return RpcResponse.failure(ErrorCode.INTERNAL_ERROR, str(e) or "Internal error")

    def _list_tools(self) -> RpcResponse:
        return RpcResponse.success(self.registry.descriptors().to_wire())

    async def _call_tool(self, raw_params: dict[str, Any]) -> RpcResponse:
        try:
            params = CallToolParams.model_validate(raw_params)
        except ValidationError:
            return RpcResponse.failure(
                ErrorCode.METHOD_NOT_FOUND, f"Malformed params for '{RpcMethod.CALL_TOOL}'"
            )

        tool = self.registry.get(params.name)
        if tool is None:
            tool_calls_total.labels(tool_name=params.name, status="not_found").inc()
            logger.warning("tool_not_found", tool=params.name)
            return RpcResponse.failure(ErrorCode.TOOL_NOT_FOUND, f"Tool '{params.name}' not found")

        try:
            with tool_call_duration.labels(tool_name=tool.name).time():
                result = await self.executor.execute(tool, params.arguments, params.provider)
        except Exception:
            tool_calls_total.labels(tool_name=tool.name, status="failure").inc()
            raise

        tool_calls_total.labels(tool_name=tool.name, status="success").inc()
        logger.info("tool_call_completed", tool=tool.name, provider=params.provider)
        return RpcResponse.success(result.to_wire())
