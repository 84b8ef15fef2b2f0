"""Dispatch server HTTP client."""

from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from sanitize_obs.logging import get_logger

from .exceptions import DispatchClientError, DispatchProtocolError
from .schemas import RpcMethod, ToolCall, ToolList, ToolResult

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class DispatchClient:
    """HTTP client for the tools/list and tools/call RPC methods."""

    ENDPOINT = "/mcp"

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize dispatch client.

        Args:
            base_url: Dispatch server URL (e.g. http://localhost:9003)
            timeout: Request timeout in seconds (None = unbounded)
            transport: Optional httpx transport (in-process apps, tests)
        """
        self.base_url = base_url.rstrip("/")
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def connect(self) -> None:
        """Open the session.

        The transport is plain HTTP, so there is no handshake to perform.
        """
        logger.info("dispatch_client_connected", base_url=self.base_url)

    async def _request(self, method: str, params: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self.client.post(
                self.ENDPOINT,
                json={"method": method, "params": params},
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise DispatchClientError(f"HTTP error! status: {e.response.status_code}")
        except httpx.TimeoutException:
            raise DispatchClientError(f"Dispatch request '{method}' timed out")
        except httpx.HTTPError as e:
            raise DispatchClientError(f"Dispatch server unreachable: {e}")
        except ValueError as e:
            raise DispatchClientError(f"Invalid JSON from dispatch server: {e}")

        if not isinstance(data, dict):
            raise DispatchClientError("Dispatch response is not a JSON object")

        error = data.get("error")
        if error is not None:
            if not isinstance(error, dict) or not isinstance(error.get("code"), int):
                raise DispatchClientError(f"Unexpected dispatch response: error is {error!r}")
            raise DispatchProtocolError(
                code=error["code"],
                message=str(error.get("message", "Unknown error")),
            )

        result = data.get("result")
        if not isinstance(result, dict):
            raise DispatchClientError("Dispatch response has neither result nor error")
        return result

    @staticmethod
    def _validate(model: type[ModelT], result: dict[str, Any]) -> ModelT:
        try:
            return model.model_validate(result)
        except ValidationError as e:
            fields = ", ".join(".".join(map(str, err["loc"])) for err in e.errors())
            raise DispatchClientError(
                f"Unexpected dispatch response for {model.__name__}: invalid {fields}"
            )

    async def list_tools(self) -> ToolList:
        """Fetch the server's tool descriptors."""
        result = await self._request(RpcMethod.LIST_TOOLS, {})
        return self._validate(ToolList, result)

    async def call_tool(self, call: ToolCall, provider: str | None = None) -> ToolResult:
        """Execute one tool on the server."""
        params: dict[str, Any] = {"name": call.name, "arguments": call.arguments}
        if provider:
            params["provider"] = provider

        result = await self._request(RpcMethod.CALL_TOOL, params)
        return self._validate(ToolResult, result)

    async def close(self) -> None:
        """Close HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> "DispatchClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
