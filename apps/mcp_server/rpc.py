"""
POST /mcp - Tool Dispatch Endpoint.

Always answers HTTP 200 with an RPC envelope, including for bodies that are
not valid JSON.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from sanitize_tools.dispatcher import DispatchServer

router = APIRouter()


@router.post("/mcp")
async def mcp(request: Request) -> JSONResponse:
    """Dispatch one RPC request (``tools/list`` or ``tools/call``)."""
    try:
        payload = await request.json()
    except ValueError:
        payload = None

    dispatch_server: DispatchServer = request.app.state.dispatch_server
    response = await dispatch_server.handle(payload)
    return JSONResponse(response.to_wire())
