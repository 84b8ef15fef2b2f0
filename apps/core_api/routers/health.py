"""
Health Check Endpoints.

- GET /healthz: Liveness probe (API running)
- GET /readyz: Readiness probe (dispatch server answers tools/list)
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from apps.core_api.deps import get_client_factory, get_llm_router
from sanitize_llm import LLMRouter
from sanitize_tools.exceptions import DispatchClientError

router = APIRouter()


@router.get("/healthz")
async def healthz():
    """
    Liveness probe - is the API process running?

    Returns 200 OK if server is alive.
    """
    return {"status": "healthy", "service": "sanitize-core-api"}


@router.get("/readyz")
async def readyz(
    client_factory=Depends(get_client_factory),
    llm_router: LLMRouter = Depends(get_llm_router),
):
    """
    Readiness probe - is the API ready to serve traffic?

    Checks:
    - Dispatch server reachable (tools/list)
    - At least one LLM provider configured

    Returns:
        200 OK if all dependencies ready
        503 Service Unavailable otherwise
    """
    checks: dict[str, str] = {}

    try:
        async with client_factory() as client:
            tools = await client.list_tools()
        checks["dispatch_server"] = f"ok ({len(tools.tools)} tools)"
    except DispatchClientError as e:
        checks["dispatch_server"] = f"failed: {e}"

    providers = llm_router.available_providers()
    checks["llm_providers"] = ", ".join(providers) if providers else "failed: none configured"

    if any(value.startswith("failed") for value in checks.values()):
        return JSONResponse(status_code=503, content={"status": "unhealthy", "checks": checks})
    return {"status": "ready", "checks": checks}
