"""
/sanitize Router - Sanitization Pipeline Endpoints.

Handles:
- POST /sanitize/stream: progress events + terminal outcome (Server-Sent Events)
- POST /sanitize: same pipeline, final result only
- GET /providers: configured LLM providers
"""

from typing import AsyncIterator

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, StreamingResponse

from apps.core_api.deps import get_llm_router, get_orchestrator
from sanitize_agents import SanitizeOrchestrator, SanitizeRequest, SanitizeResult
from sanitize_agents.orchestrator import error_message
from sanitize_llm import LLMRouter
from sanitize_obs.logging import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post("/sanitize/stream")
async def sanitize_stream(
    request_body: SanitizeRequest,
    orchestrator: SanitizeOrchestrator = Depends(get_orchestrator),
) -> StreamingResponse:
    """
    Run the sanitize pipeline and stream its progress.

    Each SSE ``data:`` line is one JSON event:
    - ``{"type": "step", "step": "list_tools"}`` (six steps, in order)
    - ``{"type": "result", "result": {"sanitizedText", "toolUsed", "modelUsed"}}``
    - ``{"type": "error", "error": "..."}``

    Exactly one result or error event ends the stream.
    """
    logger.info(
        "sanitize_stream_requested",
        intent=request_body.sanitization_request,
        provider=request_body.model_provider,
        text_length=len(request_body.text),
    )

    async def event_stream() -> AsyncIterator[str]:
        async for event in orchestrator.stream(request_body):
            yield f"data: {event.model_dump_json(by_alias=True)}\n\n"

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@router.post("/sanitize", response_model=SanitizeResult, response_model_by_alias=True)
async def sanitize(
    request_body: SanitizeRequest,
    orchestrator: SanitizeOrchestrator = Depends(get_orchestrator),
):
    """
    Run the sanitize pipeline and return only the final result.

    Returns:
        SanitizeResult on success, 502 ``{"error": message}`` on failure
    """
    try:
        return await orchestrator.run(request_body)
    except Exception as e:
        logger.error("sanitize_failed", error=error_message(e), error_type=e.__class__.__name__)
        return JSONResponse(status_code=502, content={"error": error_message(e)})


@router.get("/providers")
async def providers(llm_router: LLMRouter = Depends(get_llm_router)):
    """Configured LLM providers and the default one."""
    return {
        "providers": llm_router.available_providers(),
        "default": llm_router.default_provider,
    }
