"""
Sanitize-Core Dispatch Server Entry Point.

Owns the tool registry and the text-transform executor. The registry is
built once in the lifespan and is read-only afterwards.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.core_api.middleware import RequestIDMiddleware, RequestLoggingMiddleware
from apps.core_api.routers import metrics
from apps.mcp_server import rpc
from sanitize_config.settings import Settings
from sanitize_llm import LLMRouter
from sanitize_obs.logging import get_logger, setup_logging
from sanitize_obs.tracing import setup_tracing
from sanitize_tools.catalog import build_default_registry
from sanitize_tools.dispatcher import DispatchServer
from sanitize_tools.executor import TextTransformExecutor

settings = Settings()
setup_logging(settings, service="sanitize-dispatch-server")

logger = get_logger(__name__)


def build_dispatch_server(settings: Settings) -> DispatchServer:
    """Canonical registry + executor over the configured providers."""
    registry = build_default_registry()
    executor = TextTransformExecutor(
        LLMRouter.from_settings(settings),
        temperature=settings.LLM_TEMPERATURE,
        max_tokens=settings.LLM_MAX_TOKENS,
    )
    return DispatchServer(registry, executor)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Build the dispatch server once per process."""
    dispatch_server = build_dispatch_server(settings)
    app.state.dispatch_server = dispatch_server

    logger.info(
        "dispatch_server_ready",
        port=settings.MCP_PORT,
        tools=dispatch_server.registry.names(),
        providers=dispatch_server.executor.router.available_providers(),
    )

    yield

    logger.info("dispatch_server_shutdown")


app = FastAPI(
    title="Sanitize-Core Dispatch Server",
    description="tools/list + tools/call over a single JSON endpoint",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["POST", "GET"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(RequestIDMiddleware)

setup_tracing(settings, app)

app.include_router(rpc.router, tags=["dispatch"])
app.include_router(metrics.router, tags=["metrics"])


@app.get("/healthz", tags=["health"])
async def healthz():
    """Liveness probe."""
    return {"status": "healthy", "service": "sanitize-dispatch-server"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "apps.mcp_server.main:app",
        host=settings.MCP_HOST,
        port=settings.MCP_PORT,
        log_level="info",
    )
