"""
Sanitize-Core API Application Entry Point.

This module initializes the FastAPI application with:
- CORS middleware
- Request ID injection and request logging
- Lifespan context management (LLM router, orchestrator)
- Router mounting
"""

from contextlib import asynccontextmanager
from functools import partial
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from apps.core_api.middleware import RequestIDMiddleware, RequestLoggingMiddleware
from apps.core_api.routers import health, metrics, sanitize
from sanitize_agents import SanitizeOrchestrator, ToolSelector
from sanitize_config.settings import Settings
from sanitize_llm import LLMRouter
from sanitize_obs.logging import get_logger, setup_logging
from sanitize_obs.tracing import setup_tracing
from sanitize_tools.client import DispatchClient

# Initialize settings
settings = Settings()

# Setup logging
setup_logging(settings, service="sanitize-core-api")

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Handles:
    - LLM provider router initialization
    - Dispatch client factory and orchestrator wiring
    """
    logger.info(
        "core_api_starting",
        environment=settings.ENVIRONMENT,
        dispatch_server=settings.mcp_base_url,
    )

    llm_router = LLMRouter.from_settings(settings)
    client_factory = partial(
        DispatchClient, settings.mcp_base_url, timeout=settings.MCP_REQUEST_TIMEOUT
    )

    app.state.settings = settings
    app.state.llm_router = llm_router
    app.state.client_factory = client_factory
    app.state.orchestrator = SanitizeOrchestrator(
        client_factory=client_factory,
        selector=ToolSelector(llm_router, temperature=settings.LLM_TEMPERATURE),
    )

    logger.info(
        "core_api_ready",
        providers=llm_router.available_providers(),
        default_provider=llm_router.default_provider,
    )

    yield

    logger.info("core_api_shutdown")


# Initialize FastAPI application
app = FastAPI(
    title="Sanitize-Core API",
    description="LLM-driven text sanitization over a tools/list + tools/call dispatch protocol",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# ============================================================================
# MIDDLEWARE
# ============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.API_CORS_ORIGINS.split(",") if settings.API_CORS_ORIGINS else ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

# Last added runs first: request ID must exist before logging
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(RequestIDMiddleware)

setup_tracing(settings, app)

# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled exceptions."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        error=str(exc),
        exc_info=exc,
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred.",
        },
    )


# ============================================================================
# ROUTERS
# ============================================================================

app.include_router(sanitize.router, prefix="", tags=["sanitize"])
app.include_router(health.router, prefix="", tags=["health"])
app.include_router(metrics.router, prefix="", tags=["metrics"])


@app.get("/", tags=["root"])
async def root():
    """
    Root endpoint - API information.

    Returns:
        API metadata and available endpoints
    """
    return {
        "name": "Sanitize-Core API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/healthz",
        "metrics": "/metrics",
        "endpoints": {
            "stream": "POST /sanitize/stream",
            "sanitize": "POST /sanitize",
            "providers": "GET /providers",
        },
    }


if __name__ == "__main__":
    import uvicorn

    # Development server (auto-reload enabled)
    uvicorn.run(
        "apps.core_api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=True,
        log_level="info",
    )
