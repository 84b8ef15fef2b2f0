"""
FastAPI Dependency Injection.

Components are built once in the application lifespan and stored on
``app.state``; these dependencies hand them to the routers.
"""

from typing import Callable

from fastapi import Request

from sanitize_agents import SanitizeOrchestrator
from sanitize_config.settings import Settings
from sanitize_llm import LLMRouter
from sanitize_tools.client import DispatchClient


def get_settings(request: Request) -> Settings:
    """Dependency: application settings."""
    return request.app.state.settings


def get_llm_router(request: Request) -> LLMRouter:
    """Dependency: provider router used for tool selection."""
    return request.app.state.llm_router


def get_client_factory(request: Request) -> Callable[[], DispatchClient]:
    """Dependency: factory for dispatch server clients."""
    return request.app.state.client_factory


def get_orchestrator(request: Request) -> SanitizeOrchestrator:
    """Dependency: sanitize pipeline orchestrator."""
    return request.app.state.orchestrator
