"""Sanitize-Core Orchestration.

Tool selection, the connect/list/select/call pipeline and its progress
stream.
"""

from sanitize_agents.orchestrator import SanitizeOrchestrator
from sanitize_agents.progress import ProgressChannel, ProgressStep
from sanitize_agents.schemas import SanitizeRequest, SanitizeResult
from sanitize_agents.selector import ToolSelector

__all__ = [
    "SanitizeOrchestrator",
    "ToolSelector",
    "ProgressChannel",
    "ProgressStep",
    "SanitizeRequest",
    "SanitizeResult",
]
