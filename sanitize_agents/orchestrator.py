"""Sanitize Orchestrator.

Sequences one request through the dispatch protocol:

    connect -> list tools -> select tool -> call tool -> done

emitting a progress step at each phase boundary and ending with exactly one
terminal result or error.

Known limitation: a consumer that stops draining the stream does not cancel
the producer; in-flight dispatch and LLM calls run to completion.
"""

import asyncio
import time
from typing import AsyncIterator, Callable

from sanitize_obs.logging import get_logger
from sanitize_obs.metrics import sanitize_run_duration, sanitize_runs_total
from sanitize_tools.client import DispatchClient

from .progress import ErrorEvent, ProgressChannel, ProgressStep, ResultEvent, StepEvent
from .schemas import SanitizeRequest, SanitizeResult
from .selector import ToolSelector

logger = get_logger(__name__)

ProgressCallback = Callable[[ProgressStep], None]


def error_message(exc: BaseException) -> str:
    """Human-readable message for a terminal error event."""
    return str(exc) or exc.__class__.__name__


class SanitizeOrchestrator:
    """Runs the connect/list/select/call pipeline for one request at a time."""

    def __init__(
        self,
        client_factory: Callable[[], DispatchClient],
        selector: ToolSelector,
    ):
        """Initialize orchestrator.

        Args:
            client_factory: Builds a fresh dispatch client per request
            selector: Tool selector (owns the LLM router)
        """
        self.client_factory = client_factory
        self.selector = selector
        self._producers: set[asyncio.Task] = set()

    async def run(
        self,
        request: SanitizeRequest,
        on_progress: ProgressCallback | None = None,
    ) -> SanitizeResult:
        """Run the pipeline, reporting each step through ``on_progress``."""

        def report(step: ProgressStep) -> None:
            if on_progress is not None:
                on_progress(step)

        provider = self.selector.router.resolve(request.model_provider)

        report(ProgressStep.MCP_CONNECT_START)
        async with self.client_factory() as client:
            await client.connect()
            report(ProgressStep.MCP_CONNECT_FINISH)

            report(ProgressStep.LIST_TOOLS)
            tools = await client.list_tools()

            report(ProgressStep.SELECT_TOOL)
            call = await self.selector.select(
                text=request.text,
                intent=request.sanitization_request,
                tools=tools,
                provider=provider,
            )

            report(ProgressStep.TOOL_EXEC_START)
            result = await client.call_tool(call, provider=provider)
            report(ProgressStep.TOOL_EXEC_FINISH)

        return SanitizeResult(
            sanitized_text=result.sanitized_text,
            tool_used=call.name,
            model_used=provider,
        )

    async def produce(self, request: SanitizeRequest, channel: ProgressChannel) -> None:
        """Producer side: run the pipeline into a channel, never raising."""
        start_time = time.time()
        try:
            result = await self.run(request, on_progress=channel.emit)
            channel.finish(result)
        except Exception as e:
            sanitize_runs_total.labels(status="error").inc()
            logger.error(
                "sanitize_run_failed",
                error=error_message(e),
                error_type=e.__class__.__name__,
                completed_steps=[s.value for s in channel.emitted_steps],
            )
            if not channel.closed:
                channel.fail(error_message(e))
            return
        finally:
            sanitize_run_duration.observe(time.time() - start_time)

        sanitize_runs_total.labels(status="success").inc()
        logger.info("sanitize_run_completed", tool=result.tool_used, provider=result.model_used)

    def start(self, request: SanitizeRequest) -> ProgressChannel:
        """Start a producer task and hand back its channel."""
        channel = ProgressChannel()
        task = asyncio.create_task(self.produce(request, channel))
        self._producers.add(task)
        task.add_done_callback(self._producers.discard)
        return channel

    async def stream(
        self, request: SanitizeRequest
    ) -> AsyncIterator[StepEvent | ResultEvent | ErrorEvent]:
        """Yield progress events until the terminal result or error."""
        channel = self.start(request)
        async for event in channel:
            yield event
