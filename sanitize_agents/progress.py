"""Progress streaming channel.

A one-shot, single-producer/single-consumer conduit carrying a fixed,
ordered vocabulary of step markers followed by exactly one terminal event
(result or error).
"""

import asyncio
from enum import Enum
from typing import Annotated, AsyncIterator, Literal, Union

from pydantic import BaseModel, Field

from sanitize_agents.exceptions import ChannelClosedError, ProgressOrderError
from sanitize_agents.schemas import SanitizeResult


class ProgressStep(str, Enum):
    """Pipeline steps, in emission order."""

    MCP_CONNECT_START = "mcp_connect_start"
    MCP_CONNECT_FINISH = "mcp_connect_finish"
    LIST_TOOLS = "list_tools"
    SELECT_TOOL = "select_tool"
    TOOL_EXEC_START = "tool_exec_start"
    TOOL_EXEC_FINISH = "tool_exec_finish"


STEP_ORDER: tuple[ProgressStep, ...] = tuple(ProgressStep)


class StepEvent(BaseModel):
    type: Literal["step"] = "step"
    step: ProgressStep


class ResultEvent(BaseModel):
    type: Literal["result"] = "result"
    result: SanitizeResult


class ErrorEvent(BaseModel):
    type: Literal["error"] = "error"
    error: str


ProgressEvent = Annotated[Union[StepEvent, ResultEvent, ErrorEvent], Field(discriminator="type")]


class ProgressChannel:
    """Ordered progress events plus one terminal outcome.

    Producer side: `emit`, then exactly one of `finish` / `fail`.
    Consumer side: iterate with ``async for`` until the terminal event.
    """

    def __init__(self):
        self._queue: asyncio.Queue[StepEvent | ResultEvent | ErrorEvent] = asyncio.Queue()
        self._next_index = 0
        self._closed = False
        self._consumed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def emitted_steps(self) -> list[ProgressStep]:
        return list(STEP_ORDER[: self._next_index])

    def emit(self, step: ProgressStep) -> None:
        """Emit the next step marker.

        Raises:
            ChannelClosedError: Terminal event already emitted
            ProgressOrderError: Step is not the next one in STEP_ORDER
        """
        self._ensure_open()
        step = ProgressStep(step)
        if self._next_index >= len(STEP_ORDER) or STEP_ORDER[self._next_index] is not step:
            if self._next_index < len(STEP_ORDER):
                expected = STEP_ORDER[self._next_index].value
            else:
                expected = "terminal event"
            raise ProgressOrderError(f"Expected '{expected}', got '{step.value}'")

        self._next_index += 1
        self._queue.put_nowait(StepEvent(step=step))

    def finish(self, result: SanitizeResult) -> None:
        """Emit the terminal result. Requires every step to have been emitted."""
        self._ensure_open()
        if self._next_index != len(STEP_ORDER):
            raise ProgressOrderError(
                f"Result emitted after {self._next_index} of {len(STEP_ORDER)} steps"
            )
        self._close(ResultEvent(result=result))

    def fail(self, message: str) -> None:
        """Emit the terminal error."""
        self._ensure_open()
        self._close(ErrorEvent(error=message))

    def _ensure_open(self) -> None:
        if self._closed:
            raise ChannelClosedError("Progress channel already terminated")

    def _close(self, event: ResultEvent | ErrorEvent) -> None:
        self._closed = True
        self._queue.put_nowait(event)

    async def __aiter__(self) -> AsyncIterator[StepEvent | ResultEvent | ErrorEvent]:
        if self._consumed:
            raise ChannelClosedError("Progress channel already consumed")
        self._consumed = True

        while True:
            event = await self._queue.get()
            yield event
            if not isinstance(event, StepEvent):
                return
