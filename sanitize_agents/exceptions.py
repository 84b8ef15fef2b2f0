"""Orchestration exceptions."""


class OrchestrationError(Exception):
    """Base exception for the sanitize pipeline."""

    pass


class ToolSelectionError(OrchestrationError):
    """The selection step did not produce exactly one valid tool invocation."""

    pass


class ProgressOrderError(OrchestrationError):
    """A progress step was skipped, repeated or emitted out of order."""

    pass


class ChannelClosedError(OrchestrationError):
    """Progress channel already terminated or already consumed."""

    pass
