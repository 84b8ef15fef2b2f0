"""
Prometheus Metrics Registration.

Counters and histograms for tool dispatch, selection and end-to-end runs.
"""

from prometheus_client import Counter, Histogram

# ============================================================================
# COUNTERS
# ============================================================================

tool_calls_total = Counter(
    "tool_calls_total",
    "Total tools/call executions on the dispatch server",
    ["tool_name", "status"],  # success, failure, not_found
)

tool_selections_total = Counter(
    "tool_selections_total",
    "Tools chosen by the selection step",
    ["tool_name", "provider"],
)

selection_failures_total = Counter(
    "selection_failures_total",
    "Selection steps that did not yield a valid tool invocation",
    ["provider"],
)

sanitize_runs_total = Counter(
    "sanitize_runs_total",
    "End-to-end sanitize runs",
    ["status"],  # success, error
)

# ============================================================================
# HISTOGRAMS
# ============================================================================

tool_call_duration = Histogram(
    "tool_call_duration_seconds",
    "Tool execution duration on the dispatch server",
    ["tool_name"],
    buckets=(0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0),
)

sanitize_run_duration = Histogram(
    "sanitize_run_duration_seconds",
    "Complete connect/list/select/call pipeline duration",
    buckets=(1.0, 2.0, 5.0, 10.0, 30.0, 60.0, 120.0),
)
