"""
Prometheus Metrics Endpoint.

Exposes /metrics for Prometheus scraping (mounted on both apps).
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics", response_class=PlainTextResponse)
async def metrics():
    """
    Prometheus metrics endpoint.

    Exposes metrics in Prometheus text format, e.g.:
    ```
    # HELP tool_calls_total Total tools/call executions on the dispatch server
    # TYPE tool_calls_total counter
    tool_calls_total{tool_name="anonymize_pii",status="success"} 15

    # HELP tool_selections_total Tools chosen by the selection step
    # TYPE tool_selections_total counter
    tool_selections_total{tool_name="redact_financial",provider="openai"} 4
    ```
    """
    return PlainTextResponse(generate_latest(), media_type=CONTENT_TYPE_LATEST)
