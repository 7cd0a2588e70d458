"""
LangGraph state for one tool invocation. Built fresh per call and discarded with the result.
"""
from typing import Any, Optional, TypedDict

import httpx

from tools.base import ToolExecutionResult


class PipelineState(TypedDict, total=False):
    """Inputs are set by run_pipeline; each node fills in the next stage."""
    policy: Any
    raw_input: Any
    defaults: dict[str, Any]
    default_action: Optional[str]
    base_url: str
    transport: Optional[httpx.BaseTransport]
    candidate: dict[str, Any]
    merged: dict[str, Any]
    action: Optional[str]
    body: Optional[dict[str, Any]]
    stage_message: Optional[str]
    errors: list[str]
    warnings: list[str]
    result: ToolExecutionResult
