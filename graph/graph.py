"""
LangGraph StateGraph for one tool call: Validate -> Merge -> Infer -> Normalize -> Send,
with a fail-fast branch to Reject after every stage that can produce validation errors.
Linear, no retries, no checkpointer: nothing is retained across invocations.
"""
from typing import Any, Optional

import httpx
from langgraph.graph import END, StateGraph

from graph.nodes import (
    infer_node,
    merge_node,
    normalize_node,
    reject_node,
    send_node,
    validate_node,
)
from graph.state import PipelineState
from tools.base import ToolExecutionResult


def route_on_errors(state: PipelineState) -> str:
    """Conditional edge: any accumulated error ends the call in Reject."""
    return "reject" if state.get("errors") else "next"


def build_graph():
    """Build and compile the graph. Validate -> Merge -> Infer -> Normalize -> (Send | Reject) -> END."""
    builder = StateGraph(PipelineState)

    builder.add_node("validate", validate_node)
    builder.add_node("merge", merge_node)
    builder.add_node("infer", infer_node)
    builder.add_node("normalize", normalize_node)
    builder.add_node("send", send_node)
    builder.add_node("reject", reject_node)

    builder.set_entry_point("validate")
    builder.add_conditional_edges("validate", route_on_errors, {"next": "merge", "reject": "reject"})
    builder.add_conditional_edges("merge", route_on_errors, {"next": "infer", "reject": "reject"})
    builder.add_conditional_edges("infer", route_on_errors, {"next": "normalize", "reject": "reject"})
    builder.add_conditional_edges("normalize", route_on_errors, {"next": "send", "reject": "reject"})
    builder.add_edge("send", END)
    builder.add_edge("reject", END)

    return builder.compile()


# Singleton compiled graph; invocations share no state
_graph = None


def get_graph():
    global _graph
    if _graph is None:
        _graph = build_graph()
    return _graph


def run_pipeline(
    policy: Any,
    raw_input: Any,
    *,
    defaults: Optional[dict[str, Any]] = None,
    base_url: str,
    default_action: Optional[str] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> ToolExecutionResult:
    """Run one tool call end to end and return its result. Never raises for bad input or transport failures."""
    initial: PipelineState = {
        "policy": policy,
        "raw_input": raw_input,
        "defaults": defaults or {},
        "default_action": default_action,
        "base_url": base_url,
        "transport": transport,
        "errors": [],
        "warnings": [],
    }
    final_state = get_graph().invoke(initial)
    return final_state["result"]
