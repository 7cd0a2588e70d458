"""
LangGraph nodes for one tool call: Validate, Merge, Infer, Normalize, Send, Reject.
Each node has a single responsibility and returns a partial state update. Failures before
Send never reach the network; they end in Reject with a validation_error result.
"""
import time
from typing import Any

import structlog
from pydantic import ValidationError

from graph.state import PipelineState
from tools.base import ToolExecutionResult
from tools.inference import UNACTIONABLE_ERROR
from tools.merge import merge_defaults
from tools.normalize import SHAPES
from tools.project_buddy import ProjectBuddyAPIError, post_to_project_buddy
from tools.sanitize import remove_none_deep
from tools.schemas import format_validation_error, validate_tool_input

log = structlog.get_logger()


def _result_action(state: PipelineState) -> str:
    """Resolved action, else the configured default, else "location"."""
    policy = state["policy"]
    return state.get("action") or policy.action or state.get("default_action") or "location"


def _label(state: PipelineState) -> str:
    action = state.get("action") or state["policy"].action
    return SHAPES[action].label.lower() if action in SHAPES else "project API"


def validate_node(state: PipelineState) -> dict[str, Any]:
    """ValidateNode: shape the raw call into candidate input with the tool's schema."""
    policy = state["policy"]
    try:
        candidate = validate_tool_input(policy.schema, state.get("raw_input"))
    except ValidationError as e:
        errors = format_validation_error(e)
        log.info("validate_node", tool=policy.display_name, valid=False, errors=len(errors))
        return {"errors": errors, "stage_message": f"Invalid input for {policy.display_name}."}
    return {"candidate": candidate, "errors": [], "warnings": []}


def merge_node(state: PipelineState) -> dict[str, Any]:
    """MergeNode: apply the manual defaults to the candidate input."""
    policy = state["policy"]
    try:
        merged = merge_defaults(state.get("defaults"), state.get("candidate"), policy.fields)
    except (TypeError, ValueError, AttributeError) as e:
        log.warning("merge_node", tool=policy.display_name, error=str(e)[:200])
        return {"errors": [str(e)], "stage_message": f"Unable to merge {_label(state)} defaults: {e}"}
    return {"merged": merged}


def infer_node(state: PipelineState) -> dict[str, Any]:
    """InferNode: pick the target shape (fixed for single-purpose tools)."""
    policy = state["policy"]
    inferred = policy.resolve(state["merged"], state.get("default_action"))
    warnings = list(state.get("warnings") or [])
    if inferred.warning:
        warnings.append(inferred.warning)
    if not inferred.action:
        return {"warnings": warnings, "errors": [UNACTIONABLE_ERROR]}
    if inferred.action not in SHAPES:
        return {"warnings": warnings, "errors": [f'Unsupported action "{inferred.action}".']}
    log.info("infer_node", tool=policy.display_name, action=inferred.action, inferred=policy.action is None)
    return {"action": inferred.action, "warnings": warnings}


def normalize_node(state: PipelineState) -> dict[str, Any]:
    """NormalizeNode: canonical body plus validation errors and warnings."""
    shape = SHAPES[state["action"]]
    normalized = shape.normalize(state["merged"])
    warnings = list(state.get("warnings") or []) + normalized.warnings
    if normalized.errors or normalized.body is None:
        return {"errors": list(normalized.errors), "warnings": warnings}
    return {"body": normalized.body, "warnings": warnings}


def send_node(state: PipelineState) -> dict[str, Any]:
    """SendNode: POST the body and package success or transport error."""
    policy = state["policy"]
    shape = SHAPES[state["action"]]
    body = remove_none_deep(state["body"])
    warnings = list(state.get("warnings") or [])
    start = time.perf_counter()
    try:
        response = post_to_project_buddy(state["base_url"], shape.endpoint, body, transport=state.get("transport"))
    except ProjectBuddyAPIError as e:
        duration = time.perf_counter() - start
        log.error(
            f"[{policy.display_name}] API request failed",
            error=e.payload.message[:200],
            status=e.payload.status,
            duration_sec=round(duration, 3),
        )
        result = ToolExecutionResult(
            status="error",
            action=shape.action,
            status_message=f"{shape.label} request failed: {e.payload.message}",
            request_body=body,
            validation_warnings=warnings,
            error=e.payload,
        )
        return {"result": result}

    duration = time.perf_counter() - start
    log.info("send_node", tool=policy.display_name, endpoint=shape.endpoint, duration_sec=round(duration, 3))
    message = f"{shape.label} data posted successfully."
    if warnings:
        message += f" Warnings: {'; '.join(warnings)}"
    result = ToolExecutionResult(
        status="success",
        action=shape.action,
        status_message=message,
        request_body=body,
        response=response,
        validation_warnings=warnings,
    )
    return {"result": result}


def reject_node(state: PipelineState) -> dict[str, Any]:
    """RejectNode: fail fast with a validation_error result; nothing was sent."""
    errors = list(state.get("errors") or [])
    warnings = list(state.get("warnings") or [])
    message = state.get("stage_message")
    if not message:
        parts = [f"Validation failed for {_label(state)} payload."]
        if errors:
            parts.append(f"Errors: {'; '.join(errors)}")
        if warnings:
            parts.append(f"Warnings: {'; '.join(warnings)}")
        message = " ".join(parts)
    log.info("reject_node", tool=state["policy"].display_name, errors=len(errors))
    result = ToolExecutionResult(
        status="validation_error",
        action=_result_action(state),
        status_message=message,
        validation_errors=errors,
        validation_warnings=warnings,
    )
    return {"result": result}
