"""
Town Hall tools for an orchestrating agent: LangChain structured tools that send location
or project maturity data to Project Buddy. Node defaults come from a NodeConfig; the model
can override or complete any field in the tool call. Each tool returns a JSON string.
"""
import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

import httpx
from langchain_core.tools import StructuredTool
from pydantic import ValidationError

from app.config import Settings
from graph.graph import run_pipeline
from tools.base import ToolExecutionResult
from tools.defaults import NodeConfig, extract_manual_defaults
from tools.inference import LOCATION_POLICY, PROJECT_API_POLICY, PROJECT_MATURITY_POLICY
from tools.schemas import format_validation_error

logger = logging.getLogger(__name__)

LOCATION_TOOL_NAME = "town_hall_location_tool"
PROJECT_MATURITY_TOOL_NAME = "town_hall_project_maturity_tool"
PROJECT_API_TOOL_NAME = "project_api_tool"

LOCATION_TOOL_DESCRIPTION = (
    "Send structured location data to the Project Buddy API. Always include at least one address. "
    "Fill price, surface, and location type when they are known or can be sensibly estimated. "
    "Leave fields out rather than invent implausible data."
)
PROJECT_MATURITY_TOOL_DESCRIPTION = (
    "Send structured project maturity data to the Project Buddy API. Provide qualitative level, "
    "percentage, and bullet points when available. Summaries should stay factual; omit fields "
    "you cannot justify."
)
PROJECT_API_TOOL_DESCRIPTION = (
    "Send location or project maturity data to the Project Buddy API. All parameters configured "
    "in the node are defaults - you can override or complete any field dynamically. Omit "
    '"action" to let it be inferred from the fields you provide.'
)


def format_result(result: ToolExecutionResult) -> str:
    return json.dumps(result.to_dict(), ensure_ascii=False, default=str)


def format_tool_result(result: ToolExecutionResult) -> str:
    """Richer envelope: status plus success flag, summary message, raw result and timestamp."""
    summary_parts = []
    if result.status_message:
        summary_parts.append(result.status_message)
    if result.validation_errors:
        summary_parts.append(f"Errors: {'; '.join(result.validation_errors)}")
    if result.validation_warnings:
        summary_parts.append(f"Warnings: {'; '.join(result.validation_warnings)}")

    raw = result.to_dict()
    payload: dict[str, Any] = {
        "status": result.status,
        "success": result.status == "success",
        "action": result.action,
        "message": " ".join(summary_parts) or None,
        "validationErrors": raw.get("validationErrors"),
        "validationWarnings": raw.get("validationWarnings"),
        "requestBody": raw.get("requestBody"),
        "response": raw.get("response"),
        "error": raw.get("error"),
        "statusMessage": raw.get("statusMessage"),
        "raw": raw,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    return json.dumps({k: v for k, v in payload.items() if v is not None}, ensure_ascii=False, default=str)


def schema_error_result(policy: Any, exc: ValidationError, default_action: Optional[str] = None) -> ToolExecutionResult:
    """Tool-call arguments rejected by the schema, reported as data."""
    return ToolExecutionResult(
        status="validation_error",
        action=policy.action or default_action or "location",
        status_message=f"Invalid input for {policy.display_name}.",
        validation_errors=format_validation_error(exc),
    )


def _build_tool(
    policy: Any,
    config: NodeConfig,
    *,
    name: str,
    description: str,
    formatter: Callable[[ToolExecutionResult], str],
    settings: Optional[Settings] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> StructuredTool:
    # Raises ConfigurationError here, before any call can reach the network.
    manual = extract_manual_defaults(config, settings)
    logger.info("Built %s against %s (%d defaults)", name, manual.base_url, len(manual.defaults))

    def _run(**tool_input: Any) -> str:
        result = run_pipeline(
            policy,
            tool_input,
            defaults=manual.defaults,
            base_url=manual.base_url,
            default_action=manual.default_action,
            transport=transport,
        )
        return formatter(result)

    def _on_schema_error(exc: ValidationError) -> str:
        return formatter(schema_error_result(policy, exc, manual.default_action))

    return StructuredTool.from_function(
        func=_run,
        name=name,
        description=description,
        args_schema=policy.schema,
        handle_validation_error=_on_schema_error,
    )


def get_location_tool(config: Optional[NodeConfig] = None, **kwargs: Any) -> StructuredTool:
    return _build_tool(
        LOCATION_POLICY,
        config or NodeConfig(),
        name=LOCATION_TOOL_NAME,
        description=LOCATION_TOOL_DESCRIPTION,
        formatter=format_result,
        **kwargs,
    )


def get_project_maturity_tool(config: Optional[NodeConfig] = None, **kwargs: Any) -> StructuredTool:
    return _build_tool(
        PROJECT_MATURITY_POLICY,
        config or NodeConfig(),
        name=PROJECT_MATURITY_TOOL_NAME,
        description=PROJECT_MATURITY_TOOL_DESCRIPTION,
        formatter=format_tool_result,
        **kwargs,
    )


def get_project_api_tool(config: Optional[NodeConfig] = None, **kwargs: Any) -> StructuredTool:
    return _build_tool(
        PROJECT_API_POLICY,
        config or NodeConfig(),
        name=PROJECT_API_TOOL_NAME,
        description=PROJECT_API_TOOL_DESCRIPTION,
        formatter=format_result,
        **kwargs,
    )


def get_tools(config: Optional[NodeConfig] = None, **kwargs: Any) -> list[StructuredTool]:
    return [
        get_location_tool(config, **kwargs),
        get_project_maturity_tool(config, **kwargs),
        get_project_api_tool(config, **kwargs),
    ]
