"""
FastAPI backend: exposes the configured Town Hall tools to an orchestrating agent over HTTP.
Logs carry request_id, tool and duration; no request bodies or secrets are logged.
"""
import json
import logging
import os
import time
import uuid
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from app.config import ConfigurationError, get_settings
from tools.defaults import NodeConfig
from tools.townhall import get_tools

log = logging.getLogger(__name__)
logging.basicConfig(level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO))

logging.getLogger("httpx").setLevel(logging.WARNING)

app = FastAPI(title="Town Hall tools")
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


def load_node_config() -> NodeConfig:
    """NodeConfig from TOOLS_CONFIG_PATH when set, else empty defaults."""
    path = get_settings().tools_config_path
    if not path:
        return NodeConfig()
    return NodeConfig.model_validate_json(Path(path).read_text(encoding="utf-8"))


@lru_cache
def get_toolset() -> dict[str, Any]:
    """Tools by name. Raises ConfigurationError when the base URL is missing (not cached)."""
    return {t.name: t for t in get_tools(load_node_config())}


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = rid
    response = await call_next(request)
    response.headers["x-request-id"] = rid
    return response


def _toolset_or_500() -> dict[str, Any]:
    try:
        return get_toolset()
    except ConfigurationError as e:
        log.error("tools_not_configured", extra={"error": str(e)})
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.get("/tools")
async def list_tools():
    """Names and descriptions of the available tools."""
    toolset = _toolset_or_500()
    return {"tools": [{"name": t.name, "description": t.description} for t in toolset.values()]}


@app.post("/tools/{name}")
def call_tool(name: str, request: Request, payload: Optional[dict[str, Any]] = Body(default=None)):
    """Run one tool call. The result is always a structured tool result, never an HTTP error."""
    request_id = getattr(request.state, "request_id", str(uuid.uuid4()))
    toolset = _toolset_or_500()
    tool = toolset.get(name)
    if tool is None:
        raise HTTPException(status_code=404, detail=f"Unknown tool: {name}")

    start = time.perf_counter()
    log.info("tool_call_start", extra={"request_id": request_id, "tool": name})
    result = json.loads(tool.invoke(payload or {}))
    duration = time.perf_counter() - start
    log.info(
        "tool_call_done",
        extra={"request_id": request_id, "tool": name, "status": result.get("status"), "duration_sec": round(duration, 3)},
    )
    return result


@app.get("/health")
async def health():
    """Basic health check."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.api_host, port=settings.api_port, log_level=settings.log_level.lower())
