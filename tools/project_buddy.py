"""
Project Buddy HTTP client: POST a canonical body to /api/locations or /api/project-maturity.
No retries. Fixed 10s timeout. Any network failure or non-2xx status is raised as
ProjectBuddyAPIError carrying a normalized payload the orchestrator reports back as data.
"""
import json
import logging
from typing import Any, Optional

import httpx

from tools.base import ApiErrorPayload
from tools.sanitize import remove_none_deep

logger = logging.getLogger(__name__)

ENDPOINTS: dict[str, str] = {
    "location": "/api/locations",
    "project-maturity": "/api/project-maturity",
}
REQUEST_TIMEOUT_SEC = 10.0
DEFAULT_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


class ProjectBuddyAPIError(Exception):
    def __init__(self, payload: ApiErrorPayload):
        super().__init__(payload.message)
        self.payload = payload


def _decode_body(response: httpx.Response) -> Any:
    """JSON when the body parses, else the raw text (None when empty)."""
    try:
        return response.json()
    except ValueError:
        return response.text or None


def _status_error_payload(response: httpx.Response) -> ApiErrorPayload:
    data = _decode_body(response)
    if isinstance(data, (dict, list)):
        message = json.dumps(data, ensure_ascii=False)
    else:
        message = f"Request failed with status code {response.status_code}"
    code = "ERR_BAD_RESPONSE" if response.status_code >= 500 else "ERR_BAD_REQUEST"
    return ApiErrorPayload(message=message, code=code, status=response.status_code, data=data)


def post_to_project_buddy(
    base_url: str,
    endpoint: str,
    body: Any,
    *,
    transport: Optional[httpx.BaseTransport] = None,
) -> Any:
    """
    POST body (None values stripped recursively) and return the decoded response.
    transport is injectable for tests (httpx.MockTransport).
    """
    payload = remove_none_deep(body)
    try:
        with httpx.Client(
            base_url=base_url,
            timeout=REQUEST_TIMEOUT_SEC,
            headers=DEFAULT_HEADERS,
            transport=transport,
        ) as client:
            response = client.post(endpoint, json=payload)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise ProjectBuddyAPIError(_status_error_payload(e.response)) from e
    except httpx.TimeoutException as e:
        logger.warning("Project Buddy timeout on %s: %s", endpoint, e)
        raise ProjectBuddyAPIError(
            ApiErrorPayload(message=str(e) or "Request timed out.", code="ECONNABORTED")
        ) from e
    except httpx.RequestError as e:
        logger.warning("Project Buddy request error on %s: %s", endpoint, e)
        raise ProjectBuddyAPIError(ApiErrorPayload(message=str(e) or "Network error.", code="ERR_NETWORK")) from e
    return _decode_body(response)
