"""Shared types for tool results and canonical bodies. Tool inputs use pydantic (see tools.schemas)."""

from dataclasses import asdict, dataclass, field
from typing import Any, Literal, Optional, TypedDict, Union

ActionType = Literal["location", "project-maturity"]

ResultStatus = Literal["success", "validation_error", "error"]


class NormalizedAddress(TypedDict, total=False):
    address: str
    price: Union[int, float]
    surface: str
    locationType: str


class NormalizedLocationBody(TypedDict, total=False):
    # Optional values are stripped right before sending.
    sessionId: Optional[str]
    address: str
    price: Optional[Union[int, float]]
    surface: Optional[str]
    locationType: Optional[str]
    addresses: list[NormalizedAddress]


class NormalizedMaturityBody(TypedDict, total=False):
    sessionId: Optional[str]
    maturityLevel: Optional[str]
    maturityPercentage: Optional[Union[int, float]]
    positivePoints: Optional[list[str]]
    negativePoints: Optional[list[str]]
    description: Optional[str]


NormalizedBody = Union[NormalizedLocationBody, NormalizedMaturityBody]


@dataclass
class ApiErrorPayload:
    """Transport or non-2xx failure, normalized for the calling agent."""
    message: str
    code: Optional[str] = None
    status: Optional[int] = None
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class NormalizationResult:
    body: Optional[NormalizedBody]
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass
class InferenceResult:
    action: Optional[ActionType] = None
    warning: Optional[str] = None


@dataclass
class ToolExecutionResult:
    """Outcome of one tool invocation. Never raised, always returned as data."""
    status: ResultStatus
    action: ActionType
    status_message: Optional[str] = None
    request_body: Optional[dict[str, Any]] = None
    response: Any = None
    validation_errors: list[str] = field(default_factory=list)
    validation_warnings: list[str] = field(default_factory=list)
    error: Optional[ApiErrorPayload] = None

    def to_dict(self) -> dict[str, Any]:
        """Wire form: camelCase keys, absent values and empty lists omitted."""
        payload: dict[str, Any] = {"status": self.status, "action": self.action}
        if self.status_message:
            payload["statusMessage"] = self.status_message
        if self.request_body is not None:
            payload["requestBody"] = self.request_body
        if self.response is not None:
            payload["response"] = self.response
        if self.validation_errors:
            payload["validationErrors"] = list(self.validation_errors)
        if self.validation_warnings:
            payload["validationWarnings"] = list(self.validation_warnings)
        if self.error is not None:
            payload["error"] = self.error.to_dict()
        return payload
