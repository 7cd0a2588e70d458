"""
Action inference for the combined tool, and the action policies that let the three tool
variants share one pipeline.

The inference is a signal-counting heuristic, not a classifier: when both payload families
are present the family with more populated fields wins, and ties fall back to the configured
default action. Ties and near-ties can pick the "wrong" family; callers that care should
send an explicit action.
"""
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel

from tools.base import ActionType, InferenceResult
from tools.merge import ALL_FIELDS, LOCATION_FIELDS, MATURITY_FIELDS
from tools.sanitize import dedupe_strings, normalize_addresses, sanitize_string, to_number
from tools.schemas import LocationToolInput, ProjectApiToolInput, ProjectMaturityToolInput

UNACTIONABLE_ERROR = "Action is required or must be inferable from the provided fields."


def location_signal_count(data: dict[str, Any]) -> int:
    return sum(
        [
            bool(normalize_addresses(data.get("addresses"))),
            sanitize_string(data.get("address")) is not None,
            to_number(data.get("price")) is not None,
            sanitize_string(data.get("surface")) is not None,
            sanitize_string(data.get("locationType")) is not None,
        ]
    )


def maturity_signal_count(data: dict[str, Any]) -> int:
    return sum(
        [
            sanitize_string(data.get("maturityLevel")) is not None,
            to_number(data.get("maturityPercentage")) is not None,
            bool(dedupe_strings(data.get("positivePoints"))),
            bool(dedupe_strings(data.get("negativePoints"))),
            sanitize_string(data.get("description")) is not None,
        ]
    )


def infer_action(data: dict[str, Any], fallback: Optional[ActionType] = None) -> InferenceResult:
    location_score = location_signal_count(data)
    maturity_score = maturity_signal_count(data)

    if not location_score and not maturity_score:
        return InferenceResult(action=fallback)
    if not maturity_score:
        return InferenceResult(action="location")
    if not location_score:
        return InferenceResult(action="project-maturity")

    if location_score > maturity_score:
        return InferenceResult(action="location", warning='Both families detected. Chose "location".')
    if maturity_score > location_score:
        return InferenceResult(
            action="project-maturity", warning='Both families detected. Chose "project-maturity".'
        )
    if fallback:
        return InferenceResult(action=fallback, warning="Both families detected. Fell back to node default action.")
    return InferenceResult(
        action=None, warning="Both families detected with equal weight and no default action is configured."
    )


@dataclass(frozen=True)
class FixedActionPolicy:
    """Single-purpose tool: the action is pre-selected."""
    action: ActionType
    schema: type[BaseModel]
    fields: tuple[str, ...]
    display_name: str

    def resolve(self, data: dict[str, Any], default_action: Optional[ActionType] = None) -> InferenceResult:
        return InferenceResult(action=self.action)


@dataclass(frozen=True)
class InferActionPolicy:
    """Combined tool: explicit action wins, otherwise infer with the configured default as fallback."""
    schema: type[BaseModel] = ProjectApiToolInput
    fields: tuple[str, ...] = ALL_FIELDS
    display_name: str = "Town Hall Node"
    action: Optional[ActionType] = None

    def resolve(self, data: dict[str, Any], default_action: Optional[ActionType] = None) -> InferenceResult:
        explicit = data.get("action")
        if explicit:
            return InferenceResult(action=explicit)
        return infer_action(data, default_action)


LOCATION_POLICY = FixedActionPolicy(
    action="location", schema=LocationToolInput, fields=LOCATION_FIELDS, display_name="Town Hall Location"
)
PROJECT_MATURITY_POLICY = FixedActionPolicy(
    action="project-maturity",
    schema=ProjectMaturityToolInput,
    fields=MATURITY_FIELDS,
    display_name="Town Hall Project Maturity",
)
PROJECT_API_POLICY = InferActionPolicy()
