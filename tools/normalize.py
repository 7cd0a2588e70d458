"""
Normalizers: merged input -> canonical request body for one target shape, plus the
validation errors and warnings collected on the way. Bodies may still hold None values;
they are stripped right before sending.
"""
from dataclasses import dataclass
from typing import Any, Callable, Optional

from tools.base import ActionType, NormalizationResult, NormalizedAddress, NormalizedLocationBody, NormalizedMaturityBody
from tools.merge import LOCATION_FIELDS, MATURITY_FIELDS
from tools.project_buddy import ENDPOINTS
from tools.sanitize import dedupe_strings, normalize_addresses, sanitize_string, to_number

ADDRESS_REQUIRED_ERROR = 'At least one valid address required for the "location" action.'
BOTH_ADDRESS_FORMS_WARNING = 'Both "address" and "addresses" were provided. Prioritizing the array payload.'
PERCENTAGE_RANGE_ERROR = "Maturity percentage must be between 0 and 100."
MATURITY_EMPTY_ERROR = (
    "Provide at least one of maturityLevel, maturityPercentage, positivePoints, negativePoints, or description."
)

_FLATTENED_ATTRIBUTES = ("price", "surface", "locationType")


def _clean_text(data: dict[str, Any], key: str, warnings: list[str]) -> Optional[str]:
    """Present-but-blank strings are dropped with a warning, never silently."""
    raw = data.get(key)
    value = sanitize_string(raw)
    if raw is not None and value is None:
        warnings.append(f"Provided {key} is blank after trimming and was ignored.")
    return value


def _clean_number(data: dict[str, Any], key: str, warnings: list[str]):
    raw = data.get(key)
    value = to_number(raw)
    if raw is not None and value is None:
        warnings.append(f"Provided {key} is not a valid number and was ignored.")
    return value


def _extra_fields(data: dict[str, Any]) -> dict[str, Any]:
    extra = data.get("extraFields")
    return dict(extra) if isinstance(extra, dict) else {}


def normalize_location(data: dict[str, Any]) -> NormalizationResult:
    errors: list[str] = []
    warnings: list[str] = []

    session_id = _clean_text(data, "sessionId", warnings)
    single_address = _clean_text(data, "address", warnings)
    top_level = {
        "price": _clean_number(data, "price", warnings),
        "surface": _clean_text(data, "surface", warnings),
        "locationType": _clean_text(data, "locationType", warnings),
    }

    addresses: list[NormalizedAddress] = normalize_addresses(data.get("addresses")) or []
    if not addresses and single_address:
        addresses.append({"address": single_address})
    elif addresses and single_address:
        warnings.append(BOTH_ADDRESS_FORMS_WARNING)

    addresses = [entry for entry in addresses if entry.get("address")]
    if not addresses:
        errors.append(ADDRESS_REQUIRED_ERROR)
        return NormalizationResult(body=None, errors=errors, warnings=warnings)

    flattened = dict(top_level)
    if len(addresses) == 1:
        # A single location is mirrored both ways: entry value wins, top-level value fills gaps.
        only = addresses[0]
        for attr in _FLATTENED_ATTRIBUTES:
            if only.get(attr) is None and top_level[attr] is not None:
                only[attr] = top_level[attr]
            flattened[attr] = only.get(attr)

    body: NormalizedLocationBody = {
        "sessionId": session_id,
        "address": single_address or addresses[0]["address"],
        **flattened,
        "addresses": addresses,
        **_extra_fields(data),
    }
    return NormalizationResult(body=body, errors=errors, warnings=warnings)


def normalize_maturity(data: dict[str, Any]) -> NormalizationResult:
    errors: list[str] = []
    warnings: list[str] = []

    session_id = _clean_text(data, "sessionId", warnings)
    maturity_level = _clean_text(data, "maturityLevel", warnings)
    maturity_percentage = _clean_number(data, "maturityPercentage", warnings)
    if maturity_percentage is not None and not 0 <= maturity_percentage <= 100:
        errors.append(PERCENTAGE_RANGE_ERROR)

    positive_points = dedupe_strings(data.get("positivePoints"))
    negative_points = dedupe_strings(data.get("negativePoints"))
    description = _clean_text(data, "description", warnings)

    if not any([maturity_level, maturity_percentage is not None, positive_points, negative_points, description]):
        errors.append(MATURITY_EMPTY_ERROR)

    if errors:
        return NormalizationResult(body=None, errors=errors, warnings=warnings)

    body: NormalizedMaturityBody = {
        "sessionId": session_id,
        "maturityLevel": maturity_level,
        "maturityPercentage": maturity_percentage,
        "positivePoints": positive_points,
        "negativePoints": negative_points,
        "description": description,
        **_extra_fields(data),
    }
    return NormalizationResult(body=body, errors=errors, warnings=warnings)


@dataclass(frozen=True)
class TargetShape:
    """Everything the pipeline needs to know about one payload family."""
    action: ActionType
    label: str
    endpoint: str
    fields: tuple[str, ...]
    normalize: Callable[[dict[str, Any]], NormalizationResult]


SHAPES: dict[str, TargetShape] = {
    "location": TargetShape(
        action="location",
        label="Location",
        endpoint=ENDPOINTS["location"],
        fields=LOCATION_FIELDS,
        normalize=normalize_location,
    ),
    "project-maturity": TargetShape(
        action="project-maturity",
        label="Project maturity",
        endpoint=ENDPOINTS["project-maturity"],
        fields=MATURITY_FIELDS,
        normalize=normalize_maturity,
    ),
}