"""
Merge host-configured manual defaults with the input supplied by the calling agent.
Pure combination: no validation happens here.
"""
from typing import Any, Iterable, Optional

from tools.sanitize import normalize_address_entry

SCALAR_FIELDS: tuple[str, ...] = (
    "action",
    "sessionId",
    "address",
    "price",
    "surface",
    "locationType",
    "maturityLevel",
    "maturityPercentage",
    "description",
)
SET_FIELDS: tuple[str, ...] = ("addresses", "positivePoints", "negativePoints")

LOCATION_FIELDS: tuple[str, ...] = ("sessionId", "address", "addresses", "price", "surface", "locationType")
MATURITY_FIELDS: tuple[str, ...] = (
    "sessionId",
    "maturityLevel",
    "maturityPercentage",
    "positivePoints",
    "negativePoints",
    "description",
)
ALL_FIELDS: tuple[str, ...] = SCALAR_FIELDS + SET_FIELDS


def _union(*sources: Iterable[Any]) -> list[Any]:
    # Entries may be unhashable (address objects), so compare by equality.
    combined: list[Any] = []
    for source in sources:
        for item in source:
            if item not in combined:
                combined.append(item)
    return combined


def _address_union(*sources: Iterable[Any]) -> list[Any]:
    # Agent entries arrive raw ("1 Main St"); compare in the normalized {"address": ...} form.
    normalized = [[e for e in map(normalize_address_entry, source) if e is not None] for source in sources]
    return _union(*normalized)


def merge_defaults(
    defaults: Optional[dict[str, Any]],
    dynamic: Optional[dict[str, Any]],
    fields: Iterable[str] = ALL_FIELDS,
) -> dict[str, Any]:
    """
    Scalars: dynamic value when not None, else the default.
    Set-valued fields: de-duplicated union of both sides, left absent when both are empty.
    extraFields: shallow merge, dynamic keys win.
    """
    defaults = defaults or {}
    dynamic = dynamic or {}
    merged: dict[str, Any] = {}

    for name in fields:
        if name in SET_FIELDS:
            union = _address_union if name == "addresses" else _union
            combined = union(defaults.get(name) or [], dynamic.get(name) or [])
            if combined:
                merged[name] = combined
            continue
        value = dynamic.get(name)
        if value is None:
            value = defaults.get(name)
        if value is not None:
            merged[name] = value

    merged["extraFields"] = {**(defaults.get("extraFields") or {}), **(dynamic.get("extraFields") or {})}
    return merged
