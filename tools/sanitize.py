"""
Field sanitizers shared by the defaults extraction, the merger, the action inferrer and
the normalizers. None is the only "absent" marker; every helper returns None rather than
an empty value so absence and emptiness never get confused downstream.
"""
import math
from typing import Any, Optional, Union

Number = Union[int, float]


def sanitize_string(value: Any) -> Optional[str]:
    """Trimmed string, or None when not a string or blank."""
    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    return cleaned or None


def to_number(value: Any) -> Optional[Number]:
    """
    Finite number from a number or a numeric string ("2000", " 12.5 ").
    Booleans, NaN/inf, ints too large for a float and anything unparsable give None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return value if math.isfinite(value) else None
        except OverflowError:
            return None
    if isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        return int(number) if number.is_integer() else number
    return None


def dedupe_strings(values: Any) -> Optional[list[str]]:
    """Trim, drop blanks, remove exact duplicates (first-seen order kept)."""
    if not isinstance(values, (list, tuple)):
        return None
    cleaned = [s for s in (sanitize_string(v) for v in values) if s is not None]
    return list(dict.fromkeys(cleaned)) or None


def _collection_values(raw: Any) -> list[Any]:
    """Accept a plain list or a {"values": [...]} collection (config-file form)."""
    if isinstance(raw, (list, tuple)):
        return list(raw)
    if isinstance(raw, dict) and isinstance(raw.get("values"), (list, tuple)):
        return list(raw["values"])
    return []


def dedupe_points(entries: Any) -> Optional[list[str]]:
    """Points given as strings or as {"text": ...} entries, deduplicated."""
    values = _collection_values(entries)
    texts = [e.get("text") if isinstance(e, dict) else e for e in values]
    return dedupe_strings(texts)


def normalize_address_entry(entry: Any) -> Optional[dict[str, Any]]:
    if isinstance(entry, str):
        address = sanitize_string(entry)
        return {"address": address} if address else None
    if not isinstance(entry, dict):
        return None
    address = sanitize_string(entry.get("address"))
    if not address:
        return None
    payload: dict[str, Any] = {"address": address}
    price = to_number(entry.get("price"))
    if price is not None:
        payload["price"] = price
    surface = sanitize_string(entry.get("surface"))
    if surface:
        payload["surface"] = surface
    location_type = sanitize_string(entry.get("locationType"))
    if location_type:
        payload["locationType"] = location_type
    return payload


def normalize_addresses(raw: Any) -> Optional[list[dict[str, Any]]]:
    """
    Bare strings are promoted to {"address": ...}; objects keep valid price/surface/locationType.
    Entries whose address text is blank are dropped. None when nothing valid remains.
    """
    normalized = [e for e in (normalize_address_entry(v) for v in _collection_values(raw)) if e is not None]
    return normalized or None


def remove_none_deep(value: Any) -> Any:
    """Recursively drop None from dicts and lists so absent keys are never serialized."""
    if isinstance(value, dict):
        cleaned = {}
        for key, item in value.items():
            if item is None:
                continue
            item = remove_none_deep(item)
            if item is None:
                continue
            cleaned[key] = item
        return cleaned
    if isinstance(value, (list, tuple)):
        return [remove_none_deep(item) for item in value if item is not None]
    return value
