"""
Operator-configured tool defaults (what the host UI used to hold) and their extraction
into the manual-defaults map merged with each call.

Every field can be handed over to the model: a field named in a group's ai_fill set, or
any field of a group whose ai_fill_all is on, is left out of the defaults map entirely.
"""
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from app.config import Settings, resolve_base_url
from tools.base import ActionType
from tools.sanitize import dedupe_points, normalize_addresses, sanitize_string, to_number


class DefaultsGroup(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ai_fill_all: bool = Field(default=False, description="Let the model define every field of this group")
    ai_fill: set[str] = Field(default_factory=set, description="Fields the model defines instead of the config")

    def uses(self, name: str) -> bool:
        return not self.ai_fill_all and name not in self.ai_fill


class SessionInfo(DefaultsGroup):
    session_id: Optional[str] = None
    api_base_url: Optional[str] = Field(default=None, description="e.g. https://project-buddy.example.com")


class LocationDefaults(DefaultsGroup):
    address: Optional[str] = None
    price: Optional[Union[int, float, str]] = None
    surface: Optional[str] = None
    location_type: Optional[str] = None
    addresses: Optional[Union[list[Any], dict[str, Any]]] = None


class MaturityDefaults(DefaultsGroup):
    maturity_level: Optional[str] = None
    maturity_percentage: Optional[Union[int, float, str]] = None
    positive_points: Optional[Union[list[Any], dict[str, Any]]] = None
    negative_points: Optional[Union[list[Any], dict[str, Any]]] = None
    description: Optional[str] = None


class NodeConfig(BaseModel):
    """Static configuration of the tools, read-only for the duration of a call."""
    model_config = ConfigDict(extra="ignore")

    action: Optional[ActionType] = Field(
        default=None, description="Default action for the combined tool when it cannot be inferred"
    )
    session_info: SessionInfo = Field(default_factory=SessionInfo)
    location: LocationDefaults = Field(default_factory=LocationDefaults)
    maturity: MaturityDefaults = Field(default_factory=MaturityDefaults)
    extra_fields: dict[str, Any] = Field(default_factory=dict)


Cleaner = Callable[[Any], Any]

SESSION_FIELDS: dict[str, tuple[str, Cleaner]] = {
    "session_id": ("sessionId", sanitize_string),
}
LOCATION_DEFAULT_FIELDS: dict[str, tuple[str, Cleaner]] = {
    "address": ("address", sanitize_string),
    "price": ("price", to_number),
    "surface": ("surface", sanitize_string),
    "location_type": ("locationType", sanitize_string),
    "addresses": ("addresses", normalize_addresses),
}
MATURITY_DEFAULT_FIELDS: dict[str, tuple[str, Cleaner]] = {
    "maturity_level": ("maturityLevel", sanitize_string),
    "maturity_percentage": ("maturityPercentage", to_number),
    "positive_points": ("positivePoints", dedupe_points),
    "negative_points": ("negativePoints", dedupe_points),
    "description": ("description", sanitize_string),
}


@dataclass(frozen=True)
class ManualConfiguration:
    defaults: dict[str, Any]
    base_url: str
    default_action: Optional[ActionType] = None


def collect_group(group: DefaultsGroup, field_map: dict[str, tuple[str, Cleaner]]) -> dict[str, Any]:
    collected: dict[str, Any] = {}
    for attr, (key, clean) in field_map.items():
        if not group.uses(attr):
            continue
        value = clean(getattr(group, attr))
        if value is not None:
            collected[key] = value
    return collected


def extract_manual_defaults(config: NodeConfig, settings: Optional[Settings] = None) -> ManualConfiguration:
    """Build the defaults map once per tool. Raises ConfigurationError when no base URL resolves."""
    base_url = resolve_base_url(config.session_info.api_base_url, settings)
    defaults: dict[str, Any] = {}
    defaults.update(collect_group(config.session_info, SESSION_FIELDS))
    defaults.update(collect_group(config.location, LOCATION_DEFAULT_FIELDS))
    defaults.update(collect_group(config.maturity, MATURITY_DEFAULT_FIELDS))
    if config.extra_fields:
        defaults["extraFields"] = dict(config.extra_fields)
    return ManualConfiguration(defaults=defaults, base_url=base_url, default_action=config.action)
