"""
Input schemas for the Project Buddy tools. Used as args_schema by the LangChain tools and
to validate raw calls coming through the HTTP surface. Field names are the camelCase keys
the calling agent sends, so the JSON schema the model sees matches the wire format.
"""
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from tools.base import ActionType

NumberLike = Union[int, float, str]


class AddressEntry(BaseModel):
    """One location with optional per-address attributes."""
    model_config = ConfigDict(extra="ignore")

    address: str = Field(description="Full address text for the location.")
    price: Optional[NumberLike] = Field(
        default=None, description='Monthly or total price. Accepts number or string like "1200".'
    )
    surface: Optional[str] = Field(default=None, description='Surface or area description, e.g. "85m²".')
    locationType: Optional[str] = Field(
        default=None, description='Location type such as "rent", "sale", "office".'
    )


class _ToolInput(BaseModel):
    model_config = ConfigDict(extra="ignore")

    sessionId: Optional[str] = Field(
        default=None, description="Optional session identifier to correlate multiple calls."
    )
    extraFields: Optional[dict[str, Any]] = Field(
        default=None, description="Additional JSON key/value pairs to pass through to the API unchanged."
    )


class LocationToolInput(_ToolInput):
    """Location listing: at least one address, optionally with price, surface and type."""
    address: Optional[str] = Field(
        default=None, description="Primary address string if only one location is provided."
    )
    addresses: Optional[list[Union[str, AddressEntry]]] = Field(
        default=None,
        description=(
            "Provide one or multiple locations. Use raw strings for simple cases or objects "
            "when price, surface, or type must accompany each address."
        ),
    )
    price: Optional[NumberLike] = Field(
        default=None, description="Global price if a single address is supplied. Prefer numbers."
    )
    surface: Optional[str] = Field(default=None, description="Global surface value when only one address is present.")
    locationType: Optional[str] = Field(default=None, description="High-level location type (e.g. rent, sale, office).")


class ProjectMaturityToolInput(_ToolInput):
    """Project maturity assessment."""
    maturityLevel: Optional[str] = Field(
        default=None, description='Overall qualitative maturity level, e.g. "ideation", "advanced".'
    )
    maturityPercentage: Optional[NumberLike] = Field(
        default=None, description="Maturity expressed as percentage between 0 and 100."
    )
    positivePoints: Optional[list[str]] = Field(
        default=None, description="Main strengths or positive signals as short sentences."
    )
    negativePoints: Optional[list[str]] = Field(
        default=None, description="Main weaknesses or risks as short sentences."
    )
    description: Optional[str] = Field(
        default=None, description="Free-form narrative describing the project status and context."
    )


class ProjectApiToolInput(LocationToolInput, ProjectMaturityToolInput):
    """Either payload family. When action is omitted it is inferred from the fields provided."""
    action: Optional[ActionType] = Field(
        default=None,
        description='"location" sends address data, "project-maturity" sends maturity data.',
    )


def format_validation_error(exc: ValidationError) -> list[str]:
    """One readable line per pydantic error: 'addresses.0: Input should be ...'."""
    lines = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ())) or "input"
        lines.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return lines


def validate_tool_input(schema: type[BaseModel], raw: Any) -> dict[str, Any]:
    """
    Shape a loosely-typed call into candidate input. Only keys the caller set are kept,
    so explicit values and absent fields stay distinct. Raises ValidationError.
    """
    if raw is None:
        raw = {}
    if isinstance(raw, BaseModel):
        raw = raw.model_dump(exclude_unset=True)
    model = schema.model_validate(raw)
    return model.model_dump(exclude_unset=True)
