"""Skin Schemas — Pydantic models with field-level validation for the skin API.

Invariants:
    - Player and skin names are stripped and non-empty
    - SkinDataUpdate never accepts an empty value or signature
"""

from pydantic import BaseModel, Field, field_validator

from skincache.core.domain_types import ResolvedSkin, SkinProperty


class PlayerSkinUpdate(BaseModel):
    """Assign a skin identifier (name, label or URL) to a player."""
    skin: str = Field(min_length=1, max_length=2048)

    @field_validator("skin")
    @classmethod
    def strip_skin(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("skin cannot be empty or whitespace")
        return v


class SkinDataUpdate(BaseModel):
    """Store a signed texture directly. pinned=True disables auto refresh and purge."""
    value: str = Field(min_length=1)
    signature: str = Field(min_length=1)
    pinned: bool = False


class SkinPropertyResponse(BaseModel):
    name: str
    value: str
    signature: str

    @classmethod
    def from_property(cls, prop: SkinProperty) -> "SkinPropertyResponse":
        return cls(name=prop.name, value=prop.value, signature=prop.signature)


class ResolvedSkinResponse(BaseModel):
    player_name: str
    property: SkinPropertyResponse
    is_custom: bool

    @classmethod
    def from_resolved(cls, player_name: str, resolved: ResolvedSkin) -> "ResolvedSkinResponse":
        return cls(
            player_name=player_name,
            property=SkinPropertyResponse.from_property(resolved.property),
            is_custom=resolved.is_custom,
        )


class SkinSelectionResponse(BaseModel):
    player_name: str
    identifier: str
    is_custom: bool


class StoredSkinSummary(BaseModel):
    name: str
    value: str


class SkinListResponse(BaseModel):
    offset: int
    skins: list[StoredSkinSummary]


class DefaultSkinPoolResponse(BaseModel):
    enabled: bool
    apply_to_premium: bool
    skins: list[str]
