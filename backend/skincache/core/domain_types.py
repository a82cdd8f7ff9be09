"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - SkinProperty is immutable: value + signature travel together
    - StoredSkin.timestamp is epoch millis; PINNED_TIMESTAMP (0) means never refresh/purge
    - All failure modes encoded in SkinErrorKind — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers for names: zero runtime cost, type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

PlayerName = NewType("PlayerName", str)
SkinIdentifier = NewType("SkinIdentifier", str)   # account name, custom label or URL
UniqueId = NewType("UniqueId", str)               # undashed upstream profile id


# ─── Constants ───────────────────────────────────────────────────

TEXTURES_NAME = "textures"
PINNED_TIMESTAMP = 0
MILLIS_PER_MINUTE = 60_000
MILLIS_PER_DAY = 86_400_000


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class SkinProperty:
    """Signed texture property — the (value, signature) pair sent to game clients."""
    value: str
    signature: str
    name: str = TEXTURES_NAME

    @property
    def is_complete(self) -> bool:
        return bool(self.value) and bool(self.signature)


@dataclass(frozen=True)
class StoredSkin:
    """Durable skin record as persisted by the store."""
    value: str
    signature: str
    timestamp: int

    @property
    def is_pinned(self) -> bool:
        return self.timestamp == PINNED_TIMESTAMP

    def to_property(self) -> SkinProperty:
        return SkinProperty(value=self.value, signature=self.signature)


@dataclass(frozen=True)
class SkinSelection:
    """Outcome of choosing which identifier a player should display."""
    identifier: str
    is_custom: bool


@dataclass(frozen=True)
class ResolvedSkin:
    """Resolution result. is_custom is False whenever a default/self skin was used."""
    property: SkinProperty
    is_custom: bool


# ─── Enums ───────────────────────────────────────────────────────

class SkinErrorKind(str, Enum):
    """Failure kinds surfaced by the engine and its collaborators."""
    NOT_PREMIUM = "not_premium"
    NO_SKIN = "no_skin"
    TRANSIENT_FAILURE = "transient_failure"
    UPDATE_DISABLED = "update_disabled"
    STORAGE_FAILURE = "storage_failure"
    UNSUPPORTED_RECORD = "unsupported_record"   # decodable row, unusable payload
