"""Skin Name Validation — syntactic checks that pick the resolution path.

Invariants:
    - Pure functions: no IO
    - valid_url only inspects the scheme prefix; reachability is the generator's concern
    - valid_account_name mirrors upstream account rules: letters, digits, '_' and '-', max 16
"""

import re

from skincache.core.domain_types import PlayerName, SkinIdentifier

_URL_PATTERN = re.compile(r"^https?://\S+$", re.IGNORECASE)
_ACCOUNT_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_\-]+$")
_ACCOUNT_NAME_MAX = 16


def valid_url(candidate: str) -> bool:
    return bool(_URL_PATTERN.match(candidate))


def valid_account_name(candidate: str) -> bool:
    if not candidate or len(candidate) > _ACCOUNT_NAME_MAX:
        return False
    return bool(_ACCOUNT_NAME_PATTERN.match(candidate))


def player_key(name: str) -> PlayerName:
    """Store key for a player mapping."""
    return PlayerName(name.strip().lower())


def skin_key(identifier: str) -> SkinIdentifier:
    """Store key for a skin record."""
    return SkinIdentifier(identifier.strip().lower())
