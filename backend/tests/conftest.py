"""Root conftest — shared fakes and engine factory.

Invariants:
    - No test touches the network: collaborators are in-memory fakes
    - Clock is fixed per test (FixedClock) so staleness is deterministic
    - Random source is seeded so default selection is reproducible
"""

import os
import random

import pytest

from skincache.core.skin_config import SkinCacheConfig
from skincache.services.skin_cache import SkinCacheEngine

from tests.fakes import (
    NOW, FakeIdentityResolver, FakeImageGenerator, FakeSkinStore, FixedClock,
)

# Ensure tests never pick up a real database or API key
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("MINESKIN_API_KEY", "")


@pytest.fixture
def store():
    return FakeSkinStore()


@pytest.fixture
def identity():
    return FakeIdentityResolver()


@pytest.fixture
def generator():
    return FakeImageGenerator()


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def make_engine(store, identity, generator, clock):
    """Build an engine over the shared fakes with an inline config."""

    def _make(config: SkinCacheConfig | None = None, seed: int = 7) -> SkinCacheEngine:
        return SkinCacheEngine(
            store=store,
            identity=identity,
            image_generator=generator,
            config=config or SkinCacheConfig(),
            rng=random.Random(seed),
            clock=clock,
        )

    return _make
