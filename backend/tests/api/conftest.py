"""API fixtures — FastAPI test client over an engine backed by in-memory fakes.

Invariants:
    - get_engine overridden; lifespan (database, HTTP clients) never runs
    - Platform adapter reset on app.state after every test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from skincache.api.dependencies import get_engine
from skincache.main import app


@pytest.fixture
async def client(make_engine):
    engine = make_engine()
    app.dependency_overrides[get_engine] = lambda: engine
    app.state.platform_adapter = None

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    app.state.platform_adapter = None
