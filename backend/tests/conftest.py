"""
tests/conftest.py
──────────────────
Shared pytest fixtures for the backend test suite.

Fixtures
--------
quotes / resolver
    Static quotes for two portfolio assets plus both benchmarks, and a
    ``MappingPriceResolver`` over them.

engine
    ``PortfolioRiskEngine`` with a pinned seed nonce so results are
    reproducible across test runs.

make_returns
    Factory building day-indexed return series from plain lists.

app_client
    ``httpx.AsyncClient`` wired to the FastAPI app with the engine and the
    price resolver overridden, so tests never depend on environment config.

Usage
-----
    async def test_health(app_client):
        resp = await app_client.get("/")
        assert resp.status_code == 200
"""

from typing import AsyncGenerator, Dict

import numpy as np
import pandas as pd
import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from analytics.portfolio.engine import PortfolioRiskEngine
from analytics.pricing import MappingPriceResolver
from app.api.dependencies import get_engine, get_price_resolver
from app.main import app

TEST_NONCE = "test-nonce"


# ── Price collaborator ────────────────────────────────────────────────────────


@pytest.fixture
def quotes() -> Dict[str, Dict[str, object]]:
    """Asset id → quote payload for the assets used across the suite."""
    return {
        "asset-a": {"symbol": "AAA", "current_price": 100.0},
        "asset-b": {"symbol": "BBB", "current_price": 50.0},
        "solana": {"symbol": "SOL", "current_price": 145.25},
        "bitcoin": {"symbol": "BTC", "current_price": 67000.0},
        "ethereum": {"symbol": "ETH", "current_price": 3500.0},
    }


@pytest.fixture
def resolver(quotes) -> MappingPriceResolver:
    return MappingPriceResolver(quotes)


# ── Engine ────────────────────────────────────────────────────────────────────


@pytest.fixture
def engine() -> PortfolioRiskEngine:
    """Engine with default random-walk synthesizer and a fixed nonce."""
    return PortfolioRiskEngine(seed_nonce=TEST_NONCE, max_workers=2)


@pytest.fixture
def make_returns():
    """Factory for return series indexed ``1 .. n`` by day, like ``to_returns``."""

    def _make(values, name=None) -> pd.Series:
        values = np.asarray(values, dtype=float)
        return pd.Series(
            values,
            index=pd.RangeIndex(1, len(values) + 1, name="day"),
            name=name,
            dtype=float,
        )

    return _make


# ── Test clients ──────────────────────────────────────────────────────────────


@pytest.fixture
async def app_client(
    engine: PortfolioRiskEngine, resolver: MappingPriceResolver
) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTPX client with engine and price resolver overridden.

    Startup lifespan is skipped; dependencies come from the fixtures above.
    """
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_price_resolver] = lambda: resolver

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def sync_client(engine: PortfolioRiskEngine, resolver: MappingPriceResolver) -> TestClient:
    """Synchronous ``TestClient`` using the same overrides as ``app_client``."""
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_price_resolver] = lambda: resolver
    client = TestClient(app, raise_server_exceptions=True)
    yield client
    app.dependency_overrides.clear()
