"""
tests/test_portfolio_api.py
────────────────────────────
HTTP tests for ``POST /api/v1/portfolio/analyze`` and the health check.

The engine and price resolver are overridden in ``conftest.py``; no
network access and no environment configuration is required.
"""

from unittest.mock import MagicMock

import pytest

from app.api.dependencies import get_engine
from app.main import app

_URL = "/api/v1/portfolio/analyze"


def _body(*lines, days=None):
    body = {"assets": [{"id": i, "allocation": a} for i, a in lines]}
    if days is not None:
        body["days"] = days
    return body


class TestHealth:
    async def test_health_check(self, app_client) -> None:
        resp = await app_client.get("/")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestAnalyzeEndpoint:
    """Successful analysis requests."""

    async def test_analyze_two_assets(self, app_client) -> None:
        resp = await app_client.post(_URL, json=_body(("asset-a", 60), ("asset-b", 40), days=30))
        assert resp.status_code == 200

        data = resp.json()
        assert data["asset_ids"] == ["asset-a", "asset-b"]
        assert data["window_days"] == 30

        analytics = data["analytics"]
        assert set(analytics["metrics"]) == {
            "expected_return",
            "volatility",
            "max_drawdown",
            "sharpe_ratio",
            "value_at_risk",
        }
        assert len(analytics["historical_returns"]) == 30
        assert len(analytics["cumulative_returns"]) == 31
        assert analytics["cumulative_returns"][0]["portfolio"] == 100.0
        assert analytics["cumulative_returns"][-1]["date"] == data["as_of"]

        contributions = analytics["asset_contributions"]
        assert [c["symbol"] for c in contributions] == ["AAA", "BBB"]
        assert sum(c["risk_contribution"] for c in contributions) == pytest.approx(1.0, abs=1e-6)

    async def test_days_defaults_to_thirty(self, app_client) -> None:
        resp = await app_client.post(_URL, json=_body(("asset-a", 50), ("asset-b", 50)))
        assert resp.status_code == 200
        assert resp.json()["window_days"] == 30
        assert len(resp.json()["analytics"]["historical_returns"]) == 30

    async def test_asset_ids_are_normalised(self, app_client) -> None:
        resp = await app_client.post(_URL, json=_body((" Asset-A ", 70), ("SOLANA", 30), days=10))
        assert resp.status_code == 200
        assert resp.json()["asset_ids"] == ["asset-a", "solana"]

    def test_sync_client(self, sync_client) -> None:
        resp = sync_client.post(_URL, json=_body(("bitcoin", 50), ("ethereum", 50), days=5))
        assert resp.status_code == 200
        assert len(resp.json()["analytics"]["cumulative_returns"]) == 6


class TestAnalyzeErrors:
    """Error mapping of the analysis endpoint."""

    async def test_allocations_not_summing_to_100(self, app_client) -> None:
        resp = await app_client.post(_URL, json=_body(("asset-a", 50), ("asset-b", 40)))
        assert resp.status_code == 422
        assert "sum to 1" in resp.json()["detail"]

    async def test_duplicate_assets(self, app_client) -> None:
        resp = await app_client.post(_URL, json=_body(("asset-a", 50), ("ASSET-A", 50)))
        assert resp.status_code == 422

    @pytest.mark.parametrize(
        "body",
        [
            _body(("asset-a", 100)),
            _body(("asset-a", 120), ("asset-b", -20)),
            _body(("asset-a", 60), ("asset-b", 40), days=0),
            _body(("", 60), ("asset-b", 40)),
            {"assets": [{"id": f"a{i}", "allocation": 100 / 11} for i in range(11)]},
            {"days": 30},
        ],
    )
    async def test_invalid_body(self, app_client, body) -> None:
        resp = await app_client.post(_URL, json=body)
        assert resp.status_code == 422

    async def test_window_above_cap(self, app_client) -> None:
        resp = await app_client.post(_URL, json=_body(("asset-a", 60), ("asset-b", 40), days=366))
        assert resp.status_code == 422
        assert "at most 365" in resp.json()["detail"]

    async def test_unknown_asset(self, app_client) -> None:
        resp = await app_client.post(_URL, json=_body(("asset-a", 60), ("dogecoin", 40)))
        assert resp.status_code == 404
        assert "dogecoin" in resp.json()["detail"]

    async def test_one_day_window_is_unprocessable(self, app_client) -> None:
        resp = await app_client.post(_URL, json=_body(("asset-a", 60), ("asset-b", 40), days=1))
        assert resp.status_code == 422

    async def test_unexpected_error_is_500(self, app_client) -> None:
        broken = MagicMock()
        broken.analyze.side_effect = RuntimeError("boom")
        app.dependency_overrides[get_engine] = lambda: broken

        resp = await app_client.post(_URL, json=_body(("asset-a", 60), ("asset-b", 40)))
        assert resp.status_code == 500
        assert "boom" not in resp.json()["detail"]
