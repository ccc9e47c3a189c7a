"""
tests/test_risk_metrics.py
───────────────────────────
Unit tests for ``analytics.portfolio.risk_metrics``.

Uses crafted return series with hand-computed statistics.
"""

import math

import numpy as np
import pytest

from analytics.portfolio.errors import DegenerateSeriesError, InsufficientDataError
from analytics.portfolio.risk_metrics import (
    annualized_volatility,
    compute_risk_metrics,
    expected_return,
    max_drawdown,
    sharpe_ratio,
    value_at_risk,
)


class TestComputeRiskMetrics:
    """Tests for the aggregated ``RiskMetrics``."""

    def test_known_series(self) -> None:
        """Zero-mean series: σ² = mean(1e-4, 1e-4, 4e-4, 4e-4) = 2.5e-4."""
        metrics = compute_risk_metrics([0.01, -0.01, 0.02, -0.02])
        expected_vol = math.sqrt(2.5e-4 * 252)
        assert metrics.expected_return == pytest.approx(0.0, abs=1e-12)
        assert metrics.volatility == pytest.approx(expected_vol)
        assert metrics.sharpe_ratio == pytest.approx(-0.02 / expected_vol)

    def test_expected_return_is_mean_times_252(self) -> None:
        metrics = compute_risk_metrics([0.001, 0.003, 0.002])
        assert metrics.expected_return == pytest.approx(0.002 * 252)

    def test_population_variance_used(self) -> None:
        returns = np.array([0.05, -0.03, 0.01, 0.02, -0.04])
        metrics = compute_risk_metrics(returns)
        assert metrics.volatility == pytest.approx(np.std(returns, ddof=0) * math.sqrt(252))
        assert metrics.volatility != pytest.approx(np.std(returns, ddof=1) * math.sqrt(252))

    def test_all_zero_returns_are_flat_not_nan(self) -> None:
        """A flat series has zero volatility and a Sharpe of exactly 0."""
        metrics = compute_risk_metrics([0.0] * 30)
        assert metrics.volatility == 0.0
        assert metrics.sharpe_ratio == 0.0
        assert metrics.max_drawdown == 0.0
        assert metrics.expected_return == 0.0
        assert metrics.value_at_risk == 0.0

    def test_constant_nonzero_returns_have_zero_volatility(self) -> None:
        metrics = compute_risk_metrics([0.01] * 10)
        assert metrics.volatility == 0.0
        assert metrics.sharpe_ratio == 0.0
        assert metrics.expected_return == pytest.approx(2.52)

    def test_custom_risk_free_rate_and_frequency(self) -> None:
        returns = [0.02, -0.01, 0.03, 0.0]
        metrics = compute_risk_metrics(returns, risk_free_rate=0.05, periods_per_year=365)
        ann_ret = np.mean(returns) * 365
        ann_vol = np.std(returns) * math.sqrt(365)
        assert metrics.expected_return == pytest.approx(ann_ret)
        assert metrics.sharpe_ratio == pytest.approx((ann_ret - 0.05) / ann_vol)

    @pytest.mark.parametrize("returns", [[], [0.01]])
    def test_fewer_than_two_returns_rejected(self, returns) -> None:
        with pytest.raises(InsufficientDataError):
            compute_risk_metrics(returns)

    def test_nan_rejected(self) -> None:
        with pytest.raises(DegenerateSeriesError):
            compute_risk_metrics([0.01, float("nan"), 0.02])


class TestMaxDrawdown:
    """Tests for the compounded peak-to-trough drawdown."""

    def test_peak_trough_pattern(self) -> None:
        """1 → 1.1 → 0.55 → 0.66: the drop from 1.1 to 0.55 is 50 %."""
        assert max_drawdown([0.10, -0.50, 0.20]) == pytest.approx(0.5)

    def test_initial_value_counts_as_peak(self) -> None:
        """Losing on day one is measured from the 1.0 starting value."""
        assert max_drawdown([-0.20, 0.10]) == pytest.approx(0.2)

    def test_monotonic_gain_has_no_drawdown(self) -> None:
        assert max_drawdown([0.01, 0.02, 0.03]) == 0.0

    def test_total_loss(self) -> None:
        assert max_drawdown([-1.0, 0.0]) == pytest.approx(1.0)

    def test_clamped_to_one(self) -> None:
        """Returns below −100 % cannot push the drawdown above 1."""
        assert max_drawdown([-1.5, 0.0]) == 1.0

    @pytest.mark.parametrize("seed", range(5))
    def test_always_within_unit_interval(self, seed) -> None:
        rng = np.random.default_rng(seed)
        returns = rng.normal(0.0, 0.05, size=100)
        assert 0.0 <= compute_risk_metrics(returns).max_drawdown <= 1.0


class TestIndividualMetrics:
    """Tests for the standalone helpers."""

    def test_sharpe_zero_volatility(self) -> None:
        assert sharpe_ratio(0.10, 0.0) == 0.0

    def test_sharpe_regular(self) -> None:
        assert sharpe_ratio(0.22, 0.5, risk_free_rate=0.02) == pytest.approx(0.4)

    def test_expected_return_and_volatility(self) -> None:
        returns = [0.01, 0.03]
        assert expected_return(returns) == pytest.approx(0.02 * 252)
        assert annualized_volatility(returns) == pytest.approx(0.01 * math.sqrt(252))

    def test_value_at_risk_linear_grid(self) -> None:
        """5th percentile of a uniform grid from −5 % to +5 % is −4.5 %."""
        returns = np.linspace(-0.05, 0.05, 101)
        assert value_at_risk(returns) == pytest.approx(0.045)

    def test_value_at_risk_never_negative(self) -> None:
        assert value_at_risk([0.01, 0.02, 0.03]) == 0.0
