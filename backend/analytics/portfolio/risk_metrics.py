"""
analytics/portfolio/risk_metrics.py
────────────────────────────────────
Risk and performance statistics for a daily simple-return series.

All moments are *population* moments (divisor ``N``) so they agree with
the covariance decomposition in ``analytics.portfolio.contributions``.

Individual metrics
------------------
expected_return, annualized_volatility, max_drawdown, sharpe_ratio,
value_at_risk

Convenience wrapper
--------------------
compute_risk_metrics — aggregates all of the above into ``RiskMetrics``.
"""

from typing import Sequence, Union

import numpy as np
import pandas as pd

from analytics.portfolio.errors import DegenerateSeriesError, InsufficientDataError
from analytics.portfolio.models import RiskMetrics

# ── Constants ─────────────────────────────────────────────────────────────────

TRADING_DAYS_PER_YEAR = 252
DEFAULT_RISK_FREE_RATE = 0.02
DEFAULT_VAR_CONFIDENCE = 0.95

# Below this an annualized volatility is treated as exactly zero.
_ZERO_VOLATILITY = 1e-12

ReturnsLike = Union[pd.Series, np.ndarray, Sequence[float]]


def _as_array(returns: ReturnsLike) -> np.ndarray:
    """Return ``returns`` as a float array, rejecting NaN / inf."""
    values = np.asarray(returns, dtype=float)
    if not np.all(np.isfinite(values)):
        raise DegenerateSeriesError("NaN or infinite values not allowed in returns")
    return values


# ── Individual metrics ────────────────────────────────────────────────────────


def expected_return(
    returns: ReturnsLike, periods_per_year: int = TRADING_DAYS_PER_YEAR
) -> float:
    """Mean daily return annualized linearly (``mean × 252``)."""
    return float(_as_array(returns).mean() * periods_per_year)


def annualized_volatility(
    returns: ReturnsLike, periods_per_year: int = TRADING_DAYS_PER_YEAR
) -> float:
    """
    Population standard deviation of daily returns, scaled by ``√252``.

    Values below ``1e-12`` are reported as ``0.0`` so a flat series is
    flat rather than carrying floating-point residue.
    """
    values = _as_array(returns)
    variance = float(np.mean((values - values.mean()) ** 2))
    volatility = float(np.sqrt(variance) * np.sqrt(periods_per_year))
    return 0.0 if volatility < _ZERO_VOLATILITY else volatility


def max_drawdown(returns: ReturnsLike) -> float:
    """
    Largest peak-to-trough decline of the compounded value path.

    The path starts at 1.0 and is multiplied by ``(1 + r)`` each day; the
    starting value counts as a peak.

    Returns:
        Positive fraction in ``[0, 1]``, e.g. ``0.312`` for a 31.2 % drawdown.
    """
    values = _as_array(returns)
    path = np.concatenate(([1.0], np.cumprod(1.0 + values)))
    peak = np.maximum.accumulate(path)
    drawdowns = (peak - path) / peak
    return float(np.clip(drawdowns.max(), 0.0, 1.0))


def sharpe_ratio(
    annual_return: float,
    annual_volatility: float,
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
) -> float:
    """
    Sharpe = (annualized_return − risk_free_rate) / annualized_volatility.

    Defined as ``0.0`` when volatility is zero.
    """
    if annual_volatility < _ZERO_VOLATILITY:
        return 0.0
    return float((annual_return - risk_free_rate) / annual_volatility)


def value_at_risk(
    returns: ReturnsLike, confidence: float = DEFAULT_VAR_CONFIDENCE
) -> float:
    """
    One-day historical Value at Risk as a positive loss fraction.

    Args:
        returns:    Daily simple returns.
        confidence: e.g. 0.95 → loss exceeded on 5 % of days.

    Returns:
        ``max(0, -quantile(returns, 1 - confidence))``.
    """
    values = _as_array(returns)
    quantile = float(np.quantile(values, 1.0 - confidence))
    return max(0.0, -quantile)


# ── Convenience aggregator ────────────────────────────────────────────────────


def compute_risk_metrics(
    returns: ReturnsLike,
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
    periods_per_year: int = TRADING_DAYS_PER_YEAR,
) -> RiskMetrics:
    """
    Aggregate all risk and performance statistics for one return series.

    Args:
        returns:          Daily simple returns, chronological.
        risk_free_rate:   Annual risk-free rate for the Sharpe ratio.
        periods_per_year: Annualization factor.

    Returns:
        ``RiskMetrics`` (annualized except drawdown and VaR).

    Raises:
        InsufficientDataError: Fewer than 2 returns (variance undefined).
        DegenerateSeriesError: NaN or infinite returns.
    """
    values = _as_array(returns)
    if len(values) < 2:
        raise InsufficientDataError(
            f"Need at least 2 returns for risk metrics, got {len(values)}"
        )

    annual_return = expected_return(values, periods_per_year)
    volatility = annualized_volatility(values, periods_per_year)
    return RiskMetrics(
        expected_return=annual_return,
        volatility=volatility,
        max_drawdown=max_drawdown(values),
        sharpe_ratio=sharpe_ratio(annual_return, volatility, risk_free_rate),
        value_at_risk=value_at_risk(values),
    )
