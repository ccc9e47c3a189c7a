"""
analytics/portfolio/models.py
──────────────────────────────
Value objects produced and consumed by the portfolio risk engine.

All models are frozen pydantic models: they are created within a single
``analyze`` call and never mutated afterwards.  Price and return series
are plain ``pd.Series`` (see ``analytics.portfolio.returns``); only the
records that cross the engine boundary are modelled here.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ── Inputs ────────────────────────────────────────────────────────────────────


class Asset(_Frozen):
    """An asset with its real current price, as resolved for one call."""

    id: str
    symbol: str
    current_price: float = Field(..., gt=0.0)


class Allocation(_Frozen):
    """
    Target weight of one asset in the portfolio.

    ``weight`` is a fraction, not a percentage.  Range and sum checks are
    performed by the engine so that bad input surfaces as
    :class:`~analytics.portfolio.errors.InvalidPortfolioError`.
    """

    asset_id: str
    weight: float


# ── Outputs ───────────────────────────────────────────────────────────────────


class RiskMetrics(_Frozen):
    """Annualized performance statistics of a return series."""

    expected_return: float
    volatility: float
    max_drawdown: float = Field(..., ge=0.0, le=1.0)
    sharpe_ratio: float
    value_at_risk: float = Field(..., ge=0.0)


class CumulativePoint(_Frozen):
    """One day of the base-100 portfolio vs. benchmark comparison."""

    date: str
    portfolio: float
    btc: float
    eth: float


class Contribution(_Frozen):
    """An asset's share of total portfolio risk and return."""

    asset_id: str
    symbol: str
    risk_contribution: float
    return_contribution: float


class PortfolioAnalytics(_Frozen):
    """Complete result of one ``analyze`` call."""

    metrics: RiskMetrics
    historical_returns: List[float]
    cumulative_returns: List[CumulativePoint]
    asset_contributions: List[Contribution]
