"""
analytics/portfolio/returns.py
───────────────────────────────
Daily simple returns and weighted portfolio aggregation.

Functions
---------
to_returns          — price series → simple-return series.
weighted_aggregate  — per-asset return series + weights → portfolio series.
"""

from typing import Mapping, Sequence, Union

import numpy as np
import pandas as pd

from analytics.portfolio.errors import DegenerateSeriesError, MisalignedSeriesError

PORTFOLIO_SERIES_NAME = "portfolio"


def to_returns(prices: Union[pd.Series, Sequence[float]]) -> pd.Series:
    """
    Convert a daily price series into simple returns.

    Formula: ``r[t] = (p[t] - p[t-1]) / p[t-1]``, reported against the day
    on which it is realised, so the result is indexed ``1 .. window_days``.

    Args:
        prices: Price series in chronological order (``pd.Series`` indexed by
                day, or any sequence of floats).

    Returns:
        ``pd.Series`` of length ``len(prices) - 1`` carrying the price
        series' name.

    Raises:
        DegenerateSeriesError: Fewer than 2 prices, or any price ``<= 0`` /
                               non-finite.
    """
    if not isinstance(prices, pd.Series):
        prices = pd.Series(list(prices), dtype=float)
        prices.index.name = "day"

    values = prices.to_numpy(dtype=float)
    if len(values) < 2:
        raise DegenerateSeriesError(
            f"Need at least 2 prices to compute a return, got {len(values)}"
        )
    if not np.all(np.isfinite(values)) or np.any(values <= 0):
        raise DegenerateSeriesError(
            f"Zero, negative or non-finite prices not allowed in series '{prices.name}'"
        )

    returns = (values[1:] - values[:-1]) / values[:-1]
    return pd.Series(returns, index=prices.index[1:], name=prices.name, dtype=float)


def weighted_aggregate(
    per_asset_returns: Mapping[str, pd.Series],
    weights: Mapping[str, float],
) -> pd.Series:
    """
    Build the portfolio return series ``Σ_i weight[i] * r_i[t]``.

    Args:
        per_asset_returns: Asset id → return series. All series must share
                           the same length and day index.
        weights:           Asset id → weight (fraction). Keys must match
                           ``per_asset_returns`` exactly.

    Returns:
        Portfolio return series named ``"portfolio"``.

    Raises:
        MisalignedSeriesError: Key sets differ, or series lengths / day
                               indices do not line up.
    """
    _check_alignment(per_asset_returns, weights)

    frame = pd.DataFrame({asset_id: per_asset_returns[asset_id] for asset_id in weights})
    weight_vector = np.array([float(weights[asset_id]) for asset_id in weights])
    portfolio = frame.to_numpy(dtype=float) @ weight_vector
    return pd.Series(portfolio, index=frame.index, name=PORTFOLIO_SERIES_NAME, dtype=float)


def _check_alignment(
    per_asset_returns: Mapping[str, pd.Series],
    weights: Mapping[str, float],
) -> None:
    """Raise ``MisalignedSeriesError`` unless every weighted series lines up."""
    if not per_asset_returns:
        raise MisalignedSeriesError("No return series supplied")

    missing = [a for a in weights if a not in per_asset_returns]
    extra = [a for a in per_asset_returns if a not in weights]
    if missing or extra:
        raise MisalignedSeriesError(
            f"Return series and weights disagree (missing series: {missing}, "
            f"unweighted series: {extra})"
        )

    reference_id = next(iter(weights))
    reference = per_asset_returns[reference_id]
    for asset_id, series in per_asset_returns.items():
        if len(series) != len(reference):
            raise MisalignedSeriesError(
                f"Series '{asset_id}' has {len(series)} returns, "
                f"'{reference_id}' has {len(reference)}"
            )
        if not series.index.equals(reference.index):
            raise MisalignedSeriesError(
                f"Series '{asset_id}' is not day-aligned with '{reference_id}'"
            )
