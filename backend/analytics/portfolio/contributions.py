"""
analytics/portfolio/contributions.py
─────────────────────────────────────
Per-asset decomposition of portfolio risk and return.

Risk uses the Euler / covariance decomposition

    RC_i = w_i · Cov(r_i, r_p) / Var(r_p)

and return uses each asset's share of the weighted mean daily return.
Both columns sum to 1 across the portfolio.  Degenerate denominators fall
back to the nominal weights instead of producing NaN.
"""

import logging
from typing import List, Mapping, Optional

import numpy as np
import pandas as pd

from analytics.portfolio.models import Contribution
from analytics.portfolio.returns import weighted_aggregate

logger = logging.getLogger(__name__)

# Below these magnitudes the denominator is treated as zero.
_ZERO_MEAN_RETURN = 1e-12
_ZERO_VARIANCE = 1e-18


def decompose(
    per_asset_returns: Mapping[str, pd.Series],
    weights: Mapping[str, float],
    symbols: Optional[Mapping[str, str]] = None,
) -> List[Contribution]:
    """
    Split total portfolio risk and return into per-asset shares.

    Args:
        per_asset_returns: Asset id → daily return series (day-aligned).
        weights:           Asset id → weight; iteration order is preserved
                           in the output.
        symbols:           Optional asset id → ticker symbol for display.
                           Missing entries fall back to the id.

    Returns:
        One ``Contribution`` per weighted asset.

    Raises:
        MisalignedSeriesError: Series and weights do not line up.
    """
    portfolio = weighted_aggregate(per_asset_returns, weights).to_numpy(dtype=float)
    asset_ids = list(weights)
    w = np.array([float(weights[a]) for a in asset_ids])
    frame = np.column_stack(
        [per_asset_returns[a].to_numpy(dtype=float) for a in asset_ids]
    )

    # ── return contribution ───────────────────────────────────────────────
    means = frame.mean(axis=0)
    weighted_means = w * means
    total_mean = float(weighted_means.sum())
    if abs(total_mean) < _ZERO_MEAN_RETURN:
        logger.debug("Portfolio mean return ~0; return contributions fall back to weights")
        return_shares = w.copy()
    else:
        return_shares = weighted_means / total_mean

    # ── risk contribution (population moments) ────────────────────────────
    port_dev = portfolio - portfolio.mean()
    port_var = float(np.mean(port_dev ** 2))
    if port_var < _ZERO_VARIANCE:
        logger.debug("Portfolio variance ~0; risk contributions fall back to weights")
        risk_shares = w.copy()
    else:
        covariances = ((frame - means) * port_dev[:, None]).mean(axis=0)
        risk_shares = w * covariances / port_var

    symbols = symbols or {}
    return [
        Contribution(
            asset_id=asset_id,
            symbol=symbols.get(asset_id, asset_id),
            risk_contribution=float(risk_shares[i]),
            return_contribution=float(return_shares[i]),
        )
        for i, asset_id in enumerate(asset_ids)
    ]
