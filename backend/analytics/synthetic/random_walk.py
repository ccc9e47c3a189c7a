"""
analytics/synthetic/random_walk.py
───────────────────────────────────
Geometric random-walk synthesizer anchored to the current price.

Daily log returns are drawn from ``Normal(daily_drift, daily_volatility)``
and the path is built *backwards* from today: the cumulative log return is
0 on the last day, so the final price is exactly ``current_price`` while
every earlier price is ``current_price * exp(cumulative_log_return)``.

Default constants give ~55 % annualized volatility (0.035 × √252), a
typical figure for a large-cap digital asset.
"""

import logging
from typing import Any, Dict

import numpy as np
import pandas as pd

from analytics.synthetic.base import BasePriceSynthesizer, seed_from_material

logger = logging.getLogger(__name__)

DEFAULT_DAILY_DRIFT = 0.0005
DEFAULT_DAILY_VOLATILITY = 0.035


class RandomWalkSynthesizer(BasePriceSynthesizer):
    """
    Seeded log-normal random walk, walked backward from the current price.

    Args:
        daily_drift:      Mean daily log return.
        daily_volatility: Standard deviation of the daily log return (> 0).
    """

    def __init__(
        self,
        daily_drift: float = DEFAULT_DAILY_DRIFT,
        daily_volatility: float = DEFAULT_DAILY_VOLATILITY,
    ) -> None:
        if daily_volatility <= 0:
            raise ValueError(
                f"daily_volatility must be positive, got {daily_volatility}"
            )
        self.daily_drift = float(daily_drift)
        self.daily_volatility = float(daily_volatility)

    def synthesize(
        self,
        asset_id: str,
        current_price: float,
        window_days: int,
        seed_material: str,
    ) -> pd.Series:
        self._validate_inputs(current_price, window_days)
        window_days = int(window_days)

        rng = np.random.default_rng(seed_from_material(seed_material))
        # log_returns[k] is the log return realised at the end of day k + 1.
        log_returns = rng.normal(
            self.daily_drift, self.daily_volatility, size=window_days
        )

        # Cumulative log return relative to today: -(sum of returns after day t).
        tail_sums = np.cumsum(log_returns[::-1])[::-1]
        cumulative = np.append(-tail_sums, 0.0)

        prices = current_price * np.exp(cumulative)
        prices[-1] = current_price

        logger.debug(
            "Synthesized %d-day path for %s (first=%.6g, last=%.6g)",
            window_days,
            asset_id,
            prices[0],
            prices[-1],
        )
        return pd.Series(
            prices, index=self._day_index(window_days), name=asset_id, dtype=float
        )

    def get_model_info(self) -> Dict[str, Any]:
        """Return random-walk metadata including its annualized volatility."""
        info = super().get_model_info()
        info.update(
            {
                "daily_drift": self.daily_drift,
                "daily_volatility": self.daily_volatility,
                "annualized_volatility": round(self.daily_volatility * np.sqrt(252), 4),
            }
        )
        return info
