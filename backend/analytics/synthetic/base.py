"""
analytics/synthetic/base.py
────────────────────────────
Abstract interface for daily price-series synthesizers.

Genuine market history is not fetched by the engine.  Instead each asset
gets a plausible synthetic path anchored to its real current price.  The
engine only ever talks to :class:`BasePriceSynthesizer`, so a strategy
backed by real history can replace the random walk without touching the
return, metrics or decomposition code.

Classes
-------
BasePriceSynthesizer
    Abstract interface every synthesis strategy must implement.

Functions
---------
seed_material_for   — build the per-asset seed material string.
seed_from_material  — hash seed material into a 64-bit RNG seed.
"""

import hashlib
import math
import numbers
from abc import ABC, abstractmethod
from typing import Any, Dict

import pandas as pd

from analytics.portfolio.errors import DegenerateSeriesError, InsufficientDataError


def seed_material_for(asset_id: str, nonce: str) -> str:
    """
    Combine an asset id with the process-level nonce.

    Same id + same nonce → same path (reproducible within a session);
    different ids → unrelated paths.
    """
    return f"{asset_id}:{nonce}"


def seed_from_material(seed_material: str) -> int:
    """Return a stable 64-bit seed derived from ``seed_material`` via SHA-256."""
    digest = hashlib.sha256(str(seed_material).encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


class BasePriceSynthesizer(ABC):
    """
    Abstract base class for price-series synthesizers.

    Implementations must return a ``pd.Series`` of length
    ``window_days + 1`` indexed by day (``0 .. window_days``), strictly
    positive, whose last value equals ``current_price`` exactly.  They must
    be pure functions of their arguments.
    """

    @abstractmethod
    def synthesize(
        self,
        asset_id: str,
        current_price: float,
        window_days: int,
        seed_material: str,
    ) -> pd.Series:
        """
        Produce a daily price series ending at ``current_price``.

        Args:
            asset_id:      Asset identifier; becomes the series ``name``.
            current_price: Real current price (> 0); anchors the last point.
            window_days:   Number of daily returns the series must yield.
            seed_material: Opaque string that fully determines randomness.

        Returns:
            ``pd.Series`` of prices with a ``RangeIndex`` named ``day``.

        Raises:
            InsufficientDataError: ``window_days < 1``.
            DegenerateSeriesError: ``current_price`` not a positive number.
        """

    def get_model_info(self) -> Dict[str, Any]:
        """
        Return strategy metadata for logging / API responses.

        Returns:
            Dict with at least ``model_name`` and ``version`` keys.
        """
        return {"model_name": self.__class__.__name__, "version": "1.0"}

    # ── Shared validation helpers ─────────────────────────────────────────

    @staticmethod
    def _validate_inputs(current_price: float, window_days: int) -> None:
        """
        Reject windows without a single return and unusable anchor prices.

        Raises:
            InsufficientDataError: ``window_days`` is not an int ``>= 1``.
            DegenerateSeriesError: ``current_price`` is ``<= 0`` or not finite.
        """
        if isinstance(window_days, bool) or not isinstance(window_days, numbers.Integral):
            raise InsufficientDataError(
                f"window_days must be an integer, got {window_days!r}"
            )
        if window_days < 1:
            raise InsufficientDataError(
                f"window_days must be at least 1 to yield a return, got {window_days}"
            )
        if not math.isfinite(current_price) or current_price <= 0:
            raise DegenerateSeriesError(
                f"current_price must be a positive finite number, got {current_price!r}"
            )

    @staticmethod
    def _day_index(window_days: int) -> pd.RangeIndex:
        """Day axis ``0 .. window_days`` shared by every synthesized series."""
        return pd.RangeIndex(window_days + 1, name="day")
