"""
analytics/portfolio/errors.py
──────────────────────────────
Exception taxonomy for the portfolio risk engine.

Every error raised inside the engine derives from
:class:`PortfolioAnalyticsError` so the HTTP layer can translate the whole
family in one place.  Nothing in the engine retries on these errors: all
computations are deterministic, so the same inputs fail the same way.

Classes
-------
InvalidPortfolioError   Caller supplied a portfolio the engine refuses.
PriceResolutionError    The price collaborator failed for one or more ids.
InsufficientDataError   Too few points for the requested statistic.
DegenerateSeriesError   A price series contains a non-positive price.
MisalignedSeriesError   Series that must line up day-by-day do not.
"""

from typing import Iterable, List


class PortfolioAnalyticsError(Exception):
    """Base class for all portfolio risk engine errors."""


class InvalidPortfolioError(PortfolioAnalyticsError):
    """Fewer than 2 assets, bad weights, or weights not summing to 1."""


class PriceResolutionError(PortfolioAnalyticsError):
    """
    The price-resolution collaborator failed.

    Attributes:
        asset_ids: Ids whose quote could not be resolved, in request order.
    """

    def __init__(self, asset_ids: Iterable[str], message: str = "") -> None:
        self.asset_ids: List[str] = list(asset_ids)
        if not message:
            message = "Could not resolve a current price for: " + ", ".join(
                self.asset_ids
            )
        super().__init__(message)


class InsufficientDataError(PortfolioAnalyticsError):
    """Not enough observations (e.g. an empty window or < 2 returns)."""


class DegenerateSeriesError(PortfolioAnalyticsError):
    """A price series holds a zero, negative or non-finite price."""


class MisalignedSeriesError(PortfolioAnalyticsError):
    """Series that must share length and day index do not."""
