"""
analytics/pricing.py
─────────────────────
The seam between the risk engine and whatever supplies current prices.

The engine only needs ``asset_id -> Quote``; it never talks to a market
data API itself.  Any callable with that signature is a valid resolver.

Usage
-----
    from analytics.pricing import MappingPriceResolver

    resolve = MappingPriceResolver({
        "bitcoin": {"symbol": "BTC", "current_price": 67000.0},
        "ethereum": {"symbol": "ETH", "current_price": 3500.0},
    })
    resolve("bitcoin").current_price
"""

from typing import Callable, Dict, Mapping, Union

from pydantic import BaseModel, ConfigDict


class Quote(BaseModel):
    """Symbol and current price for one asset id."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    current_price: float


PriceResolver = Callable[[str], Quote]


class MappingPriceResolver:
    """
    In-memory price resolver backed by a mapping of asset id → quote.

    Args:
        quotes: Asset id → ``Quote`` or a dict with ``symbol`` and
                ``current_price`` keys.

    Raises:
        KeyError: (on call) the asset id is not in the mapping.
    """

    def __init__(self, quotes: Mapping[str, Union[Quote, Mapping]]) -> None:
        self._quotes: Dict[str, Quote] = {
            asset_id: q if isinstance(q, Quote) else Quote(**q)
            for asset_id, q in quotes.items()
        }

    def __call__(self, asset_id: str) -> Quote:
        try:
            return self._quotes[asset_id]
        except KeyError:
            raise KeyError(f"No quote configured for '{asset_id}'") from None

    def __contains__(self, asset_id: object) -> bool:
        return asset_id in self._quotes

    def __len__(self) -> int:
        return len(self._quotes)
