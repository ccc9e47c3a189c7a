"""
app/api/dependencies.py
───────────────────────
FastAPI dependency functions shared across all endpoints.

Usage
-----
    from app.api.dependencies import get_engine, get_price_resolver

    @router.post("/foo")
    def my_route(
        engine = Depends(get_engine),
        resolve_price = Depends(get_price_resolver),
    ):
        ...

Tests replace either provider through ``app.dependency_overrides``.
"""

from functools import lru_cache

from analytics.portfolio.engine import PortfolioRiskEngine
from analytics.pricing import MappingPriceResolver, PriceResolver
from core.config import get_settings


@lru_cache(maxsize=1)
def get_engine() -> PortfolioRiskEngine:
    """
    FastAPI dependency that returns the risk engine singleton.

    The engine holds only immutable configuration, so sharing one instance
    across concurrent requests is safe.
    """
    return PortfolioRiskEngine.from_settings(get_settings())


def get_price_resolver() -> PriceResolver:
    """
    FastAPI dependency that returns the configured price resolver.

    Quotes come from the ``STATIC_QUOTES`` setting; a live market-data
    client can be swapped in by overriding this dependency.
    """
    return MappingPriceResolver(get_settings().STATIC_QUOTES)
