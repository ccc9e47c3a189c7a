"""
app/api/v1/endpoints/portfolio.py
──────────────────────────────────
Portfolio risk analysis endpoint.

Routes
------
POST /api/v1/portfolio/analyze
    Risk metrics (expected return, volatility, max drawdown, Sharpe, VaR),
    the daily portfolio return series, a base-100 comparison against BTC
    and ETH, and per-asset risk / return contributions.

Data contract
--------------
Allocations are percentages and must add up to 100 %.  Price history is
synthesized from each asset's current price; only the current price comes
from the price resolver.

Error codes
-----------
404  No current price could be resolved for one or more asset ids.
422  Invalid portfolio (weights, duplicates, < 2 assets) / invalid body.
500  Unexpected internal error.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from functools import partial

from fastapi import APIRouter, Depends, HTTPException

from analytics.portfolio.engine import PortfolioRiskEngine
from analytics.portfolio.errors import (
    InsufficientDataError,
    InvalidPortfolioError,
    PriceResolutionError,
)
from analytics.portfolio.models import Allocation
from analytics.pricing import PriceResolver
from app.api.dependencies import get_engine, get_price_resolver
from core.config import Settings, get_settings
from schemas.portfolio import AnalyzeRequest, AnalyzeResponse

logger = logging.getLogger(__name__)
router = APIRouter()

# Shared thread pool; analysis is CPU-bound.
_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="analyze")


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    summary="Portfolio risk metrics, benchmark comparison and contributions",
    responses={
        200: {"description": "Analysis computed successfully"},
        404: {"description": "No current price for one or more assets"},
        422: {"description": "Invalid portfolio or request body"},
        500: {"description": "Unexpected computation error"},
    },
)
async def analyze_portfolio(
    request: AnalyzeRequest,
    engine: PortfolioRiskEngine = Depends(get_engine),
    resolve_price: PriceResolver = Depends(get_price_resolver),
    settings: Settings = Depends(get_settings),
) -> AnalyzeResponse:
    """
    Analyze a weighted crypto portfolio over the last ``days`` days.

    Args:
        request:       Assets with percentage allocations and the window.
        engine:        Injected risk engine.
        resolve_price: Injected ``asset_id -> Quote`` collaborator.
        settings:      Application settings (window default and cap).

    Returns:
        ``AnalyzeResponse`` wrapping the engine's ``PortfolioAnalytics``.
    """
    days = request.days or settings.DEFAULT_WINDOW_DAYS
    if days > settings.MAX_WINDOW_DAYS:
        raise HTTPException(
            status_code=422,
            detail=f"days must be at most {settings.MAX_WINDOW_DAYS}, got {days}",
        )

    portfolio = [
        Allocation(asset_id=a.id, weight=a.allocation / 100.0)
        for a in request.assets
    ]
    as_of = datetime.now(timezone.utc).date()
    loop = asyncio.get_running_loop()

    try:
        analytics = await loop.run_in_executor(
            _executor,
            partial(engine.analyze, portfolio, days, resolve_price, as_of=as_of),
        )
    except (InvalidPortfolioError, InsufficientDataError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except PriceResolutionError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("Portfolio analysis failed")
        raise HTTPException(
            status_code=500, detail="Portfolio analysis failed unexpectedly."
        ) from exc

    return AnalyzeResponse(
        asset_ids=[a.asset_id for a in portfolio],
        window_days=days,
        as_of=as_of.isoformat(),
        analytics=analytics,
    )
