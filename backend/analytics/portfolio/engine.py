"""
analytics/portfolio/engine.py
──────────────────────────────
Portfolio risk analytics engine — the single ``analyze`` entry point.

Workflow (per call)
-------------------
1. Validate allocations and the lookback window.
2. Resolve symbol + current price for every asset and both benchmarks
   through the caller-supplied ``resolve_price`` collaborator.
3. Synthesize one anchored price path per asset, concurrently.
4. Convert to daily returns and aggregate the weighted portfolio series.
5. Compute risk metrics, the base-100 benchmark comparison and the
   per-asset contributions concurrently, then assemble the result.

The engine holds only immutable configuration, so one instance can serve
concurrent calls.  Any error aborts the whole call; there are no partial
results and no retries.
"""

import logging
import math
import numbers
import secrets
from concurrent.futures import ThreadPoolExecutor
from datetime import date as Date, datetime, timedelta, timezone
from typing import Dict, List, Mapping, Optional, Sequence, Union

import pandas as pd
from pydantic import ValidationError

from analytics.portfolio.benchmark import normalize
from analytics.portfolio.contributions import decompose
from analytics.portfolio.errors import (
    InsufficientDataError,
    InvalidPortfolioError,
    PriceResolutionError,
)
from analytics.portfolio.models import Allocation, Asset, PortfolioAnalytics
from analytics.portfolio.returns import to_returns, weighted_aggregate
from analytics.portfolio.risk_metrics import (
    DEFAULT_RISK_FREE_RATE,
    TRADING_DAYS_PER_YEAR,
    compute_risk_metrics,
)
from analytics.pricing import PriceResolver, Quote
from analytics.synthetic import (
    BasePriceSynthesizer,
    RandomWalkSynthesizer,
    SynthesizerFactory,
    seed_material_for,
)

logger = logging.getLogger(__name__)

BENCHMARK_BTC_ID = "bitcoin"
BENCHMARK_ETH_ID = "ethereum"

MIN_PORTFOLIO_ASSETS = 2
WEIGHT_SUM_TOLERANCE = 1e-3

# Used when an engine is built without an explicit nonce.
_PROCESS_NONCE = secrets.token_hex(8)

AllocationLike = Union[Allocation, Mapping]


# ── Validation helpers ────────────────────────────────────────────────────────


def validate_portfolio(portfolio: Sequence[AllocationLike]) -> Dict[str, float]:
    """
    Check allocations and return them as an ordered ``asset_id → weight`` map.

    Raises:
        InvalidPortfolioError: Fewer than 2 assets, duplicate ids, a weight
                               outside ``[0, 1]`` or weights not summing to 1
                               within ``1e-3``.
    """
    try:
        allocations = [
            a if isinstance(a, Allocation) else Allocation.model_validate(a)
            for a in portfolio
        ]
    except (TypeError, ValidationError) as exc:
        raise InvalidPortfolioError(f"Malformed allocation: {exc}") from exc

    if len(allocations) < MIN_PORTFOLIO_ASSETS:
        raise InvalidPortfolioError(
            f"Portfolio must contain at least {MIN_PORTFOLIO_ASSETS} assets, "
            f"got {len(allocations)}"
        )

    weights: Dict[str, float] = {}
    for allocation in allocations:
        if allocation.asset_id in weights:
            raise InvalidPortfolioError(
                f"Asset '{allocation.asset_id}' appears more than once"
            )
        weight = allocation.weight
        if not math.isfinite(weight) or weight < 0.0 or weight > 1.0:
            raise InvalidPortfolioError(
                f"Weight for '{allocation.asset_id}' must be within [0, 1], got {weight}"
            )
        weights[allocation.asset_id] = float(weight)

    total = sum(weights.values())
    if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
        raise InvalidPortfolioError(
            f"Weights must sum to 1 (±{WEIGHT_SUM_TOLERANCE}), got {total:.6f}"
        )
    return weights


def validate_window(window_days: int) -> int:
    """Raise ``InsufficientDataError`` unless the window holds at least one return."""
    if isinstance(window_days, bool) or not isinstance(window_days, numbers.Integral):
        raise InsufficientDataError(f"window_days must be an integer, got {window_days!r}")
    if window_days < 1:
        raise InsufficientDataError(
            f"window_days must be at least 1 to yield a return, got {window_days}"
        )
    return int(window_days)


def date_axis(window_days: int, as_of: Optional[Date] = None) -> List[str]:
    """
    ISO calendar labels for days ``0 .. window_days``, ending on ``as_of``.

    ``as_of`` defaults to today's UTC date.
    """
    end = as_of or datetime.now(timezone.utc).date()
    return [
        (end - timedelta(days=window_days - t)).isoformat()
        for t in range(window_days + 1)
    ]


# ── Engine ────────────────────────────────────────────────────────────────────


class PortfolioRiskEngine:
    """
    Computes ``PortfolioAnalytics`` for a weighted basket of crypto assets.

    Args:
        synthesizer:      Price-series strategy; defaults to the random walk.
        risk_free_rate:   Annual risk-free rate for the Sharpe ratio.
        periods_per_year: Annualization factor.
        seed_nonce:       Process-level nonce mixed into each asset's seed.
        benchmark_ids:    ``(btc_id, eth_id)`` resolved via ``resolve_price``.
        max_workers:      Thread-pool size used inside one ``analyze`` call.

    Example:
        >>> engine = PortfolioRiskEngine()
        >>> engine.analyze(
        ...     [{"asset_id": "solana", "weight": 0.6},
        ...      {"asset_id": "cardano", "weight": 0.4}],
        ...     window_days=30,
        ...     resolve_price=resolver,
        ... )
    """

    def __init__(
        self,
        synthesizer: Optional[BasePriceSynthesizer] = None,
        risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
        periods_per_year: int = TRADING_DAYS_PER_YEAR,
        seed_nonce: Optional[str] = None,
        benchmark_ids: Sequence[str] = (BENCHMARK_BTC_ID, BENCHMARK_ETH_ID),
        max_workers: int = 4,
    ) -> None:
        if len(benchmark_ids) != 2:
            raise ValueError("benchmark_ids must hold exactly (btc_id, eth_id)")
        self.synthesizer = synthesizer or RandomWalkSynthesizer()
        self.risk_free_rate = float(risk_free_rate)
        self.periods_per_year = int(periods_per_year)
        self.seed_nonce = seed_nonce or _PROCESS_NONCE
        self.benchmark_ids = (benchmark_ids[0], benchmark_ids[1])
        self.max_workers = max(1, int(max_workers))

    @classmethod
    def from_settings(cls, settings) -> "PortfolioRiskEngine":
        """Build an engine from a ``core.config.Settings`` instance."""
        synthesizer = SynthesizerFactory.create_synthesizer(
            settings.SYNTH_STRATEGY,
            daily_drift=settings.SYNTH_DAILY_DRIFT,
            daily_volatility=settings.SYNTH_DAILY_VOLATILITY,
        )
        return cls(
            synthesizer=synthesizer,
            risk_free_rate=settings.RISK_FREE_RATE,
            periods_per_year=settings.TRADING_DAYS_PER_YEAR,
            seed_nonce=settings.SYNTH_SEED_NONCE,
            benchmark_ids=(settings.BENCHMARK_BTC_ID, settings.BENCHMARK_ETH_ID),
            max_workers=settings.ANALYSIS_MAX_WORKERS,
        )

    # ── public API ────────────────────────────────────────────────────────

    def analyze(
        self,
        portfolio: Sequence[AllocationLike],
        window_days: int,
        resolve_price: PriceResolver,
        as_of: Optional[Date] = None,
    ) -> PortfolioAnalytics:
        """
        Run the full risk analysis for one portfolio.

        Args:
            portfolio:     Allocations (``Allocation`` or dicts with
                           ``asset_id`` and ``weight`` as a fraction).
            window_days:   Lookback length; yields ``window_days`` returns.
            resolve_price: ``asset_id -> Quote`` collaborator.
            as_of:         Last calendar date of the series (default: today UTC).

        Returns:
            ``PortfolioAnalytics`` with metrics, the portfolio return series,
            ``window_days + 1`` cumulative points and one contribution per
            requested asset.

        Raises:
            InvalidPortfolioError:  Bad allocations.
            InsufficientDataError:  ``window_days < 1``.
            PriceResolutionError:   One or more quotes could not be resolved.
        """
        weights = validate_portfolio(portfolio)
        window_days = validate_window(window_days)

        btc_id, eth_id = self.benchmark_ids
        asset_ids = list(weights)
        needed = list(dict.fromkeys(asset_ids + [btc_id, eth_id]))
        assets = self._resolve_assets(needed, resolve_price)

        workers = min(self.max_workers, len(needed))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="portfolio") as pool:
            price_futures = {
                asset_id: pool.submit(self._synthesize, assets[asset_id], window_days)
                for asset_id in needed
            }
            returns = {
                asset_id: to_returns(future.result())
                for asset_id, future in price_futures.items()
            }

            per_asset = {asset_id: returns[asset_id] for asset_id in asset_ids}
            portfolio_returns = weighted_aggregate(per_asset, weights)
            dates = date_axis(window_days, as_of)

            metrics_future = pool.submit(
                compute_risk_metrics,
                portfolio_returns,
                self.risk_free_rate,
                self.periods_per_year,
            )
            curve_future = pool.submit(
                normalize, portfolio_returns, returns[btc_id], returns[eth_id], dates
            )
            contributions_future = pool.submit(
                decompose,
                per_asset,
                weights,
                {asset_id: assets[asset_id].symbol for asset_id in asset_ids},
            )
            metrics = metrics_future.result()
            cumulative = curve_future.result()
            contributions = contributions_future.result()

        logger.info(
            "Analyzed %d-asset portfolio over %d days "
            "(expected_return=%.4f, volatility=%.4f, sharpe=%.3f)",
            len(asset_ids),
            window_days,
            metrics.expected_return,
            metrics.volatility,
            metrics.sharpe_ratio,
        )
        return PortfolioAnalytics(
            metrics=metrics,
            historical_returns=[float(r) for r in portfolio_returns.to_numpy()],
            cumulative_returns=cumulative,
            asset_contributions=contributions,
        )

    # ── private helpers ───────────────────────────────────────────────────

    def _synthesize(self, asset: Asset, window_days: int) -> pd.Series:
        return self.synthesizer.synthesize(
            asset.id,
            asset.current_price,
            window_days,
            seed_material_for(asset.id, self.seed_nonce),
        )

    @staticmethod
    def _resolve_assets(
        asset_ids: Sequence[str], resolve_price: PriceResolver
    ) -> Dict[str, Asset]:
        """
        Resolve every id to an ``Asset``; collect all failures before raising.

        Raises:
            PriceResolutionError: Listing every id that failed, chained to the
                                  first underlying exception.
        """
        assets: Dict[str, Asset] = {}
        failed: List[str] = []
        first_cause: Optional[BaseException] = None

        for asset_id in asset_ids:
            try:
                quote = resolve_price(asset_id)
                if isinstance(quote, Mapping):
                    quote = Quote(**quote)
                assets[asset_id] = Asset(
                    id=asset_id,
                    symbol=quote.symbol,
                    current_price=quote.current_price,
                )
            except Exception as exc:
                logger.warning("Price resolution failed for %s: %s", asset_id, exc)
                failed.append(asset_id)
                first_cause = first_cause or exc
                continue
            if not math.isfinite(assets[asset_id].current_price):
                logger.warning("Non-finite price for %s", asset_id)
                failed.append(asset_id)
                del assets[asset_id]

        if failed:
            raise PriceResolutionError(failed) from first_cause
        return assets


def analyze(
    portfolio: Sequence[AllocationLike],
    window_days: int,
    resolve_price: PriceResolver,
    as_of: Optional[Date] = None,
) -> PortfolioAnalytics:
    """Run :meth:`PortfolioRiskEngine.analyze` with default configuration."""
    return PortfolioRiskEngine().analyze(portfolio, window_days, resolve_price, as_of=as_of)
