"""
analytics/portfolio/benchmark.py
─────────────────────────────────
Rebase the portfolio and the BTC / ETH benchmarks to a common index of 100.
"""

from typing import List, Sequence

import numpy as np

from analytics.portfolio.errors import MisalignedSeriesError
from analytics.portfolio.models import CumulativePoint
from analytics.portfolio.risk_metrics import ReturnsLike

BASE_INDEX = 100.0


def cumulative_index(returns: ReturnsLike, base: float = BASE_INDEX) -> np.ndarray:
    """
    Compound a return series into an index starting at ``base``.

    ``index[0] = base`` and ``index[t] = index[t-1] * (1 + r[t-1])``.

    Returns:
        Array of length ``len(returns) + 1``.
    """
    values = np.asarray(returns, dtype=float)
    index = np.empty(len(values) + 1, dtype=float)
    index[0] = base
    index[1:] = base * np.cumprod(1.0 + values)
    return index


def normalize(
    portfolio_returns: ReturnsLike,
    btc_returns: ReturnsLike,
    eth_returns: ReturnsLike,
    dates: Sequence[str],
) -> List[CumulativePoint]:
    """
    Zip three base-100 cumulative indices with a caller-supplied date axis.

    Args:
        portfolio_returns: Daily portfolio returns.
        btc_returns:       Daily bitcoin returns over the same days.
        eth_returns:       Daily ethereum returns over the same days.
        dates:             One label per index point (``len(returns) + 1``),
                           oldest first.  Used verbatim.

    Returns:
        One ``CumulativePoint`` per date; all three series equal 100.0 on
        the first point.

    Raises:
        MisalignedSeriesError: Return series of different lengths, or a date
                               axis that does not have one extra point.
    """
    lengths = {len(portfolio_returns), len(btc_returns), len(eth_returns)}
    if len(lengths) != 1:
        raise MisalignedSeriesError(
            "Portfolio and benchmark return series differ in length: "
            f"portfolio={len(portfolio_returns)}, btc={len(btc_returns)}, "
            f"eth={len(eth_returns)}"
        )
    n_returns = lengths.pop()
    if len(dates) != n_returns + 1:
        raise MisalignedSeriesError(
            f"Expected {n_returns + 1} date labels, got {len(dates)}"
        )

    portfolio_index = cumulative_index(portfolio_returns)
    btc_index = cumulative_index(btc_returns)
    eth_index = cumulative_index(eth_returns)

    return [
        CumulativePoint(
            date=str(dates[t]),
            portfolio=float(portfolio_index[t]),
            btc=float(btc_index[t]),
            eth=float(eth_index[t]),
        )
        for t in range(n_returns + 1)
    ]
