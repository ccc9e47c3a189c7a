"""
analytics/portfolio
────────────────────
Portfolio risk analytics sub-package.

Modules
-------
returns        — simple returns and weighted portfolio aggregation.
risk_metrics   — expected return, volatility, drawdown, Sharpe, VaR.
benchmark      — base-100 portfolio vs. BTC / ETH comparison.
contributions  — per-asset risk and return decomposition.
engine         — ``analyze`` orchestration (import it directly).
"""

from analytics.portfolio import benchmark, contributions, returns, risk_metrics

__all__ = ["benchmark", "contributions", "returns", "risk_metrics"]
