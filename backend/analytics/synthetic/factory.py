"""
analytics/synthetic/factory.py
───────────────────────────────
Registry of price-series synthesis strategies.

Usage
-----
    from analytics.synthetic.factory import SynthesizerFactory

    synthesizer = SynthesizerFactory.create_synthesizer(
        "random_walk", daily_volatility=0.04
    )
"""

import logging
from typing import Any, Dict, List, Type

from analytics.synthetic.base import BasePriceSynthesizer
from analytics.synthetic.random_walk import RandomWalkSynthesizer

logger = logging.getLogger(__name__)


class SynthesizerFactory:
    """
    Factory for price-series synthesizers.

    Only ``random_walk`` ships today; a history-backed strategy can be added
    with :meth:`register_strategy` without changing any caller.
    """

    _strategies: Dict[str, Type[BasePriceSynthesizer]] = {
        "random_walk": RandomWalkSynthesizer,
    }

    @classmethod
    def create_synthesizer(
        cls,
        strategy: str = "random_walk",
        **kwargs: Any,
    ) -> BasePriceSynthesizer:
        """
        Instantiate the synthesizer registered under ``strategy``.

        Args:
            strategy: Registry key (case-insensitive).
            **kwargs: Passed to the strategy's ``__init__``.

        Raises:
            ValueError: Unknown strategy, or parameters it does not accept.
        """
        strategy = strategy.lower()
        if strategy not in cls._strategies:
            available = ", ".join(cls._strategies.keys())
            raise ValueError(
                f"Unknown synthesis strategy: '{strategy}'. "
                f"Available strategies: {available}"
            )

        strategy_class = cls._strategies[strategy]
        logger.info("Creating %s synthesizer with params: %s", strategy, kwargs)
        try:
            return strategy_class(**kwargs)
        except TypeError as exc:
            raise ValueError(f"Invalid parameters for {strategy}: {exc}") from exc

    @classmethod
    def register_strategy(
        cls,
        name: str,
        strategy_class: Type[BasePriceSynthesizer],
    ) -> None:
        """
        Register an additional synthesis strategy.

        Raises:
            TypeError:  ``strategy_class`` is not a ``BasePriceSynthesizer``.
            ValueError: ``name`` is already registered.
        """
        if not issubclass(strategy_class, BasePriceSynthesizer):
            raise TypeError(
                f"{strategy_class.__name__} must inherit from BasePriceSynthesizer"
            )
        if name in cls._strategies:
            raise ValueError(f"Strategy '{name}' is already registered.")

        cls._strategies[name] = strategy_class
        logger.info("Registered synthesis strategy: %s", name)

    @classmethod
    def list_available_strategies(cls) -> List[str]:
        return list(cls._strategies.keys())
