"""
analytics/synthetic — Price-series synthesis strategies.

Public API
----------
    from analytics.synthetic import BasePriceSynthesizer, RandomWalkSynthesizer
    from analytics.synthetic import SynthesizerFactory
"""

from analytics.synthetic.base import (
    BasePriceSynthesizer,
    seed_from_material,
    seed_material_for,
)
from analytics.synthetic.factory import SynthesizerFactory
from analytics.synthetic.random_walk import RandomWalkSynthesizer

__all__ = [
    "BasePriceSynthesizer",
    "RandomWalkSynthesizer",
    "SynthesizerFactory",
    "seed_from_material",
    "seed_material_for",
]
