"""
analytics — Business logic for portfolio risk analytics.

Sub-packages
------------
    analytics.synthetic   Price-series synthesizers (random walk today).
    analytics.portfolio   Returns, risk metrics, benchmarks, contributions
                          and the ``analyze`` engine.
    analytics.pricing     ``asset_id -> Quote`` resolver seam.
"""
