"""
schemas/portfolio.py
─────────────────────
Pydantic schemas for the portfolio analysis endpoint:

  POST /api/v1/portfolio/analyze
      → ``AnalyzeRequest`` / ``AnalyzeResponse``

Allocations arrive as **percentages** (0–100), the unit the dashboard
works in, and are converted to fractions before they reach the engine.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from analytics.portfolio.models import PortfolioAnalytics


class AssetAllocationIn(BaseModel):
    """One portfolio line as sent by the dashboard."""

    id: str = Field(..., description="Asset id, e.g. 'bitcoin' or 'solana'.")
    allocation: float = Field(
        ...,
        ge=0.0,
        le=100.0,
        description="Share of the portfolio in percent (0–100).",
    )

    @field_validator("id")
    @classmethod
    def normalise_id(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("id must not be empty")
        return v


class AnalyzeRequest(BaseModel):
    """Request body for the portfolio analysis endpoint."""

    assets: List[AssetAllocationIn] = Field(
        ...,
        min_length=2,
        max_length=10,
        description="2–10 assets whose allocations add up to 100 %.",
    )
    days: Optional[int] = Field(
        default=None,
        ge=1,
        description=(
            "Lookback window in days (one return per day).  Defaults to "
            "DEFAULT_WINDOW_DAYS and is capped at MAX_WINDOW_DAYS."
        ),
    )


class AnalyzeResponse(BaseModel):
    """Full response from POST /api/v1/portfolio/analyze."""

    asset_ids: List[str]
    window_days: int
    as_of: str                    # ISO date of the last point in every series
    analytics: PortfolioAnalytics
