"""
Pydantic schemas for request/response serialization.

Separate from the analytics value objects and routes (HTTP layer).
"""

from schemas.portfolio import AnalyzeRequest, AnalyzeResponse, AssetAllocationIn

__all__ = [
    "AnalyzeRequest",
    "AnalyzeResponse",
    "AssetAllocationIn",
]
