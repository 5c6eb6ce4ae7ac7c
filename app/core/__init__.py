"""
Core configuration and utilities for Smart Farming system.
"""

from app.core.deps import depends_advisor, depends_crops, depends_market, depends_pests

__all__ = ["depends_crops", "depends_pests", "depends_market", "depends_advisor"]
