"""
Market-cap weighted index allocation.

This module turns historical market-cap series into target portfolio
weights:
- Exponentially smoothed market caps
- Normalized allocation weights
- Index constituent selection from ranked listings
"""

from .errors import AllocationError, DegenerateAllocation, EmptyMarketCapSeries
from .market_cap import DEFAULT_SMOOTHING_FACTOR, MarketCapAllocator
from .selector import build_target_weights, select_index_constituents

__all__ = [
    'MarketCapAllocator',
    'DEFAULT_SMOOTHING_FACTOR',
    'select_index_constituents',
    'build_target_weights',
    'AllocationError',
    'DegenerateAllocation',
    'EmptyMarketCapSeries',
]
