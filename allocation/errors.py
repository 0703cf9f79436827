"""
Exceptions raised while computing allocations.
"""


class AllocationError(Exception):
    """Base exception for allocation errors."""
    pass


class DegenerateAllocation(AllocationError):
    """Raised when the smoothed market caps sum to zero."""
    pass


class EmptyMarketCapSeries(AllocationError):
    """Raised when an asset has no market-cap observations."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"No market cap history for {symbol}")
