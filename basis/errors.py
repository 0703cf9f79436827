"""
Exceptions raised by the cost basis ledger.
"""


class BasisError(Exception):
    """Base exception for all ledger errors."""

    def __init__(self, message: str, requested: float, available: float):
        self.requested = requested
        self.available = available
        super().__init__(message)


class InsufficientBasis(BasisError):
    """Raised when a transfer asks for more quantity than the ledger holds."""

    def __init__(self, requested: float, available: float):
        super().__init__(
            f"Cannot transfer {requested}: only {available} held in cost lots",
            requested,
            available,
        )


class InsufficientCostBasis(BasisError):
    """Raised when realized gains exceed the quantity ever acquired."""

    def __init__(self, requested: float, available: float):
        super().__init__(
            f"Realized quantity {requested} exceeds cost lot quantity {available}",
            requested,
            available,
        )
