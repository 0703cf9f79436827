"""
FIFO cost basis accounting.

This module tracks acquisitions as cost lots and disposals as gain events
for a single account, and computes:
- Realized cost basis matched oldest-first
- Realized capital gains
- Partial-lot transfers between ledgers
"""

from .errors import BasisError, InsufficientBasis, InsufficientCostBasis
from .ledger import CostBasisLedger, CostLot, GainEvent

__all__ = [
    'CostBasisLedger',
    'CostLot',
    'GainEvent',
    'BasisError',
    'InsufficientBasis',
    'InsufficientCostBasis',
]
