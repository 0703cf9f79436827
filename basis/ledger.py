"""
FIFO tax-lot ledger.

Acquisitions are appended to the back of a lot queue and consumed from the
front, so the oldest cost is always matched first. Disposals are recorded
separately and only matched against the lots when the cost basis is
calculated.
"""

import logging
import math
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Tuple

import pandas as pd

from .errors import InsufficientBasis, InsufficientCostBasis

logger = logging.getLogger(__name__)

# Quantities closer than this are treated as equal
QUANTITY_EPSILON = 1e-12


@dataclass(frozen=True)
class CostLot:
    """An unconsumed acquisition of some quantity at a per-unit value."""
    quantity: float
    unit_value: float

    @property
    def value(self) -> float:
        return self.quantity * self.unit_value


@dataclass(frozen=True)
class GainEvent:
    """A recorded disposal of some quantity at a per-unit value."""
    quantity: float
    unit_value: float

    @property
    def value(self) -> float:
        return self.quantity * self.unit_value


def _require_positive(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be a positive finite number, got {value}")
    return value


def _require_finite(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")
    return value


class CostBasisLedger:
    """
    Per-account FIFO ledger of cost lots and realized gains.

    The ledger owns two ordered sequences: cost lots (oldest first) and
    gain events (insertion order). Lots only leave the ledger through
    transfer_basis; gains are never removed.
    """

    def __init__(self):
        self._costs: Deque[CostLot] = deque()
        self._gains: List[GainEvent] = []

    @property
    def lots(self) -> Tuple[CostLot, ...]:
        return tuple(self._costs)

    @property
    def gains(self) -> Tuple[GainEvent, ...]:
        return tuple(self._gains)

    @property
    def quantity_held(self) -> float:
        """Total quantity across all cost lots."""
        return sum(lot.quantity for lot in self._costs)

    @property
    def quantity_realized(self) -> float:
        """Total quantity across all gain events."""
        return sum(gain.quantity for gain in self._gains)

    @property
    def total_proceeds(self) -> float:
        return sum(gain.value for gain in self._gains)

    def add_cost(self, quantity: float, unit_value: float) -> 'CostBasisLedger':
        """
        Append an acquisition to the back of the lot queue.

        Args:
            quantity: Quantity acquired (must be > 0)
            unit_value: Price paid per unit (must be >= 0)

        Returns:
            The ledger itself, so calls can be chained
        """
        quantity = _require_positive("quantity", quantity)
        unit_value = _require_finite("unit_value", unit_value)
        if unit_value < 0:
            raise ValueError(f"unit_value must be non-negative, got {unit_value}")

        self._costs.append(CostLot(quantity, unit_value))
        return self

    def realize_gain(self, quantity: float, unit_value: float) -> 'CostBasisLedger':
        """
        Record a disposal. The lot queue is left untouched.

        Args:
            quantity: Quantity disposed of (must be > 0)
            unit_value: Proceeds per unit

        Returns:
            The ledger itself, so calls can be chained
        """
        quantity = _require_positive("quantity", quantity)
        unit_value = _require_finite("unit_value", unit_value)

        self._gains.append(GainEvent(quantity, unit_value))
        return self

    def transfer_basis(self, quantity: float) -> List[CostLot]:
        """
        Remove `quantity` units of cost from the front of the lot queue.

        A lot larger than the outstanding remainder is split: the consumed
        fragment is returned and the rest goes back to the front of the
        queue. Nothing is removed when the ledger holds too little.

        Args:
            quantity: Quantity to transfer out (must be > 0)

        Returns:
            Transferred fragments, oldest first

        Raises:
            InsufficientBasis: If the lots hold less than `quantity`
        """
        quantity = _require_positive("quantity", quantity)
        available = self.quantity_held
        if available < quantity - QUANTITY_EPSILON:
            raise InsufficientBasis(quantity, available)

        remaining = quantity
        fragments = []
        while remaining > QUANTITY_EPSILON and self._costs:
            oldest = self._costs.popleft()
            if oldest.quantity - remaining > QUANTITY_EPSILON:
                self._costs.appendleft(CostLot(oldest.quantity - remaining, oldest.unit_value))
                fragments.append(CostLot(remaining, oldest.unit_value))
                remaining = 0.0
            else:
                fragments.append(oldest)
                remaining -= oldest.quantity

        logger.debug(f"Transferred {quantity} of basis in {len(fragments)} fragment(s)")
        return fragments

    def transfer_to(self, destination: 'CostBasisLedger', quantity: float) -> List[CostLot]:
        """Move `quantity` of cost basis into another ledger, preserving lot order."""
        fragments = self.transfer_basis(quantity)
        for fragment in fragments:
            destination.add_cost(fragment.quantity, fragment.unit_value)
        return fragments

    def calc_cost_basis(self) -> float:
        """
        Calculate the cost basis of every realized gain.

        All gains are matched against the lots in one FIFO pass: a cursor
        into the lot queue carries over from one gain to the next, so each
        unit of cost is matched at most once. Unrealized lots are not
        included. The lot queue is not modified.

        Returns:
            Total cost of the realized quantity

        Raises:
            InsufficientCostBasis: If realized quantity exceeds the lots held
        """
        cost_basis = 0.0
        lot_index = 0
        consumed_in_lot = 0.0

        for gain in self._gains:
            remaining = gain.quantity
            while remaining > QUANTITY_EPSILON:
                if lot_index >= len(self._costs):
                    raise InsufficientCostBasis(self.quantity_realized, self.quantity_held)

                lot = self._costs[lot_index]
                available = lot.quantity - consumed_in_lot
                if available - remaining > QUANTITY_EPSILON:
                    cost_basis += remaining * lot.unit_value
                    consumed_in_lot += remaining
                    remaining = 0.0
                else:
                    cost_basis += available * lot.unit_value
                    remaining -= available
                    lot_index += 1
                    consumed_in_lot = 0.0

        return cost_basis

    def calc_capital_gain(self) -> float:
        """
        Calculate realized capital gains (proceeds minus matched cost).

        Raises:
            InsufficientCostBasis: If realized quantity exceeds the lots held
        """
        cost_basis = self.calc_cost_basis()
        return self.total_proceeds - cost_basis

    def lots_frame(self) -> pd.DataFrame:
        """Return the lot queue as a DataFrame, oldest lot first."""
        return pd.DataFrame(
            [(lot.quantity, lot.unit_value, lot.value) for lot in self._costs],
            columns=['quantity', 'unit_value', 'value'],
        )

    def __repr__(self) -> str:
        return (
            f"CostBasisLedger(lots={len(self._costs)}, held={self.quantity_held}, "
            f"gains={len(self._gains)})"
        )
