"""
Multi-account cost basis book.

Keeps one FIFO ledger per (account, asset) pair so purchases, disposals
and transfers between accounts can be tracked together.
"""

import logging
from typing import Dict, Tuple

import pandas as pd

from basis import CostBasisLedger

logger = logging.getLogger(__name__)


class AccountBook:
    """
    Collection of cost basis ledgers keyed by account and asset.

    Ledgers are created on first use. Transfers move cost lots from one
    account's ledger to another's, oldest lots first.
    """

    def __init__(self):
        self._ledgers: Dict[Tuple[str, str], CostBasisLedger] = {}

    def ledger(self, account: str, asset: str) -> CostBasisLedger:
        """Return the ledger for an account and asset, creating it if needed."""
        key = (account, asset.upper())
        if key not in self._ledgers:
            self._ledgers[key] = CostBasisLedger()
        return self._ledgers[key]

    def has_ledger(self, account: str, asset: str) -> bool:
        return (account, asset.upper()) in self._ledgers

    def _existing_ledger(self, account: str, asset: str) -> CostBasisLedger:
        key = (account, asset.upper())
        if key not in self._ledgers:
            raise KeyError(f"No {asset.upper()} ledger for account {account}")
        return self._ledgers[key]

    def record_purchase(self, account: str, asset: str, quantity: float, unit_price: float) -> CostBasisLedger:
        return self.ledger(account, asset).add_cost(quantity, unit_price)

    def record_disposal(self, account: str, asset: str, quantity: float, unit_price: float) -> CostBasisLedger:
        return self.ledger(account, asset).realize_gain(quantity, unit_price)

    def transfer(self, asset: str, quantity: float, source: str, destination: str) -> list:
        """
        Move cost basis for an asset between accounts.

        Args:
            asset: Asset symbol
            quantity: Quantity to transfer
            source: Account sending the asset
            destination: Account receiving the asset

        Returns:
            List of CostLot fragments added to the destination

        Raises:
            KeyError: If the source account has no ledger for the asset
            InsufficientBasis: If the source holds less than quantity
        """
        if source == destination:
            raise ValueError(f"Cannot transfer {asset} from {source} to itself")
        source_ledger = self._existing_ledger(source, asset)
        fragments = source_ledger.transfer_to(self.ledger(destination, asset), quantity)
        logger.info(f"Transferred {quantity} {asset.upper()} from {source} to {destination}")
        return fragments

    def cost_basis(self, account: str, asset: str) -> float:
        return self._existing_ledger(account, asset).calc_cost_basis()

    def capital_gain(self, account: str, asset: str) -> float:
        return self._existing_ledger(account, asset).calc_capital_gain()

    def total_capital_gain(self) -> float:
        """Sum of realized capital gains across every ledger."""
        return sum(ledger.calc_capital_gain() for ledger in self._ledgers.values())

    def summary(self) -> pd.DataFrame:
        """
        Summarize every ledger in the book.

        Returns:
            DataFrame with account, asset, quantity_held, quantity_realized,
            cost_basis and capital_gain columns
        """
        rows = []
        for (account, asset), ledger in sorted(self._ledgers.items()):
            cost_basis = ledger.calc_cost_basis()
            rows.append({
                'account': account,
                'asset': asset,
                'quantity_held': ledger.quantity_held,
                'quantity_realized': ledger.quantity_realized,
                'cost_basis': cost_basis,
                'capital_gain': ledger.total_proceeds - cost_basis,
            })

        return pd.DataFrame(rows, columns=[
            'account', 'asset', 'quantity_held', 'quantity_realized', 'cost_basis', 'capital_gain',
        ])

    def __len__(self) -> int:
        return len(self._ledgers)
