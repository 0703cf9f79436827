"""
Utility functions for logging and reporting.
"""

import logging
import os
from typing import Dict, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import config
from .book import AccountBook

# Set up rich console
console = Console()


def setup_logging(log_file: Optional[str] = None, level: Optional[str] = None):
    """Set up logging configuration."""
    log_file = config.LOG_FILE if log_file is None else log_file
    level = config.LOG_LEVEL if level is None else level

    root = logging.getLogger()
    if root.handlers:
        # Already configured; only the level changes
        root.setLevel(getattr(logging, level.upper()))
        return logging.getLogger(__name__)

    handlers = [RichHandler(console=console, rich_tracebacks=True)]
    if log_file:
        # Create logs directory if it doesn't exist
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode='a'))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )

    return logging.getLogger(__name__)


def format_currency(amount: float, currency: str = "USD") -> str:
    """Format an amount as currency."""
    if currency == "USD":
        return f"${amount:,.2f}"
    else:
        return f"{amount} {currency}"


def format_percentage(weight: float) -> str:
    """Format a weight in [0, 1] as a percentage with two decimals."""
    return f"{weight * 100:.2f}%"


def allocation_table(weights: Dict[str, float]) -> Table:
    """Build a table of symbols and their target percentages, largest first."""
    table = Table(title="Asset Allocations")
    table.add_column("Symbol", style="cyan")
    table.add_column("Percentage", justify="right")

    for symbol, weight in sorted(weights.items(), key=lambda item: item[1], reverse=True):
        table.add_row(symbol, format_percentage(weight))

    return table


def print_asset_allocations(weights: Dict[str, float]):
    """Display target allocation percentages."""
    console.print(allocation_table(weights))


def book_table(book: AccountBook, currency: str = "USD") -> Table:
    """Build a table with cost basis and realized gains for every ledger."""
    table = Table(title="Cost Basis")
    table.add_column("Account", style="cyan")
    table.add_column("Asset", style="cyan")
    table.add_column("Held", justify="right")
    table.add_column("Realized", justify="right")
    table.add_column("Cost Basis", justify="right")
    table.add_column("Capital Gain", justify="right")

    for row in book.summary().itertuples(index=False):
        gain_style = "green" if row.capital_gain >= 0 else "red"
        table.add_row(
            row.account,
            row.asset,
            f"{row.quantity_held:.8f}",
            f"{row.quantity_realized:.8f}",
            format_currency(row.cost_basis, currency),
            f"[{gain_style}]{format_currency(row.capital_gain, currency)}[/{gain_style}]",
        )

    return table


def print_book_summary(book: AccountBook, currency: str = "USD"):
    """Display cost basis and realized gains for every ledger in the book."""
    console.print(book_table(book, currency))
