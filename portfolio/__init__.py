"""
Market-Cap Index Portfolio Tools

Cost basis tracking across accounts and market-cap weighted target
allocations for a cryptocurrency index portfolio.
"""

from .book import AccountBook
from .config import load_yaml_config, resolve_allocation_params, validate_config
from .utils import (
    format_currency,
    format_percentage,
    print_asset_allocations,
    print_book_summary,
    setup_logging,
)

__version__ = "1.0.0"

# Expose main functions for external use
__all__ = [
    "AccountBook",
    "load_yaml_config",
    "resolve_allocation_params",
    "validate_config",
    "format_currency",
    "format_percentage",
    "print_asset_allocations",
    "print_book_summary",
    "setup_logging",
]
