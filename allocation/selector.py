"""
Index constituent selection for market-cap rebalancing.

This module picks the assets that make up the index from ranked market
listings and historical market caps supplied by a market-data client,
then builds target weights with the market-cap allocator.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .market_cap import DEFAULT_SMOOTHING_FACTOR, MarketCapAllocator

logger = logging.getLogger(__name__)


def select_index_constituents(
    listings: Iterable[dict],
    historical_caps: Mapping[str, Sequence[float]],
    tradable: Optional[Iterable[str]] = None,
    index_size: int = 20,
    lookback: Optional[int] = None,
    blacklist: Iterable[str] = (),
) -> Dict[str, List[float]]:
    """
    Pick the top ranked assets that can be traded and have history.

    Args:
        listings: Listing records with a "symbol" key, ordered by market cap rank
        historical_caps: Mapping of symbol to market caps, oldest first
        tradable: Symbols that can be traded; None means every symbol
        index_size: Maximum number of constituents
        lookback: Keep only this many of the newest observations per symbol
        blacklist: Symbols to exclude

    Returns:
        Mapping of symbol to its market cap series, in rank order
    """
    if index_size <= 0:
        raise ValueError(f"index_size must be positive, got {index_size}")
    if lookback is not None and lookback <= 0:
        raise ValueError(f"lookback must be positive, got {lookback}")

    tradable_symbols = None if tradable is None else {s.upper() for s in tradable}
    excluded = {s.upper() for s in blacklist}
    history = {s.upper(): caps for s, caps in historical_caps.items()}

    constituents = {}
    for listing in listings:
        if len(constituents) >= index_size:
            break

        symbol = listing["symbol"].upper()
        if symbol in excluded or symbol in constituents:
            continue
        if tradable_symbols is not None and symbol not in tradable_symbols:
            continue

        series = history.get(symbol)
        caps = [] if series is None else list(series)
        if not caps:
            logger.warning(f"Could not find market cap information for {symbol}")
            continue

        if lookback is not None:
            caps = caps[-lookback:]
        constituents[symbol] = caps

    logger.debug(f"Selected {len(constituents)} index constituents")
    return constituents


def build_target_weights(
    listings: Iterable[dict],
    historical_caps: Mapping[str, Sequence[float]],
    tradable: Optional[Iterable[str]] = None,
    index_size: int = 20,
    lookback: Optional[int] = None,
    blacklist: Iterable[str] = (),
    alpha: float = DEFAULT_SMOOTHING_FACTOR,
    cash_buffer: float = 0.0,
) -> Dict[str, float]:
    """
    Build target portfolio weights for a market-cap weighted index.

    Return {symbol: weight} summing to 1-cash_buffer.

    Args:
        listings: Listing records with a "symbol" key, ordered by market cap rank
        historical_caps: Mapping of symbol to market caps, oldest first
        tradable: Symbols that can be traded; None means every symbol
        index_size: Maximum number of constituents
        lookback: Keep only this many of the newest observations per symbol
        blacklist: Symbols to exclude
        alpha: Smoothing factor for the market cap average
        cash_buffer: Fraction to keep as cash (e.g., 0.05 for 5%)

    Returns:
        Dictionary mapping symbols to their target weights; empty if no
        constituent qualifies
    """
    if not 0.0 <= cash_buffer < 1.0:
        raise ValueError(f"cash_buffer must be in [0, 1), got {cash_buffer}")

    constituents = select_index_constituents(
        listings,
        historical_caps,
        tradable=tradable,
        index_size=index_size,
        lookback=lookback,
        blacklist=blacklist,
    )
    if not constituents:
        logger.warning("No index constituents qualified, no target weights built")
        return {}

    weights = MarketCapAllocator(constituents, alpha=alpha).balance_by_market_cap()

    target_allocation = 1.0 - cash_buffer
    return {symbol: weight * target_allocation for symbol, weight in weights.items()}
