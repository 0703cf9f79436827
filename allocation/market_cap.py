"""
Market-cap weighted allocation with exponential smoothing.

Each asset's market cap is averaged over its history with weights that
decay exponentially with age, then the smoothed caps are normalized into
portfolio weights:

    M*(T) = SUM_i( M(T-i) * e^-(alpha*i) ) / SUM_i( e^-(alpha*i) )

where i = 0 is the newest observation.
"""

import math
from typing import Dict, Mapping, Sequence

import numpy as np
import pandas as pd

from .errors import DegenerateAllocation, EmptyMarketCapSeries

# As alpha decreases the average gets smoother
DEFAULT_SMOOTHING_FACTOR = 0.3


class MarketCapAllocator:
    """
    Allocates a portfolio across assets in proportion to smoothed market cap.

    Instances are immutable; build a new one for every rebalancing decision.
    """

    def __init__(self,
                 market_caps: Mapping[str, Sequence[float]],
                 alpha: float = DEFAULT_SMOOTHING_FACTOR):
        """
        Initialize the allocator.

        Args:
            market_caps: Mapping of symbol to market caps, oldest first. Series
                may differ in length.
            alpha: Smoothing factor, 0 < alpha < 1 (default: 0.3)

        Raises:
            ValueError: If alpha is out of range or a value is negative or not finite
            EmptyMarketCapSeries: If a series has no observations
        """
        alpha = float(alpha)
        if not 0.0 < alpha < 1.0:
            raise ValueError(f"alpha must be between 0 and 1 (exclusive), got {alpha}")

        caps = {}
        for symbol, series in market_caps.items():
            values = tuple(float(v) for v in series)
            if not values:
                raise EmptyMarketCapSeries(symbol)
            if any(not math.isfinite(v) or v < 0 for v in values):
                raise ValueError(f"Market caps for {symbol} must be finite and non-negative")
            caps[symbol] = values

        self._market_caps = caps
        self._alpha = alpha

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def market_caps(self) -> Dict[str, tuple]:
        return dict(self._market_caps)

    def _smooth_market_cap(self, series: tuple) -> float:
        # Reverse so index 0 is the newest observation
        values = np.asarray(series, dtype=float)[::-1]
        decay = np.exp(-self._alpha * np.arange(len(values)))
        # Normalized decay keeps the result within the range of the series
        return float(np.dot(values, decay / decay.sum()))

    def smoothed_market_caps(self) -> Dict[str, float]:
        """Return the exponentially smoothed market cap of every asset."""
        return {
            symbol: self._smooth_market_cap(series)
            for symbol, series in self._market_caps.items()
        }

    def balance_by_market_cap(self) -> Dict[str, float]:
        """
        Calculate the weight of each asset from its smoothed market cap.

        Returns:
            Mapping of symbol to weight in [0, 1]; weights sum to 1

        Raises:
            DegenerateAllocation: If the smoothed caps sum to zero
        """
        smoothed = self.smoothed_market_caps()
        largest = max(smoothed.values(), default=0.0)
        if largest <= 0:
            raise DegenerateAllocation(
                f"Total smoothed market cap is zero across {len(smoothed)} asset(s)"
            )

        # Scaled caps are <= 1, so the total stays finite
        scaled = {symbol: cap / largest for symbol, cap in smoothed.items()}
        total = math.fsum(scaled.values())
        return {symbol: cap / total for symbol, cap in scaled.items()}

    def allocation_frame(self) -> pd.DataFrame:
        """
        Summarize the allocation as a DataFrame sorted by weight.

        Returns:
            DataFrame indexed by symbol with periods, smoothed_cap and weight columns
        """
        weights = self.balance_by_market_cap()
        smoothed = self.smoothed_market_caps()
        frame = pd.DataFrame({
            'periods': pd.Series({s: len(v) for s, v in self._market_caps.items()}),
            'smoothed_cap': pd.Series(smoothed),
            'weight': pd.Series(weights),
        })
        frame.index.name = 'symbol'
        return frame.sort_values('weight', ascending=False)
