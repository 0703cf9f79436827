"""
Unit tests for index constituent selection.
"""

import logging

import pytest

from allocation import MarketCapAllocator, build_target_weights, select_index_constituents


class TestSelectIndexConstituents:
    """Test cases for picking index constituents."""

    def setup_method(self):
        """Set up test fixtures."""
        # Listings ordered by market cap rank, as a market data client returns them
        self.listings = [
            {"symbol": "BTC", "cmc_rank": 1},
            {"symbol": "ETH", "cmc_rank": 2},
            {"symbol": "USDT", "cmc_rank": 3},
            {"symbol": "xrp", "cmc_rank": 4},
            {"symbol": "SOL", "cmc_rank": 5},
        ]
        self.history = {
            "BTC": [900.0, 950.0, 1000.0],
            "ETH": [400.0, 410.0, 420.0],
            "USDT": [80.0, 80.0, 80.0],
            "XRP": [30.0, 35.0, 40.0],
            "SOL": [20.0, 25.0, 30.0],
        }

    def test_takes_top_ranked(self):
        """Test the index is filled in rank order."""
        result = select_index_constituents(self.listings, self.history, index_size=2)
        assert list(result) == ["BTC", "ETH"]

    def test_blacklist(self):
        """Test blacklisted symbols are skipped."""
        result = select_index_constituents(self.listings, self.history, index_size=3, blacklist=["usdt"])
        assert list(result) == ["BTC", "ETH", "XRP"]

    def test_tradable_filter(self):
        """Test only tradable symbols are kept."""
        result = select_index_constituents(self.listings, self.history, tradable={"ETH", "SOL"})
        assert list(result) == ["ETH", "SOL"]

    def test_missing_history_is_skipped(self, caplog):
        """Test symbols without history are logged and skipped."""
        del self.history["ETH"]
        self.history["USDT"] = []
        with caplog.at_level(logging.WARNING, logger="allocation.selector"):
            result = select_index_constituents(self.listings, self.history, index_size=3)
        assert list(result) == ["BTC", "XRP", "SOL"]
        assert "ETH" in caplog.text
        assert "USDT" in caplog.text

    def test_lookback_keeps_newest(self):
        """Test lookback trims each series to its newest values."""
        result = select_index_constituents(self.listings, self.history, index_size=1, lookback=2)
        assert result == {"BTC": [950.0, 1000.0]}

    def test_invalid_index_size(self):
        """Test index size must be positive."""
        with pytest.raises(ValueError):
            select_index_constituents(self.listings, self.history, index_size=0)


class TestBuildTargetWeights:
    """Test cases for building target weights."""

    def setup_method(self):
        """Set up test fixtures."""
        self.listings = [{"symbol": "BTC"}, {"symbol": "ETH"}, {"symbol": "SOL"}]
        self.history = {
            "BTC": [100.0, 200.0, 300.0],
            "ETH": [50.0, 50.0, 50.0],
            "SOL": [10.0, 20.0],
        }

    def test_weights_sum_to_one(self):
        """Test weights without a cash buffer."""
        weights = build_target_weights(self.listings, self.history, alpha=0.3)
        assert sum(weights.values()) == pytest.approx(1.0)
        assert weights == pytest.approx(
            MarketCapAllocator(self.history, alpha=0.3).balance_by_market_cap()
        )

    def test_cash_buffer(self):
        """Test weights sum to 1 - cash_buffer."""
        weights = build_target_weights(self.listings, self.history, cash_buffer=0.05)
        assert sum(weights.values()) == pytest.approx(0.95)

    def test_no_constituents(self):
        """Test an empty result when nothing qualifies."""
        assert build_target_weights(self.listings, {}) == {}

    def test_invalid_cash_buffer(self):
        """Test cash buffer must be below one."""
        with pytest.raises(ValueError):
            build_target_weights(self.listings, self.history, cash_buffer=1.0)
