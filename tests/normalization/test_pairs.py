"""
Tests for the Binance trading-pair codec.

============================================================
PURPOSE
============================================================
1. Validity rules for native pair strings
2. Decoding native strings
3. Encoding canonical pairs through every fallback strategy
4. Trading-type mapping

============================================================
"""

import pytest

from cex_normalization.exceptions import InvalidPairFormat
from cex_normalization.models import (
    CexExchange,
    NormalizedTradingPair,
    NormalizedTradingType,
)
from cex_normalization.providers.binance.pairs import (
    BinanceTradingPair,
    BinanceTradingType,
    parse_trading_type,
)


# ============================================================
# VALIDITY RULES
# ============================================================

class TestIsValid:
    """Charset rules for native pairs."""

    @pytest.mark.parametrize("raw", ["BTCUSDT", "btcusdt", "1000SHIBUSDT", ""])
    def test_accepts_undelimited(self, raw):
        assert BinanceTradingPair.is_valid(raw)

    @pytest.mark.parametrize("raw", ["BTC-USDT", "BTC_USDT", "BTC/USDT", "BTC-USD_T"])
    def test_rejects_delimiters(self, raw):
        assert not BinanceTradingPair.is_valid(raw)


# ============================================================
# DECODE
# ============================================================

class TestDecode:
    """Native string to BinanceTradingPair."""

    def test_uppercases(self):
        assert BinanceTradingPair.new_checked("ethbtc") == BinanceTradingPair("ETHBTC")

    def test_rejects_dash(self):
        with pytest.raises(InvalidPairFormat) as exc_info:
            BinanceTradingPair.new_checked("BTC-USDT")

        assert exc_info.value.raw_pair == "BTC-USDT"
        assert exc_info.value.exchange == "binance"

    @pytest.mark.parametrize("raw", ["BTCUSDT", "ethbtc", "SolUsdc"])
    def test_decode_is_idempotent(self, raw):
        once = BinanceTradingPair.new_checked(raw)
        twice = BinanceTradingPair.new_checked(str(once))

        assert once == twice

    @pytest.mark.parametrize("raw", ["BTCUSDT", "ethbtc"])
    def test_encode_raw_matches_decode(self, raw):
        pair = NormalizedTradingPair.from_pair(CexExchange.BINANCE, raw)

        assert BinanceTradingPair.new_checked(str(BinanceTradingPair.from_normalized(pair))) == \
            BinanceTradingPair.new_checked(raw)


# ============================================================
# ENCODE
# ============================================================

class TestEncode:
    """Canonical pair to BinanceTradingPair."""

    def test_base_quote(self):
        pair = NormalizedTradingPair.from_base_quote(CexExchange.BINANCE, "BTC", "USDT")

        assert BinanceTradingPair.from_normalized(pair) == BinanceTradingPair("BTCUSDT")

    def test_base_quote_is_verbatim(self):
        pair = NormalizedTradingPair.from_base_quote(CexExchange.OKEX, "btc", "usdt")

        assert BinanceTradingPair.from_normalized(pair).value == "btcusdt"

    def test_valid_raw_pair(self):
        pair = NormalizedTradingPair.from_pair(CexExchange.BINANCE, "ethusdt")

        assert BinanceTradingPair.from_normalized(pair) == BinanceTradingPair("ETHUSDT")

    def test_valid_raw_pair_wins_over_delimiter(self):
        pair = NormalizedTradingPair.from_pair(CexExchange.BINANCE, "BTCUSDT", delimiter="-")

        assert BinanceTradingPair.from_normalized(pair) == BinanceTradingPair("BTCUSDT")

    def test_declared_delimiter(self):
        pair = NormalizedTradingPair.from_pair(CexExchange.COINBASE, "BTC-USDT", delimiter="-")

        assert BinanceTradingPair.from_normalized(pair) == BinanceTradingPair("BTCUSDT")

    def test_declared_delimiter_uppercases_parts(self):
        pair = NormalizedTradingPair.from_pair(CexExchange.KUCOIN, "eth/btc", delimiter="/")

        assert BinanceTradingPair.from_normalized(pair) == BinanceTradingPair("ETHBTC")

    def test_strip_fallback_without_delimiter(self):
        pair = NormalizedTradingPair.from_pair(CexExchange.BYBIT, "BTC_USDT")

        assert BinanceTradingPair.from_normalized(pair) == BinanceTradingPair("BTCUSDT")

    def test_strip_fallback_after_split_leaves_delimiters(self):
        pair = NormalizedTradingPair.from_pair(CexExchange.OKEX, "BTC-USDT_SWAP", delimiter="-")

        assert BinanceTradingPair.from_normalized(pair) == BinanceTradingPair("BTCUSDTSWAP")

    def test_delimiter_contract_violation(self):
        pair = NormalizedTradingPair.from_pair(CexExchange.OKEX, "BTC-USDT-SWAP", delimiter="-")

        with pytest.raises(AssertionError):
            BinanceTradingPair.from_normalized(pair)


# ============================================================
# CANONICAL CONVERSION
# ============================================================

class TestNormalize:
    """BinanceTradingPair back to canonical form."""

    def test_normalize_raw(self):
        normalized = BinanceTradingPair("BTCUSDT").normalize()

        assert normalized.exchange == CexExchange.BINANCE
        assert normalized.pair == "BTCUSDT"
        assert normalized.base_quote() is None

    def test_normalize_with_base_quote(self):
        normalized = BinanceTradingPair("BTCUSDT").normalize_with("BTC", "USDT")

        assert normalized.base_quote() == ("BTC", "USDT")
        assert normalized.pair is None

    def test_json_is_bare_string(self):
        pair = BinanceTradingPair("BTCUSDT")

        assert pair.to_json() == "BTCUSDT"
        assert BinanceTradingPair.from_json("BTCUSDT") == pair


# ============================================================
# TRADING TYPES
# ============================================================

class TestTradingType:
    """Trading-type token mapping."""

    @pytest.mark.parametrize("token", ["SWAP", "linear", "perp", "Perpetual", "INVERSE"])
    def test_perpetual_aliases(self, token):
        assert parse_trading_type(token) == NormalizedTradingType.PERPETUAL

    @pytest.mark.parametrize("token,expected", [
        ("spot", NormalizedTradingType.SPOT),
        ("MARGIN", NormalizedTradingType.MARGIN),
        ("Futures", NormalizedTradingType.FUTURES),
        ("option", NormalizedTradingType.OPTION),
    ])
    def test_direct_tokens(self, token, expected):
        assert parse_trading_type(token) == expected

    @pytest.mark.parametrize("token", ["weird-token", "", None, "options", " spot ", "SWAP\n"])
    def test_unknown_is_other(self, token):
        assert parse_trading_type(token) == NormalizedTradingType.OTHER

    def test_binance_type_serializes_uppercase(self):
        assert BinanceTradingType.parse("swap").value == "PERPETUAL"
