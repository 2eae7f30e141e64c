"""
Binance provider - Pair codec, trading types and currency listings.
"""

from cex_normalization.providers.binance.normalizer import BinanceNormalizer
from cex_normalization.providers.binance.pairs import (
    BinanceTradingPair,
    BinanceTradingType,
    parse_trading_type,
)
from cex_normalization.providers.binance.symbols import (
    BinanceAllSymbols,
    BinanceSymbol,
    BinanceSymbolPlatform,
    BinanceSymbolQuote,
    BinanceSymbolQuoteUSD,
)


__all__ = [
    "BinanceNormalizer",
    "BinanceTradingPair",
    "BinanceTradingType",
    "parse_trading_type",
    "BinanceAllSymbols",
    "BinanceSymbol",
    "BinanceSymbolPlatform",
    "BinanceSymbolQuote",
    "BinanceSymbolQuoteUSD",
]
