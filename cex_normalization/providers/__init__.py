"""
Providers package - Exchange normalizer implementations.
"""

from cex_normalization.providers.binance import BinanceNormalizer


__all__ = [
    "BinanceNormalizer",
]
