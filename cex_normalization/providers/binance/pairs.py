"""
Binance Trading Pairs - Native pair codec and trading-type mapping.

Binance identifies pairs as a single uppercase string with no delimiter,
e.g. ``BTCUSDT``.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from cex_normalization.exceptions import InvalidPairFormat
from cex_normalization.models import (
    PAIR_DELIMITERS,
    CexExchange,
    NormalizedTradingPair,
    NormalizedTradingType,
)


logger = logging.getLogger(__name__)

EXCHANGE = CexExchange.BINANCE


@dataclass(frozen=True, order=True)
class BinanceTradingPair:
    """Native Binance pair. Always uppercase, never delimited."""
    value: str

    FORBIDDEN = PAIR_DELIMITERS

    @classmethod
    def is_valid(cls, s: str) -> bool:
        """True iff ``s`` contains none of the forbidden delimiters."""
        return not any(ch in s for ch in cls.FORBIDDEN)

    @classmethod
    def new_checked(cls, s: str) -> "BinanceTradingPair":
        """
        Decode a native pair string.

        Raises:
            InvalidPairFormat: If ``s`` contains a '-', '_', or '/'
        """
        if not cls.is_valid(s):
            raise InvalidPairFormat(
                f"INVALID Binance trading pair '{s}' contains a '-', '_', or '/'",
                raw_pair=s,
                exchange=EXCHANGE.value,
            )
        return cls(s.upper())

    @classmethod
    def from_normalized(cls, pair: NormalizedTradingPair) -> "BinanceTradingPair":
        """
        Encode a canonical pair. Strategies, first success wins:

        1. explicit base/quote, concatenated verbatim
        2. raw pair, if already valid
        3. raw pair split on its declared delimiter, parts uppercased
        4. raw pair with every delimiter stripped

        Raises:
            InvalidPairFormat: If every strategy fails
        """
        base_quote = pair.base_quote()
        if base_quote is not None:
            base, quote = base_quote
            return cls(f"{base}{quote}")

        raw = pair.pair
        if raw is None:
            raise InvalidPairFormat(
                f"INVALID Binance trading pair '{pair!r}'",
                raw_pair=pair,
                exchange=EXCHANGE.value,
            )

        if cls.is_valid(raw):
            return cls.new_checked(raw)

        if pair.delimiter is not None:
            parts = raw.split(pair.delimiter)
            assert len(parts) == 2 and all(parts), (
                f"pair '{raw}' must split into exactly two parts on '{pair.delimiter}'"
            )
            joined = f"{parts[0].upper()}{parts[1].upper()}"
            if cls.is_valid(joined):
                return cls(joined)
            logger.debug(f"[{EXCHANGE.value}] Split of '{raw}' left delimiters, stripping")

        stripped = raw
        for ch in PAIR_DELIMITERS:
            stripped = stripped.replace(ch, "")
        if cls.is_valid(stripped):
            return cls.new_checked(stripped)

        raise InvalidPairFormat(
            f"INVALID Binance trading pair '{raw}'",
            raw_pair=raw,
            exchange=EXCHANGE.value,
        )

    def normalize(self) -> NormalizedTradingPair:
        """Canonical form carrying only the raw pair."""
        return NormalizedTradingPair.from_pair(EXCHANGE, self.value)

    def normalize_with(self, base: str, quote: str) -> NormalizedTradingPair:
        """Canonical form with a known base/quote split."""
        return NormalizedTradingPair.from_base_quote(EXCHANGE, base, quote)

    def to_json(self) -> str:
        return self.value

    @classmethod
    def from_json(cls, value: str) -> "BinanceTradingPair":
        # Trusted exchange output, taken as is
        return cls(value)

    def __str__(self) -> str:
        return self.value


class BinanceTradingType(Enum):
    """Binance trading types, serialized uppercase."""
    SPOT = "SPOT"
    PERPETUAL = "PERPETUAL"
    MARGIN = "MARGIN"
    FUTURES = "FUTURES"
    OPTION = "OPTION"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, token: Optional[str]) -> "BinanceTradingType":
        """Case-insensitive lookup; unknown tokens map to OTHER."""
        return _TRADING_TYPE_ALIASES.get((token or "").lower(), cls.OTHER)

    def to_normalized(self) -> NormalizedTradingType:
        return _TO_NORMALIZED[self]


# linear/inverse settle differently but both fold into PERPETUAL
_TRADING_TYPE_ALIASES = {
    "spot": BinanceTradingType.SPOT,
    "perpetual": BinanceTradingType.PERPETUAL,
    "perp": BinanceTradingType.PERPETUAL,
    "swap": BinanceTradingType.PERPETUAL,
    "linear": BinanceTradingType.PERPETUAL,
    "inverse": BinanceTradingType.PERPETUAL,
    "futures": BinanceTradingType.FUTURES,
    "margin": BinanceTradingType.MARGIN,
    "option": BinanceTradingType.OPTION,
}

_TO_NORMALIZED = {
    BinanceTradingType.SPOT: NormalizedTradingType.SPOT,
    BinanceTradingType.PERPETUAL: NormalizedTradingType.PERPETUAL,
    BinanceTradingType.MARGIN: NormalizedTradingType.MARGIN,
    BinanceTradingType.FUTURES: NormalizedTradingType.FUTURES,
    BinanceTradingType.OPTION: NormalizedTradingType.OPTION,
    BinanceTradingType.OTHER: NormalizedTradingType.OTHER,
}


def parse_trading_type(token: Optional[str]) -> NormalizedTradingType:
    """Map a free-text trading-type token to its canonical type."""
    return BinanceTradingType.parse(token).to_normalized()
