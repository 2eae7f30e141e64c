"""
Binance Normalizer - Binance variant of the exchange normalizer interface.
"""

from typing import Sequence

from cex_normalization.base import BaseExchangeNormalizer
from cex_normalization.envelope import Document
from cex_normalization.models import (
    CexExchange,
    NormalizedCurrency,
    NormalizedTradingPair,
    NormalizedTradingType,
)
from cex_normalization.providers.binance.pairs import (
    BinanceTradingPair,
    parse_trading_type,
)
from cex_normalization.providers.binance.symbols import BinanceAllSymbols, BinanceSymbol


class BinanceNormalizer(BaseExchangeNormalizer):
    """
    Binance pairs and currency listings.

    Pairs:
    - Native form is BTCUSDT (uppercase, no '-', '_' or '/')

    Currencies:
    - Listing envelope is data.body.data (configurable)
    - One blockchain platform per record at most
    """

    @property
    def exchange(self) -> CexExchange:
        return CexExchange.BINANCE

    def is_valid_pair(self, native: str) -> bool:
        return BinanceTradingPair.is_valid(native)

    def decode_pair(self, native: str) -> BinanceTradingPair:
        return BinanceTradingPair.new_checked(native)

    def encode_pair(self, pair: NormalizedTradingPair) -> BinanceTradingPair:
        return BinanceTradingPair.from_normalized(pair)

    def parse_trading_type(self, token: str) -> NormalizedTradingType:
        return parse_trading_type(token)

    def parse_currencies(self, document: Document) -> BinanceAllSymbols:
        return BinanceAllSymbols.parse(document, self.config)

    def normalize_currency(self, record: BinanceSymbol) -> NormalizedCurrency:
        return record.normalize(self.config)

    def normalize_batch(self, batch: BinanceAllSymbols) -> list[NormalizedCurrency]:
        return batch.normalize(self.config)

    def equivalent(
        self,
        local_batch: BinanceAllSymbols,
        reference_batch: Sequence[NormalizedCurrency],
    ) -> bool:
        return local_batch.equivalent_to(reference_batch, self.config)
