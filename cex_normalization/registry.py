"""
Normalizer Registry - Exchange-tag dispatch for normalizers.

Provides:
- Normalizer registration and discovery
- Pair and currency conversion selected by exchange tag
- No downstream dependency on specific exchanges
"""

import logging
from typing import Any, Optional, Sequence, Union

from cex_normalization.base import BaseExchangeNormalizer, LinkResolver
from cex_normalization.config import NormalizationConfig
from cex_normalization.envelope import Document
from cex_normalization.exceptions import UnsupportedExchange
from cex_normalization.models import (
    CexExchange,
    NormalizedCurrency,
    NormalizedTradingPair,
    NormalizedTradingType,
)


logger = logging.getLogger(__name__)

ExchangeTag = Union[CexExchange, str]


class NormalizerRegistry:
    """
    Central registry of exchange normalizers.

    Usage:
        registry = NormalizerRegistry()
        registry.register(BinanceNormalizer())

        native = registry.encode_pair("binance", pair)
        currencies = registry.normalize_currencies(CexExchange.BINANCE, document)
    """

    def __init__(self) -> None:
        self._normalizers: dict[CexExchange, BaseExchangeNormalizer] = {}

    def register(self, normalizer: BaseExchangeNormalizer) -> None:
        """Register a normalizer under its exchange tag."""
        exchange = normalizer.exchange

        if exchange in self._normalizers:
            logger.warning(f"Normalizer for '{exchange.value}' already registered, replacing")

        self._normalizers[exchange] = normalizer
        logger.info(f"Registered normalizer for '{exchange.value}'")

    def unregister(self, exchange: ExchangeTag) -> Optional[BaseExchangeNormalizer]:
        """Unregister a normalizer."""
        tag = self._resolve_tag(exchange)
        normalizer = self._normalizers.pop(tag, None)
        if normalizer is not None:
            logger.info(f"Unregistered normalizer for '{tag.value}'")
        return normalizer

    def get(self, exchange: ExchangeTag) -> BaseExchangeNormalizer:
        """
        Get the normalizer for an exchange.

        Raises:
            UnsupportedExchange: If no normalizer handles the tag
        """
        tag = self._resolve_tag(exchange)
        normalizer = self._normalizers.get(tag)
        if normalizer is None:
            raise UnsupportedExchange(tag.value, registered=self.list_exchanges())
        return normalizer

    def list_exchanges(self) -> list[str]:
        """List registered exchange tags."""
        return [exchange.value for exchange in self._normalizers]

    def __contains__(self, exchange: object) -> bool:
        try:
            return self._resolve_tag(exchange) in self._normalizers
        except UnsupportedExchange:
            return False

    def _resolve_tag(self, exchange: Any) -> CexExchange:
        try:
            return CexExchange.parse(exchange)
        except ValueError:
            raise UnsupportedExchange(str(exchange), registered=self.list_exchanges()) from None

    def decode_pair(self, exchange: ExchangeTag, native: str) -> Any:
        """Decode a native pair string for ``exchange``."""
        return self.get(exchange).decode_pair(native)

    def encode_pair(self, exchange: ExchangeTag, pair: NormalizedTradingPair) -> Any:
        """Encode a canonical pair (from any exchange) into ``exchange``'s native form."""
        return self.get(exchange).encode_pair(pair)

    def parse_trading_type(self, exchange: ExchangeTag, token: str) -> NormalizedTradingType:
        return self.get(exchange).parse_trading_type(token)

    def normalize_currencies(
        self,
        exchange: ExchangeTag,
        document: Document,
        resolve_links: Optional[LinkResolver] = None,
    ) -> list[NormalizedCurrency]:
        """Decode and normalize a currency listing for ``exchange``."""
        return self.get(exchange).normalize_currencies(document, resolve_links)

    def equivalent(
        self,
        exchange: ExchangeTag,
        local_batch: Any,
        reference_batch: Sequence[NormalizedCurrency],
    ) -> bool:
        return self.get(exchange).equivalent(local_batch, reference_batch)

    def __len__(self) -> int:
        return len(self._normalizers)


# Singleton instance for convenience
_default_registry: Optional[NormalizerRegistry] = None


def get_default_registry() -> NormalizerRegistry:
    """Get or create the default registry, populated with the standard normalizers."""
    global _default_registry
    if _default_registry is None:
        _default_registry = setup_default_normalizers(NormalizerRegistry())
    return _default_registry


def setup_default_normalizers(
    registry: NormalizerRegistry,
    config: Optional[NormalizationConfig] = None,
) -> NormalizerRegistry:
    """Register every built-in normalizer on ``registry``."""
    from cex_normalization.providers.binance import BinanceNormalizer

    registry.register(BinanceNormalizer(config))
    return registry
