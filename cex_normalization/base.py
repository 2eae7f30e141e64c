"""
Base Exchange Normalizer - Shared interface for all exchange variants.

Every supported exchange implements this interface so callers can convert
pairs and currencies through the registry using only an exchange tag.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Sequence

from cex_normalization.config import NormalizationConfig, get_config
from cex_normalization.envelope import Document
from cex_normalization.models import (
    CexExchange,
    NormalizedCurrency,
    NormalizedTradingPair,
    NormalizedTradingType,
)


logger = logging.getLogger(__name__)

LinkResolver = Callable[[list[NormalizedCurrency]], list[NormalizedCurrency]]


class BaseExchangeNormalizer(ABC):
    """
    Abstract base class for exchange normalizers.

    Each variant must:
    1. Implement is_valid_pair() / decode_pair() / encode_pair()
    2. Implement parse_trading_type()
    3. Implement parse_currencies(), normalize_currency() and normalize_batch()
    4. Implement equivalent()
    """

    def __init__(self, config: Optional[NormalizationConfig] = None) -> None:
        self._config = config

    @property
    def config(self) -> NormalizationConfig:
        return self._config or get_config()

    @property
    @abstractmethod
    def exchange(self) -> CexExchange:
        """Exchange tag this normalizer handles."""
        pass

    @abstractmethod
    def is_valid_pair(self, native: str) -> bool:
        """Check a native pair string against the exchange charset."""
        pass

    @abstractmethod
    def decode_pair(self, native: str) -> Any:
        """
        Parse a native pair string.

        Raises:
            InvalidPairFormat: If the string violates the charset
        """
        pass

    @abstractmethod
    def encode_pair(self, pair: NormalizedTradingPair) -> Any:
        """
        Convert a canonical pair into the exchange's native form.

        Raises:
            InvalidPairFormat: If no conversion strategy applies
        """
        pass

    @abstractmethod
    def parse_trading_type(self, token: str) -> NormalizedTradingType:
        """Map a native trading-type token. Never fails."""
        pass

    @abstractmethod
    def parse_currencies(self, document: Document) -> Any:
        """
        Decode a currency listing response into typed records.

        Raises:
            MissingEnvelopeField / SchemaMismatch: On envelope shape errors
            RecordDecodeError: If any record fails to decode
        """
        pass

    @abstractmethod
    def normalize_currency(self, record: Any) -> NormalizedCurrency:
        """Convert one native record into a canonical currency."""
        pass

    @abstractmethod
    def normalize_batch(self, batch: Any) -> list[NormalizedCurrency]:
        """Normalize every record of a decoded batch, in order."""
        pass

    @abstractmethod
    def equivalent(
        self,
        local_batch: Any,
        reference_batch: Sequence[NormalizedCurrency],
    ) -> bool:
        """Check a decoded batch against a trusted reference dataset."""
        pass

    def normalize_currencies(
        self,
        document: Document,
        resolve_links: Optional[LinkResolver] = None,
    ) -> list[NormalizedCurrency]:
        """
        Decode and normalize a full currency listing (main entry point).

        Args:
            document: Raw response envelope
            resolve_links: Optional aggregation pass linking wrapped tokens

        Returns:
            List of canonical currencies in record order
        """
        batch = self.parse_currencies(document)
        normalized = self.normalize_batch(batch)

        if resolve_links is not None:
            normalized = resolve_links(normalized)

        logger.debug(f"[{self.exchange.value}] Normalized {len(normalized)} currencies")
        return normalized

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(exchange={self.exchange.value})>"
