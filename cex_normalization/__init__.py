"""
Exchange Normalization Package - Canonical pairs and currencies across exchanges.

Converts exchange-native trading-pair identifiers and currency listings into a
single canonical representation, so aggregators and pricing engines can combine
data from heterogeneous exchanges without per-exchange knowledge.

Features:
- Native pair ⇄ canonical pair codec with an ordered fallback chain
- Permissive trading-type mapping (unknown tokens become Other)
- Envelope unwrapping with per-segment error reporting
- Currency normalization with blockchain inference and wrapped-token detection
- Equivalence checks against a trusted reference dataset

Quick Start:
    from cex_normalization import (
        CexExchange,
        NormalizedTradingPair,
        get_default_registry,
    )

    registry = get_default_registry()

    pair = NormalizedTradingPair.from_pair(CexExchange.COINBASE, "BTC-USD", "-")
    native = registry.encode_pair(CexExchange.BINANCE, pair)   # BTCUSD

    currencies = registry.normalize_currencies("binance", raw_json)
    for currency in currencies:
        print(currency.to_dict())

Adding New Exchanges:
    1. Add the tag to CexExchange
    2. Create a class extending BaseExchangeNormalizer
    3. Register it with NormalizerRegistry
"""

from cex_normalization.base import BaseExchangeNormalizer
from cex_normalization.config import NormalizationConfig, get_config, set_config
from cex_normalization.envelope import decode_records, unwrap
from cex_normalization.exceptions import (
    ConfigurationError,
    EnvelopeError,
    InvalidPairFormat,
    MissingEnvelopeField,
    NormalizationError,
    RecordDecodeError,
    SchemaMismatch,
    UnrecognizedBlockchain,
    UnsupportedExchange,
)
from cex_normalization.models import (
    Blockchain,
    BlockchainCurrency,
    CexExchange,
    NormalizedCurrency,
    NormalizedTradingPair,
    NormalizedTradingType,
)
from cex_normalization.providers import BinanceNormalizer
from cex_normalization.registry import (
    NormalizerRegistry,
    get_default_registry,
    setup_default_normalizers,
)
from cex_normalization.validator import count_synthetic, equivalent


__version__ = "1.0.0"

__all__ = [
    # Base
    "BaseExchangeNormalizer",

    # Models
    "CexExchange",
    "NormalizedTradingPair",
    "NormalizedTradingType",
    "NormalizedCurrency",
    "BlockchainCurrency",
    "Blockchain",

    # Config
    "NormalizationConfig",
    "get_config",
    "set_config",

    # Envelope / validation
    "unwrap",
    "decode_records",
    "equivalent",
    "count_synthetic",

    # Exceptions
    "NormalizationError",
    "InvalidPairFormat",
    "EnvelopeError",
    "MissingEnvelopeField",
    "SchemaMismatch",
    "RecordDecodeError",
    "UnrecognizedBlockchain",
    "UnsupportedExchange",
    "ConfigurationError",

    # Providers
    "BinanceNormalizer",

    # Registry
    "NormalizerRegistry",
    "get_default_registry",
    "setup_default_normalizers",
]
