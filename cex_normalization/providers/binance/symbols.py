"""
Binance Symbols - Currency listing records and their normalization.

The listing response nests the records as ``data.body.data``. Each record
carries market metrics and, for tokens, the platform they are issued on.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from cex_normalization.config import NormalizationConfig, get_config
from cex_normalization.envelope import Document, decode_records, unwrap
from cex_normalization.exceptions import UnrecognizedBlockchain
from cex_normalization.models import (
    Blockchain,
    BlockchainCurrency,
    CexExchange,
    NormalizedCurrency,
)
from cex_normalization.validator import equivalent


logger = logging.getLogger(__name__)

EXCHANGE = CexExchange.BINANCE


def format_status(last_updated: datetime, prefix: str = "last updated: ") -> str:
    """Render a last-updated timestamp as a status string (UTC, 'Z' suffix)."""
    if last_updated.tzinfo is None:
        last_updated = last_updated.replace(tzinfo=timezone.utc)
    last_updated = last_updated.astimezone(timezone.utc)
    stamp = last_updated.strftime("%Y-%m-%dT%H:%M:%S")

    # shortest of millis/micros that keeps the value; nothing when whole
    micros = last_updated.microsecond
    if micros and micros % 1000 == 0:
        stamp += f".{micros // 1000:03d}"
    elif micros:
        stamp += f".{micros:06d}"

    return f"{prefix}{stamp}Z"


def is_wrapped_token(name: str, symbol: str) -> bool:
    """Heuristic: the name mentions "wrapped" and the symbol starts with "w"."""
    return "wrapped" in name.lower() and symbol.lower().startswith("w")


class BinanceSymbolQuoteUSD(BaseModel):
    """Market metrics quoted in one currency."""
    fully_diluted_market_cap: float
    last_updated: datetime
    market_cap_dominance: float
    tvl: Optional[float] = None
    percent_change_30d: float
    percent_change_1h: float
    percent_change_24h: float
    market_cap: float
    volume_change_24h: float
    price: float
    percent_change_60d: float
    volume_24h: float
    percent_change_90d: float
    percent_change_7d: float


class BinanceSymbolQuote(BaseModel):
    """Quotes keyed by currency; only USD is kept and it is required."""
    model_config = ConfigDict(populate_by_name=True)

    usd: BinanceSymbolQuoteUSD = Field(alias="USD")


class BinanceSymbolPlatform(BaseModel):
    """Chain a token is issued on."""
    symbol: str
    name: str
    token_address: str
    id: int
    slug: str


class BinanceSymbol(BaseModel):
    """One currency listing record."""
    symbol: str
    circulating_supply: float
    last_updated: datetime
    total_supply: float
    tvl_ratio: Optional[float] = None
    cmc_rank: int
    self_reported_circulating_supply: Optional[float] = None
    platform: Optional[BinanceSymbolPlatform] = None
    tags: List[str]
    date_added: datetime
    quote: BinanceSymbolQuote
    num_market_pairs: int
    infinite_supply: bool
    name: str
    max_supply: Optional[float] = None
    id: int
    self_reported_market_cap: Optional[float] = None
    slug: str

    def parse_blockchain(
        self,
        config: Optional[NormalizationConfig] = None,
    ) -> Optional[BlockchainCurrency]:
        """
        Infer the blockchain platform of this currency.

        Raises:
            UnrecognizedBlockchain: If the platform name is unknown and the
                config does not allow skipping it
        """
        if self.platform is None:
            return None

        config = config or get_config()
        try:
            chain = Blockchain.parse(self.platform.name)
        except UnrecognizedBlockchain as e:
            e.exchange = EXCHANGE.value
            e.context.update({"symbol": self.symbol, "name": self.name})
            if not config.skip_unrecognized_blockchains:
                raise
            logger.warning(
                f"[{EXCHANGE.value}] Dropping platform '{self.platform.name}' "
                f"of {self.symbol}: unrecognized blockchain"
            )
            return None

        return BlockchainCurrency(
            blockchain=chain,
            address=self.platform.token_address,
            is_wrapped=is_wrapped_token(self.name, self.symbol),
            wrapped_currency=None,
        )

    def status(self, config: Optional[NormalizationConfig] = None) -> str:
        config = config or get_config()
        return format_status(self.last_updated, config.status_prefix)

    def normalize(self, config: Optional[NormalizationConfig] = None) -> NormalizedCurrency:
        """Convert to a canonical currency."""
        config = config or get_config()
        blockchain = self.parse_blockchain(config)
        return NormalizedCurrency(
            exchange=EXCHANGE,
            symbol=self.symbol,
            name=self.name,
            display_name=None,
            status=self.status(config),
            blockchains=(blockchain,) if blockchain else (),
        )

    def matches(
        self,
        other: NormalizedCurrency,
        config: Optional[NormalizationConfig] = None,
    ) -> bool:
        """
        Check this record against a reference currency.

        Reference platforms with a resolved wrapped link come from aggregation
        and are ignored.
        """
        config = config or get_config()
        blockchain = self.parse_blockchain(config)
        expected = [blockchain] if blockchain else []

        equals = (
            other.exchange == EXCHANGE
            and other.symbol == self.symbol
            and other.name == self.name
            and other.display_name is None
            and other.status == self.status(config)
            and [blk for blk in other.blockchains if blk.wrapped_currency is None] == expected
        )

        if not equals and config.log_mismatches:
            logger.warning(f"[{EXCHANGE.value}] binance currency: {self!r}")
            logger.warning(f"[{EXCHANGE.value}] normalized currency: {other!r}")

        return equals


class BinanceAllSymbols(BaseModel):
    """A decoded currency listing."""
    symbols: List[BinanceSymbol]

    @classmethod
    def parse(
        cls,
        document: Document,
        config: Optional[NormalizationConfig] = None,
    ) -> "BinanceAllSymbols":
        """
        Unwrap and decode a listing response.

        Raises:
            MissingEnvelopeField: If a segment of the envelope path is absent
            SchemaMismatch: If the envelope has the wrong shape
            RecordDecodeError: If any record fails to decode
        """
        config = config or get_config()
        items = unwrap(document, config.envelope_path, exchange=EXCHANGE.value)
        symbols = decode_records(items, BinanceSymbol, exchange=EXCHANGE.value)
        return cls(symbols=symbols)

    def normalize(self, config: Optional[NormalizationConfig] = None) -> list[NormalizedCurrency]:
        """Normalize every record, in order."""
        config = config or get_config()
        return [symbol.normalize(config) for symbol in self.symbols]

    def equivalent_to(
        self,
        reference: Sequence[NormalizedCurrency],
        config: Optional[NormalizationConfig] = None,
    ) -> bool:
        """Check this listing against a trusted reference dataset."""
        return equivalent(self.symbols, reference, exchange=EXCHANGE.value, config=config)

    def __len__(self) -> int:
        return len(self.symbols)
