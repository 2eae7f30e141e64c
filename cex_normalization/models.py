"""
Normalization Models - Canonical exchange-agnostic structures.

Every exchange-specific type converts into these. No downstream consumer
depends on exchange-specific fields.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional

from cex_normalization.exceptions import UnrecognizedBlockchain


PAIR_DELIMITERS = ("-", "_", "/")


class CexExchange(Enum):
    """Supported centralized exchanges."""
    BINANCE = "binance"
    COINBASE = "coinbase"
    OKEX = "okex"
    KUCOIN = "kucoin"
    BYBIT = "bybit"

    @classmethod
    def parse(cls, value: "CexExchange | str") -> "CexExchange":
        """Accept an enum member or its string value (case-insensitive)."""
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


class NormalizedTradingType(Enum):
    """Canonical trading types."""
    SPOT = "Spot"
    PERPETUAL = "Perpetual"
    MARGIN = "Margin"
    FUTURES = "Futures"
    OPTION = "Option"
    OTHER = "Other"


class Blockchain(Enum):
    """Known blockchain networks."""
    ETHEREUM = "ethereum"
    BNB_SMART_CHAIN = "bnb_smart_chain"
    BNB_BEACON_CHAIN = "bnb_beacon_chain"
    SOLANA = "solana"
    TRON = "tron"
    POLYGON = "polygon"
    AVALANCHE = "avalanche"
    ARBITRUM = "arbitrum"
    OPTIMISM = "optimism"
    BASE = "base"
    FANTOM = "fantom"
    CRONOS = "cronos"
    TON = "ton"
    APTOS = "aptos"
    SUI = "sui"
    NEAR = "near"
    CARDANO = "cardano"
    ALGORAND = "algorand"
    STELLAR = "stellar"
    XRP_LEDGER = "xrp_ledger"
    KLAYTN = "klaytn"
    HARMONY = "harmony"
    MOONBEAM = "moonbeam"
    CELO = "celo"
    GNOSIS = "gnosis"
    COSMOS = "cosmos"
    OSMOSIS = "osmosis"
    POLKADOT = "polkadot"
    KAVA = "kava"
    CHILIZ = "chiliz"
    ZKSYNC = "zksync"
    LINEA = "linea"
    BITCOIN = "bitcoin"
    NEO = "neo"
    VECHAIN = "vechain"
    TEZOS = "tezos"
    WAVES = "waves"

    @classmethod
    def parse(cls, name: str) -> "Blockchain":
        """
        Parse a platform name as reported by an exchange.

        Matching ignores case, whitespace and punctuation, so
        "BNB Smart Chain (BEP20)" and "bnb-smart-chain" both resolve.

        Raises:
            UnrecognizedBlockchain: If the name matches no known chain
        """
        key = _alias_key(name or "")
        chain = _BLOCKCHAIN_ALIASES.get(key)
        if chain is None:
            raise UnrecognizedBlockchain(name)
        return chain


def _alias_key(name: str) -> str:
    return re.sub(r"[^a-z0-9]", "", name.lower())


_BLOCKCHAIN_ALIASES: dict[str, Blockchain] = {
    _alias_key(alias): chain
    for chain, aliases in {
        Blockchain.ETHEREUM: ["ethereum", "eth", "erc20"],
        Blockchain.BNB_SMART_CHAIN: [
            "bnb smart chain (bep20)", "bnb smart chain", "binance smart chain", "bsc", "bep20",
        ],
        Blockchain.BNB_BEACON_CHAIN: [
            "bnb beacon chain (bep2)", "bnb beacon chain", "binance chain", "bep2",
        ],
        Blockchain.SOLANA: ["solana", "sol"],
        Blockchain.TRON: ["tron", "tron20", "trc20"],
        Blockchain.POLYGON: ["polygon", "polygon pos", "matic"],
        Blockchain.AVALANCHE: ["avalanche c-chain", "avalanche", "avax c-chain"],
        Blockchain.ARBITRUM: ["arbitrum", "arbitrum one"],
        Blockchain.OPTIMISM: ["optimism", "op mainnet"],
        Blockchain.BASE: ["base"],
        Blockchain.FANTOM: ["fantom", "fantom opera"],
        Blockchain.CRONOS: ["cronos"],
        Blockchain.TON: ["toncoin", "ton"],
        Blockchain.APTOS: ["aptos"],
        Blockchain.SUI: ["sui", "sui network"],
        Blockchain.NEAR: ["near", "near protocol"],
        Blockchain.CARDANO: ["cardano"],
        Blockchain.ALGORAND: ["algorand"],
        Blockchain.STELLAR: ["stellar"],
        Blockchain.XRP_LEDGER: ["xrp ledger", "xrp", "ripple"],
        Blockchain.KLAYTN: ["klaytn", "kaia"],
        Blockchain.HARMONY: ["harmony"],
        Blockchain.MOONBEAM: ["moonbeam"],
        Blockchain.CELO: ["celo"],
        Blockchain.GNOSIS: ["gnosis chain", "gnosis", "xdai chain"],
        Blockchain.COSMOS: ["cosmos"],
        Blockchain.OSMOSIS: ["osmosis"],
        Blockchain.POLKADOT: ["polkadot"],
        Blockchain.KAVA: ["kava"],
        Blockchain.CHILIZ: ["chiliz"],
        Blockchain.ZKSYNC: ["zksync era", "zksync"],
        Blockchain.LINEA: ["linea"],
        Blockchain.BITCOIN: ["bitcoin"],
        Blockchain.NEO: ["neo", "nep5"],
        Blockchain.VECHAIN: ["vechain"],
        Blockchain.TEZOS: ["tezos"],
        Blockchain.WAVES: ["waves"],
    }.items()
    for alias in aliases
}


@dataclass(frozen=True)
class NormalizedTradingPair:
    """
    Canonical trading pair.

    Either ``base``/``quote`` or ``pair`` (with an optional ``delimiter``) is
    populated, never both.
    """
    exchange: CexExchange
    base: Optional[str] = None
    quote: Optional[str] = None
    pair: Optional[str] = None
    delimiter: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the base/quote vs raw pair invariant."""
        has_base_quote = self.base is not None or self.quote is not None
        if has_base_quote:
            if self.base is None or self.quote is None:
                raise ValueError("base and quote must be given together")
            if self.pair is not None or self.delimiter is not None:
                raise ValueError("pair/delimiter cannot be combined with base/quote")
        elif self.pair is None:
            raise ValueError("Either base/quote or pair is required")
        if self.delimiter is not None and self.delimiter not in PAIR_DELIMITERS:
            raise ValueError(f"Delimiter must be one of {PAIR_DELIMITERS}, got {self.delimiter!r}")

    @classmethod
    def from_base_quote(cls, exchange: CexExchange, base: str, quote: str) -> "NormalizedTradingPair":
        return cls(exchange=exchange, base=base, quote=quote)

    @classmethod
    def from_pair(
        cls,
        exchange: CexExchange,
        pair: str,
        delimiter: Optional[str] = None,
    ) -> "NormalizedTradingPair":
        return cls(exchange=exchange, pair=pair, delimiter=delimiter)

    def base_quote(self) -> Optional[tuple[str, str]]:
        """Return (base, quote) when explicitly known."""
        if self.base is not None and self.quote is not None:
            return self.base, self.quote
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "exchange": self.exchange.value,
            "base": self.base,
            "quote": self.quote,
            "pair": self.pair,
            "delimiter": self.delimiter,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NormalizedTradingPair":
        """Create from dictionary."""
        return cls(
            exchange=CexExchange.parse(data["exchange"]),
            base=data.get("base"),
            quote=data.get("quote"),
            pair=data.get("pair"),
            delimiter=data.get("delimiter"),
        )


@dataclass(frozen=True)
class BlockchainCurrency:
    """A currency's presence on one blockchain."""
    blockchain: Blockchain
    address: Optional[str] = None
    is_wrapped: bool = False
    # Symbol of the counterpart currency, resolved against a batch on demand
    wrapped_currency: Optional[str] = None

    def resolve_wrapped(
        self,
        batch: Iterable["NormalizedCurrency"],
    ) -> Optional["NormalizedCurrency"]:
        """Look up the wrapped counterpart in ``batch``."""
        if self.wrapped_currency is None:
            return None
        for currency in batch:
            if currency.symbol == self.wrapped_currency:
                return currency
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "blockchain": self.blockchain.value,
            "address": self.address,
            "is_wrapped": self.is_wrapped,
            "wrapped_currency": self.wrapped_currency,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BlockchainCurrency":
        return cls(
            blockchain=Blockchain(data["blockchain"]),
            address=data.get("address"),
            is_wrapped=bool(data.get("is_wrapped", False)),
            wrapped_currency=data.get("wrapped_currency"),
        )


@dataclass(frozen=True)
class NormalizedCurrency:
    """
    Canonical currency record - STRICT schema.

    Built once per native record and never mutated; aggregation passes
    produce new instances.
    """
    exchange: CexExchange
    symbol: str
    name: str
    status: str
    display_name: Optional[str] = None
    blockchains: tuple[BlockchainCurrency, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "blockchains", tuple(self.blockchains))

    def has_resolved_wrapped_link(self) -> bool:
        """True if any platform is wrapped and points at a counterpart."""
        return any(
            blk.is_wrapped and blk.wrapped_currency is not None
            for blk in self.blockchains
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "exchange": self.exchange.value,
            "symbol": self.symbol,
            "name": self.name,
            "display_name": self.display_name,
            "status": self.status,
            "blockchains": [blk.to_dict() for blk in self.blockchains],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NormalizedCurrency":
        """Create from dictionary."""
        return cls(
            exchange=CexExchange.parse(data["exchange"]),
            symbol=data["symbol"],
            name=data["name"],
            status=data["status"],
            display_name=data.get("display_name"),
            blockchains=tuple(
                BlockchainCurrency.from_dict(blk) for blk in data.get("blockchains", [])
            ),
        )
