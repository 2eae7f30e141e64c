"""
Shared fixtures for exchange normalization tests.
"""

from typing import Any, Optional

import pytest

from cex_normalization.config import NormalizationConfig


LAST_UPDATED = "2024-05-01T12:00:00.000Z"


def build_record(
    symbol: str,
    name: str,
    platform_name: Optional[str] = None,
    token_address: str = "0x0000000000000000000000000000000000000001",
    record_id: int = 1,
) -> dict[str, Any]:
    """Build a raw listing record as the exchange returns it."""
    record: dict[str, Any] = {
        "id": record_id,
        "symbol": symbol,
        "name": name,
        "slug": name.lower().replace(" ", "-"),
        "circulating_supply": 1000.0,
        "total_supply": 2000.0,
        "max_supply": None,
        "infinite_supply": False,
        "cmc_rank": record_id,
        "num_market_pairs": 42,
        "tvl_ratio": None,
        "self_reported_circulating_supply": None,
        "self_reported_market_cap": None,
        "last_updated": LAST_UPDATED,
        "date_added": "2020-01-01T00:00:00.000Z",
        "tags": ["defi"],
        "platform": None,
        "quote": {
            "USD": {
                "fully_diluted_market_cap": 1.5e9,
                "last_updated": LAST_UPDATED,
                "market_cap_dominance": 0.1,
                "tvl": None,
                "percent_change_30d": 1.0,
                "percent_change_1h": 0.1,
                "percent_change_24h": -0.5,
                "market_cap": 1.0e9,
                "volume_change_24h": 3.2,
                "price": 1.01,
                "percent_change_60d": 2.0,
                "volume_24h": 5.0e7,
                "percent_change_90d": 4.0,
                "percent_change_7d": 0.7,
            },
        },
    }
    if platform_name is not None:
        record["platform"] = {
            "id": 1027,
            "name": platform_name,
            "symbol": "ETH",
            "slug": platform_name.lower().replace(" ", "-"),
            "token_address": token_address,
        }
    return record


def build_envelope(records: list[dict[str, Any]]) -> dict[str, Any]:
    """Wrap records in the listing response envelope."""
    return {"data": {"body": {"data": records}}}


@pytest.fixture
def config():
    """Default normalization configuration."""
    return NormalizationConfig()


@pytest.fixture
def sample_records():
    """A small listing covering native coins, tokens and a wrapped token."""
    return [
        build_record("BTC", "Bitcoin", record_id=1),
        build_record("USDT", "Tether USDt", platform_name="Ethereum", record_id=2),
        build_record("WBTC", "Wrapped Bitcoin", platform_name="Ethereum", record_id=3),
        build_record("CAKE", "PancakeSwap", platform_name="BNB Smart Chain (BEP20)", record_id=4),
    ]


@pytest.fixture
def sample_envelope(sample_records):
    return build_envelope(sample_records)


@pytest.fixture
def make_record():
    """Factory for raw listing records."""
    return build_record


@pytest.fixture
def make_envelope():
    """Factory for listing response envelopes."""
    return build_envelope
