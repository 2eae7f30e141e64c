"""
Equivalence Validator - Compare a native batch against a trusted reference.

The reference dataset expands every resolved wrapped-token link into an extra
entry the raw feed does not carry separately, so the two sizes differ by
exactly that count.
"""

import logging
from typing import Any, Iterable, Optional, Sequence

from cex_normalization.config import NormalizationConfig, get_config
from cex_normalization.models import NormalizedCurrency


logger = logging.getLogger(__name__)


def count_synthetic(reference: Iterable[NormalizedCurrency]) -> int:
    """Count reference entries carrying a resolved wrapped-token link."""
    return sum(1 for currency in reference if currency.has_resolved_wrapped_link())


def equivalent(
    local_batch: Sequence[Any],
    reference_batch: Sequence[NormalizedCurrency],
    exchange: Optional[str] = None,
    config: Optional[NormalizationConfig] = None,
) -> bool:
    """
    Check a local batch against a reference batch.

    Args:
        local_batch: Native records exposing ``name`` and ``symbol``
        reference_batch: Canonical currencies from the trusted dataset
        exchange: Exchange name for log context
        config: Normalization config (global config if omitted)

    Returns:
        True iff ``len(local) == len(reference) + synthetic`` and every
        reference (name, symbol) exists locally. Never raises on mismatch.
    """
    config = config or get_config()

    local_keys = {(record.name, record.symbol) for record in local_batch}
    synthetic = count_synthetic(reference_batch)

    expected_length = len(reference_batch) + synthetic
    length_ok = len(local_batch) == expected_length

    missing = [
        (currency.name, currency.symbol)
        for currency in reference_batch
        if (currency.name, currency.symbol) not in local_keys
    ]

    if length_ok and not missing:
        return True

    if config.log_mismatches:
        if not length_ok:
            logger.warning(
                f"[{exchange}] Batch size mismatch: local={len(local_batch)}, "
                f"reference={len(reference_batch)} + synthetic={synthetic}"
            )
        if missing:
            shown = missing[:config.max_reported_missing]
            logger.warning(
                f"[{exchange}] {len(missing)} reference entries missing locally: {shown}"
            )

    return False
