"""
Exchange Normalization - Configuration.

============================================================
CONFIGURABLE NORMALIZATION BEHAVIOUR
============================================================

Configuration can be loaded from:
- Default values
- A plain dictionary
- YAML config file

============================================================
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from cex_normalization.exceptions import ConfigurationError


logger = logging.getLogger(__name__)


BLOCKCHAIN_POLICY_FAIL = "fail"
BLOCKCHAIN_POLICY_SKIP = "skip"


def _require_type(data: Dict[str, Any], key: str, expected: type, default: Any) -> Any:
    """Fetch a setting, rejecting values that are not already of the expected type."""
    value = data.get(key, default)
    # bool is an int subclass; keep "max: true" out of integer settings
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise ConfigurationError(
            f"{key} must be {expected.__name__}, got {type(value).__name__} {value!r}",
            config_key=key,
        )
    return value


@dataclass
class NormalizationConfig:
    """
    Main configuration for currency normalization and validation.

    - status_prefix:           Prepended to the last-updated timestamp in status
    - envelope_path:           Path to the symbol array inside the response envelope
    - unrecognized_blockchain: "fail" aborts the record, "skip" drops the platform
    - log_mismatches:          Emit WARNING logs when validation fails
    - max_reported_missing:    Missing entries listed in a mismatch warning
    """
    status_prefix: str = "last updated: "
    envelope_path: tuple[str, ...] = ("data", "body", "data")
    unrecognized_blockchain: str = BLOCKCHAIN_POLICY_FAIL
    log_mismatches: bool = True
    max_reported_missing: int = 5

    def __post_init__(self) -> None:
        """Validate configuration values."""
        self.envelope_path = tuple(self.envelope_path)
        if not self.envelope_path or not all(
            isinstance(segment, str) and segment for segment in self.envelope_path
        ):
            raise ConfigurationError(
                "envelope_path must be a non-empty sequence of field names",
                config_key="envelope_path",
            )
        if self.unrecognized_blockchain not in (BLOCKCHAIN_POLICY_FAIL, BLOCKCHAIN_POLICY_SKIP):
            raise ConfigurationError(
                f"unrecognized_blockchain must be '{BLOCKCHAIN_POLICY_FAIL}' "
                f"or '{BLOCKCHAIN_POLICY_SKIP}', got '{self.unrecognized_blockchain}'",
                config_key="unrecognized_blockchain",
            )
        if self.max_reported_missing < 0:
            raise ConfigurationError(
                "max_reported_missing must be >= 0",
                config_key="max_reported_missing",
            )

    @property
    def skip_unrecognized_blockchains(self) -> bool:
        return self.unrecognized_blockchain == BLOCKCHAIN_POLICY_SKIP

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NormalizationConfig":
        """Create from dictionary, ignoring unknown keys."""
        defaults = cls()
        unknown = set(data) - set(defaults.to_dict())
        if unknown:
            logger.warning(f"Ignoring unknown normalization config keys: {sorted(unknown)}")

        envelope_path = data.get("envelope_path", defaults.envelope_path)
        if isinstance(envelope_path, str):
            envelope_path = envelope_path.split(".")

        return cls(
            status_prefix=data.get("status_prefix", defaults.status_prefix),
            envelope_path=tuple(envelope_path),
            unrecognized_blockchain=data.get(
                "unrecognized_blockchain", defaults.unrecognized_blockchain
            ),
            log_mismatches=_require_type(
                data, "log_mismatches", bool, defaults.log_mismatches
            ),
            max_reported_missing=_require_type(
                data, "max_reported_missing", int, defaults.max_reported_missing
            ),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> "NormalizationConfig":
        """
        Load configuration from YAML file.

        The settings may sit at the top level or under a
        ``normalization`` key.
        """
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Failed to load YAML config from {path}: {e}",
                original_error=e,
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"YAML config at {path} must be a mapping")

        section = data.get("normalization", data)
        if not isinstance(section, dict):
            raise ConfigurationError(
                "'normalization' section must be a mapping",
                config_key="normalization",
            )
        return cls.from_dict(section)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "status_prefix": self.status_prefix,
            "envelope_path": list(self.envelope_path),
            "unrecognized_blockchain": self.unrecognized_blockchain,
            "log_mismatches": self.log_mismatches,
            "max_reported_missing": self.max_reported_missing,
        }


# =============================================================
# GLOBAL CONFIG SINGLETON
# =============================================================


_default_config: Optional[NormalizationConfig] = None


def get_config() -> NormalizationConfig:
    """Get the global normalization configuration."""
    global _default_config
    if _default_config is None:
        _default_config = NormalizationConfig()
    return _default_config


def set_config(config: NormalizationConfig) -> None:
    """Set the global normalization configuration."""
    global _default_config
    _default_config = config
