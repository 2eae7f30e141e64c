"""
Normalization Exceptions - Custom exception hierarchy for exchange normalization.

Every failure surfaces as a typed exception carrying enough context to
identify the offending input.
"""

from datetime import datetime
from typing import Any, Optional


class NormalizationError(Exception):
    """Base exception for all normalization errors."""

    def __init__(
        self,
        message: str,
        exchange: Optional[str] = None,
        original_error: Optional[Exception] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.exchange = exchange
        self.original_error = original_error
        self.context = context or {}
        self.timestamp = datetime.utcnow()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "exchange": self.exchange,
            "original_error": str(self.original_error) if self.original_error else None,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        parts = [f"{self.__class__.__name__}: {self.message}"]
        if self.exchange:
            parts.append(f"[exchange={self.exchange}]")
        if self.original_error:
            parts.append(f"(caused by: {self.original_error})")
        return " ".join(parts)


class InvalidPairFormat(NormalizationError):
    """Native pair string violates the exchange charset, or no codec strategy applied."""

    def __init__(
        self,
        message: str,
        raw_pair: Any = None,
        exchange: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, exchange, context=context)
        self.raw_pair = raw_pair

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = super().to_dict()
        data["raw_pair"] = str(self.raw_pair) if self.raw_pair is not None else None
        return data


class EnvelopeError(NormalizationError):
    """Response envelope does not have the expected shape."""


class MissingEnvelopeField(EnvelopeError):
    """A segment of the envelope path is absent."""

    def __init__(
        self,
        field_name: str,
        path: tuple[str, ...] = (),
        depth: int = 0,
        exchange: Optional[str] = None,
    ) -> None:
        nested = "nested " if field_name in path[:depth] else ""
        super().__init__(
            f"Could not find {nested}'{field_name}' field in envelope",
            exchange,
            context={"path": ".".join(path), "depth": depth},
        )
        self.field_name = field_name
        self.path = path
        self.depth = depth

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = super().to_dict()
        data["field_name"] = self.field_name
        return data


class SchemaMismatch(EnvelopeError):
    """A value in the envelope has the wrong type."""

    def __init__(
        self,
        message: str,
        expected: Optional[str] = None,
        actual: Optional[str] = None,
        exchange: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message, exchange, original_error)
        self.expected = expected
        self.actual = actual

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = super().to_dict()
        data.update({
            "expected": self.expected,
            "actual": self.actual,
        })
        return data


class RecordDecodeError(NormalizationError):
    """A record in a batch could not be decoded; the whole batch is rejected."""

    def __init__(
        self,
        message: str,
        index: Optional[int] = None,
        raw_data: Optional[Any] = None,
        exchange: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message, exchange, original_error)
        self.index = index
        self.raw_data = raw_data

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = super().to_dict()
        data.update({
            "index": self.index,
            "raw_data": str(self.raw_data)[:500] if self.raw_data else None,  # Truncate
        })
        return data


class UnrecognizedBlockchain(NormalizationError):
    """Platform name does not match any known chain."""

    def __init__(
        self,
        chain_name: str,
        exchange: Optional[str] = None,
    ) -> None:
        super().__init__(f"Unrecognized blockchain '{chain_name}'", exchange)
        self.chain_name = chain_name

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = super().to_dict()
        data["chain_name"] = self.chain_name
        return data


class UnsupportedExchange(NormalizationError):
    """No normalizer is registered for the exchange tag."""

    def __init__(
        self,
        exchange: str,
        registered: Optional[list[str]] = None,
    ) -> None:
        super().__init__(f"No normalizer registered for '{exchange}'", exchange)
        self.registered = registered or []

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = super().to_dict()
        data["registered"] = self.registered
        return data


class ConfigurationError(NormalizationError):
    """Invalid normalization configuration."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message, None, original_error)
        self.config_key = config_key

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = super().to_dict()
        data["config_key"] = self.config_key
        return data
