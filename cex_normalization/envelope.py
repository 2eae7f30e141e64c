"""
Envelope Unwrapper - Extract record arrays from nested response envelopes.

Exchange responses wrap the payload in several layers of objects, e.g.
``{"data": {"body": {"data": [...]}}}``. Each layer is resolved explicitly so
a failure names the exact segment that was missing or mistyped.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from cex_normalization.exceptions import (
    MissingEnvelopeField,
    RecordDecodeError,
    SchemaMismatch,
)


logger = logging.getLogger(__name__)

DEFAULT_ENVELOPE_PATH = ("data", "body", "data")

M = TypeVar("M", bound=BaseModel)

Document = Union[Mapping, str, bytes, bytearray]


def load_document(
    document: Document,
    exchange: Optional[str] = None,
) -> Mapping:
    """Parse raw JSON text into a mapping; mappings pass through."""
    if isinstance(document, (str, bytes, bytearray)):
        try:
            document = json.loads(document)
        except ValueError as e:
            raise SchemaMismatch(
                "Envelope is not valid JSON",
                expected="object",
                actual="text",
                exchange=exchange,
                original_error=e,
            ) from e

    if not isinstance(document, Mapping):
        raise SchemaMismatch(
            "Envelope root must be an object",
            expected="object",
            actual=type(document).__name__,
            exchange=exchange,
        )
    return document


def unwrap(
    document: Document,
    path: Sequence[str] = DEFAULT_ENVELOPE_PATH,
    exchange: Optional[str] = None,
) -> list[Any]:
    """
    Walk ``path`` through the envelope and return the terminal array.

    Args:
        document: Parsed mapping or raw JSON text
        path: Field names from the root to the record array
        exchange: Exchange name for error context

    Returns:
        The raw records, unchanged

    Raises:
        MissingEnvelopeField: If a path segment is absent
        SchemaMismatch: If an intermediate value is not an object or the
            terminal value is not an array
    """
    path = tuple(path)
    current: Any = load_document(document, exchange)

    for depth, segment in enumerate(path):
        if not isinstance(current, Mapping):
            raise SchemaMismatch(
                f"Expected an object at '{'.'.join(path[:depth])}'",
                expected="object",
                actual=type(current).__name__,
                exchange=exchange,
            )
        if segment not in current:
            raise MissingEnvelopeField(segment, path=path, depth=depth, exchange=exchange)
        current = current[segment]

    if not isinstance(current, list):
        raise SchemaMismatch(
            f"Could not convert '{'.'.join(path)}' to array",
            expected="array",
            actual=type(current).__name__,
            exchange=exchange,
        )

    logger.debug(f"[{exchange}] Unwrapped {len(current)} records from '{'.'.join(path)}'")
    return current


def decode_records(
    items: Iterable[Any],
    model: Type[M],
    exchange: Optional[str] = None,
) -> list[M]:
    """
    Decode every raw record into ``model``.

    All-or-nothing: the first record that fails validation rejects the batch.

    Raises:
        RecordDecodeError: With the index of the failing record
    """
    records: list[M] = []
    for index, item in enumerate(items):
        try:
            records.append(model.model_validate(item))
        except ValidationError as e:
            raise RecordDecodeError(
                f"Could not decode record {index} as {model.__name__}: "
                f"{e.error_count()} validation error(s)",
                index=index,
                raw_data=item,
                exchange=exchange,
                original_error=e,
            ) from e
    return records
