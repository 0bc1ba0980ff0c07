"""Normalization helpers.

Centralizes the little parsing the registry does on otherwise opaque
records: extracting and normalizing the identifier.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from carregistry.exceptions import InvalidRecordError


def safe_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def normalize_car_id(value: Any) -> str | None:
    """Return the identifier as a non-empty string, or ``None``.

    Strings are kept verbatim. Integral JSON numbers map to their decimal
    form so ``1`` and ``"1"`` address the same record. Booleans and
    containers are not identifiers.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value or None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and math.isfinite(value):
        return str(int(value)) if value.is_integer() else str(value)
    return None


def record_car_id(record: Any) -> str:
    """Extract the identifier of *record*.

    Raises :class:`InvalidRecordError` when *record* is not a mapping or
    its ``id`` field is absent, empty or not scalar.
    """
    if not isinstance(record, Mapping):
        raise InvalidRecordError()
    car_id = normalize_car_id(record.get("id"))
    if car_id is None:
        raise InvalidRecordError()
    return car_id
