"""In-memory car registry.

This is the only component allowed to touch the registry mapping. Every
operation runs entirely under the store lock so the identifier uniqueness
check and the following write are atomic.
"""

from __future__ import annotations

import copy
import logging
import threading
from collections.abc import Iterable
from typing import Any

from carregistry._normalize import normalize_car_id, record_car_id
from carregistry.exceptions import (
    DUPLICATE_ID_MESSAGE,
    INVALID_ID_MESSAGE,
    INVALID_RECORD_MESSAGE,
    BatchInsertError,
    CarNotFoundError,
    DuplicateIdError,
    InvalidRecordError,
)
from carregistry.models.responses import BatchItemError

_logger = logging.getLogger(__name__)

Record = dict[str, Any]
"""A car record: an opaque JSON object keyed by its ``id`` field."""


class CarStore:
    """Thread-safe in-memory registry of car records keyed by identifier.

    Records are deep-copied on the way in and on the way out, so callers
    never hold references into the registry.

    Listing order is insertion order; an update keeps the original
    position of the record.
    """

    def __init__(self, records: Iterable[Record] | None = None) -> None:
        self._lock = threading.Lock()
        self._cars: dict[str, Record] = {}
        if records is not None:
            self.create_many(records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._cars)

    def __contains__(self, car_id: object) -> bool:
        key = normalize_car_id(car_id)
        if key is None:
            return False
        with self._lock:
            return key in self._cars

    def create(self, record: Record) -> Record:
        """Insert *record* under its ``id`` and return the stored copy.

        Raises :class:`DuplicateIdError` when the identifier is taken; the
        registry is left untouched in that case.
        """
        car_id = record_car_id(record)
        with self._lock:
            if car_id in self._cars:
                _logger.debug("Rejected duplicate id %s", car_id)
                raise DuplicateIdError(car_id)
            self._cars[car_id] = copy.deepcopy(record)
            _logger.debug("Created car %s", car_id)
            return copy.deepcopy(record)

    def create_many(self, records: Iterable[Record]) -> list[Record]:
        """Insert every record whose identifier is not yet registered.

        Records are processed in order against the live registry, so a
        second occurrence of an identifier inside the same batch collides
        with the first one.

        If any record was rejected, :class:`BatchInsertError` is raised
        with the rejected records only. The accepted records of the batch
        stay registered and are not reported.
        """
        inserted: list[Record] = []
        errors: list[BatchItemError] = []
        with self._lock:
            for record in records:
                try:
                    car_id = record_car_id(record)
                except InvalidRecordError:
                    errors.append(BatchItemError(id=None, error=INVALID_ID_MESSAGE))
                    continue
                if car_id in self._cars:
                    errors.append(BatchItemError(id=car_id, error=DUPLICATE_ID_MESSAGE))
                    continue
                self._cars[car_id] = copy.deepcopy(record)
                inserted.append(copy.deepcopy(record))

        if errors:
            _logger.debug("Batch create: %d inserted, %d rejected", len(inserted), len(errors))
            raise BatchInsertError(errors)
        _logger.debug("Batch create: %d inserted", len(inserted))
        return inserted

    def list(self) -> list[tuple[str, Record]]:
        """Return every ``(id, record)`` pair in insertion order."""
        with self._lock:
            return [(car_id, copy.deepcopy(record)) for car_id, record in self._cars.items()]

    def get(self, car_id: str) -> tuple[str, Record]:
        """Return the ``(id, record)`` pair, or raise :class:`CarNotFoundError`."""
        key = self._key(car_id)
        with self._lock:
            record = self._cars.get(key)
            if record is None:
                raise CarNotFoundError(key)
            return key, copy.deepcopy(record)

    def update(self, car_id: str, record: Record) -> Record:
        """Replace the record stored under *car_id* entirely.

        The ``id`` field inside *record* is stored as given and is not
        compared with *car_id*.
        """
        key = self._key(car_id)
        with self._lock:
            if key not in self._cars:
                raise CarNotFoundError(key)
            if not isinstance(record, dict):
                raise InvalidRecordError(INVALID_RECORD_MESSAGE)
            self._cars[key] = copy.deepcopy(record)
            _logger.debug("Replaced car %s", key)
            return copy.deepcopy(record)

    def delete(self, car_id: str) -> None:
        """Remove the record stored under *car_id*."""
        key = self._key(car_id)
        with self._lock:
            if self._cars.pop(key, None) is None:
                raise CarNotFoundError(key)
            _logger.debug("Deleted car %s", key)

    def clear(self) -> None:
        with self._lock:
            self._cars.clear()

    @staticmethod
    def _key(car_id: Any) -> str:
        key = normalize_car_id(car_id)
        if key is None:
            # An id that can never be registered is simply absent.
            raise CarNotFoundError(str(car_id))
        return key
