"""High-level async client for a carregistry server."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import quote

import aiohttp
from yarl import URL

from carregistry.config import RegistryConfig
from carregistry.exceptions import (
    DUPLICATE_ID_MESSAGE,
    CarRegistryApiError,
    CarRegistryBatchError,
    CarRegistryDuplicateError,
    CarRegistryNotFoundError,
    CarRegistryTransportError,
)
from carregistry.models.car import Car
from carregistry.models.responses import BatchItemError, CarEntry

_logger = logging.getLogger(__name__)

RecordLike = Mapping[str, Any] | Car


def _to_payload(record: RecordLike) -> dict[str, Any]:
    if isinstance(record, Car):
        return record.dump_wire()
    return dict(record)


def _raise_for_error(endpoint: str, status: int, body: Any) -> None:
    if isinstance(body, dict) and isinstance(body.get("errors"), list):
        errors = [BatchItemError.model_validate(item) for item in body["errors"]]
        raise CarRegistryBatchError(
            f"{endpoint} rejected {len(errors)} record(s)",
            status_code=status,
            errors=errors,
            endpoint=endpoint,
            body=body,
        )
    message = str(body.get("error", "")) if isinstance(body, dict) else ""
    if status == 404:
        raise CarRegistryNotFoundError(message or f"{endpoint} not found", status_code=status, endpoint=endpoint, body=body)
    if status == 400 and message == DUPLICATE_ID_MESSAGE:
        raise CarRegistryDuplicateError(message, status_code=status, endpoint=endpoint, body=body)
    raise CarRegistryApiError(
        f"{endpoint} failed: HTTP {status} {message}".rstrip(),
        status_code=status,
        endpoint=endpoint,
        body=body,
    )


class CarRegistryClient:
    """Async client for the car registry HTTP API.

    Usage::

        async with CarRegistryClient("http://localhost:3000") as client:
            await client.create_car({"id": "001", "name": "Gaspar"})
            cars = await client.list_cars()
    """

    def __init__(
        self,
        base_url: str | RegistryConfig = "http://localhost:3000",
        *,
        session: aiohttp.ClientSession | None = None,
        base_path: str = "/car",
    ) -> None:
        if isinstance(base_url, RegistryConfig):
            base_path = base_url.base_path
            base_url = base_url.base_url
        self._base_url = base_url.rstrip("/")
        self._base_path = base_path
        self._external_session = session is not None
        self._http_session = session

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> CarRegistryClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        return self

    async def __aexit__(self, *_exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        if self._http_session is not None and not self._external_session:
            await self._http_session.close()
        self._http_session = None

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _request(self, method: str, endpoint: str, payload: Any = None) -> Any:
        if self._http_session is None:
            raise CarRegistryTransportError(
                "Client session not initialized; use within 'async with CarRegistryClient(...)'",
                endpoint=endpoint,
            )
        # Endpoints arrive percent-encoded; yarl must not requote them.
        url = URL(f"{self._base_url}{endpoint}", encoded=True)
        _logger.debug("%s %s", method, url)

        try:
            async with self._http_session.request(method, url, json=payload) as resp:
                status = resp.status
                text = await resp.text()
        except aiohttp.ClientError as exc:
            raise CarRegistryTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise CarRegistryTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            ) from exc

        if status >= 400:
            _raise_for_error(endpoint, status, body)
        return body

    def _item(self, car_id: str) -> str:
        return f"{self._base_path}/{quote(str(car_id), safe='')}"

    # ------------------------------------------------------------------
    # Registry operations
    # ------------------------------------------------------------------

    async def create_car(self, record: RecordLike) -> dict[str, Any]:
        """Register one car and return the stored record."""
        result: dict[str, Any] = await self._request("POST", self._base_path, _to_payload(record))
        return result

    async def create_cars(self, records: Iterable[RecordLike]) -> list[dict[str, Any]]:
        """Register many cars in one call.

        Raises :class:`CarRegistryBatchError` when any record collides; the
        other records of the batch are registered nonetheless.
        """
        result: list[dict[str, Any]] = await self._request(
            "POST",
            self._base_path,
            [_to_payload(record) for record in records],
        )
        return result

    async def list_cars(self) -> list[CarEntry]:
        body = await self._request("GET", self._base_path)
        return [CarEntry.model_validate(item) for item in body]

    async def get_car(self, car_id: str) -> CarEntry:
        return CarEntry.model_validate(await self._request("GET", self._item(car_id)))

    async def update_car(self, car_id: str, record: RecordLike) -> dict[str, Any]:
        """Replace the car stored under *car_id* and return the new record."""
        result: dict[str, Any] = await self._request("PATCH", self._item(car_id), _to_payload(record))
        return result

    async def delete_car(self, car_id: str) -> str:
        """Remove the car stored under *car_id* and return the confirmation message."""
        body = await self._request("DELETE", self._item(car_id))
        return str(body.get("message", "")) if isinstance(body, dict) else ""
