"""Custom exception hierarchy for carregistry."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from carregistry.models.responses import BatchItemError

DUPLICATE_ID_MESSAGE = "ID já existe"
NOT_FOUND_MESSAGE = "Item não encontrado"
INVALID_ID_MESSAGE = "ID inválido"
INVALID_RECORD_MESSAGE = "Objeto inválido"


class CarRegistryError(Exception):
    """Base exception for all carregistry errors."""


class CarRegistryConfigError(CarRegistryError):
    """Invalid or missing configuration."""


class InvalidRecordError(CarRegistryError):
    """Record is not a JSON object or carries no usable ``id``."""

    def __init__(self, message: str = INVALID_ID_MESSAGE) -> None:
        super().__init__(message)


class DuplicateIdError(CarRegistryError):
    """A record with the same identifier is already registered."""

    def __init__(self, car_id: str) -> None:
        self.car_id = car_id
        super().__init__(DUPLICATE_ID_MESSAGE)


class CarNotFoundError(CarRegistryError):
    """No record is registered under the identifier."""

    def __init__(self, car_id: str) -> None:
        self.car_id = car_id
        super().__init__(NOT_FOUND_MESSAGE)


class BatchInsertError(CarRegistryError):
    """One or more records of a batch were rejected.

    Records of the same batch that did not collide are still committed;
    only the rejected ones are carried here.
    """

    def __init__(self, errors: list[BatchItemError]) -> None:
        self.errors = errors
        super().__init__(f"{len(errors)} record(s) rejected")

    @property
    def car_ids(self) -> list[str | None]:
        return [item.id for item in self.errors]


class CarRegistryTransportError(CarRegistryError):
    """HTTP-level failure (network, unexpected status, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class CarRegistryApiError(CarRegistryError):
    """The registry answered with a structured error body."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        endpoint: str = "",
        body: Any = None,
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        self.body = body
        super().__init__(message)


class CarRegistryDuplicateError(CarRegistryApiError):
    """Server rejected a create because the identifier exists (400)."""


class CarRegistryNotFoundError(CarRegistryApiError):
    """Server reported the identifier as absent (404)."""


class CarRegistryBatchError(CarRegistryApiError):
    """Server rejected part of a batch create (400 with ``errors``).

    The non-colliding records of the batch were committed server-side
    even though they are not listed in the response.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        errors: list[BatchItemError],
        endpoint: str = "",
        body: Any = None,
    ) -> None:
        self.errors = errors
        super().__init__(message, status_code=status_code, endpoint=endpoint, body=body)
