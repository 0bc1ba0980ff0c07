"""Car record model.

The store treats records as opaque JSON objects; this model documents
the shape clients are expected to send and gives the client library a
typed way to build and read records.
"""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, Field, field_validator

from carregistry._normalize import normalize_car_id, safe_float
from carregistry.models._base import RegistryBaseModel

CAR_EXAMPLE: dict[str, Any] = {
    "id": "001",
    "imageUrl": "https://image",
    "year": "2020/2020",
    "name": "Gaspar",
    "licence": "ABC-1234",
    "place": {"lat": 0, "long": 0},
}


class Place(RegistryBaseModel):
    """Geographic position of the car."""

    lat: float | None = Field(default=None, description="Latitude do local")
    long: float | None = Field(default=None, description="Longitude do local")

    @field_validator("lat", "long", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)


class Car(RegistryBaseModel):
    """A car as described by the registry's public contract.

    Unknown keys are kept so a record survives a round-trip through the
    model unchanged.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
        # Documented as required for clients; the store only relies on ``id``.
        json_schema_extra={"example": CAR_EXAMPLE, "required": list(CAR_EXAMPLE)},
    )

    id: str = Field(description="ID do carro")
    image_url: str | None = Field(default=None, alias="imageUrl", description="URL da imagem do carro")
    year: str | None = Field(default=None, description="Ano do carro no formato '2020/2020'")
    name: str | None = Field(default=None, description="Nome do carro")
    licence: str | None = Field(default=None, description="Placa do carro")
    place: Place | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        car_id = normalize_car_id(value)
        if car_id is None:
            raise ValueError("id must be a non-empty string or number")
        return car_id
