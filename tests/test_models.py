"""Tests for the car model, identifier normalization and the OpenAPI document."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from carregistry._normalize import normalize_car_id, record_car_id
from carregistry._openapi import build_openapi, render_swagger_ui
from carregistry.config import RegistryConfig
from carregistry.exceptions import InvalidRecordError
from carregistry.models.car import CAR_EXAMPLE, Car


class TestCar:
    def test_parses_wire_example(self) -> None:
        car = Car.model_validate(CAR_EXAMPLE)
        assert car.id == "001"
        assert car.image_url == "https://image"
        assert car.place is not None
        assert car.place.lat == 0.0

    def test_wire_round_trip_keeps_unknown_keys(self) -> None:
        payload = {**CAR_EXAMPLE, "color": "blue"}
        assert Car.model_validate(payload).dump_wire() == {
            **payload,
            "place": {"lat": 0.0, "long": 0.0},
        }

    def test_numeric_id_coerced(self) -> None:
        assert Car.model_validate({"id": 12}).id == "12"

    def test_missing_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Car.model_validate({"name": "Gaspar"})

    def test_unparseable_coordinates_become_none(self) -> None:
        car = Car.model_validate({"id": "1", "place": {"lat": "--", "long": "12.5"}})
        assert car.place is not None
        assert car.place.lat is None
        assert car.place.long == 12.5


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("001", "001"),
        ("", None),
        (None, None),
        (7, "7"),
        (7.0, "7"),
        (7.5, "7.5"),
        (float("nan"), None),
        (True, None),
        ({"nested": 1}, None),
    ],
)
def test_normalize_car_id(value: object, expected: str | None) -> None:
    assert normalize_car_id(value) == expected


def test_record_car_id_requires_mapping() -> None:
    assert record_car_id({"id": "x"}) == "x"
    with pytest.raises(InvalidRecordError):
        record_car_id([{"id": "x"}])


def test_openapi_document_uses_config() -> None:
    doc = build_openapi(RegistryConfig(host="example.test", port=8000, base_path="/cars"))

    assert doc["servers"] == [{"url": "http://example.test:8000", "description": "Servidor local"}]
    assert set(doc["paths"]) == {"/cars", "/cars/{id}"}
    assert doc["paths"]["/cars/{id}"]["patch"]["responses"].keys() >= {"201", "404"}
    car_schema = doc["components"]["schemas"]["Car"]
    assert "imageUrl" in car_schema["properties"]
    assert car_schema["properties"]["place"]["allOf"] == [{"$ref": "#/components/schemas/Place"}]
    assert car_schema["properties"]["place"]["nullable"] is True
    assert "Place" in doc["components"]["schemas"]


def test_swagger_page_points_at_document() -> None:
    page = render_swagger_ui("/api-docs/openapi.json")
    assert 'url: "/api-docs/openapi.json"' in page


def test_openapi_schemas_are_valid_openapi30() -> None:
    doc = build_openapi(RegistryConfig())
    schemas = doc["components"]["schemas"]

    assert '"type": "null"' not in json.dumps(doc)
    assert "anyOf" not in json.dumps(schemas)
    assert schemas["Car"]["required"] == ["id", "imageUrl", "year", "name", "licence", "place"]
    assert schemas["Car"]["properties"]["name"]["type"] == "string"
    assert schemas["Car"]["properties"]["name"]["nullable"] is True
    assert schemas["Place"]["properties"]["lat"]["type"] == "number"
    assert schemas["Place"]["properties"]["lat"]["nullable"] is True


def test_documented_required_fields_are_not_enforced() -> None:
    assert Car.model_validate({"id": "001"}).name is None
