from __future__ import annotations

import contextlib
from collections.abc import AsyncIterator

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from carregistry.client import CarRegistryClient
from carregistry.exceptions import (
    CarRegistryApiError,
    CarRegistryBatchError,
    CarRegistryDuplicateError,
    CarRegistryNotFoundError,
    CarRegistryTransportError,
)
from carregistry.models.car import Car, Place
from carregistry.models.responses import BatchItemError, CarEntry
from carregistry.server import create_app
from carregistry.state.store import CarStore


@contextlib.asynccontextmanager
async def _registry(app: web.Application) -> AsyncIterator[CarRegistryClient]:
    async with TestServer(app) as server:
        async with CarRegistryClient(str(server.make_url(""))) as client:
            yield client


@pytest.mark.asyncio
async def test_crud_round_trip() -> None:
    store = CarStore()
    async with _registry(create_app(store)) as client:
        car = Car(id="001", image_url="https://image", name="Gaspar", place=Place(lat=1.5, long=-2))
        created = await client.create_car(car)
        assert created["imageUrl"] == "https://image"

        entry = await client.get_car("001")
        assert entry == CarEntry(id="001", value=created)

        updated = await client.update_car("001", {"id": "001", "name": "Renamed"})
        assert updated == {"id": "001", "name": "Renamed"}
        assert (await client.get_car("001")).value == updated

        assert await client.delete_car("001") == "Item deletado com sucesso"
        assert await client.list_cars() == []


@pytest.mark.asyncio
async def test_error_mapping() -> None:
    store = CarStore([{"id": "001"}])
    async with _registry(create_app(store)) as client:
        with pytest.raises(CarRegistryDuplicateError) as dup:
            await client.create_car({"id": "001"})
        assert dup.value.status_code == 400

        with pytest.raises(CarRegistryNotFoundError) as missing:
            await client.get_car("nope")
        assert missing.value.status_code == 404
        assert missing.value.endpoint == "/car/nope"

        with pytest.raises(CarRegistryBatchError) as batch:
            await client.create_cars([{"id": "001"}, {"id": "002"}])
        assert batch.value.errors == [BatchItemError(id="001", error="ID já existe")]

        with pytest.raises(CarRegistryApiError) as invalid:
            await client.create_car({"name": "no id"})
        assert not isinstance(invalid.value, CarRegistryDuplicateError)

    assert "002" in store


@pytest.mark.asyncio
async def test_non_json_response_raises_transport_error() -> None:
    async def broken(_request: web.Request) -> web.Response:
        return web.Response(status=502, text="<html>bad gateway</html>")

    app = web.Application()
    app.router.add_get("/car", broken)
    async with _registry(app) as client:
        with pytest.raises(CarRegistryTransportError) as exc_info:
            await client.list_cars()

    assert exc_info.value.status_code == 502
    assert exc_info.value.endpoint == "/car"


@pytest.mark.asyncio
async def test_request_outside_context_raises() -> None:
    client = CarRegistryClient()

    with pytest.raises(CarRegistryTransportError):
        await client.list_cars()


@pytest.mark.asyncio
@pytest.mark.parametrize("car_id", ["a/b", "x?y", "n#1", "50%", "sp ace"])
async def test_ids_with_reserved_characters_round_trip(car_id: str) -> None:
    store = CarStore()
    async with _registry(create_app(store)) as client:
        await client.create_car({"id": car_id, "name": "Gaspar"})

        entry = await client.get_car(car_id)
        assert entry == CarEntry(id=car_id, value={"id": car_id, "name": "Gaspar"})

        assert await client.update_car(car_id, {"id": car_id, "name": "Renamed"}) == {"id": car_id, "name": "Renamed"}
        assert await client.delete_car(car_id) == "Item deletado com sucesso"

        with pytest.raises(CarRegistryNotFoundError):
            await client.get_car(car_id)

    assert car_id not in store
