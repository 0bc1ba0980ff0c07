"""aiohttp binding of the car registry.

Routes mirror the collection/item layout of the reference service::

    POST   /car        create one car (object body) or many (array body)
    GET    /car        list every car as ``{id, value}``
    GET    /car/{id}   fetch one car as ``{id, value}``
    PATCH  /car/{id}   replace one car (answers 201)
    DELETE /car/{id}   remove one car

Registry errors are raised by :class:`CarStore` and translated into
status codes and bodies by :func:`error_middleware`.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from aiohttp import web

from carregistry._openapi import build_openapi, render_swagger_ui
from carregistry.config import RegistryConfig
from carregistry.exceptions import (
    BatchInsertError,
    CarNotFoundError,
    DuplicateIdError,
    InvalidRecordError,
)
from carregistry.models.responses import BatchErrorBody, CarEntry, ErrorBody, MessageBody
from carregistry.state.store import CarStore

_logger = logging.getLogger(__name__)

INVALID_JSON_MESSAGE = "JSON inválido"
DELETED_MESSAGE = "Item deletado com sucesso"

STORE_KEY = web.AppKey("store", CarStore)
CONFIG_KEY = web.AppKey("config", RegistryConfig)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def _error(status: int, message: str) -> web.Response:
    return web.json_response(ErrorBody(error=message).model_dump(), status=status)


@web.middleware
async def log_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    _logger.info("%s %s", request.method, request.path)
    return await handler(request)


@web.middleware
async def error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    try:
        return await handler(request)
    except BatchInsertError as exc:
        body = BatchErrorBody(errors=exc.errors).model_dump()
        return web.json_response(body, status=400)
    except DuplicateIdError as exc:
        return _error(400, str(exc))
    except InvalidRecordError as exc:
        return _error(400, str(exc))
    except CarNotFoundError as exc:
        return _error(404, str(exc))


async def _read_json(request: web.Request) -> Any:
    try:
        return await request.json()
    except (ValueError, RecursionError) as exc:
        _logger.debug("Rejected %s %s: %s", request.method, request.path, exc)
        raise web.HTTPBadRequest(
            text=ErrorBody(error=INVALID_JSON_MESSAGE).model_dump_json(),
            content_type="application/json",
        ) from exc


async def create_cars(request: web.Request) -> web.Response:
    store = request.app[STORE_KEY]
    body = await _read_json(request)
    if isinstance(body, list):
        return web.json_response(store.create_many(body), status=201)
    return web.json_response(store.create(body), status=201)


async def list_cars(request: web.Request) -> web.Response:
    store = request.app[STORE_KEY]
    entries = [CarEntry(id=car_id, value=record).model_dump() for car_id, record in store.list()]
    return web.json_response(entries)


async def get_car(request: web.Request) -> web.Response:
    store = request.app[STORE_KEY]
    car_id, record = store.get(request.match_info["id"])
    return web.json_response(CarEntry(id=car_id, value=record).model_dump())


async def update_car(request: web.Request) -> web.Response:
    store = request.app[STORE_KEY]
    body = await _read_json(request)
    # 201 on a successful update is what existing clients of the service expect.
    return web.json_response(store.update(request.match_info["id"], body), status=201)


async def delete_car(request: web.Request) -> web.Response:
    store = request.app[STORE_KEY]
    store.delete(request.match_info["id"])
    return web.json_response(MessageBody(message=DELETED_MESSAGE).model_dump())


async def openapi_document(request: web.Request) -> web.Response:
    return web.json_response(build_openapi(request.app[CONFIG_KEY]))


async def swagger_ui(request: web.Request) -> web.Response:
    config = request.app[CONFIG_KEY]
    return web.Response(text=render_swagger_ui(f"{config.docs_path}/openapi.json"), content_type="text/html")


def create_app(store: CarStore | None = None, config: RegistryConfig | None = None) -> web.Application:
    """Build the aiohttp application serving *store*.

    A fresh, empty store is created when none is given.
    """
    if config is None:
        config = RegistryConfig()
    app = web.Application(middlewares=[log_middleware, error_middleware])
    app[STORE_KEY] = store if store is not None else CarStore()
    app[CONFIG_KEY] = config

    collection = config.base_path
    item = f"{collection}/{{id}}"
    app.router.add_post(collection, create_cars)
    app.router.add_get(collection, list_cars)
    app.router.add_get(item, get_car)
    app.router.add_patch(item, update_car)
    app.router.add_delete(item, delete_car)
    app.router.add_get(config.docs_path, swagger_ui)
    app.router.add_get(f"{config.docs_path}/openapi.json", openapi_document)
    return app


def run_server(config: RegistryConfig, store: CarStore | None = None) -> None:
    """Serve the registry until the process is interrupted."""
    app = create_app(store, config)

    async def _announce(_app: web.Application) -> None:
        _logger.info("Servidor rodando em %s", config.base_url)

    app.on_startup.append(_announce)
    web.run_app(
        app,
        host=config.host,
        port=config.port,
        access_log=logging.getLogger("aiohttp.access") if config.access_log else None,
        print=None,
    )
