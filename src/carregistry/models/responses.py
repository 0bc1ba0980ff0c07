"""Response payload models shared by the server and the client."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class CarEntry(BaseModel):
    """An ``{id, value}`` pair as returned by list and get."""

    model_config = ConfigDict(frozen=True)

    id: str
    value: dict[str, Any]


class BatchItemError(BaseModel):
    """One rejected record of a batch create."""

    model_config = ConfigDict(frozen=True)

    id: str | None
    error: str


class ErrorBody(BaseModel):
    model_config = ConfigDict(frozen=True)

    error: str


class BatchErrorBody(BaseModel):
    model_config = ConfigDict(frozen=True)

    errors: list[BatchItemError]


class MessageBody(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str
