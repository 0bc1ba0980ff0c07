"""Data models for carregistry."""

from carregistry.models._base import RegistryBaseModel
from carregistry.models.car import CAR_EXAMPLE, Car, Place
from carregistry.models.responses import BatchErrorBody, BatchItemError, CarEntry, ErrorBody, MessageBody

__all__ = [
    "CAR_EXAMPLE",
    "BatchErrorBody",
    "BatchItemError",
    "Car",
    "CarEntry",
    "ErrorBody",
    "MessageBody",
    "Place",
    "RegistryBaseModel",
]
