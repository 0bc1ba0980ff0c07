"""carregistry - in-memory car registry served over HTTP."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("carregistry")
except PackageNotFoundError:
    __version__ = "0+local"
from carregistry.client import CarRegistryClient
from carregistry.config import RegistryConfig
from carregistry.exceptions import (
    BatchInsertError,
    CarNotFoundError,
    CarRegistryApiError,
    CarRegistryBatchError,
    CarRegistryConfigError,
    CarRegistryDuplicateError,
    CarRegistryError,
    CarRegistryNotFoundError,
    CarRegistryTransportError,
    DuplicateIdError,
    InvalidRecordError,
)
from carregistry.models import BatchItemError, Car, CarEntry, Place
from carregistry.server import create_app, run_server
from carregistry.state import CarStore

__all__ = [
    "__version__",
    "BatchInsertError",
    "BatchItemError",
    "Car",
    "CarEntry",
    "CarNotFoundError",
    "CarRegistryApiError",
    "CarRegistryBatchError",
    "CarRegistryClient",
    "CarRegistryConfigError",
    "CarRegistryDuplicateError",
    "CarRegistryError",
    "CarRegistryNotFoundError",
    "CarRegistryTransportError",
    "CarStore",
    "DuplicateIdError",
    "InvalidRecordError",
    "Place",
    "RegistryConfig",
    "create_app",
    "run_server",
]
