"""Server configuration for carregistry."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from carregistry.exceptions import CarRegistryConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _parse_port(value: Any) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError) as exc:
        raise CarRegistryConfigError(f"port must be an integer, got {value!r}") from exc
    if not 0 < port < 65536:
        raise CarRegistryConfigError(f"port must be between 1 and 65535, got {port}")
    return port


@dataclasses.dataclass(frozen=True)
class RegistryConfig:
    """Server configuration.

    Parameters
    ----------
    host : str
        Interface the HTTP server binds to.
    port : int
        TCP port the HTTP server listens on.
    base_path : str
        Route prefix of the car collection.
    docs_path : str
        Route serving the interactive API documentation.
    log_level : str
        Root logging level used by the command-line entry point.
    access_log : bool
        Enable aiohttp's access logger in addition to the per-request
        log line emitted by the handlers.
    """

    host: str = "localhost"
    port: int = 3000
    base_path: str = "/car"
    docs_path: str = "/api-docs"
    log_level: str = "INFO"
    access_log: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "port", _parse_port(self.port))
        for name in ("base_path", "docs_path"):
            path = getattr(self, name)
            if not path.startswith("/") or path == "/":
                raise CarRegistryConfigError(f"{name} must start with '/' and not be the root, got {path!r}")
            object.__setattr__(self, name, path.rstrip("/"))

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @classmethod
    def from_env(cls, **overrides: Any) -> RegistryConfig:
        """Create configuration from environment variables.

        Reads ``CAR_REGISTRY_HOST``, ``CAR_REGISTRY_PORT``,
        ``CAR_REGISTRY_LOG_LEVEL`` and ``CAR_REGISTRY_ACCESS_LOG``.
        Explicit keyword arguments override environment values; ``None``
        overrides are ignored so argparse defaults can be passed through.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "CAR_REGISTRY_HOST": "host",
            "CAR_REGISTRY_PORT": "port",
            "CAR_REGISTRY_LOG_LEVEL": "log_level",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        config_kwargs["access_log"] = _env_bool(env.get("CAR_REGISTRY_ACCESS_LOG"), False)

        config_kwargs.update({key: value for key, value in overrides.items() if value is not None})

        return cls(**config_kwargs)
