from __future__ import annotations

import pytest

from carregistry.cli import build_parser
from carregistry.config import RegistryConfig
from carregistry.exceptions import CarRegistryConfigError


def test_defaults() -> None:
    config = RegistryConfig()
    assert config.base_url == "http://localhost:3000"
    assert config.base_path == "/car"
    assert config.docs_path == "/api-docs"


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CAR_REGISTRY_HOST", "0.0.0.0")
    monkeypatch.setenv("CAR_REGISTRY_PORT", "8080")
    monkeypatch.setenv("CAR_REGISTRY_LOG_LEVEL", "debug")
    monkeypatch.setenv("CAR_REGISTRY_ACCESS_LOG", "yes")

    config = RegistryConfig.from_env()

    assert config.host == "0.0.0.0"
    assert config.port == 8080
    assert config.log_level == "debug"
    assert config.access_log is True


def test_overrides_win_and_none_is_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CAR_REGISTRY_PORT", "8080")

    assert RegistryConfig.from_env(port=9000).port == 9000
    assert RegistryConfig.from_env(port=None).port == 8080


@pytest.mark.parametrize("port", ["http", "0", "70000"])
def test_invalid_port_rejected(monkeypatch: pytest.MonkeyPatch, port: str) -> None:
    monkeypatch.setenv("CAR_REGISTRY_PORT", port)

    with pytest.raises(CarRegistryConfigError):
        RegistryConfig.from_env()


def test_paths_normalized_and_validated() -> None:
    assert RegistryConfig(base_path="/cars/").base_path == "/cars"
    with pytest.raises(CarRegistryConfigError):
        RegistryConfig(base_path="cars")
    with pytest.raises(CarRegistryConfigError):
        RegistryConfig(docs_path="/")


def test_cli_parser() -> None:
    args = build_parser().parse_args(["--port", "4000", "-v"])
    assert args.port == 4000
    assert args.host is None
    assert args.verbose is True
