"""Command-line entry point: ``carregistry [--host H] [--port P] [-v]``."""

from __future__ import annotations

import argparse
import logging
import sys

from carregistry.config import RegistryConfig
from carregistry.exceptions import CarRegistryConfigError
from carregistry.server import run_server


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="carregistry",
        description="Serve the in-memory car registry over HTTP.",
    )
    parser.add_argument("--host", help="Interface to bind (default: localhost, env CAR_REGISTRY_HOST)")
    parser.add_argument("--port", type=int, help="Port to listen on (default: 3000, env CAR_REGISTRY_PORT)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = RegistryConfig.from_env(host=args.host, port=args.port)
    except CarRegistryConfigError as exc:
        print(f"carregistry: {exc}", file=sys.stderr)
        return 2

    level = logging.DEBUG if args.verbose else getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    run_server(config)
    return 0
