#!/usr/bin/env python3
"""Load cars from a JSON file into a running carregistry server.

Usage
-----
::

    carregistry &
    python scripts/seed_cars.py cars.json

The file holds either one car object or an array of cars. Arrays are
sent as a single batch; when some identifiers already exist the server
rejects them and registers the rest, and this script lists the rejected
ones.

Options::

    --url URL        Server base URL (default: from CAR_REGISTRY_* env)
    --dump           Print the full registry afterwards
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from carregistry import CarRegistryBatchError, CarRegistryClient, CarRegistryError, RegistryConfig


async def main() -> int:
    parser = argparse.ArgumentParser(description="Seed a carregistry server from a JSON file.")
    parser.add_argument("path", type=Path, help="JSON file with a car object or an array of cars")
    parser.add_argument("--url", help="Server base URL (default: from CAR_REGISTRY_* env)")
    parser.add_argument("--dump", action="store_true", help="Print the full registry afterwards")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    payload: Any = json.loads(args.path.read_text(encoding="utf-8"))
    target = args.url or RegistryConfig.from_env()

    async with CarRegistryClient(target) as client:
        try:
            if isinstance(payload, list):
                created = await client.create_cars(payload)
                print(f"Registered {len(created)} car(s)")
            else:
                await client.create_car(payload)
                print(f"Registered car {payload.get('id')}")
        except CarRegistryBatchError as exc:
            print(f"Rejected {len(exc.errors)} car(s); the others were registered:", file=sys.stderr)
            for item in exc.errors:
                print(f"  {item.id}: {item.error}", file=sys.stderr)
        except CarRegistryError as exc:
            print(f"Seeding failed: {exc}", file=sys.stderr)
            return 1

        if args.dump:
            entries = await client.list_cars()
            print(json.dumps([entry.model_dump() for entry in entries], indent=2, ensure_ascii=False))

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
