#!/usr/bin/env python3
"""Live Tronity read/charge tool.

Opens the configured vehicle, prints state of charge, range and charge
status, and optionally starts or stops charging.

Configuration comes from the environment:
- TRONITY_CLIENT_ID, TRONITY_CLIENT_SECRET (required)
- TRONITY_ACCESS_TOKEN, TRONITY_REFRESH_TOKEN (optional, both or neither)
- TRONITY_VIN (optional when the account sees one vehicle)
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pytronity import TronityConfig, TronityError, TronityVehicle  # noqa: E402
from pytronity._redact import redact_for_log  # noqa: E402


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Read a vehicle through the Tronity API")
    parser.add_argument(
        "--vin",
        default=None,
        help="Target VIN. Overrides TRONITY_VIN.",
    )
    action = parser.add_mutually_exclusive_group()
    action.add_argument("--start", action="store_true", help="Start charging after reading.")
    action.add_argument("--stop", action="store_true", help="Stop charging after reading.")
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Print the raw bulk payload as JSON (sensitive keys redacted).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable DEBUG logging.")
    return parser.parse_args()


async def _run(args: argparse.Namespace) -> int:
    overrides = {"vin": args.vin} if args.vin else {}
    try:
        config = TronityConfig.from_env(**overrides)
    except TronityError as exc:
        print(f"Configuration error: {exc}")
        return 2

    async with TronityVehicle(config) as vehicle:
        print(f"Vehicle: {vehicle.vehicle.display_name or vehicle.vehicle.id} (vin={vehicle.vehicle.vin})")

        soc = await vehicle.soc()
        range_km = await vehicle.range()
        status = await vehicle.status()
        failed = False
        for label, reading, unit in (("SoC", soc, "%"), ("Range", range_km, " km")):
            if reading.ok:
                print(f"{label:<8}{reading.value}{unit}")
            else:
                print(f"{label:<8}FAIL ({reading.error})")
                failed = True
        print(f"{'Status':<8}{status.value.name} ({status.value.value})")

        if args.raw:
            snapshot = await vehicle.snapshot()
            print(json.dumps(redact_for_log(snapshot.raw), indent=2, sort_keys=True))

        if args.start:
            await vehicle.start_charge()
            print("Charge start requested")
        elif args.stop:
            await vehicle.stop_charge()
            print("Charge stop requested")

    return 1 if failed else 0


def main() -> int:
    args = _parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
