#!/usr/bin/env python3
"""Drive one charging round trip against a live ground control.

Registers the configured fleet, requests charging for an aircraft node,
and (unless ``--no-complete``) completes it so the vehicle drives home.

Configuration comes from ``CHARGE_*`` environment variables; see
:meth:`aerocharge.ChargeConfig.from_env`.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from aerocharge import ChargeConfig, ChargeError, ChargeService  # noqa: E402


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("node", help="aircraft node to charge")
    parser.add_argument("--base-url", help="ground control base URL (overrides CHARGE_GROUND_CONTROL_URL)")
    parser.add_argument("--fleet-size", type=int, help="vehicles to register (overrides CHARGE_FLEET_SIZE)")
    parser.add_argument("--poll-interval", type=float, default=2.0, help="seconds between wait=true retries")
    parser.add_argument("--max-polls", type=int, default=30, help="give up after this many wait=true replies")
    parser.add_argument("--no-complete", action="store_true", help="leave the vehicle at the aircraft")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable DEBUG logging")
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> int:
    overrides: dict[str, object] = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.fleet_size is not None:
        overrides["fleet_size"] = args.fleet_size
    config = ChargeConfig.from_env(**overrides)

    async with ChargeService(config) as service:
        vehicles = await service.start()
        if not vehicles:
            print("No vehicles registered; is ground control reachable?", file=sys.stderr)
            return 1

        for poll in range(1, args.max_polls + 1):
            response = await service.handle_charge_request({"nodeId": args.node})
            if not response.wait:
                print(f"Vehicle arrived at {args.node} after {poll} request(s)")
                break
            await asyncio.sleep(args.poll_interval)
        else:
            print(f"No vehicle became available for {args.node}", file=sys.stderr)
            return 2

        if not args.no_complete:
            await service.handle_completion({"nodeId": args.node})
            print("Vehicle returned to its garage")

        for info in service.get_vehicles_info():
            print(f"  {info.vehicle_id}: {info.status} at {info.current_node}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return asyncio.run(_run(args))
    except ChargeError as exc:
        print(f"Dispatch failed: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
