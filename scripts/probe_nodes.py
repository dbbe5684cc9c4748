#!/usr/bin/env python3
"""Locate a set of node hosts and show which one a target would land on.

Usage
-----
::

    python scripts/probe_nodes.py node-a.example.com node-b.example.com:2333

Options::

    --region CODE        Place a target from this voice region (e.g. rotterdam)
    --lat/--lon DEG      Place a target at this coordinate
    --json               Output as machine-readable JSON
    --timeout SECONDS    Per-provider lookup timeout (default: GEONODE_LOOKUP_TIMEOUT or 4.5)

Without ``--region`` or ``--lat/--lon`` the target is this machine's own
public address.
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pygeonode import (  # noqa: E402
    Coordinate,
    GeoBalancer,
    GeoNodeConfig,
    NodeInfo,
    RegionRef,
    haversine_km,
    lookup_region,
)


@dataclasses.dataclass
class _StaticRegistry:
    nodes: list[NodeInfo]

    def create(self, options: dict[str, Any]) -> dict[str, Any]:
        return dict(options)

    def update_voice_state(self, payload: Any) -> None:
        return None


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _target_from_args(parser: argparse.ArgumentParser, args: argparse.Namespace) -> Coordinate | RegionRef | None:
    if args.region:
        if lookup_region(args.region) is None:
            parser.error(f"unknown region {args.region!r}")
        return RegionRef(region=args.region)
    if args.lat is not None or args.lon is not None:
        if args.lat is None or args.lon is None:
            parser.error("--lat and --lon must be given together")
        return Coordinate(lat=args.lat, lon=args.lon)
    return None


async def main() -> None:
    parser = argparse.ArgumentParser(description="Geolocate node hosts and pick the nearest one for a target.")
    parser.add_argument("hosts", nargs="+", help="Node hosts, optionally with :port")
    parser.add_argument("--region", help="Target voice region code")
    parser.add_argument("--lat", type=float, help="Target latitude")
    parser.add_argument("--lon", type=float, help="Target longitude")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--timeout", type=float, help="Per-provider lookup timeout in seconds")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    target = _target_from_args(parser, args)
    overrides: dict[str, Any] = {"debug": args.verbose}
    if args.timeout is not None:
        overrides["lookup_timeout"] = args.timeout
    config = GeoNodeConfig.from_env(**overrides)

    registry = _StaticRegistry([NodeInfo(host=host) for host in args.hosts])

    async with GeoBalancer(config) as balancer:
        balancer.start(registry)
        await balancer.refresh_now()
        # The first pick may kick off a self lookup; pick again once it lands.
        chosen = balancer.select(target)
        await balancer.tasks.join()
        chosen = balancer.select(target)
        origin = balancer.cache.self_location if target is None else None
        if isinstance(target, Coordinate):
            origin = target
        elif isinstance(target, RegionRef):
            origin = lookup_region(target.region)
        nodes = balancer.cache.nodes

    result: dict[str, Any] = {
        "target": origin.model_dump() if origin is not None else None,
        "chosen": chosen,
        "nodes": [],
    }
    for node in registry.nodes:
        coordinate = nodes.get(node.host)
        entry: dict[str, Any] = {
            "host": node.host,
            "location": coordinate.model_dump() if coordinate is not None else None,
            "distance_km": None,
        }
        if coordinate is not None and origin is not None:
            entry["distance_km"] = round(haversine_km(origin, coordinate), 1)
        result["nodes"].append(entry)

    if args.json_mode:
        print(json.dumps(result, indent=2, ensure_ascii=False))
        return

    out: list[str] = [_section("pygeonode probe_nodes")]
    out.append(f"  target    : {result['target'] or 'unknown'}")
    for entry in result["nodes"]:
        loc = entry["location"]
        where = f"{loc['lat']:.2f},{loc['lon']:.2f}" if loc else "unresolved"
        dist = f"{entry['distance_km']} km" if entry["distance_km"] is not None else "-"
        marker = "*" if entry["host"] == chosen else " "
        out.append(f"  {marker} {entry['host']:<40} {where:<18} {dist}")
    out.append(f"  chosen    : {chosen}")
    print("\n".join(out))


if __name__ == "__main__":
    asyncio.run(main())
