#!/usr/bin/env python3
"""Show what the map would draw for a filter state.

Loads a catalog, resolves a filter state against it, installs one
generation on an in-memory surface and prints the visible entities, the
graphics of the generation and the extent the view would be framed at.

Usage
-----
::

    python scripts/dump_visible.py                          # bundled catalog, default filters
    python scripts/dump_visible.py --filters filters.json   # camelCase or snake_case keys
    python scripts/dump_visible.py --catalog-dir ./data --json

Options::

    --filters FILE       JSON filter state (missing fields use defaults)
    --catalog-dir DIR    Directory with vehicles.json and routes.json
    --catalog-url URL    Base URL serving vehicles.json and routes.json
    --json               Output as machine-readable JSON
    -v, --verbose        Enable DEBUG logging
"""

from __future__ import annotations

import argparse
import asyncio
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

from fleetview import (  # noqa: E402
    FilterState,
    FleetMapView,
    FleetViewConfig,
    FleetViewError,
    InMemoryMapSurface,
)

# ── helpers ──────────────────────────────────────────────────


def _load_filters(path: Path | None) -> FilterState | None:
    if path is None:
        return None
    return FilterState.model_validate(json.loads(path.read_text(encoding="utf-8")))


def _report(view: FleetMapView, surface: InMemoryMapSurface) -> dict[str, Any]:
    visible = view.visible
    handle = view.generation
    return {
        "generation": handle.number if handle else None,
        "vehicles": [v.model_dump(mode="json") for v in visible.vehicles_to_show] if visible else [],
        "routes": [r.id for r in visible.routes_to_show] if visible else [],
        "show_routes": visible.show_routes if visible else False,
        "graphics": [g.model_dump(mode="json", exclude={"popup"}) for g in handle.graphics] if handle else [],
        "extent": surface.last_extent.as_tuple() if surface.last_extent else None,
    }


def _print_text(report: dict[str, Any]) -> None:
    print(f"Generation {report['generation']}")
    print(f"  vehicles ({len(report['vehicles'])}):")
    for vehicle in report["vehicles"]:
        print(f"    {vehicle['id']:<8} {vehicle['type']:<12} {vehicle['name']}")
    print(f"  routes shown: {report['show_routes']} {report['routes']}")
    print(f"  graphics: {len(report['graphics'])}")
    for graphic in report["graphics"]:
        print(f"    {graphic['role']:<12} {graphic['geometry']['type']}")
    print(f"  extent: {report['extent']}")


async def _run(args: argparse.Namespace) -> int:
    overrides: dict[str, Any] = {}
    if args.catalog_dir:
        overrides["catalog_dir"] = args.catalog_dir
    if args.catalog_url:
        overrides["catalog_url"] = args.catalog_url
    config = FleetViewConfig.from_env(**overrides)

    surface = InMemoryMapSurface()
    filters = _load_filters(args.filters)
    async with await FleetMapView.open(surface, config=config) as view:
        if filters is not None:
            view.apply(filters)
        await view.fitter.wait()
        report = _report(view, surface)

    if args.json:
        print(json.dumps(report, indent=2))
    else:
        _print_text(report)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Show what the fleet map would draw for a filter state")
    parser.add_argument("--filters", type=Path, help="JSON filter state file")
    parser.add_argument("--catalog-dir", type=Path, help="Directory with vehicles.json and routes.json")
    parser.add_argument("--catalog-url", help="Base URL serving vehicles.json and routes.json")
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable DEBUG logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        return asyncio.run(_run(args))
    except FleetViewError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
