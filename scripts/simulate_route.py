"""Route simulation entry point — animates a traveler along a route in the terminal.

Usage:
    uv run python scripts/simulate_route.py                       # built-in demo route
    uv run python scripts/simulate_route.py --route route.geojson --speed 5
    uv run python scripts/simulate_route.py --dry-run --geojson   # print every tick at once
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()

from route_sim.errors import RouteSimError  # noqa: E402
from route_sim.geo.loader import load_path  # noqa: E402
from route_sim.geo.models import GeoPoint  # noqa: E402
from route_sim.geo.path_index import PathIndex  # noqa: E402
from route_sim.render.geojson import RouteRenderer  # noqa: E402
from route_sim.simulation.config import SimulationConfig  # noqa: E402
from route_sim.simulation.models import SimulationTick  # noqa: E402
from route_sim.simulation.simulator import RouteSimulator  # noqa: E402
from route_sim.simulation.ticks import iter_ticks  # noqa: E402

# Demo walk: user location to destination, [longitude, latitude]
DEMO_ROUTE = [
    GeoPoint(2.374400000000037, 48.9052),
    GeoPoint(2.3488, 48.8534),
]


def _print_tick(tick: SimulationTick, renderer: RouteRenderer, geojson: bool) -> None:
    if geojson:
        print(json.dumps(renderer.render(tick)), flush=True)
        return
    flag = "  [arrived]" if tick.final else ""
    print(
        f"  #{tick.tick:<4d} {renderer.format_progress(tick.distance):>6}  "
        f"({tick.position.lon:.6f}, {tick.position.lat:.6f})  "
        f"segment {tick.projection.segment_index}{flag}",
        flush=True,
    )


def main() -> None:
    ap = argparse.ArgumentParser(description="Route simulator — move a marker along a route")
    ap.add_argument("--route", default="", help="GeoJSON LineString / directions response file")
    ap.add_argument("--speed", type=float, default=None, help="Speed in metres per second")
    ap.add_argument("--interval", type=int, default=None, help="Tick interval in milliseconds")
    ap.add_argument("--metric", choices=["haversine", "planar"], default=None)
    ap.add_argument("--dry-run", action="store_true", help="Print all ticks without waiting")
    ap.add_argument("--geojson", action="store_true", help="Print a FeatureCollection per tick")
    ap.add_argument(
        "--log-level", default=os.environ.get("ROUTE_SIM_LOG_LEVEL", "WARNING"), help="Logging level"
    )
    args = ap.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = SimulationConfig.from_env(
            tick_interval_ms=args.interval, speed_mps=args.speed, metric=args.metric
        )
        path = load_path(args.route) if args.route else DEMO_ROUTE
        index = PathIndex.build(path, metric=config.metric)
    except RouteSimError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(2)

    renderer = RouteRenderer(index)
    print(
        f"Route: {len(index.points)} points, length {index.total_length():.1f} "
        f"({config.metric}), {config.speed_mps} per s every {config.tick_interval_ms} ms",
        file=sys.stderr,
    )

    if args.dry_run:
        try:
            for tick in iter_ticks(index, config):
                _print_tick(tick, renderer, args.geojson)
        except RouteSimError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            sys.exit(2)
        return

    sim = RouteSimulator(index, config)
    sim.add_listener(lambda tick: _print_tick(tick, renderer, args.geojson))
    try:
        sim.start()
    except RouteSimError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(2)

    print("Simulation running. Press Ctrl+C to stop.", file=sys.stderr, flush=True)
    try:
        while not sim.join(timeout=0.5):
            pass
    except KeyboardInterrupt:
        pass
    finally:
        sim.stop()
        print("\nSimulation stopped.", file=sys.stderr)


if __name__ == "__main__":
    main()
