#!/usr/bin/env python3
"""Fetch and print ranked disaster alerts.

Queries the NASA EONET and USGS feeds once and prints the merged,
ranked list. Nothing is stored or sent anywhere.

Usage:
    # Alerts near Kochi within the default radius
    python scripts/fetch_alerts.py --lat 9.93 --lon 76.26

    # Alerts near a point within 200 km, as JSON
    python scripts/fetch_alerts.py --lat 28.61 --lon 77.21 --radius 200 --json

    # Alerts relevant to a region
    python scripts/fetch_alerts.py --state Kerala --city Kochi --lat 9.93 --lon 76.26

Environment:
    CONFIG_PATH: Path to config file (default: config/config.yaml)
    LOG_LEVEL: Logging level (default: WARNING)
"""

import argparse
import asyncio
import json
import logging
import os
import sys

from disaster_alerts.aggregator import AlertAggregator
from disaster_alerts.api_handler import alert_to_dict
from disaster_alerts.core.formatter import format_alert_summary, format_time_ago
from disaster_alerts.shell.config_loader import load_config

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "WARNING").upper(),
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fetch ranked disaster alerts from NASA EONET and USGS",
    )
    parser.add_argument("--lat", type=float, help="Observer latitude")
    parser.add_argument("--lon", type=float, help="Observer longitude")
    parser.add_argument("--radius", type=float, help="Radius in km (default: from config)")
    parser.add_argument("--state", help="Region name for regional filtering")
    parser.add_argument("--city", help="City name for regional filtering")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of text")
    parser.add_argument("--config", help="Path to config file")

    args = parser.parse_args(argv)

    if (args.lat is None) != (args.lon is None):
        parser.error("--lat and --lon must be given together")
    if (args.state is None) != (args.city is None):
        parser.error("--state and --city must be given together")

    return args


async def run(args: argparse.Namespace) -> list:
    config = load_config(args.config)
    aggregator = AlertAggregator(config)

    if args.state:
        return await aggregator.get_regional_alerts(
            args.state, args.city, args.lat, args.lon,
        )

    return await aggregator.get_all_alerts(args.lat, args.lon, args.radius)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    alerts = asyncio.run(run(args))

    if args.json:
        print(json.dumps([alert_to_dict(a) for a in alerts], indent=2, ensure_ascii=False))
        return 0

    if not alerts:
        print("No alerts found (or both feeds were unavailable).")
        return 0

    print(f"{len(alerts)} alert(s):\n")
    for alert in alerts:
        print(format_alert_summary(alert))
        print(f"    {alert.description}")
        print(f"    {format_time_ago(alert.start_time)}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
