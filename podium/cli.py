from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from .activity_filter import TABS, parse_tab
from .config import Settings
from .dashboard_view import build_dashboard_view, dashboard_payload
from .formatting import DISTANCE_UNITS
from .models import Activity, AthleteStats, activities_from_payload
from .strava_client import fetch_activities, fetch_athlete_stats
from .text_report import render_dashboard_text


logger = logging.getLogger(__name__)


def _read_json_file(path: str) -> object:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Show best efforts and ride leaderboards for recent activities.")
    parser.add_argument(
        "--tab",
        help=f"Tab to show ({', '.join(tab.value for tab in TABS)}) or a literal activity type.",
    )
    parser.add_argument("--units", choices=DISTANCE_UNITS, help="Display distance unit.")
    parser.add_argument("--input", help="Read activities from a JSON file instead of Strava.")
    parser.add_argument("--stats-input", help="Read athlete stats from a JSON file.")
    parser.add_argument("--format", choices=("text", "json"), default="text", help="Output format.")
    return parser


def _load_data(args: argparse.Namespace, settings: Settings) -> tuple[list[Activity], AthleteStats | None]:
    stats = AthleteStats.from_payload(_read_json_file(args.stats_input)) if args.stats_input else None
    if args.input:
        return activities_from_payload(_read_json_file(args.input)), stats

    settings.validate_fetch()
    token = settings.strava_access_token or ""
    activities = fetch_activities(
        token,
        per_page=settings.activities_per_page,
        timeout_seconds=settings.request_timeout_seconds,
    )
    if stats is None:
        stats = fetch_athlete_stats(
            token,
            settings.strava_athlete_id,
            timeout_seconds=settings.request_timeout_seconds,
        )
    return activities, stats


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = Settings.from_env()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        activities, stats = _load_data(args, settings)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2
    except OSError:
        logger.exception("Could not read input file.")
        return 2

    view = build_dashboard_view(
        activities,
        parse_tab(args.tab, settings.default_tab),
        stats=stats,
        thresholds=settings.leaderboard_thresholds_km,
        limit=settings.leaderboard_limit,
    )
    payload = dashboard_payload(view, distance_unit=args.units or settings.distance_unit)

    if args.format == "json":
        sys.stdout.write(json.dumps(payload, indent=2) + "\n")
    else:
        sys.stdout.write(render_dashboard_text(payload))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
