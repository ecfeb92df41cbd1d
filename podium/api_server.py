from __future__ import annotations

import logging
from datetime import datetime, timezone

from flask import Flask, request

from .activity_filter import parse_tab
from .config import Settings
from .dashboard_view import build_dashboard_view, dashboard_payload
from .formatting import normalize_distance_unit
from .models import AthleteStats, activities_from_payload
from .strava_client import fetch_activities, fetch_athlete_stats


logger = logging.getLogger(__name__)

app = Flask(__name__)
settings = Settings.from_env()


def _bearer_token() -> str | None:
    header = str(request.headers.get("Authorization") or "").strip()
    if header.lower().startswith("bearer "):
        token = header[7:].strip()
        if token:
            return token
    return settings.strava_access_token


def _requested_unit(raw_value: object) -> str:
    if raw_value is None or not str(raw_value).strip():
        return settings.distance_unit
    return normalize_distance_unit(raw_value)


@app.get("/health")
def health() -> tuple[dict, int]:
    return (
        {
            "status": "ok",
            "time_utc": datetime.now(timezone.utc).isoformat(),
        },
        200,
    )


@app.get("/dashboard/data.json")
def dashboard_data_get() -> tuple[dict, int]:
    token = _bearer_token()
    if not token:
        return {"status": "error", "error": "Missing Strava access token."}, 401

    tab = parse_tab(request.args.get("tab"), settings.default_tab)
    unit = _requested_unit(request.args.get("units"))
    athlete_id = str(request.args.get("athlete_id") or "").strip() or settings.strava_athlete_id

    activities = fetch_activities(
        token,
        per_page=settings.activities_per_page,
        timeout_seconds=settings.request_timeout_seconds,
    )
    stats = fetch_athlete_stats(token, athlete_id, timeout_seconds=settings.request_timeout_seconds)
    try:
        view = build_dashboard_view(
            activities,
            tab,
            stats=stats,
            thresholds=settings.leaderboard_thresholds_km,
            limit=settings.leaderboard_limit,
        )
        payload = dashboard_payload(view, distance_unit=unit)
    except Exception as exc:
        logger.exception("Dashboard payload build failed.")
        return {"status": "error", "error": f"Failed to build dashboard payload: {exc}"}, 500
    return payload, 200


@app.post("/dashboard/view")
def dashboard_view_post() -> tuple[dict, int]:
    body = request.get_json(silent=True)
    if not isinstance(body, dict) or not isinstance(body.get("activities"), list):
        return {"status": "error", "error": "Body must be a JSON object with an 'activities' list."}, 400

    view = build_dashboard_view(
        activities_from_payload(body["activities"]),
        parse_tab(body.get("tab"), settings.default_tab),
        stats=AthleteStats.from_payload(body.get("stats")),
        thresholds=settings.leaderboard_thresholds_km,
        limit=settings.leaderboard_limit,
    )
    return dashboard_payload(view, distance_unit=_requested_unit(body.get("units"))), 200


def main() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    logger.info("Dashboard API listening on port %s", settings.api_port)
    app.run(host="0.0.0.0", port=settings.api_port)


if __name__ == "__main__":
    main()
