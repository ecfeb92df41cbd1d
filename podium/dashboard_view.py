from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from .activity_filter import Category, TABS, classify, filter_activities, tab_label, type_meta
from .best_efforts import BestEfforts, best_stats
from .formatting import (
    duration_hm,
    elevation,
    format_date,
    format_distance,
    format_pace,
    format_speed,
    normalize_distance_unit,
    speed_unit_label,
)
from .leaderboard import DEFAULT_LEADERBOARD_LIMIT, LEADERBOARD_THRESHOLDS_KM, Leaderboard, build_leaderboards
from .models import Activity, AthleteStats, RunTotals


@dataclass(frozen=True)
class DashboardView:
    tab: Category | str
    activities: list[Activity]
    run_bests: BestEfforts | None
    ride_bests: BestEfforts | None
    leaderboards: list[Leaderboard]
    stats: AthleteStats | None = None


def build_dashboard_view(
    activities: Sequence[Activity],
    tab: Category | str = Category.ALL,
    *,
    stats: AthleteStats | None = None,
    thresholds: Iterable[float] = LEADERBOARD_THRESHOLDS_KM,
    limit: int = DEFAULT_LEADERBOARD_LIMIT,
) -> DashboardView:
    """Everything the dashboard shows for one tab.

    Best efforts and leaderboards are always computed from the full feed; only
    the activity list depends on the selected tab. Nothing is cached between
    calls.
    """
    return DashboardView(
        tab=tab,
        activities=filter_activities(activities, tab),
        run_bests=best_stats(activities, "Run"),
        ride_bests=best_stats(activities, "Ride"),
        leaderboards=build_leaderboards(activities, thresholds, limit=limit),
        stats=stats,
    )


def _tab_value(tab: Category | str) -> str:
    return tab.value if isinstance(tab, Category) else str(tab)


def _highlight(activity: Activity, value: str) -> dict[str, Any]:
    return {"id": activity.id, "name": activity.name, "value": value}


def _best_efforts_payload(bests: BestEfforts | None, unit: str) -> dict[str, Any] | None:
    if bests is None:
        return None
    return {
        "longest": _highlight(bests.longest, format_distance(bests.longest.distance, unit)),
        "fastest_pace": _highlight(bests.fastest_avg, format_pace(bests.fastest_avg.average_speed, unit)),
        "fastest_avg_speed": _highlight(
            bests.fastest_avg,
            format_speed(bests.fastest_avg.average_speed, unit),
        ),
        "top_speed": _highlight(
            bests.absolute_max_speed,
            format_speed(bests.absolute_max_speed.max_speed, unit),
        ),
    }


def _activity_row(activity: Activity, unit: str) -> dict[str, Any]:
    meta = type_meta(activity.type)
    return {
        "id": activity.id,
        "name": activity.name,
        "type": activity.type,
        "type_label": meta["label"],
        "icon": meta["icon"],
        "accent": meta["accent"],
        "category": classify(activity).value,
        "date": format_date(activity.start_date),
        "start_date": activity.start_date,
        "distance": format_distance(activity.distance, unit),
        "moving_time": duration_hm(activity.moving_time),
        "elapsed_time": duration_hm(activity.elapsed_time),
        "elevation_gain": elevation(activity.total_elevation_gain, unit),
        "pace": format_pace(activity.average_speed, unit),
        "average_speed": format_speed(activity.average_speed, unit),
        "kudos_count": activity.kudos_count,
    }


def _leaderboard_payload(board: Leaderboard, unit: str) -> dict[str, Any]:
    return {
        "min_km": board.min_km,
        "title": f"Best {board.min_km:g}K (Avg Speed)",
        "entries": [
            {
                "rank": rank,
                "id": ride.id,
                "name": ride.name,
                "average_speed": format_speed(ride.average_speed, unit),
                "max_speed": format_speed(ride.max_speed, unit),
                "distance": format_distance(ride.distance, unit),
                "moving_time": duration_hm(ride.moving_time),
            }
            for rank, ride in enumerate(board.rides, start=1)
        ],
        "empty_message": None if board.rides else f"No rides of {board.min_km:g} km yet.",
    }


def _totals_payload(totals: RunTotals, unit: str) -> dict[str, Any]:
    return {
        "count": totals.count,
        "distance": format_distance(totals.distance, unit),
        "moving_time": duration_hm(totals.moving_time),
        "elevation_gain": elevation(totals.elevation_gain, unit),
    }


def _stats_payload(stats: AthleteStats | None, unit: str) -> dict[str, Any] | None:
    if stats is None:
        return None
    return {
        "recent_run_totals": _totals_payload(stats.recent_run_totals, unit),
        "all_run_totals": _totals_payload(stats.all_run_totals, unit),
    }


def dashboard_payload(view: DashboardView, *, distance_unit: str = "km") -> dict[str, Any]:
    unit = normalize_distance_unit(distance_unit)
    selected = _tab_value(view.tab)
    is_run = selected == Category.RUN.value
    is_ride = selected == Category.RIDE.value

    empty_message = None
    if not view.activities:
        subject = "" if selected == Category.ALL.value else f"{selected} "
        empty_message = f"No {subject}activities in recent history."

    return {
        "tab": selected,
        "tab_label": tab_label(view.tab),
        "tabs": [
            {"value": tab.value, "label": tab_label(tab), "selected": tab.value == selected}
            for tab in TABS
        ],
        "units": {"distance": unit, "speed": speed_unit_label(unit)},
        "sections": {
            "run_highlights": is_run and view.run_bests is not None,
            "ride_highlights": is_ride and view.ride_bests is not None,
            "leaderboards": is_ride,
        },
        "best_efforts": {
            "run": _best_efforts_payload(view.run_bests, unit),
            "ride": _best_efforts_payload(view.ride_bests, unit),
        },
        "leaderboards": [_leaderboard_payload(board, unit) for board in view.leaderboards],
        "activities": [_activity_row(activity, unit) for activity in view.activities],
        "empty_message": empty_message,
        "athlete_stats": _stats_payload(view.stats, unit),
    }
