from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .models import Activity

LEADERBOARD_THRESHOLDS_KM: tuple[float, ...] = (5, 10, 20)
DEFAULT_LEADERBOARD_LIMIT = 3
RIDE_TYPE = "Ride"


@dataclass(frozen=True)
class Leaderboard:
    min_km: float
    rides: list[Activity]


def top_rides(
    activities: Iterable[Activity],
    min_km: float,
    limit: int = DEFAULT_LEADERBOARD_LIMIT,
) -> list[Activity]:
    if limit <= 0:
        return []
    min_meters = min_km * 1000
    qualifying = [
        activity
        for activity in activities
        if activity.type == RIDE_TYPE and activity.distance >= min_meters
    ]
    # sorted() is stable with reverse=True, so equal speeds keep feed order.
    ranked = sorted(qualifying, key=lambda activity: activity.average_speed, reverse=True)
    return ranked[:limit]


def build_leaderboards(
    activities: Sequence[Activity],
    thresholds: Iterable[float] = LEADERBOARD_THRESHOLDS_KM,
    limit: int = DEFAULT_LEADERBOARD_LIMIT,
) -> list[Leaderboard]:
    return [
        Leaderboard(min_km=min_km, rides=top_rides(activities, min_km, limit=limit))
        for min_km in thresholds
    ]
