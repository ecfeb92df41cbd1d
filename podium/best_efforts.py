from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from .models import Activity


@dataclass(frozen=True)
class BestEfforts:
    longest: Activity
    fastest_avg: Activity
    absolute_max_speed: Activity


def _first_max(activities: Sequence[Activity], key: Callable[[Activity], float]) -> Activity:
    """Left scan that only replaces the leader on a strict improvement.

    Ties therefore keep the earliest activity in feed order.
    """
    best = activities[0]
    best_value = key(best)
    for activity in activities[1:]:
        value = key(activity)
        if value > best_value:
            best = activity
            best_value = value
    return best


def best_stats(activities: Iterable[Activity], activity_type: str) -> BestEfforts | None:
    relevant = [activity for activity in activities if activity.type == activity_type]
    if not relevant:
        return None
    return BestEfforts(
        longest=_first_max(relevant, lambda activity: activity.distance),
        fastest_avg=_first_max(relevant, lambda activity: activity.average_speed),
        absolute_max_speed=_first_max(relevant, lambda activity: activity.max_speed),
    )
