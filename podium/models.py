from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

from .numeric_utils import non_negative_float, non_negative_int


def parse_iso_datetime(raw_value: object) -> datetime | None:
    if not isinstance(raw_value, str):
        return None
    value = raw_value.strip()
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _as_text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


@dataclass(frozen=True)
class Activity:
    """One recorded session from the athlete's activity feed.

    Distances are meters, times are seconds and speeds are meters per second.
    Records are never mutated once built; derived views share the same objects.
    """

    id: int
    name: str
    distance: float
    moving_time: int
    elapsed_time: int
    total_elevation_gain: float
    type: str
    start_date: str
    average_speed: float
    max_speed: float
    kudos_count: int = 0

    @classmethod
    def from_payload(cls, item: Mapping[str, Any]) -> "Activity":
        return cls(
            id=non_negative_int(item.get("id")),
            name=_as_text(item.get("name")),
            distance=non_negative_float(item.get("distance")),
            moving_time=non_negative_int(item.get("moving_time")),
            elapsed_time=non_negative_int(item.get("elapsed_time")),
            total_elevation_gain=non_negative_float(item.get("total_elevation_gain")),
            type=_as_text(item.get("type") or item.get("sport_type")),
            start_date=_as_text(item.get("start_date")),
            average_speed=non_negative_float(item.get("average_speed")),
            max_speed=non_negative_float(item.get("max_speed")),
            kudos_count=non_negative_int(item.get("kudos_count")),
        )

    @property
    def started_at(self) -> datetime | None:
        return parse_iso_datetime(self.start_date)


def activities_from_payload(items: object) -> list[Activity]:
    if not isinstance(items, list):
        return []
    return [Activity.from_payload(item) for item in items if isinstance(item, Mapping)]


@dataclass(frozen=True)
class RunTotals:
    count: int = 0
    distance: float = 0.0
    moving_time: int = 0
    elevation_gain: float = 0.0

    @classmethod
    def from_payload(cls, item: object) -> "RunTotals":
        if not isinstance(item, Mapping):
            return cls()
        return cls(
            count=non_negative_int(item.get("count")),
            distance=non_negative_float(item.get("distance")),
            moving_time=non_negative_int(item.get("moving_time")),
            elevation_gain=non_negative_float(item.get("elevation_gain")),
        )


@dataclass(frozen=True)
class AthleteStats:
    recent_run_totals: RunTotals
    all_run_totals: RunTotals

    @classmethod
    def from_payload(cls, item: object) -> "AthleteStats | None":
        if not isinstance(item, Mapping):
            return None
        return cls(
            recent_run_totals=RunTotals.from_payload(item.get("recent_run_totals")),
            all_run_totals=RunTotals.from_payload(item.get("all_run_totals")),
        )
