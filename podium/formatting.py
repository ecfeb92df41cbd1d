from __future__ import annotations

import math
from typing import Any

from .models import parse_iso_datetime
from .numeric_utils import as_float

METERS_PER_KM = 1000.0
METERS_PER_MILE = 1609.34
SECONDS_PER_MINUTE = 60.0
MPS_TO_KMH = 3.6
MPS_TO_MPH = 2.23694
METERS_TO_FEET = 3.28084

PACE_UNAVAILABLE = "-"

DISTANCE_UNITS = ("km", "mi")
DEFAULT_DISTANCE_UNIT = "km"


def normalize_distance_unit(value: object) -> str:
    normalized = str(value or "").strip().lower()
    if normalized in {"mi", "mile", "miles", "imperial"}:
        return "mi"
    return DEFAULT_DISTANCE_UNIT


def _pace_for(value: Any, meters_per_unit: float, suffix: str, none_value: str) -> str:
    speed_mps = as_float(value)
    if speed_mps is None or speed_mps <= 0:
        return none_value
    minutes_per_unit = (meters_per_unit / SECONDS_PER_MINUTE) / speed_mps
    if not math.isfinite(minutes_per_unit):
        return none_value
    minutes = math.floor(minutes_per_unit)
    # truncated, so always 0-59
    seconds = math.floor((minutes_per_unit - minutes) * 60)
    return f"{minutes}:{seconds:02d} {suffix}"


def pace(value: Any, *, none_value: str = PACE_UNAVAILABLE) -> str:
    """Minutes per kilometer from an average speed in m/s, as ``M:SS /km``."""
    return _pace_for(value, METERS_PER_KM, "/km", none_value)


def pace_per_mile(value: Any, *, none_value: str = PACE_UNAVAILABLE) -> str:
    return _pace_for(value, METERS_PER_MILE, "/mi", none_value)


def speed_kmh(value: Any, *, include_unit: bool = False) -> str:
    speed_mps = as_float(value) or 0.0
    kmh = f"{speed_mps * MPS_TO_KMH:.1f}"
    if include_unit:
        return f"{kmh} km/h"
    return kmh


def speed_mph(value: Any, *, include_unit: bool = False) -> str:
    speed_mps = as_float(value) or 0.0
    mph = f"{speed_mps * MPS_TO_MPH:.1f}"
    if include_unit:
        return f"{mph} mph"
    return mph


def distance_km(value: Any, *, include_unit: bool = True) -> str:
    meters = as_float(value) or 0.0
    km = f"{meters / METERS_PER_KM:.2f}"
    if include_unit:
        return f"{km} km"
    return km


def distance_mi(value: Any, *, include_unit: bool = True) -> str:
    meters = as_float(value) or 0.0
    miles = f"{meters / METERS_PER_MILE:.2f}"
    if include_unit:
        return f"{miles} mi"
    return miles


def duration_hm(value: Any) -> str:
    """Whole hours and minutes; leftover seconds are dropped, not rounded."""
    parsed = as_float(value)
    total = int(parsed) if parsed is not None and parsed > 0 else 0
    hours = total // 3600
    minutes = (total % 3600) // 60
    return f"{hours}h {minutes}m"


def elevation(value: Any, unit: str = DEFAULT_DISTANCE_UNIT) -> str:
    meters = as_float(value) or 0.0
    if normalize_distance_unit(unit) == "mi":
        return f"{int(round(meters * METERS_TO_FEET))} ft"
    return f"{int(round(meters))} m"


def format_pace(value: Any, unit: str = DEFAULT_DISTANCE_UNIT) -> str:
    if normalize_distance_unit(unit) == "mi":
        return pace_per_mile(value)
    return pace(value)


def format_speed(value: Any, unit: str = DEFAULT_DISTANCE_UNIT) -> str:
    if normalize_distance_unit(unit) == "mi":
        return speed_mph(value)
    return speed_kmh(value)


def format_distance(value: Any, unit: str = DEFAULT_DISTANCE_UNIT) -> str:
    if normalize_distance_unit(unit) == "mi":
        return distance_mi(value)
    return distance_km(value)


def speed_unit_label(unit: str = DEFAULT_DISTANCE_UNIT) -> str:
    return "mph" if normalize_distance_unit(unit) == "mi" else "km/h"


def format_date(value: object) -> str:
    parsed = parse_iso_datetime(value)
    if parsed is None:
        return ""
    return parsed.strftime("%Y-%m-%d")
