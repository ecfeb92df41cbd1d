from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable

from dotenv import load_dotenv

from .activity_filter import Category, parse_tab
from .formatting import normalize_distance_unit
from .leaderboard import LEADERBOARD_THRESHOLDS_KM


load_dotenv()


EnvGetter = Callable[[str], str | None]


def _str_env(*names: str, default: str = "", getenv: EnvGetter = os.getenv) -> str:
    for name in names:
        value = getenv(name)
        if value is not None:
            return value.strip()
    return default


def _optional_str_env(*names: str, getenv: EnvGetter = os.getenv) -> str | None:
    value = _str_env(*names, default="", getenv=getenv)
    return value or None


def _int_env(
    name: str,
    default: int,
    minimum: int | None = None,
    maximum: int | None = None,
    *,
    getenv: EnvGetter = os.getenv,
) -> int:
    value = getenv(name)
    if value is None:
        parsed = default
    else:
        try:
            parsed = int(value.strip())
        except ValueError:
            parsed = default

    if minimum is not None and parsed < minimum:
        parsed = minimum
    if maximum is not None and parsed > maximum:
        parsed = maximum
    return parsed


def _thresholds_env(
    name: str,
    default: tuple[float, ...],
    *,
    getenv: EnvGetter = os.getenv,
) -> tuple[float, ...]:
    value = getenv(name)
    if value is None or not value.strip():
        return default
    thresholds: list[float] = []
    for part in value.split(","):
        text = part.strip()
        if not text:
            continue
        try:
            parsed = float(text)
        except ValueError:
            return default
        if parsed < 0:
            return default
        thresholds.append(parsed)
    return tuple(thresholds) or default


@dataclass(frozen=True)
class Settings:
    strava_access_token: str | None
    strava_athlete_id: str | None

    activities_per_page: int
    request_timeout_seconds: int
    leaderboard_limit: int
    leaderboard_thresholds_km: tuple[float, ...]
    distance_unit: str
    default_tab: Category | str

    log_level: str
    api_port: int

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            strava_access_token=_optional_str_env("STRAVA_ACCESS_TOKEN", "ACCESS_TOKEN"),
            strava_athlete_id=_optional_str_env("STRAVA_ATHLETE_ID", "ATHLETE_ID"),
            activities_per_page=_int_env("ACTIVITIES_PER_PAGE", 30, minimum=1, maximum=200),
            request_timeout_seconds=_int_env("REQUEST_TIMEOUT_SECONDS", 30, minimum=1, maximum=300),
            leaderboard_limit=_int_env("LEADERBOARD_LIMIT", 3, minimum=1, maximum=20),
            leaderboard_thresholds_km=_thresholds_env("LEADERBOARD_THRESHOLDS_KM", LEADERBOARD_THRESHOLDS_KM),
            distance_unit=normalize_distance_unit(_str_env("DASHBOARD_DISTANCE_UNIT", default="km")),
            default_tab=parse_tab(_str_env("DASHBOARD_DEFAULT_TAB"), Category.ALL),
            log_level=_str_env("LOG_LEVEL", default="INFO").upper(),
            api_port=_int_env("API_PORT", 1609, minimum=1, maximum=65535),
        )

    def validate_fetch(self) -> None:
        missing = []
        if not self.strava_access_token:
            missing.append("STRAVA_ACCESS_TOKEN (or ACCESS_TOKEN)")
        if missing:
            missing_str = ", ".join(missing)
            raise ValueError(f"Missing required environment variables: {missing_str}")
