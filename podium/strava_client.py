from __future__ import annotations

import logging
from typing import Any

import requests

from .models import Activity, AthleteStats, activities_from_payload


logger = logging.getLogger(__name__)

API_URL = "https://www.strava.com/api/v3"
TIMEOUT_SECONDS = 30
DEFAULT_PER_PAGE = 30


class StravaClient:
    """Read-only access to one athlete's feed.

    The access token is supplied by whoever owns the login session; this client
    never refreshes or stores it.
    """

    def __init__(
        self,
        access_token: str,
        *,
        timeout_seconds: int = TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ):
        self.access_token = access_token
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, *, params: dict[str, Any] | None = None) -> requests.Response:
        response = self.session.request(
            method,
            f"{API_URL}{path}",
            headers={"Authorization": f"Bearer {self.access_token}"},
            params=params,
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response

    def get_activities(self, per_page: int = DEFAULT_PER_PAGE, page: int = 1) -> list[Activity]:
        response = self._request(
            "GET",
            "/athlete/activities",
            params={"per_page": per_page, "page": page},
        )
        return activities_from_payload(response.json())

    def get_athlete_stats(self, athlete_id: str | int) -> AthleteStats | None:
        response = self._request("GET", f"/athletes/{athlete_id}/stats")
        return AthleteStats.from_payload(response.json())


def fetch_activities(
    access_token: str,
    *,
    per_page: int = DEFAULT_PER_PAGE,
    timeout_seconds: int = TIMEOUT_SECONDS,
    client: StravaClient | None = None,
) -> list[Activity]:
    client = client or StravaClient(access_token, timeout_seconds=timeout_seconds)
    try:
        activities = client.get_activities(per_page=per_page)
    except (requests.RequestException, ValueError):
        logger.exception("Fetching activities failed; continuing with an empty feed.")
        return []
    logger.info("Fetched %s activities.", len(activities))
    return activities


def fetch_athlete_stats(
    access_token: str,
    athlete_id: str | int | None,
    *,
    timeout_seconds: int = TIMEOUT_SECONDS,
    client: StravaClient | None = None,
) -> AthleteStats | None:
    if athlete_id in {None, ""}:
        logger.info("No athlete id configured; skipping athlete stats.")
        return None
    client = client or StravaClient(access_token, timeout_seconds=timeout_seconds)
    try:
        return client.get_athlete_stats(athlete_id)
    except (requests.RequestException, ValueError):
        logger.exception("Fetching stats for athlete %s failed.", athlete_id)
        return None
