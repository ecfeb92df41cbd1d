from __future__ import annotations

import json
import unittest

from podium.activity_filter import Category
from podium.dashboard_view import build_dashboard_view, dashboard_payload
from podium.models import Activity, AthleteStats


def _fake_feed() -> list[Activity]:
    raw = [
        {
            "id": 1001,
            "name": "Morning Run",
            "type": "Run",
            "start_date": "2026-02-01T06:15:00Z",
            "distance": 5000.0,
            "moving_time": 1500,
            "elapsed_time": 1620,
            "total_elevation_gain": 42.0,
            "average_speed": 3.0,
            "max_speed": 4.1,
            "kudos_count": 3,
        },
        {
            "id": 1002,
            "name": "Long Run",
            "type": "Run",
            "start_date": "2026-02-02T06:15:00Z",
            "distance": 10000.0,
            "moving_time": 4000,
            "elapsed_time": 4100,
            "total_elevation_gain": 85.0,
            "average_speed": 2.5,
            "max_speed": 3.6,
        },
        {
            "id": 2001,
            "name": "Coffee Ride",
            "type": "Ride",
            "start_date": "2026-02-03T08:00:00Z",
            "distance": 6000.0,
            "moving_time": 1500,
            "average_speed": 4.0,
            "max_speed": 9.0,
        },
        {
            "id": 2002,
            "name": "Hill Loop",
            "type": "Ride",
            "start_date": "2026-02-04T08:00:00Z",
            "distance": 11000.0,
            "moving_time": 2200,
            "average_speed": 5.0,
            "max_speed": 15.0,
        },
        {
            "id": 3001,
            "name": "Ridge Hike",
            "type": "Hike",
            "start_date": "2026-02-05T09:00:00Z",
            "distance": 8000.0,
            "moving_time": 7200,
            "average_speed": 1.1,
            "max_speed": 1.9,
        },
    ]
    return [Activity.from_payload(item) for item in raw]


class TestBuildDashboardView(unittest.TestCase):
    def test_empty_feed_is_empty_everywhere(self) -> None:
        for tab in (Category.ALL, Category.RUN, Category.RIDE, Category.WALK, "Swim"):
            view = build_dashboard_view([], tab)
            self.assertEqual(view.activities, [])
            self.assertIsNone(view.run_bests)
            self.assertIsNone(view.ride_bests)
            self.assertEqual(len(view.leaderboards), 3)
            for board in view.leaderboards:
                self.assertEqual(board.rides, [])

    def test_bests_and_leaderboards_ignore_selected_tab(self) -> None:
        feed = _fake_feed()
        view = build_dashboard_view(feed, Category.WALK)
        self.assertEqual([activity.id for activity in view.activities], [3001])
        assert view.run_bests is not None and view.ride_bests is not None
        self.assertEqual(view.run_bests.longest.id, 1002)
        self.assertEqual(view.run_bests.fastest_avg.id, 1001)
        self.assertEqual(view.ride_bests.absolute_max_speed.id, 2002)
        self.assertEqual([ride.id for ride in view.leaderboards[0].rides], [2002, 2001])
        self.assertEqual([ride.id for ride in view.leaderboards[1].rides], [2002])
        self.assertEqual(view.leaderboards[2].rides, [])

    def test_returns_shared_records(self) -> None:
        feed = _fake_feed()
        view = build_dashboard_view(feed, Category.ALL)
        assert view.ride_bests is not None
        self.assertIs(view.ride_bests.longest, feed[3])
        self.assertIs(view.activities[0], feed[0])


class TestDashboardPayload(unittest.TestCase):
    def test_ride_tab_payload(self) -> None:
        view = build_dashboard_view(_fake_feed(), Category.RIDE)
        payload = dashboard_payload(view)

        self.assertEqual(payload["tab"], "Ride")
        self.assertEqual(payload["tab_label"], "Rides")
        self.assertEqual([tab["value"] for tab in payload["tabs"]], ["All", "Run", "Ride", "Walk"])
        self.assertEqual([tab["selected"] for tab in payload["tabs"]], [False, False, True, False])
        self.assertEqual(payload["units"], {"distance": "km", "speed": "km/h"})
        self.assertEqual(
            payload["sections"],
            {"run_highlights": False, "ride_highlights": True, "leaderboards": True},
        )

        ride = payload["best_efforts"]["ride"]
        self.assertEqual(ride["longest"], {"id": 2002, "name": "Hill Loop", "value": "11.00 km"})
        self.assertEqual(ride["top_speed"]["value"], "54.0")

        board = payload["leaderboards"][0]
        self.assertEqual(board["title"], "Best 5K (Avg Speed)")
        self.assertIsNone(board["empty_message"])
        self.assertEqual([entry["rank"] for entry in board["entries"]], [1, 2])
        self.assertEqual(board["entries"][0]["average_speed"], "18.0")
        self.assertEqual(board["entries"][0]["max_speed"], "54.0")
        self.assertEqual(board["entries"][0]["moving_time"], "0h 36m")
        self.assertEqual(payload["leaderboards"][2]["empty_message"], "No rides of 20 km yet.")

        self.assertEqual([row["id"] for row in payload["activities"]], [2001, 2002])
        self.assertIsNone(payload["empty_message"])
        self.assertIsNone(payload["athlete_stats"])

    def test_run_tab_highlights(self) -> None:
        payload = dashboard_payload(build_dashboard_view(_fake_feed(), "run".title()))
        self.assertTrue(payload["sections"]["run_highlights"])
        self.assertFalse(payload["sections"]["leaderboards"])
        run = payload["best_efforts"]["run"]
        self.assertEqual(run["longest"]["value"], "10.00 km")
        self.assertEqual(run["fastest_pace"], {"id": 1001, "name": "Morning Run", "value": "5:33 /km"})

    def test_activity_rows_are_formatted(self) -> None:
        payload = dashboard_payload(build_dashboard_view(_fake_feed(), Category.ALL))
        row = payload["activities"][0]
        self.assertEqual(row["date"], "2026-02-01")
        self.assertEqual(row["distance"], "5.00 km")
        self.assertEqual(row["moving_time"], "0h 25m")
        self.assertEqual(row["elapsed_time"], "0h 27m")
        self.assertEqual(row["elevation_gain"], "42 m")
        self.assertEqual(row["pace"], "5:33 /km")
        self.assertEqual(row["icon"], "flame")
        self.assertEqual(row["category"], "Run")
        hike = payload["activities"][-1]
        self.assertEqual(hike["category"], "Walk")
        self.assertEqual(hike["type_label"], "Hike")

    def test_imperial_units(self) -> None:
        payload = dashboard_payload(build_dashboard_view(_fake_feed(), Category.RIDE), distance_unit="mi")
        self.assertEqual(payload["units"], {"distance": "mi", "speed": "mph"})
        self.assertEqual(payload["best_efforts"]["ride"]["longest"]["value"], "6.84 mi")
        self.assertEqual(payload["leaderboards"][0]["entries"][0]["average_speed"], "11.2")

    def test_empty_tab_message(self) -> None:
        payload = dashboard_payload(build_dashboard_view(_fake_feed(), "Swim"))
        self.assertEqual(payload["activities"], [])
        self.assertEqual(payload["tab_label"], "Swim")
        self.assertEqual(payload["empty_message"], "No Swim activities in recent history.")
        self.assertFalse(any(tab["selected"] for tab in payload["tabs"]))

    def test_athlete_stats_are_formatted(self) -> None:
        stats = AthleteStats.from_payload(
            {
                "recent_run_totals": {"count": 4, "distance": 21097.5, "moving_time": 7384, "elevation_gain": 120.4},
                "all_run_totals": {"count": 250, "distance": 2500000.0, "moving_time": 900000, "elevation_gain": 15000},
            }
        )
        payload = dashboard_payload(build_dashboard_view(_fake_feed(), Category.ALL, stats=stats))
        recent = payload["athlete_stats"]["recent_run_totals"]
        self.assertEqual(recent, {"count": 4, "distance": "21.10 km", "moving_time": "2h 3m", "elevation_gain": "120 m"})
        self.assertEqual(payload["athlete_stats"]["all_run_totals"]["moving_time"], "250h 0m")

    def test_vanishing_speed_renders_without_pace(self) -> None:
        crawl = Activity.from_payload({"id": 9, "type": "Run", "distance": 10, "average_speed": 1e-309})
        payload = dashboard_payload(build_dashboard_view([crawl], Category.RUN))
        self.assertEqual(payload["activities"][0]["pace"], "-")
        self.assertEqual(payload["best_efforts"]["run"]["fastest_pace"]["value"], "-")

    def test_payload_is_json_serializable(self) -> None:
        payload = dashboard_payload(build_dashboard_view(_fake_feed(), Category.RIDE))
        decoded = json.loads(json.dumps(payload))
        self.assertEqual(decoded["tab"], "Ride")


if __name__ == "__main__":
    unittest.main()
