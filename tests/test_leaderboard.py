import unittest

from podium.leaderboard import LEADERBOARD_THRESHOLDS_KM, build_leaderboards, top_rides
from podium.models import Activity


def _ride(activity_id: int, distance: float, average_speed: float, activity_type: str = "Ride") -> Activity:
    return Activity.from_payload(
        {
            "id": activity_id,
            "type": activity_type,
            "distance": distance,
            "average_speed": average_speed,
        }
    )


class TestTopRides(unittest.TestCase):
    def test_filters_by_distance_and_orders_by_speed(self) -> None:
        short = _ride(1, 4000, 3.0)
        medium = _ride(2, 6000, 4.0)
        long = _ride(3, 11000, 5.0)
        result = top_rides([short, medium, long], 5)
        self.assertEqual(result, [long, medium])

    def test_threshold_is_inclusive(self) -> None:
        exact = _ride(1, 10000, 6.0)
        just_short = _ride(2, 9999.9, 9.0)
        self.assertEqual(top_rides([exact, just_short], 10), [exact])

    def test_only_rides_qualify(self) -> None:
        run = _ride(1, 21000, 4.0, activity_type="Run")
        virtual = _ride(2, 30000, 9.0, activity_type="VirtualRide")
        ride = _ride(3, 25000, 7.0)
        self.assertEqual(top_rides([run, virtual, ride], 20), [ride])

    def test_truncates_to_limit(self) -> None:
        rides = [_ride(idx, 8000 + idx, 5.0 + idx) for idx in range(6)]
        result = top_rides(rides, 5)
        self.assertEqual([ride.id for ride in result], [5, 4, 3])
        self.assertEqual(len(top_rides(rides, 5, limit=5)), 5)
        self.assertEqual(top_rides(rides, 5, limit=0), [])

    def test_equal_speeds_keep_feed_order(self) -> None:
        first = _ride(1, 6000, 6.0)
        faster = _ride(2, 7000, 7.5)
        second = _ride(3, 8000, 6.0)
        third = _ride(4, 9000, 6.0)
        result = top_rides([first, faster, second, third], 5, limit=4)
        self.assertEqual(result, [faster, first, second, third])

    def test_is_idempotent_on_ranked_input(self) -> None:
        rides = [_ride(1, 6000, 4.2), _ride(2, 15000, 6.8), _ride(3, 22000, 5.5), _ride(4, 12000, 6.8)]
        ranked = top_rides(rides, 5, limit=10)
        self.assertEqual(top_rides(ranked, 5, limit=10), ranked)
        speeds = [ride.average_speed for ride in ranked]
        self.assertEqual(speeds, sorted(speeds, reverse=True))

    def test_no_qualifying_rides(self) -> None:
        self.assertEqual(top_rides([], 5), [])
        self.assertEqual(top_rides([_ride(1, 3000, 9.0)], 5), [])

    def test_input_is_not_reordered(self) -> None:
        rides = [_ride(1, 6000, 4.0), _ride(2, 6000, 8.0)]
        top_rides(rides, 5)
        self.assertEqual([ride.id for ride in rides], [1, 2])


class TestBuildLeaderboards(unittest.TestCase):
    def test_one_board_per_threshold(self) -> None:
        rides = [_ride(1, 5500, 6.0), _ride(2, 12000, 7.0), _ride(3, 25000, 6.5)]
        boards = build_leaderboards(rides)
        self.assertEqual([board.min_km for board in boards], list(LEADERBOARD_THRESHOLDS_KM))
        self.assertEqual([ride.id for ride in boards[0].rides], [2, 3, 1])
        self.assertEqual([ride.id for ride in boards[1].rides], [2, 3])
        self.assertEqual([ride.id for ride in boards[2].rides], [3])

    def test_custom_thresholds_and_limit(self) -> None:
        rides = [_ride(1, 5500, 6.0), _ride(2, 12000, 7.0)]
        boards = build_leaderboards(rides, thresholds=(1, 50), limit=1)
        self.assertEqual([ride.id for ride in boards[0].rides], [2])
        self.assertEqual(boards[1].rides, [])


if __name__ == "__main__":
    unittest.main()
