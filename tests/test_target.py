# SPDX-License-Identifier: MIT

import pendulum
import pytest

from routine.repository.error import StorageError
from routine.service.target import (
    adjusted_start_value,
    calculate_target_metrics,
    current_value,
    get_progress_points,
    resolve_target_values,
)


def day(n: int) -> pendulum.DateTime:
    return pendulum.datetime(2024, 1, n, 12, tz="UTC")


class TestCurrentValue:
    def test_additive_sums_onto_start(self, make_target, make_entry):
        target = make_target(start_value=10.0, add_to_total=True)
        entries = [make_entry(day(3), value=20.0), make_entry(day(2), value=15.0)]

        assert current_value(target, entries) == 45.0

    def test_replacement_takes_newest_value(self, make_target, make_entry):
        target = make_target(start_value=70.0, goal_value=60.0, add_to_total=False)
        entries = [make_entry(day(3), value=80.0), make_entry(day(2), value=75.0)]

        assert current_value(target, entries) == 80.0

    def test_without_entries_is_start_value(self, make_target):
        for add_to_total in (True, False):
            target = make_target(start_value=12.5, add_to_total=add_to_total)
            assert current_value(target, []) == 12.5

    def test_missing_values_count_as_zero(self, make_target, make_entry):
        target = make_target(start_value=5.0, add_to_total=True)
        entries = [make_entry(day(3), value=None), make_entry(day(2), value=2.0)]

        assert current_value(target, entries) == 7.0

    def test_is_repeatable(self, make_target, make_entry):
        target = make_target(start_value=10.0, add_to_total=True)
        entries = [make_entry(day(3), value=20.0), make_entry(day(2), value=15.0)]

        assert current_value(target, entries) == current_value(target, entries)
        assert len(entries) == 2


class TestAdjustedStartValue:
    def test_increasing_target_drops_to_lowest_point(self, make_target, make_entry):
        target = make_target(
            start_value=0.0, goal_value=100.0, add_to_total=True, use_actual_bounds=True
        )
        entries = [make_entry(day(2), value=-5.0)]

        assert adjusted_start_value(target, entries) == -5.0

    def test_decreasing_target_rises_to_highest_point(self, make_target, make_entry):
        target = make_target(
            start_value=80.0, goal_value=70.0, add_to_total=False, use_actual_bounds=True
        )
        entries = [make_entry(day(3), value=78.0), make_entry(day(2), value=83.0)]

        assert adjusted_start_value(target, entries) == 83.0

    def test_stays_at_start_when_never_passed(self, make_target, make_entry):
        target = make_target(
            start_value=0.0, goal_value=100.0, add_to_total=True, use_actual_bounds=True
        )
        entries = [make_entry(day(3), value=10.0), make_entry(day(2), value=5.0)]

        assert adjusted_start_value(target, entries) == 0.0

    def test_disabled_returns_raw_start(self, make_target, make_entry):
        target = make_target(
            start_value=0.0, goal_value=100.0, add_to_total=True, use_actual_bounds=False
        )
        entries = [make_entry(day(2), value=-50.0)]

        assert adjusted_start_value(target, entries) == 0.0

    def test_no_entries_returns_raw_start(self, make_target):
        target = make_target(start_value=3.0, use_actual_bounds=True)

        assert adjusted_start_value(target, []) == 3.0

    def test_running_totals_follow_chronological_order(self, make_target, make_entry):
        target = make_target(
            start_value=10.0, goal_value=100.0, add_to_total=True, use_actual_bounds=True
        )
        # Newest first: +20 on day 4, -15 on day 3, -3 on day 2
        entries = [
            make_entry(day(4), value=20.0),
            make_entry(day(3), value=-15.0),
            make_entry(day(2), value=-3.0),
        ]

        assert get_progress_points(target, entries) == [7.0, -8.0, 12.0]
        assert adjusted_start_value(target, entries) == -8.0


class TestResolveTargetValues:
    def test_uses_only_entries_since_start(self, store, make_target, make_entry):
        target = make_target(
            start_value=0.0,
            goal_value=100.0,
            start_date=pendulum.date(2024, 1, 5),
            add_to_total=True,
            use_actual_bounds=True,
        )
        target_id = store.targets.save_new_target(target)
        store.entries.save_new_entry(make_entry(day(2), value=-40.0, tracker_id=target_id))
        store.entries.save_new_entry(make_entry(day(6), value=-5.0, tracker_id=target_id))
        store.entries.save_new_entry(make_entry(day(7), value=25.0, tracker_id=target_id))

        values = resolve_target_values(store, store.get_target(target_id))

        assert values == {
            "current_value": 20.0,
            "start_value": -5.0,
            "original_start_value": 0.0,
        }

    def test_ignores_entries_of_other_trackers(self, store, make_target, make_entry):
        target_id = store.targets.save_new_target(make_target(add_to_total=True))
        store.entries.save_new_entry(make_entry(day(2), value=5.0, tracker_id=target_id))
        store.entries.save_new_entry(make_entry(day(2), value=7.0, tracker_id=99))
        store.entries.save_new_entry(
            make_entry(day(2), done=True, tracker_id=target_id, type="habit")
        )

        values = resolve_target_values(store, store.get_target(target_id))

        assert values["current_value"] == 5.0

    def test_storage_failure_falls_back_to_start_value(
        self, store, make_target, monkeypatch, caplog
    ):
        target_id = store.targets.save_new_target(
            make_target(start_value=42.0, use_actual_bounds=True)
        )

        def broken(*args, **kwargs):
            raise StorageError("disk on fire")

        monkeypatch.setattr(store, "get_entries_since", broken)

        with caplog.at_level("WARNING", logger="routine"):
            values = resolve_target_values(store, store.get_target(target_id))

        assert values == {
            "current_value": 42.0,
            "start_value": 42.0,
            "original_start_value": 42.0,
        }
        assert "disk on fire" in caplog.text


class TestTargetMetrics:
    def test_progress_and_pace(self, make_target, make_entry):
        target = make_target(
            start_value=0.0,
            goal_value=100.0,
            start_date=pendulum.date(2024, 1, 1),
            goal_date=pendulum.date(2024, 1, 11),
            add_to_total=True,
        )
        entries = [make_entry(day(3), value=30.0), make_entry(day(2), value=30.0)]
        values = {"current_value": 60.0, "start_value": 0.0, "original_start_value": 0.0}

        metrics = calculate_target_metrics(
            target, values, entries, pendulum.date(2024, 1, 6)
        )

        assert metrics["progress_percentage"] == pytest.approx(60.0)
        assert metrics["total_entries"] == 2
        assert metrics["average_value"] == pytest.approx(30.0)
        assert metrics["days_until_goal"] == 5
        assert metrics["days_active"] == 5
        assert metrics["total_duration"] == 10
        assert metrics["expected_progress"] == pytest.approx(50.0)
        assert metrics["ahead_pace"] is True
        assert metrics["pace"] == pytest.approx(50.0)
        assert metrics["remaining_value"] == pytest.approx(40.0)
        assert metrics["daily_required"] == pytest.approx(8.0)
        assert metrics["projected_value_on_goal_date"] == pytest.approx(120.0)

    def test_decreasing_target(self, make_target, make_entry):
        target = make_target(
            start_value=80.0,
            goal_value=70.0,
            start_date=pendulum.date(2024, 1, 1),
            goal_date=pendulum.date(2024, 1, 21),
        )
        entries = [make_entry(day(5), value=78.0)]
        values = {"current_value": 78.0, "start_value": 80.0, "original_start_value": 80.0}

        metrics = calculate_target_metrics(
            target, values, entries, pendulum.date(2024, 1, 11)
        )

        assert metrics["progress_percentage"] == pytest.approx(20.0)
        assert metrics["remaining_value"] == pytest.approx(8.0)
        assert metrics["ahead_pace"] is False

    def test_goal_equal_to_start_has_no_progress(self, make_target):
        target = make_target(start_value=5.0, goal_value=5.0)
        values = {"current_value": 9.0, "start_value": 5.0, "original_start_value": 5.0}

        metrics = calculate_target_metrics(target, values, [], pendulum.date(2024, 2, 1))

        assert metrics["progress_percentage"] == 0.0
        assert metrics["display_percentage"] == 0.0
        assert metrics["average_value"] == 0.0

    def test_display_percentage_is_clamped(self, make_target):
        target = make_target(start_value=0.0, goal_value=10.0)
        values = {"current_value": 25.0, "start_value": 0.0, "original_start_value": 0.0}

        metrics = calculate_target_metrics(target, values, [], pendulum.date(2024, 2, 1))

        assert metrics["progress_percentage"] == pytest.approx(250.0)
        assert metrics["display_percentage"] == 100.0
        assert metrics["remaining_value"] == 0.0
