# SPDX-License-Identifier: MIT

import datetime
from typing import cast

import pendulum
import pytest

from routine.model.due import Due
from routine.service.due import is_due
from routine.time import weekday_name


def specific_days(*days: str) -> Due:
    return {
        "type": "specificDays",
        "specific_days": list(days),
        "interval_type": None,
        "interval_value": None,
    }


def interval(interval_type: str, interval_value: int | None) -> Due:
    return {
        "type": "interval",
        "specific_days": None,
        "interval_type": interval_type,  # type: ignore[typeddict-item]
        "interval_value": interval_value,
    }


def due_on(due: Due, start: pendulum.Date, candidate: pendulum.Date) -> bool:
    return is_due(due, start, candidate, weekday_name(candidate))


class TestSpecificDays:
    def test_due_on_listed_weekday(self):
        # 2024-01-01 is a Monday
        due = specific_days("monday", "wednesday")
        start = pendulum.date(2024, 1, 1)

        assert due_on(due, start, pendulum.date(2024, 1, 1))
        assert due_on(due, start, pendulum.date(2024, 1, 3))
        assert not due_on(due, start, pendulum.date(2024, 1, 2))

    def test_weekday_names_compare_case_insensitively(self):
        due = specific_days("Monday")
        start = pendulum.date(2024, 1, 1)

        assert is_due(due, start, pendulum.date(2024, 1, 8), "MONDAY")

    def test_never_before_start(self):
        due = specific_days("monday")
        start = pendulum.date(2024, 1, 8)

        assert not due_on(due, start, pendulum.date(2024, 1, 1))

    def test_empty_day_list_is_never_due(self):
        due = specific_days()
        start = pendulum.date(2024, 1, 1)

        assert not due_on(due, start, pendulum.date(2024, 1, 1))


class TestInterval:
    def test_every_three_days(self):
        due = interval("day", 3)
        start = pendulum.date(2024, 1, 1)

        for day in (1, 4, 7):
            assert due_on(due, start, pendulum.date(2024, 1, day))
        for day in (2, 3, 5, 6):
            assert not due_on(due, start, pendulum.date(2024, 1, day))

    def test_day_interval_matches_modulo_rule(self):
        due = interval("day", 5)
        start = pendulum.date(2024, 2, 27)

        for offset in range(40):
            candidate = start.add(days=offset)
            assert due_on(due, start, candidate) is (offset % 5 == 0)

    def test_week_interval_uses_seven_day_blocks(self):
        # Start on a Wednesday; blocks run Wednesday to Tuesday
        due = interval("week", 2)
        start = pendulum.date(2024, 1, 3)

        assert due_on(due, start, pendulum.date(2024, 1, 3))
        assert due_on(due, start, pendulum.date(2024, 1, 9))
        assert not due_on(due, start, pendulum.date(2024, 1, 10))
        assert not due_on(due, start, pendulum.date(2024, 1, 16))
        assert due_on(due, start, pendulum.date(2024, 1, 17))

    def test_month_interval_ignores_day_of_month(self):
        due = interval("month", 1)
        start = pendulum.date(2024, 1, 31)

        for day in range(1, 30):
            assert due_on(due, start, pendulum.date(2024, 2, day))

    def test_month_interval_can_be_due_before_start_day(self):
        due = interval("month", 2)
        start = pendulum.date(2024, 1, 20)

        assert due_on(due, start, pendulum.date(2024, 3, 1))
        assert not due_on(due, start, pendulum.date(2024, 2, 20))

    def test_year_interval(self):
        due = interval("year", 2)
        start = pendulum.date(2023, 6, 15)

        assert due_on(due, start, pendulum.date(2025, 1, 1))
        assert not due_on(due, start, pendulum.date(2024, 6, 15))

    def test_never_before_start(self):
        due = interval("day", 1)
        start = pendulum.date(2024, 1, 10)

        assert not due_on(due, start, pendulum.date(2024, 1, 9))


class TestInvalidRules:
    @pytest.mark.parametrize("interval_value", [0, -2, None])
    def test_non_positive_interval_is_never_due(self, interval_value):
        due = interval("day", interval_value)
        start = pendulum.date(2024, 1, 1)

        assert not due_on(due, start, pendulum.date(2024, 1, 1))

    def test_unknown_unit_is_never_due(self):
        due = interval("fortnight", 1)
        start = pendulum.date(2024, 1, 1)

        assert not due_on(due, start, pendulum.date(2024, 1, 1))

    def test_unknown_type_is_never_due(self):
        due = interval("day", 1)
        due["type"] = "someday"  # type: ignore[typeddict-item]
        start = pendulum.date(2024, 1, 1)

        assert not due_on(due, start, pendulum.date(2024, 1, 1))

    def test_missing_type_is_never_due(self):
        due = cast(Due, {"interval_type": "day", "interval_value": 1})
        start = pendulum.date(2024, 1, 1)

        assert not due_on(due, start, pendulum.date(2024, 1, 1))


def test_time_of_day_is_ignored():
    due = interval("day", 2)
    start = pendulum.datetime(2024, 1, 1, 23, 30)
    candidate = pendulum.datetime(2024, 1, 3, 0, 15)

    assert is_due(due, start, candidate, "wednesday")


def test_accepts_standard_library_dates():
    due = interval("day", 1)

    assert is_due(
        due, datetime.date(2024, 1, 1), datetime.date(2024, 1, 2), "tuesday"
    )


def test_weekday_name_is_lowercase_english():
    assert weekday_name(pendulum.date(2024, 1, 1)) == "monday"
    assert weekday_name(pendulum.date(2024, 1, 7)) == "sunday"
