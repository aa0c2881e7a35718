# SPDX-License-Identifier: MIT

import pendulum
import pytest
import typer

from routine.terminal.parse import (
    parse_date,
    parse_entry_datetime,
    parse_id_list,
    parse_time,
)
from routine.time import today_local


class TestParseDate:
    def test_calendar_date(self):
        assert parse_date("2024-02-29") == pendulum.date(2024, 2, 29)

    def test_offsets_and_keywords(self):
        today = today_local()

        assert parse_date("0") == today
        assert parse_date("-1") == today.subtract(days=1)
        assert parse_date("7") == today.add(days=7)
        assert parse_date("t") == today
        assert parse_date("yesterday") == today.subtract(days=1)
        assert parse_date("o") == today.add(days=1)

    def test_none_passes_through(self):
        assert parse_date(None) is None

    @pytest.mark.parametrize("value", ["2024-02-30", "01/02/2024", "someday"])
    def test_rejects_bad_dates(self, value):
        with pytest.raises(typer.BadParameter):
            parse_date(value)


class TestParseEntryDatetime:
    def test_rfc3339_offset_is_converted_to_utc(self):
        parsed = parse_entry_datetime("2024-01-01T15:30:00+02:00")

        assert parsed == pendulum.datetime(2024, 1, 1, 13, 30, tz="UTC")
        assert parsed.timezone_name == "UTC"

    def test_zulu(self):
        assert parse_entry_datetime("2024-01-01T00:00:00Z") == pendulum.datetime(
            2024, 1, 1, tz="UTC"
        )

    def test_plain_date_lands_on_that_local_day(self):
        parsed = parse_entry_datetime("2024-03-10")

        assert parsed.in_tz("local").date() == pendulum.date(2024, 3, 10)

    def test_now(self):
        before = pendulum.now("UTC")
        assert parse_entry_datetime("now") >= before

    @pytest.mark.parametrize("value", ["2024-01-01 15:30", "2024-01-01T15:30:00"])
    def test_rejects_ambiguous_instants(self, value):
        with pytest.raises(typer.BadParameter):
            parse_entry_datetime(value)


class TestParseIdList:
    def test_single(self):
        assert parse_id_list("4") == [4]

    def test_mixed_ranges_are_sorted_and_deduplicated(self):
        assert parse_id_list("8, 3-5,4,1") == [1, 3, 4, 5, 8]

    @pytest.mark.parametrize("value", ["", "a", "5-3", "1-2-3"])
    def test_rejects_bad_lists(self, value):
        with pytest.raises(typer.BadParameter):
            parse_id_list(value)


class TestParseTime:
    def test_pads_hour(self):
        assert parse_time("8:05") == "08:05"

    @pytest.mark.parametrize("value", ["24:00", "12:60", "noon", "1230"])
    def test_rejects_bad_times(self, value):
        with pytest.raises(typer.BadParameter):
            parse_time(value)
