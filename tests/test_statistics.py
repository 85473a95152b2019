"""Tests for multi-day statistics."""

import json
from collections import Counter
from datetime import date

import pytest

from conftest import paint
from timeblocker.domain.days import day_key
from timeblocker.domain.entities import Track
from timeblocker.domain.errors import DeserializationError
from timeblocker.domain.statistics import aggregate, build_category_stats


def _lookup(days):
    """Build a day lookup from a dict of date string to slots."""
    return days.get


def test_reversed_range_is_empty(empty_day):
    calls = []

    def lookup(date_str):
        calls.append(date_str)
        return empty_day

    report = aggregate("2024-05-02", "2024-05-01", Track.ACTUAL, lookup)

    assert report.categories == ()
    assert report.total_minutes == 0
    assert report.days_scanned == 0
    assert calls == []


def test_two_days_of_work(empty_day):
    day = paint(empty_day, "09:00", "10:00", "work", track=Track.ACTUAL)
    days = {"2024-05-01": day, "2024-05-02": day}

    report = aggregate("2024-05-01", "2024-05-02", Track.ACTUAL, _lookup(days))

    assert len(report.categories) == 1
    work = report.categories[0]
    assert work.category_id == "work"
    assert work.count == 24
    assert work.total_minutes == 120
    assert work.percentage == 100
    assert report.total_minutes == 120
    assert report.days_found == 2


def test_no_matches_has_zero_totals(empty_day):
    days = {"2024-05-01": empty_day}

    report = aggregate(date(2024, 5, 1), date(2024, 5, 3), Track.PLAN, _lookup(days))

    assert report.total_minutes == 0
    assert report.categories == ()
    assert report.days_scanned == 3
    assert report.days_found == 1


def test_build_category_stats_empty_counter():
    assert build_category_stats(Counter()) == ()


def test_percentages_sum_to_100(empty_day):
    day = paint(empty_day, "00:00", "07:00", "sleep", track=Track.ACTUAL)
    day = paint(day, "09:00", "12:20", "work", track=Track.ACTUAL)
    day = paint(day, "19:00", "19:35", "exercise", track=Track.ACTUAL)
    days = {"2024-05-01": day}

    report = aggregate("2024-05-01", "2024-05-01", Track.ACTUAL, _lookup(days))

    assert report.total_minutes == 420 + 200 + 35
    assert sum(stat.percentage for stat in report.categories) == pytest.approx(100)
    assert [stat.category_id for stat in report.categories] == ["sleep", "work", "exercise"]


def test_ties_are_ordered_by_category_id(empty_day):
    day = paint(empty_day, "08:00", "09:00", "work")
    day = paint(day, "10:00", "11:00", "leisure")
    day = paint(day, "12:00", "13:00", "exercise")

    first = aggregate("2024-05-01", "2024-05-01", Track.PLAN, _lookup({"2024-05-01": day}))
    second = aggregate("2024-05-01", "2024-05-01", Track.PLAN, _lookup({"2024-05-01": day}))

    assert [stat.category_id for stat in first.categories] == ["exercise", "leisure", "work"]
    assert first == second


def test_tracks_are_counted_separately(empty_day):
    day = paint(empty_day, "08:00", "09:00", "work")
    day = paint(day, "08:00", "08:30", "waste", track=Track.ACTUAL)
    days = {"2024-05-01": day}

    plan = aggregate("2024-05-01", "2024-05-01", Track.PLAN, _lookup(days))
    actual = aggregate("2024-05-01", "2024-05-01", Track.ACTUAL, _lookup(days))

    assert [(s.category_id, s.count) for s in plan.categories] == [("work", 12)]
    assert [(s.category_id, s.count) for s in actual.categories] == [("waste", 6)]


def test_unresolved_category_keeps_its_own_bucket(empty_day):
    day = paint(empty_day, "08:00", "08:10", "knitting", track=Track.ACTUAL)

    report = aggregate("2024-05-01", "2024-05-01", Track.ACTUAL, _lookup({"2024-05-01": day}))

    assert [(s.category_id, s.count) for s in report.categories] == [("knitting", 2)]


def test_range_crosses_month_and_year(empty_day):
    seen = []

    def lookup(date_str):
        seen.append(date_str)
        return None

    report = aggregate("2023-12-30", "2024-01-02", Track.ACTUAL, lookup)

    assert seen == ["2023-12-30", "2023-12-31", "2024-01-01", "2024-01-02"]
    assert report.days_scanned == 4
    assert report.days_found == 0


def test_leap_day_is_visited():
    seen = []
    aggregate("2024-02-28", "2024-03-01", Track.PLAN, lambda d: seen.append(d))

    assert seen == ["2024-02-28", "2024-02-29", "2024-03-01"]


def test_damaged_day_is_skipped(empty_day):
    day = paint(empty_day, "09:00", "10:00", "work", track=Track.ACTUAL)

    def lookup(date_str):
        if date_str == "2024-05-02":
            raise DeserializationError("not JSON")
        return day

    report = aggregate("2024-05-01", "2024-05-03", Track.ACTUAL, lookup)

    assert report.days_skipped == 1
    assert report.days_found == 2
    assert report.categories[0].count == 24


class TestStatisticsService:
    """Tests for aggregation over the store."""

    def test_aggregate_stored_days(self, temp_db, day_service, statistics_service, empty_day):
        today = date(2024, 6, 1)
        day_service.save_day("2024-05-01", paint(empty_day, "09:00", "10:00", "work", track=Track.ACTUAL), today=today)
        day_service.save_day("2024-05-02", paint(empty_day, "09:00", "10:00", "work", track=Track.ACTUAL), today=today)
        temp_db.set(day_key("2024-05-03"), "{broken")

        report = statistics_service.aggregate("2024-05-01", "2024-05-04", Track.ACTUAL)

        assert report.total_minutes == 120
        assert report.categories[0].percentage == 100
        assert report.days_found == 2
        assert report.days_skipped == 1

    def test_legacy_ids_count_under_current_id(self, temp_db, statistics_service):
        records = [
            {"hour": 9, "minute": 0, "actualCategoryId": "work_deep"},
            {"hour": 9, "minute": 5, "actualCategoryId": "work_shallow"},
            {"hour": 9, "minute": 10, "actualCategoryId": "work"},
        ]
        temp_db.set(day_key("2024-05-01"), json.dumps(records))

        report = statistics_service.aggregate("2024-05-01", "2024-05-01")

        assert [(s.category_id, s.count) for s in report.categories] == [("work", 3)]

    def test_template_is_not_counted(self, day_service, statistics_service, empty_day):
        day_service.save_template(paint(empty_day, "09:00", "10:00", "work"))

        report = statistics_service.aggregate("2024-05-01", "2024-05-07", Track.PLAN)

        assert report.categories == ()
        assert report.days_found == 0

    def test_deeply_nested_day_is_skipped(self, temp_db, day_service, statistics_service, empty_day):
        day_service.save_day(
            "2024-05-02", paint(empty_day, "09:00", "10:00", "work", track=Track.ACTUAL), today=date(2024, 6, 1)
        )
        temp_db.set(day_key("2024-05-01"), "[" * 100000 + "]" * 100000)

        report = statistics_service.aggregate("2024-05-01", "2024-05-02", Track.ACTUAL)

        assert report.days_skipped == 1
        assert report.days_found == 1
        assert report.total_minutes == 60
