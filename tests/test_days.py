"""Tests for day classification, calendar grids and the heatmap."""

from datetime import date, timezone

import pytest

from relentless.analytics.days import (
    active_tasks_on,
    classify_day,
    day_breakdown,
    day_detail,
    heatmap,
    heatmap_intensity,
    month_grid,
    sunday_offset,
)
from relentless.core.models import DayBreakdown, DayStatus
from tests.conftest import make_task


UTC = timezone.utc
DAY = date(2024, 3, 10)


@pytest.fixture
def trio():
    return [make_task(f"t{i}", f"Task {i}", "2024-03-01") for i in range(3)]


class TestClassifyDay:
    """Perfect, partial, failed and empty days."""

    def test_all_completed_is_perfect(self, trio):
        log = {"2024-03-10": {"t0", "t1", "t2"}}
        assert classify_day(DAY, trio, log, UTC) == DayStatus.PERFECT

    def test_none_completed_is_failed(self, trio):
        assert classify_day(DAY, trio, {}, UTC) == DayStatus.FAILED

    @pytest.mark.parametrize("done", [{"t0"}, {"t0", "t2"}])
    def test_some_completed_is_partial(self, trio, done):
        assert classify_day(DAY, trio, {"2024-03-10": done}, UTC) == DayStatus.PARTIAL

    def test_no_active_tasks_is_empty(self):
        assert classify_day(DAY, [], {"2024-03-10": {"ghost"}}, UTC) == DayStatus.EMPTY

    def test_tasks_created_later_are_not_active(self, trio):
        assert classify_day(date(2024, 2, 28), trio, {}, UTC) == DayStatus.EMPTY

    def test_task_is_active_on_its_creation_day(self):
        task = make_task("t0", "New", "2024-03-10")
        assert classify_day(DAY, [task], {}, UTC) == DayStatus.FAILED

    def test_archived_tasks_are_ignored(self, trio):
        trio[2].archived = True
        log = {"2024-03-10": {"t0", "t1"}}
        assert classify_day(DAY, trio, log, UTC) == DayStatus.PERFECT
        assert [t.id for t in active_tasks_on(DAY, trio, UTC)] == ["t0", "t1"]

    def test_dangling_ids_do_not_count(self, trio):
        breakdown = day_breakdown(DAY, trio, {"2024-03-10": {"t0", "removed"}}, UTC)
        assert breakdown.completed_tasks == 1
        assert breakdown.total_tasks == 3
        assert breakdown.status == DayStatus.PARTIAL


@pytest.mark.parametrize("completed,total,level", [
    (0, 0, 0),
    (0, 4, 0),
    (1, 3, 1),
    (1, 2, 2),
    (3, 4, 3),
    (4, 4, 4),
])
def test_heatmap_intensity_levels(completed, total, level):
    breakdown = DayBreakdown(date="2024-03-10", total_tasks=total, completed_tasks=completed,
                             status=DayStatus.EMPTY)
    assert heatmap_intensity(breakdown) == level


def test_heatmap_window_is_oldest_first(sample_tasks, sample_log):
    days = heatmap(sample_tasks, sample_log, end=date(2024, 3, 6), days=7, tz=UTC)
    assert [b.date for b in days] == [
        "2024-02-29", "2024-03-01", "2024-03-02", "2024-03-03",
        "2024-03-04", "2024-03-05", "2024-03-06",
    ]
    assert days[0].status == DayStatus.EMPTY
    assert days[-2].status == DayStatus.PERFECT
    assert days[-1].status == DayStatus.PARTIAL


def test_heatmap_and_calendar_agree(sample_tasks, sample_log):
    cells = [c for c in month_grid(date(2024, 3, 1), sample_tasks, sample_log, today=date(2024, 3, 31), tz=UTC) if c]
    by_date = {c.breakdown.date: c.breakdown for c in cells}
    for breakdown in heatmap(sample_tasks, sample_log, end=date(2024, 3, 31), days=31, tz=UTC):
        assert by_date[breakdown.date] == breakdown
        day = date.fromisoformat(breakdown.date)
        assert classify_day(day, sample_tasks, sample_log, UTC) == breakdown.status
        if breakdown.status == DayStatus.PERFECT:
            assert heatmap_intensity(breakdown) == 4


class TestMonthGrid:
    """Sunday-first month layout."""

    def test_leading_padding_matches_weekday(self, sample_tasks, sample_log):
        # 2024-03-01 is a Friday
        cells = month_grid(date(2024, 3, 15), sample_tasks, sample_log, today=date(2024, 3, 15), tz=UTC)
        assert cells[:5] == [None] * 5
        assert cells[5].day == 1
        assert len(cells) == 5 + 31

    def test_future_days_flagged(self, sample_tasks, sample_log):
        cells = [c for c in month_grid(date(2024, 3, 1), sample_tasks, sample_log,
                                       today=date(2024, 3, 15), tz=UTC) if c]
        assert not cells[14].is_future
        assert cells[15].is_future
        assert all(c.is_future for c in cells[15:])

    def test_sunday_offset(self):
        assert sunday_offset(date(2024, 3, 3)) == 0
        assert sunday_offset(date(2024, 3, 9)) == 6


class TestDayDetail:
    """Per-day list of active tasks and their completion."""

    def test_lists_active_tasks_only(self, sample_tasks, sample_log):
        detail = day_detail(date(2024, 3, 5), sample_tasks, sample_log, UTC)
        assert [(t.id, done) for t, done in detail] == [("task-run", True), ("task-read", True)]

    def test_accepts_date_key_and_reports_misses(self, sample_tasks, sample_log):
        detail = day_detail("2024-03-04", sample_tasks, sample_log, UTC)
        assert [(t.id, done) for t, done in detail] == [("task-run", False)]

    def test_empty_before_any_task(self, sample_tasks, sample_log):
        assert day_detail("2024-01-01", sample_tasks, sample_log, UTC) == []
