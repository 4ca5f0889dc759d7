from dataclasses import replace
from datetime import date, datetime, timedelta

import pytest

from meeting_scheduler.availability import (
    build_daily_window,
    compute_slots,
    date_in_range,
    iter_slot_starts,
    overlaps_blocked_range,
)
from meeting_scheduler.data_models import TimeRange


def _times(slots):
    return [slot.time for slot in slots]


def test_slots_skip_the_blocked_lunch_period(talk):
    times = _times(compute_slots(date(2026, 3, 9), talk))

    assert times[0] == "09:00"
    assert "11:00" in times  # ends 11:40, before the block starts
    assert "11:10" not in times
    assert "11:40" not in times
    assert "13:10" not in times
    assert times[times.index("11:00") + 1] == "13:20"


def test_last_slot_ends_exactly_at_daily_end(talk):
    times = _times(compute_slots(date(2026, 3, 9), talk))

    assert times[-1] == "16:20"
    assert "16:30" not in times
    assert len(times) == 32


def test_every_slot_is_marked_available(talk):
    slots = compute_slots(date(2026, 3, 9), talk)
    assert slots
    assert all(slot.available for slot in slots)


def test_slots_stay_inside_window_and_outside_blocks(talk):
    day = date(2026, 3, 10)
    daily_start, daily_end = build_daily_window(day, talk)
    duration = timedelta(minutes=talk.duration_minutes)

    for slot in compute_slots(day, talk):
        start = datetime.combine(day, datetime.strptime(slot.time, "%H:%M").time())
        assert start >= daily_start
        assert start + duration <= daily_end
        assert not overlaps_blocked_range(start, start + duration, talk)


def test_block_boundaries_are_half_open(talk):
    block_start = datetime(2026, 3, 9, 11, 45)
    block_end = datetime(2026, 3, 9, 13, 15)

    assert not overlaps_blocked_range(block_start - timedelta(minutes=40), block_start, talk)
    assert not overlaps_blocked_range(block_end, block_end + timedelta(minutes=40), talk)
    assert overlaps_blocked_range(block_end - timedelta(minutes=1), block_end + timedelta(minutes=39), talk)


def test_slot_starting_at_block_end_is_offered_when_on_the_grid(talk):
    shifted = replace(talk, blocked=(TimeRange(start="11:45", end="13:10"),))
    times = _times(compute_slots(date(2026, 3, 9), shifted))
    assert "13:10" in times
    assert "13:00" not in times


def test_overlapping_blocks_are_both_honoured(talk):
    overlapping = replace(talk, blocked=(
        TimeRange(start="10:00", end="11:00"),
        TimeRange(start="10:30", end="12:00"),
    ))
    times = _times(compute_slots(date(2026, 3, 9), overlapping))
    assert "09:20" in times
    assert "09:30" not in times
    assert "11:50" not in times
    assert "12:00" in times


def test_compute_slots_is_repeatable(talk):
    first = compute_slots(date(2026, 3, 11), talk)
    second = compute_slots(date(2026, 3, 11), talk)
    assert first == second


def test_malformed_daily_window_yields_no_slots(talk):
    broken = replace(talk, daily_start="9am")
    assert build_daily_window(date(2026, 3, 9), broken) is None
    assert compute_slots(date(2026, 3, 9), broken) == []


def test_malformed_block_is_ignored(talk):
    broken = replace(talk, blocked=(TimeRange(start="noon", end="13:00"),))
    times = _times(compute_slots(date(2026, 3, 9), broken))
    assert "12:00" in times


def test_duration_longer_than_window_yields_no_slots(talk):
    short = replace(talk, daily_start="12:00", daily_end="12:30", blocked=())
    assert compute_slots(date(2026, 3, 9), short) == []


def test_exact_fit_window_yields_single_slot(talk):
    lunch = replace(talk, duration_minutes=60, daily_start="12:00", daily_end="13:00", blocked=())
    assert _times(compute_slots(date(2026, 3, 9), lunch)) == ["12:00"]


def test_slot_starts_generator_restarts_from_the_beginning():
    start = datetime(2026, 3, 9, 9, 0)
    end = datetime(2026, 3, 9, 10, 0)
    starts = list(iter_slot_starts(start, end, timedelta(minutes=30), interval_minutes=15))
    assert starts == [start + timedelta(minutes=m) for m in (0, 15, 30)]
    assert list(iter_slot_starts(start, end, timedelta(minutes=30), interval_minutes=15)) == starts


def test_custom_interval(talk):
    times = _times(compute_slots(date(2026, 3, 9), talk, interval_minutes=30))
    assert times[:3] == ["09:00", "09:30", "10:00"]


def test_date_in_range_pads_end_day_by_23_hours():
    assert date_in_range(datetime(2026, 3, 9), "2026-03-09", "2026-03-13")
    assert date_in_range(datetime(2026, 3, 13, 23, 0), "2026-03-09", "2026-03-13")
    assert not date_in_range(datetime(2026, 3, 13, 23, 1), "2026-03-09", "2026-03-13")
    assert not date_in_range(datetime(2026, 3, 14), "2026-03-09", "2026-03-13")
    assert not date_in_range(datetime(2026, 3, 8, 23, 59), "2026-03-09", "2026-03-13")


def test_date_in_range_rejects_malformed_bounds():
    assert not date_in_range(datetime(2026, 3, 9), "March 9", "2026-03-13")


@pytest.mark.parametrize("interval", [0, -10])
def test_non_positive_interval_is_rejected(talk, interval):
    start = datetime(2026, 3, 9, 9, 0)
    with pytest.raises(ValueError, match="interval_minutes"):
        next(iter_slot_starts(start, start + timedelta(hours=8), timedelta(minutes=40), interval_minutes=interval))
    with pytest.raises(ValueError):
        compute_slots(date(2026, 3, 9), talk, interval_minutes=interval)
