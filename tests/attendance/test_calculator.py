from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from tkms.attendance.calculator import AttendanceCalculator, compute
from tkms.common.datetime_utils import LOCAL_TZ
from tkms.core.exceptions import InvalidSchedule, MissingClockIn
from tkms.schedules.model import Schedule

DAY = date(2024, 6, 3)


def _at(hh: int, mm: int, ss: int = 0) -> datetime:
    return datetime(DAY.year, DAY.month, DAY.day, hh, mm, ss, tzinfo=LOCAL_TZ)


def _schedule(time_in="08:00", time_out="17:00", lunch_start=None, lunch_end=None) -> Schedule:
    return Schedule(
        schedule_id=1,
        user_id=1,
        days=frozenset({"monday"}),
        time_in=time_in,
        time_out=time_out,
        lunch_start=lunch_start,
        lunch_end=lunch_end,
    )


def test_explicit_lunch_window_is_deducted_by_overlap():
    m = compute(_at(8, 0), _at(17, 0), _schedule(lunch_start="12:00", lunch_end="13:00"))

    assert m.total_minutes == 540
    assert m.lunch_break_minutes == 60
    assert m.worked_minutes == 480
    assert m.worked_hours == 8.0
    assert m.overtime_minutes == 0
    assert m.early_out_minutes == 0
    assert m.late_minutes == 0


def test_explicit_lunch_only_counts_the_part_worked_through():
    m = compute(_at(12, 30), _at(17, 0), _schedule(lunch_start="12:00", lunch_end="13:00"))

    assert m.lunch_break_minutes == 30
    assert m.total_minutes == 270
    assert m.worked_minutes == 240


def test_late_arrival_is_not_clamped():
    m = compute(_at(8, 15), _at(17, 0), _schedule())

    assert m.late_minutes == 15
    assert m.is_late is True
    assert m.total_minutes == 525


def test_early_arrival_is_clamped_to_scheduled_start():
    m = compute(_at(7, 30), _at(17, 0), _schedule())

    assert m.total_minutes == 540
    assert m.late_minutes == 0
    assert m.is_late is False


def test_overtime_without_lunch_window_uses_flat_fallback():
    m = compute(_at(8, 0), _at(18, 30), _schedule())

    assert m.total_minutes == 630
    assert m.lunch_break_minutes == 60
    assert m.worked_minutes == 570
    assert m.overtime_minutes == 90
    assert m.overtime_hours == 1.5
    assert m.early_out_minutes == 0


def test_lunch_window_inside_overtime_is_not_paid_as_overtime():
    schedule = _schedule(time_in="08:00", time_out="12:00", lunch_start="12:00", lunch_end="13:00")

    m = compute(_at(8, 0), _at(14, 0), schedule)

    assert m.total_minutes == 360
    assert m.lunch_break_minutes == 60
    assert m.worked_minutes == 300
    assert m.overtime_minutes == 60


def test_lunch_window_straddling_scheduled_end_only_trims_its_overtime_part():
    schedule = _schedule(time_in="08:00", time_out="12:30", lunch_start="12:00", lunch_end="13:00")

    m = compute(_at(8, 0), _at(14, 0), schedule)

    assert m.total_minutes == 360
    assert m.lunch_break_minutes == 60
    assert m.worked_minutes == 300
    assert m.overtime_minutes == 60
    assert m.early_out_minutes == 0


@pytest.mark.parametrize(
    "time_out, expected_break",
    [
        (_at(14, 0), 30),  # exactly 6.00 h
        (_at(14, 0, 36), 60),  # 6.01 h
        (_at(12, 0), 30),  # exactly 4.00 h
        (_at(11, 59, 24), 0),  # 3.99 h
    ],
)
def test_fallback_break_boundaries(time_out, expected_break):
    m = compute(_at(8, 0), time_out, _schedule())

    assert m.lunch_break_minutes == expected_break


def test_early_out_is_measured_against_scheduled_end():
    m = compute(_at(8, 0), _at(16, 30), _schedule())

    assert m.early_out_minutes == 30
    assert m.is_early_out is True
    assert m.overtime_minutes == 0


def test_missing_time_out_only_defines_lateness():
    m = compute(_at(8, 20), None, _schedule())

    assert m.late_minutes == 20
    assert m.is_late is True
    assert m.is_complete is False
    assert m.total_minutes is None
    assert m.total_hours is None
    assert m.lunch_break_minutes is None
    assert m.worked_minutes is None
    assert m.overtime_minutes is None
    assert m.early_out_minutes is None
    assert m.is_early_out is None


def test_missing_time_in_is_rejected():
    with pytest.raises(MissingClockIn):
        compute(None, _at(17, 0), _schedule())


@pytest.mark.parametrize(
    "schedule",
    [
        _schedule(time_in="8am"),
        _schedule(time_out="24:00"),
        _schedule(time_in=""),
        _schedule(lunch_start="12:60", lunch_end="13:00"),
    ],
)
def test_malformed_schedule_times_are_rejected(schedule):
    with pytest.raises(InvalidSchedule):
        compute(_at(8, 0), _at(17, 0), schedule)


def test_instants_are_normalized_to_the_canonical_timezone():
    # 00:15 UTC == 08:15 in Manila (UTC+8)
    time_in = datetime(2024, 6, 3, 0, 15, tzinfo=timezone.utc)
    time_out = datetime(2024, 6, 3, 9, 0, tzinfo=timezone.utc)

    m = compute(time_in, time_out, _schedule())

    assert m.late_minutes == 15
    assert m.total_minutes == 525
    assert m.early_out_minutes == 0


def test_naive_datetimes_are_taken_as_canonical_wall_clock():
    m = compute(datetime(2024, 6, 3, 8, 10), datetime(2024, 6, 3, 17, 0), _schedule())

    assert m.late_minutes == 10


def test_minutes_round_half_away_from_zero():
    m = compute(_at(8, 0, 30), None, _schedule())

    assert m.late_minutes == 1


@pytest.mark.parametrize(
    "time_in, time_out",
    [
        (_at(7, 0), _at(7, 30)),
        (_at(9, 0), _at(8, 30)),
        (_at(8, 0), _at(17, 0)),
        (_at(13, 0), _at(22, 45)),
    ],
)
def test_metrics_are_never_negative_and_worked_never_exceeds_total(time_in, time_out):
    m = compute(time_in, time_out, _schedule(lunch_start="12:00", lunch_end="13:00"))

    for value in (
        m.total_minutes,
        m.lunch_break_minutes,
        m.worked_minutes,
        m.overtime_minutes,
        m.late_minutes,
        m.early_out_minutes,
    ):
        assert value >= 0
    assert m.worked_hours <= m.total_hours


def test_compute_is_pure():
    calculator = AttendanceCalculator()
    schedule = _schedule(lunch_start="12:00", lunch_end="13:00")

    first = calculator.compute(_at(8, 5), _at(18, 0), schedule)
    second = calculator.compute(_at(8, 5), _at(18, 0), schedule)

    assert first == second


def test_to_dict_uses_wire_field_names():
    m = compute(_at(8, 0), _at(18, 30), _schedule())

    assert m.to_dict() == {
        "totalMinutes": 630,
        "totalHours": 10.5,
        "lunchBreakMinutes": 60,
        "workedMinutes": 570,
        "workedHours": 9.5,
        "overtimeMinutes": 90,
        "overtimeHours": 1.5,
        "lateMinutes": 0,
        "earlyOutMinutes": 0,
        "isLate": False,
        "isEarlyOut": False,
    }
