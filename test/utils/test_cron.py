from datetime import datetime, timedelta, timezone

import pytest
from buildtrigger.utils.cron import CronSchedule

DAILY = "0 18 */1 * *"


def test_invalid_expression():
    with pytest.raises(ValueError, match="Invalid cron expression"):
        CronSchedule("not a cron")


def test_matches_declared_time():
    schedule = CronSchedule(DAILY)
    assert schedule.matches(datetime(2025, 3, 10, 18, 0, 30, tzinfo=timezone.utc))
    assert not schedule.matches(datetime(2025, 3, 10, 18, 1, tzinfo=timezone.utc))
    assert not schedule.matches(datetime(2025, 3, 10, 2, 0, tzinfo=timezone.utc))


def test_naive_datetimes_are_utc():
    assert CronSchedule(DAILY).matches(datetime(2025, 3, 10, 18, 0))


def test_other_timezones_are_converted():
    beijing = timezone(timedelta(hours=8))
    assert CronSchedule(DAILY).matches(datetime(2025, 3, 11, 2, 0, tzinfo=beijing))


def test_next_fire():
    after = datetime(2025, 3, 10, 19, 0, tzinfo=timezone.utc)
    assert CronSchedule(DAILY).next_fire(after) == datetime(2025, 3, 11, 18, 0, tzinfo=timezone.utc)


def test_fires_exactly_once_per_day():
    schedule = CronSchedule(DAILY)
    start = datetime(2025, 1, 1, tzinfo=timezone.utc)
    for day in range(365):
        day_start = start + timedelta(days=day)
        fire_times = schedule.fire_times(day_start, day_start + timedelta(days=1))
        assert len(fire_times) == 1
        assert (fire_times[0].hour, fire_times[0].minute) == (18, 0)


def test_fire_times_window_is_half_open():
    schedule = CronSchedule(DAILY)
    start = datetime(2025, 3, 10, 18, 0, tzinfo=timezone.utc)
    assert schedule.fire_times(start, start + timedelta(days=1)) == [start]
    assert schedule.fire_times(start - timedelta(days=1), start) == [start - timedelta(days=1)]


def test_fire_times_start_with_subsecond_precision():
    schedule = CronSchedule(DAILY)
    start = datetime(2025, 3, 10, 18, 0, 0, 500000, tzinfo=timezone.utc)
    fire_times = schedule.fire_times(start, start + timedelta(days=1))
    assert fire_times == [datetime(2025, 3, 11, 18, 0, tzinfo=timezone.utc)]
    assert all(moment >= start for moment in fire_times)


def test_fire_times_empty_window():
    start = datetime(2025, 3, 10, 18, 0, tzinfo=timezone.utc)
    assert CronSchedule(DAILY).fire_times(start, start) == []
