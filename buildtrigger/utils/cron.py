from datetime import datetime, timezone

from croniter import croniter


class CronSchedule:
    """A cron expression evaluated in UTC, the way scheduled workflows are."""

    def __init__(self, expression: str):
        if not croniter.is_valid(expression):
            raise ValueError(f"Invalid cron expression: {expression!r}")
        self.expression: str = expression

    def matches(self, moment: datetime) -> bool:
        return croniter.match(self.expression, _as_utc(moment).replace(second=0, microsecond=0))

    def next_fire(self, after: datetime) -> datetime:
        return croniter(self.expression, _as_utc(after)).get_next(datetime)

    def fire_times(self, start: datetime, end: datetime) -> list[datetime]:
        """Fire times in the half-open window ``[start, end)``."""
        start, end = _as_utc(start), _as_utc(end)
        times = []
        # fire times fall on whole minutes, so start is one only without seconds
        if start.second == 0 and start.microsecond == 0 and start < end and self.matches(start):
            times.append(start)
        it = croniter(self.expression, start)
        while True:
            moment = it.get_next(datetime)
            if moment >= end:
                return times
            if moment > start:
                times.append(moment)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)
