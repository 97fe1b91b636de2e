"""
Clock / date-key provider.

All of "today" flows through a clock object so that tests can pin the date
without touching system time. Date keys are ISO 'YYYY-MM-DD' strings, which
sort lexicographically in calendar order.
"""
import datetime
from typing import Optional, Tuple

from water_server import config
from water_server.errors import ValidationError

DATE_KEY_FORMAT = "%Y-%m-%d"


def format_date_key(day: datetime.date) -> str:
    return day.strftime(DATE_KEY_FORMAT)


def parse_date_key(date_key) -> datetime.date:
    """Parse a 'YYYY-MM-DD' key, raising ValidationError on anything else."""
    if not isinstance(date_key, str) or len(date_key) != 10:
        raise ValidationError(f"Invalid date key: {date_key!r}")
    try:
        return datetime.datetime.strptime(date_key, DATE_KEY_FORMAT).date()
    except ValueError as e:
        raise ValidationError(f"Invalid date key: {date_key!r}") from e


class _BaseClock:
    def now(self) -> datetime.datetime:
        raise NotImplementedError

    def today(self) -> datetime.date:
        return self.now().date()

    def date_key(self) -> str:
        return format_date_key(self.today())

    def days_ago_key(self, days: int) -> str:
        if isinstance(days, bool) or not isinstance(days, int) or days < 0:
            raise ValidationError(f"days_ago must be a non-negative number of days, got {days!r}")
        return format_date_key(self.today() - datetime.timedelta(days=days))

    def window(self, days: int) -> Tuple[str, str]:
        """Inclusive (date_from, date_to) keys covering `days` calendar days ending today."""
        if isinstance(days, bool) or not isinstance(days, int) or days < 1:
            raise ValidationError(f"Window must be a positive number of days, got {days!r}")
        end = self.today()
        start = end - datetime.timedelta(days=days - 1)
        return format_date_key(start), format_date_key(end)


class SystemClock(_BaseClock):
    def __init__(self, tz: Optional[str] = None):
        self.tz = None
        if tz:
            from zoneinfo import ZoneInfo
            self.tz = ZoneInfo(tz)

    def now(self) -> datetime.datetime:
        if self.tz is None:
            return datetime.datetime.now().astimezone()
        return datetime.datetime.now(self.tz)


class FixedClock(_BaseClock):
    """Deterministic clock. Each now() call moves time forward by `step`."""

    def __init__(self, moment: datetime.datetime, step: datetime.timedelta = datetime.timedelta(0)):
        self.moment = moment
        self.step = step

    @classmethod
    def on(cls, date_key: str, step: datetime.timedelta = datetime.timedelta(0)) -> "FixedClock":
        day = parse_date_key(date_key)
        return cls(datetime.datetime(day.year, day.month, day.day, 12, 0, tzinfo=datetime.timezone.utc), step)

    def now(self) -> datetime.datetime:
        current = self.moment
        self.moment = current + self.step
        return current

    def advance(self, delta: datetime.timedelta):
        self.moment = self.moment + delta


_clock = SystemClock(config.TIMEZONE)


def get_clock(clock=None):
    """Return the given clock, or the process default."""
    return clock if clock is not None else _clock


def set_clock(clock):
    global _clock
    _clock = clock
