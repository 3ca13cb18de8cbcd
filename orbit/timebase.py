"""
Plan13 time base: integer day number plus fraction of day.

The day number is Julian Date - 1721409.5 (Amsat day + 722100). The
linear calendar approximation is valid from 1900-03-01 to 2100-02-28.
"""

import calendar
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Tuple

from .constants import YM
from .errors import InvalidDateError

JD_OFFSET = 1721409.5
SECONDS_PER_DAY = 86400

FIRST_VALID_DATE = (1900, 3, 1)
LAST_VALID_DATE = (2100, 2, 28)


def day_number(year: int, month: int, day: int) -> int:
    """
    Convert a calendar date to a Plan13 day number.

    January and February count as months 13 and 14 of the previous year.
    No range checks are made, so "day 0 of January" is accepted and used
    for epoch arithmetic.
    """
    if month < 3:
        month += 12
        year -= 1
    return int(year * YM) + int((month + 1) * 30.6) + day - 428


def calendar_date(dn: int) -> Tuple[int, int, int]:
    """Convert a day number back to (year, month, day)."""
    dt = dn + 428
    year = int((dt - 122.1) / YM)
    dt -= int(year * YM)
    month = int(dt / 30.61)
    dt -= int(month * 30.6)
    month -= 1
    if month > 12:
        month -= 12
        year += 1
    return year, month, dt


def _check_date(year: int, month: int, day: int):
    if not 1 <= month <= 12:
        raise InvalidDateError(f"Month out of range: {month}")
    if not FIRST_VALID_DATE <= (year, month, day) <= LAST_VALID_DATE:
        raise InvalidDateError(
            f"Date {year:04d}-{month:02d}-{day:02d} outside supported window "
            "1900-03-01 .. 2100-02-28"
        )
    days_in_month = calendar.monthrange(year, month)[1]
    if not 1 <= day <= days_in_month:
        raise InvalidDateError(f"Day out of range for {year:04d}-{month:02d}: {day}")


def _normalize(dn: int, tn: float) -> Tuple[int, float]:
    carry = math.floor(tn)
    dn += int(carry)
    tn -= carry
    # tiny negative fractions can round up to exactly 1.0
    if tn >= 1.0:
        dn += 1
        tn = 0.0
    return dn, tn


@dataclass(frozen=True, order=True)
class DateTime:
    """
    Absolute instant as a day number and a fraction of day in [0, 1).

    Instances are immutable; add() and round_up() return new values.
    """

    day_number: int = 0
    day_fraction: float = 0.0

    def __post_init__(self):
        dn, tn = _normalize(int(self.day_number), float(self.day_fraction))
        object.__setattr__(self, 'day_number', dn)
        object.__setattr__(self, 'day_fraction', tn)

    @classmethod
    def from_calendar(cls, year: int, month: int, day: int,
                      hour: int = 0, minute: int = 0, second: int = 0) -> 'DateTime':
        """
        Build a DateTime from Gregorian calendar fields (UTC).

        Raises:
            InvalidDateError: field out of its natural range or date outside
                1900-03-01 .. 2100-02-28
        """
        _check_date(year, month, day)
        if not 0 <= hour <= 23:
            raise InvalidDateError(f"Hour out of range: {hour}")
        if not 0 <= minute <= 59:
            raise InvalidDateError(f"Minute out of range: {minute}")
        if not 0 <= second <= 59:
            raise InvalidDateError(f"Second out of range: {second}")

        fraction = (hour + minute / 60.0 + second / 3600.0) / 24.0
        return cls(day_number(year, month, day), fraction)

    @classmethod
    def from_datetime(cls, value: datetime) -> 'DateTime':
        """Convert a datetime (naive values are taken as UTC)."""
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        _check_date(value.year, value.month, value.day)
        seconds = (value.hour * 3600 + value.minute * 60 + value.second
                   + value.microsecond / 1e6)
        return cls(day_number(value.year, value.month, value.day), seconds / SECONDS_PER_DAY)

    @classmethod
    def now(cls) -> 'DateTime':
        """Current UTC wall-clock time."""
        return cls.from_datetime(datetime.now(timezone.utc))

    @classmethod
    def parse(cls, text: str) -> 'DateTime':
        """Parse the 'YYYY/MM/DD HH:MM:SS' rendering produced by ascii()."""
        try:
            value = datetime.strptime(text.strip(), '%Y/%m/%d %H:%M:%S')
        except ValueError as e:
            raise InvalidDateError(f"Cannot parse time {text!r}: {e}") from e
        return cls.from_datetime(value)

    def to_calendar(self) -> Tuple[int, int, int, int, int, int]:
        """
        Return (year, month, day, hour, minute, second).

        The time of day is rounded to the nearest second.
        """
        dn = self.day_number
        seconds = int(round(self.day_fraction * SECONDS_PER_DAY))
        if seconds >= SECONDS_PER_DAY:
            dn += 1
            seconds -= SECONDS_PER_DAY
        year, month, day = calendar_date(dn)
        hour, rem = divmod(seconds, 3600)
        minute, second = divmod(rem, 60)
        return year, month, day, hour, minute, second

    def to_datetime(self) -> datetime:
        """Return a timezone-aware UTC datetime at second precision."""
        return datetime(*self.to_calendar(), tzinfo=timezone.utc)

    def add(self, days: float) -> 'DateTime':
        """Return this instant shifted by a (possibly negative) number of days."""
        return DateTime(self.day_number, self.day_fraction + days)

    def round_up(self, step: float) -> 'DateTime':
        """
        Advance to the next multiple of `step` days within the day.

        An instant already on a multiple moves a full step forward.
        """
        if step <= 0:
            raise ValueError(f"Round-up step must be positive, got {step}")
        increment = step - math.fmod(self.day_fraction, step)
        return DateTime(self.day_number, self.day_fraction + increment)

    def elapsed_days(self, since: 'DateTime') -> float:
        """Days from `since` to this instant."""
        return float(self.day_number - since.day_number) + (self.day_fraction - since.day_fraction)

    @property
    def julian_date(self) -> float:
        return self.day_number + self.day_fraction + JD_OFFSET

    def ascii(self) -> str:
        return '%04d/%02d/%02d %02d:%02d:%02d' % self.to_calendar()

    def __str__(self) -> str:
        return self.ascii()


def coerce_time(value: Optional[object]) -> DateTime:
    """Coerce None (now), a datetime or a DateTime to a DateTime."""
    if value is None:
        return DateTime.now()
    if isinstance(value, DateTime):
        return value
    if isinstance(value, datetime):
        return DateTime.from_datetime(value)
    raise TypeError(f"Unsupported time value: {type(value).__name__}")
