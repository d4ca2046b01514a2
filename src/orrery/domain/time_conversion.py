# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Calendar ↔ Julian Date conversion.

Every other computation in the package is anchored to a single continuous
time axis: the Julian Date (JD), a day count with fractional part. This
module maps civil calendar instants onto that axis and back.

Calendar convention:
    Dates before 1582-10-15 are in the Julian calendar, later dates in the
    Gregorian calendar (Meeus, Astronomical Algorithms, Ch. 7). The model
    uses uniform 86400 s days; leap seconds are ignored.

No external dependencies — only stdlib math/dataclasses/datetime.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timezone

J2000_JD: float = 2451545.0
"""Julian Date of the J2000.0 epoch (2000-01-01 12:00)."""

DAYS_PER_JULIAN_YEAR: float = 365.25
DAYS_PER_JULIAN_CENTURY: float = 36525.0
SECONDS_PER_DAY: int = 86400

# First JD day number of the Gregorian calendar (1582-10-15).
_GREGORIAN_START_DAY = 2299161

_MONTH_NAMES = (
    'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
    'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec',
)


@dataclass(frozen=True, order=True)
class CalendarInstant:
    """A civil calendar instant (UTC).

    Unlike ``datetime`` this covers astronomical years ≤ 0 and follows the
    Julian calendar before the Gregorian reform.
    """
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: float = 0.0

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be in 1..12, got {self.month}")
        if not 1 <= self.day <= 31:
            raise ValueError(f"day must be in 1..31, got {self.day}")
        if not 0 <= self.hour < 24:
            raise ValueError(f"hour must be in 0..23, got {self.hour}")
        if not 0 <= self.minute < 60:
            raise ValueError(f"minute must be in 0..59, got {self.minute}")
        if not 0 <= self.second < 60:
            raise ValueError(f"second must be in [0, 60), got {self.second}")

    @property
    def is_gregorian(self) -> bool:
        """True on or after the Gregorian reform date 1582-10-15."""
        return (self.year, self.month, self.day) >= (1582, 10, 15)

    @classmethod
    def from_datetime(cls, dt: datetime) -> 'CalendarInstant':
        """Build from a datetime (naive treated as UTC)."""
        if dt.tzinfo is not None:
            dt = dt.astimezone(timezone.utc)
        return cls(
            dt.year, dt.month, dt.day, dt.hour, dt.minute,
            dt.second + dt.microsecond / 1_000_000.0,
        )

    def to_datetime(self) -> datetime:
        """Convert to an aware UTC datetime.

        Raises:
            ValueError: If the year is outside datetime's range.
        """
        whole = int(self.second)
        micro = int(round((self.second - whole) * 1_000_000))
        return datetime(
            self.year, self.month, self.day, self.hour, self.minute,
            whole, micro, tzinfo=timezone.utc,
        )


def to_julian_date(instant: CalendarInstant) -> float:
    """
    Convert a calendar instant to Julian Date.

    January and February are treated as months 13 and 14 of the previous
    year; the Gregorian correction term applies from 1582-10-15 onwards.

    Args:
        instant: Calendar instant (UTC).

    Returns:
        Julian Date.
    """
    y = instant.year
    m = instant.month
    d = (instant.day
         + (instant.hour + instant.minute / 60.0 + instant.second / 3600.0) / 24.0)

    if m <= 2:
        y -= 1
        m += 12

    if instant.is_gregorian:
        a = math.floor(y / 100)
        b = 2 - a + math.floor(a / 4)
    else:
        b = 0

    return (math.floor(365.25 * (y + 4716))
            + math.floor(30.6001 * (m + 1))
            + d + b - 1524.5)


def from_julian_date(jd: float) -> CalendarInstant:
    """
    Convert a Julian Date back to a calendar instant.

    Exact inverse of to_julian_date at one-second resolution: the day
    fraction is rounded to the nearest second, carrying into the next day.

    Args:
        jd: Julian Date.

    Returns:
        CalendarInstant with whole seconds.
    """
    jd_plus = jd + 0.5
    z = math.floor(jd_plus)
    seconds_of_day = round((jd_plus - z) * SECONDS_PER_DAY)
    if seconds_of_day >= SECONDS_PER_DAY:
        z += 1
        seconds_of_day -= SECONDS_PER_DAY

    if z < _GREGORIAN_START_DAY:
        a = z
    else:
        alpha = math.floor((z - 1867216.25) / 36524.25)
        a = z + 1 + alpha - math.floor(alpha / 4)

    b = a + 1524
    c = math.floor((b - 122.1) / 365.25)
    d = math.floor(365.25 * c)
    e = math.floor((b - d) / 30.6001)

    day = b - d - math.floor(30.6001 * e)
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715

    hour, remainder = divmod(seconds_of_day, 3600)
    minute, second = divmod(remainder, 60)

    return CalendarInstant(int(year), int(month), int(day),
                           int(hour), int(minute), float(second))


def datetime_to_jd(dt: datetime) -> float:
    """Convert a UTC datetime to Julian Date (naive treated as UTC)."""
    return to_julian_date(CalendarInstant.from_datetime(dt))


def jd_to_datetime(jd: float) -> datetime:
    """Convert a Julian Date to an aware UTC datetime (whole seconds)."""
    return from_julian_date(jd).to_datetime()


def centuries_since_epoch(jd: float, epoch: float = J2000_JD) -> float:
    """Julian centuries elapsed from epoch to jd."""
    return (jd - epoch) / DAYS_PER_JULIAN_CENTURY


def julian_centuries(jd: float) -> float:
    """Julian centuries since J2000.0."""
    return centuries_since_epoch(jd, J2000_JD)


def years_since_epoch(jd: float, epoch: float = J2000_JD) -> float:
    """Julian years (365.25 d) elapsed from epoch to jd."""
    return (jd - epoch) / DAYS_PER_JULIAN_YEAR


def current_julian_date() -> float:
    """Julian Date of the current wall-clock instant."""
    return datetime_to_jd(datetime.now(timezone.utc))


def format_julian_date(jd: float) -> str:
    """Format a Julian Date as e.g. ``"2024 Jan 15 12:30 UTC"``."""
    c = from_julian_date(jd)
    return f"{c.year} {_MONTH_NAMES[c.month - 1]} {c.day:02d} {c.hour:02d}:{c.minute:02d} UTC"
