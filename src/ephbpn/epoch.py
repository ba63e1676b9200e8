"""The epoch module provides the ``Epoch`` class, the input of the ephemeris.

An ``Epoch`` is an immutable proleptic-Gregorian calendar instant that is
consumed directly as Barycentric Dynamical Time (TDB). No time-scale,
timezone or leap-second adjustment is applied anywhere in ephbpn.

Epochs are validated when they are constructed, so a malformed calendar
string or an out-of-range field is reported to the caller as a
``ValueError`` before any ephemeris computation runs.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import datetime, timezone

import jax

from .time import gc2jd, jd2jc

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# Compact command-line forms: YYYYMMDD and YYYYMMDDHHMMSS
_COMPACT_PATTERN = re.compile(r'^(\d{4})(\d{2})(\d{2})(?:(\d{2})(\d{2})(\d{2}))?$')

# Valid ISO 8601 epoch string patterns
_ISO_PATTERNS = [
    # YYYY-MM-DD
    re.compile(r'^(\d{4})-(\d{2})-(\d{2})$'),
    # YYYY-MM-DDTHH:MM:SSZ
    re.compile(r'^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})Z$'),
    # YYYY-MM-DDTHH:MM:SS.fffZ
    re.compile(r'^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})\.(\d+)Z$'),
]


@dataclass(frozen=True)
class Epoch:
    """A calendar instant interpreted as TDB.

    Attributes:
        year (int): Proleptic Gregorian year.
        month (int): Month, 1-12.
        day (int): Day of month.
        hour (int): Hour, 0-23. Default: ``0``
        minute (int): Minute, 0-59. Default: ``0``
        second (float): Second, in ``[0, 60)``. Default: ``0``

    Constructors:
        Epoch(2016, 7, 23)
        Epoch(2016, 7, 23, 12, 59, 59)
        Epoch.from_string("20160723125959")
        Epoch.from_string("2016-07-23T12:59:59Z")
        Epoch.now()
    """

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: float = 0

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Invalid date-time: month {self.month} is out of range")

        days = _DAYS_IN_MONTH[self.month - 1]
        if self.month == 2 and calendar.isleap(self.year):
            days += 1
        if not 1 <= self.day <= days:
            raise ValueError(
                f"Invalid date-time: day {self.day} is out of range for "
                f"{self.year:04d}-{self.month:02d}"
            )

        if not 0 <= self.hour <= 23:
            raise ValueError(f"Invalid date-time: hour {self.hour} is out of range")
        if not 0 <= self.minute <= 59:
            raise ValueError(f"Invalid date-time: minute {self.minute} is out of range")
        if not 0 <= self.second < 60:
            raise ValueError(f"Invalid date-time: second {self.second} is out of range")

    @classmethod
    def from_string(cls, string: str) -> Epoch:
        """Parse an epoch string.

        Supported formats:
            - ``YYYYMMDD``
            - ``YYYYMMDDHHMMSS``
            - ``YYYY-MM-DD``
            - ``YYYY-MM-DDTHH:MM:SSZ``
            - ``YYYY-MM-DDTHH:MM:SS.fffZ``

        Args:
            string (str): Date/time string.

        Returns:
            Epoch: Parsed epoch.

        Raises:
            ValueError: If the string matches no supported format, or names
                an invalid date or time of day.
        """
        m = _COMPACT_PATTERN.match(string)
        if m:
            fields = [int(g) for g in m.groups() if g is not None]
            return cls(*fields)

        for pattern in _ISO_PATTERNS:
            m = pattern.match(string)
            if m:
                groups = m.groups()
                year, month, day = int(groups[0]), int(groups[1]), int(groups[2])

                hour = 0
                minute = 0
                second = 0

                if len(groups) >= 6:
                    hour = int(groups[3])
                    minute = int(groups[4])
                    second = int(groups[5])

                if len(groups) == 7:
                    second += float(f"0.{groups[6]}")

                return cls(year, month, day, hour, minute, second)

        raise ValueError(
            f'Invalid Epoch string: "{string}". Format: YYYYMMDD or YYYYMMDDHHMMSS, '
            'or YYYY-MM-DD[THH:MM:SS[.fff]Z]'
        )

    @classmethod
    def now(cls) -> Epoch:
        """Return the current UTC wall-clock time, truncated to whole seconds."""
        t = datetime.now(timezone.utc)
        return cls(t.year, t.month, t.day, t.hour, t.minute, t.second)

    def caldate(self) -> tuple[int, int, int, int, int, float]:
        """Return ``(year, month, day, hour, minute, second)``."""
        return self.year, self.month, self.day, self.hour, self.minute, self.second

    def jd(self) -> jax.Array:
        """Julian Date of the epoch."""
        return gc2jd(self)

    def jc(self) -> jax.Array:
        """Julian centuries since J2000.0."""
        return jd2jc(self.jd())

    def __str__(self) -> str:
        # Microsecond resolution, never carried into the minute.
        second = min(round(self.second, 6), 59.999999)
        whole = int(second)
        text = (
            f"{self.year:04d}-{self.month:02d}-{self.day:02d}"
            f"T{self.hour:02d}:{self.minute:02d}:{whole:02d}"
        )
        if second != whole:
            text += f"{second:09.6f}"[2:]
        return text + "Z"
