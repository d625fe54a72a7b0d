"""
Recurring weekly time blocks.

Times are integer minutes from midnight (07:30 -> 450). A block covers the
half-open range [start, end) on every day in ``days``, so back-to-back
classes (one ends at 09:00, the next starts at 09:00) do not overlap.
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, Union

from ..errors import InvalidInterval
from ..utils.time_utils import MINUTES_PER_DAY, format_range_ampm


class Day(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @property
    def order(self) -> int:
        return _DAY_ORDER[self]

    @property
    def short(self) -> str:
        return self.value[:3].capitalize()

    @classmethod
    def parse(cls, value: Union[str, "Day"]) -> "Day":
        """Accepts "monday", "Mon", "THU", "thurs"... Unknown names are rejected."""
        if isinstance(value, Day):
            return value
        key = str(value).strip().lower()
        if key in _DAY_ALIASES:
            return _DAY_ALIASES[key]
        raise InvalidInterval(f"Unknown day {value!r}")


_DAY_ORDER = {day: i for i, day in enumerate(Day)}
_DAY_ALIASES = {}
for _day in Day:
    _DAY_ALIASES[_day.value] = _day
    _DAY_ALIASES[_day.value[:3]] = _day
_DAY_ALIASES.update({"tues": Day.TUESDAY, "weds": Day.WEDNESDAY, "thur": Day.THURSDAY, "thurs": Day.THURSDAY})


def sort_days(days: Iterable[Day]):
    return sorted(days, key=lambda d: d.order)


@dataclass(frozen=True)
class TimeInterval:
    days: FrozenSet[Day]
    start: int
    end: int

    def __post_init__(self):
        raw = [self.days] if isinstance(self.days, str) else self.days
        days = frozenset(Day.parse(d) for d in raw)
        if not days:
            raise InvalidInterval("A time interval needs at least one day")
        if not isinstance(self.start, int) or not isinstance(self.end, int):
            raise InvalidInterval("Interval times must be integer minutes")
        if not 0 <= self.start < self.end <= MINUTES_PER_DAY:
            raise InvalidInterval(
                f"Invalid time range {self.start}-{self.end}: "
                f"need 0 <= start < end <= {MINUTES_PER_DAY}"
            )
        # frozen: bypass __setattr__ to store the normalised day set
        object.__setattr__(self, "days", days)

    @property
    def duration(self) -> int:
        return self.end - self.start

    def with_times(self, start: int, end: int) -> "TimeInterval":
        return TimeInterval(self.days, start, end)

    def shifted(self, minutes: int) -> "TimeInterval":
        return self.with_times(self.start + minutes, self.end + minutes)

    def label(self) -> str:
        days = ", ".join(d.short for d in sort_days(self.days))
        return f"{days} {format_range_ampm(self.start, self.end)}"

    def __repr__(self):
        days = ",".join(d.short for d in sort_days(self.days))
        return f"TimeInterval(days={days}, {self.start}-{self.end})"


def overlaps(a: TimeInterval, b: TimeInterval) -> bool:
    """True iff the blocks share a day and their [start, end) ranges intersect."""
    if a.days.isdisjoint(b.days):
        return False
    return a.start < b.end and b.start < a.end


def within_window(t: TimeInterval, window_start: int, window_end: int) -> bool:
    return t.start >= window_start and t.end <= window_end
