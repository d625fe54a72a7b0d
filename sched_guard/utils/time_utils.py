from datetime import datetime
from typing import Iterable, List, Union

from ..errors import InvalidInterval

MINUTES_PER_DAY = 24 * 60


def parse_time(t: str) -> int:
    """Parse time in either HH:MM or HH:MM:SS format into minutes from midnight."""
    value = str(t).strip()
    # strptime has no 24:00, but the store uses it for "until end of day"
    if value in ("24:00", "24:00:00"):
        return MINUTES_PER_DAY
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        return parsed.hour * 60 + parsed.minute
    raise InvalidInterval(f"Unrecognised time {t!r}; expected HH:MM")


def format_time(minutes: int) -> str:
    """Format minutes from midnight as 24-hour HH:MM."""
    h, m = divmod(minutes, 60)
    return f"{h:02d}:{m:02d}"


def format_time_ampm(minutes: int) -> str:
    """Convert minutes from midnight to 12-hour AM/PM format."""
    h, m = divmod(minutes, 60)
    period = "AM" if h % 24 < 12 else "PM"
    display_hour = h % 12 or 12
    return f"{display_hour}:{m:02d} {period}"


def format_range_ampm(start: int, end: int) -> str:
    return f"{format_time_ampm(start)} - {format_time_ampm(end)}"


def split_days(days: Union[str, Iterable[str]]) -> List[str]:
    """Accept ["monday", "wednesday"] or the store's "monday,wednesday" form."""
    if isinstance(days, str):
        return [d.strip() for d in days.split(",") if d.strip()]
    return [str(d).strip() for d in days if str(d).strip()]
