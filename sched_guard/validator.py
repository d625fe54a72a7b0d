from typing import List

from .config import Settings
from .models.booking import Booking
from .utils.time_utils import format_range_ampm


class ScheduleValidator:
    """Handles the school-day rules checked before a schedule is accepted."""

    def __init__(self, booking: Booking, settings: Settings):
        self.booking = booking
        self.settings = settings

    def validate(self) -> List[str]:
        errors = []
        interval = self.booking.interval
        s = self.settings

        # Operating hours
        if interval.start < s.window_start or interval.end > s.window_end:
            errors.append(
                "School Hours Violation: Classes must be scheduled between "
                f"{format_range_ampm(s.window_start, s.window_end)} only."
            )

        # Lunch break applies to classes held in a room
        if self.booking.schedule_type.requires_room:
            if interval.start < s.lunch_end and s.lunch_start < interval.end:
                errors.append(
                    "Lunch Break: Onsite classes cannot be scheduled across "
                    f"{format_range_ampm(s.lunch_start, s.lunch_end)}."
                )

        return errors
