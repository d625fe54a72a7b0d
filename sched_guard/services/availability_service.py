import logging
from typing import Iterable, List, Optional

from ..models.booking import AvailableSlot, Booking, TimeBlock
from ..models.interval import TimeInterval, overlaps, sort_days
from .conflict_service import relevant_bookings

logger = logging.getLogger(__name__)


def find_available_slots(
    proposal: Booking,
    existing: Iterable[Booking],
    window_start: int,
    window_end: int,
    lunch_break: Optional[TimeBlock] = None,
    step: int = 10,
    limit: int = 5,
) -> List[AvailableSlot]:
    """
    Single-day openings of the proposal's length, earliest first.

    Days are scanned in weekday order and start times every ``step`` minutes
    from ``window_start``. A slot is kept when the professor, the section and
    (for room-bound schedule types) the room are all free. Room-bound classes
    also stay clear of the lunch break.
    """
    proposal.require_room()
    if step <= 0:
        raise ValueError("step must be a positive number of minutes")
    duration = proposal.interval.duration
    if window_end - window_start < duration or limit <= 0:
        return []

    bookings = relevant_bookings(proposal, existing)
    avoid_lunch = lunch_break is not None and proposal.schedule_type.requires_room
    slots: List[AvailableSlot] = []

    for day in sort_days(proposal.interval.days):
        day_bookings = [b for b in bookings if day in b.interval.days]
        busy = [
            b.interval for b in day_bookings
            if b.professor_id == proposal.professor_id
            or b.section_id == proposal.section_id
            or (proposal.uses_room and b.uses_room and b.room_id == proposal.room_id)
        ]

        start = window_start
        while start + duration <= window_end:
            end = start + duration
            candidate = TimeInterval(frozenset([day]), start, end)
            lunch_clash = avoid_lunch and start < lunch_break.end and lunch_break.start < end
            if not lunch_clash and not any(overlaps(candidate, b) for b in busy):
                slots.append(AvailableSlot(day, start, end))
                if len(slots) >= limit:
                    return slots
            start += step

    logger.debug("found %d open slots for %s", len(slots), proposal.interval)
    return slots
