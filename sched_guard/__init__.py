"""Schedule conflict detection and alternative time-slot recommendation."""

from .errors import InvalidInterval, NoRoomForOnsiteSchedule, SchedulingError
from .models.interval import Day, TimeInterval, overlaps, within_window
from .models.booking import (
    Booking,
    Conflict,
    ConflictKind,
    ConflictReport,
    Recommendation,
    ScheduleType,
    TermKey,
    TimeBlock,
    WorkloadPolicy,
    WorkloadStatus,
)
from .services.conflict_service import detect, suggest_alternative_professors
from .services.recommendation_service import DEFAULT_TIME_BLOCKS, recommend
from .services.availability_service import find_available_slots

__all__ = [
    "Booking",
    "Conflict",
    "ConflictKind",
    "ConflictReport",
    "DEFAULT_TIME_BLOCKS",
    "Day",
    "InvalidInterval",
    "NoRoomForOnsiteSchedule",
    "Recommendation",
    "ScheduleType",
    "SchedulingError",
    "TermKey",
    "TimeBlock",
    "TimeInterval",
    "WorkloadPolicy",
    "WorkloadStatus",
    "detect",
    "find_available_slots",
    "overlaps",
    "recommend",
    "suggest_alternative_professors",
    "within_window",
]
