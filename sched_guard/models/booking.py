from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from ..errors import NoRoomForOnsiteSchedule
from .interval import Day, TimeInterval, sort_days


class ScheduleType(str, Enum):
    ONSITE = "Onsite"
    ONLINE = "Online"
    HOMEROOM = "Homeroom"
    RECESS = "Recess"

    @property
    def requires_room(self) -> bool:
        return self in (ScheduleType.ONSITE, ScheduleType.HOMEROOM)

    @classmethod
    def parse(cls, value) -> "ScheduleType":
        if isinstance(value, ScheduleType):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == key:
                return member
        raise ValueError(f"Unknown schedule type {value!r}")


@dataclass(frozen=True)
class TermKey:
    school_year: str
    semester: str

    def __str__(self):
        return f"{self.school_year} {self.semester}"


@dataclass(frozen=True)
class Booking:
    """
    A proposed or committed class schedule entry.

    id:            absent for a proposal that has not been stored yet
    room_id:       absent for schedule types held without a room (Online, Recess)
    *_name/_code:  optional display labels, only used in conflict messages
    """

    professor_id: str
    section_id: str
    subject_id: str
    interval: TimeInterval
    term: TermKey
    schedule_type: ScheduleType = ScheduleType.ONSITE
    room_id: Optional[str] = None
    id: Optional[str] = None
    professor_name: Optional[str] = None
    room_name: Optional[str] = None
    subject_code: Optional[str] = None
    section_name: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "schedule_type", ScheduleType.parse(self.schedule_type))

    def require_room(self) -> "Booking":
        """
        Reject a proposal whose schedule type needs a room but names none.

        Committed rows are not held to this: the store keeps room_id nullable,
        and such a row simply occupies no room.
        """
        if self.schedule_type.requires_room and not self.room_id:
            raise NoRoomForOnsiteSchedule(
                f"{self.schedule_type.value} schedules need a room"
            )
        return self

    @property
    def uses_room(self) -> bool:
        return bool(self.room_id) and self.schedule_type.requires_room

    def with_interval(self, interval: TimeInterval) -> "Booking":
        return replace(self, interval=interval)

    def with_professor(self, professor_id: str, professor_name: Optional[str] = None) -> "Booking":
        return replace(self, professor_id=professor_id, professor_name=professor_name)

    # display helpers for messages
    def professor_label(self) -> str:
        return self.professor_name or f"Professor {self.professor_id}"

    def room_label(self) -> str:
        return self.room_name or f"Room {self.room_id}"

    def subject_label(self) -> str:
        return self.subject_code or f"Subject {self.subject_id}"

    def section_label(self) -> str:
        return self.section_name or f"Section {self.section_id}"


@dataclass(frozen=True)
class WorkloadPolicy:
    max_subjects_per_professor: int = 8

    def __post_init__(self):
        if self.max_subjects_per_professor < 1:
            raise ValueError("max_subjects_per_professor must be at least 1")


class ConflictKind(str, Enum):
    PROFESSOR_SCHEDULE_CONFLICT = "PROFESSOR_SCHEDULE_CONFLICT"
    ROOM_OCCUPIED = "ROOM_OCCUPIED"
    SECTION_SCHEDULE_CONFLICT = "SECTION_SCHEDULE_CONFLICT"
    DUPLICATE_SUBJECT = "DUPLICATE_SUBJECT"


@dataclass(frozen=True)
class Conflict:
    booking: Booking
    kind: ConflictKind
    message: str
    days: Tuple[Day, ...] = ()


@dataclass(frozen=True)
class WorkloadStatus:
    current_load: int
    max_load: int
    is_overloaded: bool
    message: str = ""


@dataclass(frozen=True)
class ConflictReport:
    professor_workload: WorkloadStatus
    professor_conflicts: Tuple[Conflict, ...] = ()
    room_conflicts: Tuple[Conflict, ...] = ()
    section_conflicts: Tuple[Conflict, ...] = ()
    subject_conflicts: Tuple[Conflict, ...] = ()

    @property
    def has_time_conflicts(self) -> bool:
        """Professor, room or section collisions; the axes a new time can fix."""
        return bool(self.professor_conflicts or self.room_conflicts or self.section_conflicts)

    @property
    def has_conflicts(self) -> bool:
        return (
            self.has_time_conflicts
            or bool(self.subject_conflicts)
            or self.professor_workload.is_overloaded
        )

    def all_conflicts(self) -> Tuple[Conflict, ...]:
        return (
            self.professor_conflicts
            + self.room_conflicts
            + self.section_conflicts
            + self.subject_conflicts
        )


@dataclass(frozen=True)
class TimeBlock:
    start: int
    end: int
    label: str


@dataclass(frozen=True)
class Recommendation:
    """
    An alternative weekly interval for a conflicting proposal.

    source:    "shift" | "block" | "fallback"
    validated: False only for fallback suggestions, which were not re-checked
    """

    days: Tuple[Day, ...]
    start: int
    end: int
    reason: str
    source: str = "shift"
    validated: bool = True

    def to_interval(self) -> TimeInterval:
        return TimeInterval(frozenset(self.days), self.start, self.end)


@dataclass(frozen=True)
class AvailableSlot:
    day: Day
    start: int
    end: int


def ordered_days(interval: TimeInterval) -> Tuple[Day, ...]:
    return tuple(sort_days(interval.days))
