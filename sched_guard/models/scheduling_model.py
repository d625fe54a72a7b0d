from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Union

from ..utils.time_utils import parse_time, split_days
from .booking import Booking, ScheduleType, TermKey
from .interval import TimeInterval


def _to_id(value):
    if value is None or value == "":
        return None
    return str(value)


class ScheduleData(BaseModel):
    """One schedule row as the PHP backend sends it ("HH:MM" times, loose day lists)."""

    id: Optional[str] = None
    school_year: str
    semester: str
    prof_id: str
    section_id: str
    subj_id: str
    room_id: Optional[str] = None
    schedule_type: ScheduleType = ScheduleType.ONSITE
    days: Union[List[str], str]
    start_time: str
    end_time: str
    prof_name: Optional[str] = None
    room_name: Optional[str] = None
    subject_code: Optional[str] = None
    section_name: Optional[str] = None

    @field_validator("id", "prof_id", "section_id", "subj_id", "room_id", mode="before")
    @classmethod
    def coerce_ids(cls, value):
        return _to_id(value)

    @field_validator("schedule_type", mode="before")
    @classmethod
    def coerce_schedule_type(cls, value):
        return ScheduleType.parse(value) if value is not None else ScheduleType.ONSITE

    def to_interval(self) -> TimeInterval:
        return TimeInterval(
            frozenset(split_days(self.days)),
            parse_time(self.start_time),
            parse_time(self.end_time),
        )

    def to_booking(self) -> Booking:
        return Booking(
            id=self.id,
            professor_id=self.prof_id,
            section_id=self.section_id,
            subject_id=self.subj_id,
            room_id=self.room_id,
            schedule_type=self.schedule_type,
            interval=self.to_interval(),
            term=TermKey(self.school_year, self.semester),
            professor_name=self.prof_name,
            room_name=self.room_name,
            subject_code=self.subject_code,
            section_name=self.section_name,
        )


class ConflictRequest(BaseModel):
    new_schedule: ScheduleData
    existing_schedules: Optional[List[ScheduleData]] = None
    max_subjects_per_professor: Optional[int] = Field(default=None, ge=1)


class RecommendRequest(ConflictRequest):
    window_start: Optional[str] = None
    window_end: Optional[str] = None


class AvailableSlotsRequest(RecommendRequest):
    step: Optional[int] = Field(default=None, ge=1)
    limit: Optional[int] = Field(default=None, ge=1)


class ProfessorCandidate(BaseModel):
    id: str
    name: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value):
        return _to_id(value)


class AlternativeProfessorsRequest(ConflictRequest):
    candidates: List[ProfessorCandidate]
