import pytest

from sched_guard.models.booking import Booking, TermKey
from sched_guard.models.interval import TimeInterval
from sched_guard.utils.time_utils import parse_time

TERM = TermKey("2025", "1")


def make_booking(
    prof="P1",
    section="S1",
    subject="MATH101",
    days=("monday",),
    start="07:30",
    end="09:00",
    room="R5",
    schedule_type="Onsite",
    term=TERM,
    id=None,
):
    return Booking(
        id=id,
        professor_id=prof,
        section_id=section,
        subject_id=subject,
        room_id=room,
        schedule_type=schedule_type,
        interval=TimeInterval(frozenset(days), parse_time(start), parse_time(end)),
        term=term,
    )


@pytest.fixture
def booking():
    return make_booking


@pytest.fixture
def example_existing():
    return [make_booking(id="1", days=("monday", "wednesday"))]


@pytest.fixture
def example_proposal():
    return make_booking(section="S2", subject="SCI101", room="R9", start="08:00", end="09:30")
