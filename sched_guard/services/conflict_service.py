import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from ..models.booking import (
    Booking,
    Conflict,
    ConflictKind,
    ConflictReport,
    WorkloadPolicy,
    WorkloadStatus,
)
from ..models.interval import Day, overlaps, sort_days
from ..utils.time_utils import format_range_ampm

logger = logging.getLogger(__name__)


def format_conflict_days(days: Iterable[Day]) -> str:
    return ", ".join(d.value.capitalize() for d in sort_days(days))


def relevant_bookings(proposal: Booking, existing: Iterable[Booking]) -> List[Booking]:
    """Same term only, and never the proposal itself when an edit is re-validated."""
    return [
        b for b in existing
        if b.term == proposal.term and (proposal.id is None or b.id != proposal.id)
    ]


def professor_load(professor_id: str, bookings: Iterable[Booking]) -> set:
    """Distinct subject ids the professor teaches among ``bookings``."""
    return {b.subject_id for b in bookings if b.professor_id == professor_id}


def workload_status(proposal: Booking, bookings: Sequence[Booking], policy: WorkloadPolicy) -> WorkloadStatus:
    subjects = professor_load(proposal.professor_id, bookings)
    current_load = len(subjects)
    max_load = policy.max_subjects_per_professor
    adds_subject = proposal.subject_id not in subjects
    is_overloaded = adds_subject and current_load >= max_load

    if is_overloaded:
        message = (
            f"Workload Limit: {proposal.professor_label()} currently has {current_load} out of "
            f"{max_load} maximum subjects. Adding another subject would exceed their workload."
        )
    else:
        message = f"{proposal.professor_label()} has {current_load} of {max_load} subjects this term."
    return WorkloadStatus(current_load, max_load, is_overloaded, message)


def _time_conflict(proposal: Booking, existing: Booking) -> Optional[Tuple[Day, ...]]:
    if not overlaps(proposal.interval, existing.interval):
        return None
    return tuple(sort_days(proposal.interval.days & existing.interval.days))


def _conflict_time(existing: Booking) -> str:
    return format_range_ampm(existing.interval.start, existing.interval.end)


def detect(proposal: Booking, existing: Iterable[Booking], policy: WorkloadPolicy = WorkloadPolicy()) -> ConflictReport:
    """
    Classify every conflict between ``proposal`` and ``existing`` bookings.

    All four axes and the workload check are evaluated independently and every
    hit is reported; nothing short-circuits. Output order follows ``existing``.
    """
    proposal.require_room()
    bookings = relevant_bookings(proposal, existing)
    check_room = proposal.uses_room

    professor_conflicts: List[Conflict] = []
    room_conflicts: List[Conflict] = []
    section_conflicts: List[Conflict] = []
    subject_conflicts: List[Conflict] = []

    for other in bookings:
        days = _time_conflict(proposal, other)

        if days:
            conflict_days = format_conflict_days(days)
            conflict_time = _conflict_time(other)

            if other.professor_id == proposal.professor_id:
                professor_conflicts.append(Conflict(
                    booking=other,
                    kind=ConflictKind.PROFESSOR_SCHEDULE_CONFLICT,
                    message=(
                        f"Professor Conflict: {other.professor_label()} already teaches "
                        f"{other.subject_label()} on {conflict_days} at {conflict_time}."
                    ),
                    days=days,
                ))

            # an Online proposal never claims a room, whatever room_id it carries
            if check_room and other.uses_room and other.room_id == proposal.room_id:
                room_conflicts.append(Conflict(
                    booking=other,
                    kind=ConflictKind.ROOM_OCCUPIED,
                    message=(
                        f"Room Conflict: The selected room {other.room_label()} is already "
                        f"occupied on {conflict_days} {conflict_time}."
                    ),
                    days=days,
                ))

            if other.section_id == proposal.section_id:
                section_conflicts.append(Conflict(
                    booking=other,
                    kind=ConflictKind.SECTION_SCHEDULE_CONFLICT,
                    message=(
                        f"Section Conflict: {other.section_label()} already has "
                        f"{other.subject_label()} on {conflict_days} at {conflict_time}."
                    ),
                    days=days,
                ))

        if other.section_id == proposal.section_id and other.subject_id == proposal.subject_id:
            subject_conflicts.append(Conflict(
                booking=other,
                kind=ConflictKind.DUPLICATE_SUBJECT,
                message=(
                    f"Duplicate Subject: {other.subject_label()} is already scheduled "
                    f"for {other.section_label()} this term."
                ),
            ))

    report = ConflictReport(
        professor_conflicts=tuple(professor_conflicts),
        room_conflicts=tuple(room_conflicts),
        section_conflicts=tuple(section_conflicts),
        subject_conflicts=tuple(subject_conflicts),
        professor_workload=workload_status(proposal, bookings, policy),
    )
    logger.debug(
        "detect %s: professor=%d room=%d section=%d subject=%d overloaded=%s",
        proposal.interval, len(professor_conflicts), len(room_conflicts),
        len(section_conflicts), len(subject_conflicts), report.professor_workload.is_overloaded,
    )
    return report


def suggest_alternative_professors(
    proposal: Booking,
    existing: Iterable[Booking],
    candidates: Iterable[Tuple[str, Optional[str]]],
    policy: WorkloadPolicy = WorkloadPolicy(),
) -> List[Tuple[str, Optional[str], int]]:
    """
    Professors who could take the proposal at its requested time.

    ``candidates`` are (professor_id, name) pairs. A candidate qualifies when
    swapping them in leaves the professor axis empty and does not overload
    them. Returns (professor_id, name, current_load) ordered by load, then id.
    """
    proposal.require_room()
    bookings = relevant_bookings(proposal, existing)
    seen = set()
    qualified = []
    for professor_id, name in candidates:
        if professor_id == proposal.professor_id or professor_id in seen:
            continue
        seen.add(professor_id)

        swapped = proposal.with_professor(professor_id, name)
        busy = any(
            b.professor_id == professor_id and overlaps(swapped.interval, b.interval)
            for b in bookings
        )
        if busy:
            logger.debug("professor %s is busy at %s", professor_id, swapped.interval)
            continue
        status = workload_status(swapped, bookings, policy)
        if status.is_overloaded:
            continue
        qualified.append((professor_id, name, status.current_load))

    qualified.sort(key=lambda item: (item[2], item[0]))
    return qualified
