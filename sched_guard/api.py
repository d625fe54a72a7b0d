"""
Conflict-check endpoints called by the scheduling UI / PHP backend.

Everything here is advisory. A clean report only says the proposal did not
collide with the schedules that were loaded for this request; two clients can
both get a clean report for overlapping proposals. The store's insert path
must repeat the check inside the same transaction as the write (or rely on a
database exclusion constraint on professor/room and time), otherwise
detect-then-write is a race.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from .config import Settings, get_settings
from .formatter import ReportFormatter
from .models.booking import Booking, WorkloadPolicy
from .models.scheduling_model import (
    AlternativeProfessorsRequest,
    AvailableSlotsRequest,
    ConflictRequest,
    RecommendRequest,
)
from .services.availability_service import find_available_slots
from .services.conflict_service import detect, suggest_alternative_professors
from .services.recommendation_service import recommend
from .utils.api_client import ScheduleStoreClient
from .utils.time_utils import parse_time
from .validator import ScheduleValidator

logger = logging.getLogger(__name__)

router = APIRouter()
formatter = ReportFormatter()


def load_existing(request: ConflictRequest, proposal: Booking, settings: Settings) -> List[Booking]:
    if request.existing_schedules is not None:
        return [s.to_booking() for s in request.existing_schedules]
    if not settings.store_url:
        raise HTTPException(
            status_code=400,
            detail="existing_schedules is required when no schedule store is configured",
        )
    client = ScheduleStoreClient(settings.store_url)
    return client.fetch_term_schedules(proposal.term.school_year, proposal.term.semester)


def policy_for(request: ConflictRequest, settings: Settings) -> WorkloadPolicy:
    if request.max_subjects_per_professor is not None:
        return WorkloadPolicy(request.max_subjects_per_professor)
    return settings.workload_policy


def window_for(request: RecommendRequest, settings: Settings):
    start = parse_time(request.window_start) if request.window_start else settings.window_start
    end = parse_time(request.window_end) if request.window_end else settings.window_end
    return start, end


@router.post("/check_schedule_conflict")
def check_schedule_conflict(request: ConflictRequest, settings: Settings = Depends(get_settings)):
    """Report every conflict; recommendations are attached when a new time could help."""
    proposal = request.new_schedule.to_booking()
    existing = load_existing(request, proposal, settings)
    policy = policy_for(request, settings)

    report = detect(proposal, existing, policy)
    rule_errors = ScheduleValidator(proposal, settings).validate()

    recommendations: Optional[list] = None
    if report.has_time_conflicts:
        recommendations = recommend(
            proposal, existing, policy, settings.window_start, settings.window_end
        )

    logger.info(
        "conflict check prof=%s section=%s %s: conflicts=%d overloaded=%s",
        proposal.professor_id, proposal.section_id, proposal.interval,
        len(report.all_conflicts()), report.professor_workload.is_overloaded,
    )
    return formatter.report(report, rule_errors, recommendations)


@router.post("/recommend_schedule")
def recommend_schedule(request: RecommendRequest, settings: Settings = Depends(get_settings)):
    proposal = request.new_schedule.to_booking()
    existing = load_existing(request, proposal, settings)
    window_start, window_end = window_for(request, settings)

    recs = recommend(proposal, existing, policy_for(request, settings), window_start, window_end)
    return {"recommendations": formatter.recommendations(recs)}


@router.post("/available_time_slots")
def available_time_slots(request: AvailableSlotsRequest, settings: Settings = Depends(get_settings)):
    proposal = request.new_schedule.to_booking()
    existing = load_existing(request, proposal, settings)
    window_start, window_end = window_for(request, settings)

    slots = find_available_slots(
        proposal,
        existing,
        window_start,
        window_end,
        lunch_break=settings.lunch_break,
        step=request.step or settings.slot_step,
        limit=request.limit or settings.suggestion_count,
    )
    return formatter.available_slots(slots)


@router.post("/alternative_professors")
def alternative_professors(request: AlternativeProfessorsRequest, settings: Settings = Depends(get_settings)):
    proposal = request.new_schedule.to_booking()
    existing = load_existing(request, proposal, settings)

    qualified = suggest_alternative_professors(
        proposal,
        existing,
        [(c.id, c.name) for c in request.candidates],
        policy_for(request, settings),
    )
    return {"alternativeProfessors": formatter.professors(qualified)}
