import json
import logging
from typing import List

import requests

from ..errors import ScheduleStoreError
from ..models.booking import Booking
from ..models.scheduling_model import ScheduleData

logger = logging.getLogger(__name__)


class ScheduleStoreClient:
    """Reads a term's committed schedules from the PHP store (schedule.php)."""

    def __init__(self, base_url: str, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def get(self, endpoint: str, params: dict = None):
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise ScheduleStoreError(f"Could not read {url}: {e}") from e

    def fetch_term_schedules(self, school_year: str, semester: str) -> List[Booking]:
        payload = self.get("schedule.php", {"school_year": school_year, "semester": semester})
        if isinstance(payload, dict):
            if payload.get("success") is False:
                raise ScheduleStoreError(f"Schedule store error: {payload.get('message', 'unknown')}")
            rows = payload.get("data") or []
        else:
            rows = payload
        bookings = [row_to_booking(row, school_year, semester) for row in rows]
        logger.info("loaded %d schedules for %s %s", len(bookings), school_year, semester)
        return bookings


def row_to_booking(row: dict, school_year: str, semester: str) -> Booking:
    """A malformed stored row is the store's fault, never the caller's."""
    try:
        return ScheduleData(**normalize_row(row, school_year, semester)).to_booking()
    except (ValueError, TypeError, AttributeError) as e:
        row_id = (row.get("id") or row.get("sched_id")) if isinstance(row, dict) else None
        logger.error("unreadable schedule row %s: %s", row_id, e)
        raise ScheduleStoreError(f"Schedule store returned an unreadable row (id={row_id}): {e}") from e


def normalize_row(row: dict, school_year: str, semester: str) -> dict:
    """The store is inconsistent about key names (sched_id/id, subject_id/subj_id...)."""

    def first(*keys):
        for key in keys:
            if row.get(key) not in (None, ""):
                return row[key]
        return None

    return {
        "id": first("id", "sched_id"),
        "school_year": row.get("school_year") or school_year,
        "semester": row.get("semester") or semester,
        "prof_id": first("prof_id", "professor_id"),
        "section_id": first("section_id", "section"),
        "subj_id": first("subj_id", "subject_id"),
        "room_id": first("room_id"),
        "schedule_type": first("schedule_type") or "Onsite",
        "days": _days(first("days")),
        "start_time": first("start_time", "start"),
        "end_time": first("end_time", "end"),
        "prof_name": first("prof_name", "professor_name"),
        "room_name": first("room_name", "room_number"),
        "subject_code": first("subj_code", "subject_code"),
        "section_name": first("section_name"),
    }


def _days(value):
    # days column is JSON in the store, but older rows hold "monday,wednesday"
    if isinstance(value, str) and value.strip().startswith("["):
        return json.loads(value)
    return value or []
