from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .models.booking import AvailableSlot, Booking, Conflict, ConflictReport, Recommendation
from .models.interval import sort_days
from .utils.time_utils import format_range_ampm, format_time


class ReportFormatter:
    """Handles transforming engine output into the JSON the scheduling UI reads."""

    @staticmethod
    def booking(b: Booking) -> Dict[str, Any]:
        return {
            "id": b.id,
            "prof_id": b.professor_id,
            "prof_name": b.professor_name,
            "section_id": b.section_id,
            "subj_id": b.subject_id,
            "subject_code": b.subject_code,
            "room_id": b.room_id,
            "room_name": b.room_name,
            "schedule_type": b.schedule_type.value,
            "days": [d.value for d in sort_days(b.interval.days)],
            "start_time": format_time(b.interval.start),
            "end_time": format_time(b.interval.end),
        }

    def conflict(self, c: Conflict) -> Dict[str, Any]:
        return {
            "conflictType": c.kind.value,
            "conflictMessage": c.message,
            "days": [d.value for d in c.days],
            "time": format_range_ampm(c.booking.interval.start, c.booking.interval.end),
            "schedule": self.booking(c.booking),
        }

    def report(
        self,
        report: ConflictReport,
        rule_errors: Sequence[str] = (),
        recommendations: Optional[Sequence[Recommendation]] = None,
    ) -> Dict[str, Any]:
        workload = report.professor_workload
        messages = [c.message for c in report.all_conflicts()]
        if workload.is_overloaded:
            messages.append(workload.message)
        messages.extend(rule_errors)

        result = {
            "conflict": report.has_conflicts or bool(rule_errors),
            "message": " ".join(messages) if messages else "No conflicts detected.",
            "professorConflicts": [self.conflict(c) for c in report.professor_conflicts],
            "roomConflicts": [self.conflict(c) for c in report.room_conflicts],
            "sectionConflicts": [self.conflict(c) for c in report.section_conflicts],
            "subjectConflicts": [self.conflict(c) for c in report.subject_conflicts],
            "professorWorkload": {
                "currentLoad": workload.current_load,
                "maxLoad": workload.max_load,
                "isOverloaded": workload.is_overloaded,
                "conflictMessage": workload.message,
            },
            "ruleViolations": list(rule_errors),
        }
        if recommendations is not None:
            result["recommendations"] = self.recommendations(recommendations)
        return result

    @staticmethod
    def recommendations(recs: Iterable[Recommendation]) -> List[Dict[str, Any]]:
        return [
            {
                "days": [d.value for d in r.days],
                "startTime": format_time(r.start),
                "endTime": format_time(r.end),
                "display": format_range_ampm(r.start, r.end),
                "reason": r.reason,
                "source": r.source,
                "validated": r.validated,
            }
            for r in recs
        ]

    @staticmethod
    def available_slots(slots: Iterable[AvailableSlot]) -> Dict[str, Any]:
        by_day: Dict[str, List[Dict[str, str]]] = {}
        for slot in slots:
            by_day.setdefault(slot.day.value, []).append({
                "start_time": format_time(slot.start),
                "end_time": format_time(slot.end),
                "display": format_range_ampm(slot.start, slot.end),
            })
        return {
            "available_slots": by_day,
            "total_slots": sum(len(v) for v in by_day.values()),
        }

    @staticmethod
    def professors(qualified: Iterable[Tuple[str, Optional[str], int]]) -> List[Dict[str, Any]]:
        return [
            {"id": pid, "name": name, "currentLoad": load}
            for pid, name, load in qualified
        ]
