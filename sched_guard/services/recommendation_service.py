"""
Alternative time slots for a conflicting proposal.

Two passes run in a fixed order and their results are concatenated:

1. shift pass: the requested block moved by each offset in ``shift_offsets``
   (default -2h, -1h, +1h, +2h, +3h), duration preserved;
2. block pass: the standard daily blocks in table order.

Every candidate is re-checked with ``detect`` against the same bookings and
kept only when the professor, room and section axes come back empty. Results
are de-duplicated on (start, end) and returned in discovery order; there is
no further scoring. When nothing survives, the earliest and latest table
blocks are offered unchecked (``validated=False``).
"""

import logging
from typing import Iterable, List, Sequence, Set, Tuple

from ..errors import InvalidInterval
from ..models.booking import Booking, Recommendation, TimeBlock, WorkloadPolicy, ordered_days
from ..models.interval import TimeInterval, within_window
from ..utils.time_utils import MINUTES_PER_DAY, format_range_ampm, parse_time
from .conflict_service import detect

logger = logging.getLogger(__name__)

DEFAULT_SHIFT_OFFSETS: Tuple[int, ...] = (-120, -60, 60, 120, 180)

DEFAULT_TIME_BLOCKS: Tuple[TimeBlock, ...] = tuple(
    TimeBlock(parse_time(start), parse_time(end), label)
    for start, end, label in (
        ("07:30", "09:00", "Early Morning"),
        ("09:15", "10:45", "Mid Morning"),
        ("11:00", "12:30", "Late Morning"),
        ("13:00", "14:30", "Early Afternoon"),
        ("14:45", "16:15", "Mid Afternoon"),
        ("16:30", "18:00", "Late Afternoon"),
    )
)


def describe_shift(offset: int) -> str:
    direction = "later" if offset > 0 else "earlier"
    minutes = abs(offset)
    if minutes % 60 == 0:
        hours = minutes // 60
        amount = f"{hours} hour" if hours == 1 else f"{hours} hours"
    else:
        amount = f"{minutes} minutes"
    return f"{amount} {direction} than requested"


def clears_time_axes(candidate: Booking, existing: Sequence[Booking], policy: WorkloadPolicy) -> bool:
    """Duplicate-subject and workload do not depend on time, so they are ignored here."""
    return not detect(candidate, existing, policy).has_time_conflicts


def _check_window(window_start: int, window_end: int):
    for value in (window_start, window_end):
        if not 0 <= value <= MINUTES_PER_DAY:
            raise InvalidInterval(f"Window bound {value} is outside 0-{MINUTES_PER_DAY}")


def _shift_pass(proposal, existing, policy, window_start, window_end, offsets) -> List[Recommendation]:
    found = []
    interval = proposal.interval
    for offset in offsets:
        start, end = interval.start + offset, interval.end + offset
        if start < window_start or end > window_end:
            logger.debug("shift %+d -> %d-%d outside window", offset, start, end)
            continue
        candidate = interval.with_times(start, end)
        if not clears_time_axes(proposal.with_interval(candidate), existing, policy):
            logger.debug("shift %+d -> %d-%d still conflicts", offset, start, end)
            continue
        found.append(Recommendation(
            days=ordered_days(candidate),
            start=start,
            end=end,
            reason=f"{describe_shift(offset)} ({format_range_ampm(start, end)})",
            source="shift",
        ))
    return found


def _block_pass(proposal, existing, policy, window_start, window_end, blocks) -> List[Recommendation]:
    found = []
    interval = proposal.interval
    for block in blocks:
        if (block.start, block.end) == (interval.start, interval.end):
            continue
        candidate = TimeInterval(interval.days, block.start, block.end)
        if not within_window(candidate, window_start, window_end):
            continue
        if not clears_time_axes(proposal.with_interval(candidate), existing, policy):
            logger.debug("block %s still conflicts", block.label)
            continue
        found.append(Recommendation(
            days=ordered_days(candidate),
            start=block.start,
            end=block.end,
            reason=f"{block.label} block ({format_range_ampm(block.start, block.end)}) is available",
            source="block",
        ))
    return found


def _fallback(proposal: Booking, window_start: int, window_end: int, blocks: Sequence[TimeBlock]) -> List[Recommendation]:
    days = ordered_days(proposal.interval)
    if blocks:
        by_start = sorted(blocks, key=lambda b: (b.start, b.end))
        picks = [by_start[0]] if len(by_start) == 1 else [by_start[0], by_start[-1]]
        return [
            Recommendation(
                days=days,
                start=block.start,
                end=block.end,
                reason=(
                    f"Standard {block.label} block ({format_range_ampm(block.start, block.end)}); "
                    "no conflict-free slot was found, so availability was not confirmed"
                ),
                source="fallback",
                validated=False,
            )
            for block in picks
        ]

    end = min(window_start + proposal.interval.duration, window_end)
    return [Recommendation(
        days=days,
        start=window_start,
        end=end,
        reason=(
            f"Start of the school day ({format_range_ampm(window_start, end)}); "
            "no conflict-free slot was found, so availability was not confirmed"
        ),
        source="fallback",
        validated=False,
    )]


def recommend(
    proposal: Booking,
    existing: Iterable[Booking],
    policy: WorkloadPolicy = WorkloadPolicy(),
    window_start: int = 450,
    window_end: int = 1080,
    time_blocks: Sequence[TimeBlock] = DEFAULT_TIME_BLOCKS,
    shift_offsets: Sequence[int] = DEFAULT_SHIFT_OFFSETS,
) -> List[Recommendation]:
    """Ranked alternative intervals for ``proposal``; see the module docstring for the order."""
    proposal.require_room()
    _check_window(window_start, window_end)
    if window_end <= window_start:
        logger.warning("degenerate window %d-%d, no recommendations possible", window_start, window_end)
        return []

    existing = list(existing)
    candidates = (
        _shift_pass(proposal, existing, policy, window_start, window_end, shift_offsets)
        + _block_pass(proposal, existing, policy, window_start, window_end, time_blocks)
    )

    seen: Set[Tuple[int, int]] = set()
    results: List[Recommendation] = []
    for rec in candidates:
        key = (rec.start, rec.end)
        if key in seen:
            continue
        seen.add(key)
        results.append(rec)

    if not results:
        logger.warning("no conflict-free slot for %s, offering standard blocks", proposal.interval)
        results = _fallback(proposal, window_start, window_end, time_blocks)

    logger.debug("recommend %s -> %d candidates", proposal.interval, len(results))
    return results
