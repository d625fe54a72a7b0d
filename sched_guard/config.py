import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional

from .models.booking import TimeBlock, WorkloadPolicy
from .utils.time_utils import parse_time

# Defaults only; each institution tunes these through the environment.
DEFAULT_MAX_SUBJECTS = 8
DEFAULT_WINDOW = ("07:30", "18:00")
DEFAULT_LUNCH = ("12:00", "13:00")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def _env_time(name: str, default: str) -> int:
    return parse_time(os.getenv(name) or default)


@dataclass(frozen=True)
class Settings:
    max_subjects_per_professor: int = DEFAULT_MAX_SUBJECTS
    window_start: int = parse_time(DEFAULT_WINDOW[0])
    window_end: int = parse_time(DEFAULT_WINDOW[1])
    lunch_start: int = parse_time(DEFAULT_LUNCH[0])
    lunch_end: int = parse_time(DEFAULT_LUNCH[1])
    slot_step: int = 10
    suggestion_count: int = 5
    store_url: Optional[str] = None
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @property
    def workload_policy(self) -> WorkloadPolicy:
        return WorkloadPolicy(self.max_subjects_per_professor)

    @property
    def lunch_break(self) -> TimeBlock:
        return TimeBlock(self.lunch_start, self.lunch_end, "Lunch Break")

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("SCHED_GUARD_CORS_ORIGINS", "*")
        return cls(
            max_subjects_per_professor=_env_int("SCHED_GUARD_MAX_SUBJECTS", DEFAULT_MAX_SUBJECTS),
            window_start=_env_time("SCHED_GUARD_WINDOW_START", DEFAULT_WINDOW[0]),
            window_end=_env_time("SCHED_GUARD_WINDOW_END", DEFAULT_WINDOW[1]),
            lunch_start=_env_time("SCHED_GUARD_LUNCH_START", DEFAULT_LUNCH[0]),
            lunch_end=_env_time("SCHED_GUARD_LUNCH_END", DEFAULT_LUNCH[1]),
            slot_step=_env_int("SCHED_GUARD_SLOT_STEP", 10),
            suggestion_count=_env_int("SCHED_GUARD_SUGGESTION_COUNT", 5),
            store_url=os.getenv("SCHED_GUARD_STORE_URL") or None,
            log_level=os.getenv("SCHED_GUARD_LOG_LEVEL", "INFO").upper(),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings.from_env()


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
