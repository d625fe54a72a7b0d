class SchedulingError(Exception):
    """Base class for input the engine refuses to evaluate."""


class InvalidInterval(SchedulingError, ValueError):
    """Empty days, unknown day names, or times outside 0 <= start < end <= 1440."""


class NoRoomForOnsiteSchedule(SchedulingError, ValueError):
    """A schedule type that needs a physical room was submitted without one."""


class ScheduleStoreError(Exception):
    """The external schedule store could not be read."""
