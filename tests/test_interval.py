import itertools

import pytest

from sched_guard.errors import InvalidInterval
from sched_guard.models.interval import Day, TimeInterval, overlaps, within_window
from sched_guard.utils.time_utils import format_time, format_time_ampm, parse_time, split_days


def iv(days, start, end):
    return TimeInterval(frozenset(days), start, end)


MON = Day.MONDAY
WED = Day.WEDNESDAY


def test_boundary_touch_is_not_overlap():
    assert not overlaps(iv([MON], 480, 540), iv([MON], 540, 600))
    assert not overlaps(iv([MON], 540, 600), iv([MON], 480, 540))


def test_partial_and_containing_overlap():
    assert overlaps(iv([MON], 480, 570), iv([MON, WED], 450, 540))
    assert overlaps(iv([MON], 400, 700), iv([MON], 500, 510))


def test_day_disjoint_never_overlaps():
    assert not overlaps(iv([MON], 480, 540), iv([WED], 480, 540))
    assert not overlaps(iv([Day.TUESDAY, Day.THURSDAY], 0, 1440), iv([MON, WED, Day.FRIDAY], 0, 1440))


def test_overlap_is_symmetric():
    samples = [
        iv([MON], 450, 540),
        iv([MON, WED], 540, 630),
        iv([WED], 500, 600),
        iv([Day.FRIDAY], 450, 1080),
        iv([MON], 0, 1440),
        iv([MON, Day.FRIDAY], 539, 541),
    ]
    for a, b in itertools.product(samples, repeat=2):
        assert overlaps(a, b) == overlaps(b, a)


def test_within_window():
    assert within_window(iv([MON], 450, 540), 450, 1080)
    assert within_window(iv([MON], 990, 1080), 450, 1080)
    assert not within_window(iv([MON], 420, 510), 450, 1080)
    assert not within_window(iv([MON], 1020, 1110), 450, 1080)


@pytest.mark.parametrize("days,start,end", [
    ([], 480, 540),
    ([MON], 540, 540),
    ([MON], 600, 540),
    ([MON], -10, 60),
    ([MON], 1380, 1441),
])
def test_invalid_interval_rejected(days, start, end):
    with pytest.raises(InvalidInterval):
        iv(days, start, end)


def test_full_day_interval_allowed():
    assert iv([MON], 0, 1440).duration == 1440


def test_day_parse_aliases():
    assert Day.parse("Mon") is Day.MONDAY
    assert Day.parse("THURSDAY") is Day.THURSDAY
    assert Day.parse("thurs") is Day.THURSDAY
    assert iv(["monday", "Wed"], 480, 540).days == frozenset([MON, WED])
    with pytest.raises(InvalidInterval):
        Day.parse("Funday")


def test_shifted_keeps_days_and_duration():
    moved = iv([MON, WED], 480, 570).shifted(120)
    assert (moved.start, moved.end, moved.duration) == (600, 690, 90)
    assert moved.days == frozenset([MON, WED])


def test_label_is_readable():
    assert iv(["wednesday", "monday"], 450, 540).label() == "Mon, Wed 7:30 AM - 9:00 AM"


def test_time_parsing_boundary():
    assert parse_time("07:30") == 450
    assert parse_time("13:05:00") == 785
    assert parse_time("24:00") == 1440
    with pytest.raises(InvalidInterval):
        parse_time("7.30")
    assert format_time(450) == "07:30"
    assert format_time_ampm(450) == "7:30 AM"
    assert format_time_ampm(720) == "12:00 PM"
    assert format_time_ampm(0) == "12:00 AM"
    assert format_time_ampm(1005) == "4:45 PM"


def test_split_days_accepts_store_string():
    assert split_days("monday, wednesday") == ["monday", "wednesday"]
    assert split_days(["friday"]) == ["friday"]
