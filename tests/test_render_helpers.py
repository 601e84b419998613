from datetime import datetime, timedelta, timezone

import pytest

from a1s.model1.sorting import duration_to_seconds
from a1s.render import (
    bool_to_yes_no,
    extract_name_tag,
    format_size,
    format_size_gb,
    human_duration,
    join_strings,
    map_to_str,
    missing,
    na,
    tags_from_list,
    to_age,
    truncate,
)


@pytest.mark.parametrize("secs,out", [
    (0, "0s"),
    (0.5, "0s"),
    (42, "42s"),
    (90, "1m"),
    (5400, "1h"),
    (3 * 86400 + 5, "3d"),
    (400 * 86400, "1y"),
])
def test_human_duration(secs, out):
    assert human_duration(secs) == out


def test_human_duration_round_trips_through_duration_sort():
    for secs in (42, 600, 7200, 3 * 86400):
        s = human_duration(timedelta(seconds=secs))
        assert duration_to_seconds(s) == secs


def test_to_age():
    now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    assert to_age(now - timedelta(hours=5), now) == "5h"
    assert to_age(datetime(2024, 5, 1, 11, 30), now) == "30m"  # naive taken as UTC
    assert to_age(None) == "<unknown>"


def test_placeholders():
    assert na("") == "n/a" and na(None) == "n/a" and na("x") == "x"
    assert missing("") == "<none>" and missing("x") == "x"
    assert bool_to_yes_no(True) == "Yes"
    assert bool_to_yes_no(False) == "No"
    assert bool_to_yes_no(None) == "n/a"


@pytest.mark.parametrize("n,out", [
    (0, "0 B"),
    (1023, "1023 B"),
    (1024, "1.0 KiB"),
    (1536, "1.5 KiB"),
    (5 * 1024 ** 3, "5.0 GiB"),
])
def test_format_size(n, out):
    assert format_size(n) == out


def test_misc_helpers():
    assert format_size_gb(100) == "100 GiB"
    assert truncate("abcdefgh", 5) == "ab..."
    assert truncate("abc", 5) == "abc"
    assert truncate("abcdef", 2) == "ab"
    assert extract_name_tag({"Name": "web", "env": "prod"}) == "web"
    assert extract_name_tag(None) == ""
    assert join_strings(", ", "a", "", "b") == "a, b"
    assert map_to_str({"b": "2", "a": "1"}) == "a=1,b=2"
    assert map_to_str({}) == ""
    assert tags_from_list([{"Key": "Name", "Value": "web"}, {"Value": "orphan"}]) == {"Name": "web"}
