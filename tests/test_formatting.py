import pytest

from utils.formatting import (
    format_delta, format_run_time, format_split_time, format_time, parse_time
)


def test_format_time_drops_empty_fields():
    assert format_time(0) == "0.000"
    assert format_time(5000) == "5.000"
    assert format_time(61234) == "1:01.234"
    assert format_time(3661001) == "1:01:01.001"
    assert format_time(36000000) == "10:00:00.000"


def test_format_time_clamps_negative():
    assert format_time(-1) == "0.000"
    assert format_time(-99999) == "0.000"


def test_format_delta_truncates_to_centiseconds():
    assert format_delta(1500) == "+1.50"
    assert format_delta(1509) == "+1.50"
    assert format_delta(-65250) == "-1:05.25"
    assert format_delta(0) == "+0.00"
    assert format_delta(-9) == "-0.00"


def test_format_split_time_placeholder():
    assert format_split_time(0) == "-"
    assert format_split_time(61234) == "1:01.234"


def test_format_run_time_always_shows_minutes():
    assert format_run_time(0) == "-"
    assert format_run_time(-5) == "-"
    assert format_run_time(1000) == "0:01.000"
    assert format_run_time(3661001) == "1:01:01.001"


@pytest.mark.parametrize("text, expected", [
    ("", 0),
    ("-", 0),
    ("  1:23.45  ", 83450),
    ("83.4", 83400),
    ("83", 83000),
    ("0.005", 5),
    ("1:02:03.456", 3723456),
    ("1:2:3.4", 3723400),
    ("1:00", 60000),
])
def test_parse_time_valid(text, expected):
    assert parse_time(text) == expected


@pytest.mark.parametrize("text", [
    "1:2:3:4",
    "1.2.3",
    "12.",
    "12.3456",
    "abc",
    "1:xx",
    "-5",
    "1:-2",
    "1:2:",
])
def test_parse_time_invalid(text):
    assert parse_time(text) is None


def test_parse_reads_back_formatted_times():
    # Every 7th ms through just past the first hour
    for ms in range(0, 3_700_000, 7):
        assert parse_time(format_time(ms)) == ms


@pytest.mark.parametrize("ms", [
    3599999, 3600000, 3600001, 3661001, 35999999, 36000000, 86400000, 360000000 + 123,
])
def test_parse_reads_back_hour_scale_times(ms):
    assert parse_time(format_time(ms)) == ms
