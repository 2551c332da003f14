from __future__ import annotations

from datetime import date

import pytest

from trimflow.application.exceptions import ParseError, ValidationError
from trimflow.application.utils.scheduling import (
    ensure_bookable_date,
    offered_dates,
    offered_time_labels,
    parse_time_label,
    to_point_in_time,
)


def test_offered_time_labels_are_static():
    labels = offered_time_labels()
    assert labels[0] == "10:00 AM"
    assert labels[-1] == "5:00 PM"
    assert "2:30 PM" in labels
    assert labels == offered_time_labels()


def test_every_offered_label_parses():
    for label in offered_time_labels():
        parse_time_label(label)


def test_afternoon_label(tz):
    moment = to_point_in_time(date(2024, 3, 1), "2:30 PM", tz)
    assert (moment.year, moment.month, moment.day) == (2024, 3, 1)
    assert (moment.hour, moment.minute) == (14, 30)
    assert moment.tzinfo == tz


@pytest.mark.parametrize(
    "label, expected",
    [
        ("12:00 AM", (0, 0)),
        ("12:00 PM", (12, 0)),
        ("12:45 am", (0, 45)),
        ("1:05 AM", (1, 5)),
        (" 11:59 pm ", (23, 59)),
    ],
)
def test_twelve_hour_clock_rules(label, expected):
    assert parse_time_label(label) == expected


@pytest.mark.parametrize("label", ["", "14:30", "2:30", "2.30 PM", "13:00 PM", "0:15 AM", "2:60 PM", "noon"])
def test_malformed_labels_raise_parse_error(label, tz):
    with pytest.raises(ParseError):
        to_point_in_time(date(2024, 3, 1), label, tz)


def test_parse_error_is_a_validation_error():
    assert issubclass(ParseError, ValidationError)


def test_offered_dates_window():
    days = offered_dates(date(2024, 2, 27))
    assert len(days) == 14
    assert days[0] == date(2024, 2, 27)
    assert days[3] == date(2024, 3, 1)


def test_past_dates_are_rejected():
    ensure_bookable_date(date(2024, 3, 1), date(2024, 3, 1))
    with pytest.raises(ValidationError):
        ensure_bookable_date(date(2024, 2, 29), date(2024, 3, 1))
