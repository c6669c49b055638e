from datetime import date, datetime, time, timezone

import pytest

from automation.availability.datetime_helpers import (
    bookable_dates,
    localize,
    parse_instant,
    to_wire,
)
from automation.availability.time_utils import filter_slots_for_local_date, format_slot_label


MADRID = "Europe/Madrid"


def utc(text: str) -> datetime:
    return parse_instant(text)


def test_filter_keeps_slots_on_local_date_in_summer():
    slots = [
        "2025-06-10T08:00:00Z",
        "2025-06-10T22:30:00Z",
        "2025-06-11T05:00:00Z",
    ]

    result = filter_slots_for_local_date(slots, date(2025, 6, 11), MADRID)

    assert result == [utc("2025-06-10T22:30:00Z"), utc("2025-06-11T05:00:00Z")]


@pytest.mark.parametrize(
    "slot, expected_local_date",
    [
        # Local midnight 2025-06-11 is 2025-06-10T22:00Z (UTC+2)
        ("2025-06-10T21:59:00Z", date(2025, 6, 10)),
        ("2025-06-10T22:00:00Z", date(2025, 6, 11)),
        ("2025-06-10T22:01:00Z", date(2025, 6, 11)),
        # Local midnight 2025-06-12
        ("2025-06-11T21:59:00Z", date(2025, 6, 11)),
        ("2025-06-11T22:01:00Z", date(2025, 6, 12)),
        # Winter: local midnight 2025-01-15 is 2025-01-14T23:00Z (UTC+1)
        ("2025-01-14T22:59:00Z", date(2025, 1, 14)),
        ("2025-01-14T23:01:00Z", date(2025, 1, 15)),
    ],
)
def test_filter_midnight_boundaries(slot, expected_local_date):
    for target in (expected_local_date, date.fromordinal(expected_local_date.toordinal() + 1)):
        result = filter_slots_for_local_date([slot], target, MADRID)
        if target == expected_local_date:
            assert result == [utc(slot)]
        else:
            assert result == []


def test_filter_preserves_input_order_and_accepts_datetimes():
    slots = [
        datetime(2025, 6, 11, 9, 0, tzinfo=timezone.utc),
        "2025-06-11T07:00:00.000Z",
    ]

    result = filter_slots_for_local_date(slots, date(2025, 6, 11), MADRID)

    assert [slot.hour for slot in result] == [9, 7]


def test_filter_empty_input():
    assert filter_slots_for_local_date([], date(2025, 6, 11), MADRID) == []


def test_format_slot_label_uses_local_time():
    assert format_slot_label("2025-06-11T07:00:00Z", MADRID) == "09:00"
    assert format_slot_label("2025-01-15T07:00:00Z", MADRID) == "08:00"


def test_localize_follows_daylight_saving():
    assert localize(date(2025, 6, 11), "09:00", MADRID) == utc("2025-06-11T07:00:00Z")
    assert localize(date(2025, 1, 15), time(9, 0), MADRID) == utc("2025-01-15T08:00:00Z")


def test_localize_rejects_malformed_time():
    with pytest.raises(ValueError):
        localize(date(2025, 6, 11), "9h", MADRID)


def test_to_wire_uses_milliseconds_and_z_suffix():
    assert to_wire("2025-06-11T09:00:00+02:00") == "2025-06-11T07:00:00.000Z"


def test_parse_instant_reads_naive_values_as_utc():
    assert parse_instant("2025-06-11T07:00:00") == utc("2025-06-11T07:00:00Z")


def test_parse_instant_rejects_other_types():
    with pytest.raises(ValueError):
        parse_instant(1234)


def test_bookable_dates_cover_today_and_two_days_ahead():
    assert bookable_dates(date(2025, 6, 30)) == [
        date(2025, 6, 30),
        date(2025, 7, 1),
        date(2025, 7, 2),
    ]
