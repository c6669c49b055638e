import pytest

from automation.shared.booking_contracts import (
    BookingError,
    BookingErrorKind,
    BookingRecord,
    BookingResult,
)
from infrastructure.constants import Resource
from tests.helpers import booking_confirmation


def test_record_from_payload_parses_confirmation():
    record = BookingRecord.from_payload(booking_confirmation())

    assert record.id == "987"
    assert record.service.duration == 90
    assert record.bookable.id == 194780
    assert (record.end - record.start).total_seconds() == 90 * 60
    assert record.raw == booking_confirmation()


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"id": 1},
        {**booking_confirmation(), "start": "yesterday"},
        {**booking_confirmation(), "service": {"id": 1}},
    ],
)
def test_record_from_payload_rejects_malformed(payload):
    with pytest.raises(ValueError):
        BookingRecord.from_payload(payload)


def test_failure_result_message_uses_error_detail():
    result = BookingResult.failure_result(BookingError.rejected("slot taken", 500))

    assert not result.success
    assert result.message == "slot taken"
    assert result.error.kind is BookingErrorKind.BOOKING_REJECTED


def test_incomplete_profile_error_lists_fields():
    error = BookingError.incomplete_profile(["email", "phone"])

    assert error.kind is BookingErrorKind.INCOMPLETE_PROFILE
    assert error.missing_fields == ["email", "phone"]


def test_resource_parse():
    assert Resource.parse("PADEL") is Resource.PADEL
    assert Resource.parse(Resource.FRONTENIS) is Resource.FRONTENIS
    with pytest.raises(ValueError):
        Resource.parse("squash")
