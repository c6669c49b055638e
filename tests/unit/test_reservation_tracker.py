from automation.shared.booking_contracts import BookingRecord
from infrastructure.constants import STORE_KEYS
from reservations.queue.reservation_tracker import ReservationTracker
from tests.helpers import MemoryStore, booking_confirmation


def test_bookings_are_listed_most_recent_first():
    store = MemoryStore()
    tracker = ReservationTracker(store)

    tracker.add_completed_booking(BookingRecord.from_payload(booking_confirmation(booking_id=1)))
    tracker.add_completed_booking(BookingRecord.from_payload(booking_confirmation(booking_id=2)))

    assert [record.id for record in tracker.list_bookings()] == ["2", "1"]
    assert store.get(STORE_KEYS['bookings'])[0] == booking_confirmation(booking_id=2)


def test_unreadable_history_entries_are_skipped():
    store = MemoryStore({STORE_KEYS['bookings']: [{"id": 5}, booking_confirmation(), "junk"]})

    records = ReservationTracker(store).list_bookings()

    assert [record.id for record in records] == ["987"]


def test_non_list_history_is_treated_as_empty():
    store = MemoryStore({STORE_KEYS['bookings']: "corrupt"})
    tracker = ReservationTracker(store)

    assert tracker.list_bookings() == []
    tracker.add_completed_booking(BookingRecord.from_payload(booking_confirmation()))
    assert len(tracker.list_bookings()) == 1


def test_record_without_raw_payload_is_serialised():
    record = BookingRecord.from_payload(booking_confirmation())
    stripped = BookingRecord(
        id=record.id,
        url=record.url,
        email=record.email,
        start=record.start,
        end=record.end,
        timezone=record.timezone,
        service=record.service,
        bookable=record.bookable,
    )
    tracker = ReservationTracker(MemoryStore())

    tracker.add_completed_booking(stripped)

    assert tracker.list_bookings() == [record]
