from datetime import datetime, timedelta, timezone

import pytest

from infrastructure.constants import STORE_KEYS, Resource
from infrastructure.store import JsonFileStore
from reservations.queue.reservation_queue import ScheduledJobQueue
from tests.helpers import MemoryStore


DESIRED = datetime(2025, 6, 11, 7, 0, tzinfo=timezone.utc)
FIRE_AT = datetime(2025, 6, 9, 4, 0, tzinfo=timezone.utc)


def test_create_round_trip(tmp_path):
    queue = ScheduledJobQueue(JsonFileStore(str(tmp_path)))

    job_id = queue.create(Resource.PADEL, DESIRED, FIRE_AT)

    assert job_id
    job = queue.get(job_id)
    assert job.resource is Resource.PADEL
    assert job.desired_start == DESIRED
    assert job.fire_at == FIRE_AT


def test_queue_persistence(tmp_path):
    store = JsonFileStore(str(tmp_path))
    queue = ScheduledJobQueue(store)
    job_id = queue.create("frontenis", "2025-06-11T07:00:00.000Z", FIRE_AT)

    reloaded = ScheduledJobQueue(JsonFileStore(str(tmp_path)))

    assert [job.id for job in reloaded.list()] == [job_id]
    assert reloaded.get(job_id).resource is Resource.FRONTENIS
    assert (tmp_path / "app_scheduled_jobs.json").exists()


def test_new_jobs_are_listed_first():
    queue = ScheduledJobQueue(MemoryStore())

    first = queue.create(Resource.PADEL, DESIRED, FIRE_AT)
    second = queue.create(Resource.PADEL, DESIRED + timedelta(hours=2), FIRE_AT)

    assert [job.id for job in queue.list()] == [second, first]
    assert first != second


def test_remove_is_idempotent():
    store = MemoryStore()
    queue = ScheduledJobQueue(store)
    job_id = queue.create(Resource.PADEL, DESIRED, FIRE_AT)

    assert queue.remove(job_id) is True
    assert queue.remove(job_id) is False
    assert queue.list() == []
    assert store.get(STORE_KEYS['jobs']) == []


def test_unknown_resource_is_rejected():
    queue = ScheduledJobQueue(MemoryStore())

    with pytest.raises(ValueError):
        queue.create("squash", DESIRED, FIRE_AT)
    assert queue.list() == []


def test_unreadable_entries_are_dropped_and_repaired():
    good = {
        'id': 'abc',
        'resource': 'padel',
        'desired_start': DESIRED.isoformat(),
        'fire_at': FIRE_AT.isoformat(),
    }
    store = MemoryStore({
        STORE_KEYS['jobs']: [
            good,
            {'id': 'no-dates', 'resource': 'padel'},
            {'resource': 'padel'},
            {**good, 'resource': 'squash', 'id': 'bad-resource'},
            dict(good),
            "junk",
        ],
    })

    queue = ScheduledJobQueue(store)

    assert [job.id for job in queue.list()] == ['abc']
    assert store.get(STORE_KEYS['jobs']) == [queue.get('abc').to_storage()]


def test_non_list_payload_falls_back_to_empty_queue():
    store = MemoryStore({STORE_KEYS['jobs']: {"not": "a list"}})

    queue = ScheduledJobQueue(store)

    assert queue.list() == []
    assert store.get(STORE_KEYS['jobs']) == []


def test_corrupt_file_falls_back_to_empty_queue(tmp_path):
    (tmp_path / "app_scheduled_jobs.json").write_text("[{", encoding="utf-8")

    queue = ScheduledJobQueue(JsonFileStore(str(tmp_path)))

    assert queue.list() == []
