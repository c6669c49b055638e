from datetime import date

import httpx
import pytest

from automation.availability import AvailabilityChecker
from automation.availability.datetime_helpers import parse_instant
from infrastructure.constants import Resource


def make_checker(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return AvailabilityChecker(client, base_url="https://api.test", timezone_name="Europe/Madrid")


@pytest.mark.asyncio
async def test_fetch_slots_queries_resource_endpoint():
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200, json=["2025-06-11T07:00:00Z", "2025-06-11T08:30:00Z"])

    result = await make_checker(handler).fetch_slots(Resource.PADEL)

    assert result.success
    assert seen == ["https://api.test/bookables/194780/available_times?service=570818"]
    assert result.slots == [
        parse_instant("2025-06-11T07:00:00Z"),
        parse_instant("2025-06-11T08:30:00Z"),
    ]


@pytest.mark.asyncio
async def test_check_day_filters_by_local_date():
    slots = ["2025-06-10T08:00:00Z", "2025-06-10T22:30:00Z", "2025-06-11T05:00:00Z"]
    checker = make_checker(lambda request: httpx.Response(200, json=slots))

    result = await checker.check_day(Resource.FRONTENIS, date(2025, 6, 11))

    assert result.slots == [
        parse_instant("2025-06-10T22:30:00Z"),
        parse_instant("2025-06-11T05:00:00Z"),
    ]


@pytest.mark.asyncio
async def test_non_success_status_is_an_error():
    checker = make_checker(lambda request: httpx.Response(503, text="down"))

    result = await checker.check_day(Resource.PADEL, date(2025, 6, 11))

    assert not result.success
    assert result.slots == []
    assert result.error.status_code == 503


@pytest.mark.asyncio
async def test_unexpected_payload_is_an_error():
    checker = make_checker(lambda request: httpx.Response(200, json={"detail": "nope"}))

    result = await checker.fetch_slots(Resource.PADEL)

    assert not result.success


@pytest.mark.asyncio
async def test_transport_failure_is_an_error():
    def fail(request):
        raise httpx.ReadTimeout("timed out", request=request)

    result = await make_checker(fail).fetch_slots(Resource.PADEL)

    assert not result.success
    assert "timed out" in result.error.detail


@pytest.mark.asyncio
async def test_unparseable_entries_are_skipped():
    checker = make_checker(
        lambda request: httpx.Response(200, json=["garbage", "2025-06-11T07:00:00Z", 5])
    )

    result = await checker.fetch_slots(Resource.PADEL)

    assert result.slots == [parse_instant("2025-06-11T07:00:00Z")]
