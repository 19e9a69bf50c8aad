import pytest

from bubble_rsvp.rsvps.dtos import StoreName
from bubble_rsvp.rsvps.layout import Col
from bubble_rsvp.rsvps.tests.inmemory_stores import FailingTabularStore
from bubble_rsvp.rsvps.urls import (
    CONFIRMED_RSVPS_URL,
    EVENT_DETAILS_URL,
    EXISTING_RSVPS_URL,
    RSVP_LIST_URL,
    RSVP_STATS_URL,
)


@pytest.fixture
def seeded(workbook):
    workbook.seed(
        StoreName.PRIMARY_LOG,
        {Col.NAME: "Alice", Col.ATTENDING: "Y", Col.GUESTS: 2, Col.STATUS: "Confirmed"},
        {Col.NAME: "Bob", Col.ATTENDING: "Maybe", Col.STATUS: "Pending"},
        {Col.NAME: "Carol", Col.ATTENDING: "N", Col.STATUS: "Cancelled"},
    )
    return workbook


@pytest.mark.asyncio
async def test_get_stats(client, seeded):
    response = await client.get(RSVP_STATS_URL)

    assert response.status_code == 200
    assert response.json() == {
        "total": 3,
        "confirmed": 1,
        "pending": 1,
        "maybe": 1,
        "cancelled": 1,
        "total_guests": 2,
    }


@pytest.mark.asyncio
async def test_list_rsvps_by_status(client, seeded):
    response = await client.get(RSVP_LIST_URL, params={"status": "cancelled"})

    assert response.status_code == 200
    assert response.json() == [
        {"name": "Carol", "attending": "N", "status": "Cancelled", "guests": 1, "row": 5}
    ]


@pytest.mark.asyncio
async def test_list_rsvps_unknown_status(client, seeded):
    response = await client.get(RSVP_LIST_URL, params={"status": "declined"})

    assert response.status_code == 400
    assert response.json()["error"] == "validation_failed"


@pytest.mark.asyncio
async def test_existing_and_confirmed(client, seeded):
    existing = await client.get(EXISTING_RSVPS_URL)
    confirmed = await client.get(CONFIRMED_RSVPS_URL)

    assert [rsvp["name"] for rsvp in existing.json()] == ["Alice", "Bob", "Carol"]
    assert confirmed.json() == ["Alice"]


@pytest.mark.asyncio
async def test_stats_store_unavailable(client, workbook, rsvp_config):
    workbook.replace_store(
        StoreName.PRIMARY_LOG, FailingTabularStore(rsvp_config.primary_log.sheet_name)
    )

    response = await client.get(RSVP_STATS_URL)

    assert response.status_code == 503
    assert response.json()["status"] == "error"


@pytest.mark.asyncio
async def test_event_details(client, rsvp_config):
    response = await client.get(EVENT_DETAILS_URL)

    assert response.status_code == 200
    assert response.json()["title"] == rsvp_config.event.title
    assert response.json()["location"] == rsvp_config.event.location
