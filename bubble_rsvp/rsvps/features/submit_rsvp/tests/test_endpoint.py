import pytest

from bubble_rsvp.rsvps.dtos import StoreName
from bubble_rsvp.rsvps.layout import Col
from bubble_rsvp.rsvps.tests.inmemory_stores import FailingTabularStore
from bubble_rsvp.rsvps.urls import SUBMIT_RSVP_URL


@pytest.mark.asyncio
async def test_submit_rsvp(client, workbook):
    rsvp_data = {
        "name": "Alice",
        "email": "alice@example.com",
        "attending": "Y",
        "guests": "2",
        "guestNames": "Bob",
        "dietary": "vegetarian",
    }

    response = await client.post(url=SUBMIT_RSVP_URL, json=rsvp_data)

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "success"
    assert data["message"] == "Thank you! Your RSVP has been recorded."
    assert data["error"] is None
    assert data["data"]["status"] == "Pending"
    assert [outcome["action"] for outcome in data["data"]["outcomes"]] == [
        "inserted",
        "inserted",
        "inserted",
    ]

    [log_row] = workbook.records(StoreName.PRIMARY_LOG)
    assert log_row[Col.GUEST_NAMES] == "Bob"
    assert log_row[Col.EMAIL] == "alice@example.com"


@pytest.mark.asyncio
async def test_submit_rsvp_with_numeric_guest_count(client, workbook):
    response = await client.post(
        url=SUBMIT_RSVP_URL, json={"name": "Alice", "attending": "yes", "guests": 3}
    )

    assert response.status_code == 200
    assert workbook.records(StoreName.PRIMARY_LOG)[0][Col.GUESTS] == 3


@pytest.mark.asyncio
async def test_submit_rsvp_without_name(client, workbook):
    response = await client.post(url=SUBMIT_RSVP_URL, json={"attending": "Y"})

    assert response.status_code == 400
    data = response.json()
    assert data["status"] == "error"
    assert data["error"] == "validation_failed"
    assert data["message"] == "There was a problem saving your RSVP: Name is required"
    assert workbook.records(StoreName.PRIMARY_LOG) == []


@pytest.mark.asyncio
async def test_submit_rsvp_store_unavailable(client, workbook, rsvp_config):
    workbook.replace_store(
        StoreName.PRIMARY_LOG, FailingTabularStore(rsvp_config.primary_log.sheet_name)
    )

    response = await client.post(url=SUBMIT_RSVP_URL, json={"name": "Alice", "attending": "Y"})

    assert response.status_code == 503
    assert response.json()["error"] == "store_io"
