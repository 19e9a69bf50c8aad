"""Tests for RsvpSummaryReadModel."""

import pytest

from bubble_rsvp.rsvps.dtos import (
    RsvpStatsDTO,
    StatusFilter,
    StoreIOError,
    StoreName,
    ValidationError,
)
from bubble_rsvp.rsvps.features.rsvp_summary.read_model import RsvpSummaryReadModel
from bubble_rsvp.rsvps.layout import Col
from bubble_rsvp.rsvps.tests.inmemory_stores import FailingTabularStore

LOG_ROWS = [
    {Col.NAME: "Alice", Col.ATTENDING: "Y", Col.GUESTS: 2, Col.STATUS: "Confirmed"},
    {Col.NAME: "Bob", Col.ATTENDING: "Maybe", Col.GUESTS: 3, Col.STATUS: "Pending"},
    {Col.NAME: "Carol", Col.ATTENDING: "N", Col.STATUS: "Cancelled"},
    {Col.NAME: "Dan", Col.ATTENDING: "Maybe", Col.GUESTS: "abc", Col.STATUS: "Confirmed"},
    {Col.NAME: "", Col.ATTENDING: "Y", Col.GUESTS: 9, Col.STATUS: "Confirmed"},
    {Col.NAME: "Erin", Col.ATTENDING: "N", Col.STATUS: "Cancelled (Previously Confirmed)"},
    {Col.NAME: "Frank", Col.ATTENDING: "Y", Col.STATUS: ""},
]


@pytest.fixture
def read_model(workbook):
    workbook.seed(StoreName.PRIMARY_LOG, *LOG_ROWS)
    return RsvpSummaryReadModel(workbook)


def test_stats(read_model):
    stats = read_model.stats()

    assert stats == RsvpStatsDTO(
        total=6, confirmed=2, pending=1, maybe=2, cancelled=2, total_guests=3
    )
    assert stats.confirmed + stats.pending + stats.cancelled <= stats.total


@pytest.mark.parametrize(
    ("status_filter", "expected"),
    [
        (StatusFilter.ALL, ["Alice", "Bob", "Carol", "Dan", "Erin", "Frank"]),
        (StatusFilter.PENDING, ["Bob"]),
        (StatusFilter.CONFIRMED, ["Alice", "Dan"]),
        (StatusFilter.CANCELLED, ["Carol", "Erin"]),
        (StatusFilter.MAYBE, ["Bob", "Dan"]),
        ("confirmed", ["Alice", "Dan"]),
    ],
)
def test_by_status(read_model, status_filter, expected):
    assert [rsvp.name for rsvp in read_model.by_status(status_filter)] == expected


def test_by_status_rows_point_at_the_sheet(read_model):
    [bob] = read_model.by_status(StatusFilter.PENDING)

    assert bob.row == 4
    assert bob.attending == "Maybe"
    assert bob.guests == 3


def test_by_status_rejects_unknown_filter(read_model):
    with pytest.raises(ValidationError):
        read_model.by_status("declined")


def test_existing_rsvps_lists_every_named_row(read_model):
    assert len(read_model.existing_rsvps()) == 6


def test_confirmed_names(read_model):
    assert read_model.confirmed_names() == ["Alice", "Dan"]


def test_missing_columns_give_empty_results(workbook):
    workbook.seed(StoreName.PRIMARY_LOG, {Col.NAME: "Alice", Col.ATTENDING: "Y"})
    workbook.get_store(StoreName.PRIMARY_LOG).rows[0] = ["Timestamp", "Name", "Attending"]
    read_model = RsvpSummaryReadModel(workbook)

    assert read_model.stats() == RsvpStatsDTO()
    assert read_model.by_status(StatusFilter.ALL) == []
    assert read_model.confirmed_names() == []


def test_store_failures_propagate(workbook, rsvp_config):
    workbook.replace_store(
        StoreName.PRIMARY_LOG, FailingTabularStore(rsvp_config.primary_log.sheet_name)
    )

    with pytest.raises(StoreIOError):
        RsvpSummaryReadModel(workbook).stats()


def test_event_details_come_from_configuration(read_model, rsvp_config):
    assert read_model.event_details() == rsvp_config.event
