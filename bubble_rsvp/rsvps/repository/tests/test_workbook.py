"""Tests for Workbook layout setup and snapshots."""

from bubble_rsvp.rsvps.dtos import StoreName
from bubble_rsvp.rsvps.layout import (
    DIETARY_ROSTER_HEADERS,
    GUEST_ROSTER_HEADERS,
    PRIMARY_LOG_HEADERS,
    Col,
)
from bubble_rsvp.rsvps.tests.inmemory_stores import InMemoryWorkbook


def test_ensure_layout_writes_headers_and_captions(rsvp_config):
    workbook = InMemoryWorkbook(rsvp_config)

    touched = workbook.ensure_layout()

    assert touched == [StoreName.PRIMARY_LOG, StoreName.GUEST_ROSTER, StoreName.DIETARY_ROSTER]
    log_rows = workbook.get_store(StoreName.PRIMARY_LOG).read_all()
    assert log_rows[0] == list(PRIMARY_LOG_HEADERS)
    assert log_rows[1][0] == rsvp_config.primary_log.caption
    assert workbook.get_store(StoreName.GUEST_ROSTER).read_all()[0] == list(GUEST_ROSTER_HEADERS)
    assert workbook.get_store(StoreName.DIETARY_ROSTER).read_all()[0] == list(
        DIETARY_ROSTER_HEADERS
    )


def test_ensure_layout_is_idempotent(workbook):
    before = workbook.get_store(StoreName.PRIMARY_LOG).read_all()

    assert workbook.ensure_layout() == []
    assert workbook.get_store(StoreName.PRIMARY_LOG).read_all() == before


def test_ensure_layout_rewrites_short_header_but_keeps_data(workbook):
    store = workbook.get_store(StoreName.GUEST_ROSTER)
    store.write_row(3, ["Alice"])
    store.rows[0] = ["Name", "Email"]

    assert workbook.ensure_layout() == [StoreName.GUEST_ROSTER]
    assert store.read_all()[0] == list(GUEST_ROSTER_HEADERS)
    assert store.read_all()[2] == ["Alice"]


def test_snapshot_resolves_columns_by_header_text(rsvp_config):
    workbook = InMemoryWorkbook(rsvp_config)
    store = workbook.get_store(StoreName.PRIMARY_LOG)
    store.write_row(1, ["Status", "Name", "Attending"])
    store.write_row(2, ["caption"])
    store.write_row(3, ["Pending", "Alice", "Y"])

    snapshot = workbook.snapshot(StoreName.PRIMARY_LOG)

    assert snapshot.columns.get(Col.NAME) == 2
    assert snapshot.find("alice") == 3
    assert snapshot.value(3, Col.STATUS) == "Pending"
    assert snapshot.value(3, Col.EMAIL, "none") == "none"
    assert list(snapshot.data_rows()) == [(3, ["Pending", "Alice", "Y"])]
    assert snapshot.last_row == 3
