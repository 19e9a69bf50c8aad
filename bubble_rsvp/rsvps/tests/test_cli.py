"""Tests for the management CLI, run against an in-memory workbook."""

import pytest
from typer.testing import CliRunner

import cli
from bubble_rsvp.rsvps.dtos import StoreName
from bubble_rsvp.rsvps.layout import Col

runner = CliRunner()


@pytest.fixture(autouse=True)
def in_memory_workbook(monkeypatch, workbook):
    monkeypatch.setattr(cli, "get_workbook", lambda: workbook)
    monkeypatch.setattr(cli, "init_db", lambda: None)
    monkeypatch.setattr(cli, "setup_logging", lambda: None)


def test_submit_then_stats(workbook):
    result = runner.invoke(cli.app, ["submit", "Alice", "--attending", "Y", "--guests", "2"])

    assert result.exit_code == 0, result.output
    assert "Thank you! Your RSVP has been recorded." in result.output
    assert "guest_roster: inserted" in result.output

    result = runner.invoke(cli.app, ["stats"])

    assert result.exit_code == 0
    assert "Total RSVPs: 1" in result.output
    assert "Pending: 1" in result.output


def test_confirm_ranges(workbook):
    workbook.seed(
        StoreName.PRIMARY_LOG,
        {Col.NAME: "Alice", Col.ATTENDING: "Y", Col.STATUS: "Pending"},
        {Col.NAME: "Bob", Col.ATTENDING: "Maybe", Col.STATUS: "Pending"},
    )

    result = runner.invoke(cli.app, ["confirm", "primary_log", "3-4"])

    assert result.exit_code == 0, result.output
    assert "Successfully confirmed 2 RSVPs." in result.output
    assert "Not found in the other sheet: Alice, Bob" in result.output


def test_confirm_row_failure_exits_non_zero():
    result = runner.invoke(cli.app, ["confirm-row", "10"])

    assert result.exit_code == 1
    assert "No RSVP found at row 10" in result.output


def test_regenerate_and_list(workbook):
    workbook.seed(
        StoreName.PRIMARY_LOG,
        {Col.NAME: "Alice", Col.ATTENDING: "Y", Col.STATUS: "Confirmed"},
        {Col.NAME: "Carol", Col.ATTENDING: "N", Col.STATUS: "Cancelled"},
    )

    result = runner.invoke(cli.app, ["regenerate"])
    assert result.exit_code == 0, result.output
    assert len(workbook.records(StoreName.GUEST_ROSTER)) == 2

    result = runner.invoke(cli.app, ["list", "--status", "cancelled"])
    assert result.exit_code == 0
    assert "[4] Carol - N, Cancelled, 1 guest(s)" in result.output
    assert "Alice" not in result.output


def test_ensure_sheets():
    result = runner.invoke(cli.app, ["ensure-sheets"])

    assert result.exit_code == 0
    assert "All sheets are in place" in result.output
