"""Tests for name matching."""

from bubble_rsvp.rsvps.matcher import find_row, normalize_name

HEADER = ["Timestamp", "Name", "Status"]
CAPTION = ["RSVP Submissions - Newest First", "", ""]


def test_normalize_name_is_case_insensitive_only():
    assert normalize_name("Alice Smith") == "alice smith"
    assert normalize_name(" Alice ") == " alice "
    assert normalize_name(None) == ""


def test_find_row_matches_case_insensitively(rsvp_config):
    rows = [HEADER, CAPTION, ["", "Bob", "Pending"], ["", "ALICE", "Pending"]]

    assert find_row(rows, rsvp_config.primary_log, "alice") == 4
    assert find_row(rows, rsvp_config.primary_log, "Bob") == 3


def test_find_row_returns_first_duplicate(rsvp_config):
    rows = [HEADER, CAPTION, ["", "alice", "Pending"], ["", "Alice", "Confirmed"]]

    assert find_row(rows, rsvp_config.primary_log, "Alice") == 3


def test_find_row_skips_header_and_caption(rsvp_config):
    rows = [HEADER, ["Name", "", ""], ["", "Carol", ""]]

    assert find_row(rows, rsvp_config.primary_log, "name") is None


def test_find_row_does_not_ignore_whitespace(rsvp_config):
    rows = [HEADER, CAPTION, ["", "Alice ", "Pending"]]

    assert find_row(rows, rsvp_config.primary_log, "Alice") is None


def test_find_row_without_name_column(rsvp_config):
    rows = [["Timestamp", "Status"], CAPTION, ["", "Alice"]]

    assert find_row(rows, rsvp_config.primary_log, "Alice") is None
    assert find_row(rows, rsvp_config.primary_log, "") is None
