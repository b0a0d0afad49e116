# tests/test_formatters.py

import datetime
import os

import pytest

import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.path_utils import get_save_path, sanitize_name


def test_format_banner_text():
    assert formatters.format_banner_text("Hi", width=6) == "======\n  Hi  \n======"


@pytest.mark.parametrize(
    "items, expected",
    [
        ([], ""),
        (["A"], "A"),
        (["A", "B"], "A and B"),
        (["A", "B", 3], "A, B, and 3"),
    ],
)
def test_format_list_with_and(items, expected):
    assert formatters.format_list_with_and(items) == expected


def test_format_weight():
    assert formatters.format_weight(7.5) == "  7.5 %"
    assert formatters.format_weight(100) == "100.0 %"


def test_parse_due_date():
    assert formatters.parse_due_date("2025-10-01", "09:30") == datetime.datetime(
        2025, 10, 1, 9, 30
    )
    assert formatters.parse_due_date(None, "09:30") is None

    with pytest.raises(ValueError):
        formatters.parse_due_date("10/01/2025", "09:30")


def test_format_due_date():
    due = datetime.datetime(2025, 10, 1, 9, 30)
    assert formatters.format_due_date_from_datetime(due) == "2025-10-01 at 09:30"
    assert formatters.format_due_date_from_datetime(None) == "[NO DUE DATE]"


def test_format_assignment_oneline(populated_tracker):
    line = model_formatters.format_assignment_oneline(populated_tracker.get_assignment(2))
    assert line.startswith("   2 | Lab 1")
    assert line.endswith(" 25.0 % | 15 / 20")

    unmarked = model_formatters.format_assignment_oneline(
        populated_tracker.get_assignment(3)
    )
    assert unmarked.endswith("[NO MARK]")


def test_format_assignment_multiline(populated_tracker):
    text = model_formatters.format_assignment_multiline(
        populated_tracker.get_assignment(0), populated_tracker
    )

    assert text.splitlines()[0] == "Assignment in MATH101:"
    assert "... Mark: 85.0%" in text
    assert "... Final Pct:   8.5 %" in text
    assert "... Status: Marked" in text


def test_format_class_multiline(populated_tracker):
    text = model_formatters.format_class_multiline(
        populated_tracker.get_class("PHYS101"), populated_tracker
    )

    assert "... Assignments: 2" in text
    assert "... Total Value:  75.0 %" in text
    assert "... Earned So Far:  18.8 %" in text


# === paths ===


def test_sanitize_name():
    assert sanitize_name("  Fall 2025 ") == "Fall_2025"
    assert sanitize_name("a/b") == "a_b"


def test_get_save_path():
    default = get_save_path("Fall_2025", None)
    assert default.endswith(os.path.join("Documents", "Trackers", "Fall_2025.json"))

    assert get_save_path("ignored", "/tmp/t.json") == os.path.abspath("/tmp/t.json")
