# tests/test_formatting.py

from __future__ import annotations

from datetime import datetime, timezone

from tasktalk.dispatch.formatting import due_suffix, format_due, format_task_line
from tasktalk.tasks.task_models import Task


def test_format_due_naive_and_date_only() -> None:
    assert format_due("2026-10-19T17:00:00") == "2026-10-19 17:00:00"
    assert format_due("2026-10-19") == "2026-10-19 00:00:00"


def test_format_due_aware_is_converted_to_local() -> None:
    raw = "2026-10-19T17:00:00Z"
    expected = datetime(2026, 10, 19, 17, 0, tzinfo=timezone.utc).astimezone().strftime("%Y-%m-%d %H:%M:%S")
    assert format_due(raw) == expected


def test_format_due_unparseable_is_verbatim() -> None:
    assert format_due("tomorrow-ish") == "tomorrow-ish"


def test_task_line() -> None:
    assert format_task_line(Task(id=3, description="x")) == "3. [ ] x"
    assert format_task_line(Task(id=4, description="y", completed=True, due_date="2026-01-02T03:04:05")) == (
        "4. [x] y (Due: 2026-01-02 03:04:05)"
    )
    assert due_suffix(None) == ""


def test_format_due_out_of_range_is_verbatim() -> None:
    raw = "0001-01-01T00:00:00+14:00"
    assert format_due(raw) == raw
