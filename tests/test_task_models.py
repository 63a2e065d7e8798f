# tests/test_task_models.py

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from taskvista.tasks.task_models import Task, TaskTag, format_timestamp, parse_timestamp


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("red", TaskTag.RED),
        ("GREEN", TaskTag.GREEN),
        (" blue ", TaskTag.BLUE),
        ("high", TaskTag.RED),
        ("medium", TaskTag.GREEN),
        ("Low", TaskTag.BLUE),
        (TaskTag.GREEN, TaskTag.GREEN),
        ("urgent", None),
        ("", None),
        (None, None),
    ],
)
def test_tag_parse(raw, expected) -> None:
    assert TaskTag.parse(raw) is expected


def test_tag_labels() -> None:
    assert TaskTag.RED.label == "High Priority"
    assert TaskTag.GREEN.label == "Medium Priority"
    assert TaskTag.BLUE.label == "Low Priority"


def test_timestamps() -> None:
    dt = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=UTC)
    assert format_timestamp(dt) == "2024-01-02T03:04:05.678Z"
    assert parse_timestamp("2024-01-02T03:04:05.678Z") == dt
    # naive timestamps are taken as UTC
    assert parse_timestamp("2024-01-02T03:04:05.678") == dt
    assert parse_timestamp("2024-01-02T05:04:05.678+02:00") == dt


def test_record_accepts_integral_float_id_and_defaults_completed() -> None:
    task = Task.from_record(
        {"id": 1714564800000.0, "title": "T", "category": "C", "tag": "green", "createdAt": "2024-05-01T12:00:00Z"}
    )
    assert task.id == 1714564800000
    assert isinstance(task.id, int)
    assert task.completed is False


@pytest.mark.parametrize(
    "rec",
    [
        ["not", "a", "dict"],
        {"id": True, "title": "T", "category": "C", "tag": "red", "createdAt": "2024-05-01T12:00:00Z"},
        {"id": 1.5, "title": "T", "category": "C", "tag": "red", "createdAt": "2024-05-01T12:00:00Z"},
        {"id": 1, "title": 5, "category": "C", "tag": "red", "createdAt": "2024-05-01T12:00:00Z"},
        {"id": 1, "title": "T", "category": " ", "tag": "red", "createdAt": "2024-05-01T12:00:00Z"},
        {"id": 1, "title": "T", "category": "C", "tag": "high", "createdAt": "2024-05-01T12:00:00Z"},
        {"id": 1, "title": "T", "category": "C", "tag": "red", "completed": "yes", "createdAt": "2024-05-01T12:00:00Z"},
        {"id": 1, "title": "T", "category": "C", "tag": "red"},
    ],
)
def test_record_rejects_malformed(rec) -> None:
    with pytest.raises(ValueError):
        Task.from_record(rec)


@pytest.mark.parametrize("raw", ["0001-01-01T00:00:00+01:00", "9999-12-31T23:00:00-02:00"])
def test_timestamp_outside_utc_range_is_a_value_error(raw) -> None:
    with pytest.raises(ValueError, match="out of range"):
        parse_timestamp(raw)
