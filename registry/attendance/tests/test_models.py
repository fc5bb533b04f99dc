import pytest

from registry.attendance.models import (
    AttendanceCounts,
    AttendanceStatus,
    AttendanceSubmissionError,
    count_attendance,
    parse_status,
)


def test_count_attendance():
    entries = {"a": AttendanceStatus.present, "b": AttendanceStatus.absent, "c": AttendanceStatus.unset}
    counts = count_attendance(entries, total=4)
    assert (counts.present, counts.absent, counts.unmarked) == (1, 1, 2)
    assert counts.progress == 0.5
    assert counts.complete is False


def test_progress_without_entities():
    counts = AttendanceCounts(present=0, absent=0, total=0)
    assert counts.progress == 0.0
    assert counts.complete is True


@pytest.mark.parametrize("value,expected", [("present", AttendanceStatus.present), ("late", None), (None, None)])
def test_parse_status(value, expected):
    assert parse_status(value) == expected


@pytest.mark.parametrize(
    "response,message",
    [
        ({"success": False, "error": "Event is closed"}, "Event is closed"),
        ({"success": False}, "Failed to save attendance"),
        ({"error": ""}, "Failed to save attendance"),
        (["unexpected"], "Failed to save attendance"),
    ],
)
def test_submission_error_message(response, message):
    assert str(AttendanceSubmissionError.from_response(response)) == message
