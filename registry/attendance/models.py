import dataclasses
import logging
from enum import StrEnum

logger = logging.getLogger(__name__)


class AttendanceStatus(StrEnum):
    unset = "unset"
    present = "present"
    absent = "absent"


MARKED_STATUSES = (AttendanceStatus.present, AttendanceStatus.absent)


class SubmissionState(StrEnum):
    idle = "idle"
    submitting = "submitting"
    succeeded = "succeeded"
    failed = "failed"


class AttendanceSubmissionError(Exception):
    """The registry refused the attendance submission."""

    DEFAULT_MESSAGE = "Failed to save attendance"

    @classmethod
    def from_response(cls, data) -> "AttendanceSubmissionError":
        message = data.get("error") if isinstance(data, dict) else None
        return cls(message or cls.DEFAULT_MESSAGE)


@dataclasses.dataclass(frozen=True)
class AttendanceCounts:
    present: int
    absent: int
    total: int

    @property
    def marked(self) -> int:
        return self.present + self.absent

    @property
    def unmarked(self) -> int:
        return self.total - self.marked

    @property
    def progress(self) -> float:
        """Fraction of entities marked, 0 when there are none."""
        if self.total <= 0:
            return 0.0
        return self.marked / self.total

    @property
    def complete(self) -> bool:
        return self.unmarked == 0


def parse_status(value) -> AttendanceStatus | None:
    try:
        return AttendanceStatus(value)
    except ValueError:
        return None


def count_attendance(entries: dict[str, AttendanceStatus], total: int) -> AttendanceCounts:
    present = sum(1 for status in entries.values() if status == AttendanceStatus.present)
    absent = sum(1 for status in entries.values() if status == AttendanceStatus.absent)
    return AttendanceCounts(present=present, absent=absent, total=total)


@dataclasses.dataclass(frozen=True)
class AttendanceEntry:
    entity_id: str
    status: AttendanceStatus
