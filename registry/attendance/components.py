"""
Attendance taking for a single event.

Each ``EntityStatusRow`` shows one attendee with Present/Absent controls and
emits ``attendance-changed`` when one is activated. The ``AttendanceTracker``
collects those events into a map keyed by entity id, keeps the running
counts, and submits the map once every entity has been marked.

Submission lifecycle::

    idle -> submitting -> succeeded
                       -> failed -> submitting -> ...
"""

import logging
from types import MappingProxyType

import sentry_sdk
from django.conf import settings
from django.utils.html import format_html, format_html_join
from django.utils.safestring import SafeString, mark_safe

from registry.attendance.models import (
    MARKED_STATUSES,
    AttendanceCounts,
    AttendanceEntry,
    AttendanceStatus,
    AttendanceSubmissionError,
    SubmissionState,
    count_attendance,
    parse_status,
)
from registry.client import RegistryAPIError
from registry.components.attributes import INT, STR, Attribute
from registry.components.base import BaseComponent
from registry.components.events import ATTENDANCE_CHANGED, ATTENDANCE_SAVED, ComponentEvent, UIEvent

logger = logging.getLogger(__name__)

SUBMIT_TARGET = "submit"

SUCCESS = "success"
ERROR = "error"

ROW_STYLES = mark_safe(
    """<style>
    :host { display: block; border-bottom: 1px solid #eee; background: white; }
    .student-item { display: flex; align-items: center; justify-content: space-between; padding: 15px; }
    .student-info { flex: 1; }
    .student-name { font-weight: bold; font-size: 16px; margin-bottom: 5px; color: #333; }
    .student-details { font-size: 14px; color: #666; }
    .attendance-buttons { display: flex; gap: 10px; }
    .attendance-btn { padding: 10px 20px; border: 2px solid; border-radius: 25px; background: white; cursor: pointer;
        font-size: 14px; font-weight: bold; min-width: 80px; text-align: center; }
    .attendance-btn.present { border-color: #28a745; color: #28a745; }
    .attendance-btn.present.active { background: #28a745; color: white; }
    .attendance-btn.absent { border-color: #dc3545; color: #dc3545; }
    .attendance-btn.absent.active { background: #dc3545; color: white; }
</style>"""
)

TRACKER_STYLES = mark_safe(
    """<style>
    :host { display: block; }
    .submit-section { padding: 20px; background: #f8f9fa; margin-top: 20px; border-radius: 6px; text-align: center; }
    .summary { margin-bottom: 15px; font-size: 16px; }
    .count { font-weight: bold; color: #007bff; }
    .count.present { color: #28a745; }
    .count.absent { color: #dc3545; }
    .count.unmarked { color: #6c757d; }
    .btn { display: inline-block; padding: 12px 24px; border-radius: 6px; border: none; font-size: 16px;
        cursor: pointer; margin: 5px; text-decoration: none; }
    .btn:disabled { opacity: 0.6; cursor: not-allowed; }
    .btn-success { background: #28a745; color: white; }
    .btn-secondary { background: #6c757d; color: white; }
    .loading { margin: 10px 0; }
    .alert { padding: 15px; border-radius: 6px; margin: 10px 0; }
    .alert-success { background: #d4edda; color: #155724; border: 1px solid #c3e6cb; }
    .alert-error { background: #f8d7da; color: #721c24; border: 1px solid #f5c6cb; }
    .progress-bar { width: 100%; height: 8px; background: #e9ecef; border-radius: 4px; overflow: hidden; margin: 10px 0; }
    .progress-fill { height: 100%; background: linear-gradient(90deg, #28a745, #20c997); }
</style>"""
)


class EntityStatusRow(BaseComponent):
    tag = "student-attendance-row"
    ATTRIBUTES = {
        "entity_id": Attribute("student-id", STR),
        "entity_name": Attribute("student-name", STR, default=""),
        "entity_grade": Attribute("student-grade", STR, default="N/A"),
        "family_name": Attribute("family-name", STR, default=""),
        "status": Attribute("status", STR),
    }

    @property
    def entity_id(self) -> str | None:
        return self.state.get("entity_id")

    @property
    def entity_name(self) -> str:
        return self.state.get("entity_name")

    @property
    def status(self) -> AttendanceStatus:
        return parse_status(self.state.get("status")) or AttendanceStatus.unset

    def set_status(self, status: AttendanceStatus) -> bool:
        return self.configure(status=str(status))

    def on_event(self, event: UIEvent):
        if not event.is_activation:
            return None
        status = parse_status(event.target)
        if status not in MARKED_STATUSES:
            return None

        self.set_status(status)
        self.events.emit(
            ComponentEvent(
                ATTENDANCE_CHANGED,
                {"studentId": self.entity_id, "status": str(status), "studentName": self.entity_name},
            )
        )
        return status

    def render(self) -> SafeString:
        buttons = format_html_join(
            "",
            '<button type="button" class="attendance-btn {}{}" data-status="{}" aria-label="Mark {} as {}">{}</button>',
            (
                (status, " active" if self.status == status else "", status, self.entity_name, status, label)
                for status, label in ((AttendanceStatus.present, "Present"), (AttendanceStatus.absent, "Absent"))
            ),
        )
        return format_html(
            '{}<div class="student-item">'
            '<div class="student-info">'
            '<div class="student-name">{}</div>'
            '<div class="student-details">Grade: {} | Family: {}</div>'
            "</div>"
            '<div class="attendance-buttons">{}</div>'
            "</div>",
            ROW_STYLES,
            self.entity_name,
            self.state.get("entity_grade"),
            self.state.get("family_name"),
            buttons,
        )


class AttendanceTracker(BaseComponent):
    tag = "attendance-form"
    ATTRIBUTES = {
        "event_id": Attribute("event-id", STR),
        "total_entities": Attribute("total-students", INT, default=0),
    }

    def __init__(self, attributes: dict | None = None):
        self.attendance: dict[str, AttendanceStatus] = {}
        self.rows: list[EntityStatusRow] = []
        self.total_entities: int | None = None
        self.submission_state = SubmissionState.idle
        self.message: tuple[str, str] | None = None
        super().__init__(attributes)

    def attributes_changed(self, changes: dict):
        if self.total_entities is None:
            self.total_entities = self.state.get("total_entities")
        elif "total_entities" in changes:
            logger.warning(f"Ignoring total-students change for event {self.event_id}: fixed at construction")

    @property
    def event_id(self) -> str | None:
        return self.state.get("event_id")

    @property
    def counts(self) -> AttendanceCounts:
        return count_attendance(self.attendance, self.total_entities)

    @property
    def entries(self) -> list[AttendanceEntry]:
        return [AttendanceEntry(entity_id, status) for entity_id, status in self.attendance.items()]

    @property
    def loading(self) -> bool:
        return self.submission_state == SubmissionState.submitting

    @property
    def can_submit(self) -> bool:
        if self.submission_state not in (SubmissionState.idle, SubmissionState.failed):
            return False
        return self.counts.complete

    # Rows

    def add_row(self, row: EntityStatusRow) -> EntityStatusRow:
        row.events.subscribe(self.handle_status_change)
        self.rows.append(row)
        self.refresh()
        return row

    def remove_row(self, row: EntityStatusRow):
        if row in self.rows:
            row.events.unsubscribe(self.handle_status_change)
            self.rows.remove(row)
            self.refresh()

    def handle_status_change(self, event: ComponentEvent):
        if event.name != ATTENDANCE_CHANGED:
            return
        entity_id = event.detail.get("studentId")
        status = parse_status(event.detail.get("status"))
        if entity_id is None or status is None:
            logger.warning(f"Ignoring malformed {event.name} event: {dict(event.detail)}")
            return

        # last write wins
        self.attendance[str(entity_id)] = status
        self.refresh()
        self.events.emit(event)

    def set_initial_attendance(self, attendance: dict) -> None:
        """Replace the whole attendance map, e.g. to resume a partially taken register."""
        seeded = {}
        for entity_id, value in attendance.items():
            status = parse_status(value)
            if status is None:
                logger.warning(f"Skipping unknown attendance status {value!r} for {entity_id}")
                continue
            seeded[str(entity_id)] = status
        self.attendance = seeded
        self.refresh()

    # Submission

    def on_event(self, event: UIEvent):
        if event.is_activation and event.target == SUBMIT_TARGET:
            return self.submit()
        return None

    def submit(self) -> bool:
        """Post the attendance map. Returns True once the registry accepted it."""
        if not self.can_submit:
            logger.info(
                f"Rejected attendance submission for event {self.event_id}: "
                f"state={self.submission_state}, unmarked={self.counts.unmarked}"
            )
            return False
        if self.page is None:
            logger.warning(f"Cannot submit attendance for event {self.event_id}: component is not mounted")
            return False

        self.submission_state = SubmissionState.submitting
        self.message = None
        self.refresh()

        payload = {entity_id: str(status) for entity_id, status in self.attendance.items()}
        try:
            data = self.page.client.submit_attendance(self.event_id, payload)
            if not (isinstance(data, dict) and data.get("success")):
                raise AttendanceSubmissionError.from_response(data)
        except RegistryAPIError as e:
            sentry_sdk.capture_exception(e)
            return self._fail(e)
        except AttendanceSubmissionError as e:
            return self._fail(e)

        total_marked = data.get("total_marked")
        if total_marked is None:
            total_marked = self.counts.marked
        self.submission_state = SubmissionState.succeeded
        self.message = (SUCCESS, f"Attendance saved for {total_marked} students.")
        logger.info(f"Attendance saved for event {self.event_id}: {total_marked} marked")
        self.refresh()
        self.events.emit(
            ComponentEvent(
                ATTENDANCE_SAVED,
                {"totalMarked": total_marked, "attendanceData": MappingProxyType(payload)},
            )
        )
        return True

    def _fail(self, error: Exception) -> bool:
        self.submission_state = SubmissionState.failed
        self.message = (ERROR, str(error))
        logger.warning(f"Attendance submission for event {self.event_id} failed: {error}")
        self.refresh()
        return False

    # Rendering

    @property
    def submit_label(self) -> str:
        if self.submission_state == SubmissionState.succeeded:
            return "Attendance Saved ✓"
        unmarked = self.counts.unmarked
        if unmarked == 0:
            return "✓ Save Attendance (Complete)"
        return f"Save Attendance ({unmarked} remaining)"

    def _render_message(self) -> SafeString | str:
        if self.message is None:
            return ""
        kind, text = self.message
        heading = "Success!" if kind == SUCCESS else "Error:"
        return format_html('<div class="alert alert-{}"><strong>{}</strong> {}</div>', kind, heading, text)

    def render(self) -> SafeString:
        counts = self.counts
        base = settings.REGISTRY_ATTENDANCE_BASE.strip("/")
        rows = format_html_join("", '<div class="attendance-row">{}</div>', ((row.view,) for row in self.rows))
        button_class = "btn-secondary" if self.submission_state == SubmissionState.succeeded else "btn-success"
        return format_html(
            "{}"
            '<div class="attendance-rows">{}</div>'
            '<div class="submit-section">'
            '<div class="summary">'
            '<span class="count present" id="present-count">{}</span> Present, '
            '<span class="count absent" id="absent-count">{}</span> Absent, '
            '<span class="count unmarked" id="unmarked-count">{}</span> Unmarked'
            "</div>"
            '<div class="progress-bar"><div class="progress-fill" id="progress-fill" style="width: {}%"></div></div>'
            '<div class="loading" id="loading" style="display: {}">'
            '<div class="spinner"></div><div>Saving attendance...</div>'
            "</div>"
            '<button type="button" class="btn {}" id="submit-btn"{}>{}</button>'
            '<a href="/{}/" class="btn btn-secondary">Back to Dashboard</a>'
            '<div class="message-area" id="message-area">{}</div>'
            "</div>",
            TRACKER_STYLES,
            rows,
            counts.present,
            counts.absent,
            counts.unmarked,
            f"{counts.progress * 100:g}",
            "block" if self.loading else "none",
            button_class,
            "" if self.can_submit else mark_safe(" disabled"),
            self.submit_label,
            base,
            self._render_message(),
        )
