"""
Breadcrumb-style progress indicator for multi-step registry workflows.

Steps before the current one (or listed as completed) can be revisited. When
the host page offers an enhanced navigation channel the jump is done as an
htmx swap of the page body, otherwise the page navigates normally.
"""

import logging
from dataclasses import dataclass
from enum import StrEnum

from django.utils.html import format_html
from django.utils.safestring import SafeString, mark_safe

from registry.components.attributes import CSV, INT, INT_CSV, Attribute
from registry.components.base import BaseComponent
from registry.components.events import WORKFLOW_NAVIGATION, ComponentEvent, UIEvent

logger = logging.getLogger(__name__)

STYLES = mark_safe(
    """<style>
    :host { display: block; margin: 1rem 0; font-family: inherit; }
    .progress-container { display: flex; align-items: center; gap: 0.5rem; padding: 1rem;
        background: #f8f9fa; border-radius: 0.5rem; border: 1px solid #e9ecef; overflow-x: auto; }
    .step { display: flex; align-items: center; gap: 0.5rem; flex-shrink: 0; padding: 0.5rem 0.75rem;
        border-radius: 0.375rem; text-decoration: none; color: inherit; min-height: 2.5rem; }
    .step:focus { outline: 2px solid #3b82f6; outline-offset: 2px; }
    .step.completed { background: #22c55e; color: white; }
    a.step.completed { cursor: pointer; }
    a.step.completed:hover { background: #16a34a; }
    .step.current { background: #3b82f6; color: white; font-weight: 600; }
    .step.upcoming { background: #e5e7eb; color: #6b7280; cursor: not-allowed; }
    .step-number { display: flex; align-items: center; justify-content: center; width: 1.5rem; height: 1.5rem;
        border-radius: 50%; background: rgba(255, 255, 255, 0.2); font-size: 0.875rem; font-weight: 600; }
    .step-name { font-size: 0.875rem; white-space: nowrap; }
    .separator { width: 1rem; height: 2px; background: #d1d5db; flex-shrink: 0; }
    .sr-only { position: absolute; width: 1px; height: 1px; padding: 0; margin: -1px; overflow: hidden;
        clip: rect(0, 0, 0, 0); white-space: nowrap; border: 0; }
    @media (max-width: 640px) {
        .progress-container { padding: 0.75rem; gap: 0.25rem; }
        .step { padding: 0.375rem 0.5rem; }
        .step-name { display: none; }
        .separator { width: 0.5rem; }
    }
</style>"""
)

SEPARATOR = mark_safe('<div class="separator" aria-hidden="true"></div>')


class StepStatus(StrEnum):
    completed = "completed"
    current = "current"
    upcoming = "upcoming"


@dataclass(frozen=True)
class Step:
    index: int
    name: str
    url: str | None
    status: StepStatus

    @property
    def navigable(self) -> bool:
        return self.status == StepStatus.completed and bool(self.url)

    @property
    def aria_label(self) -> str:
        if self.status == StepStatus.completed:
            return f"Go to completed {self.name}"
        if self.status == StepStatus.current:
            return f"Current step: {self.name}"
        return f"Upcoming step: {self.name}"


def step_status(index: int, current_step: int, completed_steps) -> StepStatus:
    if index == current_step:
        return StepStatus.current
    if index in completed_steps or index < current_step:
        return StepStatus.completed
    return StepStatus.upcoming


def build_steps(
    current_step: int,
    total_steps: int,
    step_names: list[str] | None = None,
    step_urls: list[str] | None = None,
    completed_steps=(),
) -> list[Step]:
    """
    Derive the ordered steps of a workflow.

    Args:
        current_step: 1-based index of the step in progress; past ``total_steps`` means all done
        total_steps: Number of steps, must be at least 1
        step_names: Names by position, blanks fall back to "Step {i}"
        step_urls: URLs by position, blanks make the step non-navigable
        completed_steps: Indices explicitly marked as completed

    Returns:
        One Step per index in 1..total_steps
    """
    step_names = step_names or []
    step_urls = step_urls or []
    completed = set(completed_steps)

    steps = []
    for index in range(1, total_steps + 1):
        name = step_names[index - 1] if index <= len(step_names) else ""
        url = step_urls[index - 1] if index <= len(step_urls) else ""
        steps.append(
            Step(
                index=index,
                name=name or f"Step {index}",
                url=url or None,
                status=step_status(index, current_step, completed),
            )
        )
    return steps


class StepProgressTracker(BaseComponent):
    tag = "workflow-progress"
    ATTRIBUTES = {
        "current_step": Attribute("data-current-step", INT, default=1),
        "total_steps": Attribute("data-total-steps", INT, default=1),
        "step_names": Attribute("data-step-names", CSV, default=[]),
        "step_urls": Attribute("data-step-urls", CSV, default=[]),
        "completed_steps": Attribute("data-completed-steps", INT_CSV, default=[]),
    }

    def __init__(self, attributes: dict | None = None, htmx=None):
        self.htmx = htmx
        super().__init__(attributes)

    @property
    def current_step(self) -> int:
        return self.state.get("current_step")

    @property
    def total_steps(self) -> int:
        return self.state.get("total_steps")

    @property
    def steps(self) -> list[Step]:
        return build_steps(
            self.current_step,
            self.total_steps,
            self.state.get("step_names"),
            self.state.get("step_urls"),
            self.state.get("completed_steps"),
        )

    def get_step(self, index) -> Step | None:
        try:
            index = int(index)
        except (TypeError, ValueError):
            return None
        if 1 <= index <= self.total_steps:
            return self.steps[index - 1]
        return None

    @property
    def channel(self):
        if self.htmx is not None:
            return self.htmx
        return getattr(self.page, "htmx", None)

    # Public API

    def update_progress(self, current_step: int, completed_steps=()) -> bool:
        return self.configure(current_step=current_step, completed_steps=list(completed_steps))

    def set_step_urls(self, urls: list[str]) -> bool:
        return self.configure(step_urls=list(urls))

    def set_step_names(self, names: list[str]) -> bool:
        return self.configure(step_names=list(names))

    # Rendering

    def render(self) -> SafeString:
        parts = []
        steps = self.steps
        for step in steps:
            parts.append(self._render_step(step))
            if step.index < len(steps):
                parts.append(SEPARATOR)

        return format_html(
            '{}<nav class="progress-container" role="navigation" aria-label="Workflow progress">{}</nav>',
            STYLES,
            mark_safe("".join(parts)),
        )

    def _render_step(self, step: Step) -> SafeString:
        content = format_html(
            '<span class="step-number" aria-hidden="true">{}</span>'
            '<span class="step-name">{}</span>'
            '<span class="sr-only">{}</span>',
            step.index,
            step.name,
            step.aria_label,
        )
        if step.navigable:
            return format_html(
                '<a class="step {}" href="{}" hx-get="{}" hx-target="body" hx-push-url="true" '
                'tabindex="0" role="link" aria-label="{}" data-step="{}">{}</a>',
                step.status,
                step.url,
                step.url,
                step.aria_label,
                step.index,
                content,
            )
        return format_html(
            '<div class="step {}" tabindex="-1" role="text" aria-label="{}" data-step="{}">{}</div>',
            step.status,
            step.aria_label,
            step.index,
            content,
        )

    # Interaction

    def on_event(self, event: UIEvent):
        if not event.is_activation:
            return None
        step = self.get_step(event.target)
        if step is None or not step.navigable:
            return None
        return self.navigate_to(step)

    def navigate_to(self, step: Step):
        """Announce the jump, then navigate through the best channel available."""
        self.events.emit(
            ComponentEvent(
                WORKFLOW_NAVIGATION,
                {"fromStep": self.current_step, "toStep": step.index, "stepName": step.name},
            )
        )

        channel = self.channel
        if channel is not None:
            headers = {"HX-Request": "true"}
            if self.page is not None:
                headers["HX-Current-URL"] = self.page.location
            return channel.ajax("GET", step.url, target="body", swap="outerHTML", headers=headers)

        if self.page is None:
            logger.warning(f"Cannot navigate to step {step.index}: component is not mounted")
            return None
        return self.page.navigate(step.url)
