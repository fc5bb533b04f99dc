"""
Events exchanged between components.

``UIEvent`` is local user interaction fed into a component's ``on_event``.
``ComponentEvent`` is what a component emits upward; its payload is read-only
so every listener sees exactly what was emitted.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

logger = logging.getLogger(__name__)

CLICK = "click"
KEYDOWN = "keydown"
INPUT = "input"
SUBMIT = "submit"

ACTIVATION_KEYS = ("Enter", " ")

WORKFLOW_NAVIGATION = "workflow-navigation"
ATTENDANCE_CHANGED = "attendance-changed"
ATTENDANCE_SAVED = "attendance-saved"


@dataclass(frozen=True)
class UIEvent:
    type: str  # CLICK, KEYDOWN, INPUT or SUBMIT
    target: Any = None  # what was interacted with (step index, status, field id)
    value: Any = None
    key: str | None = None

    @property
    def is_activation(self) -> bool:
        if self.type == CLICK:
            return True
        return self.type == KEYDOWN and self.key in ACTIVATION_KEYS


@dataclass(frozen=True)
class ComponentEvent:
    name: str
    detail: Mapping = field(default_factory=dict)
    bubbles: bool = True
    cancelable: bool = False

    def __post_init__(self):
        object.__setattr__(self, "detail", MappingProxyType(dict(self.detail)))


Listener = Callable[[ComponentEvent], None]


class EventEmitter:
    """Synchronous, ordered delivery of component events to subscribers."""

    def __init__(self):
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener):
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, event: ComponentEvent):
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(f"Listener for {event.name} failed")

    def __len__(self):
        return len(self._listeners)
