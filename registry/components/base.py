"""
Component capability shared by every widget.

A component owns its attribute state, renders its view as a pure function of
that state, reacts to local UI events and emits ``ComponentEvent`` messages to
whoever subscribed to it (a parent component or the host page).
"""

import logging
from typing import Protocol

from django.utils.safestring import SafeString

from registry.components.attributes import Attribute, AttributeState
from registry.components.events import EventEmitter, UIEvent

logger = logging.getLogger(__name__)


class Component(Protocol):
    tag: str
    events: EventEmitter

    def configure(self, update: dict | None = None, **kwargs) -> bool:
        ...

    def render(self) -> SafeString:
        ...

    def on_event(self, event: UIEvent) -> None:
        ...

    def mount(self, page) -> None:
        ...

    def unmount(self) -> None:
        ...


class BaseComponent:
    """Attribute-driven re-rendering, event emission and mount lifecycle."""

    tag = ""
    ATTRIBUTES: dict[str, Attribute] = {}

    def __init__(self, attributes: dict | None = None):
        self.state = AttributeState(self.ATTRIBUTES, attributes)
        self.events = EventEmitter()
        self.page = None
        self.view: SafeString | None = None
        self.render_count = 0
        self.attributes_changed(dict(attributes or {}))
        self.refresh()

    @property
    def mounted(self) -> bool:
        return self.page is not None

    def configure(self, update: dict | None = None, **kwargs) -> bool:
        """Apply attribute writes as one batch, re-rendering once if anything changed."""
        changes = dict(update or {})
        changes.update(kwargs)
        if not self.state.update(changes):
            return False
        self.attributes_changed(changes)
        self.refresh()
        return True

    def attributes_changed(self, changes: dict):
        """Hook for components that derive local state from attributes."""
        pass

    def mount(self, page):
        self.page = page
        self.refresh()

    def unmount(self):
        self.page = None

    def refresh(self) -> SafeString:
        self.view = self.render()
        self.render_count += 1
        return self.view

    def render(self) -> SafeString:
        raise NotImplementedError

    def on_event(self, event: UIEvent) -> None:
        pass

    def __str__(self):
        return str(self.view or "")
