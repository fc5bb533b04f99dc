"""
Component registry.

Maps a tag name to the factory that builds the component. Registries are
built explicitly by the composition root (``build_registry``) and passed to
whoever needs them; there is no process-wide registry.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from registry.components.attributes import Attribute, normalize_attributes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Registration:
    tag: str
    factory: Callable
    attributes: dict[str, Attribute]


class ComponentRegistry:
    def __init__(self):
        self._registrations: dict[str, Registration] = {}

    def register(self, tag: str, factory: Callable, attributes: dict[str, Attribute] | None = None):
        if tag in self._registrations:
            raise ValueError(f"Component '{tag}' is already registered")
        if attributes is None:
            attributes = getattr(factory, "ATTRIBUTES", {})
        self._registrations[tag] = Registration(tag=tag, factory=factory, attributes=attributes)
        logger.debug(f"Registered component: {tag}")

    def create(self, tag: str, html_attrs: dict | None = None, **dependencies):
        """
        Build a component from HTML-style attributes.

        Args:
            tag: Registered tag (e.g., 'workflow-progress')
            html_attrs: Attribute values keyed by HTML name or component key
            **dependencies: Extra constructor arguments (e.g., a navigation channel)

        Raises:
            KeyError: If the tag is not registered
        """
        registration = self._registrations.get(tag)
        if registration is None:
            raise KeyError(f"Unknown component '{tag}'")
        attributes = normalize_attributes(registration.attributes, html_attrs or {})
        return registration.factory(attributes, **dependencies)

    def tags(self) -> list[str]:
        return list(self._registrations)

    def __contains__(self, tag):
        return tag in self._registrations


def build_registry() -> ComponentRegistry:
    from registry.attendance.components import AttendanceTracker, EntityStatusRow
    from registry.forms.builder import DynamicFormRenderer
    from registry.workflow.progress import StepProgressTracker

    component_registry = ComponentRegistry()
    for component_class in (StepProgressTracker, DynamicFormRenderer, EntityStatusRow, AttendanceTracker):
        component_registry.register(component_class.tag, component_class)
    return component_registry
