import pytest
from django.template import Context, Template

from registry.components.attributes import UnknownAttributeError


def render(template_string, context=None):
    template = Template("{% load registry_components %}" + template_string)
    return template.render(Context(context or {}))


def test_render_component():
    html = render(
        "{% render_component 'workflow-progress' data_current_step=2 data_total_steps=3 data_step_names='A,B,C' %}"
    )
    assert 'aria-label="Current step: B"' in html
    assert 'aria-label="Upcoming step: C"' in html


def test_render_component_mounts_on_page(page, component_registry):
    render(
        "{% render_component 'attendance-form' event_id=event.id total_students=3 %}",
        {"event": {"id": "ev-1"}, "component_registry": component_registry, "registry_page": page},
    )
    [tracker] = page.components
    assert tracker.event_id == "ev-1"
    assert tracker.total_entities == 3


def test_render_component_uses_context_registry(component_registry):
    html = render("{% render_component 'workflow-progress' %}", {"component_registry": component_registry})
    assert "Current step: Step 1" in html


def test_unknown_attribute():
    with pytest.raises(UnknownAttributeError):
        render("{% render_component 'workflow-progress' data_colour='red' %}")


def test_output_is_not_double_escaped():
    html = render("{% render_component 'workflow-progress' data_step_names='<b>' %}")
    assert "&lt;b&gt;" in html
    assert "&amp;lt;" not in html
