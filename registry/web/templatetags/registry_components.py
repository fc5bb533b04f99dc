from django import template

from registry.components.registry import build_registry

register = template.Library()


@register.simple_tag(takes_context=True)
def render_component(context, tag, **attrs):
    """
    Renders a registry component in place.
    :param context: Template context. ``component_registry`` and ``registry_page`` are used when present.
    :param tag: The component tag, e.g. "workflow-progress".
    :param attrs: Component attributes; use underscores where the HTML name has hyphens.
    :return: The component's rendered markup.
    """
    component_registry = context.get("component_registry") or build_registry()
    component = component_registry.create(tag, attrs)
    page = context.get("registry_page")
    if page is not None:
        page.mount(component)
    return component.view
