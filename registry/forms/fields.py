"""
Per-type rendering of schema fields.

``textarea``, ``select``, ``radio`` and ``checkbox`` get dedicated markup;
any other type becomes a single-line ``<input>`` whose ``type`` is the schema
type verbatim. Values are escaped by ``format_html``.
"""

from django.utils.html import format_html, format_html_join
from django.utils.safestring import SafeString, mark_safe

from registry.forms.schema import FieldDef, FieldSchema

# value posted for a checked checkbox
CHECKBOX_VALUE = "1"


def _required(field: FieldDef) -> str:
    return " required" if field.required else ""


def _as_text(value) -> str:
    return "" if value is None else str(value)


def render_textarea(field: FieldDef, value) -> SafeString:
    return format_html(
        '<textarea name="{}" id="{}"{}>{}</textarea>',
        field.id,
        field.id,
        _required(field),
        _as_text(value),
    )


def render_select(field: FieldDef, value) -> SafeString:
    selected = "" if field.find_option(value) is not None else " selected"
    placeholder = format_html('<option value=""{}>Select...</option>', selected)
    options = format_html_join(
        "",
        '<option value="{}"{}>{}</option>',
        ((option.value, " selected" if option.matches(value) else "", option.label) for option in field.options),
    )
    return format_html(
        '<select name="{}" id="{}"{}>{}{}</select>',
        field.id,
        field.id,
        _required(field),
        placeholder,
        options,
    )


def render_radio(field: FieldDef, value) -> SafeString:
    return format_html_join(
        "",
        '<div class="radio-option">'
        '<input type="radio" name="{}" id="{}_{}" value="{}"{}>'
        '<label for="{}_{}">{}</label>'
        "</div>",
        (
            (
                field.id,
                field.id,
                option.value,
                option.value,
                " checked" if option.matches(value) else "",
                field.id,
                option.value,
                option.label,
            )
            for option in field.options
        ),
    )


def render_checkbox(field: FieldDef, value) -> SafeString:
    return format_html(
        '<input type="checkbox" name="{}" id="{}"{} value="{}">',
        field.id,
        field.id,
        " checked" if value else "",
        CHECKBOX_VALUE,
    )


def render_input(field: FieldDef, value) -> SafeString:
    bounds = ""
    if field.min is not None:
        bounds += format_html(' min="{}"', field.min)
    if field.max is not None:
        bounds += format_html(' max="{}"', field.max)
    return format_html(
        '<input type="{}" name="{}" id="{}" value="{}"{}{}>',
        field.type,
        field.id,
        field.id,
        _as_text(value),
        _required(field),
        mark_safe(bounds),
    )


FIELD_RENDERERS = {
    "textarea": render_textarea,
    "select": render_select,
    "radio": render_radio,
    "checkbox": render_checkbox,
}


def render_field(field: FieldDef, value) -> SafeString:
    renderer = FIELD_RENDERERS.get(field.type, render_input)
    return renderer(field, value)


def collect_form_values(schema: FieldSchema, values: dict) -> dict[str, str]:
    """
    Build the name/value pairs a browser would submit for the rendered form.

    Unchecked checkboxes and radio groups without a choice are left out; a
    select without a matching option submits the placeholder's empty value.
    """
    data = {}
    for field in schema.fields:
        value = values.get(field.id)
        if field.type == "checkbox":
            if value:
                data[field.id] = CHECKBOX_VALUE
        elif field.type == "radio":
            option = field.find_option(value)
            if option is not None:
                data[field.id] = _as_text(option.value)
        elif field.type == "select":
            option = field.find_option(value)
            data[field.id] = _as_text(option.value) if option is not None else ""
        else:
            data[field.id] = _as_text(value)
    return data
