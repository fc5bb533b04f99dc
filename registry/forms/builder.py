"""
Schema-driven form component.

The field schema is fetched the first time the form renders on a page and
kept for the lifetime of the component. On submit the values are checked
against the remote outcome validator first; only a form that passes (or whose
validation could not be performed at all) is posted to the page's own URL as
a plain form submission.
"""

import logging

import sentry_sdk
from django.utils.html import format_html, format_html_join
from django.utils.safestring import SafeString, mark_safe

from registry.client import RegistryAPIError
from registry.components.attributes import JSON, STR, Attribute
from registry.components.base import BaseComponent
from registry.components.events import INPUT, SUBMIT, UIEvent
from registry.components.host import FormSubmission
from registry.forms.fields import collect_form_values, render_field
from registry.forms.schema import FieldSchema, InvalidSchemaError

logger = logging.getLogger(__name__)

STYLES = mark_safe(
    """<style>
    :host { display: block; font-family: system-ui, sans-serif; }
    .form-container { max-width: 800px; margin: 0 auto; }
    .form-field { margin-bottom: 1.5rem; }
    label { display: block; margin-bottom: 0.5rem; font-weight: 500; }
    input, select, textarea { width: 100%; padding: 0.5rem; border: 1px solid #ddd; border-radius: 4px; font-size: 1rem; }
    .field-error { color: #d32f2f; font-size: 0.875rem; margin-top: 0.25rem; }
    .has-error input, .has-error select, .has-error textarea { border-color: #d32f2f; }
    .error-summary { background-color: #ffebee; color: #d32f2f; padding: 1rem; margin-bottom: 1.5rem; border-radius: 4px; }
    .error-summary h3 { margin-top: 0; margin-bottom: 0.5rem; }
    button[type="submit"] { background-color: #1976d2; color: white; border: none; padding: 0.75rem 1.5rem;
        font-size: 1rem; border-radius: 4px; cursor: pointer; }
</style>"""
)

SCHEMA_ERROR_VIEW = mark_safe('<div class="error">Error loading form schema</div>')
LOADING_VIEW = mark_safe("<div>Loading schema...</div>")


def coerce_errors(raw) -> list[dict]:
    """Keep only well formed ``{"field": ..., "message": ...}`` entries."""
    if not isinstance(raw, list):
        return []
    return [
        {"field": error.get("field"), "message": error.get("message", "")}
        for error in raw
        if isinstance(error, dict) and "field" in error
    ]


class DynamicFormRenderer(BaseComponent):
    tag = "form-builder"
    ATTRIBUTES = {
        "schema_url": Attribute("outcome-definition-url", STR),
        "form_data": Attribute("form-data", JSON, default={}),
        "validation_errors": Attribute("validation-errors", JSON, default=[]),
    }

    def __init__(self, attributes: dict | None = None):
        self.schema: FieldSchema | None = None
        self.schema_error: str | None = None
        self.values: dict = {}
        self.errors: list[dict] = []
        self.validating = False
        super().__init__(attributes)

    @property
    def schema_url(self) -> str | None:
        return self.state.get("schema_url")

    def attributes_changed(self, changes: dict):
        if "form_data" in changes:
            form_data = self.state.get("form_data")
            self.values = dict(form_data) if isinstance(form_data, dict) else {}
        if "validation_errors" in changes:
            self.errors = coerce_errors(self.state.get("validation_errors"))

    # Schema

    def load_schema(self) -> FieldSchema | None:
        """Fetch the schema once; a failed fetch is not retried."""
        if self.schema is not None or self.schema_error is not None:
            return self.schema
        if self.page is None or not self.schema_url:
            return None

        try:
            self.schema = FieldSchema.from_json(self.page.client.fetch_schema(self.schema_url))
            logger.debug(f"Loaded schema {self.schema.id} with {len(self.schema.fields)} fields")
        except (RegistryAPIError, InvalidSchemaError) as e:
            logger.error(f"Error loading schema from {self.schema_url}: {e}", exc_info=True)
            sentry_sdk.capture_exception(e)
            self.schema_error = str(e)
        return self.schema

    # Rendering

    def render(self) -> SafeString:
        if not self.schema_url:
            return mark_safe("")

        self.load_schema()
        if self.schema_error is not None:
            return SCHEMA_ERROR_VIEW
        if self.schema is None:
            return format_html("{}{}", STYLES, LOADING_VIEW)
        return format_html("{}{}", STYLES, self._render_form())

    def field_error(self, field_id: str) -> dict | None:
        for error in self.errors:
            if error["field"] == field_id:
                return error
        return None

    def _render_form(self) -> SafeString:
        summary = ""
        if self.errors:
            summary = format_html(
                '<div class="error-summary"><h3>Please correct the following errors:</h3><ul>{}</ul></div>',
                format_html_join(
                    "",
                    '<li data-field="{}">{}</li>',
                    ((error["field"], error["message"]) for error in self.errors),
                ),
            )

        fields = format_html_join("", "{}", ((self._render_form_field(field),) for field in self.schema.fields))
        return format_html(
            '<div class="form-container">{}<form method="POST">{}<button type="submit">Continue</button></form></div>',
            summary,
            fields,
        )

    def _render_form_field(self, field) -> SafeString:
        error = self.field_error(field.id)
        error_html = format_html('<div class="field-error">{}</div>', error["message"]) if error else ""
        return format_html(
            '<div class="form-field{}"><label for="{}">{}</label>{}{}</div>',
            " has-error" if error else "",
            field.id,
            field.display_label,
            render_field(field, self.values.get(field.id)),
            error_html,
        )

    # Interaction

    def on_event(self, event: UIEvent):
        if event.type == INPUT:
            return self.set_value(event.target, event.value)
        if event.type == SUBMIT:
            return self.submit()
        return None

    def set_value(self, field_id: str, value) -> bool:
        if self.schema is None or self.schema.get_field(field_id) is None:
            logger.warning(f"Ignoring input for unknown field '{field_id}'")
            return False
        self.values[field_id] = value
        self.refresh()
        return True

    def collect_values(self) -> dict[str, str]:
        if self.schema is None:
            return {}
        return collect_form_values(self.schema, self.values)

    def validate(self, data: dict[str, str]) -> bool:
        """
        Ask the outcome validator whether ``data`` is acceptable.

        A validator that cannot be reached or answers with something unreadable
        does not block the submission: the server checks the data again when
        the form is posted.
        """
        try:
            result = self.page.client.validate_outcome(self.schema.id, data)
        except RegistryAPIError as e:
            logger.warning(f"Outcome validation unavailable, deferring to server-side checks: {e}")
            return True
        if not isinstance(result, dict):
            logger.warning(f"Unexpected validation response, deferring to server-side checks: {result!r}")
            return True

        if not result.get("valid"):
            self.errors = coerce_errors(result.get("errors"))
            logger.info(f"Outcome {self.schema.id} rejected with {len(self.errors)} errors")
            self.refresh()
            return False

        self.errors = []
        self.refresh()
        return True

    def submit(self) -> bool:
        """Validate, then post the form to the page URL. Returns True if posted."""
        if self.page is None or self.schema is None:
            logger.warning("Cannot submit a form that has not loaded its schema")
            return False
        if self.validating:
            logger.info("Ignoring submit while validation is in progress")
            return False

        data = self.collect_values()
        self.validating = True
        try:
            valid = self.validate(data)
        finally:
            self.validating = False
        if not valid:
            return False

        response = self.page.submit_form(FormSubmission(action=self.page.url, fields=data))
        return response is not None
