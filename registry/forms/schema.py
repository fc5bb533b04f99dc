"""
Field schema for dynamically rendered forms.

A schema is fetched as JSON once per form and treated as immutable after
that. Field types are not validated: unknown types are passed through to the
rendered input as-is.
"""

import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

CHOICE_TYPES = ("select", "radio")


class InvalidSchemaError(ValueError):
    pass


@dataclass(frozen=True)
class Option:
    value: Any
    label: Any

    @classmethod
    def build(cls, raw) -> "Option":
        """Options are either plain scalars or ``{"value": ..., "label": ...}`` objects."""
        if isinstance(raw, dict):
            value = raw.get("value")
            return cls(value=value, label=raw.get("label", value))
        return cls(value=raw, label=raw)

    def matches(self, value) -> bool:
        return value is not None and self.value == value


@dataclass(frozen=True)
class FieldDef:
    id: str
    label: str = ""
    type: str = "text"
    required: bool = False
    options: tuple[Option, ...] = ()
    min: Any = None
    max: Any = None

    @classmethod
    def build(cls, raw: dict) -> "FieldDef":
        if not isinstance(raw, dict) or not raw.get("id"):
            raise InvalidSchemaError(f"Field definition without an id: {raw!r}")
        options = raw.get("options") or []
        if not isinstance(options, list):
            raise InvalidSchemaError(f"Options for field '{raw['id']}' must be a list, got {options!r}")
        return cls(
            id=str(raw["id"]),
            label=raw.get("label") or "",
            type=raw.get("type") or "text",
            required=bool(raw.get("required", False)),
            options=tuple(Option.build(option) for option in options),
            min=raw.get("min"),
            max=raw.get("max"),
        )

    @property
    def display_label(self) -> str:
        label = self.label or self.id
        return f"{label} *" if self.required else label

    def find_option(self, value) -> Option | None:
        for option in self.options:
            if option.matches(value):
                return option
        return None


@dataclass(frozen=True)
class FieldSchema:
    id: Any
    fields: tuple[FieldDef, ...] = ()

    @classmethod
    def from_json(cls, data) -> "FieldSchema":
        if not isinstance(data, dict):
            raise InvalidSchemaError("Schema document must be a JSON object")

        raw_fields = data.get("fields")
        if not isinstance(raw_fields, list):
            raw_fields = []

        fields = []
        seen = set()
        for raw in raw_fields:
            field = FieldDef.build(raw)
            if field.id in seen:
                logger.warning(f"Duplicate field id '{field.id}' in schema {data.get('id')}, keeping the first")
                continue
            seen.add(field.id)
            fields.append(field)
        return cls(id=data.get("id"), fields=tuple(fields))

    def get_field(self, field_id: str) -> FieldDef | None:
        for field in self.fields:
            if field.id == field_id:
                return field
        return None
