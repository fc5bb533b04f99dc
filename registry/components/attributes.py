"""
Observed attributes for components.

Each component declares the attributes it reacts to as a mapping of
``key -> Attribute``. Raw values are kept as strings, the way they sit on an
HTML element, and parsed on read. Parsing never raises: a malformed value
degrades to the attribute's default.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

STR = "str"
INT = "int"
CSV = "csv"
INT_CSV = "int_csv"
JSON = "json"


class UnknownAttributeError(KeyError):
    pass


@dataclass(frozen=True)
class Attribute:
    """Configuration for a single observed attribute."""

    name: str  # HTML attribute name (e.g., "data-current-step")
    kind: str = STR  # One of STR, INT, CSV, INT_CSV, JSON
    default: Any = None

    def parse(self, raw: str | None) -> Any:
        if raw is None or raw == "":
            return self._default()

        if self.kind == INT:
            try:
                return int(raw.strip())
            except ValueError:
                logger.warning(f"Invalid integer for {self.name}: {raw!r}")
                return self._default()

        if self.kind == CSV:
            return [item.strip() for item in raw.split(",")]

        if self.kind == INT_CSV:
            values = []
            for item in raw.split(","):
                try:
                    values.append(int(item.strip()))
                except ValueError:
                    continue
            return values

        if self.kind == JSON:
            try:
                return json.loads(raw)
            except ValueError as e:
                logger.warning(f"Invalid {self.name} JSON: {e}")
                return self._default()

        return raw

    def serialize(self, value: Any) -> str | None:
        if value is None:
            return None
        if isinstance(value, str):
            return value
        if self.kind == JSON:
            return json.dumps(value)
        if isinstance(value, (list, tuple, set, frozenset)):
            return ",".join(str(item) for item in value)
        if isinstance(value, dict):
            return json.dumps(value)
        return str(value)

    def _default(self):
        # fresh copy per read
        if isinstance(self.default, (list, dict)):
            return type(self.default)(self.default)
        return self.default


class AttributeState:
    """Raw attribute values for one component instance."""

    def __init__(self, attributes: dict[str, Attribute], initial: dict | None = None):
        self.attributes = attributes
        self._raw: dict[str, str] = {}
        if initial:
            self.update(initial)

    def update(self, changes: dict) -> bool:
        """Apply a batch of attribute writes.

        Returns:
            True if at least one stored value changed
        """
        pending = {}
        for key, value in changes.items():
            attribute = self.attributes.get(key)
            if attribute is None:
                raise UnknownAttributeError(key)
            pending[key] = attribute.serialize(value)

        changed = False
        for key, raw in pending.items():
            if self._raw.get(key) == raw:
                continue
            changed = True
            if raw is None:
                self._raw.pop(key, None)
            else:
                self._raw[key] = raw
        return changed

    def raw(self, key: str) -> str | None:
        if key not in self.attributes:
            raise UnknownAttributeError(key)
        return self._raw.get(key)

    def get(self, key: str) -> Any:
        return self.attributes[key].parse(self.raw(key))

    def as_html_attrs(self) -> dict[str, str]:
        return {self.attributes[key].name: raw for key, raw in self._raw.items()}


def normalize_attributes(attributes: dict[str, Attribute], html_attrs: dict) -> dict:
    """Map HTML attribute names onto component attribute keys.

    Keys may be given either as the HTML name (``data-current-step``), as the
    component key (``current_step``) or as the HTML name with underscores
    (``data_current_step``, which is how template tag keywords arrive).
    """
    by_name = {}
    for key, attribute in attributes.items():
        by_name[attribute.name] = key
        by_name[attribute.name.replace("-", "_")] = key
        by_name[key] = key

    normalized = {}
    for name, value in html_attrs.items():
        key = by_name.get(name)
        if key is None:
            raise UnknownAttributeError(name)
        normalized[key] = value
    return normalized
