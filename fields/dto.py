"""DTO types produced by the field catalog.

DTOs are plain, immutable data containers shared by the catalog, the widget
layer and the HTTP layer. They intentionally avoid any Django dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ValueType = Literal["number", "string", "object", "array"]

FieldFormat = Literal["currency", "percentage", "decimal", "integer"]


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """A single addressable field of a business record.

    Args:
        id: Stable identifier; always equal to `path`.
        label: Human path from the root joined with `" > "`.
        path: Dotted access path into the record.
        value_type: Kind of value found at `path`.
        format: Display format inferred from the field name (numbers only).
    """

    id: str
    label: str
    path: str
    value_type: ValueType
    format: FieldFormat | None = None

    @property
    def category(self) -> str:
        """Return the path segment before the first separator."""

        return self.path.split(".", 1)[0]

    def as_json(self) -> dict[str, object]:
        """Return a JSON-serializable representation."""

        payload: dict[str, object] = {
            "id": self.id,
            "label": self.label,
            "path": self.path,
            "type": self.value_type,
        }
        if self.format is not None:
            payload["format"] = self.format
        return payload
