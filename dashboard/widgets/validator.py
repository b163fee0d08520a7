"""Validation for widget definitions.

Widgets are user-edited, so validation collects every problem instead of
failing on the first one. Errors make a widget unusable; warnings describe
bindings that will render as "no data".
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from fields.compatibility import accepted_value_type
from fields.dto import FieldDescriptor

from .collection import WidgetCollection
from .schema import WIDGET_HEIGHTS, WIDGET_KINDS, WIDGET_WIDTHS, TableOptions, WidgetModel, config_kinds


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of validating one or more widgets."""

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


def validate_widget(widget: WidgetModel, *, catalog: Sequence[FieldDescriptor]) -> ValidationResult:
    """Validate a single widget against the current field catalog.

    Args:
        widget: Widget to validate.
        catalog: Current field catalog.

    Returns:
        ValidationResult containing errors and warnings.
    """

    errors: list[str] = []
    warnings: list[str] = []

    if not widget.id.strip():
        errors.append("Widget.id must be a non-empty string.")
    if not widget.title.strip():
        errors.append(f"Widget[{widget.id}].title must be a non-empty string.")
    if widget.kind not in WIDGET_KINDS:
        errors.append(f"Widget[{widget.id}].kind is not a supported value: {widget.kind!r}.")
    if widget.width not in WIDGET_WIDTHS:
        errors.append(f"Widget[{widget.id}].width must be one of {list(WIDGET_WIDTHS)}, got {widget.width!r}.")
    if widget.height not in WIDGET_HEIGHTS:
        errors.append(f"Widget[{widget.id}].height must be one of {list(WIDGET_HEIGHTS)}, got {widget.height!r}.")

    if widget.config is not None:
        if widget.kind not in config_kinds(widget.config):
            errors.append(
                f"Widget[{widget.id}].config {type(widget.config).__name__} does not apply to kind={widget.kind!r}."
            )
        if isinstance(widget.config, TableOptions) and widget.config.max_rows is not None:
            if widget.config.max_rows < 1:
                errors.append(f"Widget[{widget.id}].config.max_rows must be at least 1.")

    if len(set(widget.bound_fields)) != len(widget.bound_fields):
        errors.append(f"Widget[{widget.id}].bound_fields must not repeat a path.")

    by_id = {field.id: field for field in catalog}
    expected = accepted_value_type(widget.kind)
    for idx, path in enumerate(widget.bound_fields):
        field = by_id.get(path)
        if field is None:
            warnings.append(f"Widget[{widget.id}].bound_fields[{idx}] references unknown field {path!r}.")
            continue
        if expected is not None and field.value_type != expected:
            warnings.append(
                f"Widget[{widget.id}].bound_fields[{idx}] field {path!r} is {field.value_type!r}; "
                f"kind={widget.kind!r} expects {expected!r}."
            )

    if not widget.bound_fields:
        warnings.append(f"Widget[{widget.id}] has no bound fields.")

    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))


def validate_collection(
    widgets: WidgetCollection | Iterable[WidgetModel],
    *,
    catalog: Sequence[FieldDescriptor],
) -> ValidationResult:
    """Validate every widget and merge the results."""

    errors: list[str] = []
    warnings: list[str] = []
    for widget in widgets:
        result = validate_widget(widget, catalog=catalog)
        errors.extend(result.errors)
        warnings.extend(result.warnings)
    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))
