"""Forms for dashboard editing workflows."""

from __future__ import annotations

from collections.abc import Sequence

from django import forms

from fields.compatibility import accepted_value_type
from fields.dto import FieldDescriptor

from .widgets.editor import WidgetDraft
from .widgets.palette import WIDGET_TEMPLATES
from .widgets.schema import WIDGET_HEIGHTS, WIDGET_WIDTHS, WidgetModel


class WidgetEditorForm(forms.Form):
    """Validate widget edits against the current field catalog.

    Bound field paths must exist in the catalog and match the value type the
    selected widget kind can display.
    """

    title = forms.CharField(max_length=200, label="Widget Title")
    kind = forms.ChoiceField(
        choices=[(template.kind, template.title) for template in WIDGET_TEMPLATES],
        label="Widget Type",
    )
    width = forms.TypedChoiceField(
        choices=[(value, f"{value} Column{'s' if value > 1 else ''}") for value in WIDGET_WIDTHS],
        coerce=int,
        label="Width",
    )
    height = forms.TypedChoiceField(
        choices=[(value, f"{value} Row{'s' if value > 1 else ''}") for value in WIDGET_HEIGHTS],
        coerce=int,
        label="Height",
    )
    bound_fields = forms.MultipleChoiceField(required=False, choices=(), label="Data Fields")

    def __init__(self, *args, catalog: Sequence[FieldDescriptor], **kwargs) -> None:
        """Initialize field choices from the catalog."""

        super().__init__(*args, **kwargs)
        self._catalog = {field.id: field for field in catalog}
        self.fields["bound_fields"].choices = [(field.id, field.label) for field in catalog]

    @classmethod
    def for_widget(cls, widget: WidgetModel, *, catalog: Sequence[FieldDescriptor]) -> WidgetEditorForm:
        """Return an unbound form pre-filled from `widget`."""

        return cls(
            initial={
                "title": widget.title,
                "kind": widget.kind,
                "width": widget.width,
                "height": widget.height,
                "bound_fields": list(widget.bound_fields),
            },
            catalog=catalog,
        )

    def clean_title(self) -> str:
        title = (self.cleaned_data.get("title") or "").strip()
        if not title:
            raise forms.ValidationError("Title must not be blank.")
        return title

    def clean(self) -> dict[str, object]:
        """Reject bound fields the selected kind cannot display."""

        cleaned = super().clean()
        kind = str(cleaned.get("kind") or "")
        expected = accepted_value_type(kind)
        paths = list(cleaned.get("bound_fields") or [])
        if expected is not None:
            incompatible = [path for path in paths if self._catalog[path].value_type != expected]
            if incompatible:
                self.add_error(
                    "bound_fields",
                    f"{kind} widgets can only bind {expected} fields; got: {', '.join(incompatible)}.",
                )
        return cleaned

    def apply_to(self, widget: WidgetModel) -> WidgetModel:
        """Return `widget` with the validated edits applied (id is kept).

        Raises:
            ValueError: If the form is invalid.
        """

        if not self.is_valid():
            raise ValueError("WidgetEditorForm must be valid before applying edits.")
        draft = (
            WidgetDraft.start(widget)
            .with_title(self.cleaned_data["title"])
            .with_kind(self.cleaned_data["kind"])
            .with_size(width=self.cleaned_data["width"], height=self.cleaned_data["height"])
            .with_fields(tuple(self.cleaned_data.get("bound_fields") or ()))
        )
        return draft.save()
