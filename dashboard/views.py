"""JSON views for the dashboard builder.

The page shell is an external collaborator; these views expose the field
catalog, the palette, and the per-session widget layout as JSON.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from fields.categories import FieldSelection, category_title, group_by_category, search_fields, short_label
from fields.compatibility import filter_for
from fields.dto import FieldDescriptor
from fields.formatting import format_field_value
from fields.resolve import resolve

from .forms import WidgetEditorForm
from .persistence import LayoutPersistence
from .record import get_business_record, get_catalog, get_catalog_ids
from .store import load_layout, load_selection, store_layout, store_selection
from .widgets.collection import DuplicateWidgetIdError, WidgetCollection
from .widgets.palette import TEMPLATE_BY_KIND, WIDGET_TEMPLATES, widget_from_template
from .widgets.render import render_widget, render_widgets
from .widgets.schema import WidgetModel
from .widgets.snapshot_codec import encode_widget
from .widgets.validator import validate_widget

logger = logging.getLogger(__name__)


def _json_body(request: HttpRequest) -> dict[str, Any] | None:
    """Parse a JSON object request body, returning None when malformed."""

    try:
        payload = json.loads(request.body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return payload if isinstance(payload, dict) else None


def _bad_request(message: str, **extra: object) -> JsonResponse:
    return JsonResponse({"error": message, **extra}, status=400)


def _not_found(widget_id: str) -> JsonResponse:
    return JsonResponse({"error": f"Unknown widget id: {widget_id}"}, status=404)


def _layout_json(collection: WidgetCollection) -> dict[str, object]:
    record = get_business_record()
    renders = render_widgets(collection, record, catalog_ids=get_catalog_ids())
    return {
        "widgets": [
            {**encode_widget(widget), "render": request.as_json()}
            for widget, request in zip(collection, renders, strict=True)
        ],
    }


@require_GET
@ensure_csrf_cookie
def dashboard(request: HttpRequest) -> JsonResponse:
    """Return the session layout with a render request per widget."""

    return JsonResponse(_layout_json(load_layout(request)))


@require_GET
def fields_api(request: HttpRequest) -> JsonResponse:
    """Return the field catalog grouped by category.

    Query parameters:
        kind: Optional widget kind; only compatible fields are returned.
        q: Optional label search term.
    """

    kind = (request.GET.get("kind") or "").strip()
    query = (request.GET.get("q") or "").strip()
    record = get_business_record()
    catalog = get_catalog()
    if kind:
        catalog = filter_for(catalog, kind)
    if query:
        catalog = search_fields(catalog, query)

    selection = load_selection(request)
    categories = []
    for category, fields in group_by_category(catalog).items():
        categories.append(
            {
                "category": category,
                "title": category_title(category),
                "state": selection.state_for(fields),
                "fields": [
                    {
                        **field.as_json(),
                        "shortLabel": short_label(field),
                        "selected": field.id in selection,
                        "sample": _field_sample(record, field),
                    }
                    for field in fields
                ],
            }
        )
    return JsonResponse(
        {
            "kind": kind,
            "query": query,
            "selectedCount": len(selection),
            "categories": categories,
        }
    )


def _field_sample(record: object, field: FieldDescriptor) -> object | None:
    if field.value_type not in ("number", "string"):
        return None
    return format_field_value(resolve(record, field.path), field)


@require_POST
def field_selection(request: HttpRequest) -> JsonResponse:
    """Update the session's field selection.

    Accepts one of:
        {"field_ids": [...]}: replace the selection.
        {"toggle": "<field id>"}: toggle a single field.
        {"category": "<name>", "selected": true|false}: (de)select a category.
    """

    payload = _json_body(request)
    if payload is None:
        return _bad_request("Request body must be a JSON object.")

    catalog = get_catalog()
    known = {field.id for field in catalog}
    selection = load_selection(request)

    if "field_ids" in payload:
        raw_ids = payload.get("field_ids")
        if not isinstance(raw_ids, list):
            return _bad_request("field_ids must be a list.")
        selection = FieldSelection(tuple(dict.fromkeys(str(fid) for fid in raw_ids if str(fid) in known)))
    elif "toggle" in payload:
        field_id = str(payload.get("toggle") or "")
        if field_id not in known:
            return _bad_request(f"Unknown field id: {field_id}")
        selection = selection.toggle(field_id)
    elif "category" in payload:
        grouped = group_by_category(catalog)
        category = str(payload.get("category") or "")
        if category not in grouped:
            return _bad_request(f"Unknown category: {category}")
        selection = selection.set_category(grouped[category], selected=bool(payload.get("selected")))
    else:
        return _bad_request("Expected one of: field_ids, toggle, category.")

    store_selection(request, selection)
    return JsonResponse({"selected": list(selection.field_ids)})


@require_GET
def palette(request: HttpRequest) -> JsonResponse:
    """Return the widget templates offered by the palette."""

    return JsonResponse({"templates": [template.as_json() for template in WIDGET_TEMPLATES]})


@require_http_methods(["GET", "POST"])
def widgets_api(request: HttpRequest) -> JsonResponse:
    """List the layout (GET) or add a widget from a palette template (POST)."""

    collection = load_layout(request)
    if request.method == "GET":
        return JsonResponse(_layout_json(collection))

    payload = _json_body(request)
    if payload is None:
        return _bad_request("Request body must be a JSON object.")
    template = TEMPLATE_BY_KIND.get(str(payload.get("kind") or ""))
    if template is None:
        return _bad_request("kind must be one of the palette widget kinds.")

    widget = widget_from_template(template)
    form = WidgetEditorForm(data=_form_data(widget, payload), catalog=get_catalog())
    if not form.is_valid():
        return _bad_request("Invalid widget.", errors=form.errors.get_json_data())
    widget = form.apply_to(widget)
    try:
        collection = collection.append(widget)
    except DuplicateWidgetIdError as exc:
        logger.error("Generated widget id collided: %s", exc)
        return JsonResponse({"error": str(exc)}, status=409)
    store_layout(request, collection)
    return JsonResponse(_widget_json(widget), status=201)


@require_http_methods(["GET", "POST"])
def widget_detail(request: HttpRequest, widget_id: str) -> JsonResponse:
    """Return (GET) or edit (POST) a single widget."""

    collection = load_layout(request)
    widget = collection.get(widget_id)
    if widget is None:
        return _not_found(widget_id)
    if request.method == "GET":
        return JsonResponse(_widget_json(widget))

    payload = _json_body(request)
    if payload is None:
        return _bad_request("Request body must be a JSON object.")
    form = WidgetEditorForm(data=_form_data(widget, payload), catalog=get_catalog())
    if not form.is_valid():
        return _bad_request("Invalid widget.", errors=form.errors.get_json_data())
    updated = form.apply_to(widget)
    store_layout(request, collection.update(updated))
    return JsonResponse(_widget_json(updated))


@require_POST
def widget_delete(request: HttpRequest, widget_id: str) -> JsonResponse:
    """Remove a widget; removing an unknown id is a no-op."""

    collection = load_layout(request).remove(widget_id)
    store_layout(request, collection)
    return JsonResponse({"widgets": list(collection.ids())})


@require_POST
def widget_reorder(request: HttpRequest) -> JsonResponse:
    """Apply a drop event: move `moved_id` to the position of `target_id`."""

    payload = _json_body(request)
    if payload is None:
        return _bad_request("Request body must be a JSON object.")
    moved_id = str(payload.get("moved_id") or "")
    target_id = str(payload.get("target_id") or "")
    collection = load_layout(request).reorder(moved_id, target_id)
    store_layout(request, collection)
    return JsonResponse({"widgets": list(collection.ids())})


@require_GET
def widget_render(request: HttpRequest, widget_id: str) -> JsonResponse:
    """Return the render request for one widget."""

    widget = load_layout(request).get(widget_id)
    if widget is None:
        return _not_found(widget_id)
    rendered = render_widget(widget, get_business_record(), catalog_ids=get_catalog_ids())
    return JsonResponse(rendered.as_json())


@require_POST
def layout_save(request: HttpRequest) -> JsonResponse:
    """Hand the layout and field selection to the persistence stub."""

    payload = LayoutPersistence().save(load_layout(request), load_selection(request).field_ids)
    return JsonResponse({"saved": True, "payload": payload})


def _form_data(widget: WidgetModel, payload: dict[str, Any]) -> dict[str, Any]:
    """Merge a partial JSON edit over the widget's current values."""

    return {
        "title": payload.get("title", widget.title),
        "kind": payload.get("kind", widget.kind),
        "width": payload.get("width", widget.width),
        "height": payload.get("height", widget.height),
        "bound_fields": payload.get("bound_fields", list(widget.bound_fields)),
    }


def _widget_json(widget: WidgetModel) -> dict[str, object]:
    result = validate_widget(widget, catalog=get_catalog())
    rendered = render_widget(widget, get_business_record(), catalog_ids=get_catalog_ids())
    return {
        **encode_widget(widget),
        "warnings": list(result.warnings),
        "render": rendered.as_json(),
    }
