"""Per-session layout and field-selection storage.

Layouts live in the session, and sessions live in the local-memory cache, so
nothing outlives the process. Every write replaces the stored value
wholesale.
"""

from __future__ import annotations

from typing import Final

from django.http import HttpRequest

from fields.categories import FieldSelection

from .widgets.collection import WidgetCollection
from .widgets.palette import default_collection
from .widgets.snapshot_codec import decode_collection, encode_collection

LAYOUT_SESSION_KEY: Final[str] = "widgetboard_layout"
SELECTION_SESSION_KEY: Final[str] = "widgetboard_field_selection"


def load_layout(request: HttpRequest) -> WidgetCollection:
    """Return the session's widget layout (the starter layout when unset)."""

    payload = request.session.get(LAYOUT_SESSION_KEY)
    if not isinstance(payload, dict):
        return default_collection()
    return decode_collection(payload)


def store_layout(request: HttpRequest, collection: WidgetCollection) -> None:
    """Replace the session's widget layout."""

    request.session[LAYOUT_SESSION_KEY] = encode_collection(collection)
    request.session.modified = True


def load_selection(request: HttpRequest) -> FieldSelection:
    """Return the session's selected field ids."""

    raw = request.session.get(SELECTION_SESSION_KEY) or []
    return FieldSelection(tuple(str(field_id) for field_id in raw))


def store_selection(request: HttpRequest, selection: FieldSelection) -> None:
    """Replace the session's selected field ids."""

    request.session[SELECTION_SESSION_KEY] = list(selection.field_ids)
    request.session.modified = True
