"""Persistence collaborator stub.

There is no backend yet: saving logs the payload that would be sent and
returns it so callers can display or inspect it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from .widgets.collection import WidgetCollection
from .widgets.snapshot_codec import encode_collection

logger = logging.getLogger(__name__)


class LayoutPersistence:
    """Accepts serialized layouts and selected field ids."""

    def save(self, collection: WidgetCollection, selected_field_ids: Iterable[str] = ()) -> dict[str, Any]:
        """Serialize a layout and selection for the (future) backend.

        Args:
            collection: Widget layout to save.
            selected_field_ids: Field ids selected in the field panel.

        Returns:
            The payload handed to the backend.
        """

        payload = encode_collection(collection)
        payload["selected_fields"] = list(selected_field_ids)
        logger.info(
            "Saving layout with %d widgets and %d selected fields.",
            len(payload["widgets"]),
            len(payload["selected_fields"]),
        )
        return payload
