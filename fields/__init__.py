"""Pure field-catalog package for widgetboard.

This package turns an arbitrary nested business record into a flat catalog of
addressable, typed fields and resolves/formats values at render time. It must
not import Django.
"""

from .catalog import build_catalog
from .compatibility import filter_for
from .resolve import resolve

__all__ = ["build_catalog", "filter_for", "resolve"]
