"""Business record loading and the memoized field catalog.

The record is read once per process (from `WIDGETBOARD_RECORD_PATH` or the
built-in sample) and the catalog is derived from it wholesale. Neither is ever
patched in place.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from fields.catalog import build_catalog
from fields.dto import FieldDescriptor
from fields.sample import sample_business_record

logger = logging.getLogger(__name__)

RECORD_PATH_SETTING = "WIDGETBOARD_RECORD_PATH"


def load_record_file(path: Path) -> Any:
    """Load a business record from a JSON or YAML file.

    Args:
        path: File path; `.yaml`/`.yml` files are parsed as YAML, anything else
            as JSON.

    Returns:
        The parsed record.

    Raises:
        OSError: When the file cannot be read.
        ValueError: When the file content cannot be parsed.
    """

    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yaml", ".yml"}:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc


@lru_cache(maxsize=1)
def get_business_record() -> Any:
    """Return the configured business record (memoized per process).

    Raises:
        ImproperlyConfigured: When a configured record file cannot be loaded.
    """

    raw_path = getattr(settings, RECORD_PATH_SETTING, None)
    if not raw_path:
        return sample_business_record()
    path = Path(raw_path)
    try:
        record = load_record_file(path)
    except (OSError, ValueError) as exc:
        raise ImproperlyConfigured(f"{RECORD_PATH_SETTING}={raw_path!r} could not be loaded: {exc}") from exc
    logger.info("Loaded business record from %s.", path)
    return record


@lru_cache(maxsize=1)
def get_catalog() -> tuple[FieldDescriptor, ...]:
    """Return the field catalog for the configured record (memoized)."""

    return build_catalog(get_business_record())


def get_catalog_ids() -> frozenset[str]:
    """Return the ids of every field in the current catalog."""

    return frozenset(field.id for field in get_catalog())


def reset_record_cache() -> None:
    """Drop the memoized record and catalog."""

    get_business_record.cache_clear()
    get_catalog.cache_clear()


def reset_record_cache_on_setting_change(*, setting: str, **kwargs: object) -> None:
    """Signal receiver clearing memoized data when the record path changes."""

    if setting == RECORD_PATH_SETTING:
        reset_record_cache()
