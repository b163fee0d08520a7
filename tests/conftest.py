"""Pytest fixtures shared across unit and Django integration tests."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

import pytest

from fields.catalog import build_catalog
from fields.dto import FieldDescriptor
from fields.sample import sample_business_record


@pytest.fixture
def record() -> dict[str, Any]:
    """Return a fresh copy of the sample business record."""

    return sample_business_record()


@pytest.fixture
def catalog(record: dict[str, Any]) -> tuple[FieldDescriptor, ...]:
    """Return the field catalog of the sample record."""

    return build_catalog(record)


@pytest.fixture
def fresh_record_cache() -> Iterator[None]:
    """Drop the memoized record/catalog before and after a test."""

    from dashboard.record import reset_record_cache

    reset_record_cache()
    yield
    reset_record_cache()


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no Django request/response cycle.
    - `integration`: tests touching Django views, commands, settings, or IO.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
