"""Dotted-path value resolution against a business record."""

from __future__ import annotations

from collections.abc import Mapping, Sequence


def resolve(record: object, path: str) -> object | None:
    """Resolve a dotted field path against a record.

    Mapping segments are looked up by key; integer segments index into
    sequences. Keys that themselves contain a dot are matched by joining
    consecutive segments, shortest key first. Any missing or untraversable
    segment yields None.

    Args:
        record: Business record (mappings, sequences and scalars).
        path: Dotted path such as `revenue.byQuarter`.

    Returns:
        The value at `path`, or None when it does not resolve.
    """

    if not path:
        return None
    return _resolve_segments(record, path.split("."))


def _resolve_segments(current: object, segments: list[str]) -> object | None:
    if not segments:
        return current
    if isinstance(current, Mapping):
        for end in range(1, len(segments) + 1):
            key = ".".join(segments[:end])
            if key in current:
                found = _resolve_segments(current[key], segments[end:])
                if found is not None:
                    return found
        return None
    if isinstance(current, Sequence) and not isinstance(current, (str, bytes, bytearray)):
        head = segments[0]
        if not head.isdigit():
            return None
        try:
            item = current[int(head)]
        except IndexError:
            return None
        return _resolve_segments(item, segments[1:])
    return None


def last_segment(path: str) -> str:
    """Return the final segment of a dotted path."""

    return path.rsplit(".", 1)[-1]
