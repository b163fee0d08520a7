"""Node classification for business records.

The catalog walk never inspects raw Python types while recursing. Each value
is classified once into a tagged node (scalar, sequence or mapping) and the
walker dispatches on the tag.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Literal

NodeKind = Literal["scalar", "sequence", "mapping"]
ScalarKind = Literal["number", "string", "other"]


@dataclass(frozen=True, slots=True)
class Node:
    """A classified record node.

    Args:
        kind: Structural kind of the node.
        value: The underlying value (never copied).
        scalar_kind: Primitive kind for scalar nodes; None otherwise.
    """

    kind: NodeKind
    value: object
    scalar_kind: ScalarKind | None = None


def is_number(value: object) -> bool:
    """Return True for int/float values, excluding booleans."""

    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_whole_number(value: object) -> bool:
    """Return True when a numeric value has no fractional part."""

    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def classify(value: object) -> Node:
    """Classify a record value into a tagged node.

    Strings and bytes are scalars even though they are sequences.
    """

    if isinstance(value, Mapping):
        return Node(kind="mapping", value=value)
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return Node(kind="sequence", value=value)
    if is_number(value):
        return Node(kind="scalar", value=value, scalar_kind="number")
    if isinstance(value, str):
        return Node(kind="scalar", value=value, scalar_kind="string")
    return Node(kind="scalar", value=value, scalar_kind="other")
