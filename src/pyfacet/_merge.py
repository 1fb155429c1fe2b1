"""Deep merge of nested settings values.

Merging never mutates its inputs: the result is built from fresh ``dict`` and
``list`` containers, so values held by the store are never shared with the
caller.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pyfacet.exceptions import MergeConflictError

MAPPING = "mapping"
SEQUENCE = "sequence"
SCALAR = "scalar"


def kind_of(value: Any) -> str:
    """Classify *value* as a mapping, a sequence, or a scalar."""
    if isinstance(value, Mapping):
        return MAPPING
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return SEQUENCE
    return SCALAR


def is_structured(value: Any) -> bool:
    return kind_of(value) != SCALAR


def _join(path: str, key: Any) -> str:
    if isinstance(key, int):
        return f"{path}[{key}]"
    return f"{path}.{key}" if path else str(key)


def clone(value: Any) -> Any:
    """Copy the container structure of *value*; scalars are returned as is."""
    return deep_merge(None, value)


def deep_merge(base: Any, overlay: Any, *, path: str = "") -> Any:
    """Return *overlay* merged over *base*.

    - mappings merge key by key, overlay wins on conflicting leaves
    - sequences merge index by index, a longer overlay extends the result
    - a scalar overlay replaces whatever *base* holds
    - a structured overlay over a scalar (or missing) base is copied

    Raises
    ------
    MergeConflictError
        If a mapping meets a sequence (or the reverse) at any depth.
    """
    incoming = kind_of(overlay)
    if incoming == SCALAR:
        return overlay

    existing = kind_of(base)
    if existing == SCALAR:
        base = {} if incoming == MAPPING else []
        existing = incoming

    if existing != incoming:
        location = path or "<root>"
        raise MergeConflictError(
            f"Unsupported merge scenario at {location!r}: cannot merge a {incoming} into a {existing}",
            path=path,
            existing_kind=existing,
            incoming_kind=incoming,
        )

    if incoming == MAPPING:
        merged: dict[Any, Any] = {key: clone(value) for key, value in base.items()}
        for key, value in overlay.items():
            merged[key] = deep_merge(merged.get(key), value, path=_join(path, key))
        return merged

    items: list[Any] = [clone(value) for value in base]
    for index, value in enumerate(overlay):
        if index < len(items):
            items[index] = deep_merge(items[index], value, path=_join(path, index))
        else:
            items.append(clone(value))
    return items
