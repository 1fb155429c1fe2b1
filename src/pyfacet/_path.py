"""Path access into nested settings.

Paths use dot notation for mappings and ``[idx]`` for lists, e.g.
``"hello.targets[1].name"``. Digit-only dotted segments (``"items.0"``) also
index lists.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, MutableMapping
from typing import Any, Final

from pyfacet._merge import SEQUENCE, kind_of
from pyfacet.exceptions import InvalidArgumentError, MergeConflictError

_logger = logging.getLogger(__name__)

_SEGMENT_RE = re.compile(r"\[(\d+)\]|([^.\[\]]+)")


class _Missing:
    """Marker for a path that resolves to nothing."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


def parse_path(path: str) -> list[str | int]:
    """Split *path* into name (``str``) and index (``int``) segments."""
    return [int(index) if index else name for index, name in _SEGMENT_RE.findall(path)]


def _as_index(segment: str | int) -> int | None:
    if isinstance(segment, int):
        return segment
    if segment.isdigit():
        return int(segment)
    return None


def _child(node: Any, segment: str | int) -> Any:
    if isinstance(node, Mapping):
        if segment in node:
            return node[segment]
        if isinstance(segment, int) and str(segment) in node:
            return node[str(segment)]
        return MISSING
    if kind_of(node) == SEQUENCE:
        index = _as_index(segment)
        if index is None or index >= len(node):
            return MISSING
        return node[index]
    return MISSING


def _assign(node: Any, segment: str | int, value: Any, path: str) -> None:
    if isinstance(node, MutableMapping):
        key = segment if isinstance(segment, str) or segment in node else str(segment)
        node[key] = value
        return

    index = _as_index(segment)
    if index is None:
        raise MergeConflictError(
            f"Unsupported merge scenario at {path!r}: cannot address a sequence with key {segment!r}",
            path=path,
            existing_kind=SEQUENCE,
            incoming_kind="mapping",
        )
    if index >= len(node):
        node.extend([None] * (index + 1 - len(node)))
    node[index] = value


def path_get(container: Any, path: str) -> Any:
    """Return the value at *path*, or ``MISSING`` if any segment is absent."""
    segments = parse_path(path)
    if not segments:
        return MISSING

    node = container
    for segment in segments:
        node = _child(node, segment)
        if node is MISSING:
            return MISSING
    return node


def path_set(container: Any, path: str, value: Any) -> None:
    """Write *value* at *path*, creating intermediate containers.

    A following index segment creates a list, a name segment creates a dict.
    Scalars found in the middle of the path are replaced.
    """
    segments = parse_path(path)
    if not segments:
        raise InvalidArgumentError(f"Cannot write to an empty path: {path!r}")

    node = container
    for segment, following in zip(segments, segments[1:]):
        child = _child(node, segment)
        if isinstance(child, (MutableMapping, list)):
            node = child
            continue
        if child is not MISSING:
            _logger.debug("Replacing scalar at segment %r of %r with a container", segment, path)
        child = [] if isinstance(following, int) else {}
        _assign(node, segment, child, path)
        node = child
    _assign(node, segments[-1], value, path)
