"""Nested settings store kept on a host object.

This is the only component that reads or writes the raw store. ``attach`` and
``SettingsMixin`` delegate every operation to a ``SettingsStore`` view of the
host.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pyfacet._merge import MAPPING, SCALAR, clone, deep_merge, is_structured, kind_of
from pyfacet._path import MISSING, path_get, path_set
from pyfacet._redact import redact_setting
from pyfacet.config import FacetOptions
from pyfacet.exceptions import InvalidArgumentError

_logger = logging.getLogger(__name__)


class _Unset:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<unset>"


# Distinguishes ``set(key)`` from ``set(key, None)``.
_UNSET: Any = _Unset()

# Instance attributes of a SettingsStore; a self-owned store may not use them.
_INTERNAL_ATTRS: frozenset[str] = frozenset({"_options", "_owner"})


def _check_path(path: Any) -> None:
    if not isinstance(path, str):
        raise InvalidArgumentError(f"Setting path must be a str, got {type(path).__name__}")


class SettingsStore:
    """Settings for one owner.

    The raw store is a ``dict`` kept in the owner's instance namespace under
    ``options.store``. It is created by the first write; reads never create
    it. When *owner* is omitted the store owns itself, so a class can hold a
    ``SettingsStore`` as a plain field instead of being attached.

    Mutating operations return the owner to allow chaining.
    """

    def __init__(self, owner: Any = None, options: FacetOptions | None = None) -> None:
        self._options = options if options is not None else FacetOptions()
        if owner is None:
            name = self._options.store
            if name in _INTERNAL_ATTRS or hasattr(type(self), name):
                raise InvalidArgumentError(
                    f"store {name!r} clashes with a SettingsStore attribute",
                )
            owner = self
        self._owner = owner

    @property
    def owner(self) -> Any:
        return self._owner

    @property
    def options(self) -> FacetOptions:
        return self._options

    @property
    def data(self) -> Any:
        """The raw store, or ``None`` if nothing was written yet."""
        name = self._options.store
        try:
            return vars(self._owner).get(name)
        except TypeError:
            # No instance __dict__ (e.g. __slots__ hosts).
            return getattr(self._owner, name, None)

    def _allocate(self) -> Any:
        data = self.data
        if data is None:
            data = {}
            setattr(self._owner, self._options.store, data)
        return data

    def _notify(self, path: str, value: Any) -> None:
        handle = self._options.handle
        if handle is not None:
            handle(self._owner, path, value)

    # ------------------------------------------------------------------
    # Explicit operations
    # ------------------------------------------------------------------

    def read(self, path: str, default: Any = None) -> Any:
        """Return the value at *path*, or *default* when it is unset.

        Never raises: a non-``str`` path addresses nothing.
        """
        data = self.data
        if data is None or not isinstance(path, str):
            return default
        value = path_get(data, path)
        return default if value is MISSING else value

    def write(self, path: str, value: Any, *, force: bool = False) -> Any:
        """Write *value* at *path* and notify the handle.

        Unless *force* is set, a structured value already stored at *path* is
        deep-merged with *value*, new values winning on conflicting leaves.

        Raises
        ------
        MergeConflictError
            If the merge meets a mapping and a sequence at the same location.
        """
        _check_path(path)
        data = self.data
        existing = MISSING if data is None else path_get(data, path)

        if not force and is_structured(existing):
            value = deep_merge(existing, value, path=path)
        else:
            value = clone(value)

        path_set(self._allocate(), path, value)
        if _logger.isEnabledFor(logging.DEBUG):
            _logger.debug("Setting %s=%r", path, redact_setting(path, value))
        self._notify(path, value)
        return self._owner

    def write_many(self, values: Mapping[str, Any]) -> Any:
        """Write every key of *values*, in order, one notification per key."""
        if not isinstance(values, Mapping):
            raise InvalidArgumentError(f"write_many expects a mapping, got {type(values).__name__}")
        for name, value in values.items():
            self.write(str(name), value)
        return self._owner

    def replace(self, values: Any) -> Any:
        """Discard the whole store and replace it with a copy of *values*.

        A sequence produces a list store, anything else a dict store. The
        handle is not called.
        """
        kind = kind_of(values)
        if kind == SCALAR:
            raise InvalidArgumentError(f"replace expects a mapping or sequence, got {type(values).__name__}")
        fresh = deep_merge({} if kind == MAPPING else [], values)
        setattr(self._owner, self._options.store, fresh)
        if _logger.isEnabledFor(logging.DEBUG):
            _logger.debug("Replaced %s with %r", self._options.store, redact_setting("", fresh))
        return self._owner

    # ------------------------------------------------------------------
    # Host operations
    # ------------------------------------------------------------------

    def set(self, key: Any, value: Any = _UNSET, force: Any = False) -> Any:
        """Read, write, merge, or replace depending on the arguments.

        - ``set("a.b")`` reads the path
        - ``set("a.b", value)`` writes the path, merging structured values
        - ``set("a.b", value, True)`` writes the path without merging
        - ``set({"a": 1, "b": 2})`` writes each key
        - ``set({"a": 1}, True)`` or ``set([...], force=True)`` replaces the store
        """
        if isinstance(key, str):
            if value is _UNSET:
                return self.read(key)
            return self.write(key, value, force=bool(force))

        if is_structured(key):
            if force or (value is not _UNSET and value):
                return self.replace(key)
            if isinstance(key, Mapping):
                return self.write_many(key)

        raise InvalidArgumentError(f"Unsupported set() arguments for key of type {type(key).__name__}")

    def get(self, key: str, default: Any = None) -> Any:
        return self.read(key, default)

    def enable(self, key: str) -> Any:
        return self.set(key, True)

    def disable(self, key: str) -> Any:
        return self.set(key, False)

    def enabled(self, key: str) -> bool:
        return bool(self.get(key))

    def disabled(self, key: str) -> bool:
        return not self.get(key)
