"""Attach the settings API to classes and objects.

Two ways to give a host type settings::

    class Server(SettingsMixin, store="opts"):
        ...

    attach(Server, {"store": "opts", "handle": on_change})

Either way the host gains ``set``, ``get``, ``enable``, ``disable``,
``enabled`` and ``disabled``, all delegating to ``store_of(host)``.
"""

from __future__ import annotations

import logging
import types
from typing import Any, ClassVar, TypeVar

from pyfacet.config import OPERATIONS, OPTIONS_ATTR, FacetOptions
from pyfacet.exceptions import InvalidArgumentError
from pyfacet.store import _UNSET, SettingsStore

_logger = logging.getLogger(__name__)

T = TypeVar("T")


def store_of(host: Any) -> SettingsStore:
    """Return the ``SettingsStore`` view of an attached *host*."""
    options = getattr(host, OPTIONS_ATTR, None)
    if not isinstance(options, FacetOptions):
        raise InvalidArgumentError(f"{type(host).__name__} object has no settings attached")
    return SettingsStore(host, options)


class SettingsMixin:
    """Base class providing the settings operations.

    Configure subclasses with class keywords::

        def on_change(server, key, value):
            server.emit("settings", key, value)

        class Server(SettingsMixin, store="_options", handle=on_change):
            ...

    Unspecified keywords are inherited from the parent class.
    """

    __facet_options__: ClassVar[FacetOptions] = FacetOptions()

    def __init_subclass__(cls, *, store: str | None = None, handle: Any = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if store is None and handle is None:
            return
        inherited: FacetOptions = getattr(cls, OPTIONS_ATTR)
        cls.__facet_options__ = FacetOptions.coerce(
            {
                "store": store if store is not None else inherited.store,
                "handle": handle if handle is not None else inherited.handle,
            }
        )

    def set(self, key: Any, value: Any = _UNSET, force: Any = False) -> Any:
        """Set an attribute in the settings store.

        ``set(key)`` reads, ``set(key, value)`` writes at a path and merges
        with a structured value already stored there, ``set(key, value, True)``
        writes without merging, ``set(mapping)`` writes every key and
        ``set(mapping, True)`` replaces the whole store.

        Returns
        -------
        The host for writes, the stored value for reads.
        """
        return store_of(self).set(key, value, force)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value of a stored setting, or *default*."""
        return store_of(self).get(key, default)

    def enable(self, key: str) -> Any:
        """Mark a setting as enabled (``True``)."""
        return store_of(self).enable(key)

    def disable(self, key: str) -> Any:
        """Mark a setting as disabled (``False``)."""
        return store_of(self).disable(key)

    def enabled(self, key: str) -> bool:
        """Settings that do not exist are not enabled."""
        return store_of(self).enabled(key)

    def disabled(self, key: str) -> bool:
        """Settings that do not exist are disabled."""
        return store_of(self).disabled(key)


def attach(target: T, options: Any = None) -> T:
    """Install the settings operations on *target* and return it.

    Parameters
    ----------
    target : type or object
        A class (operations become methods shared by all instances, each
        instance keeping its own store) or a single object.
    options : str, callable, mapping, FacetOptions or None
        Store attribute name, write handle, or both.

    Raises
    ------
    InvalidArgumentError
        If *options* has an unsupported shape or *target* cannot take
        attributes.
    """
    resolved = FacetOptions.coerce(options)
    operations = {name: vars(SettingsMixin)[name] for name in OPERATIONS}

    if isinstance(target, type):
        for name, func in operations.items():
            setattr(target, name, func)
        setattr(target, OPTIONS_ATTR, resolved)
    else:
        try:
            for name, func in operations.items():
                setattr(target, name, types.MethodType(func, target))
            setattr(target, OPTIONS_ATTR, resolved)
        except AttributeError as exc:
            raise InvalidArgumentError(f"Cannot attach settings to {type(target).__name__} objects") from exc

    _logger.debug("Attached settings to %r (store=%s)", target, resolved.store)
    return target
