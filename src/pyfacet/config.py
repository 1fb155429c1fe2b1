"""Attachment configuration for pyfacet."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pyfacet.exceptions import InvalidArgumentError

DEFAULT_STORE = "settings"

# Names installed on a host by ``attach``; a store attribute may not shadow them.
OPERATIONS: tuple[str, ...] = ("set", "get", "enable", "disable", "enabled", "disabled")

# Host attribute holding the FacetOptions of an attachment.
OPTIONS_ATTR = "__facet_options__"

SettingsHandle = Callable[[Any, str, Any], Any]


class FacetOptions(BaseModel):
    """Options closed over by one attachment.

    Parameters
    ----------
    store : str
        Name of the host attribute holding the settings mapping.
        Defaults to ``"settings"``; an empty name falls back to the default.
    handle : callable or None
        Called as ``handle(host, key, value)`` after every discrete key
        write. ``None`` disables notification.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    store: str = Field(default=DEFAULT_STORE, description="Host attribute holding the store")
    handle: SettingsHandle | None = Field(default=None, description="Write notification callback")

    @field_validator("store", mode="before")
    @classmethod
    def _normalize_store(cls, value: Any) -> Any:
        if value is None:
            return DEFAULT_STORE
        if not isinstance(value, str):
            return value
        name = value.strip()
        if not name:
            return DEFAULT_STORE
        if not name.isidentifier():
            raise ValueError(f"store must be a valid attribute name, got {value!r}")
        if name in OPERATIONS:
            raise ValueError(f"store {name!r} would shadow the {name}() operation")
        if name == OPTIONS_ATTR:
            raise ValueError(f"store {name!r} is reserved for the attachment options")
        return name

    @classmethod
    def coerce(cls, options: Any = None) -> FacetOptions:
        """Build options from any of the shapes ``attach`` accepts.

        A ``str`` names the store, a callable is the handle, a mapping may
        carry ``store`` and ``handle`` (other keys are ignored), and ``None``
        means defaults.

        Raises
        ------
        InvalidArgumentError
            For any other shape, or when validation fails.
        """
        if isinstance(options, FacetOptions):
            return options
        if options is None:
            return cls()

        data: dict[str, Any]
        if isinstance(options, str):
            data = {"store": options}
        elif isinstance(options, Mapping):
            data = dict(options)
        elif callable(options):
            data = {"handle": options}
        else:
            raise InvalidArgumentError(f"Unsupported options type: {type(options).__name__}")

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise InvalidArgumentError(f"Invalid settings options: {exc}") from exc
