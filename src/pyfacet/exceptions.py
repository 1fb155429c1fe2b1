"""Custom exception hierarchy for pyfacet."""

from __future__ import annotations


class FacetError(Exception):
    """Base exception for all pyfacet errors."""


class InvalidArgumentError(FacetError, TypeError):
    """Unsupported options shape, store name, or ``set`` argument."""


class MergeConflictError(FacetError):
    """A write tried to merge values that cannot be merged.

    Raised when a path write meets a mapping where the incoming value is a
    sequence, or the other way around. The store is left untouched.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str = "",
        existing_kind: str = "",
        incoming_kind: str = "",
    ) -> None:
        self.path = path
        self.existing_kind = existing_kind
        self.incoming_kind = incoming_kind
        super().__init__(message)
