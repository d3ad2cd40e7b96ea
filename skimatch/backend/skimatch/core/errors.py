"""Errors raised by the availability core and services."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .conflicts import Conflict


class AvailabilityError(Exception):
    pass


class ValidationError(AvailabilityError, ValueError):
    """Missing field, non-positive price, malformed time or date."""


class ConflictError(AvailabilityError):
    """The new availability overlaps an existing commitment of the teacher."""

    def __init__(self, conflict: "Conflict") -> None:
        self.conflict = conflict
        super().__init__(f"This time conflicts with {conflict.describe()}")


class NotFoundError(AvailabilityError):
    pass


class TransportError(AvailabilityError):
    """The backing store could not be reached or rejected the request."""


__all__ = [
    "AvailabilityError",
    "ValidationError",
    "ConflictError",
    "NotFoundError",
    "TransportError",
]
