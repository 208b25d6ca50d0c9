"""Error types raised by the planar graph engine."""

from typing import Optional


class PlanarGraphError(Exception):
    """Base class for all engine errors."""


class MalformedInputError(PlanarGraphError, ValueError):
    """
    Exchange-format data failed shape or type validation.

    Raised before any graph is built, so whatever graph the caller held
    before the failed load is still valid.

    Attributes:
        field: Offending top-level field ("vertices", "edges") or None
        index: Offending entry within that field, or None
    """

    def __init__(self, message: str, field: Optional[str] = None, index: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.index = index
