"""Exceptions raised by stagger.

All are precondition violations: given well-formed inputs every operator
is a total, deterministic function, so nothing here is retried.
"""


class StaggerError(Exception):
    """Base class for errors raised by stagger."""


class InvalidGridSpec(StaggerError, ValueError):
    """Grid construction failed (non-positive count or extent, bad topology)."""


class LocationMismatch(StaggerError, TypeError):
    """A field's location violates an operator's source/destination contract."""


class ShapeMismatch(StaggerError, ValueError):
    """A field's data disagrees with the grid it is used on."""


class ArchitectureMismatch(ShapeMismatch):
    """A field lives on a different architecture than its grid."""


class ValidationError(StaggerError, ValueError):
    """Parameter validation failed."""
