"""
Identifier type and exceptions for the class layout model.
"""

from typing import NewType

ClassId = NewType("ClassId", int)
"""Arena-local class identifier. Never persisted, reassigned on every load."""


class LayoutError(Exception):
    """Base class for class layout errors."""
    pass


class LayoutInvariantError(LayoutError):
    """Raised when an in-memory layout violates a structural invariant.

    This indicates a programming error upstream (for example a pointer field
    referencing a class id that is not part of the list being stored).
    """
    pass


class UnsupportedGeneratorError(LayoutError, NotImplementedError):
    """Raised by generators that cannot produce final output."""
    pass
