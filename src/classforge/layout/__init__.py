"""
Class layout model.

Describes foreign structures as classes of typed, offset-ordered fields
held in a `ClassList` arena.
"""

from .types import ClassId, LayoutError, LayoutInvariantError, UnsupportedGeneratorError
from .fields import POINTER_SIZE, PADDING_BLOCKS, Field, FieldKind, allocate_padding
from .classes import Class, ClassList, FieldLayout
from .generator import Declaration, DeclarationCollector, Generator

__all__ = [
    # Types and errors
    "ClassId",
    "LayoutError",
    "LayoutInvariantError",
    "UnsupportedGeneratorError",

    # Fields
    "POINTER_SIZE",
    "PADDING_BLOCKS",
    "Field",
    "FieldKind",
    "allocate_padding",

    # Classes
    "Class",
    "ClassList",
    "FieldLayout",

    # Generators
    "Declaration",
    "DeclarationCollector",
    "Generator",
]
