"""
classforge: structure layout workbench for reverse engineering

Describes the memory layout of foreign process structures as classes of
typed, offset-addressed fields, and saves/loads them as project files.
"""

__version__ = "0.1.0"
__author__ = "classforge Contributors"

# Core model
from .layout import (
    ClassId, Class, ClassList, Field, FieldKind, FieldLayout,
    allocate_padding, LayoutError, LayoutInvariantError, UnsupportedGeneratorError
)

# Persistence
from .project import ProjectData, DataClass, DataField, ProjectSession

__all__ = [
    # Layout model
    'ClassId',
    'Class',
    'ClassList',
    'Field',
    'FieldKind',
    'FieldLayout',
    'allocate_padding',

    # Errors
    'LayoutError',
    'LayoutInvariantError',
    'UnsupportedGeneratorError',

    # Persistence
    'ProjectData',
    'DataClass',
    'DataField',
    'ProjectSession',
]
