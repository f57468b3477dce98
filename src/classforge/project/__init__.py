"""Project persistence: flat project data, its text form and editing sessions."""

from .models import CLASS_ALIGNMENT, DataClass, DataField, ProjectData, ProjectDataGenerator
from .schema import ProjectSchema
from .codec import PROJECT_FILE_SUFFIX, decode_project, encode_project
from .session import ProjectSession

__all__ = [
    "CLASS_ALIGNMENT",
    "DataClass",
    "DataField",
    "ProjectData",
    "ProjectDataGenerator",
    "ProjectSchema",
    "PROJECT_FILE_SUFFIX",
    "decode_project",
    "encode_project",
    "ProjectSession",
]
