"""
Serializable project data.

`ProjectData` is a flat mirror of a `ClassList`: fields carry explicit
offsets and pointers reference classes by name instead of by id. It is
built by `ProjectData.store` for saving and turned back into a class list
by `ProjectData.load`, which re-creates padding and resolves pointers.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from ..layout.classes import ClassList
from ..layout.fields import Field, FieldKind, allocate_padding
from ..layout.generator import Generator
from ..layout.types import ClassId, LayoutInvariantError
from .codec import decode_project, encode_project
from .schema import ProjectSchema

logger = logging.getLogger(__name__)

CLASS_ALIGNMENT = 8
"""Loaded classes are padded up to a multiple of this many bytes."""


@dataclass
class DataField:
    """A field with an explicit offset.

    `metadata` holds the target class name of a `Ptr` field and the byte
    length of a `Padding` field; it is None otherwise.
    """

    name: str
    offset: int
    kind: FieldKind
    metadata: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DataField":
        """Create DataField from a validated document entry."""
        metadata = data.get("metadata")
        return cls(
            name=str(data["name"]),
            offset=int(data["offset"]),
            kind=FieldKind(data["kind"]),
            metadata=str(metadata) if metadata is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "offset": self.offset,
            "kind": self.kind.value,
        }
        if self.metadata is not None:
            result["metadata"] = self.metadata
        return result


@dataclass
class DataClass:
    """A class as stored in a project file."""

    name: str
    fields: list[DataField] = field(default_factory=lambda: [])

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DataClass":
        return cls(
            name=str(data["name"]),
            fields=[DataField.from_dict(f) for f in data["fields"]],
        )

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "fields": [f.to_dict() for f in self.fields]}


class ProjectDataGenerator(Generator):
    """Generator that flattens classes into `DataClass` entries."""

    def __init__(self) -> None:
        self.classes: list[DataClass] = []
        self.offset = 0

    def begin_class(self, name: str) -> None:
        self.classes.append(DataClass(name=name))

    def add_field(
        self, name: str, kind: FieldKind, size: int, metadata: Optional[str]
    ) -> None:
        self.classes[-1].fields.append(
            DataField(name=name, offset=self.offset, kind=kind, metadata=metadata)
        )
        self.offset += size

    def add_offset(self, offset: int) -> None:
        self.offset += offset

    def end_class(self) -> None:
        self.offset = 0


@dataclass
class ProjectData:
    """Flat, name-addressed project contents."""

    classes: list[DataClass] = field(default_factory=lambda: [])

    # === CONVERSION FROM/TO CLASS LIST ===

    @classmethod
    def store(cls, classes: ClassList) -> "ProjectData":
        """Flatten a class list.

        Args:
            classes: Class list to store, left unchanged

        Returns:
            ProjectData with one DataClass per class, in list order

        Raises:
            LayoutInvariantError: If a pointer references a class outside the list
        """
        classes.check_integrity()

        generator = ProjectDataGenerator()
        generator.run(classes)

        logger.debug(f"Stored {len(generator.classes)} class(es)")
        return cls(classes=generator.classes)

    def load(self) -> ClassList:
        """Rebuild a class list.

        All class names are registered first so pointers can reference
        classes declared later, the class itself, or each other. Fields are
        then placed in offset order; gaps are filled with padding, pointers
        to unknown classes create empty placeholder classes, and every class
        is padded to `CLASS_ALIGNMENT` bytes.

        Returns:
            A new ClassList
        """
        class_list = ClassList()

        for data_class in self.classes:
            class_list.add_empty_class(data_class.name)

        filled: set[str] = set()
        for data_class in self.classes:
            if data_class.name in filled:
                logger.warning(f"Skipping duplicate class '{data_class.name}'")
                continue
            filled.add(data_class.name)
            self._fill_class(class_list, data_class)

        logger.debug(f"Loaded {len(class_list)} class(es)")
        return class_list

    @staticmethod
    def _fill_class(class_list: ClassList, data_class: DataClass) -> None:
        cls = class_list.by_name(data_class.name)
        if cls is None:
            raise LayoutInvariantError(f"Class '{data_class.name}' was not pre-registered")

        current_offset = 0
        for data_field in sorted(data_class.fields, key=lambda f: f.offset):
            field_offset = data_field.offset

            if field_offset < current_offset:
                logger.warning(
                    f"Dropping field '{data_class.name}.{data_field.name}' at 0x{field_offset:X}: "
                    f"overlaps previous field ending at 0x{current_offset:X}"
                )
                continue

            if data_field.kind is FieldKind.PADDING:
                length = _padding_length(data_field.metadata)
                if length is None:
                    # span is recovered as a gap before the next field
                    continue
                new_field = Field.padding(length, name=data_field.name)
            elif data_field.kind is FieldKind.PTR:
                target = _resolve_pointer_target(class_list, data_field)
                new_field = Field.pointer(data_field.name, target)
            else:
                new_field = Field(name=data_field.name, kind=data_field.kind)

            if field_offset > current_offset:
                cls.fields.extend(allocate_padding(field_offset - current_offset))

            cls.fields.append(new_field)
            current_offset = field_offset + new_field.size

        if current_offset % CLASS_ALIGNMENT != 0:
            cls.fields.extend(
                allocate_padding(CLASS_ALIGNMENT - current_offset % CLASS_ALIGNMENT)
            )

    # === TEXT FORM ===

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProjectData":
        """Create ProjectData from a validated document."""
        return cls(classes=[DataClass.from_dict(c) for c in data["classes"]])

    def to_dict(self) -> dict[str, Any]:
        return {"classes": [c.to_dict() for c in self.classes]}

    @classmethod
    def from_str(cls, text: str | bytes) -> Optional["ProjectData"]:
        """Parse project text.

        Returns:
            ProjectData, or None if the text is malformed
        """
        document = decode_project(text)
        if document is None:
            return None

        errors = ProjectSchema.validate_project(document)
        if errors:
            error_msg = "\n  - ".join(errors)
            logger.error(f"Invalid project document:\n  - {error_msg}")
            return None

        return cls.from_dict(document)

    def to_string(self) -> str:
        return encode_project(self.to_dict())


def _padding_length(metadata: Optional[str]) -> Optional[int]:
    if metadata is None:
        return None
    try:
        length = int(metadata)
    except ValueError:
        logger.warning(f"Ignoring padding with invalid length {metadata!r}")
        return None
    return length if length > 0 else None


def _resolve_pointer_target(class_list: ClassList, data_field: DataField) -> ClassId:
    """Find or create the class a pointer field references.

    Blank metadata cannot name a class and counts as an untyped pointer.
    """
    if data_field.metadata and data_field.metadata.strip():
        target = class_list.by_name(data_field.metadata)
        if target is not None:
            return target.id
        logger.info(f"Creating placeholder class '{data_field.metadata}'")
        return class_list.add_class(data_field.metadata)

    name = class_list.unique_name(f"C{data_field.offset:X}")
    logger.info(f"Creating placeholder class '{name}' for untyped pointer '{data_field.name}'")
    return class_list.add_class(name)
