"""
Classes and the class list arena.

A `Class` is an ordered sequence of fields; the byte offset of a field is
the sum of the sizes of the fields before it. The `ClassList` owns every
class of a project and hands out `ClassId` keys that pointer fields use to
reference other classes, so cyclic class graphs need no special handling.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Iterator, Optional

from .fields import Field, FieldKind, allocate_padding
from .types import ClassId, LayoutInvariantError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldLayout:
    """A field annotated with its position, as shown to renderers.

    Attributes:
        index: Position of the field in its class
        offset: Byte offset from the start of the class
        field: The field itself
        target: Resolved pointer target name (None for non-pointers/raw pointers)
    """

    index: int
    offset: int
    field: Field
    target: Optional[str] = None

    @property
    def size(self) -> int:
        return self.field.size

    @property
    def end(self) -> int:
        return self.offset + self.field.size


@dataclass
class Class:
    """A named, ordered collection of fields.

    Use `ClassList.rename_class` to rename a class that belongs to a list,
    so the name index stays in sync.

    Example:
        >>> player = Class(ClassId(0), "Player")
        >>> player.append_field(Field("health", FieldKind.I32))
        >>> player.add_bytes(4)
        >>> player.size
        8
    """

    id: ClassId
    name: str
    fields: list[Field] = field(default_factory=lambda: [])

    @property
    def size(self) -> int:
        """Total byte size of the class."""
        return sum(f.size for f in self.fields)

    def offsets(self) -> list[int]:
        """Byte offset of every field, in field order."""
        result: list[int] = []
        offset = 0
        for f in self.fields:
            result.append(offset)
            offset += f.size
        return result

    def offset_of(self, index: int) -> int:
        """Byte offset of the field at `index`."""
        self._check_index(index)
        return sum(f.size for f in self.fields[:index])

    def field_at(self, offset: int) -> Optional[int]:
        """Index of the field covering byte `offset`, None if out of range."""
        position = 0
        for index, f in enumerate(self.fields):
            if position <= offset < position + f.size:
                return index
            position += f.size
        return None

    def layout(self, classes: Optional["ClassList"] = None) -> list[FieldLayout]:
        """Fields annotated with offsets and resolved pointer targets.

        Args:
            classes: Class list used to resolve pointer target names

        Returns:
            One FieldLayout per field, in byte order
        """
        rows: list[FieldLayout] = []
        offset = 0
        for index, f in enumerate(self.fields):
            target = f.target_name(classes) if classes is not None else None
            rows.append(FieldLayout(index=index, offset=offset, field=f, target=target))
            offset += f.size
        return rows

    # === EDITING ===

    def append_field(self, new_field: Field) -> None:
        self.fields.append(new_field)

    def add_bytes(self, count: int) -> None:
        """Append `count` bytes of padding to the end of the class."""
        self.fields.extend(allocate_padding(count))

    def insert_bytes(self, index: int, count: int) -> None:
        """Insert `count` bytes of padding before the field at `index`.

        `index` may equal the field count to insert at the end.
        """
        if not 0 <= index <= len(self.fields):
            raise IndexError(f"Insert position {index} out of range for class '{self.name}'")
        self.fields[index:index] = allocate_padding(count)

    def remove_fields(self, index: int, count: int) -> list[Field]:
        """Remove up to `count` fields starting at `index`.

        Returns:
            The removed fields
        """
        self._check_index(index)
        if count <= 0:
            raise ValueError(f"Field count must be positive, got {count}")

        removed = self.fields[index:index + count]
        del self.fields[index:index + count]
        return removed

    def rename_field(self, index: int, name: str) -> None:
        self._check_index(index)
        self.fields[index] = self.fields[index].renamed(name)

    def set_pointer_target(self, index: int, target: Optional[ClassId]) -> None:
        """Point the pointer field at `index` to `target` (None for a raw pointer)."""
        self._check_index(index)
        current = self.fields[index]
        if current.kind is not FieldKind.PTR:
            raise ValueError(f"Field '{current.name}' is not a pointer")
        self.fields[index] = replace(current, target_class=target)

    def change_kind(self, index: int, kind: FieldKind) -> None:
        """Replace the kind of the field at `index`, keeping later offsets.

        A smaller kind leaves padding behind the field. A larger kind
        absorbs the following fields; any bytes it over-covers are padded
        back. At the end of the class, the class grows.
        """
        self._check_index(index)
        if kind is FieldKind.PADDING:
            raise ValueError("Use insert_bytes()/add_bytes() to create padding")

        current = self.fields[index]
        name = current.name or f"field_0x{self.offset_of(index):X}"
        new_field = Field(name=name, kind=kind)
        old_size = current.size
        new_size = new_field.size

        end = index + 1
        covered = old_size
        while covered < new_size and end < len(self.fields):
            covered += self.fields[end].size
            end += 1

        replacement = [new_field]
        if covered > new_size:
            replacement.extend(allocate_padding(covered - new_size))

        self.fields[index:end] = replacement

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.fields):
            raise IndexError(f"Field index {index} out of range for class '{self.name}'")


class ClassList:
    """Arena owning every class of a project.

    Classes are kept in insertion order and are addressable by id and by
    name. Ids are handed out once and never reused by the same list.
    Class names are unique: adding a class under a taken name returns the
    existing class id.
    """

    def __init__(self) -> None:
        self._classes: dict[ClassId, Class] = {}
        self._names: dict[str, ClassId] = {}
        self._next_id = 0

    def __iter__(self) -> Iterator[Class]:
        return iter(list(self._classes.values()))

    def __len__(self) -> int:
        return len(self._classes)

    def __contains__(self, class_id: object) -> bool:
        return class_id in self._classes

    def __repr__(self) -> str:
        return f"ClassList({list(self._names)!r})"

    def ids(self) -> list[ClassId]:
        return list(self._classes)

    def classes(self) -> list[Class]:
        return list(self._classes.values())

    def add_class(self, name: str) -> ClassId:
        """Create an empty class named `name`.

        Returns:
            Id of the new class, or of the existing class with that name

        Raises:
            ValueError: If `name` is empty
        """
        if not name.strip():
            raise ValueError("Class name must not be empty")

        existing = self._names.get(name)
        if existing is not None:
            logger.debug(f"Class '{name}' already exists (id {existing})")
            return existing

        class_id = ClassId(self._next_id)
        self._next_id += 1
        self._classes[class_id] = Class(id=class_id, name=name)
        self._names[name] = class_id
        return class_id

    def add_empty_class(self, name: str) -> ClassId:
        """Register a class name before its fields are known."""
        return self.add_class(name)

    def by_id(self, class_id: ClassId) -> Optional[Class]:
        return self._classes.get(class_id)

    by_id_mut = by_id

    def by_name(self, name: str) -> Optional[Class]:
        class_id = self._names.get(name)
        if class_id is None:
            return None
        return self._classes[class_id]

    def class_name(self, class_id: ClassId) -> Optional[str]:
        cls = self._classes.get(class_id)
        return cls.name if cls else None

    def unique_name(self, base: str) -> str:
        """Return `base`, or `base_N` with the smallest free N >= 2."""
        if base not in self._names:
            return base
        suffix = 2
        while f"{base}_{suffix}" in self._names:
            suffix += 1
        return f"{base}_{suffix}"

    def rename_class(self, class_id: ClassId, name: str) -> bool:
        """Rename a class.

        Returns:
            False if the id is unknown, the name is empty or it belongs to
            another class
        """
        cls = self._classes.get(class_id)
        if cls is None:
            return False
        if not name.strip():
            logger.warning(f"Cannot rename '{cls.name}': name is empty")
            return False
        if cls.name == name:
            return True
        if name in self._names:
            logger.warning(f"Cannot rename '{cls.name}' to '{name}': name is taken")
            return False

        del self._names[cls.name]
        cls.name = name
        self._names[name] = class_id
        return True

    def remove_class(self, class_id: ClassId) -> Optional[Class]:
        """Remove a class from the list.

        Pointer fields of other classes that referenced it become raw
        pointers.

        Returns:
            The removed class, None if the id is unknown
        """
        cls = self._classes.pop(class_id, None)
        if cls is None:
            return None
        del self._names[cls.name]

        for other in self._classes.values():
            for index, f in enumerate(other.fields):
                if f.target_class == class_id:
                    other.fields[index] = replace(f, target_class=None)
                    logger.debug(
                        f"Pointer '{other.name}.{f.name}' lost its target '{cls.name}'"
                    )

        return cls

    def check_integrity(self) -> None:
        """Verify the name index and pointer targets.

        Raises:
            LayoutInvariantError: On a stale name index or a dangling pointer
        """
        if len(self._names) != len(self._classes):
            raise LayoutInvariantError("Class name index is out of sync")

        for class_id, cls in self._classes.items():
            if self._names.get(cls.name) != class_id:
                raise LayoutInvariantError(f"Class '{cls.name}' is missing from the name index")
            for f in cls.fields:
                if f.target_class is not None and f.target_class not in self._classes:
                    raise LayoutInvariantError(
                        f"Pointer '{cls.name}.{f.name}' references unknown class id {f.target_class}"
                    )
