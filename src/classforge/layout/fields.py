"""
Field kinds and fields of a class layout.

A field is a closed tagged variant: its behaviour is selected by its
`FieldKind`, never by subclassing. Only `Ptr` fields may reference another
class, and only `Padding` fields carry their own byte length.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Optional

from .types import ClassId

if TYPE_CHECKING:
    from .classes import ClassList
    from .generator import Generator


POINTER_SIZE = 8
"""Native pointer width of the inspected process (64-bit targets)."""

PADDING_BLOCKS: tuple[int, ...] = (8, 4, 2, 1)
"""Block sizes used to split a gap, largest first."""


class FieldKind(Enum):
    """Byte-layout category of a field.

    The enum value is the tag written to project files.
    """

    BOOL = "Bool"
    U8 = "U8"
    U16 = "U16"
    U32 = "U32"
    U64 = "U64"
    I8 = "I8"
    I16 = "I16"
    I32 = "I32"
    I64 = "I64"
    F32 = "F32"
    F64 = "F64"

    UNK8 = "Unk8"
    """Typeless placeholder, used until the real type of a byte is known."""

    UNK16 = "Unk16"
    UNK32 = "Unk32"
    UNK64 = "Unk64"

    PTR = "Ptr"
    """Native-width pointer, optionally typed with a target class."""

    STR_PTR = "StrPtr"
    """Pointer interpreted as a C string."""

    PADDING = "Padding"
    """Opaque filler; the length is stored on the field."""

    @property
    def size(self) -> int:
        """Fixed byte size of the kind (0 for `PADDING`, whose size is per field)."""
        return _KIND_SIZES[self]

    @property
    def is_pointer(self) -> bool:
        return self in (FieldKind.PTR, FieldKind.STR_PTR)

    @classmethod
    def from_tag(cls, tag: str) -> Optional["FieldKind"]:
        """Look up a kind by its persisted tag, None if unknown."""
        try:
            return cls(tag)
        except ValueError:
            return None


_KIND_SIZES: dict[FieldKind, int] = {
    FieldKind.BOOL: 1,
    FieldKind.U8: 1,
    FieldKind.U16: 2,
    FieldKind.U32: 4,
    FieldKind.U64: 8,
    FieldKind.I8: 1,
    FieldKind.I16: 2,
    FieldKind.I32: 4,
    FieldKind.I64: 8,
    FieldKind.F32: 4,
    FieldKind.F64: 8,
    FieldKind.UNK8: 1,
    FieldKind.UNK16: 2,
    FieldKind.UNK32: 4,
    FieldKind.UNK64: 8,
    FieldKind.PTR: POINTER_SIZE,
    FieldKind.STR_PTR: POINTER_SIZE,
    FieldKind.PADDING: 0,
}


@dataclass(frozen=True)
class Field:
    """One member of a class.

    Attributes:
        name: Declared member name
        kind: Layout category of the member
        length: Byte length, only for `PADDING` fields
        target_class: Class the pointer points at, only for `PTR` fields.
            None means an untyped (raw) pointer.
    """

    name: str
    kind: FieldKind
    length: int = 0
    target_class: Optional[ClassId] = None

    def __post_init__(self) -> None:
        if self.kind is FieldKind.PADDING:
            if self.length <= 0:
                raise ValueError(f"Padding field needs a positive length, got {self.length}")
        elif self.length:
            raise ValueError(f"Only padding fields carry a length, got {self.kind.value}")

        if self.target_class is not None and self.kind is not FieldKind.PTR:
            raise ValueError(f"{self.kind.value} field cannot reference a class")

    @classmethod
    def padding(cls, length: int, name: str = "") -> "Field":
        return cls(name=name, kind=FieldKind.PADDING, length=length)

    @classmethod
    def pointer(cls, name: str, target_class: Optional[ClassId] = None) -> "Field":
        return cls(name=name, kind=FieldKind.PTR, target_class=target_class)

    @property
    def size(self) -> int:
        if self.kind is FieldKind.PADDING:
            return self.length
        return self.kind.size

    def renamed(self, name: str) -> "Field":
        return replace(self, name=name)

    def target_name(self, classes: "ClassList") -> Optional[str]:
        """Name of the referenced class, None for raw pointers and non-pointers."""
        if self.target_class is None:
            return None
        return classes.class_name(self.target_class)

    def codegen(self, generator: "Generator", classes: "ClassList") -> None:
        """Report this field to a generator.

        Pointer fields resolve their target through `classes` and pass the
        target name as metadata; padding fields pass their length.

        Args:
            generator: Receiver of the field description
            classes: Read-only view of the class list for name resolution
        """
        metadata: Optional[str] = None
        if self.kind is FieldKind.PTR:
            metadata = self.target_name(classes)
        elif self.kind is FieldKind.PADDING:
            metadata = str(self.length)

        generator.add_field(self.name, self.kind, self.size, metadata)

    def declaration(self, classes: "ClassList") -> str:
        """Short textual declaration, e.g. ``Ptr<Player> next``."""
        if self.kind is FieldKind.PADDING:
            type_text = f"Padding[{self.length}]"
        elif self.kind is FieldKind.PTR:
            target = self.target_name(classes)
            type_text = f"Ptr<{target}>" if target else "Ptr"
        else:
            type_text = self.kind.value

        return f"{type_text} {self.name}" if self.name else type_text


def allocate_padding(gap: int) -> list[Field]:
    """Cover `gap` bytes with the fewest padding fields.

    The gap is split greedily over `PADDING_BLOCKS`, largest block first,
    so 13 bytes become padding of 8, 4 and 1 bytes in that order.

    Args:
        gap: Number of bytes to cover, must be positive

    Returns:
        Ordered padding fields whose sizes sum to `gap`

    Raises:
        ValueError: If gap is not positive
    """
    if gap <= 0:
        raise ValueError(f"Padding gap must be positive, got {gap}")

    fields: list[Field] = []
    remaining = gap
    for block in PADDING_BLOCKS:
        while remaining >= block:
            fields.append(Field.padding(block))
            remaining -= block

    return fields
