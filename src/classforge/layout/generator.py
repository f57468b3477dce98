"""
Generator protocol fed by the field code-generation hook.

A generator receives a flat description of every class (begin, fields,
end). Project storage and declaration listing are both generators; no
generator currently knows how to emit compilable source, so `finalize`
is unsupported by default.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .fields import FieldKind
from .types import UnsupportedGeneratorError

if TYPE_CHECKING:
    from .classes import ClassList


class Generator(ABC):
    """Receiver of class layout descriptions."""

    @abstractmethod
    def begin_class(self, name: str) -> None:
        """Start a new class."""

    @abstractmethod
    def add_field(
        self, name: str, kind: FieldKind, size: int, metadata: Optional[str]
    ) -> None:
        """Add a field to the current class.

        Args:
            name: Field name
            kind: Field kind
            size: Byte size of the field
            metadata: Pointer target name or padding length, if any
        """

    def add_offset(self, offset: int) -> None:
        """Skip `offset` bytes without emitting a field."""

    @abstractmethod
    def end_class(self) -> None:
        """Finish the current class."""

    def finalize(self) -> str:
        """Produce the final output text."""
        raise UnsupportedGeneratorError(
            f"{self.__class__.__name__} cannot produce final output"
        )

    def run(self, classes: "ClassList") -> None:
        """Feed every class of `classes` through this generator in order."""
        for cls in classes:
            self.begin_class(cls.name)
            for f in cls.fields:
                f.codegen(self, classes)
            self.end_class()


@dataclass
class Declaration:
    """A field as seen by a declaration emitter."""

    name: str
    kind: FieldKind
    target: Optional[str] = None


@dataclass
class DeclarationCollector(Generator):
    """Collects, per class, the ordered field declarations.

    This is the input a future source emitter will work from. Padding is
    reported as offset skips rather than declarations.
    """

    classes: dict[str, list[Declaration]] = field(default_factory=lambda: {})
    _current: Optional[list[Declaration]] = field(default=None, init=False, repr=False)

    def begin_class(self, name: str) -> None:
        self._current = self.classes.setdefault(name, [])

    def add_field(
        self, name: str, kind: FieldKind, size: int, metadata: Optional[str]
    ) -> None:
        if self._current is None:
            raise RuntimeError("add_field() called outside of a class")

        if kind is FieldKind.PADDING:
            self.add_offset(size)
            return

        target = metadata if kind is FieldKind.PTR else None
        self._current.append(Declaration(name=name, kind=kind, target=target))

    def end_class(self) -> None:
        self._current = None
