"""Unit tests for classes, class editing and the class list arena."""

import pytest

from classforge.layout import (
    Class,
    ClassId,
    ClassList,
    Field,
    FieldKind,
    LayoutInvariantError,
)


def sizes(cls: Class) -> list[int]:
    return [f.size for f in cls.fields]


class TestClassList:
    """Test class registration and lookups."""

    def test_add_class_returns_fresh_ids(self) -> None:
        """Test every new class gets its own id."""
        classes = ClassList()
        a = classes.add_class("A")
        b = classes.add_class("B")

        assert a != b
        assert len(classes) == 2
        assert classes.by_id(a) is classes.by_name("A")
        assert classes.by_name("B") is not None
        assert classes.by_name("B").fields == []  # type: ignore[union-attr]

    def test_duplicate_name_returns_existing_id(self) -> None:
        """Test class names stay unique."""
        classes = ClassList()
        first = classes.add_class("A")
        assert classes.add_class("A") == first
        assert classes.add_empty_class("A") == first
        assert len(classes) == 1

    def test_missing_lookups(self) -> None:
        """Test lookups of unknown classes return None."""
        classes = ClassList()
        assert classes.by_name("Nope") is None
        assert classes.by_id(ClassId(42)) is None
        assert classes.by_id_mut(ClassId(42)) is None
        assert classes.class_name(ClassId(42)) is None

    def test_ids_are_not_reused(self) -> None:
        """Test removed ids are never handed out again."""
        classes = ClassList()
        a = classes.add_class("A")
        classes.remove_class(a)
        b = classes.add_class("A")

        assert b != a
        assert a not in classes

    def test_remove_class_demotes_pointers(self) -> None:
        """Test pointers to a removed class become raw pointers."""
        classes = ClassList()
        a = classes.add_class("A")
        b = classes.add_class("B")
        classes.by_id(a).append_field(Field.pointer("to_b", b))  # type: ignore[union-attr]

        removed = classes.remove_class(b)

        assert removed is not None and removed.name == "B"
        assert classes.by_id(a).fields[0].target_class is None  # type: ignore[union-attr]
        assert classes.by_name("B") is None
        classes.check_integrity()

    def test_remove_unknown_class(self) -> None:
        """Test removing an unknown id is not an error."""
        assert ClassList().remove_class(ClassId(3)) is None

    def test_rename_class(self) -> None:
        """Test renames keep the name index and pointer targets valid."""
        classes = ClassList()
        a = classes.add_class("A")
        b = classes.add_class("B")
        classes.by_id(b).append_field(Field.pointer("to_a", a))  # type: ignore[union-attr]

        assert classes.rename_class(a, "Actor")
        assert classes.by_name("Actor") is classes.by_id(a)
        assert classes.by_name("A") is None
        assert classes.by_id(b).fields[0].target_name(classes) == "Actor"  # type: ignore[union-attr]

    def test_rename_refused(self) -> None:
        """Test renaming to a taken name or an unknown id fails."""
        classes = ClassList()
        a = classes.add_class("A")
        classes.add_class("B")

        assert not classes.rename_class(a, "B")
        assert not classes.rename_class(ClassId(99), "C")
        assert classes.class_name(a) == "A"

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name_rejected(self, name: str) -> None:
        """Test blank names can neither be added nor given by a rename."""
        classes = ClassList()
        a = classes.add_class("A")

        with pytest.raises(ValueError):
            classes.add_class(name)
        assert not classes.rename_class(a, name)
        assert classes.class_name(a) == "A"
        assert len(classes) == 1

    def test_unique_name(self) -> None:
        """Test suffixes are added only when needed."""
        classes = ClassList()
        assert classes.unique_name("C10") == "C10"
        classes.add_class("C10")
        classes.add_class("C10_2")
        assert classes.unique_name("C10") == "C10_3"

    def test_iteration_keeps_insertion_order(self) -> None:
        """Test classes iterate in the order they were added."""
        classes = ClassList()
        for name in ("Z", "A", "M"):
            classes.add_class(name)
        assert [cls.name for cls in classes] == ["Z", "A", "M"]

    def test_check_integrity_detects_dangling_pointer(self) -> None:
        """Test dangling pointers are invariant violations."""
        classes = ClassList()
        a = classes.add_class("A")
        classes.by_id(a).append_field(Field.pointer("p", ClassId(7)))  # type: ignore[union-attr]

        with pytest.raises(LayoutInvariantError):
            classes.check_integrity()


class TestClassLayout:
    """Test derived offsets and layout rows."""

    def test_offsets_and_size(self, player_classes: ClassList) -> None:
        """Test offsets are the running sum of field sizes."""
        player = player_classes.by_name("Player")
        assert player is not None
        assert player.offsets() == [0, 4, 8, 16]
        assert player.size == 24
        assert player.offset_of(2) == 8

    def test_field_at(self, player_classes: ClassList) -> None:
        """Test byte offsets map to the covering field."""
        player = player_classes.by_name("Player")
        assert player is not None
        assert player.field_at(0) == 0
        assert player.field_at(5) == 1
        assert player.field_at(15) == 2
        assert player.field_at(24) is None

    def test_layout_rows(self, player_classes: ClassList) -> None:
        """Test layout rows carry offsets and target names."""
        player = player_classes.by_name("Player")
        assert player is not None
        rows = player.layout(player_classes)

        assert [row.offset for row in rows] == [0, 4, 8, 16]
        assert rows[2].target == "Player"
        assert rows[3].target == "Vec3"
        assert rows[-1].end == player.size


class TestClassEditing:
    """Test the editing commands on a class."""

    def make_class(self, *kinds: FieldKind) -> Class:
        cls = Class(ClassId(0), "Test")
        for idx, kind in enumerate(kinds):
            cls.append_field(Field(f"f{idx}", kind))
        return cls

    def test_add_bytes(self) -> None:
        """Test bytes are appended as minimal padding."""
        cls = self.make_class(FieldKind.U8)
        cls.add_bytes(13)
        assert sizes(cls) == [1, 8, 4, 1]

    def test_insert_bytes(self) -> None:
        """Test padding is spliced in before the given field."""
        cls = self.make_class(FieldKind.U32, FieldKind.U32)
        cls.insert_bytes(1, 2)
        assert sizes(cls) == [4, 2, 4]
        assert cls.fields[1].kind is FieldKind.PADDING

        cls.insert_bytes(3, 1)
        assert sizes(cls) == [4, 2, 4, 1]

    def test_insert_bytes_out_of_range(self) -> None:
        """Test inserting past the end is rejected."""
        cls = self.make_class(FieldKind.U8)
        with pytest.raises(IndexError):
            cls.insert_bytes(2, 4)

    def test_remove_fields(self) -> None:
        """Test a run of fields is removed."""
        cls = self.make_class(FieldKind.U8, FieldKind.U16, FieldKind.U32, FieldKind.U64)
        removed = cls.remove_fields(1, 2)

        assert [f.name for f in removed] == ["f1", "f2"]
        assert [f.name for f in cls.fields] == ["f0", "f3"]

    def test_remove_fields_clamps_at_end(self) -> None:
        """Test removing more fields than remain stops at the end."""
        cls = self.make_class(FieldKind.U8, FieldKind.U8)
        cls.remove_fields(1, 10)
        assert [f.name for f in cls.fields] == ["f0"]

    def test_remove_fields_invalid(self) -> None:
        """Test invalid removal arguments."""
        cls = self.make_class(FieldKind.U8)
        with pytest.raises(ValueError):
            cls.remove_fields(0, 0)
        with pytest.raises(IndexError):
            cls.remove_fields(1, 1)

    def test_change_kind_smaller_keeps_offsets(self) -> None:
        """Test a smaller kind leaves padding behind it."""
        cls = Class(ClassId(0), "Test")
        cls.add_bytes(8)
        cls.append_field(Field("tail", FieldKind.U8))

        cls.change_kind(0, FieldKind.U16)

        assert cls.fields[0] == Field("field_0x0", FieldKind.U16)
        assert sizes(cls) == [2, 4, 2, 1]
        assert cls.offset_of(3) == 8

    def test_change_kind_larger_absorbs_following(self) -> None:
        """Test a larger kind swallows the fields it now covers."""
        cls = self.make_class(FieldKind.U8, FieldKind.U8, FieldKind.U16, FieldKind.U32)
        cls.change_kind(0, FieldKind.U32)

        assert [f.name for f in cls.fields] == ["f0", "f3"]
        assert cls.fields[0].kind is FieldKind.U32
        assert cls.size == 8

    def test_change_kind_overshoot_is_padded(self) -> None:
        """Test bytes over-covered by a larger kind are padded back."""
        cls = self.make_class(FieldKind.U8, FieldKind.U32, FieldKind.U8)
        cls.change_kind(0, FieldKind.U16)

        assert sizes(cls) == [2, 2, 1, 1]
        assert cls.fields[-1].name == "f2"
        assert cls.offset_of(3) == 5

    def test_change_kind_grows_class_at_end(self) -> None:
        """Test the last field may grow the class."""
        cls = self.make_class(FieldKind.U8)
        cls.change_kind(0, FieldKind.PTR)
        assert sizes(cls) == [8]
        assert cls.fields[0].target_class is None

    def test_change_kind_to_padding_rejected(self) -> None:
        """Test padding is not a selectable kind."""
        cls = self.make_class(FieldKind.U8)
        with pytest.raises(ValueError):
            cls.change_kind(0, FieldKind.PADDING)

    def test_rename_field_and_pointer_target(self) -> None:
        """Test in-place field edits."""
        cls = self.make_class(FieldKind.PTR, FieldKind.U8)
        cls.rename_field(0, "owner")
        cls.set_pointer_target(0, ClassId(5))

        assert cls.fields[0] == Field.pointer("owner", ClassId(5))
        with pytest.raises(ValueError):
            cls.set_pointer_target(1, ClassId(5))
