"""Unit tests for field kinds, fields and the padding allocator."""

import pytest

from classforge.layout import (
    ClassId,
    ClassList,
    Declaration,
    DeclarationCollector,
    Field,
    FieldKind,
    Generator,
    UnsupportedGeneratorError,
    allocate_padding,
)


class TestFieldKind:
    """Test field kind sizes and tags."""

    @pytest.mark.parametrize(
        "kind, size",
        [
            (FieldKind.BOOL, 1),
            (FieldKind.U16, 2),
            (FieldKind.I32, 4),
            (FieldKind.F64, 8),
            (FieldKind.UNK32, 4),
            (FieldKind.PTR, 8),
            (FieldKind.STR_PTR, 8),
        ],
    )
    def test_fixed_sizes(self, kind: FieldKind, size: int) -> None:
        """Test each kind reports its byte size."""
        assert kind.size == size

    def test_from_tag(self) -> None:
        """Test lookup by persisted tag."""
        assert FieldKind.from_tag("StrPtr") is FieldKind.STR_PTR
        assert FieldKind.from_tag("Unk64") is FieldKind.UNK64
        assert FieldKind.from_tag("u32") is None

    def test_pointer_kinds(self) -> None:
        """Test only Ptr and StrPtr are pointers."""
        pointers = {kind for kind in FieldKind if kind.is_pointer}
        assert pointers == {FieldKind.PTR, FieldKind.STR_PTR}


class TestField:
    """Test field construction rules."""

    def test_padding_size_is_length(self) -> None:
        """Test padding fields carry their own size."""
        assert Field.padding(12).size == 12

    def test_padding_needs_positive_length(self) -> None:
        """Test zero-length padding is rejected."""
        with pytest.raises(ValueError):
            Field.padding(0)

    def test_only_padding_has_length(self) -> None:
        """Test non-padding fields cannot carry a length."""
        with pytest.raises(ValueError):
            Field("x", FieldKind.U32, length=4)

    def test_only_ptr_has_target(self) -> None:
        """Test only Ptr fields reference classes."""
        with pytest.raises(ValueError):
            Field("name", FieldKind.STR_PTR, target_class=ClassId(0))
        with pytest.raises(ValueError):
            Field("x", FieldKind.U64, target_class=ClassId(0))

    def test_fields_are_immutable(self) -> None:
        """Test fields are replaced, not mutated."""
        f = Field("x", FieldKind.U8)
        with pytest.raises(AttributeError):
            f.name = "y"  # type: ignore[misc]
        assert f.renamed("y") == Field("y", FieldKind.U8)

    def test_declaration(self) -> None:
        """Test textual declaration fragments."""
        classes = ClassList()
        node_id = classes.add_class("Node")

        assert Field("health", FieldKind.I32).declaration(classes) == "I32 health"
        assert Field.pointer("next", node_id).declaration(classes) == "Ptr<Node> next"
        assert Field.pointer("raw").declaration(classes) == "Ptr raw"
        assert Field.padding(4).declaration(classes) == "Padding[4]"


class TestAllocatePadding:
    """Test the padding allocator."""

    def test_thirteen_bytes(self) -> None:
        """Test 13 bytes split into 8, 4, 1."""
        fields = allocate_padding(13)
        assert [f.size for f in fields] == [8, 4, 1]
        assert all(f.kind is FieldKind.PADDING for f in fields)

    def test_single_byte(self) -> None:
        """Test one byte gives one field."""
        fields = allocate_padding(1)
        assert len(fields) == 1
        assert fields[0].size == 1

    def test_large_gap_uses_eight_byte_blocks(self) -> None:
        """Test large gaps are covered by 8-byte blocks plus the remainder."""
        sizes = [f.size for f in allocate_padding(30)]
        assert sizes == [8, 8, 8, 4, 2]
        assert sum(sizes) == 30

    @pytest.mark.parametrize("gap", [0, -3])
    def test_invalid_gap(self, gap: int) -> None:
        """Test non-positive gaps are rejected."""
        with pytest.raises(ValueError):
            allocate_padding(gap)


class TestGenerators:
    """Test the code-generation hook and generators."""

    def test_declaration_collector(self, player_classes: ClassList) -> None:
        """Test collected declarations skip padding and resolve targets."""
        collector = DeclarationCollector()
        collector.run(player_classes)

        assert collector.classes["Player"] == [
            Declaration("health", FieldKind.I32),
            Declaration("next", FieldKind.PTR, "Player"),
            Declaration("position", FieldKind.PTR, "Vec3"),
        ]
        assert [d.name for d in collector.classes["Vec3"]] == ["x", "y", "z"]

    def test_codegen_reports_size_and_metadata(self, player_classes: ClassList) -> None:
        """Test fields describe themselves to a generator."""
        seen: list[tuple[str, FieldKind, int, object]] = []

        class Recorder(Generator):
            def begin_class(self, name: str) -> None:
                pass

            def add_field(self, name, kind, size, metadata) -> None:  # type: ignore[no-untyped-def]
                seen.append((name, kind, size, metadata))

            def end_class(self) -> None:
                pass

        player = player_classes.by_name("Player")
        assert player is not None
        for f in player.fields:
            f.codegen(Recorder(), player_classes)

        assert seen == [
            ("health", FieldKind.I32, 4, None),
            ("", FieldKind.PADDING, 4, "4"),
            ("next", FieldKind.PTR, 8, "Player"),
            ("position", FieldKind.PTR, 8, "Vec3"),
        ]

    def test_finalize_is_unsupported(self, player_classes: ClassList) -> None:
        """Test no generator emits final source output."""
        collector = DeclarationCollector()
        collector.run(player_classes)

        with pytest.raises(UnsupportedGeneratorError):
            collector.finalize()
        with pytest.raises(NotImplementedError):
            collector.finalize()
