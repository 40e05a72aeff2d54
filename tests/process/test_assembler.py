"""Tests for the document assembler."""

import pytest

from dxfjson.models import Entity, Point3D, RawRecord, Section, Tag, WarningKind
from dxfjson.process.assembler import DocumentAssembler, header_value, header_variables


def record(*pairs) -> RawRecord:
    return RawRecord(tokens=tuple(Tag(code, value) for code, value in pairs))


def insert(name: str, handle: str = "2F") -> Entity:
    return Entity(kind="INSERT", handle=handle, geometry={"name": name}, line=12)


def block(name: str, *children) -> Entity:
    return Entity(kind="BLOCK", geometry={"name": name}, children=tuple(children))


class TestHeaderVariables:
    def test_scalar_value(self):
        assert header_value((Tag(1, "AC1015"),)) == "AC1015"

    def test_point_value(self):
        assert header_value((Tag(10, 1.0), Tag(20, 2.0), Tag(30, 3.0))) == Point3D(1.0, 2.0, 3.0)

    def test_2d_point_value(self):
        assert header_value((Tag(10, 1.0), Tag(20, 2.0))) == Point3D(1.0, 2.0, 0.0)

    def test_multiple_values(self):
        assert header_value((Tag(1, "a"), Tag(70, 3))) == ("a", 3)

    def test_missing_value(self):
        assert header_value(()) is None

    def test_header_section(self):
        section = Section(
            "HEADER",
            (record((9, "$ACADVER"), (1, "AC1015")), record((9, "$LIMCHECK"), (70, 0)), record((999, "x"))),
        )

        assert header_variables(section) == {"$ACADVER": "AC1015", "$LIMCHECK": 0}


class TestDocumentAssembler:
    """Test DocumentAssembler."""

    def test_sections_keep_order(self):
        sections = [Section("ENTITIES"), Section("HEADER"), Section("OBJECTS")]

        document = DocumentAssembler().assemble(sections)

        assert [section.name for section in document.sections] == ["ENTITIES", "HEADER", "OBJECTS"]
        assert document.header == {}
        assert document.warnings == ()

    def test_header_is_read_only(self):
        sections = [Section("HEADER", (record((9, "$ACADVER"), (1, "AC1015")),))]

        document = DocumentAssembler().assemble(sections)

        assert document.header == {"$ACADVER": "AC1015"}
        with pytest.raises(TypeError):
            document.header["$ACADVER"] = "AC1032"

    def test_unresolved_block_reference(self):
        sections = [Section("BLOCKS", (block("WINDOW"),)), Section("ENTITIES", (insert("DOOR"),))]

        document = DocumentAssembler().assemble(sections)

        assert len(document.warnings) == 1
        warning = document.warnings[0]
        assert warning.kind is WarningKind.UNRESOLVED_BLOCK_REFERENCE
        assert warning.name == "DOOR"
        assert warning.handle == "2F"
        assert warning.line == 12

    def test_resolved_block_reference(self):
        sections = [Section("BLOCKS", (block("DOOR"),)), Section("ENTITIES", (insert("DOOR"),))]

        assert DocumentAssembler().assemble(sections).warnings == ()

    def test_nested_insert_is_validated(self):
        sections = [Section("BLOCKS", (block("DOOR", insert("HANDLE", "40")),))]

        document = DocumentAssembler().assemble(sections)

        assert [warning.name for warning in document.warnings] == ["HANDLE"]

    def test_no_validation_without_blocks_section(self):
        document = DocumentAssembler().assemble([Section("ENTITIES", (insert("DOOR"),))])

        assert document.warnings == ()

    def test_builder_warnings_come_first(self):
        sections = [Section("BLOCKS"), Section("ENTITIES", (insert("DOOR"),))]
        earlier = DocumentAssembler().assemble(sections).warnings[0]

        document = DocumentAssembler().assemble(sections, [earlier])

        assert len(document.warnings) == 2
        assert document.warnings[0] is earlier
