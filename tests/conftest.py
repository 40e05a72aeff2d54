"""Pytest configuration and fixtures for dxfjson tests."""

import sys
from pathlib import Path

import pytest

# Add src directory to Python path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


def dxf_text(*pairs) -> str:
    """Build DXF text from (code, value) pairs."""
    lines = []
    for code, value in pairs:
        lines.append(str(code))
        lines.append(str(value))
    return "\n".join(lines) + "\n"


def section(name: str, *pairs) -> tuple:
    return ((0, "SECTION"), (2, name)) + tuple(pairs) + ((0, "ENDSEC"),)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def header_only_dxf():
    """Return a document with a single HEADER variable."""
    return dxf_text(*section("HEADER", (9, "$ACADVER"), (1, "AC1015")), (0, "EOF"))


@pytest.fixture
def line_dxf():
    """Return a document with one LINE entity."""
    return dxf_text(
        *section(
            "ENTITIES",
            (0, "LINE"),
            (5, "1A"),
            (8, "WALLS"),
            (10, "0.0"),
            (20, "0.0"),
            (30, "0.0"),
            (11, "10.0"),
            (21, "5.0"),
            (31, "0.0"),
        ),
        (0, "EOF"),
    )


@pytest.fixture
def unresolved_insert_dxf():
    """Return a document with an INSERT of a block missing from BLOCKS."""
    return dxf_text(
        *section("BLOCKS"),
        *section("ENTITIES", (0, "INSERT"), (5, "2F"), (8, "0"), (2, "DOOR"), (10, "1.0"), (20, "2.0"), (30, "0.0")),
        (0, "EOF"),
    )


@pytest.fixture
def full_dxf():
    """Return a document with header, tables, blocks and nested entities."""
    return dxf_text(
        (999, "written by hand"),
        *section(
            "HEADER",
            (9, "$ACADVER"),
            (1, "AC1015"),
            (9, "$INSBASE"),
            (10, "1.5"),
            (20, "2.5"),
            (30, "0.0"),
            (9, "$LIMCHECK"),
            (70, "0"),
        ),
        *section(
            "TABLES",
            (0, "TABLE"),
            (2, "LAYER"),
            (70, "1"),
            (0, "LAYER"),
            (2, "WALLS"),
            (70, "0"),
            (62, "7"),
            (0, "ENDTAB"),
        ),
        *section(
            "BLOCKS",
            (0, "BLOCK"),
            (5, "20"),
            (8, "0"),
            (2, "DOOR"),
            (70, "0"),
            (10, "0.0"),
            (20, "0.0"),
            (30, "0.0"),
            (0, "LINE"),
            (5, "21"),
            (8, "0"),
            (10, "0.0"),
            (20, "0.0"),
            (30, "0.0"),
            (11, "1.0"),
            (21, "0.0"),
            (31, "0.0"),
            (0, "ENDBLK"),
            (5, "22"),
            (8, "0"),
        ),
        *section(
            "ENTITIES",
            (0, "LINE"),
            (5, "30"),
            (8, "WALLS"),
            (62, "1"),
            (10, "-1.0"),
            (20, "-2.0"),
            (30, "0.0"),
            (11, "4.0"),
            (21, "3.0"),
            (31, "0.5"),
            (0, "POLYLINE"),
            (5, "31"),
            (8, "0"),
            (66, "1"),
            (70, "1"),
            (0, "VERTEX"),
            (5, "32"),
            (8, "0"),
            (10, "0.0"),
            (20, "0.0"),
            (30, "0.0"),
            (0, "VERTEX"),
            (5, "33"),
            (8, "0"),
            (10, "2.0"),
            (20, "0.0"),
            (30, "0.0"),
            (0, "SEQEND"),
            (5, "34"),
            (8, "0"),
            (0, "INSERT"),
            (5, "35"),
            (8, "0"),
            (2, "DOOR"),
            (10, "3.0"),
            (20, "1.0"),
            (30, "0.0"),
            (0, "HATCH"),
            (5, "36"),
            (8, "0"),
            (2, "SOLID"),
        ),
        (0, "EOF"),
    )


@pytest.fixture
def every_kind_dxf():
    """Return a document with one run of every declared entity kind."""
    return dxf_text(
        *section(
            "BLOCKS",
            (0, "BLOCK"),
            (5, "40"),
            (2, "TAGGED"),
            (10, "0.0"),
            (20, "0.0"),
            (30, "0.0"),
            (0, "ATTDEF"),
            (5, "41"),
            (10, "0.0"),
            (20, "1.0"),
            (40, "0.25"),
            (1, "default"),
            (2, "TAG"),
            (3, "Enter tag"),
            (0, "ENDBLK"),
            (5, "42"),
        ),
        *section(
            "ENTITIES",
            (0, "LINE"),
            (5, "50"),
            (10, "0.0"),
            (20, "0.0"),
            (11, "1.0"),
            (21, "1.0"),
            (0, "POINT"),
            (5, "51"),
            (10, "2.5"),
            (20, "-3.5"),
            (0, "CIRCLE"),
            (5, "52"),
            (10, "1.0"),
            (20, "1.0"),
            (40, "2.0"),
            (0, "ARC"),
            (5, "53"),
            (10, "0.0"),
            (20, "0.0"),
            (40, "1.5"),
            (50, "0.0"),
            (51, "90.0"),
            (0, "ELLIPSE"),
            (5, "54"),
            (10, "0.0"),
            (20, "0.0"),
            (11, "3.0"),
            (21, "0.0"),
            (40, "0.5"),
            (0, "TEXT"),
            (5, "55"),
            (10, "1.0"),
            (20, "2.0"),
            (40, "0.5"),
            (1, " spaced text "),
            (0, "MTEXT"),
            (5, "56"),
            (10, "0.0"),
            (20, "5.0"),
            (40, "0.25"),
            (3, "first chunk "),
            (1, "last chunk"),
            (0, "INSERT"),
            (5, "57"),
            (66, "1"),
            (2, "TAGGED"),
            (10, "4.0"),
            (20, "4.0"),
            (0, "ATTRIB"),
            (5, "58"),
            (10, "4.0"),
            (20, "5.0"),
            (40, "0.25"),
            (1, "front"),
            (2, "TAG"),
            (0, "SEQEND"),
            (5, "59"),
            (0, "POLYLINE"),
            (5, "5A"),
            (66, "1"),
            (70, "8"),
            (0, "VERTEX"),
            (5, "5B"),
            (10, "0.0"),
            (20, "0.0"),
            (30, "1.0"),
            (70, "32"),
            (0, "SEQEND"),
            (5, "5C"),
            (0, "LWPOLYLINE"),
            (5, "5D"),
            (90, "2"),
            (70, "0"),
            (10, "0.0"),
            (20, "0.0"),
            (42, "0.5"),
            (10, "2.0"),
            (20, "0.0"),
            (0, "3DFACE"),
            (5, "5E"),
            (10, "0.0"),
            (20, "0.0"),
            (11, "1.0"),
            (21, "0.0"),
            (12, "1.0"),
            (22, "1.0"),
            (13, "0.0"),
            (23, "1.0"),
            (0, "SOLID"),
            (5, "5F"),
            (10, "0.0"),
            (20, "0.0"),
            (11, "1.0"),
            (21, "0.0"),
            (12, "0.0"),
            (22, "1.0"),
            (0, "TRACE"),
            (5, "60"),
            (10, "0.0"),
            (20, "0.0"),
            (11, "2.0"),
            (21, "0.0"),
            (12, "0.0"),
            (22, "0.5"),
            (13, "2.0"),
            (23, "0.5"),
            (0, "SPLINE"),
            (5, "61"),
            (71, "2"),
            (40, "0.0"),
            (40, "0.0"),
            (40, "0.0"),
            (40, "1.0"),
            (40, "1.0"),
            (40, "1.0"),
            (10, "0.0"),
            (20, "0.0"),
            (10, "1.0"),
            (20, "2.0"),
            (10, "2.0"),
            (20, "0.0"),
            (0, "RAY"),
            (5, "62"),
            (10, "0.0"),
            (20, "0.0"),
            (11, "0.0"),
            (21, "1.0"),
            (0, "XLINE"),
            (5, "63"),
            (10, "1.0"),
            (20, "1.0"),
            (11, "1.0"),
            (21, "0.0"),
            (0, "LEADER"),
            (5, "64"),
            (76, "2"),
            (10, "0.0"),
            (20, "0.0"),
            (10, "3.0"),
            (20, "3.0"),
            (0, "DIMENSION"),
            (5, "65"),
            (2, "*D1"),
            (10, "5.0"),
            (20, "0.0"),
            (11, "2.5"),
            (21, "0.5"),
            (70, "32"),
            (42, "5.0"),
            (13, "0.0"),
            (23, "0.0"),
            (14, "5.0"),
            (24, "0.0"),
        ),
        (0, "EOF"),
    )
