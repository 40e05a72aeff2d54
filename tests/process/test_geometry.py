"""Tests for geometry helpers."""

import pytest

from dxfjson.models import Document, Entity, Point3D, PolylinePoint, Section
from dxfjson.process.geometry import compute_extents, entity_vertices


class TestEntityVertices:
    def test_line(self):
        entity = Entity(kind="LINE", geometry={"start": Point3D(0, 0, 0), "end": Point3D(1, 2, 3)})

        assert entity_vertices(entity) == [Point3D(0, 0, 0), Point3D(1, 2, 3)]

    def test_3dface_corners(self):
        corners = {f"vtx{index}": Point3D(index, 0, 0) for index in range(4)}

        assert len(entity_vertices(Entity(kind="3DFACE", geometry=corners))) == 4

    def test_lwpolyline_uses_elevation(self):
        entity = Entity(
            kind="LWPOLYLINE",
            geometry={"elevation": 2.0, "vertices": [PolylinePoint(1.0, 1.0), PolylinePoint(2.0, 1.0)]},
        )

        assert entity_vertices(entity) == [Point3D(1.0, 1.0, 2.0), Point3D(2.0, 1.0, 2.0)]

    def test_polyline_children(self):
        vertices = tuple(Entity(kind="VERTEX", geometry={"location": Point3D(i, i, 0)}) for i in range(3))
        entity = Entity(kind="POLYLINE", children=vertices)

        assert entity_vertices(entity) == [Point3D(0, 0, 0), Point3D(1, 1, 0), Point3D(2, 2, 0)]

    def test_spline_prefers_control_points(self):
        entity = Entity(kind="SPLINE", geometry={"control_points": [Point3D(1, 0, 0)], "fit_points": [Point3D(9, 9, 9)]})

        assert entity_vertices(entity) == [Point3D(1, 0, 0)]

    def test_spline_with_fit_points_only(self):
        entity = Entity(kind="SPLINE", geometry={"control_points": [], "fit_points": [Point3D(9, 9, 9)]})

        assert entity_vertices(entity) == [Point3D(9, 9, 9)]

    def test_no_geometry(self):
        assert entity_vertices(Entity(kind="SEQEND")) == []


class TestComputeExtents:
    def test_extents(self):
        entities = (
            Entity(kind="LINE", geometry={"start": Point3D(-1, -2, 0), "end": Point3D(4, 3, 0.5)}),
            Entity(kind="CIRCLE", geometry={"center": Point3D(10, 0, -1)}),
        )
        document = Document(sections=(Section("ENTITIES", entities),))

        minimum, maximum = compute_extents(document)

        assert minimum == Point3D(-1.0, -2.0, -1.0)
        assert maximum == Point3D(10.0, 3.0, 0.5)

    def test_blocks_are_ignored(self):
        block_line = Entity(kind="LINE", geometry={"start": Point3D(100, 100, 0), "end": Point3D(200, 200, 0)})
        document = Document(sections=(Section("BLOCKS", (Entity(kind="BLOCK", children=(block_line,)),)),))

        assert compute_extents(document) is None

    def test_empty_document(self):
        assert compute_extents(Document()) is None

    def test_extents_are_floats(self):
        entity = Entity(kind="POINT", geometry={"location": Point3D(1, 2, 3)})
        minimum, _ = compute_extents(Document(sections=(Section("ENTITIES", (entity,)),)))

        assert minimum.x == pytest.approx(1.0)
        assert isinstance(minimum.x, float)
