"""Geometry helpers on parsed entities.

Extracts the defining points of an entity and the extents of a whole
document. Nothing here transforms coordinates; block inserts are not
resolved and all points stay in their own coordinate system.
"""

import logging

import numpy as np

from ..models import Document, Entity, Point3D, PolylinePoint

log = logging.getLogger(__name__)


CORNER_KINDS = frozenset({"3DFACE", "SOLID", "TRACE"})
CENTER_KINDS = frozenset({"CIRCLE", "ARC", "ELLIPSE"})
INSERT_POINT_KINDS = frozenset({"TEXT", "MTEXT", "ATTRIB", "ATTDEF", "INSERT"})


def _lwpolyline_points(entity: Entity) -> list[Point3D]:
    elevation = float(entity.get("elevation", 0.0))
    vertices: list[PolylinePoint] = entity.get("vertices", [])
    return [Point3D(vertex.x, vertex.y, elevation) for vertex in vertices]


def entity_vertices(entity: Entity) -> list[Point3D]:
    """Extract the defining points of an entity.

    Parameters
    ----------
    entity : Entity
        Entity to extract points from

    Returns
    -------
    list[Point3D]
        List of extracted points, empty for kinds without geometry
    """
    kind = entity.kind
    if kind == "LINE":
        return [entity.get("start"), entity.get("end")]
    if kind in CORNER_KINDS:
        return [entity.get(f"vtx{index}") for index in range(4)]
    if kind == "LWPOLYLINE":
        return _lwpolyline_points(entity)
    if kind == "POLYLINE":
        return [child.get("location") for child in entity.children if isinstance(child, Entity) and child.kind == "VERTEX"]
    if kind == "VERTEX":
        return [entity.get("location")]
    if kind in CENTER_KINDS:
        return [entity.get("center")]
    if kind in INSERT_POINT_KINDS:
        return [entity.get("insert")]
    if kind == "POINT":
        return [entity.get("location")]
    if kind in ("RAY", "XLINE"):
        return [entity.get("start")]
    if kind == "SPLINE":
        return list(entity.get("control_points") or entity.get("fit_points") or [])
    if kind == "LEADER":
        return list(entity.get("vertices", []))
    if kind == "DIMENSION":
        return [entity.get("defpoint")]
    return []


def compute_extents(document: Document) -> tuple[Point3D, Point3D] | None:
    """Compute the bounding box over all vertices of the ENTITIES sections.

    Parameters
    ----------
    document : Document
        Parsed document

    Returns
    -------
    tuple[Point3D, Point3D] | None
        Minimum and maximum corner, None if no entity has vertices
    """
    coords = []
    for entity in document.entities():
        coords.extend(point.to_tuple() for point in entity_vertices(entity))
    if not coords:
        log.debug("No vertices found, document has no extents")
        return None

    points = np.array(coords, dtype=float)
    minimum = points.min(axis=0)
    maximum = points.max(axis=0)
    return Point3D(*minimum.tolist()), Point3D(*maximum.tolist())
