"""Declared field maps of the supported entity kinds.

Each entity kind declares its geometry fields in output order. A point
field is addressed by the group code of its x component; the y and z
components follow DXF convention at code + 10 and code + 20. Repeating
fields collect every occurrence, scalar fields resolve duplicates by the
configured policy.
"""

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from ..models import Point3D


@dataclass(frozen=True)
class FieldSpec:
    """Declaration of one geometry field.

    Parameters
    ----------
    name : str
        Field name used in the exported JSON
    code : int
        Group code (x component code for points)
    default : Any
        Value used if the field is absent from the source
    point : bool
        Field is a point assembled from code, code + 10 and code + 20
    repeating : bool
        All occurrences are retained as a list
    """

    name: str
    code: int
    default: Any = None
    point: bool = False
    repeating: bool = False

    @property
    def codes(self) -> tuple[int, ...]:
        if self.point:
            return self.code, self.code + 10, self.code + 20
        return (self.code,)


ORIGIN = Point3D(0.0, 0.0, 0.0)
Z_AXIS = Point3D(0.0, 0.0, 1.0)
X_AXIS = Point3D(1.0, 0.0, 0.0)


def point(name: str, code: int, default: Point3D = ORIGIN) -> FieldSpec:
    return FieldSpec(name=name, code=code, default=default, point=True)


def points(name: str, code: int) -> FieldSpec:
    return FieldSpec(name=name, code=code, default=(), point=True, repeating=True)


def scalar(name: str, code: int, default: Any) -> FieldSpec:
    return FieldSpec(name=name, code=code, default=default)


def values(name: str, code: int) -> FieldSpec:
    return FieldSpec(name=name, code=code, default=(), repeating=True)


THICKNESS = scalar("thickness", 39, 0.0)
EXTRUSION = point("extrusion", 210, Z_AXIS)

TEXT_FIELDS = (
    point("insert", 10),
    point("align_point", 11),
    scalar("height", 40, 1.0),
    scalar("text", 1, ""),
    scalar("rotation", 50, 0.0),
    scalar("width", 41, 1.0),
    scalar("oblique", 51, 0.0),
    scalar("style", 7, "Standard"),
    scalar("text_generation_flag", 71, 0),
    scalar("halign", 72, 0),
    THICKNESS,
    EXTRUSION,
)

CORNER_FIELDS = (
    point("vtx0", 10),
    point("vtx1", 11),
    point("vtx2", 12),
    point("vtx3", 13),
)

_ENTITY_FIELDS: dict[str, tuple[FieldSpec, ...]] = {
    "LINE": (
        point("start", 10),
        point("end", 11),
        THICKNESS,
        EXTRUSION,
    ),
    "POINT": (
        point("location", 10),
        scalar("angle", 50, 0.0),
        THICKNESS,
        EXTRUSION,
    ),
    "CIRCLE": (
        point("center", 10),
        scalar("radius", 40, 1.0),
        THICKNESS,
        EXTRUSION,
    ),
    "ARC": (
        point("center", 10),
        scalar("radius", 40, 1.0),
        scalar("start_angle", 50, 0.0),
        scalar("end_angle", 51, 360.0),
        THICKNESS,
        EXTRUSION,
    ),
    "ELLIPSE": (
        point("center", 10),
        point("major_axis", 11, X_AXIS),
        scalar("ratio", 40, 1.0),
        scalar("start_param", 41, 0.0),
        scalar("end_param", 42, math.tau),
        EXTRUSION,
    ),
    "TEXT": TEXT_FIELDS + (scalar("valign", 73, 0),),
    "ATTRIB": TEXT_FIELDS
    + (
        scalar("tag", 2, ""),
        scalar("flags", 70, 0),
        scalar("field_length", 73, 0),
        scalar("valign", 74, 0),
    ),
    "ATTDEF": TEXT_FIELDS
    + (
        scalar("tag", 2, ""),
        scalar("prompt", 3, ""),
        scalar("flags", 70, 0),
        scalar("field_length", 73, 0),
        scalar("valign", 74, 0),
    ),
    "MTEXT": (
        point("insert", 10),
        point("text_direction", 11, X_AXIS),
        scalar("char_height", 40, 1.0),
        scalar("width", 41, 0.0),
        scalar("rotation", 50, 0.0),
        scalar("attachment_point", 71, 1),
        scalar("flow_direction", 72, 1),
        scalar("style", 7, "Standard"),
        scalar("line_spacing_style", 73, 1),
        scalar("line_spacing_factor", 44, 1.0),
        EXTRUSION,
    ),
    "INSERT": (
        scalar("name", 2, ""),
        point("insert", 10),
        scalar("xscale", 41, 1.0),
        scalar("yscale", 42, 1.0),
        scalar("zscale", 43, 1.0),
        scalar("rotation", 50, 0.0),
        scalar("attribs_follow", 66, 0),
        scalar("column_count", 70, 1),
        scalar("row_count", 71, 1),
        scalar("column_spacing", 44, 0.0),
        scalar("row_spacing", 45, 0.0),
        EXTRUSION,
    ),
    "BLOCK": (
        scalar("name", 2, ""),
        scalar("name2", 3, ""),
        point("base_point", 10),
        scalar("flags", 70, 0),
        scalar("xref_path", 1, ""),
        scalar("description", 4, ""),
    ),
    "ENDBLK": (),
    "SEQEND": (),
    "POLYLINE": (
        point("elevation", 10),
        scalar("flags", 70, 0),
        scalar("default_start_width", 40, 0.0),
        scalar("default_end_width", 41, 0.0),
        scalar("m_count", 71, 0),
        scalar("n_count", 72, 0),
        scalar("m_smooth_density", 73, 0),
        scalar("n_smooth_density", 74, 0),
        scalar("smooth_type", 75, 0),
        THICKNESS,
        EXTRUSION,
    ),
    "VERTEX": (
        point("location", 10),
        scalar("start_width", 40, 0.0),
        scalar("end_width", 41, 0.0),
        scalar("bulge", 42, 0.0),
        scalar("flags", 70, 0),
        scalar("tangent", 50, 0.0),
        scalar("vtx0", 71, 0),
        scalar("vtx1", 72, 0),
        scalar("vtx2", 73, 0),
        scalar("vtx3", 74, 0),
    ),
    "LWPOLYLINE": (
        scalar("flags", 70, 0),
        scalar("const_width", 43, 0.0),
        scalar("elevation", 38, 0.0),
        scalar("count", 90, 0),
        THICKNESS,
        EXTRUSION,
    ),
    "3DFACE": CORNER_FIELDS + (scalar("invisible_edges", 70, 0),),
    "SOLID": CORNER_FIELDS + (THICKNESS, EXTRUSION),
    "TRACE": CORNER_FIELDS + (THICKNESS, EXTRUSION),
    "SPLINE": (
        scalar("flags", 70, 0),
        scalar("degree", 71, 3),
        scalar("knot_tolerance", 42, 1e-10),
        scalar("control_point_tolerance", 43, 1e-10),
        scalar("fit_tolerance", 44, 1e-10),
        point("start_tangent", 12),
        point("end_tangent", 13),
        values("knots", 40),
        values("weights", 41),
        points("control_points", 10),
        points("fit_points", 11),
        EXTRUSION,
    ),
    "RAY": (
        point("start", 10),
        point("unit_vector", 11, X_AXIS),
    ),
    "XLINE": (
        point("start", 10),
        point("unit_vector", 11, X_AXIS),
    ),
    "LEADER": (
        scalar("dimstyle", 3, "Standard"),
        scalar("has_arrowhead", 71, 1),
        scalar("path_type", 72, 0),
        scalar("annotation_type", 73, 3),
        scalar("hookline_direction", 74, 0),
        scalar("has_hookline", 75, 0),
        scalar("text_height", 40, 1.0),
        scalar("text_width", 41, 0.0),
        points("vertices", 10),
        scalar("annotation_handle", 340, None),
        EXTRUSION,
        point("horizontal_direction", 211, X_AXIS),
    ),
    "DIMENSION": (
        scalar("geometry", 2, ""),
        scalar("dimstyle", 3, "Standard"),
        point("defpoint", 10),
        point("text_midpoint", 11),
        point("insert", 12),
        point("defpoint2", 13),
        point("defpoint3", 14),
        point("defpoint4", 15),
        point("defpoint5", 16),
        scalar("dimtype", 70, 0),
        scalar("attachment_point", 71, 5),
        scalar("text", 1, ""),
        scalar("actual_measurement", 42, 0.0),
        scalar("angle", 50, 0.0),
        scalar("horizontal_direction", 51, 0.0),
        scalar("oblique_angle", 52, 0.0),
        scalar("text_rotation", 53, 0.0),
        EXTRUSION,
    ),
}

ENTITY_FIELDS: MappingProxyType[str, tuple[FieldSpec, ...]] = MappingProxyType(_ENTITY_FIELDS)

KNOWN_KINDS: frozenset[str] = frozenset(ENTITY_FIELDS)


def fields_for(kind: str) -> tuple[FieldSpec, ...]:
    """Get the declared fields of an entity kind.

    Raises
    ------
    KeyError
        If the kind is not supported
    """
    return ENTITY_FIELDS[kind]


def is_known_kind(kind: str) -> bool:
    return kind in KNOWN_KINDS
