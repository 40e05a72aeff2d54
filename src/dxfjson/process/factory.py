"""Factory for creating Entity instances from runs of DXF tags.

This module provides a factory that turns the tags of one entity (from its
code 0 type tag up to the next code 0 tag) into a typed Entity. Common
group codes (handle, layer, subclass markers, application groups and
extended data) are split off first, the remaining tags are mapped onto the
declared fields of the entity kind.
"""

import logging
from collections.abc import Callable, Sequence
from types import MappingProxyType
from typing import Any

from ..models import DuplicatePolicy, Entity, Point3D, PolylinePoint, Tag, Value
from .fields import FieldSpec, fields_for, is_known_kind

log = logging.getLogger(__name__)


HANDLE_CODE = 5
LAYER_CODE = 8
SUBCLASS_CODE = 100
APP_DATA_CODE = 102
XDATA_APP_CODE = 1001
XDATA_MIN_CODE = 1000


def keep_value(policy: DuplicatePolicy, has_value: bool) -> bool:
    """Check if an already set scalar keeps its value on a repeated code."""
    return has_value and policy is DuplicatePolicy.FIRST_WINS


class FieldMapper:
    """Maps tags onto declared fields of one entity kind.

    Scalar fields and the components of point fields resolve repeated
    group codes by the duplicate policy; repeating fields keep every
    occurrence in source order. Tags without a declared field are
    returned as leftovers.
    """

    def __init__(self, specs: Sequence[FieldSpec], policy: DuplicatePolicy = DuplicatePolicy.LAST_WINS) -> None:
        self.specs = tuple(specs)
        self.policy = policy
        self._lookup: dict[int, tuple[FieldSpec, int]] = {}
        for spec in self.specs:
            for component, code in enumerate(spec.codes):
                self._lookup[code] = (spec, component)

    def handles(self, code: int) -> bool:
        return code in self._lookup

    def map(self, tags: Sequence[Tag]) -> tuple[dict[str, Any], list[Tag]]:
        """Map tags to geometry fields.

        Parameters
        ----------
        tags : Sequence[Tag]
            Tags of one entity without the common group codes

        Returns
        -------
        tuple[dict[str, Any], list[Tag]]
            Geometry fields in declared order and the unmapped tags
        """
        scalars: dict[str, Value] = {}
        components: dict[str, list[float | None]] = {}
        repeated: dict[str, list[Any]] = {}
        leftovers: list[Tag] = []

        for tag in tags:
            entry = self._lookup.get(tag.code)
            if entry is None:
                leftovers.append(tag)
                continue
            spec, component = entry
            if spec.point and spec.repeating:
                self._add_repeated_component(repeated.setdefault(spec.name, []), component, tag.value)
            elif spec.point:
                current = components.setdefault(spec.name, [None, None, None])
                if keep_value(self.policy, current[component] is not None):
                    continue
                current[component] = float(tag.value)
            elif spec.repeating:
                repeated.setdefault(spec.name, []).append(tag.value)
            else:
                if keep_value(self.policy, spec.name in scalars):
                    continue
                scalars[spec.name] = tag.value

        geometry: dict[str, Any] = {}
        for spec in self.specs:
            if spec.point and spec.repeating:
                geometry[spec.name] = [Point3D(*coords) for coords in repeated.get(spec.name, [])]
            elif spec.point:
                geometry[spec.name] = _merge_point(spec.default, components.get(spec.name))
            elif spec.repeating:
                geometry[spec.name] = list(repeated.get(spec.name, []))
            else:
                geometry[spec.name] = scalars.get(spec.name, spec.default)
        return geometry, leftovers

    @staticmethod
    def _add_repeated_component(collected: list[list[float]], component: int, value: Value) -> None:
        # An x component always opens a new point.
        if component == 0 or not collected:
            collected.append([0.0, 0.0, 0.0])
        collected[-1][component] = float(value)


def _merge_point(default: Point3D, components: list[float | None] | None) -> Point3D:
    if components is None:
        return default
    x, y, z = components
    return Point3D(
        x=default.x if x is None else x,
        y=default.y if y is None else y,
        z=default.z if z is None else z,
    )


class EntityFactory:
    """Creates Entity objects from the tag run of a single entity."""

    def __init__(self, policy: DuplicatePolicy = DuplicatePolicy.LAST_WINS) -> None:
        """Initialize factory.

        Parameters
        ----------
        policy : DuplicatePolicy
            Resolution of repeated scalar group codes
        """
        self.policy = policy
        self._mappers: dict[str, FieldMapper] = {}
        self._creators: dict[str, Callable[[str, list[Tag]], tuple[dict[str, Any], list[Tag]]]] = {
            "LWPOLYLINE": self._create_lwpolyline,
            "MTEXT": self._create_mtext,
        }

    def is_supported(self, kind: str) -> bool:
        return is_known_kind(kind)

    def _mapper(self, kind: str) -> FieldMapper:
        mapper = self._mappers.get(kind)
        if mapper is None:
            mapper = FieldMapper(fields_for(kind), self.policy)
            self._mappers[kind] = mapper
        return mapper

    def create_from_tags(self, tags: Sequence[Tag]) -> Entity:
        """Create an entity from its tags.

        Parameters
        ----------
        tags : Sequence[Tag]
            Tags of one entity, starting with its code 0 type tag

        Returns
        -------
        Entity
            Created entity without children

        Raises
        ------
        ValueError
            If the tags do not start with a code 0 tag of a supported kind
        """
        if not tags or tags[0].code != 0:
            raise ValueError("Entity tags must start with a code 0 tag")
        kind = str(tags[0].value)
        if not self.is_supported(kind):
            raise ValueError(f"Unsupported entity kind: {kind}")

        handle: str | None = None
        layer: str | None = None
        subclasses: list[str] = []
        app_data: dict[str, list[Tag]] = {}
        xdata: dict[str, list[Tag]] = {}
        kind_tags: list[Tag] = []

        open_group: str | None = None
        xdata_app: str | None = None
        for tag in tags[1:]:
            if open_group is not None:
                if tag.code == APP_DATA_CODE and tag.value == "}":
                    open_group = None
                else:
                    app_data[open_group].append(tag)
            elif tag.code == APP_DATA_CODE and str(tag.value).startswith("{"):
                open_group = str(tag.value)
                app_data.setdefault(open_group, [])
            elif tag.code == XDATA_APP_CODE:
                xdata_app = str(tag.value)
                xdata.setdefault(xdata_app, [])
            elif xdata_app is not None and tag.code >= XDATA_MIN_CODE:
                xdata[xdata_app].append(tag)
            elif tag.code == HANDLE_CODE:
                if not keep_value(self.policy, handle is not None):
                    handle = str(tag.value)
            elif tag.code == LAYER_CODE:
                if not keep_value(self.policy, layer is not None):
                    layer = str(tag.value)
            elif tag.code == SUBCLASS_CODE:
                subclasses.append(str(tag.value))
            else:
                kind_tags.append(tag)

        if open_group is not None:
            log.warning(f"Application group {open_group} of {kind} at line {tags[0].line} is not closed")

        creator = self._creators.get(kind, self._create_from_fields)
        geometry, leftovers = creator(kind, kind_tags)
        log.debug(f"Created {kind} entity at line {tags[0].line} with {len(leftovers)} common properties")
        return Entity(
            kind=kind,
            handle=handle,
            layer="0" if layer is None else layer,
            common_properties=MappingProxyType(self._common_properties(leftovers)),
            geometry=MappingProxyType(geometry),
            subclasses=tuple(subclasses),
            app_data=MappingProxyType({name: tuple(group) for name, group in app_data.items()}),
            xdata=MappingProxyType({name: tuple(group) for name, group in xdata.items()}),
            line=tags[0].line,
        )

    def _common_properties(self, tags: list[Tag]) -> dict[int, Value]:
        properties: dict[int, Value] = {}
        for tag in tags:
            if keep_value(self.policy, tag.code in properties):
                continue
            properties[tag.code] = tag.value
        return dict(sorted(properties.items()))

    def _create_from_fields(self, kind: str, tags: list[Tag]) -> tuple[dict[str, Any], list[Tag]]:
        return self._mapper(kind).map(tags)

    def _create_lwpolyline(self, kind: str, tags: list[Tag]) -> tuple[dict[str, Any], list[Tag]]:
        """Create LWPOLYLINE geometry.

        Vertex coordinates (10/20) open a new vertex; widths (40/41) and
        bulge (42) belong to the most recent vertex.
        """
        vertices: list[dict[str, float]] = []
        other_tags: list[Tag] = []
        for tag in tags:
            if tag.code == 10:
                vertices.append({"x": float(tag.value)})
            elif tag.code == 20:
                if not vertices:
                    vertices.append({})
                vertices[-1]["y"] = float(tag.value)
            elif tag.code in (40, 41, 42) and vertices:
                name = {40: "start_width", 41: "end_width", 42: "bulge"}[tag.code]
                vertices[-1][name] = float(tag.value)
            else:
                other_tags.append(tag)

        geometry, leftovers = self._mapper(kind).map(other_tags)
        geometry["closed"] = bool(int(geometry["flags"]) & 1)
        geometry["vertices"] = [PolylinePoint(**vertex) for vertex in vertices]
        return geometry, leftovers

    def _create_mtext(self, kind: str, tags: list[Tag]) -> tuple[dict[str, Any], list[Tag]]:
        """Create MTEXT geometry.

        Long texts are split into 250 character chunks (code 3) followed by
        the final chunk (code 1).
        """
        chunks: list[str] = []
        final: str | None = None
        other_tags: list[Tag] = []
        for tag in tags:
            if tag.code == 3:
                chunks.append(str(tag.value))
            elif tag.code == 1:
                if keep_value(self.policy, final is not None):
                    continue
                final = str(tag.value)
            else:
                other_tags.append(tag)

        geometry, leftovers = self._mapper(kind).map(other_tags)
        geometry["text"] = "".join(chunks) + (final or "")
        return geometry, leftovers
