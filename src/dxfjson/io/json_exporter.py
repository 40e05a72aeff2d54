"""JSON export of parsed DXF documents.

This module renders a Document as deterministic JSON text: sections and
entities in encounter order, geometry fields in declared order, common
properties sorted by group code and floats rounded to a fixed precision.
Exporting the same document twice yields identical text.
"""

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..errors import DXFParseError
from ..models import (
    Document,
    Entity,
    Entry,
    FlatEntity,
    ParserConfig,
    ParseWarning,
    Point3D,
    PolylinePoint,
    RawRecord,
    Section,
    Tag,
)
from ..process.geometry import entity_vertices

log = logging.getLogger(__name__)


def format_float(value: float, precision: int) -> float:
    """Round a float for export; negative zero becomes zero."""
    rounded = round(value, precision)
    if rounded == 0.0:
        return 0.0
    return rounded


class JsonExporter:
    """Exports parsed DXF documents to JSON text.

    The structured layout keeps every parsed detail of the document, the
    flat layout only lists entities with their vertices.
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        """Initialize JSON exporter.

        Parameters
        ----------
        config : ParserConfig | None
            Float precision and indentation of the output
        """
        self.config = config or ParserConfig()

    def _dumps(self, data: Any) -> str:
        return json.dumps(data, indent=self.config.indent, ensure_ascii=False, allow_nan=False)

    def export_document(self, document: Document) -> str:
        """Export a document to its structured JSON text.

        Parameters
        ----------
        document : Document
            Parsed document

        Returns
        -------
        str
            JSON text with sections, header and warnings
        """
        export_data = {
            "sections": [self._export_section(section) for section in document.sections],
            "header": {name: self._export_value(value) for name, value in document.header.items()},
            "warnings": [self._export_warning(warning) for warning in document.warnings],
        }
        return self._dumps(export_data)

    def flat_entities(self, document: Document) -> list[FlatEntity]:
        """Get the top-level entities of the ENTITIES sections that have vertices."""
        items = []
        for entity in document.entities():
            vertices = entity_vertices(entity)
            if not vertices:
                continue
            items.append(
                FlatEntity(
                    entity_type=entity.kind,
                    vertices=tuple(vertices),
                    handle=entity.handle or "",
                    layer=entity.layer,
                )
            )
        return items

    def export_flat(self, document: Document) -> str:
        """Export the top-level entities with vertices as a flat list.

        Every item has the keys ``entity_type``, ``vertices``, ``handle``
        and ``layer``. Entities without vertices are left out.
        """
        items = self.flat_entities(document)
        log.debug(f"Exported {len(items)} entities in flat layout")
        return self.export_flat_entities(items)

    def export_flat_entities(self, items: Sequence[FlatEntity]) -> str:
        return self._dumps([self._export_flat_entity(item) for item in items])

    def _export_flat_entity(self, item: FlatEntity) -> dict[str, Any]:
        return {
            "entity_type": item.entity_type,
            "vertices": [self._export_point(vertex) for vertex in item.vertices],
            "handle": item.handle,
            "layer": item.layer,
        }

    def export_error(self, error: DXFParseError) -> str:
        """Export a fatal parse error as ``{"error": {...}}``."""
        return self._dumps({"error": error.to_dict()})

    def write(self, text: str, output_path: Path) -> None:
        """Write exported text to a file.

        Raises
        ------
        OSError
            If the file cannot be written
        """
        try:
            with open(output_path, "w", encoding="utf-8") as json_file:
                json_file.write(text)
                json_file.write("\n")
        except OSError as e:
            raise OSError(f"Cannot write JSON file {output_path}: {e}") from e

    def _export_section(self, section: Section) -> dict[str, Any]:
        return {
            "name": section.name,
            "entries": [self._export_entry(entry) for entry in section.entries],
        }

    def _export_entry(self, entry: Entry) -> dict[str, Any]:
        if isinstance(entry, RawRecord):
            return self._export_raw(entry)
        return self._export_entity(entry)

    def _export_raw(self, record: RawRecord) -> dict[str, Any]:
        return {"type": "raw", "tokens": self._export_tags(record.tokens)}

    def _export_tags(self, tags: Sequence[Tag]) -> list[list[Any]]:
        return [[tag.code, self._export_value(tag.value)] for tag in tags]

    def _export_entity(self, entity: Entity) -> dict[str, Any]:
        """Export an entity to dictionary format.

        Parameters
        ----------
        entity : Entity
            Entity to export, including its nested children

        Returns
        -------
        dict[str, Any]
            Dictionary with a fixed key order
        """
        return {
            "type": "entity",
            "kind": entity.kind,
            "handle": entity.handle,
            "layer": entity.layer,
            "subclasses": list(entity.subclasses),
            "properties": {
                str(code): self._export_value(value) for code, value in sorted(entity.common_properties.items())
            },
            "geometry": {name: self._export_value(value) for name, value in entity.geometry.items()},
            "app_data": {name: self._export_tags(tags) for name, tags in entity.app_data.items()},
            "xdata": {name: self._export_tags(tags) for name, tags in entity.xdata.items()},
            "children": [self._export_entry(child) for child in entity.children],
            "terminator": None if entity.terminator is None else self._export_entity(entity.terminator),
        }

    def _export_warning(self, warning: ParseWarning) -> dict[str, Any]:
        return warning.to_dict()

    def _export_point(self, point: Point3D) -> dict[str, float]:
        precision = self.config.float_precision
        return {
            "x": format_float(point.x, precision),
            "y": format_float(point.y, precision),
            "z": format_float(point.z, precision),
        }

    def _export_value(self, value: Any) -> Any:
        if isinstance(value, Point3D):
            return self._export_point(value)
        if isinstance(value, PolylinePoint):
            precision = self.config.float_precision
            return {
                "x": format_float(value.x, precision),
                "y": format_float(value.y, precision),
                "start_width": format_float(value.start_width, precision),
                "end_width": format_float(value.end_width, precision),
                "bulge": format_float(value.bulge, precision),
            }
        if isinstance(value, (list, tuple)):
            return [self._export_value(item) for item in value]
        if isinstance(value, float):
            return format_float(value, self.config.float_precision)
        return value
