"""Reader loading structured JSON output back into a Document.

Only the layout written by JsonExporter.export_document is understood.
Point and polyline vertex objects are recognized by their keys. Source
line numbers are not part of the JSON and are read back as 0.
"""

import json
import logging
from types import MappingProxyType
from typing import Any

from ..models import (
    Document,
    Entity,
    Entry,
    ParseWarning,
    Point3D,
    PolylinePoint,
    RawRecord,
    Section,
    Tag,
    WarningKind,
)

log = logging.getLogger(__name__)


POINT_KEYS = frozenset({"x", "y", "z"})
POLYLINE_POINT_KEYS = frozenset({"x", "y", "start_width", "end_width", "bulge"})


def _read_value(value: Any) -> Any:
    if isinstance(value, dict):
        keys = set(value)
        if keys == POINT_KEYS:
            return Point3D(value["x"], value["y"], value["z"])
        if keys == POLYLINE_POINT_KEYS:
            return PolylinePoint(**value)
        return {name: _read_value(item) for name, item in value.items()}
    if isinstance(value, list):
        return [_read_value(item) for item in value]
    return value


def _read_tags(pairs: list[list[Any]]) -> tuple[Tag, ...]:
    return tuple(Tag(code=int(code), value=value) for code, value in pairs)


class JsonDocumentReader:
    """Reads structured JSON text into a Document."""

    def read(self, text: str) -> Document:
        """Read a document from JSON text.

        Parameters
        ----------
        text : str
            Output of JsonExporter.export_document

        Returns
        -------
        Document
            Reconstructed document

        Raises
        ------
        json.JSONDecodeError
            If the text is not valid JSON
        ValueError
            If the JSON does not have the document layout
        """
        data = json.loads(text)
        if not isinstance(data, dict) or "sections" not in data:
            raise ValueError("JSON text is not an exported DXF document")

        sections = tuple(self._read_section(section) for section in data["sections"])
        header = {}
        for name, value in data.get("header", {}).items():
            value = _read_value(value)
            header[name] = tuple(value) if isinstance(value, list) else value
        warnings = tuple(self._read_warning(warning) for warning in data.get("warnings", []))
        log.debug(f"Read document with {len(sections)} sections from JSON")
        return Document(sections=sections, header=MappingProxyType(header), warnings=warnings)

    def _read_section(self, data: dict[str, Any]) -> Section:
        return Section(name=data["name"], entries=tuple(self._read_entry(entry) for entry in data["entries"]))

    def _read_entry(self, data: dict[str, Any]) -> Entry:
        entry_type = data.get("type")
        if entry_type == "raw":
            return RawRecord(tokens=_read_tags(data["tokens"]))
        if entry_type == "entity":
            return self._read_entity(data)
        raise ValueError(f"Unknown entry type: {entry_type}")

    def _read_entity(self, data: dict[str, Any]) -> Entity:
        terminator = data.get("terminator")
        properties = {int(code): value for code, value in data.get("properties", {}).items()}
        geometry = {name: _read_value(value) for name, value in data.get("geometry", {}).items()}
        return Entity(
            kind=data["kind"],
            handle=data.get("handle"),
            layer=data.get("layer", "0"),
            common_properties=MappingProxyType(properties),
            geometry=MappingProxyType(geometry),
            children=tuple(self._read_entry(child) for child in data.get("children", [])),
            terminator=None if terminator is None else self._read_entity(terminator),
            subclasses=tuple(data.get("subclasses", [])),
            app_data=MappingProxyType({name: _read_tags(tags) for name, tags in data.get("app_data", {}).items()}),
            xdata=MappingProxyType({name: _read_tags(tags) for name, tags in data.get("xdata", {}).items()}),
        )

    def _read_warning(self, data: dict[str, Any]) -> ParseWarning:
        return ParseWarning(
            kind=WarningKind(data["kind"]),
            message=data["message"],
            line=data.get("line", 0),
            handle=data.get("handle"),
            name=data.get("name"),
        )
