"""SLI mesh reader producing flat entities.

SLI files describe a mesh as XML: ``NodeCoords`` elements build a node
table (1-based), every ``Element`` starts a new entity and the ``Nodes``
element that follows it lists the node indices of that entity.
"""

import io
import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from ..models import FlatEntity, Point3D

log = logging.getLogger(__name__)


ELEMENT_TYPES = {
    "1": "LINE",
    "2": "3DFACE",
}


class InvalidSLIData(ValueError):
    """An SLI element lacks a required attribute or has a non-numeric value."""


def local_name(name: str) -> str:
    """Strip the namespace of an XML tag or attribute name."""
    if "}" in name:
        return name.rsplit("}", 1)[1]
    return name


def _attributes(element: ET.Element) -> dict[str, str]:
    return {local_name(name): value for name, value in element.attrib.items()}


def _coordinate(attributes: dict[str, str], name: str) -> float:
    value = attributes.get(name)
    if value is None:
        raise InvalidSLIData(f"NodeCoords element without {name} attribute")
    try:
        return float(value)
    except ValueError as e:
        raise InvalidSLIData(f"Invalid {name} coordinate: {value!r}") from e


def _node_index(value: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise InvalidSLIData(f"Invalid node index: {value!r}") from e


class _MeshEntity:
    def __init__(self, entity_type: str) -> None:
        self.entity_type = entity_type
        self.vertices: list[Point3D] = []

    def freeze(self) -> FlatEntity:
        return FlatEntity(entity_type=self.entity_type, vertices=tuple(self.vertices))


class SLIReader:
    """Reader for SLI mesh files."""

    def __init__(self) -> None:
        self.nodes: list[Point3D] = []

    def read_file(self, sli_path: Path, encoding: str = "utf-8") -> list[FlatEntity]:
        """Read an SLI file.

        Raises
        ------
        FileNotFoundError
            If the SLI file does not exist
        """
        if not sli_path.exists():
            raise FileNotFoundError(f"SLI file not found: {sli_path}")
        return self.read(sli_path.read_text(encoding=encoding))

    def read(self, text: str) -> list[FlatEntity]:
        """Read the entities of an SLI document.

        A syntax error stops reading; the entities collected up to that
        point are returned.

        Parameters
        ----------
        text : str
            SLI XML document

        Returns
        -------
        list[FlatEntity]
            Entities in document order

        Raises
        ------
        InvalidSLIData
            If a node or element lacks a required attribute
        """
        self.nodes = []
        entities: list[_MeshEntity] = []
        try:
            for _, element in ET.iterparse(io.StringIO(text), events=("start",)):
                name = local_name(element.tag)
                if name == "NodeCoords":
                    self._add_node(_attributes(element))
                elif name == "Element":
                    entities.append(self._create_entity(_attributes(element)))
                elif name == "Nodes" and entities:
                    self._add_vertices(entities[-1], _attributes(element))
        except ET.ParseError as e:
            log.error(f"Stopped reading SLI data: {e}")

        log.debug(f"Read {len(self.nodes)} nodes and {len(entities)} elements from SLI data")
        return [entity.freeze() for entity in entities]

    def _add_node(self, attributes: dict[str, str]) -> None:
        self.nodes.append(
            Point3D(
                x=_coordinate(attributes, "NdX"),
                y=_coordinate(attributes, "NdY"),
                z=_coordinate(attributes, "NdZ"),
            )
        )

    def _create_entity(self, attributes: dict[str, str]) -> _MeshEntity:
        element_type = attributes.get("Type")
        if element_type is None:
            raise InvalidSLIData("Element without Type attribute")
        return _MeshEntity(ELEMENT_TYPES.get(element_type.strip(), "UNKNOWN"))

    def _add_vertices(self, entity: _MeshEntity, attributes: dict[str, str]) -> None:
        for value in attributes.values():
            index = _node_index(value)
            if index < 1 or index > len(self.nodes):
                log.debug(f"Skipping node index {index} outside of node table")
                continue
            entity.vertices.append(self.nodes[index - 1])
