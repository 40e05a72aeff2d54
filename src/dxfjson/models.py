"""Data models for DXF parsing and JSON export.

This module contains the dataclasses that represent every stage of the
conversion: raw tokens from the tokenizer, typed tags from the value
coercer, sections, entities, raw fallback records and the final document.
All models are immutable once built.
"""

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

log = logging.getLogger(__name__)


Value = Union[str, int, float, bool]


class GroupCodeClass(Enum):
    """Semantic kind of a group code value."""

    STRING = "string"
    DOUBLE = "double"
    POINT = "point"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    HANDLE = "handle"


class DuplicatePolicy(Enum):
    """Resolution of a scalar group code occurring more than once in one entity."""

    LAST_WINS = "last"
    FIRST_WINS = "first"


class WarningKind(Enum):
    """Non-fatal findings collected during a conversion."""

    UNRESOLVED_BLOCK_REFERENCE = "UnresolvedBlockReference"
    UNSUPPORTED_CONSTRUCT = "UnsupportedConstruct"


@dataclass(frozen=True)
class ParserConfig:
    """Options of a single conversion.

    Parameters
    ----------
    duplicate_policy : DuplicatePolicy
        Which occurrence of a repeated scalar group code is kept
    float_precision : int
        Number of decimals floats are rounded to on export
    indent : int | None
        JSON indentation, None for compact output
    encoding : str
        Text encoding used by the command line front end to read files
    report_unsupported : bool
        Collect an UnsupportedConstruct warning for unknown entity kinds
    """

    duplicate_policy: DuplicatePolicy = DuplicatePolicy.LAST_WINS
    float_precision: int = 9
    indent: int | None = 2
    encoding: str = "utf-8"
    report_unsupported: bool = True


@dataclass(frozen=True)
class Token:
    """One group code / value pair as read from two physical lines.

    Parameters
    ----------
    code : int
        Group code in the range 0 to 1071
    raw_value : str
        Value line without its line terminator
    line : int
        1-based line number of the group code line
    """

    code: int
    raw_value: str
    line: int


@dataclass(frozen=True)
class Tag:
    """A token whose value has been coerced to its semantic type."""

    code: int
    value: Value
    line: int = 0

    def to_pair(self) -> tuple[int, Value]:
        return self.code, self.value


@dataclass(frozen=True)
class Point3D:
    """Represents a 3D point with x, y, z coordinates."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def to_tuple(self) -> tuple[float, float, float]:
        """Convert point to a coordinate tuple."""
        return self.x, self.y, self.z


@dataclass(frozen=True)
class PolylinePoint:
    """A LWPOLYLINE vertex with its segment widths and bulge."""

    x: float = 0.0
    y: float = 0.0
    start_width: float = 0.0
    end_width: float = 0.0
    bulge: float = 0.0


@dataclass(frozen=True)
class RawRecord:
    """Lossless container for constructs without a dedicated entity model."""

    tokens: tuple[Tag, ...]

    @property
    def name(self) -> str:
        """Value of the leading tag, e.g. the record type of a code 0 run."""
        if not self.tokens:
            return ""
        return str(self.tokens[0].value)

    @property
    def line(self) -> int:
        if not self.tokens:
            return 0
        return self.tokens[0].line

    def pairs(self) -> list[tuple[int, Value]]:
        return [tag.to_pair() for tag in self.tokens]


@dataclass(frozen=True)
class Entity:
    """A typed DXF entity.

    Parameters
    ----------
    kind : str
        Entity type name, e.g. LINE or INSERT
    handle : str | None
        Hexadecimal handle, kept as opaque string
    layer : str
        Layer name, "0" if the entity does not name one
    common_properties : Mapping[int, Value]
        Group codes not declared by the entity kind, keyed by code
    geometry : Mapping[str, Any]
        Kind-specific fields in declared order
    children : tuple[Entity | RawRecord, ...]
        Nested entries (polyline vertices, insert attributes, block content)
    terminator : Entity | None
        Closing SEQEND or ENDBLK of a nested construct
    subclasses : tuple[str, ...]
        Subclass markers (group code 100) in source order
    app_data : Mapping[str, tuple[Tag, ...]]
        Application defined groups (group code 102)
    xdata : Mapping[str, tuple[Tag, ...]]
        Extended data by application name (group code 1001)
    line : int
        Line number of the entity type tag
    """

    kind: str
    handle: str | None = None
    layer: str = "0"
    common_properties: Mapping[int, Value] = field(default_factory=dict)
    geometry: Mapping[str, Any] = field(default_factory=dict)
    children: tuple["Entity | RawRecord", ...] = ()
    terminator: "Entity | None" = None
    subclasses: tuple[str, ...] = ()
    app_data: Mapping[str, tuple[Tag, ...]] = field(default_factory=dict)
    xdata: Mapping[str, tuple[Tag, ...]] = field(default_factory=dict)
    line: int = field(default=0, compare=False)

    def get(self, name: str, default: Any = None) -> Any:
        """Get a geometry field value by name."""
        return self.geometry.get(name, default)

    def iter_tree(self) -> Iterator["Entity"]:
        """Iterate over this entity, its nested children and terminators, depth first."""
        yield self
        for child in self.children:
            if not isinstance(child, Entity):
                continue
            yield from child.iter_tree()
        if self.terminator is not None:
            yield self.terminator


Entry = Union[Entity, RawRecord]


@dataclass(frozen=True)
class RawSection:
    """Section as delimited by the section parser, before entity building."""

    name: str
    tags: tuple[Tag, ...]
    line: int = 0


@dataclass(frozen=True)
class Section:
    """A named top-level division of a DXF document."""

    name: str
    entries: tuple[Entry, ...] = ()

    @property
    def entities(self) -> list[Entity]:
        return [entry for entry in self.entries if isinstance(entry, Entity)]

    @property
    def raw_records(self) -> list[RawRecord]:
        return [entry for entry in self.entries if isinstance(entry, RawRecord)]


@dataclass(frozen=True)
class ParseWarning:
    """Non-fatal finding attached to the document."""

    kind: WarningKind
    message: str
    line: int = 0
    handle: str | None = None
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert warning to dictionary format."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "line": self.line,
            "handle": self.handle,
            "name": self.name,
        }


@dataclass(frozen=True)
class Document:
    """Root of a parsed DXF file, detached from the source text."""

    sections: tuple[Section, ...] = ()
    header: Mapping[str, Any] = field(default_factory=dict)
    warnings: tuple[ParseWarning, ...] = ()

    def sections_by_name(self, name: str) -> list[Section]:
        """Get all sections with the given name, in encounter order."""
        return [section for section in self.sections if section.name == name]

    def has_section(self, name: str) -> bool:
        return any(section.name == name for section in self.sections)

    def entities(self) -> list[Entity]:
        """Get the top-level entities of all ENTITIES sections."""
        entities = []
        for section in self.sections_by_name("ENTITIES"):
            entities.extend(section.entities)
        return entities

    def blocks(self) -> list[Entity]:
        """Get all BLOCK definitions of the BLOCKS sections."""
        blocks = []
        for section in self.sections_by_name("BLOCKS"):
            blocks.extend(entity for entity in section.entities if entity.kind == "BLOCK")
        return blocks

    def block_names(self) -> set[str]:
        return {str(block.get("name", "")) for block in self.blocks()}

    def find_block(self, name: str) -> Entity | None:
        """Get the BLOCK definition with the given name.

        Parameters
        ----------
        name : str
            Block name as referenced by INSERT group code 2

        Returns
        -------
        Entity | None
            The first matching BLOCK entity or None
        """
        for block in self.blocks():
            if block.get("name") == name:
                return block
        return None

    def iter_entities(self) -> Iterator[Entity]:
        """Iterate over every entity of every section including nested ones."""
        for section in self.sections:
            for entity in section.entities:
                yield from entity.iter_tree()

    def find_by_handle(self, handle: str) -> Entity | None:
        """Resolve an opaque handle reference to its entity.

        Handles are compared case-insensitively since DXF writers differ in
        the case of hexadecimal digits.
        """
        wanted = handle.strip().upper()
        for entity in self.iter_entities():
            if entity.handle is not None and entity.handle.upper() == wanted:
                return entity
        return None


@dataclass(frozen=True)
class FlatEntity:
    """Entity reduced to its type, vertices, handle and layer.

    This is the item of the flat JSON layout, shared by DXF entities and
    SLI mesh elements.
    """

    entity_type: str
    vertices: tuple[Point3D, ...] = ()
    handle: str = ""
    layer: str = ""
