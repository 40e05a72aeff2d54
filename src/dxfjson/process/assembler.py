"""Document assembler composing built sections into one Document.

The assembler derives the header variable mapping from the HEADER records
and validates block references. It never raises; findings are attached to
the document as warnings.
"""

import logging
from collections.abc import Iterable, Sequence
from types import MappingProxyType
from typing import Any

from ..io.coercer import classify
from ..models import (
    Document,
    Entity,
    GroupCodeClass,
    ParseWarning,
    Point3D,
    RawRecord,
    Section,
    Tag,
    WarningKind,
)

log = logging.getLogger(__name__)


HEADER_VARIABLE_CODE = 9


def header_value(tags: Sequence[Tag]) -> Any:
    """Get the value of one header variable from the tags following its name.

    Point variables (x, y and optional z components) become a Point3D, a
    single value is returned as is, several values as a tuple.
    """
    if not tags:
        return None
    if all(classify(tag.code) is GroupCodeClass.POINT for tag in tags) and len(tags) <= 3:
        coords = [float(tag.value) for tag in tags]
        return Point3D(*coords)
    if len(tags) == 1:
        return tags[0].value
    return tuple(tag.value for tag in tags)


def header_variables(section: Section) -> dict[str, Any]:
    """Build the variable mapping of a HEADER section.

    Parameters
    ----------
    section : Section
        HEADER section split into one record per variable

    Returns
    -------
    dict[str, Any]
        Variable values keyed by name (e.g. ``$ACADVER``) in encounter order
    """
    variables: dict[str, Any] = {}
    for record in section.raw_records:
        if not record.tokens or record.tokens[0].code != HEADER_VARIABLE_CODE:
            log.debug(f"Skipping header record without variable name at line {record.line}")
            continue
        variables[record.name] = header_value(record.tokens[1:])
    return variables


def iter_inserts(entries: Iterable[Entity | RawRecord]) -> Iterable[Entity]:
    for entry in entries:
        if not isinstance(entry, Entity):
            continue
        if entry.kind == "INSERT":
            yield entry
        yield from iter_inserts(entry.children)


class DocumentAssembler:
    """Composes sections and collected warnings into a Document."""

    def assemble(self, sections: Sequence[Section], warnings: Sequence[ParseWarning] = ()) -> Document:
        """Assemble the final document.

        Parameters
        ----------
        sections : Sequence[Section]
            Built sections in encounter order
        warnings : Sequence[ParseWarning]
            Warnings collected while building the sections

        Returns
        -------
        Document
            Document with header mapping and all warnings
        """
        header: dict[str, Any] = {}
        for section in sections:
            if section.name.upper() == "HEADER":
                header.update(header_variables(section))

        collected = list(warnings)
        collected.extend(self._unresolved_references(sections))
        log.debug(f"Assembled document with {len(sections)} sections and {len(collected)} warnings")
        return Document(sections=tuple(sections), header=MappingProxyType(header), warnings=tuple(collected))

    def _unresolved_references(self, sections: Sequence[Section]) -> list[ParseWarning]:
        block_sections = [section for section in sections if section.name.upper() == "BLOCKS"]
        if not block_sections:
            return []

        known = set()
        for section in block_sections:
            for entity in section.entities:
                if entity.kind == "BLOCK":
                    known.add(str(entity.get("name", "")))

        warnings = []
        for section in sections:
            for insert in iter_inserts(section.entries):
                name = str(insert.get("name", ""))
                if name in known:
                    continue
                log.warning(f"INSERT {insert.handle} references unknown block {name!r}")
                warnings.append(
                    ParseWarning(
                        kind=WarningKind.UNRESOLVED_BLOCK_REFERENCE,
                        message=f"Block {name!r} referenced by INSERT is not defined",
                        line=insert.line,
                        handle=insert.handle,
                        name=name,
                    )
                )
        return warnings
