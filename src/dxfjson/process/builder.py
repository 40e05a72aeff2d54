"""Entity and section builders.

Sections holding entities (ENTITIES, BLOCKS) are split into runs at every
code 0 tag and each run becomes an Entity, or a RawRecord if its kind is
unknown. Nested constructs are attached as children of their parent:
POLYLINE -> VERTEX ... SEQEND, INSERT -> ATTRIB ... SEQEND and
BLOCK -> entities ... ENDBLK. All other sections become RawRecords.
"""

import logging
from collections.abc import Sequence
from dataclasses import replace

from ..errors import UnterminatedBlock
from ..models import (
    Entity,
    Entry,
    ParserConfig,
    ParseWarning,
    RawRecord,
    RawSection,
    Section,
    Tag,
    WarningKind,
)
from .factory import EntityFactory

log = logging.getLogger(__name__)


ENTITY_SECTIONS = frozenset({"ENTITIES", "BLOCKS"})
HEADER_SECTION = "HEADER"


def split_runs(tags: Sequence[Tag], code: int = 0) -> list[list[Tag]]:
    """Split tags into runs, each starting at a tag with the given group code.

    Tags in front of the first splitting tag form a run of their own.
    """
    runs: list[list[Tag]] = []
    for tag in tags:
        if tag.code == code or not runs:
            runs.append([tag])
        else:
            runs[-1].append(tag)
    return runs


def run_kind(run: Sequence[Tag]) -> str | None:
    if not run or run[0].code != 0:
        return None
    return str(run[0].value)


class _RunCursor:
    """Forward cursor over buffered runs with one run look-ahead."""

    def __init__(self, runs: list[list[Tag]]) -> None:
        self.runs = runs
        self.index = 0

    def peek(self) -> list[Tag] | None:
        if self.index >= len(self.runs):
            return None
        return self.runs[self.index]

    def next(self) -> list[Tag]:
        run = self.runs[self.index]
        self.index += 1
        return run


class EntityBuilder:
    """Builds the entries of an entity holding section."""

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()
        self.factory = EntityFactory(self.config.duplicate_policy)

    def build(self, tags: Sequence[Tag]) -> tuple[list[Entry], list[ParseWarning]]:
        """Build entities from the tags of one section.

        Parameters
        ----------
        tags : Sequence[Tag]
            Section content without SECTION, name and ENDSEC tags

        Returns
        -------
        tuple[list[Entry], list[ParseWarning]]
            Entries in encounter order and the collected warnings

        Raises
        ------
        UnterminatedBlock
            If a BLOCK is not closed by ENDBLK
        """
        cursor = _RunCursor(split_runs(tags))
        entries: list[Entry] = []
        warnings: list[ParseWarning] = []
        while cursor.peek() is not None:
            entries.append(self._build_entry(cursor, warnings))
        return entries, warnings

    def _build_entry(self, cursor: _RunCursor, warnings: list[ParseWarning]) -> Entry:
        run = cursor.next()
        kind = run_kind(run)
        if kind is None:
            log.debug(f"Keeping {len(run)} tags without entity type at line {run[0].line}")
            return RawRecord(tokens=tuple(run))
        if not self.factory.is_supported(kind):
            return self._unsupported(kind, run, warnings)

        entity = self.factory.create_from_tags(run)
        if kind == "POLYLINE":
            return self._collect_children(entity, cursor, "VERTEX")
        if kind == "INSERT" and entity.get("attribs_follow"):
            return self._collect_children(entity, cursor, "ATTRIB")
        if kind == "BLOCK":
            return self._build_block(entity, cursor, warnings)
        return entity

    def _unsupported(self, kind: str, run: list[Tag], warnings: list[ParseWarning]) -> RawRecord:
        log.debug(f"Unsupported entity {kind} at line {run[0].line} kept as raw record")
        if self.config.report_unsupported:
            warnings.append(
                ParseWarning(
                    kind=WarningKind.UNSUPPORTED_CONSTRUCT,
                    message=f"Entity type {kind!r} is not modeled and was kept as raw record",
                    line=run[0].line,
                    name=kind,
                )
            )
        return RawRecord(tokens=tuple(run))

    def _collect_children(self, parent: Entity, cursor: _RunCursor, child_kind: str) -> Entity:
        children: list[Entity] = []
        while True:
            run = cursor.peek()
            kind = None if run is None else run_kind(run)
            if kind == child_kind:
                children.append(self.factory.create_from_tags(cursor.next()))
                continue
            if kind == "SEQEND":
                terminator = self.factory.create_from_tags(cursor.next())
                return replace(parent, children=tuple(children), terminator=terminator)
            break
        log.warning(f"{parent.kind} at line {parent.line} is not terminated by SEQEND")
        return replace(parent, children=tuple(children))

    def _build_block(self, block: Entity, cursor: _RunCursor, warnings: list[ParseWarning]) -> Entity:
        name = str(block.get("name", ""))
        children: list[Entry] = []
        while True:
            run = cursor.peek()
            if run is None:
                raise UnterminatedBlock(name, block.line)
            kind = run_kind(run)
            if kind == "ENDBLK":
                terminator = self.factory.create_from_tags(cursor.next())
                log.debug(f"Built block {name} with {len(children)} entries")
                return replace(block, children=tuple(children), terminator=terminator)
            if kind == "BLOCK":
                raise UnterminatedBlock(name, block.line)
            children.append(self._build_entry(cursor, warnings))


class SectionBuilder:
    """Builds a Section from a RawSection.

    Entity holding sections go through the EntityBuilder. HEADER is split
    into one record per variable (group code 9), any other section into one
    record per code 0 run.
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()
        self.entity_builder = EntityBuilder(self.config)

    def build(self, raw: RawSection) -> tuple[Section, list[ParseWarning]]:
        """Build the entries of one section.

        Parameters
        ----------
        raw : RawSection
            Section as delimited by the section parser

        Returns
        -------
        tuple[Section, list[ParseWarning]]
            Built section and the warnings found while building it
        """
        name = raw.name.upper()
        if name in ENTITY_SECTIONS:
            entries, warnings = self.entity_builder.build(raw.tags)
            log.debug(f"Built {len(entries)} entries in section {raw.name}")
            return Section(name=raw.name, entries=tuple(entries)), warnings

        split_code = 9 if name == HEADER_SECTION else 0
        records = tuple(RawRecord(tokens=tuple(run)) for run in split_runs(raw.tags, split_code))
        log.debug(f"Built {len(records)} records in section {raw.name}")
        return Section(name=raw.name, entries=records), []
