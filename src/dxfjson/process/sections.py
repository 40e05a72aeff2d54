"""Section parser grouping typed tags into top-level DXF sections.

The parser is a two state machine (outside / inside a section). Tags found
outside of any section are tolerated and kept in an implicit PREAMBLE
section, since lenient writers emit such noise.
"""

import logging
from collections.abc import Iterable, Iterator
from enum import Enum
from itertools import chain

from ..errors import UnterminatedSection
from ..models import RawSection, Tag

log = logging.getLogger(__name__)


PREAMBLE = "PREAMBLE"


class ParserState(Enum):
    OUTSIDE = "outside"
    IN_SECTION = "in_section"


def is_marker(tag: Tag, value: str) -> bool:
    """Check if a tag is the code 0 structure marker with the given value."""
    return tag.code == 0 and tag.value == value


class SectionParser:
    """Splits a stream of typed tags into raw sections.

    Sections are yielded one at a time, so at most one section is
    buffered in memory.
    """

    def __init__(self) -> None:
        self.state = ParserState.OUTSIDE

    def parse(self, tags: Iterable[Tag]) -> Iterator[RawSection]:
        """Yield the sections of a tag stream in encounter order.

        Parameters
        ----------
        tags : Iterable[Tag]
            Coerced tags of a whole document

        Raises
        ------
        UnterminatedSection
            If a section is not closed by ENDSEC
        """
        self.state = ParserState.OUTSIDE
        tag_iter = iter(tags)
        noise: list[Tag] = []
        found_eof = False
        for tag in tag_iter:
            if is_marker(tag, "EOF"):
                found_eof = True
                break
            if is_marker(tag, "SECTION"):
                if noise:
                    yield self._preamble(noise)
                    noise = []
                yield self._read_section(tag, tag_iter)
                continue
            noise.append(tag)

        if not found_eof:
            log.debug("DXF stream ends without EOF marker")
        if noise:
            yield self._preamble(noise)

    def _preamble(self, noise: list[Tag]) -> RawSection:
        log.warning(f"Found {len(noise)} tags outside of any section at line {noise[0].line}")
        return RawSection(name=PREAMBLE, tags=tuple(noise), line=noise[0].line)

    def _read_section(self, start: Tag, tag_iter: Iterator[Tag]) -> RawSection:
        self.state = ParserState.IN_SECTION
        name_tag = next(tag_iter, None)
        if name_tag is None:
            raise UnterminatedSection("", start.line)

        pending: list[Tag] = []
        if name_tag.code == 2:
            name = str(name_tag.value)
        else:
            log.warning(f"SECTION at line {start.line} has no name tag")
            name = ""
            pending.append(name_tag)

        body: list[Tag] = []
        for tag in chain(pending, tag_iter):
            if is_marker(tag, "ENDSEC"):
                self.state = ParserState.OUTSIDE
                log.debug(f"Read section {name} with {len(body)} tags")
                return RawSection(name=name, tags=tuple(body), line=start.line)
            if is_marker(tag, "SECTION") or is_marker(tag, "EOF"):
                raise UnterminatedSection(name, tag.line)
            body.append(tag)
        raise UnterminatedSection(name, start.line)
