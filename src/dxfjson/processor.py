"""DXF processor orchestrating the conversion pipeline.

This module provides the DXFProcessor class that runs the conversion
steps in order:
1. Tokenizer (group code / value pairs)
2. Value coercion (typed tags)
3. Section parser (raw sections)
4. Section builder (entities and raw records)
5. Document assembler (header, validation)
6. Exporter (JSON text)
"""

import logging
from collections.abc import Iterable

from .io.coercer import coerce_all
from .io.json_exporter import JsonExporter
from .io.tokenizer import DXFTokenizer, tokenize
from .models import Document, ParserConfig, ParseWarning, Section, Tag
from .process.assembler import DocumentAssembler
from .process.builder import SectionBuilder
from .process.sections import SectionParser
from .protocols import IExporter, ISectionBuilder

log = logging.getLogger(__name__)


class DXFProcessor:
    """Orchestrates DXF processing from text to JSON.

    Parameters
    ----------
    config : ParserConfig | None
        Conversion options, defaults if None
    builder : ISectionBuilder | None
        Section builder, a SectionBuilder if None
    exporter : IExporter | None
        Exporter, a JsonExporter if None
    """

    def __init__(
        self,
        config: ParserConfig | None = None,
        builder: ISectionBuilder | None = None,
        exporter: IExporter | None = None,
    ) -> None:
        self.config = config or ParserConfig()
        self.builder = builder or SectionBuilder(self.config)
        self.exporter = exporter or JsonExporter(self.config)
        self.assembler = DocumentAssembler()

    def parse_lines(self, lines: Iterable[str]) -> Document:
        """Parse a DXF document given as lines.

        Raises
        ------
        DXFParseError
            On any lexical or structural error
        """
        tags = coerce_all(DXFTokenizer(lines))
        return self._parse_tags(tags)

    def parse(self, text: str) -> Document:
        """Parse a DXF document given as text.

        Parameters
        ----------
        text : str
            Complete DXF document

        Returns
        -------
        Document
            Parsed document with header and warnings

        Raises
        ------
        DXFParseError
            On any lexical or structural error
        """
        return self._parse_tags(coerce_all(tokenize(text)))

    def _parse_tags(self, tags: Iterable[Tag]) -> Document:
        sections: list[Section] = []
        warnings: list[ParseWarning] = []
        for raw in SectionParser().parse(tags):
            section, section_warnings = self.builder.build(raw)
            sections.append(section)
            warnings.extend(section_warnings)
        log.info(f"Parsed {len(sections)} sections with {len(warnings)} warnings")
        return self.assembler.assemble(sections, warnings)

    def convert(self, text: str, flat: bool = False) -> str:
        """Convert DXF text to JSON text.

        Parameters
        ----------
        text : str
            Complete DXF document
        flat : bool
            Export the flat entity list instead of the full document

        Returns
        -------
        str
            JSON text
        """
        document = self.parse(text)
        if flat:
            return self.exporter.export_flat(document)
        return self.exporter.export_document(document)


def parse(text: str, config: ParserConfig | None = None) -> Document:
    """Parse DXF text into a Document."""
    return DXFProcessor(config).parse(text)


def convert(text: str, config: ParserConfig | None = None) -> str:
    """Convert DXF text into its structured JSON representation.

    Raises
    ------
    DXFParseError
        On any lexical or structural error
    """
    return DXFProcessor(config).convert(text)
