"""Protocol definitions for the pluggable steps of a conversion.

The section builder and the exporter are passed to the DXFProcessor, so
alternative implementations can be used without changing the pipeline.
"""

from typing import Protocol

from .models import Document, ParseWarning, RawSection, Section


class ISectionBuilder(Protocol):
    """Protocol for building sections from raw sections."""

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
        ...


class IExporter(Protocol):
    """Protocol for exporting a document to text."""

    def export_document(self, document: Document) -> str:
        """Export a document.

        Parameters
        ----------
        document : Document
            Parsed document

        Returns
        -------
        str
            Exported text
        """
        ...

    def export_flat(self, document: Document) -> str: ...
