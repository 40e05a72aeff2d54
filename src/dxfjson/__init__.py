"""Conversion of textual DXF documents into deterministic JSON."""

from .errors import (
    DXFParseError,
    InvalidBooleanValue,
    InvalidNumericValue,
    MalformedGroupCode,
    TruncatedInput,
    UnterminatedBlock,
    UnterminatedSection,
)
from .models import Document, DuplicatePolicy, Entity, ParserConfig, RawRecord
from .processor import DXFProcessor, convert, parse

__all__ = [
    "convert",
    "parse",
    "DXFProcessor",
    "Document",
    "Entity",
    "RawRecord",
    "ParserConfig",
    "DuplicatePolicy",
    "DXFParseError",
    "MalformedGroupCode",
    "TruncatedInput",
    "InvalidNumericValue",
    "InvalidBooleanValue",
    "UnterminatedSection",
    "UnterminatedBlock",
]
