"""DXF I/O package.

This package provides:
- DXFTokenizer: Group code / value pairs from text lines
- coerce_all: Typed tags from tokens
- JsonExporter: Structured and flat JSON output
- JsonDocumentReader: Structured JSON back into a Document
- SLIReader: Flat entities from SLI mesh files
"""

from .coercer import coerce_all
from .json_exporter import JsonExporter
from .json_reader import JsonDocumentReader
from .sli_reader import InvalidSLIData, SLIReader
from .tokenizer import DXFTokenizer, tokenize

__all__ = [
    "DXFTokenizer",
    "tokenize",
    "coerce_all",
    "JsonExporter",
    "JsonDocumentReader",
    "SLIReader",
    "InvalidSLIData",
]
