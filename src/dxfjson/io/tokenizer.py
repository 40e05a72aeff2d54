"""DXF tokenizer splitting text into group code / value pairs.

Every DXF token spans two physical lines: the group code and its value.
The tokenizer reads them pairwise in a single forward pass and yields
immutable tokens lazily, so large files are never materialized as a whole.
"""

import io
import logging
import re
from collections.abc import Iterable, Iterator

from ..errors import MalformedGroupCode, TruncatedInput
from ..models import Token

log = logging.getLogger(__name__)


MIN_GROUP_CODE = 0
MAX_GROUP_CODE = 1071

_BOM = "\ufeff"
_CODE_PATTERN = re.compile(r"^[0-9]+$")


def strip_terminator(line: str) -> str:
    """Remove the line terminator but keep all other whitespace."""
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n") or line.endswith("\r"):
        return line[:-1]
    return line


def parse_group_code(text: str, line: int) -> int:
    """Parse the text of a group code line.

    Parameters
    ----------
    text : str
        Group code line without terminator
    line : int
        1-based line number, used for error reporting

    Returns
    -------
    int
        Group code in the range 0 to 1071

    Raises
    ------
    MalformedGroupCode
        If the line is not a decimal integer in the valid range
    """
    stripped = text.strip()
    if not _CODE_PATTERN.match(stripped):
        raise MalformedGroupCode(line, text)
    code = int(stripped)
    if code < MIN_GROUP_CODE or code > MAX_GROUP_CODE:
        raise MalformedGroupCode(line, text)
    return code


class DXFTokenizer:
    """Single pass tokenizer over a sequence of text lines.

    The tokenizer can be iterated more than once only if the underlying
    line source can; it never buffers or backtracks itself.
    """

    def __init__(self, lines: Iterable[str]) -> None:
        """Initialize tokenizer with a line source.

        Parameters
        ----------
        lines : Iterable[str]
            Lines of a DXF document, with or without line terminators
        """
        self.lines = lines

    def __iter__(self) -> Iterator[Token]:
        return self.tokens()

    def tokens(self) -> Iterator[Token]:
        """Yield tokens in source order.

        Raises
        ------
        MalformedGroupCode
            If a group code line is not a valid group code
        TruncatedInput
            If the last group code has no value line
        """
        line_iter = iter(self.lines)
        line_number = 0
        for code_line in line_iter:
            line_number += 1
            code_text = strip_terminator(code_line)
            if line_number == 1 and code_text.startswith(_BOM):
                code_text = code_text[len(_BOM) :]

            value_line = next(line_iter, None)
            if value_line is None:
                if code_text.strip() == "":
                    log.debug(f"Ignoring trailing blank line {line_number}")
                    return
                raise TruncatedInput(line_number, code_text)

            code = parse_group_code(code_text, line_number)
            yield Token(code=code, raw_value=strip_terminator(value_line), line=line_number)
            line_number += 1


def tokenize(text: str) -> Iterator[Token]:
    """Tokenize a complete DXF document given as text.

    Line endings are normalized (``\\r\\n`` and ``\\r`` become ``\\n``)
    while the lines are streamed.
    """
    stream = io.StringIO(text, newline=None)
    return DXFTokenizer(stream).tokens()
