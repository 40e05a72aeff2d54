"""Fatal conversion errors.

Lexical and structural problems abort a conversion and carry the line
number of the offending input. Semantic gaps such as unknown entity kinds
are not errors; they are reported as warnings on the document.
"""

from typing import Any


class DXFParseError(Exception):
    """Base class for all fatal DXF parse errors.

    Parameters
    ----------
    message : str
        Human readable description
    line : int
        1-based line number of the offending input
    """

    kind = "DXFParseError"

    def __init__(self, message: str, line: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.line = line

    def details(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary format."""
        error = {
            "kind": self.kind,
            "message": self.message,
            "line": self.line,
        }
        error.update(self.details())
        return error


class MalformedGroupCode(DXFParseError):
    """A group code line is not an integer in the range 0 to 1071."""

    kind = "MalformedGroupCode"

    def __init__(self, line: int, text: str) -> None:
        super().__init__(f"Malformed group code {text!r} at line {line}", line)
        self.text = text

    def details(self) -> dict[str, Any]:
        return {"text": self.text}


class TruncatedInput(DXFParseError):
    """The input ends with a group code that has no value line."""

    kind = "TruncatedInput"

    def __init__(self, line: int, text: str = "") -> None:
        super().__init__(f"Input ends after group code {text.strip()!r} at line {line} without a value", line)
        self.text = text

    def details(self) -> dict[str, Any]:
        return {"text": self.text}


class InvalidNumericValue(DXFParseError):
    """A numeric group code carries text that is not a number."""

    kind = "InvalidNumericValue"

    def __init__(self, code: int, raw: str, line: int) -> None:
        super().__init__(f"Invalid numeric value {raw!r} for group code {code} at line {line}", line)
        self.code = code
        self.raw = raw

    def details(self) -> dict[str, Any]:
        return {"code": self.code, "raw": self.raw}


class InvalidBooleanValue(DXFParseError):
    """A boolean group code carries something other than 0 or 1."""

    kind = "InvalidBooleanValue"

    def __init__(self, code: int, raw: str, line: int) -> None:
        super().__init__(f"Invalid boolean value {raw!r} for group code {code} at line {line}", line)
        self.code = code
        self.raw = raw

    def details(self) -> dict[str, Any]:
        return {"code": self.code, "raw": self.raw}


class UnterminatedSection(DXFParseError):
    """A SECTION is not closed by ENDSEC."""

    kind = "UnterminatedSection"

    def __init__(self, name: str, line: int) -> None:
        super().__init__(f"Section {name!r} is not terminated by ENDSEC (line {line})", line)
        self.name = name

    def details(self) -> dict[str, Any]:
        return {"name": self.name}


class UnterminatedBlock(DXFParseError):
    """A BLOCK is not closed by ENDBLK before the end of its section."""

    kind = "UnterminatedBlock"

    def __init__(self, name: str, line: int) -> None:
        super().__init__(f"Block {name!r} starting at line {line} is not terminated by ENDBLK", line)
        self.name = name

    def details(self) -> dict[str, Any]:
        return {"name": self.name}
