"""Group code classification and value coercion.

The classification table maps every group code from 0 to 1071 to the
semantic kind of its value. It is built once on import and never changed,
so it can be shared by any number of concurrent conversions.
"""

import logging
import math
import re
from collections.abc import Iterable, Iterator

from ..errors import InvalidBooleanValue, InvalidNumericValue
from ..models import GroupCodeClass, Tag, Token, Value

log = logging.getLogger(__name__)


_CODE_RANGES: tuple[tuple[int, int, GroupCodeClass], ...] = (
    (5, 5, GroupCodeClass.HANDLE),
    (10, 39, GroupCodeClass.POINT),
    (40, 59, GroupCodeClass.DOUBLE),
    (60, 79, GroupCodeClass.INTEGER),
    (90, 99, GroupCodeClass.INTEGER),
    (105, 105, GroupCodeClass.HANDLE),
    (110, 119, GroupCodeClass.POINT),
    (120, 149, GroupCodeClass.DOUBLE),
    (160, 179, GroupCodeClass.INTEGER),
    (210, 239, GroupCodeClass.POINT),
    (270, 289, GroupCodeClass.INTEGER),
    (290, 299, GroupCodeClass.BOOLEAN),
    (320, 369, GroupCodeClass.HANDLE),
    (370, 389, GroupCodeClass.INTEGER),
    (390, 399, GroupCodeClass.HANDLE),
    (400, 409, GroupCodeClass.INTEGER),
    (420, 429, GroupCodeClass.INTEGER),
    (440, 459, GroupCodeClass.INTEGER),
    (460, 469, GroupCodeClass.DOUBLE),
    (480, 481, GroupCodeClass.HANDLE),
    (1005, 1005, GroupCodeClass.HANDLE),
    (1010, 1039, GroupCodeClass.POINT),
    (1040, 1059, GroupCodeClass.DOUBLE),
    (1060, 1071, GroupCodeClass.INTEGER),
)


def _build_table() -> tuple[GroupCodeClass, ...]:
    table = [GroupCodeClass.STRING] * 1072
    for first, last, code_class in _CODE_RANGES:
        for code in range(first, last + 1):
            table[code] = code_class
    return tuple(table)


GROUP_CODE_TABLE: tuple[GroupCodeClass, ...] = _build_table()

_FLOAT_PATTERN = re.compile(r"^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$")
_INT_PATTERN = re.compile(r"^[+-]?[0-9]+$")


def classify(code: int) -> GroupCodeClass:
    """Get the value class of a group code.

    Parameters
    ----------
    code : int
        Group code

    Returns
    -------
    GroupCodeClass
        Value class, STRING for codes outside the documented ranges
    """
    if 0 <= code < len(GROUP_CODE_TABLE):
        return GROUP_CODE_TABLE[code]
    return GroupCodeClass.STRING


def is_numeric_code(code: int) -> bool:
    return classify(code) in (GroupCodeClass.DOUBLE, GroupCodeClass.POINT, GroupCodeClass.INTEGER)


def to_float(token: Token) -> float:
    text = token.raw_value.strip()
    if not _FLOAT_PATTERN.match(text):
        raise InvalidNumericValue(token.code, token.raw_value, token.line)
    value = float(text)
    # overflowing exponents such as 1e400 become inf
    if not math.isfinite(value):
        raise InvalidNumericValue(token.code, token.raw_value, token.line)
    return value


def to_int(token: Token) -> int:
    text = token.raw_value.strip()
    if not _INT_PATTERN.match(text):
        raise InvalidNumericValue(token.code, token.raw_value, token.line)
    return int(text)


def to_bool(token: Token) -> bool:
    text = token.raw_value.strip()
    if text == "1":
        return True
    if text == "0":
        return False
    raise InvalidBooleanValue(token.code, token.raw_value, token.line)


def coerce_value(token: Token) -> Value:
    """Convert the raw value of a token to its semantic type.

    Raises
    ------
    InvalidNumericValue
        If a float or integer group code carries non-numeric text
    InvalidBooleanValue
        If a boolean group code carries something other than 0 or 1
    """
    code_class = classify(token.code)
    if code_class in (GroupCodeClass.DOUBLE, GroupCodeClass.POINT):
        return to_float(token)
    if code_class is GroupCodeClass.INTEGER:
        return to_int(token)
    if code_class is GroupCodeClass.BOOLEAN:
        return to_bool(token)
    if code_class is GroupCodeClass.HANDLE:
        return token.raw_value.strip()
    return token.raw_value


def coerce(token: Token) -> Tag:
    """Coerce a single token into a typed tag."""
    return Tag(code=token.code, value=coerce_value(token), line=token.line)


def coerce_all(tokens: Iterable[Token]) -> Iterator[Tag]:
    for token in tokens:
        yield coerce(token)
