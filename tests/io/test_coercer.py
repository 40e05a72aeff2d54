"""Tests for group code classification and value coercion."""

import pytest

from dxfjson.errors import InvalidBooleanValue, InvalidNumericValue
from dxfjson.io.coercer import GROUP_CODE_TABLE, classify, coerce, coerce_all, is_numeric_code
from dxfjson.models import GroupCodeClass, Tag, Token


def token(code: int, raw: str, line: int = 1) -> Token:
    return Token(code=code, raw_value=raw, line=line)


class TestClassify:
    @pytest.mark.parametrize(
        "code,expected",
        [
            (0, GroupCodeClass.STRING),
            (1, GroupCodeClass.STRING),
            (5, GroupCodeClass.HANDLE),
            (8, GroupCodeClass.STRING),
            (10, GroupCodeClass.POINT),
            (39, GroupCodeClass.POINT),
            (40, GroupCodeClass.DOUBLE),
            (62, GroupCodeClass.INTEGER),
            (90, GroupCodeClass.INTEGER),
            (100, GroupCodeClass.STRING),
            (210, GroupCodeClass.POINT),
            (290, GroupCodeClass.BOOLEAN),
            (330, GroupCodeClass.HANDLE),
            (420, GroupCodeClass.INTEGER),
            (999, GroupCodeClass.STRING),
            (1000, GroupCodeClass.STRING),
            (1005, GroupCodeClass.HANDLE),
            (1010, GroupCodeClass.POINT),
            (1040, GroupCodeClass.DOUBLE),
            (1071, GroupCodeClass.INTEGER),
        ],
    )
    def test_classify(self, code, expected):
        assert classify(code) is expected

    def test_undocumented_codes_are_strings(self):
        assert classify(80) is GroupCodeClass.STRING
        assert classify(250) is GroupCodeClass.STRING

    def test_table_covers_all_codes(self):
        assert len(GROUP_CODE_TABLE) == 1072
        assert isinstance(GROUP_CODE_TABLE, tuple)

    def test_is_numeric_code(self):
        assert is_numeric_code(10)
        assert is_numeric_code(70)
        assert not is_numeric_code(8)
        assert not is_numeric_code(290)


class TestCoerce:
    """Test value coercion per group code class."""

    def test_string_is_verbatim(self):
        assert coerce(token(1, "  Hello World ")).value == "  Hello World "

    def test_handle_is_trimmed_string(self):
        tag = coerce(token(5, " 1A "))
        assert tag.value == "1A"
        assert isinstance(tag.value, str)

    def test_handle_keeps_leading_zeros(self):
        assert coerce(token(330, "001F")).value == "001F"

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("1.5", 1.5),
            ("-0.25", -0.25),
            ("+3", 3.0),
            ("10.", 10.0),
            (".5", 0.5),
            ("1e3", 1000.0),
            ("2.5E-2", 0.025),
            ("  7.0  ", 7.0),
        ],
    )
    def test_float_values(self, raw, expected):
        tag = coerce(token(10, raw))
        assert tag.value == expected
        assert isinstance(tag.value, float)

    @pytest.mark.parametrize("raw", ["abc", "", "nan", "inf", "1_000.0", "1.2.3", "0x10", "1,5", "1e400", "-1e400"])
    def test_invalid_float(self, raw):
        with pytest.raises(InvalidNumericValue) as exc_info:
            coerce(token(40, raw, line=12))

        error = exc_info.value
        assert error.line == 12
        assert error.code == 40
        assert error.raw == raw

    @pytest.mark.parametrize("raw,expected", [("0", 0), ("-3", -3), (" 256 ", 256), ("+7", 7)])
    def test_integer_values(self, raw, expected):
        tag = coerce(token(70, raw))
        assert tag.value == expected
        assert isinstance(tag.value, int)

    @pytest.mark.parametrize("raw", ["1.0", "x", "", "1e2"])
    def test_invalid_integer(self, raw):
        with pytest.raises(InvalidNumericValue):
            coerce(token(70, raw))

    def test_boolean_values(self):
        assert coerce(token(290, "1")).value is True
        assert coerce(token(290, " 0 ")).value is False

    def test_invalid_boolean(self):
        with pytest.raises(InvalidBooleanValue) as exc_info:
            coerce(token(291, "2", line=4))

        assert exc_info.value.to_dict() == {
            "kind": "InvalidBooleanValue",
            "message": exc_info.value.message,
            "line": 4,
            "code": 291,
            "raw": "2",
        }

    def test_coerce_all_keeps_order_and_lines(self):
        tags = list(coerce_all([token(0, "LINE", 1), token(10, "2.0", 3)]))

        assert tags == [Tag(0, "LINE", 1), Tag(10, 2.0, 3)]
