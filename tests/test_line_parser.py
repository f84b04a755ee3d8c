import pytest

from msgmonster.errors import DefinitionParseError
from msgmonster.parser.line_parser import (
    LineKind,
    classify_line,
    clean_comment,
    normalize_lines,
    parse_field_line,
)


class TestClassifyLine:
    def test_kinds(self):
        assert classify_line("") is LineKind.BLANK
        assert classify_line("   ") is LineKind.BLANK
        assert classify_line("  # a comment") is LineKind.COMMENT
        assert classify_line("float64 x  # inline") is LineKind.FIELD

    def test_normalize_strips_and_drops_leading_blanks(self):
        assert normalize_lines(["", "  ", " # c ", "int8 a", ""]) == ["# c", "int8 a", ""]


class TestCleanComment:
    def test_strips_hash_and_spaces(self):
        assert clean_comment("#   Pose of the robot  ") == "Pose of the robot"
        assert clean_comment("  # x") == "x"
        assert clean_comment("#") == ""

    def test_only_leading_hash_removed(self):
        assert clean_comment("# see #123") == "see #123"


class TestParseFieldLine:
    def test_type_and_name(self):
        line = parse_field_line("float64 x")
        assert line.type_token == "float64"
        assert line.name == "x"
        assert line.value == ""
        assert line.inline_comment == ""

    def test_constant_with_spaces_around_equals(self):
        line = parse_field_line("uint8 DEBUG = 1")
        assert line.name == "DEBUG"
        assert line.value == "1"
        assert line.int_value() == 1

    def test_inline_comment(self):
        line = parse_field_line("int8 OK=0 # everything is fine")
        assert line.value == "0"
        assert line.inline_comment == "everything is fine"

    def test_array_type_token(self):
        line = parse_field_line("float64[36] covariance")
        assert line.type_token == "float64[36]"
        assert line.name == "covariance"

    def test_non_integer_values(self):
        assert parse_field_line("string NAME=foo").int_value() is None
        assert parse_field_line("int8 NEG=-1").int_value() is None
        assert parse_field_line("float64 PI=3.14").int_value() is None

    def test_missing_name(self):
        with pytest.raises(DefinitionParseError):
            parse_field_line("float64")

    def test_only_comment_after_type(self):
        with pytest.raises(DefinitionParseError):
            parse_field_line("float64 # x")

    def test_bounded_string_type_token(self):
        line = parse_field_line("string<=10 name")
        assert line.type_token == "string<=10"
        assert line.name == "name"
        assert line.value == ""

    def test_bounded_string_constant(self):
        line = parse_field_line("string<=5[<=3] NAMES=abc")
        assert line.type_token == "string<=5[<=3]"
        assert line.name == "NAMES"
        assert line.value == "abc"
