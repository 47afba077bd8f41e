"""Tests for record and field splitting."""

import pytest

from gtfs_loader.errors import ErrorKind, TokenizerError
from gtfs_loader.parsing.tokenizer import next_field, read_record, split_records


def test_read_record_plain() -> None:
    assert read_record("a,b,c") == ["a", "b", "c"]


def test_read_record_quoted_delimiter() -> None:
    assert read_record('"x,y",z') == ["x,y", "z"]


def test_read_record_doubled_quote() -> None:
    assert read_record('"say ""hi""",next') == ['say "hi"', "next"]
    assert read_record('""""') == ['"']


def test_read_record_empty_fields() -> None:
    """Adjacent, leading and trailing commas yield empty fields."""
    assert read_record("field1,,field3") == ["field1", "", "field3"]
    assert read_record("field1,field2,") == ["field1", "field2", ""]
    assert read_record(",a") == ["", "a"]
    assert read_record("") == [""]
    assert read_record('"",x') == ["", "x"]


def test_read_record_no_trimming() -> None:
    assert read_record(" a , b ") == [" a ", " b "]


def test_read_record_unterminated_quote() -> None:
    with pytest.raises(TokenizerError) as exc_info:
        read_record('"abc')
    assert exc_info.value.kind is ErrorKind.QUOTE_EXPECTED


def test_read_record_comma_expected_after_quote() -> None:
    with pytest.raises(TokenizerError) as exc_info:
        read_record('"field"field2')
    assert exc_info.value.kind is ErrorKind.COMMA_EXPECTED


def test_next_field_quoted() -> None:
    record = '"quoted field",next'
    field, pos = next_field(record, 0)
    assert field == "quoted field"
    assert record[pos:] == "next"


def test_next_field_last() -> None:
    field, pos = next_field("a,last", 2)
    assert field == "last"
    assert pos is None


def test_next_field_past_end() -> None:
    with pytest.raises(TokenizerError) as exc_info:
        next_field("abc", 4)
    assert exc_info.value.kind is ErrorKind.EMPTY_SUBSTRING


def test_split_records_mixed_line_endings() -> None:
    assert split_records("r1\nr2\r\nr3\rr4") == ["r1", "r2", "r3", "r4"]


def test_split_records_trailing_terminator() -> None:
    assert split_records("r1\r\nr2\r\n") == ["r1", "r2"]
    assert split_records("r1\n") == ["r1"]


def test_split_records_keeps_interior_empty_lines() -> None:
    assert split_records("r1\n\nr2") == ["r1", "", "r2"]


def test_split_records_empty_text() -> None:
    assert split_records("") == []
