"""Split GTFS text into records and records into raw fields."""

import re

from gtfs_loader.errors import ErrorKind, TokenizerError

_RECORD_TERMINATOR = re.compile(r"\r\n|\r|\n")

QUOTE = '"'
DELIMITER = ","


def split_records(text: str) -> list[str]:
    """
    Split text into records on \\r\\n, \\n or a lone \\r.

    A terminator at the very end of the text closes the last record instead
    of opening an empty one. Empty lines elsewhere are kept as "" records.
    """
    if not text:
        return []

    records = _RECORD_TERMINATOR.split(text)
    if records[-1] == "":
        records.pop()
    return records


def next_field(record: str, start: int) -> tuple[str, int | None]:
    """
    Read one field of record beginning at index start.

    Returns the field value and the index where the following field starts,
    or None when the field was the last one in the record.
    """
    if start > len(record):
        raise TokenizerError(ErrorKind.EMPTY_SUBSTRING, f"no field at offset {start}")

    if record.startswith(QUOTE, start):
        return _next_quoted_field(record, start + 1)

    end = record.find(DELIMITER, start)
    if end == -1:
        return record[start:], None
    return record[start:end], end + 1


def _next_quoted_field(record: str, start: int) -> tuple[str, int | None]:
    chunks: list[str] = []
    pos = start
    while True:
        closing = record.find(QUOTE, pos)
        if closing == -1:
            raise TokenizerError(ErrorKind.QUOTE_EXPECTED, "unterminated quoted field")
        chunks.append(record[pos:closing])

        # "" inside a quoted field is a literal quote
        if record.startswith(QUOTE, closing + 1):
            chunks.append(QUOTE)
            pos = closing + 2
            continue

        pos = closing + 1
        break

    value = "".join(chunks)
    if pos == len(record):
        return value, None
    if record[pos] != DELIMITER:
        raise TokenizerError(
            ErrorKind.COMMA_EXPECTED, f"unexpected {record[pos]!r} after quoted field"
        )
    return value, pos + 1


def read_record(record: str) -> list[str]:
    """Split one record into its raw field strings, in column order."""
    fields: list[str] = []
    pos: int | None = 0
    while pos is not None:
        field, pos = next_field(record, pos)
        fields.append(field)
    return fields
