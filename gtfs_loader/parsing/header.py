"""Resolve a header record to a table's field identifiers."""

from enum import Enum
from typing import TypeVar

from gtfs_loader.errors import BindingError, ErrorKind
from gtfs_loader.parsing.tokenizer import read_record

FieldT = TypeVar("FieldT", bound=Enum)

BYTE_ORDER_MARK = "\ufeff"


def read_header(record: str, field_type: type[FieldT]) -> list[FieldT]:
    """
    Map each column name of a header record to a member of field_type.

    Column names must match exactly. An unknown column fails the whole header
    with INVALID_FIELD_TYPE instead of being mapped to the nonstandard member.
    """
    names = read_record(record.removeprefix(BYTE_ORDER_MARK))

    header: list[FieldT] = []
    for name in names:
        try:
            header.append(field_type(name))
        except ValueError:
            raise BindingError(
                ErrorKind.INVALID_FIELD_TYPE, f"unrecognized column {name!r}"
            ).with_context(column=name) from None
    return header
