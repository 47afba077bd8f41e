"""Typed errors raised while loading a GTFS feed."""

from enum import Enum


class ErrorKind(Enum):
    """Cause of a load failure, for callers that branch on it."""

    EMPTY_SUBSTRING = "Substring is empty"
    COMMA_EXPECTED = "A comma was expected, but not found"
    QUOTE_EXPECTED = "A quote was expected, but not found"
    INVALID_FIELD_TYPE = "An invalid field type was found"
    INVALID_VALUE = "Could not convert value to target type"
    INVALID_COLOR = "An invalid color was found"
    MISSING_REQUIRED_FIELDS = "One or more required fields is missing"
    HEADER_RECORD_MISMATCH = "The number of header and data fields are not the same"
    INVALID_URL = "The feed location is not a valid URL"
    DOWNLOAD_FAILED = "Downloading the feed archive failed"
    FILE_NOT_FOUND = "File not found"
    EXTRACTION_FAILED = "Extracting the feed archive failed"


class GTFSError(Exception):
    """Base error carrying an ErrorKind and where in the feed it happened."""

    def __init__(self, kind: ErrorKind, detail: str | None = None) -> None:
        self.kind = kind
        self.detail = detail
        self.table: str | None = None
        self.line: int | None = None
        self.column: str | None = None
        super().__init__(kind.value)

    def with_context(
        self,
        table: str | None = None,
        line: int | None = None,
        column: str | None = None,
    ) -> "GTFSError":
        """Attach location details without overwriting ones already set."""
        if self.table is None:
            self.table = table
        if self.line is None:
            self.line = line
        if self.column is None:
            self.column = column
        return self

    def __str__(self) -> str:
        location = []
        if self.table:
            location.append(self.table)
        if self.line is not None:
            location.append(f"line {self.line}")
        if self.column:
            location.append(f"column {self.column}")

        message = self.kind.value
        if self.detail:
            message = f"{message}: {self.detail}"
        if location:
            message = f"{message} ({', '.join(location)})"
        return message


class TokenizerError(GTFSError):
    """Malformed delimited text."""


class BindingError(GTFSError):
    """A raw field could not be converted to its target type."""


class StructuralError(GTFSError):
    """A table's shape does not match its header or schema."""


class SourceError(GTFSError):
    """The feed could not be retrieved or unpacked."""
