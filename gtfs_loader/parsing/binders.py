"""Per-type conversion of raw GTFS field strings into typed values."""

import datetime as dt
import math
import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, TypeVar
from urllib.parse import urlsplit
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from gtfs_loader.errors import BindingError, ErrorKind
from gtfs_loader.gtfs.models import Color, Locale

EnumT = TypeVar("EnumT", bound=IntEnum)

Converter = Callable[[str], Any]

REFERENCE_DATE = dt.date(2000, 1, 1)

_DIGITS = re.compile(r"[0-9]+")
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_COLOR = re.compile(r"#?([0-9A-Fa-f]{2})([0-9A-Fa-f]{2})([0-9A-Fa-f]{2})")
_TIME_OF_DAY = re.compile(r"([0-9]+):([0-5][0-9]):([0-5][0-9])")
_SERVICE_DATE = re.compile(r"[0-9]{8}")
_LANGUAGE_TAG = re.compile(r"([A-Za-z]{2,8})(?:[-_]([A-Za-z0-9]{1,8}))*")


@dataclass(frozen=True)
class Binding:
    """Where a column goes in a record and how its raw string is converted."""

    attribute: str
    convert: Converter


def bind(raw: str, builder: dict[str, Any], binding: Binding) -> None:
    """Convert raw and store it in the record builder under binding.attribute."""
    builder[binding.attribute] = binding.convert(raw)


def _invalid(kind: ErrorKind, raw: str, expected: str) -> BindingError:
    return BindingError(kind, f"{raw!r} is not {expected}")


def required_string(raw: str) -> str:
    return raw


def optional_string(raw: str) -> str | None:
    return raw or None


def required_uint(raw: str) -> int:
    """Strict base-10 unsigned integer: digits only, no sign or spaces."""
    if not _DIGITS.fullmatch(raw):
        raise _invalid(ErrorKind.INVALID_FIELD_TYPE, raw, "an unsigned integer")
    try:
        return int(raw)
    except ValueError:
        # Past the interpreter's integer string conversion limit
        raise _invalid(ErrorKind.INVALID_FIELD_TYPE, raw, "an unsigned integer") from None


def optional_uint(raw: str) -> int | None:
    if not raw:
        return None
    return required_uint(raw)


def optional_float(raw: str) -> float | None:
    if not raw:
        return None
    if not _DECIMAL.fullmatch(raw):
        raise _invalid(ErrorKind.INVALID_VALUE, raw, "a number")
    value = float(raw)
    if not math.isfinite(value):
        raise _invalid(ErrorKind.INVALID_VALUE, raw, "a finite number")
    return value


def required_url(raw: str) -> str:
    """Absolute URL with a scheme and a host."""
    try:
        parts = urlsplit(raw)
    except ValueError:
        raise _invalid(ErrorKind.INVALID_FIELD_TYPE, raw, "a URL") from None
    if not parts.scheme or not parts.netloc or any(c.isspace() for c in raw):
        raise _invalid(ErrorKind.INVALID_FIELD_TYPE, raw, "a URL")
    return raw


def optional_url(raw: str) -> str | None:
    if not raw:
        return None
    return required_url(raw)


def required_timezone(raw: str) -> ZoneInfo:
    """IANA time zone identifier such as "Europe/Paris"."""
    if not raw:
        raise _invalid(ErrorKind.INVALID_FIELD_TYPE, raw, "a time zone")
    try:
        return ZoneInfo(raw)
    except (ZoneInfoNotFoundError, ValueError):
        raise _invalid(ErrorKind.INVALID_FIELD_TYPE, raw, "a known time zone") from None


def optional_timezone(raw: str) -> ZoneInfo | None:
    if not raw:
        return None
    return required_timezone(raw)


def optional_locale(raw: str) -> Locale | None:
    """
    Language tag such as "fr", "en-US" or "pt_BR".

    Only the tag's shape is checked: a 2-8 letter language subtag followed by
    optional alphanumeric subtags. Whether the language exists is not.
    """
    if not raw:
        return None
    if not _LANGUAGE_TAG.fullmatch(raw):
        raise _invalid(ErrorKind.INVALID_FIELD_TYPE, raw, "a language tag")

    language, *rest = re.split(r"[-_]", raw)
    region = None
    for subtag in rest:
        # ISO 3166 alpha-2 or UN M.49 numeric region
        if (len(subtag) == 2 and subtag.isalpha()) or (len(subtag) == 3 and subtag.isdigit()):
            region = subtag.upper()
            break
    return Locale(tag=raw, language=language.lower(), region=region)


def optional_color(raw: str) -> Color | None:
    """Six hex digits, with or without a leading '#'."""
    if not raw:
        return None
    match = _COLOR.fullmatch(raw)
    if match is None:
        raise _invalid(ErrorKind.INVALID_COLOR, raw, "a six digit hex color")
    red, green, blue = (int(component, 16) for component in match.groups())
    return Color(red=red, green=green, blue=blue)


def required_enum(enum_type: type[EnumT]) -> Callable[[str], EnumT]:
    """Build a converter for a GTFS integer enumeration."""

    def convert(raw: str) -> EnumT:
        if not _DIGITS.fullmatch(raw):
            raise _invalid(ErrorKind.INVALID_VALUE, raw, f"a valid {enum_type.__name__}")
        try:
            return enum_type(int(raw))
        except ValueError:
            raise _invalid(ErrorKind.INVALID_VALUE, raw, f"a valid {enum_type.__name__}") from None

    return convert


def optional_enum(enum_type: type[EnumT]) -> Callable[[str], EnumT | None]:
    convert_required = required_enum(enum_type)

    def convert(raw: str) -> EnumT | None:
        if not raw:
            return None
        return convert_required(raw)

    return convert


def service_date(raw: str) -> dt.date:
    """YYYYMMDD calendar date."""
    if not _SERVICE_DATE.fullmatch(raw):
        raise _invalid(ErrorKind.INVALID_FIELD_TYPE, raw, "a YYYYMMDD date")
    try:
        return dt.date(int(raw[:4]), int(raw[4:6]), int(raw[6:]))
    except ValueError:
        raise _invalid(ErrorKind.INVALID_FIELD_TYPE, raw, "a YYYYMMDD date") from None


def parse_time(raw: str) -> int:
    """Parse H:MM:SS or HH:MM:SS to seconds since midnight, supporting >24h."""
    match = _TIME_OF_DAY.fullmatch(raw)
    if match is None:
        raise _invalid(ErrorKind.INVALID_FIELD_TYPE, raw, "an HH:MM:SS time")
    try:
        hours, minutes, seconds = (int(part) for part in match.groups())
    except ValueError:
        raise _invalid(ErrorKind.INVALID_FIELD_TYPE, raw, "an HH:MM:SS time") from None
    return hours * 3600 + minutes * 60 + seconds


def time_of_day(timezone: ZoneInfo) -> Callable[[str], dt.datetime | None]:
    """
    Build a converter anchoring stop times on REFERENCE_DATE in timezone.

    Hours past 23 roll over to the following days, so "25:30:00" becomes
    01:30 on 2000-01-02. Empty fields (untimed stops) convert to None.
    """
    midnight = dt.datetime.combine(REFERENCE_DATE, dt.time(), tzinfo=timezone)

    def convert(raw: str) -> dt.datetime | None:
        if not raw:
            return None
        try:
            return midnight + dt.timedelta(seconds=parse_time(raw))
        except OverflowError:
            raise _invalid(ErrorKind.INVALID_FIELD_TYPE, raw, "a time within range") from None

    return convert
