"""Primitive value types and their text codecs."""

from __future__ import annotations

import math
import re
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Annotated, Any, Union

from pydantic import AfterValidator, BeforeValidator, StrictFloat, StrictInt, StrictStr
from pydantic_core import PydanticCustomError

from solr_query.contracts.errors import PrimitiveParseError

_NUMBER_TEXT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER_TEXT = re.compile(r"[+-]?\d+")
_EXPONENT = re.compile(r"e([+-])0*(\d)")

# Characters with meaning in Lucene query syntax; '*' and '?' stay live in globs.
_GLOB_SPECIALS = re.compile(r'[ +\-&|!(){}\[\]^"~:/\\]')
_QUOTED_SPECIALS = re.compile(r'["\\]')


def is_number(value: object) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def is_date(value: object) -> bool:
    return isinstance(value, (datetime, date))


def as_utc(value: datetime | date) -> datetime:
    """Normalize a date-like value to an aware UTC datetime.

    Naive datetimes are taken to already be in UTC.
    """
    if not isinstance(value, datetime):
        return datetime.combine(value, time(), tzinfo=timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_number(text: str) -> int | float:
    """Parse a decimal number, keeping integers exact."""
    stripped = text.strip()
    if not _NUMBER_TEXT.fullmatch(stripped):
        raise PrimitiveParseError("number", text)
    if _INTEGER_TEXT.fullmatch(stripped):
        return int(stripped)
    value = float(stripped)
    if not math.isfinite(value):
        raise PrimitiveParseError("number", text)
    return value


def parse_date(text: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime."""
    try:
        parsed = datetime.fromisoformat(text.strip())
    except ValueError as e:
        raise PrimitiveParseError("date", text) from e
    return as_utc(parsed)


def format_number(value: int | float) -> str:
    """Render a number the way the search engine expects it.

    Uses the shortest round-trip digits. Integral values drop the fractional
    part, and magnitudes in ``[1e-6, 1e21)`` are written positionally; only
    values outside that band use an exponent (``1e-7``, ``1e+21``).
    """
    if isinstance(value, int):
        return str(value)
    if value == 0:
        return "0"
    text = repr(value)
    if "e" in text and 1e-6 <= abs(value) < 1e21:
        text = format(Decimal(text), "f")
    elif text.endswith(".0"):
        text = text[:-2]
    return _EXPONENT.sub(r"e\1\2", text)


def format_date(value: datetime | date) -> str:
    """ISO-8601 in UTC with exactly millisecond precision."""
    utc = as_utc(value)
    return f"{utc.year:04d}-{utc:%m-%dT%H:%M:%S}.{utc.microsecond // 1000:03d}Z"


def quote_string(value: str) -> str:
    return '"' + _QUOTED_SPECIALS.sub(r"\\\g<0>", value) + '"'


def escape_glob(value: str) -> str:
    return _GLOB_SPECIALS.sub(r"\\\g<0>", value)


# pydantic field types


def _reject_bool(value: Any) -> Any:
    if isinstance(value, bool):
        raise PydanticCustomError("number_type", "Input should be a number, not a boolean")
    return value


def _require_finite(value: int | float) -> int | float:
    if isinstance(value, float) and not math.isfinite(value):
        raise PydanticCustomError("finite_number", "Input should be a finite number")
    return value


def _coerce_date(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return as_utc(value)
    if isinstance(value, str):
        try:
            return parse_date(value)
        except PrimitiveParseError as e:
            raise PydanticCustomError("primitive_parse_error", str(e)) from e
    raise PydanticCustomError("date_type", "Input should be a datetime or an ISO-8601 string")


def _number_from_string(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return parse_number(value)
        except PrimitiveParseError as e:
            raise PydanticCustomError("primitive_parse_error", str(e)) from e
    return value


StringValue = StrictStr
NumberValue = Annotated[
    Union[StrictInt, StrictFloat],
    BeforeValidator(_reject_bool),
    AfterValidator(_require_finite),
]
DateValue = Annotated[datetime, BeforeValidator(_coerce_date)]

# Numbers as they arrive from query strings and form fields.
NumberInput = Annotated[NumberValue, BeforeValidator(_number_from_string)]
