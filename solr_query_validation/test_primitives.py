from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from solr_query.contracts.errors import (
    InvalidPrimitiveKind,
    PrimitiveParseError,
    SpatialOperatorSubtypeMisuse,
    UnsupportedPrimitiveKind,
)
from solr_query.contracts.geometry import SpatialOperator
from solr_query.contracts.primitives import (
    PRIMITIVES,
    PrimitiveKind,
    classify_value,
    format_literal,
    is_glob_capable,
    is_range_capable,
    lookup,
    range_kind,
)
from solr_query.contracts.values import format_number, parse_date, parse_number


@pytest.mark.parametrize(
    ("kind", "glob_capable", "range_capable"),
    [
        ("string", True, True),
        ("number", False, True),
        ("date", True, True),
        ("glob", True, False),
        ("spatial", False, False),
    ],
)
def test_capabilities(kind: str, glob_capable: bool, range_capable: bool) -> None:
    assert is_glob_capable(kind) is glob_capable
    assert is_range_capable(kind) is range_capable
    assert lookup(PrimitiveKind(kind)) is lookup(kind)


def test_registry_is_read_only() -> None:
    with pytest.raises(TypeError):
        PRIMITIVES[PrimitiveKind.STRING] = PRIMITIVES[PrimitiveKind.NUMBER]  # type: ignore[index]


@pytest.mark.parametrize("op", list(SpatialOperator))
def test_spatial_operators_are_not_kinds(op: SpatialOperator) -> None:
    with pytest.raises(SpatialOperatorSubtypeMisuse) as exc:
        lookup(op)
    assert exc.value.code == "SQM005"
    with pytest.raises(SpatialOperatorSubtypeMisuse):
        is_range_capable(op.value)


@pytest.mark.parametrize("kind", ["boolean", "", None, 3])
def test_unknown_kinds(kind) -> None:
    with pytest.raises(UnsupportedPrimitiveKind):
        lookup(kind)
    with pytest.raises(UnsupportedPrimitiveKind):
        is_glob_capable(kind)


def test_range_kind() -> None:
    assert range_kind("number") is PrimitiveKind.NUMBER
    with pytest.raises(UnsupportedPrimitiveKind):
        range_kind("spatial")
    with pytest.raises(UnsupportedPrimitiveKind):
        range_kind("glob")


@pytest.mark.parametrize(
    ("value", "kind"),
    [
        ("", PrimitiveKind.STRING),
        (0, PrimitiveKind.NUMBER),
        (-2.5, PrimitiveKind.NUMBER),
        (datetime(2020, 1, 1, tzinfo=timezone.utc), PrimitiveKind.DATE),
        (date(2020, 1, 1), PrimitiveKind.DATE),
    ],
)
def test_classify_value(value, kind: PrimitiveKind) -> None:
    assert classify_value(value) is kind


@pytest.mark.parametrize("value", [None, False, float("inf"), b"bytes", object()])
def test_classify_rejects(value) -> None:
    with pytest.raises(InvalidPrimitiveKind):
        classify_value(value)


def test_format_literal() -> None:
    assert format_literal("string", None) == "*"
    assert format_literal("string", 'say "hi"') == '"say \\"hi\\""'
    assert format_literal("number", 12) == "12"
    assert format_literal("glob", "a b*") == "a\\ b*"
    assert format_literal("date", date(2020, 1, 2)) == "2020-01-02T00:00:00.000Z"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, "0"),
        (-0.0, "0"),
        (100.0, "100"),
        (0.30000000000000004, "0.30000000000000004"),
        (1.5e300, "1.5e+300"),
        (2.5e-10, "2.5e-10"),
        (0.00001, "0.00001"),
        (1e-6, "0.000001"),
        (1.5e-7, "1.5e-7"),
        (1e20, "100000000000000000000"),
    ],
)
def test_format_number(value, expected: str) -> None:
    assert format_number(value) == expected


# String codecs


def test_parse_number() -> None:
    assert parse_number("45") == 45
    assert isinstance(parse_number("45"), int)
    assert parse_number(" -985.4 ") == -985.4
    assert parse_number("1e3") == 1000.0
    assert parse_number(".5") == 0.5


@pytest.mark.parametrize("text", ["", "abc", "1,000", "0x10", "nan", "inf", "1e400"])
def test_parse_number_rejects(text: str) -> None:
    with pytest.raises(PrimitiveParseError) as exc:
        parse_number(text)
    assert exc.value.code == "SQM007"
    assert exc.value.text == text


def test_parse_date() -> None:
    parsed = parse_date("2019-02-23T09:34:23.924Z")
    assert parsed == datetime(2019, 2, 23, 9, 34, 23, 924000, tzinfo=timezone.utc)
    assert parse_date("2019-02-23T11:34:23+02:00") == datetime(
        2019, 2, 23, 9, 34, 23, tzinfo=timezone.utc
    )


def test_parse_date_rejects() -> None:
    with pytest.raises(PrimitiveParseError) as exc:
        parse_date("23/02/2019")
    assert exc.value.kind == "date"
