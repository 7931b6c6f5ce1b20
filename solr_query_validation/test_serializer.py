from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from solr_query.builders import (
    and_,
    closed_range,
    constant_score,
    contains,
    glob_literal,
    intersects,
    is_disjoint_to,
    is_within,
    literal,
    named_term,
    not_,
    or_,
    prohibited,
    range_,
    required,
    term,
)
from solr_query.contracts import geometry as geometry_mod
from solr_query.contracts.elements import StringLiteral
from solr_query.contracts.errors import GeometryError, UnsupportedNodeKind
from solr_query.serializer import SolrQuery, render, to_solr_query
from solr_query_validation.stubs import (
    COMPLEX_TREE_QUERY,
    build_complex_tree,
    build_complex_tree_json,
)


def q(node) -> str:
    out = to_solr_query(node)
    assert out.ok is True, [str(e) for e in out.errors]
    assert isinstance(out.data, SolrQuery)
    return out.data


# Literals


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("", '""'),
        ("a", '"a"'),
        ("a b", '"a b"'),
        ("ajsncn*mf.ef\\jnwefewnf", '"ajsncn*mf.ef\\\\jnwefewnf"'),
        ('"', '"\\""'),
        ('a"b"', '"a\\"b\\""'),
        ('ajsnc"nemf.efjnwefewnf', '"ajsnc\\"nemf.efjnwefewnf"'),
    ],
)
def test_string_literals_are_quoted_and_escaped(value: str, expected: str) -> None:
    assert q(literal(value)) == expected


@pytest.mark.parametrize(
    ("pattern", "expected"),
    [
        ("", ""),
        ("a", "a"),
        ("*", "*"),
        ("a b", "a\\ b"),
        ("Hello Wor?d*", "Hello\\ Wor?d*"),
        (
            'He +-&|!(){}[]^"~:/\\llo W??o!!!r?d*',
            'He\\ \\+\\-\\&\\|\\!\\(\\)\\{\\}\\[\\]\\^\\"\\~\\:\\/\\\\llo\\ W??o\\!\\!\\!r?d*',
        ),
    ],
)
def test_glob_literals_escape_everything_but_wildcards(pattern: str, expected: str) -> None:
    assert q(glob_literal(pattern)) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (6, "6"),
        (-1000.245, "-1000.245"),
        (7.0, "7"),
        (0.1, "0.1"),
        (1e-7, "1e-7"),
        (1e21, "1e+21"),
        (0.00001, "0.00001"),
        (1.23e-5, "0.0000123"),
        (1e-6, "0.000001"),
        (1e16, "10000000000000000"),
        (-3, "-3"),
    ],
)
def test_numbers_render_in_shortest_form(value, expected: str) -> None:
    assert q(literal(value)) == expected


def test_dates_render_in_utc_with_milliseconds() -> None:
    assert q(literal(datetime(2010, 8, 6, 4, 23, 4, tzinfo=timezone.utc))) == "2010-08-06T04:23:04.000Z"
    assert (
        q(literal(datetime(2010, 8, 6, 4, 23, 4, 53000, tzinfo=timezone.utc)))
        == "2010-08-06T04:23:04.053Z"
    )


def test_early_years_are_zero_padded() -> None:
    assert q(literal(datetime(999, 1, 2, tzinfo=timezone.utc))) == "0999-01-02T00:00:00.000Z"
    assert q(literal(date(33, 12, 31))) == "0033-12-31T00:00:00.000Z"


def test_dates_are_normalized_to_utc() -> None:
    plus_two = timezone(timedelta(hours=2))
    assert q(literal(datetime(2010, 8, 6, 6, 23, 4, tzinfo=plus_two))) == "2010-08-06T04:23:04.000Z"
    # Naive datetimes are taken as UTC; plain dates are midnight UTC.
    assert q(literal(datetime(2010, 8, 6, 4, 23, 4))) == "2010-08-06T04:23:04.000Z"
    assert q(literal(date(2010, 8, 6))) == "2010-08-06T00:00:00.000Z"


# Ranges


def test_wildcard_ranges() -> None:
    assert q(closed_range(4, None)) == "[4 TO *]"
    assert q(closed_range(None, 4)) == "[* TO 4]"


@pytest.mark.parametrize(
    ("closed_lower", "closed_upper", "expected_numbers", "expected_strings"),
    [
        (True, True, "[4 TO 15]", '["b" TO "cat"]'),
        (False, True, "{4 TO 15]", '{"b" TO "cat"]'),
        (True, False, "[4 TO 15}", '["b" TO "cat"}'),
        (False, False, "{4 TO 15}", '{"b" TO "cat"}'),
    ],
)
def test_range_brackets(
    closed_lower: bool, closed_upper: bool, expected_numbers: str, expected_strings: str
) -> None:
    assert q(range_(closed_lower, closed_upper, 4, 15)) == expected_numbers
    assert q(range_(closed_lower, closed_upper, "b", "cat")) == expected_strings


def test_date_range() -> None:
    lower = datetime(2019, 2, 23, 9, 34, 23, 924000, tzinfo=timezone.utc)
    assert q(range_(False, True, lower, None)) == "{2019-02-23T09:34:23.924Z TO *]"


def test_range_from_json_with_camel_case_flags() -> None:
    data = {
        "type": "range",
        "kind": "number",
        "closedLower": False,
        "closedUpper": True,
        "lower": 4,
        "upper": 15,
    }
    assert q(data) == "{4 TO 15]"


# Terms and clauses


def test_terms() -> None:
    assert q(term(literal("hello"))) == '"hello"'
    assert q(term(literal("hello goodbye"))) == '"hello goodbye"'
    assert q(term(literal('hello"goodb\\ye'))) == '"hello\\"goodb\\\\ye"'


def test_named_terms() -> None:
    assert q(named_term("text", literal("hello"))) == 'text:"hello"'
    assert q(named_term("text", literal("hello bye"))) == 'text:"hello bye"'
    assert q(named_term("text", glob_literal("*"))) == "text:*"


def test_modifiers(lhs) -> None:
    assert q(not_(lhs)) == '(NOT "LHS")'
    assert q(prohibited(lhs)) == '-"LHS"'
    assert q(required(lhs)) == '+"LHS"'


def test_constant_score(lhs) -> None:
    assert q(constant_score(lhs, 7.5)) == '("LHS")^=7.5'
    assert q(constant_score(lhs, 2)) == '("LHS")^=2'


def test_and_or(lhs, rhs, rhs2, rhs3, rhs_number) -> None:
    assert q(and_(lhs, rhs, rhs2, rhs3)) == '("LHS" AND "RHS" AND "RHS2" AND "RHS3")'
    assert q(or_(lhs, rhs, rhs2, rhs3)) == '("LHS" OR "RHS" OR "RHS2" OR "RHS3")'
    assert q(or_(lhs, rhs, rhs2, rhs_number)) == '("LHS" OR "RHS" OR "RHS2" OR 101)'


def test_and_or_of_literals() -> None:
    assert q(and_(literal("A"), literal("B"))) == '("A" AND "B")'
    assert q(or_(literal("A"), literal("B"))) == '("A" OR "B")'


def test_empty_and_renders_empty_parens() -> None:
    assert q(and_()) == "()"


def test_binary_json_form_renders_like_two_operands(lhs, rhs) -> None:
    binary = {
        "type": "and",
        "lhs": {"type": "term", "value": {"type": "literal", "kind": "string", "value": "LHS"}},
        "rhs": {"type": "term", "value": {"type": "literal", "kind": "string", "value": "RHS"}},
    }
    assert q(binary) == q(and_(lhs, rhs)) == '("LHS" AND "RHS")'


# Spatial


@pytest.mark.parametrize(
    ("builder", "op"),
    [
        (intersects, "Intersects"),
        (contains, "Contains"),
        (is_disjoint_to, "IsDisjointTo"),
        (is_within, "IsWithin"),
    ],
)
def test_spatial_operators(builder, op: str, polygon) -> None:
    assert q(named_term("geo", builder(polygon))) == (
        f'geo:"{op}(POLYGON((10 0,101 21,60 1.024,10 0),(0 0,-10 -10,20 30,0 0)))"'
    )


def test_geometry_collection(point) -> None:
    collection = {
        "type": "GeometryCollection",
        "geometries": [
            point,
            {
                "type": "Polygon",
                "coordinates": [
                    [
                        [-122.17381, 37.426002],
                        [12.181, 39.426002],
                        [-122.17381, 37.426002],
                    ]
                ],
            },
        ],
    }
    assert q(named_term("geo", intersects(collection))) == (
        'geo:"Intersects(GEOMETRYCOLLECTION(POINT(-122.17381 37.426002),'
        'POLYGON((-122.17381 37.426002,12.181 39.426002,-122.17381 37.426002))))"'
    )


# Whole trees


def test_complex_tree_1() -> None:
    assert q(build_complex_tree()) == COMPLEX_TREE_QUERY


def test_complex_tree_1_from_json() -> None:
    assert q(build_complex_tree_json()) == COMPLEX_TREE_QUERY


def test_complex_tree_survives_json_dump() -> None:
    tree = build_complex_tree()
    assert q(tree.model_dump(mode="json")) == render(tree)


def test_complex_tree_2(lhs, rhs, rhs2) -> None:
    tree = or_(
        lhs,
        rhs,
        rhs2,
        named_term("product", or_(closed_range(100, None), not_(literal(60)))),
    )
    assert q(tree) == '("LHS" OR "RHS" OR "RHS2" OR product:([100 TO *] OR (NOT 60)))'


def test_bare_literal_operand_renders_but_is_not_a_clause(point) -> None:
    tree = or_(
        named_term("geo", intersects(point)),
        literal("spicy"),
        named_term("product", and_(closed_range(100, None), not_(literal(600)))),
    )
    assert render(tree) == COMPLEX_TREE_QUERY

    out = to_solr_query(tree)
    assert out.ok is False
    assert "not_a_clause" in [e.code for e in out.errors]


def test_rendering_is_deterministic() -> None:
    assert q(build_complex_tree()) == q(build_complex_tree())


# Failures


def test_solr_query_cannot_be_constructed_directly() -> None:
    with pytest.raises(TypeError):
        SolrQuery('"spicy"')


def test_render_rejects_foreign_nodes() -> None:
    with pytest.raises(UnsupportedNodeKind) as exc:
        render({"type": "term"})
    assert exc.value.code == "SQM006"


def test_invalid_input_is_a_failure_not_an_exception() -> None:
    out = to_solr_query({"type": "bogus"})
    assert out.ok is False
    assert out.data is None
    assert out.errors


def test_hand_built_node_is_a_failure_not_an_exception() -> None:
    out = to_solr_query(StringLiteral.model_construct(value=5))
    assert out.ok is False
    assert out.data is None


def test_geometry_conversion_failure_becomes_geometry_error(
    monkeypatch: pytest.MonkeyPatch, point
) -> None:
    def broken(geom):
        raise GeometryError("cannot convert")

    monkeypatch.setattr(geometry_mod, "_body", broken)
    out = to_solr_query(named_term("geo", intersects(point)))
    assert out.ok is False
    assert [e.code for e in out.errors] == ["geometry_error"]
    assert out.errors[0].context["detail"] == "cannot convert"
