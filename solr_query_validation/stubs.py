from __future__ import annotations

from typing import Any

from solr_query.builders import (
    and_,
    closed_range,
    intersects,
    literal,
    named_term,
    not_,
    or_,
    term,
)
from solr_query.contracts.elements import Or


POINT = {"type": "Point", "coordinates": [-122.17381, 37.426002]}

POLYGON = {
    "type": "Polygon",
    "coordinates": [
        [[10.0, 0.0], [101.0, 21.0], [60.0, 1.024], [10.0, 0.0]],
        [[0, 0], [-10, -10], [20, 30], [0, 0]],
    ],
}

COMPLEX_TREE_QUERY = (
    '(geo:"Intersects(POINT(-122.17381 37.426002))" OR "spicy" '
    "OR product:([100 TO *] AND (NOT 600)))"
)


def build_complex_tree() -> Or:
    return or_(
        named_term("geo", intersects(POINT)),
        term(literal("spicy")),
        named_term("product", and_(closed_range(100, None), not_(literal(600)))),
    )


def build_complex_tree_json() -> dict[str, Any]:
    """The same tree as :func:`build_complex_tree`, as it arrives over the wire."""
    return {
        "type": "or",
        "operands": [
            {
                "type": "namedterm",
                "field": "geo",
                "value": {
                    "type": "literal",
                    "kind": "spatial",
                    "value": {"op": "Intersects", "geom": POINT},
                },
            },
            {
                "type": "term",
                "value": {"type": "literal", "kind": "string", "value": "spicy"},
            },
            {
                "type": "namedterm",
                "field": "product",
                "value": {
                    "type": "and",
                    "operands": [
                        {
                            "type": "range",
                            "kind": "number",
                            "closed_lower": True,
                            "closed_upper": True,
                            "lower": 100,
                        },
                        {
                            "type": "not",
                            "rhs": {"type": "literal", "kind": "number", "value": 600},
                        },
                    ],
                },
            },
        ],
    }


def string_literal_json(value: str) -> dict[str, Any]:
    return {"type": "literal", "kind": "string", "value": value}


def build_nested_not_json(depth: int) -> dict[str, Any]:
    node: dict[str, Any] = {"type": "term", "value": string_literal_json("leaf")}
    for _ in range(depth):
        node = {"type": "not", "rhs": node}
    return node
