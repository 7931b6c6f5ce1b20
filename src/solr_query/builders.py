"""Constructors for query element trees.

Each builder returns a new immutable node and checks its own preconditions,
so trees assembled here are well formed by construction::

    or_(
        named_term("geo", intersects({"type": "Point", "coordinates": [-122.17, 37.42]})),
        term(literal("spicy")),
        named_term("product", and_(closed_range(100, None), not_(literal(600)))),
    )
"""

from __future__ import annotations

from datetime import date, datetime
from functools import reduce
from typing import Any, Optional, Union

from solr_query.contracts.elements import (
    And,
    ConstantScore,
    DateLiteral,
    DateRange,
    GlobLiteral,
    NamedTerm,
    Not,
    NumberLiteral,
    NumberRange,
    Or,
    Prohibited,
    Required,
    SpatialLiteral,
    StringLiteral,
    StringRange,
    Term,
)
from solr_query.contracts.errors import (
    EmptyFieldName,
    InvalidPrimitiveKind,
    RangeKindMismatch,
    UnboundedRange,
    UnsupportedPrimitiveKind,
)
from solr_query.contracts.geometry import SpatialOperator, SpatialPredicate, decode_geometry
from solr_query.contracts.primitives import PrimitiveKind, classify_value, range_kind
from solr_query.contracts.values import is_number

_LITERALS = {
    PrimitiveKind.STRING: StringLiteral,
    PrimitiveKind.NUMBER: NumberLiteral,
    PrimitiveKind.DATE: DateLiteral,
}

_RANGES = {
    PrimitiveKind.STRING: StringRange,
    PrimitiveKind.NUMBER: NumberRange,
    PrimitiveKind.DATE: DateRange,
}

PrimitiveValue = Union[str, int, float, date, datetime]


# Literals


def literal(value: PrimitiveValue) -> Union[StringLiteral, NumberLiteral, DateLiteral]:
    """Wrap a string, number, or date, inferring its kind."""
    return _LITERALS[classify_value(value)](value=value)


def glob_literal(value: str) -> GlobLiteral:
    if not isinstance(value, str):
        raise InvalidPrimitiveKind(value, f"Glob pattern must be a string: {value!r}")
    return GlobLiteral(value=value)


def spatial_literal(op: Union[SpatialOperator, str], geometry: Any) -> SpatialLiteral:
    """Apply a spatial operator to a GeoJSON geometry.

    Raises:
        UnsupportedPrimitiveKind: If ``op`` is not a spatial operator.
        GeometryError: If the geometry is malformed.
    """
    try:
        operator = SpatialOperator(op)
    except (ValueError, TypeError) as e:
        raise UnsupportedPrimitiveKind(op, f"Unknown spatial operator: {op!r}") from e
    return SpatialLiteral(value=SpatialPredicate(op=operator, geom=decode_geometry(geometry)))


def intersects(geometry: Any) -> SpatialLiteral:
    return spatial_literal(SpatialOperator.INTERSECTS, geometry)


def is_within(geometry: Any) -> SpatialLiteral:
    return spatial_literal(SpatialOperator.IS_WITHIN, geometry)


def contains(geometry: Any) -> SpatialLiteral:
    return spatial_literal(SpatialOperator.CONTAINS, geometry)


def is_disjoint_to(geometry: Any) -> SpatialLiteral:
    return spatial_literal(SpatialOperator.IS_DISJOINT_TO, geometry)


# Terms


def term(value: Any) -> Term:
    """A term against the default field."""
    return Term(value=value)


def named_term(field: str, value: Any) -> NamedTerm:
    if not field:
        raise EmptyFieldName()
    return NamedTerm(field=field, value=value)


# Ranges


def range_(
    closed_lower: bool,
    closed_upper: bool,
    lower: Optional[PrimitiveValue] = None,
    upper: Optional[PrimitiveValue] = None,
) -> Union[StringRange, NumberRange, DateRange]:
    """Build a range with independent open/closed bounds.

    An absent bound renders as the ``*`` wildcard.

    Raises:
        UnboundedRange: If both bounds are absent.
        InvalidPrimitiveKind: If a bound is not a string, number, or date.
        RangeKindMismatch: If the bounds are of different kinds.
    """
    if lower is None and upper is None:
        raise UnboundedRange()
    kinds = [classify_value(v) for v in (lower, upper) if v is not None]
    if len(kinds) == 2 and kinds[0] != kinds[1]:
        raise RangeKindMismatch(kinds[0].value, kinds[1].value)
    kind = range_kind(kinds[0])
    return _RANGES[kind](
        closed_lower=closed_lower,
        closed_upper=closed_upper,
        lower=lower,
        upper=upper,
    )


def open_range(
    lower: Optional[PrimitiveValue] = None, upper: Optional[PrimitiveValue] = None
) -> Union[StringRange, NumberRange, DateRange]:
    """``{lower TO upper}``"""
    return range_(False, False, lower, upper)


def closed_range(
    lower: Optional[PrimitiveValue] = None, upper: Optional[PrimitiveValue] = None
) -> Union[StringRange, NumberRange, DateRange]:
    """``[lower TO upper]``"""
    return range_(True, True, lower, upper)


# Modifiers


def not_(rhs: Any) -> Not:
    return Not(rhs=rhs)


def required(rhs: Any) -> Required:
    return Required(rhs=rhs)


def prohibited(rhs: Any) -> Prohibited:
    return Prohibited(rhs=rhs)


def constant_score(lhs: Any, boost: Union[int, float]) -> ConstantScore:
    if not is_number(boost):
        raise InvalidPrimitiveKind(boost, f"Boost must be a finite number: {boost!r}")
    return ConstantScore(lhs=lhs, rhs=boost)


# Combinators


def and_(*operands: Any) -> And:
    """Variadic conjunction; zero operands is allowed inside a term value."""
    return And(operands=operands)


def or_(*operands: Any) -> Or:
    return Or(operands=operands)


def fold_and(lhs: Any, rhs: Any, *more: Any) -> And:
    """Binary conjunction, associating left: ``fold_and(a, b, c) == and_(and_(a, b), c)``."""
    return reduce(lambda acc, nxt: and_(acc, nxt), more, and_(lhs, rhs))


def fold_or(lhs: Any, rhs: Any, *more: Any) -> Or:
    return reduce(lambda acc, nxt: or_(acc, nxt), more, or_(lhs, rhs))
