"""Contracts package - Pydantic models and primitives for query element trees."""

from solr_query.contracts.elements import (
    And,
    Clause,
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
    QueryElement,
    Required,
    SpatialLiteral,
    StringLiteral,
    StringRange,
    Term,
    TermValue,
)
from solr_query.contracts.errors import (
    EmptyFieldName,
    GeometryError,
    InvalidPrimitiveKind,
    PrimitiveParseError,
    QueryBuildError,
    QueryError,
    RangeKindMismatch,
    RecursionLimitExceeded,
    SpatialOperatorSubtypeMisuse,
    UnboundedRange,
    UnsupportedNodeKind,
    UnsupportedPrimitiveKind,
    ValidationFailed,
)
from solr_query.contracts.geometry import (
    Geometry,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    SpatialOperator,
    SpatialPredicate,
    to_wkt,
)
from solr_query.contracts.primitives import (
    PRIMITIVES,
    PrimitiveInfo,
    PrimitiveKind,
    classify_value,
    format_literal,
    is_glob_capable,
    is_range_capable,
    lookup,
    range_kind,
)
from solr_query.contracts.validation_output import ValidationMessage, ValidationOutput
from solr_query.contracts.values import parse_date, parse_number

__all__ = [
    # Elements
    "And",
    "Clause",
    "ConstantScore",
    "DateLiteral",
    "DateRange",
    "GlobLiteral",
    "NamedTerm",
    "Not",
    "NumberLiteral",
    "NumberRange",
    "Or",
    "Prohibited",
    "QueryElement",
    "Required",
    "SpatialLiteral",
    "StringLiteral",
    "StringRange",
    "Term",
    "TermValue",
    # Errors
    "EmptyFieldName",
    "GeometryError",
    "InvalidPrimitiveKind",
    "PrimitiveParseError",
    "QueryBuildError",
    "QueryError",
    "RangeKindMismatch",
    "RecursionLimitExceeded",
    "SpatialOperatorSubtypeMisuse",
    "UnboundedRange",
    "UnsupportedNodeKind",
    "UnsupportedPrimitiveKind",
    "ValidationFailed",
    # Geometry
    "Geometry",
    "GeometryCollection",
    "LineString",
    "MultiLineString",
    "MultiPoint",
    "MultiPolygon",
    "Point",
    "Polygon",
    "SpatialOperator",
    "SpatialPredicate",
    "to_wkt",
    # Primitives
    "PRIMITIVES",
    "PrimitiveInfo",
    "PrimitiveKind",
    "classify_value",
    "format_literal",
    "is_glob_capable",
    "is_range_capable",
    "lookup",
    "range_kind",
    "parse_date",
    "parse_number",
    # Validation Output
    "ValidationMessage",
    "ValidationOutput",
]
