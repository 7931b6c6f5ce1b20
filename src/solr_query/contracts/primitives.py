"""Primitive kinds and the registry of what each kind supports."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from solr_query.contracts.errors import (
    InvalidPrimitiveKind,
    SpatialOperatorSubtypeMisuse,
    UnsupportedPrimitiveKind,
)
from solr_query.contracts.geometry import SpatialOperator, SpatialPredicate, to_wkt
from solr_query.contracts.values import (
    escape_glob,
    format_date,
    format_number,
    is_date,
    is_number,
    quote_string,
)


class PrimitiveKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    GLOB = "glob"
    SPATIAL = "spatial"


@dataclass(frozen=True)
class PrimitiveInfo:
    """Everything the layers above need to know about one primitive kind."""

    kind: PrimitiveKind
    is_value: Callable[[object], bool]
    glob_capable: bool
    range_capable: bool
    format_value: Callable[[Any], str]


def _format_spatial(value: SpatialPredicate) -> str:
    return quote_string(f"{value.op.value}({to_wkt(value.geom)})")


# ============================================================================
# Kind Capabilities
# ============================================================================

PRIMITIVES: Mapping[PrimitiveKind, PrimitiveInfo] = MappingProxyType(
    {
        PrimitiveKind.STRING: PrimitiveInfo(
            kind=PrimitiveKind.STRING,
            is_value=lambda v: isinstance(v, str),
            glob_capable=True,
            range_capable=True,
            format_value=quote_string,
        ),
        PrimitiveKind.NUMBER: PrimitiveInfo(
            kind=PrimitiveKind.NUMBER,
            is_value=is_number,
            glob_capable=False,
            range_capable=True,
            format_value=format_number,
        ),
        PrimitiveKind.DATE: PrimitiveInfo(
            kind=PrimitiveKind.DATE,
            is_value=is_date,
            glob_capable=True,
            range_capable=True,
            format_value=format_date,
        ),
        PrimitiveKind.GLOB: PrimitiveInfo(
            kind=PrimitiveKind.GLOB,
            is_value=lambda v: isinstance(v, str),
            glob_capable=True,
            range_capable=False,
            format_value=escape_glob,
        ),
        PrimitiveKind.SPATIAL: PrimitiveInfo(
            kind=PrimitiveKind.SPATIAL,
            is_value=lambda v: isinstance(v, SpatialPredicate),
            glob_capable=False,
            range_capable=False,
            format_value=_format_spatial,
        ),
    }
)

_SPATIAL_OPERATOR_NAMES = frozenset(op.value for op in SpatialOperator)


def lookup(kind: object) -> PrimitiveInfo:
    """Return the registry entry for a kind.

    Raises:
        SpatialOperatorSubtypeMisuse: If given one of the spatial operators.
        UnsupportedPrimitiveKind: If given anything else outside the set.
    """
    if isinstance(kind, SpatialOperator) or (
        isinstance(kind, str) and kind in _SPATIAL_OPERATOR_NAMES
    ):
        raise SpatialOperatorSubtypeMisuse(kind)
    try:
        return PRIMITIVES[PrimitiveKind(kind)]
    except (ValueError, TypeError) as e:
        raise UnsupportedPrimitiveKind(kind) from e


def is_range_capable(kind: object) -> bool:
    return lookup(kind).range_capable


def is_glob_capable(kind: object) -> bool:
    return lookup(kind).glob_capable


def range_kind(kind: object) -> PrimitiveKind:
    """Return ``kind`` if ranges over it are allowed."""
    info = lookup(kind)
    if not info.range_capable:
        raise UnsupportedPrimitiveKind(
            kind, f"Ranges are not supported over '{info.kind.value}' values"
        )
    return info.kind


def classify_value(value: object) -> PrimitiveKind:
    """Infer the primitive kind of a raw Python value."""
    if isinstance(value, str):
        return PrimitiveKind.STRING
    if is_number(value):
        return PrimitiveKind.NUMBER
    if is_date(value):
        return PrimitiveKind.DATE
    if isinstance(value, float):
        raise InvalidPrimitiveKind(value, f"Value is not a finite number: {value!r}")
    raise InvalidPrimitiveKind(value)


def format_literal(kind: object, value: Optional[Any]) -> str:
    """Render a literal value of ``kind``; an absent value is the ``*`` wildcard."""
    if value is None:
        return "*"
    return lookup(kind).format_value(value)
