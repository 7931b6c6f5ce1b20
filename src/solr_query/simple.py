"""Adapters from flat comparison filters to term values.

A simple filter is the kind of object a query string or a form produces::

    {"eq": ["e1", "e2"], "gt": "a", "glob": "README*"}

It becomes an ``And`` of one ``Or`` family per operator, in the fixed order
``eq, neq, gt, lt, gte, lte, glob``. Operators without values are left out,
so an empty filter is an ``And`` with no operands and renders as ``()``.
"""

from __future__ import annotations

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError, model_validator

from solr_query.builders import (
    and_,
    closed_range,
    glob_literal,
    literal,
    not_,
    open_range,
    or_,
)
from solr_query.contracts.elements import And
from solr_query.contracts.errors import UnsupportedPrimitiveKind
from solr_query.contracts.primitives import PrimitiveKind, lookup
from solr_query.contracts.validation_output import ValidationOutput, from_pydantic
from solr_query.contracts.values import DateValue, NumberInput
from solr_query.util.logging import get_logger

logger = get_logger("simple")

_OPERATORS = ("eq", "neq", "gt", "lt", "gte", "lte", "glob")


class _SimpleFilter(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _listify(cls, data: Any) -> Any:
        # Each operator takes a single value or a list of values.
        if not isinstance(data, dict):
            return data
        out = {}
        for key, value in data.items():
            if key not in cls.model_fields:
                continue
            if value is None:
                continue
            out[key] = value if isinstance(value, (list, tuple)) else [value]
        return out


class SimpleStringFilter(_SimpleFilter):
    eq: tuple[StrictStr, ...] = ()
    neq: tuple[StrictStr, ...] = ()
    gt: tuple[StrictStr, ...] = ()
    lt: tuple[StrictStr, ...] = ()
    gte: tuple[StrictStr, ...] = ()
    lte: tuple[StrictStr, ...] = ()
    glob: tuple[StrictStr, ...] = ()


class SimpleNumberFilter(_SimpleFilter):
    """Numbers may arrive as numbers or numeric strings. There is no ``glob``."""

    eq: tuple[NumberInput, ...] = ()
    neq: tuple[NumberInput, ...] = ()
    gt: tuple[NumberInput, ...] = ()
    lt: tuple[NumberInput, ...] = ()
    gte: tuple[NumberInput, ...] = ()
    lte: tuple[NumberInput, ...] = ()


class SimpleDateFilter(_SimpleFilter):
    """Dates may arrive as datetimes or ISO-8601 strings; globs stay strings."""

    eq: tuple[DateValue, ...] = ()
    neq: tuple[DateValue, ...] = ()
    gt: tuple[DateValue, ...] = ()
    lt: tuple[DateValue, ...] = ()
    gte: tuple[DateValue, ...] = ()
    lte: tuple[DateValue, ...] = ()
    glob: tuple[StrictStr, ...] = ()


_FAMILIES: dict[str, Callable[[Any], Any]] = {
    "eq": literal,
    "neq": lambda v: not_(literal(v)),
    "gt": lambda v: open_range(v, None),
    "lt": lambda v: open_range(None, v),
    "gte": lambda v: closed_range(v, None),
    "lte": lambda v: closed_range(None, v),
    "glob": glob_literal,
}


def _to_term_value(flt: _SimpleFilter) -> And:
    families = []
    for op in _OPERATORS:
        values = getattr(flt, op, ())
        if values:
            families.append(or_(*(_FAMILIES[op](v) for v in values)))
    return and_(*families)


def _adapt(model: type[_SimpleFilter], data: Any) -> ValidationOutput[And]:
    try:
        flt = model.model_validate(data)
    except ValidationError as e:
        errors = from_pydantic(e.errors())
        logger.debug(f"{model.__name__} rejected input with {len(errors)} error(s)")
        return ValidationOutput.failure(errors)
    return ValidationOutput.success(_to_term_value(flt))


def string_term_value(data: Any) -> ValidationOutput[And]:
    return _adapt(SimpleStringFilter, data)


def number_term_value(data: Any) -> ValidationOutput[And]:
    return _adapt(SimpleNumberFilter, data)


def date_term_value(data: Any) -> ValidationOutput[And]:
    return _adapt(SimpleDateFilter, data)


_ADAPTERS = {
    PrimitiveKind.STRING: string_term_value,
    PrimitiveKind.NUMBER: number_term_value,
    PrimitiveKind.DATE: date_term_value,
}


def simple_term_value(data: Any, kind: Any) -> ValidationOutput[And]:
    """Adapt a simple filter of the given primitive kind.

    Raises:
        UnsupportedPrimitiveKind: If ``kind`` has no simple filter form (glob,
            spatial, or anything outside the primitive set).
    """
    info = lookup(kind)
    adapter = _ADAPTERS.get(info.kind)
    if adapter is None:
        raise UnsupportedPrimitiveKind(
            kind, f"Simple filters are not supported for '{info.kind.value}' values"
        )
    return adapter(data)
