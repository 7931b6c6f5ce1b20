"""Validation of untrusted input against the query element grammar.

Validation runs in three passes:

1. a depth guard over the raw input, so adversarial nesting is rejected
   before anything recursive touches it;
2. a structural decode through pydantic, which turns dicts (or already-built
   nodes) into typed nodes and reports every malformed path;
3. a positional check that decides whether each node is allowed where it
   sits: clause operands must be clauses, and everything inside a term value
   must share one primitive kind.

None of the entry points raise for bad input; they return a
:class:`ValidationOutput` listing every failure.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from typing import Any, Optional

from pydantic import BaseModel, TypeAdapter, ValidationError

from solr_query.config import settings
from solr_query.contracts.elements import (
    LITERAL_TYPES,
    RANGE_TYPES,
    And,
    ConstantScore,
    GlobLiteral,
    NamedTerm,
    Not,
    Or,
    Prohibited,
    QueryElement,
    Required,
    Term,
)
from solr_query.contracts.errors import RecursionLimitExceeded
from solr_query.contracts.primitives import PrimitiveKind, lookup
from solr_query.contracts.validation_output import (
    Loc,
    ValidationMessage,
    ValidationOutput,
    err,
    from_pydantic,
)
from solr_query.util.logging import get_logger

logger = get_logger("validator")

_MODIFIERS = (Not, Required, Prohibited)
_COMBINATORS = (And, Or)


@lru_cache(maxsize=None)
def _element_adapter() -> TypeAdapter:
    # Built on first use: the recursive schema is only resolved once every
    # node class exists.
    return TypeAdapter(QueryElement)


def _check_depth(data: Any, limit: int) -> None:
    stack: list[tuple[Any, int]] = [(data, 1)]
    while stack:
        value, depth = stack.pop()
        if isinstance(value, BaseModel):
            children: Any = [getattr(value, name) for name in type(value).model_fields]
        elif isinstance(value, Mapping):
            children = value.values()
        elif isinstance(value, (list, tuple)):
            children = value
        else:
            continue
        if depth > limit:
            raise RecursionLimitExceeded(limit)
        stack.extend((child, depth + 1) for child in children)


def _node_name(node: Any) -> str:
    kind = getattr(node, "kind", None)
    if kind is not None:
        return f"{node.type}[{kind}]"
    return getattr(node, "type", type(node).__name__)


# ============================================================================
# Positional checks
# ============================================================================


def _term_value_issues(node: Any, kind: PrimitiveKind, loc: Loc) -> list[ValidationMessage]:
    """Check ``node`` as a ``TermValue`` of ``kind``.

    Branches, in order: literal of the kind, glob literal (glob-capable
    kinds), range of the kind (range-capable kinds), then the combinators and
    modifiers recursing with the same kind.
    """
    info = lookup(kind)
    if isinstance(node, LITERAL_TYPES):
        if node.kind == kind:
            return []
        if isinstance(node, GlobLiteral) and info.glob_capable:
            return []
        return [
            err(
                "kind_mismatch",
                f"Expected a {kind.value} term value, got {_node_name(node)}",
                loc,
                branch=f"term_value[{kind.value}]",
                expected=kind.value,
                actual=node.kind,
            )
        ]
    if isinstance(node, RANGE_TYPES):
        if info.range_capable and node.kind == kind:
            return []
        return [
            err(
                "kind_mismatch",
                f"Expected a {kind.value} term value, got {_node_name(node)}",
                loc,
                branch=f"term_value[{kind.value}]",
                expected=kind.value,
                actual=node.kind,
            )
        ]
    if isinstance(node, _COMBINATORS):
        issues: list[ValidationMessage] = []
        for i, operand in enumerate(node.operands):
            issues.extend(_term_value_issues(operand, kind, loc + ("operands", i)))
        return issues
    if isinstance(node, _MODIFIERS):
        return _term_value_issues(node.rhs, kind, loc + ("rhs",))
    return [
        err(
            "not_a_term_value",
            f"Expected a {kind.value} term value, got {_node_name(node)}",
            loc,
            branch=f"term_value[{kind.value}]",
            expected=kind.value,
        )
    ]


def _any_term_value_issues(node: Any, loc: Loc) -> list[ValidationMessage]:
    attempts: list[ValidationMessage] = []
    for kind in PrimitiveKind:
        issues = _term_value_issues(node, kind, loc)
        if not issues:
            return []
        attempts.extend(issues)
    return attempts


def _clause_issues(node: Any, loc: Loc) -> list[ValidationMessage]:
    if isinstance(node, (Term, NamedTerm)):
        return _any_term_value_issues(node.value, loc + ("value",))
    if isinstance(node, ConstantScore):
        return _clause_issues(node.lhs, loc + ("lhs",))
    if isinstance(node, _COMBINATORS):
        if not node.operands:
            return [
                err(
                    "empty_operands",
                    f"A {node.type} clause needs at least one operand",
                    loc + ("operands",),
                    branch="clause",
                )
            ]
        issues: list[ValidationMessage] = []
        for i, operand in enumerate(node.operands):
            issues.extend(_clause_issues(operand, loc + ("operands", i)))
        return issues
    if isinstance(node, _MODIFIERS):
        return _clause_issues(node.rhs, loc + ("rhs",))
    return [
        err(
            "not_a_clause",
            f"Expected a clause, got {_node_name(node)}",
            loc,
            branch="clause",
        )
    ]


def _query_element_issues(node: Any, loc: Loc) -> list[ValidationMessage]:
    clause = _clause_issues(node, loc)
    if not clause:
        return []
    term_value = _any_term_value_issues(node, loc)
    if not term_value:
        return []
    return clause + term_value


# ============================================================================
# Entry points
# ============================================================================


def _decode(data: Any, max_depth: Optional[int], check) -> ValidationOutput[Any]:
    limit = settings.SOLR_QUERY_MAX_DEPTH if max_depth is None else max_depth
    try:
        _check_depth(data, limit)
    except RecursionLimitExceeded as e:
        logger.debug(f"Rejected input: {e}")
        return ValidationOutput.failure(
            [err("recursion_limit_exceeded", str(e), (), limit=limit)]
        )

    try:
        node = _element_adapter().validate_python(data)
    except ValidationError as e:
        errors = from_pydantic(e.errors())
        logger.debug(f"Structural validation failed with {len(errors)} error(s)")
        return ValidationOutput.failure(errors)

    issues = check(node)
    if issues:
        logger.debug(f"Positional validation failed with {len(issues)} error(s)")
        return ValidationOutput.failure(issues)
    return ValidationOutput.success(node)


def validate_query_element(
    data: Any, *, max_depth: Optional[int] = None
) -> ValidationOutput[Any]:
    """Decode a clause or a bare term value of any kind."""
    return _decode(data, max_depth, lambda node: _query_element_issues(node, ()))


def validate_clause(data: Any, *, max_depth: Optional[int] = None) -> ValidationOutput[Any]:
    return _decode(data, max_depth, lambda node: _clause_issues(node, ()))


def validate_term_value(
    data: Any, kind: Any, *, max_depth: Optional[int] = None
) -> ValidationOutput[Any]:
    """Decode a term value whose literals are all of ``kind``.

    Raises:
        UnsupportedPrimitiveKind: If ``kind`` is not a primitive kind. This is
            a programming error, not a property of ``data``.
    """
    resolved = lookup(kind).kind
    return _decode(data, max_depth, lambda node: _term_value_issues(node, resolved, ()))
