"""Render query element trees into Lucene/Solr query syntax."""

from __future__ import annotations

from typing import Any, Optional

from solr_query.contracts.elements import (
    LITERAL_TYPES,
    RANGE_TYPES,
    And,
    ConstantScore,
    NamedTerm,
    Not,
    Or,
    Prohibited,
    Required,
    Term,
)
from solr_query.contracts.errors import GeometryError, UnsupportedNodeKind
from solr_query.contracts.primitives import format_literal
from solr_query.contracts.validation_output import ValidationOutput, err
from solr_query.contracts.values import format_number
from solr_query.util.logging import get_logger
from solr_query.validator import validate_query_element

logger = get_logger("serializer")

_TOKEN = object()


class SolrQuery(str):
    """A query string produced by :func:`to_solr_query` from a validated tree.

    Only that function can construct one, so a ``SolrQuery`` in hand is
    known to come from a well-formed query element.
    """

    __slots__ = ()

    def __new__(cls, value: str, _token: object = None) -> "SolrQuery":
        if _token is not _TOKEN:
            raise TypeError("SolrQuery instances are only created by to_solr_query()")
        return super().__new__(cls, value)


def render(node: Any) -> str:
    """Render one node (and its children) as query text.

    Raises:
        UnsupportedNodeKind: If ``node`` is not a query element.
    """
    if isinstance(node, LITERAL_TYPES):
        return format_literal(node.kind, node.value)
    if isinstance(node, RANGE_TYPES):
        return (
            ("[" if node.closed_lower else "{")
            + format_literal(node.kind, node.lower)
            + " TO "
            + format_literal(node.kind, node.upper)
            + ("]" if node.closed_upper else "}")
        )
    if isinstance(node, Term):
        return render(node.value)
    if isinstance(node, NamedTerm):
        return f"{node.field}:{render(node.value)}"
    if isinstance(node, And):
        parts = [render(c) for c in node.operands]
        return "(" + " AND ".join(parts) + ")"
    if isinstance(node, Or):
        parts = [render(c) for c in node.operands]
        return "(" + " OR ".join(parts) + ")"
    if isinstance(node, Not):
        return "(NOT " + render(node.rhs) + ")"
    if isinstance(node, Required):
        return "+" + render(node.rhs)
    if isinstance(node, Prohibited):
        return "-" + render(node.rhs)
    if isinstance(node, ConstantScore):
        return f"({render(node.lhs)})^={format_number(node.rhs)}"
    raise UnsupportedNodeKind(node)


def to_solr_query(data: Any, *, max_depth: Optional[int] = None) -> ValidationOutput[SolrQuery]:
    """Validate untrusted input as a query element and render it.

    Args:
        data: A built tree or its JSON-shaped equivalent.
        max_depth: Nesting bound; defaults to ``settings.SOLR_QUERY_MAX_DEPTH``.

    Returns:
        A successful output holding the :class:`SolrQuery`, or a failure
        listing every validation error.
    """
    validated = validate_query_element(data, max_depth=max_depth)
    if not validated.ok:
        return ValidationOutput.failure(validated.errors)

    try:
        text = render(validated.data)
    except GeometryError as e:
        logger.debug(f"Geometry conversion failed: {e.detail}")
        return ValidationOutput.failure([err("geometry_error", str(e), (), detail=e.detail)])

    logger.debug(f"Rendered query: {text}")
    return ValidationOutput.success(SolrQuery(text, _TOKEN))
