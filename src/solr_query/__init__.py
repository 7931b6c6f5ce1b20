"""Typed query element trees rendered into Lucene/Solr query syntax."""

from solr_query.builders import (
    and_,
    closed_range,
    constant_score,
    contains,
    fold_and,
    fold_or,
    glob_literal,
    intersects,
    is_disjoint_to,
    is_within,
    literal,
    named_term,
    not_,
    open_range,
    or_,
    prohibited,
    range_,
    required,
    spatial_literal,
    term,
)
from solr_query.serializer import SolrQuery, render, to_solr_query
from solr_query.simple import (
    date_term_value,
    number_term_value,
    simple_term_value,
    string_term_value,
)
from solr_query.validator import validate_clause, validate_query_element, validate_term_value

__all__ = [
    # Builders
    "and_",
    "closed_range",
    "constant_score",
    "contains",
    "fold_and",
    "fold_or",
    "glob_literal",
    "intersects",
    "is_disjoint_to",
    "is_within",
    "literal",
    "named_term",
    "not_",
    "open_range",
    "or_",
    "prohibited",
    "range_",
    "required",
    "spatial_literal",
    "term",
    # Serializer
    "SolrQuery",
    "render",
    "to_solr_query",
    # Simple filters
    "date_term_value",
    "number_term_value",
    "simple_term_value",
    "string_term_value",
    # Validator
    "validate_clause",
    "validate_query_element",
    "validate_term_value",
]
