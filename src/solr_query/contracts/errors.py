"""Exception hierarchy for solr-query."""

from __future__ import annotations

from typing import Any


class QueryError(Exception):
    """Base exception for all solr-query errors.

    Every error carries a stable machine-readable ``code`` so that callers
    (and log scrapers) can tell failures apart without parsing messages.
    """

    code = "SQM000"


# Builder Errors
class QueryBuildError(QueryError):
    """A builder precondition was violated."""

    pass


class InvalidPrimitiveKind(QueryBuildError, TypeError):
    """Value is not a string, number, or date where a primitive was required."""

    code = "SQM001"

    def __init__(self, value: object, reason: str | None = None) -> None:
        self.value = value
        super().__init__(reason or f"Value is not a string, number, or date: {value!r}")


class UnboundedRange(QueryBuildError, ValueError):
    """Both range bounds are absent."""

    code = "SQM002"

    def __init__(self) -> None:
        super().__init__("Unbounded range: at least one of lower/upper is required")


class RangeKindMismatch(QueryBuildError, ValueError):
    """Range bounds are present but of different kinds."""

    code = "SQM003"

    def __init__(self, lower_kind: str, upper_kind: str) -> None:
        self.lower_kind = lower_kind
        self.upper_kind = upper_kind
        super().__init__(
            f"Range bound kinds must match: lower is '{lower_kind}', upper is '{upper_kind}'"
        )


class EmptyFieldName(QueryBuildError, ValueError):
    """Named term built with an empty field name."""

    code = "SQM009"

    def __init__(self) -> None:
        super().__init__("Field name of a named term must not be empty")


class GeometryError(QueryBuildError, ValueError):
    """The geometry collaborator rejected a geometry."""

    code = "SQM008"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid geometry: {detail}")


# Registry Errors
class UnsupportedPrimitiveKind(QueryError, LookupError):
    """A codec was requested for a kind outside the closed primitive set."""

    code = "SQM004"

    def __init__(self, kind: object, reason: str | None = None) -> None:
        self.kind = kind
        super().__init__(reason or f"Unsupported primitive kind: {kind!r}")


class SpatialOperatorSubtypeMisuse(UnsupportedPrimitiveKind):
    """A spatial operator was used where the unified spatial kind was required."""

    code = "SQM005"

    def __init__(self, kind: object) -> None:
        super().__init__(
            kind,
            f"Use the 'spatial' kind instead of the individual spatial operator {kind!r}",
        )


# Parse Errors
class PrimitiveParseError(QueryError, ValueError):
    """A string-encoded number or date could not be parsed."""

    code = "SQM007"

    def __init__(self, kind: str, text: str) -> None:
        self.kind = kind
        self.text = text
        super().__init__(f"Cannot parse {text!r} as a {kind}")


# Validation Errors
class ValidationFailed(QueryError):
    """Untrusted input does not conform to the query grammar."""

    code = "SQM010"

    def __init__(self, errors: list[Any]) -> None:
        self.errors = errors
        lines = "; ".join(str(e) for e in errors) or "no details"
        super().__init__(f"Validation failed: {lines}")


class RecursionLimitExceeded(QueryError):
    """Input nesting is deeper than the configured bound."""

    code = "SQM011"

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"Input is nested deeper than {limit} levels")


# Serializer Errors
class UnsupportedNodeKind(QueryError, TypeError):
    """A node that is not part of the grammar reached the serializer."""

    code = "SQM006"

    def __init__(self, node: object) -> None:
        self.node = node
        super().__init__(f"Unsupported query node {type(node).__name__}: {node!r}")
