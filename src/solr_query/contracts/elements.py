"""Query element tree: the typed AST rendered into Lucene/Solr syntax.

Every node is an immutable pydantic model tagged by ``type``. Literals and
ranges carry a second tag, ``kind``, naming their primitive kind, so that the
whole grammar decodes from untrusted input as one nested discriminated union.
Which nodes may appear where (clause vs. term value, one kind per term value)
is checked by :mod:`solr_query.validator` on top of this structure.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    model_validator,
)

from solr_query.contracts.geometry import SpatialPredicate
from solr_query.contracts.values import DateValue, NumberValue, StringValue


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True, revalidate_instances="always")


# Literals (leaf nodes)


class StringLiteral(_Node):
    type: Literal["literal"] = "literal"
    kind: Literal["string"] = "string"
    value: StringValue


class NumberLiteral(_Node):
    type: Literal["literal"] = "literal"
    kind: Literal["number"] = "number"
    value: NumberValue


class DateLiteral(_Node):
    type: Literal["literal"] = "literal"
    kind: Literal["date"] = "date"
    value: DateValue


class GlobLiteral(_Node):
    """Unquoted wildcard pattern; ``*`` and ``?`` keep their meaning."""

    type: Literal["literal"] = "literal"
    kind: Literal["glob"] = "glob"
    value: StrictStr


class SpatialLiteral(_Node):
    type: Literal["literal"] = "literal"
    kind: Literal["spatial"] = "spatial"
    value: SpatialPredicate


LiteralNode = Annotated[
    Union[StringLiteral, NumberLiteral, DateLiteral, GlobLiteral, SpatialLiteral],
    Field(discriminator="kind"),
]

LITERAL_TYPES = (StringLiteral, NumberLiteral, DateLiteral, GlobLiteral, SpatialLiteral)


# Ranges


class _RangeBase(_Node):
    type: Literal["range"] = "range"
    closed_lower: StrictBool = Field(
        validation_alias=AliasChoices("closed_lower", "closedLower")
    )
    closed_upper: StrictBool = Field(
        validation_alias=AliasChoices("closed_upper", "closedUpper")
    )

    @model_validator(mode="after")
    def _bounded(self) -> _RangeBase:
        if self.lower is None and self.upper is None:
            raise ValueError("unbounded range: at least one of lower/upper is required")
        return self


class StringRange(_RangeBase):
    kind: Literal["string"] = "string"
    lower: Optional[StringValue] = None
    upper: Optional[StringValue] = None


class NumberRange(_RangeBase):
    kind: Literal["number"] = "number"
    lower: Optional[NumberValue] = None
    upper: Optional[NumberValue] = None


class DateRange(_RangeBase):
    kind: Literal["date"] = "date"
    lower: Optional[DateValue] = None
    upper: Optional[DateValue] = None


RangeNode = Annotated[
    Union[StringRange, NumberRange, DateRange],
    Field(discriminator="kind"),
]

RANGE_TYPES = (StringRange, NumberRange, DateRange)


# Terms


class Term(_Node):
    """A term against the default field."""

    type: Literal["term"] = "term"
    value: QueryElement


class NamedTerm(_Node):
    type: Literal["namedterm"] = "namedterm"
    field: Annotated[StrictStr, Field(min_length=1)]
    value: QueryElement


# Logical operators (composite nodes)


def _binary_to_operands(data: Any) -> Any:
    # {lhs, rhs} is the older two-operand encoding of and/or.
    if isinstance(data, dict) and "operands" not in data and "lhs" in data and "rhs" in data:
        rest = {k: v for k, v in data.items() if k not in ("lhs", "rhs")}
        return {**rest, "operands": [data["lhs"], data["rhs"]]}
    return data


class And(_Node):
    type: Literal["and"] = "and"
    operands: tuple[QueryElement, ...]

    @model_validator(mode="before")
    @classmethod
    def _binary_form(cls, data: Any) -> Any:
        return _binary_to_operands(data)


class Or(_Node):
    type: Literal["or"] = "or"
    operands: tuple[QueryElement, ...]

    @model_validator(mode="before")
    @classmethod
    def _binary_form(cls, data: Any) -> Any:
        return _binary_to_operands(data)


class Not(_Node):
    type: Literal["not"] = "not"
    rhs: QueryElement


class Required(_Node):
    type: Literal["required"] = "required"
    rhs: QueryElement


class Prohibited(_Node):
    type: Literal["prohibited"] = "prohibited"
    rhs: QueryElement


class ConstantScore(_Node):
    type: Literal["constant"] = "constant"
    lhs: QueryElement
    rhs: NumberValue


QueryElement = Annotated[
    Union[
        LiteralNode,
        RangeNode,
        Term,
        NamedTerm,
        And,
        Or,
        Not,
        Required,
        Prohibited,
        ConstantScore,
    ],
    Field(discriminator="type"),
]

# Positional aliases, for annotations only; the validator enforces them.
Clause = Union[Term, NamedTerm, ConstantScore, And, Or, Not, Required, Prohibited]
TermValue = Union[
    StringLiteral,
    NumberLiteral,
    DateLiteral,
    GlobLiteral,
    SpatialLiteral,
    StringRange,
    NumberRange,
    DateRange,
    And,
    Or,
    Not,
    Required,
    Prohibited,
]

NODE_TYPES = (
    *LITERAL_TYPES,
    *RANGE_TYPES,
    Term,
    NamedTerm,
    And,
    Or,
    Not,
    Required,
    Prohibited,
    ConstantScore,
)


Term.model_rebuild()
NamedTerm.model_rebuild()
And.model_rebuild()
Or.model_rebuild()
Not.model_rebuild()
Required.model_rebuild()
Prohibited.model_rebuild()
ConstantScore.model_rebuild()
