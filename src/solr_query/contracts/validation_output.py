"""Validation result envelope and message types."""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar, Union

from pydantic import BaseModel, Field

from solr_query.contracts.errors import ValidationFailed

T = TypeVar("T")

Loc = tuple[Union[str, int], ...]


class ValidationMessage(BaseModel):
    """One path-annotated validation failure."""

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable message")
    loc: Loc = Field(default=(), description="Path from the input root to the offending value")
    context: dict[str, Any] = Field(
        default_factory=dict, description="Additional context for debugging"
    )

    def __str__(self) -> str:
        where = ".".join(str(p) for p in self.loc) or "<root>"
        return f"{where}: {self.message}"


class ValidationOutput(BaseModel, Generic[T]):
    """Either a decoded value or every reason it could not be decoded."""

    ok: bool = Field(..., description="Whether the input conformed")
    data: Optional[T] = Field(default=None, description="The decoded value (if ok)")
    errors: list[ValidationMessage] = Field(default_factory=list)

    @classmethod
    def success(cls, data: T) -> "ValidationOutput[T]":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, errors: list[ValidationMessage]) -> "ValidationOutput[T]":
        return cls(ok=False, data=None, errors=errors)

    def unwrap(self) -> T:
        """Return the decoded value or raise :class:`ValidationFailed`."""
        if not self.ok:
            raise ValidationFailed(self.errors)
        return self.data  # type: ignore[return-value]


def err(code: str, message: str, loc: Loc = (), **context: Any) -> ValidationMessage:
    """Helper to create a validation message."""
    return ValidationMessage(code=code, message=message, loc=loc, context=context)


def from_pydantic(errors: list[dict[str, Any]], prefix: Loc = ()) -> list[ValidationMessage]:
    """Convert ``ValidationError.errors()`` entries into messages."""
    return [
        ValidationMessage(
            code=e["type"],
            message=e["msg"],
            loc=prefix + tuple(e["loc"]),
            context={"input": repr(e.get("input"))},
        )
        for e in errors
    ]
