"""Error types the application raises and maps to HTTP responses."""

from __future__ import annotations

from dataclasses import dataclass, field

REASON_TYPE_INVALID_VALUE = "INVALID_VALUE"
REASON_REQUIRED_ATTRIBUTE_MISSING = "REQUIRED_ATTRIBUTE_MISSING"


class BusinessError(Exception):
    """A business rule was broken."""

    def __init__(self, code: str, description: str) -> None:
        super().__init__(code, description)
        self.code = code
        self.description = description

    def __str__(self) -> str:
        return f"{self.code} - {self.description}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BusinessError):
            return NotImplemented
        return (self.code, self.description) == (other.code, other.description)

    def __hash__(self) -> int:
        return hash((type(self), self.code, self.description))


class NotFoundError(Exception):
    """A requested resource does not exist."""

    def __init__(self, code: str, description: str) -> None:
        super().__init__(code, description)
        self.code = code
        self.description = description

    def __str__(self) -> str:
        return f"Not Found - {self.code}{self.description}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NotFoundError):
            return NotImplemented
        return (self.code, self.description) == (other.code, other.description)

    def __hash__(self) -> int:
        return hash((type(self), self.code, self.description))


@dataclass(frozen=True)
class Field:
    """An invalid attribute and the reasons it was rejected."""

    name: str
    reasons: list[str] = field(default_factory=list)


class ValidationError(Exception):
    """Input failed validation on one or more fields."""

    def __init__(self, description: str, fields: list[Field] | None = None) -> None:
        super().__init__(description)
        self.description = description
        self.fields: list[Field] = list(fields or [])

    def __str__(self) -> str:
        return f"{len(self.fields)} fields are invalid"

    def add_field(self, attr: str, *args: str) -> ValidationError:
        """Return a copy of this error with one more invalid field."""
        return ValidationError(self.description, [*self.fields, Field(attr, list(args))])