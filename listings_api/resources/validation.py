"""
Validation selector - picks the rules for each writable listing field by operation, then runs them.
Challenge: Creation is stricter than update (title length bounds apply only on create).
Design: Explicit context -> rules table evaluated by a single function; violations are returned, never raised.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from listings_api.resources.contexts import Context

# Bounds of the INTEGER columns behind price and ids
INTEGER_MIN = -(2**31)
INTEGER_MAX = 2**31 - 1


@dataclass(frozen=True)
class Violation:
    field: str
    message: str


@dataclass(frozen=True)
class UnresolvedReference:
    """Submitted owner reference that matched no user."""

    raw: Any


class Rule(ABC):
    """Base rule. check() returns a message on failure, None on pass."""

    @abstractmethod
    def check(self, value: Any) -> str | None: ...


class NotBlank(Rule):
    message = "This value should not be blank."

    def check(self, value: Any) -> str | None:
        if value is None or value is False or value == "" or value == [] or value == {}:
            return self.message
        return None


class IsType(Rule):
    """Type guard. None is left to NotBlank; bool never counts as int."""

    def __init__(self, expected: type, label: str):
        self.expected = expected
        self.label = label

    def check(self, value: Any) -> str | None:
        if value is None:
            return None
        if isinstance(value, bool) and self.expected is not bool:
            return f"This value should be of type {self.label}."
        if not isinstance(value, self.expected):
            return f"This value should be of type {self.label}."
        return None


class Length(Rule):
    """Character-count bounds, inclusive. Only strings are measured."""

    def __init__(self, min: int, max: int, min_message: str | None = None):
        self.min = min
        self.max = max
        self.min_message = min_message or (
            f"This value is too short. It should have {min} characters or more."
        )
        self.max_message = f"This value is too long. It should have {max} characters or less."

    def check(self, value: Any) -> str | None:
        if not isinstance(value, str):
            return None
        if len(value) < self.min:
            return self.min_message
        if len(value) > self.max:
            return self.max_message
        return None


class Range(Rule):
    """Inclusive numeric bounds. Non-integers are left to IsType."""

    def __init__(self, min: int, max: int):
        self.min = min
        self.max = max
        self.message = f"This value should be between {min} and {max}."

    def check(self, value: Any) -> str | None:
        if not isinstance(value, int) or isinstance(value, bool):
            return None
        if value < self.min or value > self.max:
            return self.message
        return None


class ValidReference(Rule):
    """Shallow check of an associated user: resolved and persisted, nothing more."""

    def check(self, value: Any) -> str | None:
        if value is None:
            return None
        if isinstance(value, UnresolvedReference):
            return f'No user matches the owner reference "{value.raw}".'
        if getattr(value, "id", None) is None:
            return "Owner must reference an existing user."
        return None


_WRITE_RULES = (
    ("title", "title", NotBlank()),
    ("title", "title", IsType(str, "string")),
    ("description", "description", IsType(str, "string")),
    ("price", "price", NotBlank()),
    ("price", "price", IsType(int, "int")),
    ("price", "price", Range(min=INTEGER_MIN, max=INTEGER_MAX)),
    ("owner", "owner", NotBlank()),
    ("owner", "owner", ValidReference()),
)

RULES: dict[Context, tuple[tuple[str, str, Rule], ...]] = {
    Context.CREATE: _WRITE_RULES
    + (("title", "title", Length(min=5, max=30, min_message="Minimum 5 chars.")),),
    Context.UPDATE: _WRITE_RULES,
    Context.PUBLICATION: (),
}


def validate(record: Any, context: Context) -> list[Violation]:
    """Run every rule selected for the context. Empty list means the record passes."""
    violations = []
    for field, attribute, rule in RULES.get(context, ()):
        message = rule.check(getattr(record, attribute, None))
        if message is not None:
            violations.append(Violation(field=field, message=message))
    return violations
