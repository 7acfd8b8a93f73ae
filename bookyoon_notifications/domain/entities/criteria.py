"""Filter and pagination values understood by the notification query engine."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from bookyoon_notifications.domain.exceptions import (
    ERROR_CRITERIA_INVALID,
    ERROR_PAGE_INVALID,
    NotificationValidationError,
)

from .notification import MAX_IDENTIFIER, Notification


class CriteriaOperator(str, Enum):
    """Operators a single filter condition may apply to a field."""

    EQUALS = "equals"
    NOT_EQUALS = "notEquals"
    IN = "in"
    NOT_IN = "notIn"
    SPECIFIED = "specified"
    CONTAINS = "contains"
    DOES_NOT_CONTAIN = "doesNotContain"
    GREATER_THAN = "greaterThan"
    GREATER_THAN_OR_EQUAL = "greaterThanOrEqual"
    LESS_THAN = "lessThan"
    LESS_THAN_OR_EQUAL = "lessThanOrEqual"
    RANGE = "range"
    IS_TRUE = "isTrue"
    IS_FALSE = "isFalse"


class FieldKind(str, Enum):
    NUMERIC = "numeric"
    TEXT = "text"
    BOOLEAN = "boolean"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


NOTIFICATION_FIELDS: dict[str, FieldKind] = {
    "id": FieldKind.NUMERIC,
    "message": FieldKind.TEXT,
    "reservation_id": FieldKind.NUMERIC,
    "user_login": FieldKind.TEXT,
    "deleted": FieldKind.BOOLEAN,
    "read": FieldKind.BOOLEAN,
}

_COMMON_OPERATORS = frozenset(
    {
        CriteriaOperator.EQUALS,
        CriteriaOperator.NOT_EQUALS,
        CriteriaOperator.IN,
        CriteriaOperator.NOT_IN,
        CriteriaOperator.SPECIFIED,
    }
)

ALLOWED_OPERATORS: dict[FieldKind, frozenset[CriteriaOperator]] = {
    FieldKind.NUMERIC: _COMMON_OPERATORS
    | {
        CriteriaOperator.GREATER_THAN,
        CriteriaOperator.GREATER_THAN_OR_EQUAL,
        CriteriaOperator.LESS_THAN,
        CriteriaOperator.LESS_THAN_OR_EQUAL,
        CriteriaOperator.RANGE,
    },
    FieldKind.TEXT: _COMMON_OPERATORS
    | {CriteriaOperator.CONTAINS, CriteriaOperator.DOES_NOT_CONTAIN},
    FieldKind.BOOLEAN: _COMMON_OPERATORS
    | {CriteriaOperator.IS_TRUE, CriteriaOperator.IS_FALSE},
}

_OPERATORS_WITHOUT_OPERAND = frozenset({CriteriaOperator.IS_TRUE, CriteriaOperator.IS_FALSE})
_SEQUENCE_OPERATORS = frozenset({CriteriaOperator.IN, CriteriaOperator.NOT_IN})


def _invalid(message: str) -> NotificationValidationError:
    return NotificationValidationError(message, ERROR_CRITERIA_INVALID)


def _ensure_storable(field_name: str, kind: FieldKind, values: Iterable[Any]) -> None:
    if kind is not FieldKind.NUMERIC:
        return
    for value in values:
        if isinstance(value, int) and not -MAX_IDENTIFIER - 1 <= value <= MAX_IDENTIFIER:
            raise _invalid(f"Value {value} is out of range for field '{field_name}'")


@dataclass(frozen=True)
class CriteriaCondition:
    """A single ``(field, operator, operand)`` filter triple."""

    field: str
    operator: CriteriaOperator
    operand: Any = None

    def __post_init__(self) -> None:
        kind = NOTIFICATION_FIELDS.get(self.field)
        if kind is None:
            raise _invalid(f"Unknown notification field '{self.field}'")

        try:
            operator = CriteriaOperator(self.operator)
        except ValueError as exc:
            raise _invalid(f"Unknown criteria operator '{self.operator}'") from exc
        object.__setattr__(self, "operator", operator)

        if operator not in ALLOWED_OPERATORS[kind]:
            raise _invalid(
                f"Operator '{operator.value}' cannot be applied to field '{self.field}'"
            )

        if operator in _OPERATORS_WITHOUT_OPERAND:
            object.__setattr__(self, "operand", None)
            return

        operand = self.operand
        if operator in _SEQUENCE_OPERATORS:
            if isinstance(operand, (str, bytes)) or not isinstance(operand, Iterable):
                raise _invalid(f"Operator '{operator.value}' expects a list of values")
            values = tuple(operand)
            if not values:
                raise _invalid(f"Operator '{operator.value}' expects at least one value")
            _ensure_storable(self.field, kind, values)
            object.__setattr__(self, "operand", values)
            return

        if operator is CriteriaOperator.RANGE:
            if isinstance(operand, (str, bytes)) or not isinstance(operand, Sequence):
                raise _invalid("Operator 'range' expects a (low, high) pair")
            if len(operand) != 2:
                raise _invalid("Operator 'range' expects a (low, high) pair")
            low, high = operand
            if low is None and high is None:
                raise _invalid("Operator 'range' needs at least one bound")
            if low is not None and high is not None and low > high:
                raise _invalid("Range lower bound is greater than its upper bound")
            _ensure_storable(self.field, kind, (low, high))
            object.__setattr__(self, "operand", (low, high))
            return

        if operator is CriteriaOperator.SPECIFIED:
            if not isinstance(operand, bool):
                raise _invalid("Operator 'specified' expects a boolean")
            return

        if operand is None:
            raise _invalid(f"Operator '{operator.value}' on '{self.field}' needs a value")
        _ensure_storable(self.field, kind, (operand,))

    @property
    def kind(self) -> FieldKind:
        return NOTIFICATION_FIELDS[self.field]


@dataclass
class NotificationCriteria:
    """Sparse set of conditions, combined with a logical AND.

    An empty criteria set leaves every field unconstrained.
    """

    conditions: list[CriteriaCondition] = field(default_factory=list)

    def where(
        self, field_name: str, operator: CriteriaOperator | str, operand: Any = None
    ) -> "NotificationCriteria":
        """Append a condition and return ``self`` so calls can be chained."""

        self.conditions.append(CriteriaCondition(field_name, operator, operand))
        return self

    def is_empty(self) -> bool:
        return not self.conditions

    def __iter__(self):
        return iter(self.conditions)

    def __len__(self) -> int:
        return len(self.conditions)


@dataclass(frozen=True)
class PageRequest:
    """Zero based page coordinates plus the requested ordering."""

    page: int = 0
    size: int = 20
    sort: str = "id"
    direction: SortDirection = SortDirection.ASC

    def __post_init__(self) -> None:
        if self.page < 0:
            raise NotificationValidationError("Page index must not be negative", ERROR_PAGE_INVALID)
        if self.size < 1:
            raise NotificationValidationError("Page size must be at least 1", ERROR_PAGE_INVALID)
        if self.sort not in NOTIFICATION_FIELDS:
            raise NotificationValidationError(
                f"Cannot sort notifications by '{self.sort}'", ERROR_PAGE_INVALID
            )
        try:
            direction = SortDirection(self.direction)
        except ValueError as exc:
            raise NotificationValidationError(
                f"Unknown sort direction '{self.direction}'", ERROR_PAGE_INVALID
            ) from exc
        object.__setattr__(self, "direction", direction)

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class NotificationPage:
    """One page of matching notifications and the overall match count."""

    items: list[Notification]
    total: int
    page: int
    size: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return (self.total + self.size - 1) // self.size

    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages

    def has_previous(self) -> bool:
        return self.page > 0


__all__ = [
    "ALLOWED_OPERATORS",
    "CriteriaCondition",
    "CriteriaOperator",
    "FieldKind",
    "NOTIFICATION_FIELDS",
    "NotificationCriteria",
    "NotificationPage",
    "PageRequest",
    "SortDirection",
]
