"""Translate notification criteria triples into SQLAlchemy clauses."""

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import and_, false, func, not_, true
from sqlalchemy.sql.elements import ColumnElement

from bookyoon_notifications.domain.entities import (
    CriteriaCondition,
    CriteriaOperator,
    NotificationCriteria,
    PageRequest,
    SortDirection,
)
from bookyoon_notifications.infrastructure.models import NotificationModel

_COLUMNS = {
    "id": NotificationModel.id,
    "message": NotificationModel.message,
    "reservation_id": NotificationModel.reservation_id,
    "user_login": NotificationModel.user_login,
    "deleted": NotificationModel.deleted,
    "read": NotificationModel.read,
}


def _contains(column, value) -> ColumnElement[bool]:
    return func.upper(column).contains(str(value).upper(), autoescape=True)


def _range(column, bounds) -> ColumnElement[bool]:
    low, high = bounds
    clauses = []
    if low is not None:
        clauses.append(column >= low)
    if high is not None:
        clauses.append(column <= high)
    return and_(*clauses)


_OPERATOR_BUILDERS: dict[CriteriaOperator, Callable[..., ColumnElement[bool]]] = {
    CriteriaOperator.EQUALS: lambda column, value: column == value,
    CriteriaOperator.NOT_EQUALS: lambda column, value: column != value,
    CriteriaOperator.IN: lambda column, values: column.in_(list(values)),
    CriteriaOperator.NOT_IN: lambda column, values: column.not_in(list(values)),
    CriteriaOperator.SPECIFIED: lambda column, flag: (
        column.is_not(None) if flag else column.is_(None)
    ),
    CriteriaOperator.CONTAINS: _contains,
    CriteriaOperator.DOES_NOT_CONTAIN: lambda column, value: not_(_contains(column, value)),
    CriteriaOperator.GREATER_THAN: lambda column, value: column > value,
    CriteriaOperator.GREATER_THAN_OR_EQUAL: lambda column, value: column >= value,
    CriteriaOperator.LESS_THAN: lambda column, value: column < value,
    CriteriaOperator.LESS_THAN_OR_EQUAL: lambda column, value: column <= value,
    CriteriaOperator.RANGE: _range,
    CriteriaOperator.IS_TRUE: lambda column, _: column == true(),
    CriteriaOperator.IS_FALSE: lambda column, _: column == false(),
}


def build_condition_clause(condition: CriteriaCondition) -> ColumnElement[bool]:
    """Return the SQL predicate equivalent to ``condition``."""

    column = _COLUMNS[condition.field]
    builder = _OPERATOR_BUILDERS[condition.operator]
    return builder(column, condition.operand)


def build_criteria_filters(criteria: NotificationCriteria | None) -> list[ColumnElement[bool]]:
    """Return one clause per condition; callers AND them together."""

    if criteria is None:
        return []
    return [build_condition_clause(condition) for condition in criteria]


def build_ordering(page_request: PageRequest) -> list[ColumnElement]:
    """Order by the requested key, breaking ties by ascending id."""

    column = _COLUMNS[page_request.sort]
    primary = column.desc() if page_request.direction is SortDirection.DESC else column.asc()
    if page_request.sort == "id":
        return [primary]
    return [primary, NotificationModel.id.asc()]


__all__ = ["build_condition_clause", "build_criteria_filters", "build_ordering"]
