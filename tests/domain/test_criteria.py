"""Unit tests for the criteria and pagination value objects."""

import pytest

from bookyoon_notifications.domain.entities import (
    CriteriaCondition,
    CriteriaOperator,
    Notification,
    NotificationCriteria,
    NotificationPage,
    PageRequest,
    SortDirection,
    login_key,
)
from bookyoon_notifications.domain.exceptions import NotificationValidationError


def test_operator_accepts_its_string_value():
    condition = CriteriaCondition("message", "contains", "booking")

    assert condition.operator is CriteriaOperator.CONTAINS


@pytest.mark.parametrize(
    ("field_name", "operator", "operand"),
    [
        ("unknown", CriteriaOperator.EQUALS, 1),
        ("message", CriteriaOperator.GREATER_THAN, "a"),
        ("reservation_id", CriteriaOperator.CONTAINS, "4"),
        ("read", CriteriaOperator.RANGE, (True, False)),
        ("user_login", CriteriaOperator.IS_TRUE, None),
        ("id", "between", 1),
        ("id", CriteriaOperator.EQUALS, None),
        ("id", CriteriaOperator.IN, []),
        ("id", CriteriaOperator.IN, "1,2"),
        ("id", CriteriaOperator.RANGE, (None, None)),
        ("id", CriteriaOperator.RANGE, (10, 1)),
        ("id", CriteriaOperator.SPECIFIED, "yes"),
        ("id", CriteriaOperator.EQUALS, 2**63),
        ("reservation_id", CriteriaOperator.IN, [1, 2**64]),
        ("reservation_id", CriteriaOperator.RANGE, (None, 10**20)),
    ],
)
def test_invalid_conditions_are_rejected(field_name, operator, operand):
    with pytest.raises(NotificationValidationError) as exc_info:
        CriteriaCondition(field_name, operator, operand)

    assert exc_info.value.error_key == "criteriainvalid"


def test_boolean_operators_drop_their_operand():
    condition = CriteriaCondition("read", CriteriaOperator.IS_TRUE, "ignored")

    assert condition.operand is None


def test_in_operand_is_frozen_as_tuple():
    condition = CriteriaCondition("id", CriteriaOperator.IN, [3, 1])

    assert condition.operand == (3, 1)


def test_criteria_chaining_collects_conditions():
    criteria = (
        NotificationCriteria()
        .where("user_login", CriteriaOperator.EQUALS, "alice")
        .where("read", CriteriaOperator.IS_FALSE)
    )

    assert len(criteria) == 2
    assert not criteria.is_empty()
    assert NotificationCriteria().is_empty()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"page": -1},
        {"size": 0},
        {"sort": "created_at"},
        {"direction": "sideways"},
    ],
)
def test_invalid_page_requests_are_rejected(kwargs):
    with pytest.raises(NotificationValidationError) as exc_info:
        PageRequest(**kwargs)

    assert exc_info.value.error_key == "pageinvalid"


def test_page_request_offset_and_direction():
    request = PageRequest(page=2, size=5, sort="read", direction="desc")

    assert request.offset == 10
    assert request.direction is SortDirection.DESC


def test_notification_page_navigation():
    items = [Notification(id=1, message="m", user_login="alice")]
    page = NotificationPage(items=items, total=11, page=1, size=5)

    assert page.total_pages == 3
    assert page.has_next()
    assert page.has_previous()
    assert not NotificationPage(items=[], total=0, page=0, size=5).has_next()


def test_notification_ownership_ignores_case():
    notification = Notification(id=1, message="m", user_login="Alice")

    assert notification.belongs_to("alice")
    assert notification.belongs_to(" ALICE ")
    assert not notification.belongs_to("bob")
    assert not notification.belongs_to(None)
    assert notification.is_active()


def test_ownership_folds_non_ascii_case():
    notification = Notification(id=1, message="m", user_login="Élodie")

    assert notification.belongs_to("Élodie")
    assert notification.belongs_to("ÉLODIE")
    assert notification.belongs_to("élodie")
    assert login_key(" Straße ") == login_key("STRASSE")
