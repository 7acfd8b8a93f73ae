"""Domain entities exposed by the application."""

from .criteria import (
    CriteriaCondition,
    CriteriaOperator,
    FieldKind,
    NotificationCriteria,
    NotificationPage,
    PageRequest,
    SortDirection,
)
from .notification import MAX_IDENTIFIER, Notification, login_key

__all__ = [
    "CriteriaCondition",
    "CriteriaOperator",
    "FieldKind",
    "MAX_IDENTIFIER",
    "Notification",
    "NotificationCriteria",
    "NotificationPage",
    "PageRequest",
    "SortDirection",
    "login_key",
]
