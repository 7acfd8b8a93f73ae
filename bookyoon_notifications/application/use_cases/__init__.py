"""Aggregate application use cases."""

from .notifications import (
    count_notifications_by_criteria,
    create_notification,
    find_notifications_by_criteria,
    mark_all_notifications_read,
    soft_delete_notifications_for_user,
)

__all__ = [
    "count_notifications_by_criteria",
    "create_notification",
    "find_notifications_by_criteria",
    "mark_all_notifications_read",
    "soft_delete_notifications_for_user",
]
