"""Use cases managing the lifecycle and retrieval of notifications."""

from .create_notification import create_notification, create_welcome_notification
from .delete_notification import delete_notification
from .get_notification import get_notification
from .mark_notifications_read import mark_all_notifications_read, mark_notification_read
from .notification_history import (
    count_unread_notifications,
    list_notification_history,
    list_unread_notification_history,
)
from .query_notifications import (
    count_notifications_by_criteria,
    find_notifications_by_criteria,
)
from .soft_delete_notifications import (
    soft_delete_notification,
    soft_delete_notifications_for_user,
)
from .update_notification import partial_update_notification, update_notification

__all__ = [
    "count_notifications_by_criteria",
    "count_unread_notifications",
    "create_notification",
    "create_welcome_notification",
    "delete_notification",
    "find_notifications_by_criteria",
    "get_notification",
    "list_notification_history",
    "list_unread_notification_history",
    "mark_all_notifications_read",
    "mark_notification_read",
    "partial_update_notification",
    "soft_delete_notification",
    "soft_delete_notifications_for_user",
    "update_notification",
]
