"""Use cases returning the notifications of a given or the current user."""

from collections.abc import Sequence
import logging

from sqlalchemy.orm import Session

from bookyoon_notifications.application.ports import CurrentUserProvider
from bookyoon_notifications.domain.entities import Notification
from bookyoon_notifications.infrastructure.repositories import NotificationRepository
from .validators import normalize_user_login

logger = logging.getLogger(__name__)


def list_notification_history(
    session: Session, *, current_user: CurrentUserProvider
) -> Sequence[Notification]:
    """Return every notification of the current user, deleted ones included."""

    login = current_user()
    if not login:
        logger.warning("Notification history requested without an authenticated user")
        return []
    return NotificationRepository(session).find_all_by_user(login)


def list_unread_notification_history(
    session: Session, *, current_user: CurrentUserProvider
) -> Sequence[Notification]:
    """Return the active, unread notifications of the current user."""

    login = current_user()
    if not login:
        logger.warning("Unread notifications requested without an authenticated user")
        return []
    return NotificationRepository(session).find_unread_by_user(login)


def count_unread_notifications(session: Session, user_login: str) -> int:
    """Count the active, unread notifications owned by ``user_login``."""

    login = normalize_user_login(user_login)
    return NotificationRepository(session).count_unread_active(login)


__all__ = [
    "count_unread_notifications",
    "list_notification_history",
    "list_unread_notification_history",
]
