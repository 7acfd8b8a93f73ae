"""Use cases that acknowledge notifications."""

from dataclasses import replace
import logging

from sqlalchemy.orm import Session

from bookyoon_notifications.application.ports import CurrentUserProvider, NotificationStore
from bookyoon_notifications.domain.entities import Notification
from bookyoon_notifications.domain.exceptions import NotificationNotFoundError
from bookyoon_notifications.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


def mark_notification_read(session: Session, notification_id: int) -> Notification:
    """Set ``read`` on one notification. Marking it again is harmless."""

    repository: NotificationStore = NotificationRepository(session)
    notification = repository.find_by_id(notification_id)
    if notification is None:
        raise NotificationNotFoundError(notification_id)
    if notification.read:
        return notification
    return repository.save(replace(notification, read=True))


def mark_all_notifications_read(
    session: Session, *, current_user: CurrentUserProvider
) -> int:
    """Acknowledge every unread notification of the user making the request.

    Anonymous requests have nothing to acknowledge: a warning is logged and
    nothing changes. Returns the number of notifications updated.
    """

    login = current_user()
    if not login:
        logger.warning("No authenticated user or invalid login, nothing to mark as read")
        return 0

    logger.info("Marking notifications as read for user %s", login)
    repository: NotificationStore = NotificationRepository(session)
    with repository.transaction():
        unread = repository.find_unread_by_user(login, include_deleted=True)
        if not unread:
            logger.info("No unread notification for user %s", login)
            return 0
        repository.save_all(replace(notification, read=True) for notification in unread)

    logger.info("%s notifications marked as read for user %s", len(unread), login)
    return len(unread)


__all__ = ["mark_all_notifications_read", "mark_notification_read"]
