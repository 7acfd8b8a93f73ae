"""Use cases that tombstone notifications without removing them."""

from dataclasses import replace
import logging

from sqlalchemy.orm import Session

from bookyoon_notifications.application.ports import NotificationStore
from bookyoon_notifications.infrastructure.repositories import NotificationRepository
from .validators import normalize_user_login

logger = logging.getLogger(__name__)


def soft_delete_notification(session: Session, notification_id: int) -> None:
    """Flag the notification as deleted; a missing id is silently ignored."""

    repository: NotificationStore = NotificationRepository(session)
    notification = repository.find_by_id(notification_id)
    if notification is None:
        logger.debug("Notification %s not found, nothing to delete", notification_id)
        return
    if not notification.is_active():
        return
    repository.save(replace(notification, deleted=True))


def soft_delete_notifications_for_user(session: Session, user_login: str) -> int:
    """Flag every active notification owned by ``user_login`` as deleted.

    The selection and the batch update run in one transaction: either every
    eligible notification ends up deleted or none does. Returns the number of
    notifications affected.
    """

    login = normalize_user_login(user_login)
    repository: NotificationStore = NotificationRepository(session)
    with repository.transaction():
        active = repository.find_active_by_user(login)
        if not active:
            logger.info("No active notification to delete for user %s", login)
            return 0
        repository.save_all(replace(notification, deleted=True) for notification in active)

    logger.info("%s notifications deleted for user %s", len(active), login)
    return len(active)


__all__ = ["soft_delete_notification", "soft_delete_notifications_for_user"]
