"""Use case for physically removing a notification."""

import logging

from sqlalchemy.orm import Session

from bookyoon_notifications.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


def delete_notification(session: Session, notification_id: int) -> None:
    """Hard delete the notification; deleting a missing id is not an error."""

    logger.debug("Request to delete Notification : %s", notification_id)
    NotificationRepository(session).delete_by_id(notification_id)


__all__ = ["delete_notification"]
