"""Use case for retrieving a single notification."""

import logging

from sqlalchemy.orm import Session

from bookyoon_notifications.domain.entities import Notification
from bookyoon_notifications.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


def get_notification(session: Session, notification_id: int) -> Notification | None:
    """Return the notification identified by ``notification_id``, tombstoned or not."""

    logger.debug("Request to get Notification : %s", notification_id)
    return NotificationRepository(session).find_by_id(notification_id)


__all__ = ["get_notification"]
