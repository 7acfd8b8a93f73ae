"""Use cases for creating notifications."""

import logging

from sqlalchemy.orm import Session

from bookyoon_notifications.domain.entities import Notification
from bookyoon_notifications.domain.exceptions import ERROR_ID_EXISTS, NotificationValidationError
from bookyoon_notifications.infrastructure.repositories import NotificationRepository
from .validators import ensure_required_fields

logger = logging.getLogger(__name__)


def create_notification(
    session: Session,
    *,
    message: str | None,
    user_login: str | None,
    reservation_id: int | None = None,
    deleted: bool | None = None,
    read: bool | None = None,
    notification_id: int | None = None,
) -> Notification:
    """Persist a new notification and return it with its assigned id.

    ``deleted`` and ``read`` default to ``False`` when the caller leaves them
    unset. Supplying ``notification_id`` is rejected: identifiers are always
    assigned by the store.
    """

    if notification_id is not None:
        raise NotificationValidationError(
            "A new notification cannot already have an ID", ERROR_ID_EXISTS
        )
    login = ensure_required_fields(message, user_login)

    entity = Notification(
        id=None,
        message=message,
        user_login=login,
        reservation_id=reservation_id,
        deleted=bool(deleted) if deleted is not None else False,
        read=bool(read) if read is not None else False,
    )
    logger.debug("Request to save Notification : %s", entity)
    return NotificationRepository(session).save(entity)


def create_welcome_notification(
    session: Session,
    *,
    message: str | None,
    user_login: str | None,
    reservation_id: int | None = None,
    deleted: bool | None = None,
    read: bool | None = None,
) -> Notification:
    """Store the greeting sent to a newly registered user.

    Unlike :func:`create_notification` any client supplied id is simply not
    forwarded, and the flags may arrive pre-populated.
    """

    saved = create_notification(
        session,
        message=message,
        user_login=user_login,
        reservation_id=reservation_id,
        deleted=deleted,
        read=read,
    )
    logger.info("Welcome notification %s stored for user %s", saved.id, saved.user_login)
    return saved


__all__ = ["create_notification", "create_welcome_notification"]
