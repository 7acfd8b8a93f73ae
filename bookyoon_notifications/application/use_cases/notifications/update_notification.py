"""Use cases for replacing or patching an existing notification."""

from collections.abc import Mapping
from dataclasses import replace
from typing import Any
import logging

from sqlalchemy.orm import Session

from bookyoon_notifications.application.ports import NotificationStore
from bookyoon_notifications.domain.entities import Notification
from bookyoon_notifications.domain.exceptions import (
    ERROR_ID_NULL,
    NotificationNotFoundError,
    NotificationValidationError,
)
from bookyoon_notifications.infrastructure.repositories import NotificationRepository
from .validators import ensure_required_fields, ensure_same_owner

logger = logging.getLogger(__name__)

PATCHABLE_FIELDS = ("message", "reservation_id", "user_login", "deleted", "read")


def update_notification(session: Session, notification: Notification) -> Notification:
    """Replace every mutable field of the notification identified by ``notification.id``."""

    logger.debug("Request to update Notification : %s", notification)
    if notification.id is None:
        raise NotificationValidationError("Invalid id", ERROR_ID_NULL)
    login = ensure_required_fields(notification.message, notification.user_login)

    repository: NotificationStore = NotificationRepository(session)
    current = repository.find_by_id(notification.id)
    if current is None:
        raise NotificationNotFoundError(notification.id)

    updated = replace(
        current,
        message=notification.message,
        reservation_id=notification.reservation_id,
        user_login=ensure_same_owner(current, login),
        deleted=bool(notification.deleted),
        read=bool(notification.read),
    )
    return repository.save(updated)


def partial_update_notification(
    session: Session, notification_id: int, patch: Mapping[str, Any]
) -> Notification:
    """Merge the supplied fields of ``patch`` into an existing notification.

    Keys whose value is ``None`` are left untouched, as are keys that do not
    name a patchable field.
    """

    logger.debug("Request to partially update Notification %s : %s", notification_id, patch)
    repository: NotificationStore = NotificationRepository(session)
    current = repository.find_by_id(notification_id)
    if current is None:
        raise NotificationNotFoundError(notification_id)

    changes = {
        field_name: patch[field_name]
        for field_name in PATCHABLE_FIELDS
        if patch.get(field_name) is not None
    }
    if not changes:
        return current
    if "user_login" in changes:
        changes["user_login"] = ensure_same_owner(current, str(changes["user_login"]))

    return repository.save(replace(current, **changes))


__all__ = ["partial_update_notification", "update_notification"]
