"""Validation helpers for notification use cases."""

from bookyoon_notifications.domain.entities import Notification
from bookyoon_notifications.domain.exceptions import (
    ERROR_MESSAGE_NULL,
    ERROR_USER_LOGIN_IMMUTABLE,
    ERROR_USER_LOGIN_NULL,
    NotificationValidationError,
)


def normalize_user_login(user_login: str | None) -> str:
    """Return ``user_login`` stripped of surrounding blanks or raise when absent."""

    if user_login is None or not str(user_login).strip():
        raise NotificationValidationError("The user login is required", ERROR_USER_LOGIN_NULL)
    return str(user_login).strip()


def ensure_required_fields(message: str | None, user_login: str | None) -> str:
    """Check the non-null fields of a notification and return the cleaned login."""

    if message is None:
        raise NotificationValidationError("The message is required", ERROR_MESSAGE_NULL)
    return normalize_user_login(user_login)


def ensure_same_owner(current: Notification, requested_login: str) -> str:
    """Reject a change of owner; a case-only variation keeps the stored login."""

    if current.belongs_to(requested_login):
        return current.user_login
    raise NotificationValidationError(
        "The owner of a notification cannot be changed", ERROR_USER_LOGIN_IMMUTABLE
    )
