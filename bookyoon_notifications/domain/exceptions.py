"""Errors raised by the notification use cases."""

from __future__ import annotations

ENTITY_NAME = "notification"

ERROR_ID_EXISTS = "idexists"
ERROR_ID_NULL = "idnull"
ERROR_ID_INVALID = "idinvalid"
ERROR_ID_NOT_FOUND = "idnotfound"
ERROR_MESSAGE_NULL = "messagenull"
ERROR_USER_LOGIN_NULL = "userloginnull"
ERROR_USER_LOGIN_IMMUTABLE = "userloginimmutable"
ERROR_CRITERIA_INVALID = "criteriainvalid"
ERROR_PAGE_INVALID = "pageinvalid"


class NotificationError(Exception):
    """Base class for errors carrying a machine readable ``error_key``."""

    default_error_key = "internal"

    def __init__(self, message: str, error_key: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.error_key = error_key or self.default_error_key
        self.entity_name = ENTITY_NAME

    def to_detail(self) -> dict[str, str]:
        """Return the payload sent back to API clients."""

        return {
            "message": self.message,
            "entityName": self.entity_name,
            "errorKey": self.error_key,
        }


class NotificationValidationError(NotificationError, ValueError):
    """A required field is missing or a request is inconsistent."""

    default_error_key = "validation"


class NotificationNotFoundError(NotificationError, LookupError):
    """The targeted notification does not exist."""

    default_error_key = ERROR_ID_NOT_FOUND

    def __init__(self, notification_id: int | None) -> None:
        super().__init__(f"Notification not found with id {notification_id}")
        self.notification_id = notification_id


__all__ = [
    "ENTITY_NAME",
    "ERROR_CRITERIA_INVALID",
    "ERROR_ID_EXISTS",
    "ERROR_ID_INVALID",
    "ERROR_ID_NOT_FOUND",
    "ERROR_ID_NULL",
    "ERROR_MESSAGE_NULL",
    "ERROR_PAGE_INVALID",
    "ERROR_USER_LOGIN_IMMUTABLE",
    "ERROR_USER_LOGIN_NULL",
    "NotificationError",
    "NotificationNotFoundError",
    "NotificationValidationError",
]
