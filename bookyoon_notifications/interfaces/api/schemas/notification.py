"""Pydantic models describing notification payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from bookyoon_notifications.domain.entities import MAX_IDENTIFIER


class _CamelModel(BaseModel):
    """Expose camelCase names on the wire while accepting snake_case too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NotificationCreate(_CamelModel):
    """Payload used to create a notification.

    Every field is optional at this level so that missing required values are
    reported with the same error keys as the rest of the API.
    """

    id: int | None = None
    message: str | None = None
    reservation_id: int | None = Field(default=None, ge=-MAX_IDENTIFIER - 1, le=MAX_IDENTIFIER)
    user_login: str | None = Field(default=None, max_length=255)
    deleted: bool | None = None
    read: bool | None = None


class NotificationUpdate(NotificationCreate):
    """Payload used by full (PUT) and partial (PATCH) updates."""


class NotificationRead(_CamelModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: int
    message: str
    reservation_id: int | None = None
    user_login: str
    deleted: bool
    read: bool


__all__ = ["NotificationCreate", "NotificationRead", "NotificationUpdate"]
