"""Contracts the notification use cases depend on."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from contextlib import AbstractContextManager
from typing import Protocol, runtime_checkable

from bookyoon_notifications.domain.entities import (
    Notification,
    NotificationCriteria,
    NotificationPage,
    PageRequest,
)


class CurrentUserProvider(Protocol):
    """Resolve the login acting on the current request, if any."""

    def __call__(self) -> str | None:
        ...


@runtime_checkable
class NotificationStore(Protocol):
    """Persistence operations required by the lifecycle manager and query engine."""

    def save(self, notification: Notification) -> Notification:
        ...

    def save_all(self, notifications: Iterable[Notification]) -> list[Notification]:
        ...

    def find_by_id(self, notification_id: int) -> Notification | None:
        ...

    def exists_by_id(self, notification_id: int) -> bool:
        ...

    def find_all_by_user(self, user_login: str) -> Sequence[Notification]:
        ...

    def find_active_by_user(self, user_login: str) -> Sequence[Notification]:
        ...

    def find_unread_by_user(
        self, user_login: str, *, include_deleted: bool = False
    ) -> Sequence[Notification]:
        ...

    def count_unread_active(self, user_login: str) -> int:
        ...

    def delete_by_id(self, notification_id: int) -> None:
        ...

    def query(
        self, criteria: NotificationCriteria, page_request: PageRequest
    ) -> NotificationPage:
        ...

    def count(self, criteria: NotificationCriteria) -> int:
        ...

    def transaction(self) -> AbstractContextManager["NotificationStore"]:
        ...


def anonymous_user() -> str | None:
    """Provider used when a request carries no identity."""

    return None


def fixed_user(login: str | None) -> CurrentUserProvider:
    """Return a provider that always resolves to ``login``."""

    def _provider() -> str | None:
        return login

    return _provider


__all__ = ["CurrentUserProvider", "NotificationStore", "anonymous_user", "fixed_user"]
