"""Persistence helpers for notification entities."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager

from sqlalchemy import false
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from bookyoon_notifications.domain.entities import (
    MAX_IDENTIFIER,
    Notification,
    NotificationCriteria,
    NotificationPage,
    PageRequest,
    login_key,
)
from bookyoon_notifications.domain.exceptions import NotificationNotFoundError
from bookyoon_notifications.infrastructure.criteria import (
    build_criteria_filters,
    build_ordering,
)
from bookyoon_notifications.infrastructure.models import NotificationModel

logger = logging.getLogger(__name__)


def _is_storable_id(notification_id: int) -> bool:
    return 0 < notification_id <= MAX_IDENTIFIER


class NotificationRepository:
    """Provide CRUD, user scoped and criteria queries for :class:`Notification`."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self._transaction_depth = 0

    @contextmanager
    def transaction(self) -> Iterator["NotificationRepository"]:
        """Group the enclosed reads and writes into a single unit of work.

        Writes issued inside the block are only flushed. The outermost block
        commits when it exits normally and rolls everything back otherwise,
        so a failure never leaves part of a batch visible.
        """

        self._transaction_depth += 1
        try:
            yield self
            if self._transaction_depth == 1:
                self.session.commit()
        except Exception:
            if self._transaction_depth == 1:
                self.session.rollback()
            raise
        finally:
            self._transaction_depth -= 1

    @property
    def in_transaction(self) -> bool:
        return self._transaction_depth > 0

    def find_by_id(self, notification_id: int) -> Notification | None:
        model = self._get_model(notification_id)
        return self._to_entity(model) if model else None

    def exists_by_id(self, notification_id: int) -> bool:
        if not _is_storable_id(notification_id):
            return False
        query = self.session.query(NotificationModel.id).filter(
            NotificationModel.id == notification_id
        )
        return self.session.query(query.exists()).scalar() is True

    def find_all_by_user(self, user_login: str) -> Sequence[Notification]:
        query = self._user_query(user_login)
        return self._list(query)

    def find_active_by_user(self, user_login: str) -> Sequence[Notification]:
        query = self._user_query(user_login).filter(NotificationModel.deleted == false())
        return self._list(query)

    def find_unread_by_user(
        self, user_login: str, *, include_deleted: bool = False
    ) -> Sequence[Notification]:
        query = self._user_query(user_login).filter(NotificationModel.read == false())
        if not include_deleted:
            query = query.filter(NotificationModel.deleted == false())
        return self._list(query)

    def count_unread_active(self, user_login: str) -> int:
        return (
            self._user_query(user_login)
            .filter(NotificationModel.deleted == false())
            .filter(NotificationModel.read == false())
            .count()
        )

    def save(self, notification: Notification) -> Notification:
        if notification.id is None:
            model = NotificationModel()
        else:
            model = self._get_model(notification.id)
            if model is None:
                raise NotificationNotFoundError(notification.id)
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self._commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def save_all(self, notifications: Iterable[Notification]) -> list[Notification]:
        models: list[NotificationModel] = []
        for notification in notifications:
            if notification.id is None:
                model = NotificationModel()
            else:
                model = self._get_model(notification.id)
                if model is None:
                    raise NotificationNotFoundError(notification.id)
            self._apply_entity_to_model(model, notification)
            models.append(model)
        if not models:
            return []
        self.session.add_all(models)
        self._commit()
        for model in models:
            self.session.refresh(model)
        return [self._to_entity(model) for model in models]

    def delete_by_id(self, notification_id: int) -> None:
        model = self._get_model(notification_id)
        if model is None:
            return
        self.session.delete(model)
        self._commit()

    def query(
        self, criteria: NotificationCriteria, page_request: PageRequest
    ) -> NotificationPage:
        base_query = self._criteria_query(criteria)
        total = base_query.count()
        page_query = (
            base_query.order_by(*build_ordering(page_request))
            .offset(page_request.offset)
            .limit(page_request.size)
        )
        return NotificationPage(
            items=self._list(page_query, ordered=True),
            total=total,
            page=page_request.page,
            size=page_request.size,
        )

    def count(self, criteria: NotificationCriteria) -> int:
        return self._criteria_query(criteria).count()

    def _criteria_query(self, criteria: NotificationCriteria | None) -> Query:
        query = self.session.query(NotificationModel)
        filters = build_criteria_filters(criteria)
        if filters:
            query = query.filter(*filters)
        return query

    def _get_model(self, notification_id: int) -> NotificationModel | None:
        if not _is_storable_id(notification_id):
            return None
        return self.session.get(NotificationModel, notification_id)

    def _user_query(self, user_login: str) -> Query:
        return self.session.query(NotificationModel).filter(
            NotificationModel.user_login_key == login_key(user_login)
        )

    def _list(self, query: Query, *, ordered: bool = False) -> list[Notification]:
        if not ordered:
            query = query.order_by(NotificationModel.id.desc())
        return [self._to_entity(model) for model in query.all()]

    def _commit(self) -> None:
        if self.in_transaction:
            self.session.flush()
            return
        try:
            self.session.commit()
        except SQLAlchemyError:
            logger.exception("Failed to persist notification changes")
            self.session.rollback()
            raise

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        model.message = notification.message
        model.reservation_id = notification.reservation_id
        model.user_login = notification.user_login
        model.user_login_key = login_key(notification.user_login)
        model.deleted = bool(notification.deleted)
        model.read = bool(notification.read)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            message=model.message,
            user_login=model.user_login,
            reservation_id=model.reservation_id,
            deleted=bool(model.deleted),
            read=bool(model.read),
        )


__all__ = ["NotificationRepository"]
