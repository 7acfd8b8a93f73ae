"""Criteria based listing and counting of notifications."""

import logging

from sqlalchemy.orm import Session

from bookyoon_notifications.domain.entities import (
    NotificationCriteria,
    NotificationPage,
    PageRequest,
)
from bookyoon_notifications.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


def find_notifications_by_criteria(
    session: Session,
    criteria: NotificationCriteria | None = None,
    page_request: PageRequest | None = None,
) -> NotificationPage:
    """Return the requested page of matches together with the overall count."""

    criteria = criteria or NotificationCriteria()
    page_request = page_request or PageRequest()
    logger.debug("Find Notifications by criteria : %s, page : %s", criteria, page_request)
    return NotificationRepository(session).query(criteria, page_request)


def count_notifications_by_criteria(
    session: Session, criteria: NotificationCriteria | None = None
) -> int:
    """Count the notifications matching ``criteria`` without loading them."""

    criteria = criteria or NotificationCriteria()
    logger.debug("Count Notifications by criteria : %s", criteria)
    return NotificationRepository(session).count(criteria)


__all__ = ["count_notifications_by_criteria", "find_notifications_by_criteria"]
