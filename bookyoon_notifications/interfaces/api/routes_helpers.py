"""Helper utilities shared across API route handlers."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from starlette.datastructures import URL

from bookyoon_notifications.domain.entities import (
    CriteriaOperator,
    FieldKind,
    MAX_IDENTIFIER,
    NotificationCriteria,
    NotificationPage,
    PageRequest,
    SortDirection,
)
from bookyoon_notifications.domain.entities.criteria import NOTIFICATION_FIELDS
from bookyoon_notifications.domain.exceptions import (
    ENTITY_NAME,
    ERROR_CRITERIA_INVALID,
    ERROR_PAGE_INVALID,
    NotificationValidationError,
)

RESERVED_QUERY_PARAMETERS = frozenset({"page", "size", "sort"})

_FIELD_ALIASES: dict[str, str] = {
    "id": "id",
    "message": "message",
    "reservationId": "reservation_id",
    "reservation_id": "reservation_id",
    "userLogin": "user_login",
    "user_login": "user_login",
    "deleted": "deleted",
    "read": "read",
}

_MULTI_VALUE_OPERATORS = frozenset({CriteriaOperator.IN, CriteriaOperator.NOT_IN})


# ---- Alert headers ----


def _alert_headers(application_name: str, message: str, param: str) -> dict[str, str]:
    return {
        f"X-{application_name}-alert": message,
        f"X-{application_name}-params": param,
    }


def entity_creation_alert(application_name: str, entity_id: object) -> dict[str, str]:
    return _alert_headers(
        application_name, f"{application_name}.{ENTITY_NAME}.created", str(entity_id)
    )


def entity_update_alert(application_name: str, entity_id: object) -> dict[str, str]:
    return _alert_headers(
        application_name, f"{application_name}.{ENTITY_NAME}.updated", str(entity_id)
    )


def entity_deletion_alert(application_name: str, entity_id: object) -> dict[str, str]:
    return _alert_headers(
        application_name, f"{application_name}.{ENTITY_NAME}.deleted", str(entity_id)
    )


def failure_alert(application_name: str, error_key: str) -> dict[str, str]:
    return {
        f"X-{application_name}-error": f"error.{error_key}",
        f"X-{application_name}-params": ENTITY_NAME,
    }


# ---- Pagination ----


def pagination_headers(url: URL, page: NotificationPage) -> dict[str, str]:
    """Return ``X-Total-Count`` and an RFC 5988 ``Link`` header for ``page``."""

    def _link(page_number: int, relation: str) -> str:
        target = url.include_query_params(page=page_number, size=page.size)
        return f'<{target}>; rel="{relation}"'

    links: list[str] = []
    if page.has_next():
        links.append(_link(page.page + 1, "next"))
    if page.has_previous():
        links.append(_link(page.page - 1, "prev"))
    last_page = max(page.total_pages - 1, 0)
    links.append(_link(last_page, "last"))
    links.append(_link(0, "first"))

    return {"X-Total-Count": str(page.total), "Link": ",".join(links)}


def resolve_field_name(raw_name: str) -> str:
    field_name = _FIELD_ALIASES.get(raw_name.strip())
    if field_name is None:
        raise NotificationValidationError(
            f"Unknown notification field '{raw_name}'", ERROR_CRITERIA_INVALID
        )
    return field_name


def parse_page_request(
    page: int,
    size: int | None,
    sort: Sequence[str] | None,
    *,
    default_size: int,
    max_size: int,
) -> PageRequest:
    """Build a :class:`PageRequest` from Spring style ``page``/``size``/``sort`` values."""

    effective_size = default_size if size is None else min(size, max_size)
    sort_field = "id"
    direction = SortDirection.ASC
    if sort:
        parts = [part.strip() for part in sort[0].split(",") if part.strip()]
        if parts:
            sort_field = resolve_field_name(parts[0])
        if len(parts) > 1:
            try:
                direction = SortDirection(parts[1].lower())
            except ValueError as exc:
                raise NotificationValidationError(
                    f"Unknown sort direction '{parts[1]}'", ERROR_PAGE_INVALID
                ) from exc
    return PageRequest(page=page, size=effective_size, sort=sort_field, direction=direction)


# ---- Criteria ----


def _invalid_value(key: str, value: str) -> NotificationValidationError:
    return NotificationValidationError(
        f"Invalid value '{value}' for criteria '{key}'", ERROR_CRITERIA_INVALID
    )


def _coerce(kind: FieldKind, key: str, raw: str) -> object:
    value = raw.strip()
    if kind is FieldKind.NUMERIC:
        try:
            number = int(value)
        except ValueError as exc:
            raise _invalid_value(key, raw) from exc
        if not -MAX_IDENTIFIER - 1 <= number <= MAX_IDENTIFIER:
            raise _invalid_value(key, raw)
        return number
    if kind is FieldKind.BOOLEAN:
        return _parse_bool(key, value)
    return raw


def _parse_bool(key: str, raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise _invalid_value(key, raw)


def _split(raw: str) -> list[str]:
    return [part for part in raw.split(",") if part.strip()]


def parse_criteria(query_items: Iterable[tuple[str, str]]) -> NotificationCriteria:
    """Translate ``<field>.<operator>=<value>`` query parameters into criteria.

    Parameters without a dot that are not pagination keys are ignored, so
    cache busting parameters sent by browsers do not break the listing.
    """

    grouped: dict[tuple[str, CriteriaOperator], list[str]] = {}
    for key, raw_value in query_items:
        if key in RESERVED_QUERY_PARAMETERS or "." not in key:
            continue
        raw_field, _, raw_operator = key.partition(".")
        field_name = resolve_field_name(raw_field)
        try:
            operator = CriteriaOperator(raw_operator)
        except ValueError as exc:
            raise NotificationValidationError(
                f"Unknown criteria operator '{raw_operator}'", ERROR_CRITERIA_INVALID
            ) from exc
        grouped.setdefault((field_name, operator), []).append(raw_value)

    criteria = NotificationCriteria()
    for (field_name, operator), raw_values in grouped.items():
        kind = NOTIFICATION_FIELDS[field_name]
        key = f"{field_name}.{operator.value}"

        if operator in _MULTI_VALUE_OPERATORS:
            values = [
                _coerce(kind, key, item) for raw in raw_values for item in _split(raw)
            ]
            criteria.where(field_name, operator, values)
            continue

        for raw in raw_values:
            if operator in (CriteriaOperator.IS_TRUE, CriteriaOperator.IS_FALSE):
                criteria.where(field_name, operator)
            elif operator is CriteriaOperator.SPECIFIED:
                criteria.where(field_name, operator, _parse_bool(key, raw))
            elif operator is CriteriaOperator.RANGE:
                low, _, high = raw.partition(",")
                bounds = tuple(
                    _coerce(kind, key, bound) if bound.strip() else None
                    for bound in (low, high)
                )
                criteria.where(field_name, operator, bounds)
            elif kind is FieldKind.BOOLEAN and operator is CriteriaOperator.EQUALS:
                flag = _parse_bool(key, raw)
                criteria.where(
                    field_name, CriteriaOperator.IS_TRUE if flag else CriteriaOperator.IS_FALSE
                )
            else:
                criteria.where(field_name, operator, _coerce(kind, key, raw))
    return criteria


__all__ = [
    "entity_creation_alert",
    "entity_deletion_alert",
    "entity_update_alert",
    "failure_alert",
    "pagination_headers",
    "parse_criteria",
    "parse_page_request",
    "resolve_field_name",
]
