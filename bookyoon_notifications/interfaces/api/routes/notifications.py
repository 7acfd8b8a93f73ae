"""REST endpoints managing reservation notifications."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.orm import Session

from bookyoon_notifications.application.ports import CurrentUserProvider
from bookyoon_notifications.application.use_cases.notifications import (
    count_notifications_by_criteria as count_notifications_by_criteria_uc,
    count_unread_notifications as count_unread_notifications_uc,
    create_notification as create_notification_uc,
    create_welcome_notification as create_welcome_notification_uc,
    delete_notification as delete_notification_uc,
    find_notifications_by_criteria as find_notifications_by_criteria_uc,
    get_notification as get_notification_uc,
    list_notification_history as list_notification_history_uc,
    list_unread_notification_history as list_unread_notification_history_uc,
    mark_all_notifications_read as mark_all_notifications_read_uc,
    mark_notification_read as mark_notification_read_uc,
    partial_update_notification as partial_update_notification_uc,
    soft_delete_notifications_for_user as soft_delete_notifications_for_user_uc,
    update_notification as update_notification_uc,
)
from bookyoon_notifications.config import Settings, get_settings
from bookyoon_notifications.domain.entities import Notification
from bookyoon_notifications.domain.exceptions import (
    ERROR_ID_INVALID,
    ERROR_ID_NULL,
    NotificationError,
    NotificationNotFoundError,
    NotificationValidationError,
)
from bookyoon_notifications.infrastructure.database import get_db
from bookyoon_notifications.interfaces.api.dependencies import get_current_user_provider
from bookyoon_notifications.interfaces.api.routes_helpers import (
    entity_creation_alert,
    entity_deletion_alert,
    entity_update_alert,
    failure_alert,
    pagination_headers,
    parse_criteria,
    parse_page_request,
)
from bookyoon_notifications.interfaces.api.schemas import (
    NotificationCreate,
    NotificationRead,
    NotificationUpdate,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


def _to_read_model(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        message=notification.message,
        reservation_id=notification.reservation_id,
        user_login=notification.user_login,
        deleted=notification.deleted,
        read=notification.read,
    )


def _http_error(status_code: int, exc: NotificationError, settings: Settings) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail=exc.to_detail(),
        headers=failure_alert(settings.application_name, exc.error_key),
    )


def _ensure_matching_id(
    path_id: int, body_id: int | None, settings: Settings
) -> None:
    if body_id is None:
        raise _http_error(
            status.HTTP_400_BAD_REQUEST,
            NotificationValidationError("Invalid id", ERROR_ID_NULL),
            settings,
        )
    if body_id != path_id:
        raise _http_error(
            status.HTTP_400_BAD_REQUEST,
            NotificationValidationError("Invalid ID", ERROR_ID_INVALID),
            settings,
        )


@router.post("", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
def create_notification(
    payload: NotificationCreate,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Crea una nueva notificación; el identificador lo asigna el almacén."""

    logger.debug("REST request to save Notification : %s", payload)
    try:
        notification = create_notification_uc(
            db,
            message=payload.message,
            user_login=payload.user_login,
            reservation_id=payload.reservation_id,
            deleted=payload.deleted,
            read=payload.read,
            notification_id=payload.id,
        )
    except NotificationValidationError as exc:
        raise _http_error(status.HTTP_400_BAD_REQUEST, exc, settings) from exc

    response.headers["Location"] = f"{settings.api_prefix}/notifications/{notification.id}"
    response.headers.update(entity_creation_alert(settings.application_name, notification.id))
    return _to_read_model(notification)


@router.get("", response_model=list[NotificationRead])
def list_notifications(
    request: Request,
    response: Response,
    page: int = Query(0, ge=0),
    size: int | None = Query(None, ge=1),
    sort: list[str] | None = Query(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Devuelve una página de notificaciones filtradas por criterios."""

    try:
        criteria = parse_criteria(request.query_params.multi_items())
        page_request = parse_page_request(
            page,
            size,
            sort,
            default_size=settings.default_page_size,
            max_size=settings.max_page_size,
        )
    except NotificationValidationError as exc:
        raise _http_error(status.HTTP_400_BAD_REQUEST, exc, settings) from exc

    logger.debug("REST request to get Notifications by criteria: %s", criteria)
    result = find_notifications_by_criteria_uc(db, criteria, page_request)
    response.headers.update(pagination_headers(request.url, result))
    return [_to_read_model(notification) for notification in result.items]


@router.get("/count", response_model=int)
def count_notifications(
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> int:
    """Cuenta las notificaciones que cumplen los criterios recibidos."""

    try:
        criteria = parse_criteria(request.query_params.multi_items())
    except NotificationValidationError as exc:
        raise _http_error(status.HTTP_400_BAD_REQUEST, exc, settings) from exc

    logger.debug("REST request to count Notifications by criteria: %s", criteria)
    return count_notifications_by_criteria_uc(db, criteria)


@router.post("/welcome", status_code=status.HTTP_200_OK)
def welcome_notification(
    payload: NotificationCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Registra la notificación de bienvenida de un usuario recién creado."""

    logger.debug("Received welcome notification: %s", payload)
    try:
        create_welcome_notification_uc(
            db,
            message=payload.message,
            user_login=payload.user_login,
            reservation_id=payload.reservation_id,
            deleted=payload.deleted,
            read=payload.read,
        )
    except NotificationValidationError as exc:
        raise _http_error(status.HTTP_400_BAD_REQUEST, exc, settings) from exc
    return Response(status_code=status.HTTP_200_OK)


@router.get("/history", response_model=list[NotificationRead])
def notifications_history(
    db: Session = Depends(get_db),
    current_user: CurrentUserProvider = Depends(get_current_user_provider),
):
    """Historial completo del usuario autenticado, incluidas las eliminadas."""

    notifications = list_notification_history_uc(db, current_user=current_user)
    return [_to_read_model(notification) for notification in notifications]


@router.get("/history/non-lue", response_model=list[NotificationRead])
def unread_notifications_history(
    db: Session = Depends(get_db),
    current_user: CurrentUserProvider = Depends(get_current_user_provider),
):
    """Notificaciones activas y no leídas del usuario autenticado."""

    notifications = list_unread_notification_history_uc(db, current_user=current_user)
    return [_to_read_model(notification) for notification in notifications]


@router.get("/non-lue", response_model=int)
def unread_notifications_count(
    user_login: str = Query(..., alias="userLogin", min_length=1),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> int:
    """Número de notificaciones activas y no leídas del usuario indicado."""

    try:
        return count_unread_notifications_uc(db, user_login)
    except NotificationValidationError as exc:
        raise _http_error(status.HTTP_400_BAD_REQUEST, exc, settings) from exc


@router.patch("/read-all", status_code=status.HTTP_204_NO_CONTENT)
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    current_user: CurrentUserProvider = Depends(get_current_user_provider),
) -> Response:
    """Marca como leídas todas las notificaciones del usuario autenticado."""

    mark_all_notifications_read_uc(db, current_user=current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/user/{user_login}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notifications_for_user(
    user_login: str,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Eliminación lógica de todas las notificaciones activas de un usuario."""

    logger.debug("REST request to soft delete Notifications of user : %s", user_login)
    try:
        soft_delete_notifications_for_user_uc(db, user_login)
    except NotificationValidationError as exc:
        raise _http_error(status.HTTP_400_BAD_REQUEST, exc, settings) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{notification_id}", response_model=NotificationRead)
def read_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Obtiene la notificación identificada por ``notification_id``."""

    logger.debug("REST request to get Notification : %s", notification_id)
    notification = get_notification_uc(db, notification_id)
    if notification is None:
        raise _http_error(
            status.HTTP_404_NOT_FOUND, NotificationNotFoundError(notification_id), settings
        )
    return _to_read_model(notification)


@router.put("/{notification_id}", response_model=NotificationRead)
def update_notification(
    notification_id: int,
    payload: NotificationUpdate,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Reemplaza por completo una notificación existente."""

    logger.debug("REST request to update Notification : %s, %s", notification_id, payload)
    _ensure_matching_id(notification_id, payload.id, settings)
    try:
        notification = update_notification_uc(
            db,
            Notification(
                id=payload.id,
                message=payload.message,
                user_login=payload.user_login,
                reservation_id=payload.reservation_id,
                deleted=bool(payload.deleted),
                read=bool(payload.read),
            ),
        )
    except NotificationNotFoundError as exc:
        raise _http_error(status.HTTP_404_NOT_FOUND, exc, settings) from exc
    except NotificationValidationError as exc:
        raise _http_error(status.HTTP_400_BAD_REQUEST, exc, settings) from exc

    response.headers.update(entity_update_alert(settings.application_name, notification.id))
    return _to_read_model(notification)


@router.patch("/{notification_id}", response_model=NotificationRead)
def partial_update_notification(
    notification_id: int,
    payload: NotificationUpdate,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Actualiza solo los campos presentes en el cuerpo de la petición."""

    logger.debug(
        "REST request to partial update Notification partially : %s, %s",
        notification_id,
        payload,
    )
    _ensure_matching_id(notification_id, payload.id, settings)
    patch = payload.model_dump(exclude_unset=True, exclude={"id"})
    try:
        notification = partial_update_notification_uc(db, notification_id, patch)
    except NotificationNotFoundError as exc:
        raise _http_error(status.HTTP_404_NOT_FOUND, exc, settings) from exc
    except NotificationValidationError as exc:
        raise _http_error(status.HTTP_400_BAD_REQUEST, exc, settings) from exc

    response.headers.update(entity_update_alert(settings.application_name, notification.id))
    return _to_read_model(notification)


@router.patch("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Marca una notificación como leída."""

    try:
        mark_notification_read_uc(db, notification_id)
    except NotificationNotFoundError as exc:
        raise _http_error(status.HTTP_404_NOT_FOUND, exc, settings) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Elimina físicamente la notificación indicada."""

    logger.debug("REST request to delete Notification : %s", notification_id)
    delete_notification_uc(db, notification_id)
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers=entity_deletion_alert(settings.application_name, notification_id),
    )
