# confcore/apps/notifications/notifier.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from django.db import transaction
from django.db.models import QuerySet

from confcore.apps.core.errors import NotFound, Unauthorized

from .models import Notification

logger = logging.getLogger(__name__)


def notify(
    user_id: int,
    type: str,
    message: str,
    data: Optional[Dict[str, Any]] = None,
    *,
    event_id: Optional[int] = None,
    title: str = "",
) -> Optional[Notification]:
    """
    Crea una notificación "best effort".
    Corre en su propio savepoint: si falla se registra en el log y se devuelve
    None, sin deshacer la transacción de quien llama (evaluación, asignación...).
    """
    try:
        with transaction.atomic():
            return Notification.objects.create(
                user_id=user_id,
                event_id=event_id,
                type=type,
                title=title,
                message=message,
                data=data or {},
            )
    except Exception:
        logger.exception("No se pudo crear la notificación %s para el usuario %s", type, user_id)
        return None


# -------------------------------
# Bandeja del usuario
# -------------------------------
def list_notifications(actor_id: int, unread_only: bool = False) -> QuerySet[Notification]:
    qs = Notification.objects.filter(user_id=actor_id).select_related("event")
    if unread_only:
        qs = qs.filter(is_read=False)
    return qs.order_by("-created_at", "-id")


def unread_count(actor_id: int) -> int:
    return Notification.objects.filter(user_id=actor_id, is_read=False).count()


def mark_as_read(notification_id: int, actor_id: int) -> Notification:
    try:
        notification = Notification.objects.get(pk=notification_id)
    except Notification.DoesNotExist:
        raise NotFound("Notificación no encontrada.")
    if notification.user_id != actor_id:
        raise Unauthorized()
    if not notification.is_read:
        notification.is_read = True
        notification.save(update_fields=["is_read"])
    return notification


def mark_all_as_read(actor_id: int) -> int:
    return Notification.objects.filter(user_id=actor_id, is_read=False).update(is_read=True)
