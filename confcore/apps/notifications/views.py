from __future__ import annotations

from typing import Any, Dict

from django.http import HttpRequest, JsonResponse

from confcore.apps.core.http import api_view, paginated

from . import notifier
from .models import Notification


def _notification_payload(n: Notification) -> Dict[str, Any]:
    return {
        "id": n.id,
        "type": n.type,
        "title": n.title,
        "message": n.message,
        "data": n.data,
        "event_id": n.event_id,
        "is_read": n.is_read,
        "created_at": n.created_at.isoformat(),
    }


@api_view(["GET"])
def notification_list(request: HttpRequest) -> JsonResponse:
    unread_only = request.GET.get("unread") in ("1", "true", "yes")
    qs = notifier.list_notifications(request.user.id, unread_only=unread_only)
    return JsonResponse(paginated(request, qs, _notification_payload))


@api_view(["GET"])
def notification_unread_count(request: HttpRequest) -> JsonResponse:
    return JsonResponse({"unread_count": notifier.unread_count(request.user.id)})


@api_view(["POST"])
def notification_mark_read(request: HttpRequest, notification_id: int) -> JsonResponse:
    n = notifier.mark_as_read(notification_id, request.user.id)
    return JsonResponse({"notification": _notification_payload(n)})


@api_view(["POST"])
def notification_mark_all_read(request: HttpRequest) -> JsonResponse:
    updated = notifier.mark_all_as_read(request.user.id)
    return JsonResponse({"updated": updated})
