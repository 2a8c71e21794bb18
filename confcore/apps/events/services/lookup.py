# confcore/apps/events/services/lookup.py
from __future__ import annotations

from confcore.apps.core.errors import NotFound

from ..models import Event


def find_event(event_id: int) -> Event:
    try:
        return Event.objects.select_related("organizer").get(pk=event_id)
    except (Event.DoesNotExist, ValueError, TypeError):
        raise NotFound("Evento no encontrado.")


def is_submission_open(event_id: int) -> bool:
    return find_event(event_id).is_submission_open
