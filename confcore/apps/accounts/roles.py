# confcore/apps/accounts/roles.py
"""
Hechos de identidad/rol que consumen los servicios de ponencias y evaluaciones.

Todo recibe ids explícitos (nada de request.user acá): la vista resuelve el
usuario actual y lo pasa como actor_id.
"""
from __future__ import annotations

from django.contrib.auth.models import User
from django.db.models import Q

from confcore.apps.core.errors import NotFound
from confcore.apps.events.models import CommitteeMember, Event

from .apps import SUPER_ADMIN_GROUP


def is_super_admin(user_id: int) -> bool:
    return (
        User.objects.filter(pk=user_id)
        .filter(Q(is_superuser=True) | Q(groups__name=SUPER_ADMIN_GROUP))
        .exists()
    )


def is_organizer_of(user_id: int, event_id: int) -> bool:
    return Event.objects.filter(pk=event_id, organizer_id=user_id).exists()


def is_committee_member_of(user_id: int, event_id: int) -> bool:
    return CommitteeMember.objects.filter(event_id=event_id, user_id=user_id).exists()


def can_manage_event(user_id: int, event_id: int) -> bool:
    """Organizador del evento o super-admin."""
    return is_organizer_of(user_id, event_id) or is_super_admin(user_id)


def can_follow_reviews(user_id: int, event_id: int) -> bool:
    """Organizador, miembro del comité o super-admin."""
    return (
        is_organizer_of(user_id, event_id)
        or is_committee_member_of(user_id, event_id)
        or is_super_admin(user_id)
    )


def get_user(user_id: int) -> User:
    try:
        return User.objects.get(pk=user_id)
    except (User.DoesNotExist, ValueError, TypeError):
        raise NotFound("Usuario no encontrado.")


def display_name(user: User | None) -> str:
    if user is None:
        return "—"
    return user.get_full_name() or user.username


def institution_of(user: User) -> str:
    profile = getattr(user, "profile", None)
    return getattr(profile, "institution", "") or ""
