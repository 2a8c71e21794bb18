from __future__ import annotations

from django.conf import settings
from django.db import models
from django.utils import timezone


class Notification(models.Model):
    """
    Aviso interno para un usuario (asignaciones, evaluaciones, cambios de estado).
    `type` es una clave estable ("new_evaluation", "submission_accepted", ...);
    `data` guarda ids para que el cliente pueda enlazar.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
    )
    event = models.ForeignKey(
        "events.Event",
        on_delete=models.CASCADE,
        null=True, blank=True, related_name="notifications",
    )
    type = models.CharField(max_length=64)
    title = models.CharField(max_length=255, blank=True, default="")
    message = models.TextField()
    data = models.JSONField(default=dict, blank=True)
    is_read = models.BooleanField(default=False)

    created_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        ordering = ("-created_at", "-id")
        indexes = [
            models.Index(fields=("user", "is_read"), name="notif_user_unread_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.user} · {self.type}"
