# confcore/apps/submissions/models.py
from __future__ import annotations

from django.conf import settings
from django.db import models

TYPE_CHOICES = (
    ("oral", "Comunicación oral"),
    ("poster", "Póster"),
    ("display_panel", "Panel expuesto"),
)

STATUS_PENDING = "pending"
STATUS_UNDER_REVIEW = "under_review"

STATUS_CHOICES = (
    (STATUS_PENDING, "Pendiente"),
    (STATUS_UNDER_REVIEW, "En evaluación"),
    ("accepted", "Aceptada"),
    ("rejected", "Rechazada"),
    ("revision", "Revisión solicitada"),
)


class Submission(models.Model):
    """
    Ponencia enviada a un evento.
    El estado solo cambia por transiciones explícitas (services/store.py y
    reviews/services): pending -> under_review al asignar/evaluar, y el
    organizador puede fijar cualquier estado en cualquier momento.
    """
    event = models.ForeignKey(
        "events.Event",
        on_delete=models.CASCADE,
        related_name="submissions",
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="submissions",
    )

    title = models.CharField(max_length=255)
    abstract = models.TextField()
    keywords = models.JSONField(default=list, blank=True)
    type = models.CharField(max_length=16, choices=TYPE_CHOICES)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING)

    file = models.FileField(upload_to="submissions/", blank=True)
    admin_comments = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("-created_at", "-id")
        indexes = [
            models.Index(fields=("event", "status"), name="submission_event_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.title} · {self.event}"


class SubmissionAuthor(models.Model):
    """Coautor declarado al enviar (no necesita cuenta en el sistema)."""
    submission = models.ForeignKey(Submission, on_delete=models.CASCADE, related_name="co_authors")
    name = models.CharField(max_length=255)
    email = models.EmailField()
    institution = models.CharField(max_length=255, blank=True, default="")
    order = models.PositiveIntegerField(default=1)

    class Meta:
        ordering = ("submission", "order")

    def __str__(self) -> str:
        return f"{self.name} · {self.submission_id}"
