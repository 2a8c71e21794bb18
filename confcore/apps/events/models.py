from __future__ import annotations

from django.conf import settings
from django.db import models
from django.utils.text import slugify
from django.core.exceptions import ValidationError
from django.utils import timezone


class Event(models.Model):
    STATUS_CHOICES = (
        ("draft", "Borrador"),
        ("published", "Publicado"),
        ("closed", "Cerrado"),
        ("finished", "Finalizado"),
    )

    title = models.CharField(max_length=255)
    slug = models.SlugField(unique=True)
    location = models.CharField(max_length=255, blank=True)
    description = models.TextField(blank=True)

    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    submission_deadline = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Si está vacío, las ponencias se aceptan mientras el evento no esté cerrado.",
    )
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default="draft")

    organizer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="organized_events",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("-start_date", "title")

    def __str__(self) -> str:
        return self.title

    def clean(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError("end_date no puede ser anterior a start_date")

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.title)
        super().save(*args, **kwargs)

    @property
    def is_submission_open(self) -> bool:
        if self.status in ("closed", "finished"):
            return False
        if self.submission_deadline and timezone.now() > self.submission_deadline:
            return False
        return True


class CommitteeMember(models.Model):
    """Miembro del comité científico de un evento (puede evaluar ponencias)."""
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="committee")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="committee_memberships",
    )
    role_in_committee = models.CharField(max_length=64, blank=True, default="member")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=("event", "user"), name="uniq_committee_event_user"),
        ]
        ordering = ("event", "id")

    def __str__(self) -> str:
        return f"{self.event} · {self.user}"
