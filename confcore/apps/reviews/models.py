# confcore/apps/reviews/models.py
from __future__ import annotations

from django.conf import settings
from django.db import models
from django.utils import timezone

RECOMMENDATION_CHOICES = (
    ("accept", "Aceptar"),
    ("reject", "Rechazar"),
    ("revision", "Revisión"),
)

SCORE_MIN = 0
SCORE_MAX = 10
SUBSCORE_MIN = 1
SUBSCORE_MAX = 5


class ReviewAssignment(models.Model):
    """
    Designación de un miembro del comité para evaluar una ponencia.
    Se fuerza unicidad por (submission, evaluator).
    """
    submission = models.ForeignKey(
        "submissions.Submission",
        on_delete=models.CASCADE,
        related_name="assignments",
    )
    evaluator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="review_assignments",
    )
    assigned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True, blank=True, related_name="+",
    )

    created_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=("submission", "evaluator"), name="uniq_assignment_submission_evaluator"),
        ]
        ordering = ("-created_at", "-id")

    def __str__(self) -> str:
        return f"{self.submission} · {self.evaluator}"


class Evaluation(models.Model):
    """
    Evaluación de un miembro del comité sobre una ponencia.
    Una sola por (submission, evaluator); rangos de puntaje también
    controlados por la BD.
    """
    submission = models.ForeignKey(
        "submissions.Submission",
        on_delete=models.CASCADE,
        related_name="evaluations",
    )
    evaluator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="evaluations",
    )

    # Puntuación global 0..10 (admite decimales)
    score = models.FloatField()
    # Sub-puntuaciones opcionales 1..5
    relevance_score = models.PositiveSmallIntegerField(null=True, blank=True)
    quality_score = models.PositiveSmallIntegerField(null=True, blank=True)
    originality_score = models.PositiveSmallIntegerField(null=True, blank=True)

    comments = models.TextField(blank=True, default="")
    recommendation = models.CharField(max_length=16, choices=RECOMMENDATION_CHOICES)

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=("submission", "evaluator"), name="uniq_evaluation_submission_evaluator"),
            models.CheckConstraint(
                condition=models.Q(score__gte=SCORE_MIN) & models.Q(score__lte=SCORE_MAX),
                name="evaluation_score_range",
            ),
            models.CheckConstraint(
                condition=models.Q(relevance_score__isnull=True)
                | models.Q(relevance_score__gte=SUBSCORE_MIN, relevance_score__lte=SUBSCORE_MAX),
                name="evaluation_relevance_range",
            ),
            models.CheckConstraint(
                condition=models.Q(quality_score__isnull=True)
                | models.Q(quality_score__gte=SUBSCORE_MIN, quality_score__lte=SUBSCORE_MAX),
                name="evaluation_quality_range",
            ),
            models.CheckConstraint(
                condition=models.Q(originality_score__isnull=True)
                | models.Q(originality_score__gte=SUBSCORE_MIN, originality_score__lte=SUBSCORE_MAX),
                name="evaluation_originality_range",
            ),
        ]
        ordering = ("created_at", "id")

    def __str__(self) -> str:
        return f"{self.submission} · {self.evaluator} · {self.score}"
