# confcore/apps/reviews/services/evaluation.py
"""
Motor de evaluación: alta/edición de evaluaciones del comité y agregados
(promedios, recomendación mayoritaria, reporte para el organizador).

Los agregados no se guardan: se calculan siempre desde las filas vivas que
trae load_submission_with_evaluations().
"""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from django.db import IntegrityError, transaction
from django.db.models import QuerySet
from django.utils import timezone

from confcore.apps.accounts import roles
from confcore.apps.core.errors import (
    AlreadyEvaluated,
    NotFound,
    Unauthorized,
    ValidationFailed,
)
from confcore.apps.notifications.notifier import notify
from confcore.apps.submissions.models import STATUS_PENDING, STATUS_UNDER_REVIEW, Submission

from ..forms import SUBSCORE_FIELDS, EvaluationForm
from ..models import RECOMMENDATION_CHOICES, Evaluation

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("score",) + SUBSCORE_FIELDS + ("comments", "recommendation")

# Desempate de la recomendación mayoritaria: gana la de menor índice
RECOMMENDATION_PRIORITY = ("accept", "revision", "reject")

REPORT_DATE_FORMAT = "%Y-%m-%d %H:%M"


# -------------------------------
# Agregados
# -------------------------------
def _mean(values: List[float]) -> Optional[float]:
    values = [v for v in values if v is not None]
    if not values:
        return None
    return sum(values) / len(values)


def majority_recommendation(recommendations: List[str]) -> Optional[str]:
    """
    La recomendación con más votos; si hay empate en el máximo decide
    accept > revision > reject. Sin votos -> None.
    """
    if not recommendations:
        return None
    counts = Counter(recommendations)
    top = max(counts.values())
    tied = [r for r in RECOMMENDATION_PRIORITY if counts.get(r) == top]
    return tied[0]


@dataclass
class SubmissionReview:
    submission: Submission
    evaluations: List[Evaluation] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.evaluations)

    @property
    def average_score(self) -> Optional[float]:
        return _mean([e.score for e in self.evaluations])

    @property
    def average_relevance(self) -> Optional[float]:
        return _mean([e.relevance_score for e in self.evaluations])

    @property
    def average_quality(self) -> Optional[float]:
        return _mean([e.quality_score for e in self.evaluations])

    @property
    def average_originality(self) -> Optional[float]:
        return _mean([e.originality_score for e in self.evaluations])

    @property
    def recommendation_counts(self) -> Dict[str, int]:
        counts = Counter(e.recommendation for e in self.evaluations)
        return {value: counts.get(value, 0) for value, _ in RECOMMENDATION_CHOICES}

    @property
    def majority_recommendation(self) -> Optional[str]:
        return majority_recommendation([e.recommendation for e in self.evaluations])


def load_submission_with_evaluations(submission_id: int) -> SubmissionReview:
    try:
        submission = (
            Submission.objects.select_related("event", "author")
            .prefetch_related("co_authors")
            .get(pk=submission_id)
        )
    except (Submission.DoesNotExist, ValueError, TypeError):
        raise NotFound("Ponencia no encontrada.")
    evaluations = list(
        Evaluation.objects.filter(submission=submission)
        .select_related("evaluator", "evaluator__profile")
        .order_by("created_at", "id")
    )
    return SubmissionReview(submission=submission, evaluations=evaluations)


# -------------------------------
# Alta
# -------------------------------
def evaluate(
    submission_id: int,
    evaluator_id: int,
    score: Any,
    relevance_score: Any = None,
    quality_score: Any = None,
    originality_score: Any = None,
    comments: Optional[str] = "",
    recommendation: Optional[str] = None,
) -> Evaluation:
    with transaction.atomic():
        try:
            submission = (
                Submission.objects.select_for_update()
                .select_related("event")
                .get(pk=submission_id)
            )
        except (Submission.DoesNotExist, ValueError, TypeError):
            raise NotFound("Ponencia no encontrada.")

        if not roles.is_committee_member_of(evaluator_id, submission.event_id):
            raise Unauthorized("No eres miembro del comité científico de este evento.")

        if Evaluation.objects.filter(submission=submission, evaluator_id=evaluator_id).exists():
            raise AlreadyEvaluated()

        form = EvaluationForm(
            {
                "score": score,
                "relevance_score": relevance_score,
                "quality_score": quality_score,
                "originality_score": originality_score,
                "comments": comments,
                "recommendation": recommendation,
            }
        )
        if not form.is_valid():
            raise ValidationFailed.from_form(form)

        try:
            # Savepoint propio: si otro request insertó el mismo par, la
            # restricción de unicidad de la BD lo rechaza acá.
            with transaction.atomic():
                evaluation = Evaluation.objects.create(
                    submission=submission,
                    evaluator_id=evaluator_id,
                    **form.cleaned_data,
                )
        except IntegrityError:
            raise AlreadyEvaluated()

        if submission.status == STATUS_PENDING:
            submission.status = STATUS_UNDER_REVIEW
            submission.save(update_fields=["status", "updated_at"])
            logger.info("Ponencia %s pasa a evaluación (primera evaluación)", submission.pk)

        notify(
            submission.event.organizer_id,
            "new_evaluation",
            f"Nueva evaluación para la ponencia: {submission.title}",
            {"submission_id": submission.pk, "evaluation_id": evaluation.pk},
            event_id=submission.event_id,
            title="Nueva evaluación",
        )

    logger.info(
        "Evaluación %s registrada: ponencia %s, evaluador %s, puntaje %s",
        evaluation.pk, submission.pk, evaluator_id, evaluation.score,
    )
    return evaluation


# -------------------------------
# Edición (solo el propio evaluador)
# -------------------------------
def update_evaluation(evaluation_id: int, actor_id: int, fields: Dict[str, Any]) -> Evaluation:
    with transaction.atomic():
        try:
            evaluation = Evaluation.objects.select_for_update().get(pk=evaluation_id)
        except (Evaluation.DoesNotExist, ValueError, TypeError):
            raise NotFound("Evaluación no encontrada.")
        if evaluation.evaluator_id != actor_id:
            raise Unauthorized()

        data = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
        form = EvaluationForm(data, partial=True)
        if not form.is_valid():
            raise ValidationFailed.from_form(form)

        for name, value in form.cleaned_data.items():
            setattr(evaluation, name, value)
        evaluation.save()

    logger.info("Evaluación %s editada (%s)", evaluation.pk, ", ".join(sorted(data)) or "sin cambios")
    return evaluation


# -------------------------------
# Lectura
# -------------------------------
def list_submission_evaluations(submission_id: int, actor_id: int) -> SubmissionReview:
    loaded = load_submission_with_evaluations(submission_id)
    if not roles.can_follow_reviews(actor_id, loaded.submission.event_id):
        raise Unauthorized()
    return loaded


def list_my_evaluations(actor_id: int) -> QuerySet[Evaluation]:
    return (
        Evaluation.objects.filter(evaluator_id=actor_id)
        .select_related("submission", "submission__event", "submission__author")
        .order_by("-created_at", "-id")
    )


# -------------------------------
# Reporte (organizador)
# -------------------------------
def build_evaluation_report(loaded: SubmissionReview) -> Dict[str, Any]:
    submission = loaded.submission
    return {
        "submission": {
            "id": submission.pk,
            "title": submission.title,
            "type": submission.type,
            "status": submission.status,
            "author": roles.display_name(submission.author),
            "event": submission.event.title,
        },
        "statistics": {
            "total_evaluations": loaded.count,
            "average_score": loaded.average_score,
            "average_relevance": loaded.average_relevance,
            "average_quality": loaded.average_quality,
            "average_originality": loaded.average_originality,
        },
        "recommendations": {
            **loaded.recommendation_counts,
            "majority": loaded.majority_recommendation,
        },
        "evaluations": [
            {
                "evaluator": roles.display_name(e.evaluator),
                "institution": roles.institution_of(e.evaluator),
                "score": e.score,
                "relevance_score": e.relevance_score,
                "quality_score": e.quality_score,
                "originality_score": e.originality_score,
                "recommendation": e.recommendation,
                "comments": e.comments,
                "date": timezone.localtime(e.created_at).strftime(REPORT_DATE_FORMAT),
            }
            for e in loaded.evaluations
        ],
    }


def generate_report(submission_id: int, actor_id: int) -> Dict[str, Any]:
    loaded = load_submission_with_evaluations(submission_id)
    if not roles.can_manage_event(actor_id, loaded.submission.event_id):
        raise Unauthorized()
    return build_evaluation_report(loaded)
