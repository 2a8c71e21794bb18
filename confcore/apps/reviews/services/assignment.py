# confcore/apps/reviews/services/assignment.py
"""
Asignación de evaluadores del comité a ponencias.

Regla: un evaluador solo puede asignarse a ponencias de eventos en cuyo
comité está, y nunca dos veces ni si ya evaluó la ponencia.
"""
from __future__ import annotations

import logging
from typing import Optional

from django.db import IntegrityError, transaction
from django.db.models import Exists, OuterRef, QuerySet

from confcore.apps.accounts import roles
from confcore.apps.core.errors import AlreadyAssigned, NotEligible, NotFound, Unauthorized
from confcore.apps.events.services.lookup import find_event
from confcore.apps.notifications.notifier import notify
from confcore.apps.submissions.models import STATUS_PENDING, STATUS_UNDER_REVIEW, Submission

from ..models import Evaluation, ReviewAssignment

logger = logging.getLogger(__name__)


def _with_completion(qs: QuerySet[ReviewAssignment]) -> QuerySet[ReviewAssignment]:
    # completed = el evaluador ya cargó su evaluación para esa ponencia
    done = Evaluation.objects.filter(
        submission_id=OuterRef("submission_id"),
        evaluator_id=OuterRef("evaluator_id"),
    )
    return qs.annotate(completed=Exists(done))


def assign_evaluator(submission_id: int, evaluator_id: Optional[int], actor_id: int) -> ReviewAssignment:
    with transaction.atomic():
        try:
            submission = (
                Submission.objects.select_for_update()
                .select_related("event")
                .get(pk=submission_id)
            )
        except (Submission.DoesNotExist, ValueError, TypeError):
            raise NotFound("Ponencia no encontrada.")

        if not roles.can_manage_event(actor_id, submission.event_id):
            raise Unauthorized()

        evaluator = roles.get_user(evaluator_id)
        if not roles.is_committee_member_of(evaluator.pk, submission.event_id):
            raise NotEligible()

        if Evaluation.objects.filter(submission=submission, evaluator=evaluator).exists():
            raise AlreadyAssigned("Este evaluador ya evaluó esta ponencia.")
        if ReviewAssignment.objects.filter(submission=submission, evaluator=evaluator).exists():
            raise AlreadyAssigned("Este evaluador ya está asignado a esta ponencia.")

        try:
            with transaction.atomic():
                assignment = ReviewAssignment.objects.create(
                    submission=submission,
                    evaluator=evaluator,
                    assigned_by_id=actor_id,
                )
        except IntegrityError:
            raise AlreadyAssigned("Este evaluador ya está asignado a esta ponencia.")

        if submission.status == STATUS_PENDING:
            submission.status = STATUS_UNDER_REVIEW
            submission.save(update_fields=["status", "updated_at"])
            logger.info("Ponencia %s pasa a evaluación (evaluador asignado)", submission.pk)

        notify(
            evaluator.pk,
            "evaluation_assigned",
            f"Se te asignó una nueva ponencia para evaluar: {submission.title}",
            {"submission_id": submission.pk, "assignment_id": assignment.pk},
            event_id=submission.event_id,
            title="Nueva ponencia asignada",
        )

    logger.info(
        "Evaluador %s asignado a la ponencia %s por el usuario %s",
        evaluator.pk, submission.pk, actor_id,
    )
    return assignment


def list_event_assignments(event_id: int, actor_id: int) -> QuerySet[ReviewAssignment]:
    event = find_event(event_id)
    if not roles.can_follow_reviews(actor_id, event.pk):
        raise Unauthorized()
    qs = (
        ReviewAssignment.objects.filter(submission__event=event)
        .select_related("submission", "evaluator", "evaluator__profile")
        .order_by("-created_at", "-id")
    )
    return _with_completion(qs)


def list_my_assignments(actor_id: int) -> QuerySet[ReviewAssignment]:
    qs = (
        ReviewAssignment.objects.filter(evaluator_id=actor_id)
        .select_related("submission", "submission__event")
        .order_by("-created_at", "-id")
    )
    return _with_completion(qs)


def unassign_evaluator(assignment_id: int, actor_id: int) -> None:
    """Quita solo la asignación: la evaluación (si existe) y el estado quedan igual."""
    with transaction.atomic():
        try:
            assignment = (
                ReviewAssignment.objects.select_for_update()
                .select_related("submission")
                .get(pk=assignment_id)
            )
        except (ReviewAssignment.DoesNotExist, ValueError, TypeError):
            raise NotFound("Asignación no encontrada.")
        if not roles.can_manage_event(actor_id, assignment.submission.event_id):
            raise Unauthorized()
        assignment.delete()
    logger.info("Asignación %s eliminada por el usuario %s", assignment_id, actor_id)
