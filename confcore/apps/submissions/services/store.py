# confcore/apps/submissions/services/store.py
"""
Alta, lectura, edición y baja de ponencias + cambios de estado del organizador.

Todas las funciones reciben el id del usuario que actúa (actor_id / author_id).
Las verificaciones (permisos, ventana de envío, validación) se hacen antes de
escribir; cada operación que escribe corre en una sola transacción.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from django.conf import settings
from django.db import transaction
from django.db.models import Count, QuerySet

from confcore.apps.accounts import roles
from confcore.apps.core.errors import (
    NotFound,
    SubmissionLocked,
    SubmissionWindowClosed,
    Unauthorized,
    ValidationFailed,
)
from confcore.apps.events.services.lookup import find_event, is_submission_open
from confcore.apps.notifications.notifier import notify

from ..forms import (
    CoAuthorForm,
    StatusForm,
    SubmissionFileForm,
    SubmissionFilterForm,
    SubmissionForm,
)
from ..models import STATUS_PENDING, Submission, SubmissionAuthor

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "abstract", "keywords", "type")


# -------------------------------
# Utilidades
# -------------------------------
def get_submission_or_404(submission_id: int, *, for_update: bool = False) -> Submission:
    qs = Submission.objects.select_related("event", "author")
    if for_update:
        qs = qs.select_for_update()
    try:
        return qs.get(pk=submission_id)
    except (Submission.DoesNotExist, ValueError, TypeError):
        raise NotFound("Ponencia no encontrada.")


def _clean_co_authors(co_authors: Optional[Iterable[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    if not co_authors:
        return []
    if not isinstance(co_authors, (list, tuple)):
        raise ValidationFailed(errors={"co_authors": ["Se esperaba una lista de coautores."]})
    max_items = settings.SUBMISSION_MAX_CO_AUTHORS
    if len(co_authors) > max_items:
        raise ValidationFailed(errors={"co_authors": [f"Máximo {max_items} coautores."]})

    cleaned: List[Dict[str, Any]] = []
    errors: Dict[str, List[str]] = {}
    for i, raw in enumerate(co_authors):
        form = CoAuthorForm(raw if isinstance(raw, dict) else {})
        if form.is_valid():
            cleaned.append(form.cleaned_data)
        else:
            for field, errs in form.errors.items():
                errors[f"co_authors.{i}.{field}"] = [str(e) for e in errs]
    if errors:
        raise ValidationFailed(errors=errors)
    return cleaned


# -------------------------------
# Alta
# -------------------------------
def create_submission(
    author_id: int,
    event_id: int,
    title: str,
    abstract: str,
    keywords: Any,
    type: str,
    co_authors: Optional[Iterable[Dict[str, Any]]] = None,
) -> Submission:
    event = find_event(event_id)

    form = SubmissionForm({"title": title, "abstract": abstract, "keywords": keywords, "type": type})
    if not form.is_valid():
        raise ValidationFailed.from_form(form)
    authors = _clean_co_authors(co_authors)

    if not is_submission_open(event.pk):
        raise SubmissionWindowClosed()

    with transaction.atomic():
        submission = Submission.objects.create(
            event=event,
            author_id=author_id,
            status=STATUS_PENDING,
            **form.cleaned_data,
        )
        SubmissionAuthor.objects.bulk_create(
            [SubmissionAuthor(submission=submission, order=i, **data) for i, data in enumerate(authors, start=1)]
        )

    logger.info("Ponencia %s creada por el usuario %s en el evento %s", submission.pk, author_id, event.pk)
    return submission


# -------------------------------
# Lectura
# -------------------------------
def get_submission(submission_id: int, actor_id: int) -> Submission:
    """Visible para el autor, el organizador, el comité y super-admins."""
    submission = get_submission_or_404(submission_id)
    if submission.author_id != actor_id and not roles.can_follow_reviews(actor_id, submission.event_id):
        raise Unauthorized()
    return submission


def list_my_submissions(actor_id: int) -> QuerySet[Submission]:
    return (
        Submission.objects.filter(author_id=actor_id)
        .select_related("event")
        .annotate(evaluation_count=Count("evaluations"))
        .order_by("-created_at", "-id")
    )


def list_event_submissions(
    event_id: int,
    actor_id: int,
    status: Optional[str] = None,
    type: Optional[str] = None,
) -> QuerySet[Submission]:
    event = find_event(event_id)
    if not roles.can_follow_reviews(actor_id, event.pk):
        raise Unauthorized()

    filters = SubmissionFilterForm({"status": status or "", "type": type or ""})
    if not filters.is_valid():
        raise ValidationFailed.from_form(filters)

    qs = (
        Submission.objects.filter(event=event)
        .select_related("author")
        .annotate(evaluation_count=Count("evaluations"))
    )
    if filters.cleaned_data["status"]:
        qs = qs.filter(status=filters.cleaned_data["status"])
    if filters.cleaned_data["type"]:
        qs = qs.filter(type=filters.cleaned_data["type"])
    return qs.order_by("-created_at", "-id")


# -------------------------------
# Edición de contenido (autor)
# -------------------------------
def update_submission_content(submission_id: int, actor_id: int, fields: Dict[str, Any]) -> Submission:
    with transaction.atomic():
        submission = get_submission_or_404(submission_id, for_update=True)
        if submission.author_id != actor_id:
            raise Unauthorized()
        if not is_submission_open(submission.event_id):
            raise SubmissionWindowClosed("No se puede modificar después de la fecha límite.")
        # Una vez que empezó la evaluación el contenido queda fijo
        if submission.status != STATUS_PENDING:
            raise SubmissionLocked()

        data = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
        form = SubmissionForm(data, partial=True)
        if not form.is_valid():
            raise ValidationFailed.from_form(form)

        for name, value in form.cleaned_data.items():
            setattr(submission, name, value)
        submission.save()

    logger.info("Ponencia %s editada por su autor (%s)", submission.pk, ", ".join(sorted(data)) or "sin cambios")
    return submission


# -------------------------------
# Estado (organizador)
# -------------------------------
def update_submission_status(
    submission_id: int,
    actor_id: int,
    new_status: str,
    admin_comments: Optional[str] = None,
) -> Submission:
    """
    El organizador (o un super-admin) puede fijar cualquier estado desde
    cualquier estado; no hay estados finales. Se notifica al autor.
    """
    with transaction.atomic():
        submission = get_submission_or_404(submission_id, for_update=True)
        if not roles.can_manage_event(actor_id, submission.event_id):
            raise Unauthorized()

        form = StatusForm({"status": new_status, "admin_comments": admin_comments or ""})
        if not form.is_valid():
            raise ValidationFailed.from_form(form)

        previous = submission.status
        submission.status = form.cleaned_data["status"]
        submission.admin_comments = form.cleaned_data["admin_comments"]
        submission.save(update_fields=["status", "admin_comments", "updated_at"])

        notify(
            submission.author_id,
            f"submission_{submission.status}",
            f"El estado de tu ponencia '{submission.title}' se actualizó: {submission.get_status_display()}",
            {"submission_id": submission.pk, "status": submission.status},
            event_id=submission.event_id,
            title="Estado de ponencia actualizado",
        )

    logger.info("Ponencia %s: %s -> %s (usuario %s)", submission.pk, previous, submission.status, actor_id)
    return submission


# -------------------------------
# Baja (autor)
# -------------------------------
def delete_submission(submission_id: int, actor_id: int) -> None:
    # Solo se verifica la autoría: el autor puede borrar aunque ya haya
    # evaluaciones (se borran en cascada).
    with transaction.atomic():
        submission = get_submission_or_404(submission_id, for_update=True)
        if submission.author_id != actor_id:
            raise Unauthorized()
        if submission.file:
            submission.file.delete(save=False)
        submission.delete()
    logger.info("Ponencia %s borrada por su autor %s", submission_id, actor_id)


# -------------------------------
# Archivo PDF (autor)
# -------------------------------
def attach_submission_file(submission_id: int, actor_id: int, uploaded_file) -> Submission:
    form = SubmissionFileForm(files={"file": uploaded_file} if uploaded_file is not None else {})
    with transaction.atomic():
        submission = get_submission_or_404(submission_id, for_update=True)
        if submission.author_id != actor_id:
            raise Unauthorized()
        if not form.is_valid():
            raise ValidationFailed.from_form(form)

        f = form.cleaned_data["file"]
        if submission.file:
            submission.file.delete(save=False)
        submission.file.save(f"submission_{submission.pk}.pdf", f, save=True)
    logger.info("Ponencia %s: PDF cargado (%s bytes)", submission.pk, f.size)
    return submission


def remove_submission_file(submission_id: int, actor_id: int) -> Submission:
    with transaction.atomic():
        submission = get_submission_or_404(submission_id, for_update=True)
        if submission.author_id != actor_id:
            raise Unauthorized()
        if submission.file:
            submission.file.delete(save=True)
    return submission
