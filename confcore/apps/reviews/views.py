# confcore/apps/reviews/views.py
from __future__ import annotations

from typing import Any, Dict

from django.http import HttpRequest, HttpResponse, JsonResponse

from confcore.apps.accounts.roles import display_name, institution_of
from confcore.apps.core.errors import ValidationFailed
from confcore.apps.core.http import api_view, json_body, paginated

from .forms import AssignmentForm
from .models import Evaluation, ReviewAssignment
from .services import assignment as assignments
from .services import evaluation as evaluations
from .services.report_xlsx import XLSX_CONTENT_TYPE, build_report_workbook, report_filename


# -------------------------------
# Serialización
# -------------------------------
def evaluation_payload(e: Evaluation, *, with_evaluator: bool = False) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": e.id,
        "submission_id": e.submission_id,
        "evaluator_id": e.evaluator_id,
        "score": e.score,
        "relevance_score": e.relevance_score,
        "quality_score": e.quality_score,
        "originality_score": e.originality_score,
        "comments": e.comments,
        "recommendation": e.recommendation,
        "created_at": e.created_at.isoformat(),
        "updated_at": e.updated_at.isoformat(),
    }
    if with_evaluator:
        data["evaluator"] = {
            "id": e.evaluator_id,
            "name": display_name(e.evaluator),
            "institution": institution_of(e.evaluator),
        }
    return data


def my_evaluation_payload(e: Evaluation) -> Dict[str, Any]:
    data = evaluation_payload(e)
    data["submission"] = {
        "id": e.submission_id,
        "title": e.submission.title,
        "author": display_name(e.submission.author),
        "event": {"id": e.submission.event_id, "title": e.submission.event.title},
    }
    return data


def assignment_payload(a: ReviewAssignment) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": a.id,
        "submission_id": a.submission_id,
        "submission_title": a.submission.title,
        "evaluator_id": a.evaluator_id,
        "assigned_by_id": a.assigned_by_id,
        "created_at": a.created_at.isoformat(),
    }
    if hasattr(a, "completed"):
        data["completed"] = a.completed
    return data


# -------------------------------
# /api/submissions/<id>/assignments/
# -------------------------------
@api_view(["POST"])
def submission_assign(request: HttpRequest, submission_id: int) -> JsonResponse:
    form = AssignmentForm(json_body(request))
    if not form.is_valid():
        raise ValidationFailed.from_form(form)
    assignment = assignments.assign_evaluator(
        submission_id, form.cleaned_data["evaluator_id"], request.user.id
    )
    return JsonResponse({"assignment": assignment_payload(assignment)}, status=201)


@api_view(["GET"])
def event_assignments(request: HttpRequest, event_id: int) -> JsonResponse:
    qs = assignments.list_event_assignments(event_id, request.user.id)

    def _row(a: ReviewAssignment) -> Dict[str, Any]:
        data = assignment_payload(a)
        data["evaluator"] = display_name(a.evaluator)
        return data

    return JsonResponse({"assignments": [_row(a) for a in qs]})


@api_view(["GET"])
def assignment_mine(request: HttpRequest) -> JsonResponse:
    qs = assignments.list_my_assignments(request.user.id)
    return JsonResponse(paginated(request, qs, assignment_payload))


@api_view(["DELETE"])
def assignment_delete(request: HttpRequest, assignment_id: int) -> JsonResponse:
    assignments.unassign_evaluator(assignment_id, request.user.id)
    return JsonResponse({"deleted": True})


# -------------------------------
# /api/submissions/<id>/evaluations/
# -------------------------------
@api_view(["GET", "POST"])
def submission_evaluations(request: HttpRequest, submission_id: int) -> JsonResponse:
    if request.method == "POST":
        body = json_body(request)
        evaluation = evaluations.evaluate(
            submission_id,
            request.user.id,
            score=body.get("score"),
            relevance_score=body.get("relevance_score"),
            quality_score=body.get("quality_score"),
            originality_score=body.get("originality_score"),
            comments=body.get("comments"),
            recommendation=body.get("recommendation"),
        )
        return JsonResponse({"evaluation": evaluation_payload(evaluation)}, status=201)

    loaded = evaluations.list_submission_evaluations(submission_id, request.user.id)
    return JsonResponse(
        {
            "submission": {
                "id": loaded.submission.id,
                "title": loaded.submission.title,
                "status": loaded.submission.status,
                "author": display_name(loaded.submission.author),
            },
            "evaluations": [evaluation_payload(e, with_evaluator=True) for e in loaded.evaluations],
            "average_score": loaded.average_score,
            "majority_recommendation": loaded.majority_recommendation,
        }
    )


@api_view(["PATCH"])
def evaluation_update(request: HttpRequest, evaluation_id: int) -> JsonResponse:
    evaluation = evaluations.update_evaluation(evaluation_id, request.user.id, json_body(request))
    return JsonResponse({"evaluation": evaluation_payload(evaluation)})


@api_view(["GET"])
def evaluation_mine(request: HttpRequest) -> JsonResponse:
    qs = evaluations.list_my_evaluations(request.user.id)
    return JsonResponse(paginated(request, qs, my_evaluation_payload))


# -------------------------------
# Reporte
# -------------------------------
@api_view(["GET"])
def submission_report(request: HttpRequest, submission_id: int) -> HttpResponse:
    report = evaluations.generate_report(submission_id, request.user.id)
    if request.GET.get("format") == "xlsx":
        wb = build_report_workbook(report)
        response = HttpResponse(content_type=XLSX_CONTENT_TYPE)
        response["Content-Disposition"] = f'attachment; filename="{report_filename(report)}"'
        wb.save(response)
        return response
    return JsonResponse(report)
