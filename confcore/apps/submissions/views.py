# confcore/apps/submissions/views.py
from __future__ import annotations

from typing import Any, Dict

from django.http import HttpRequest, JsonResponse

from confcore.apps.accounts.roles import display_name
from confcore.apps.core.http import api_view, json_body, paginated
from confcore.apps.reviews.services.evaluation import load_submission_with_evaluations

from .models import Submission
from .services import store


# -------------------------------
# Serialización
# -------------------------------
def submission_payload(s: Submission, *, detail: bool = False) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": s.id,
        "event_id": s.event_id,
        "author_id": s.author_id,
        "title": s.title,
        "type": s.type,
        "status": s.status,
        "keywords": s.keywords,
        "has_file": bool(s.file),
        "created_at": s.created_at.isoformat(),
        "updated_at": s.updated_at.isoformat(),
    }
    if hasattr(s, "evaluation_count"):
        data["evaluation_count"] = s.evaluation_count
    if detail:
        data.update(
            {
                "abstract": s.abstract,
                "author": display_name(s.author),
                "admin_comments": s.admin_comments,
                "file_url": s.file.url if s.file else None,
                "co_authors": [
                    {"name": a.name, "email": a.email, "institution": a.institution, "order": a.order}
                    for a in s.co_authors.all()
                ],
            }
        )
    return data


# -------------------------------
# /api/submissions/
# -------------------------------
@api_view(["POST"])
def submission_create(request: HttpRequest) -> JsonResponse:
    body = json_body(request)
    submission = store.create_submission(
        author_id=request.user.id,
        event_id=body.get("event_id"),
        title=body.get("title"),
        abstract=body.get("abstract"),
        keywords=body.get("keywords"),
        type=body.get("type"),
        co_authors=body.get("co_authors"),
    )
    return JsonResponse({"submission": submission_payload(submission, detail=True)}, status=201)


@api_view(["GET"])
def submission_mine(request: HttpRequest) -> JsonResponse:
    qs = store.list_my_submissions(request.user.id)
    return JsonResponse(paginated(request, qs, submission_payload))


@api_view(["GET", "PATCH", "DELETE"])
def submission_detail(request: HttpRequest, submission_id: int) -> JsonResponse:
    if request.method == "PATCH":
        submission = store.update_submission_content(submission_id, request.user.id, json_body(request))
        return JsonResponse({"submission": submission_payload(submission, detail=True)})

    if request.method == "DELETE":
        store.delete_submission(submission_id, request.user.id)
        return JsonResponse({"deleted": True})

    store.get_submission(submission_id, request.user.id)
    loaded = load_submission_with_evaluations(submission_id)
    data = submission_payload(loaded.submission, detail=True)
    data["evaluation_count"] = loaded.count
    # Promedio y recomendación solo si ya hay evaluaciones
    if loaded.count:
        data["average_score"] = loaded.average_score
        data["majority_recommendation"] = loaded.majority_recommendation
    return JsonResponse({"submission": data})


@api_view(["POST"])
def submission_status(request: HttpRequest, submission_id: int) -> JsonResponse:
    body = json_body(request)
    submission = store.update_submission_status(
        submission_id,
        request.user.id,
        body.get("status"),
        admin_comments=body.get("admin_comments"),
    )
    return JsonResponse({"submission": submission_payload(submission)})


@api_view(["POST", "DELETE"])
def submission_file(request: HttpRequest, submission_id: int) -> JsonResponse:
    if request.method == "DELETE":
        submission = store.remove_submission_file(submission_id, request.user.id)
    else:
        submission = store.attach_submission_file(submission_id, request.user.id, request.FILES.get("file"))
    return JsonResponse({"file_url": submission.file.url if submission.file else None})


# -------------------------------
# /api/events/<id>/submissions/
# -------------------------------
@api_view(["GET"])
def event_submissions(request: HttpRequest, event_id: int) -> JsonResponse:
    qs = store.list_event_submissions(
        event_id,
        request.user.id,
        status=request.GET.get("status"),
        type=request.GET.get("type"),
    )
    return JsonResponse(paginated(request, qs, submission_payload))
