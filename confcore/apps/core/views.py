from __future__ import annotations

from django.http import HttpRequest, JsonResponse


# -------- Healthcheck simple --------
def health(request: HttpRequest) -> JsonResponse:
    return JsonResponse({"ok": True})
