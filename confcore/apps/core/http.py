# confcore/apps/core/http.py
from __future__ import annotations

import json
import logging
from functools import wraps
from typing import Any, Callable, Dict, Iterable, List, Sequence

from django.conf import settings
from django.core.paginator import Paginator
from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_http_methods

from .errors import BadRequest, ReviewError

logger = logging.getLogger(__name__)


# -------------------------------
# Decorador de vistas JSON
# -------------------------------
def api_view(methods: Sequence[str]):
    """
    Envuelve una vista de la API:
      - restringe los métodos HTTP (405 si no corresponde)
      - exige sesión iniciada (401 en JSON, sin redirigir a login)
      - traduce ReviewError a {"error", "message"} con su status_code
    El usuario actual se resuelve acá una sola vez; las vistas pasan
    request.user.id a los servicios como actor_id.
    """
    def decorator(view_func: Callable):
        @require_http_methods(list(methods))
        @wraps(view_func)
        def _wrapped(request: HttpRequest, *args, **kwargs):
            if not request.user.is_authenticated:
                return JsonResponse(
                    {"error": "unauthenticated", "message": "Debes iniciar sesión."},
                    status=401,
                )
            try:
                return view_func(request, *args, **kwargs)
            except ReviewError as exc:
                logger.info(
                    "%s %s -> %s (%s)", request.method, request.path, exc.kind, exc.message
                )
                return JsonResponse(exc.as_dict(), status=exc.status_code)
        return _wrapped
    return decorator


def json_body(request: HttpRequest) -> Dict[str, Any]:
    """Cuerpo JSON como dict. Vacío -> {}."""
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise BadRequest("El cuerpo no es JSON válido.")
    if not isinstance(data, dict):
        raise BadRequest("Se esperaba un objeto JSON.")
    return data


def paginated(request: HttpRequest, items: Iterable, serialize: Callable[[Any], Dict[str, Any]]) -> Dict[str, Any]:
    paginator = Paginator(items, settings.API_PAGE_SIZE)
    page = paginator.get_page(request.GET.get("page"))
    results: List[Dict[str, Any]] = [serialize(obj) for obj in page.object_list]
    return {
        "count": paginator.count,
        "page": page.number,
        "num_pages": paginator.num_pages,
        "results": results,
    }
