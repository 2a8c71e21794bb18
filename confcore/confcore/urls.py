from django.contrib import admin
from django.urls import path, include
from confcore.apps.core import views as core_views
from confcore.apps.submissions import views as submission_views

urlpatterns = [
    path("admin/", admin.site.urls),

    # API healthcheck
    path("api/health/", core_views.health, name="api_health"),

    # Ponencias (autor + organizador)
    path("api/submissions/", include("confcore.apps.submissions.urls")),
    path(
        "api/events/<int:event_id>/submissions/",
        submission_views.event_submissions,
        name="event_submissions",
    ),

    # Asignaciones, evaluaciones y reportes (con namespace)
    path("api/", include(("confcore.apps.reviews.urls", "reviews"), namespace="reviews")),

    # Bandeja de notificaciones
    path("api/notifications/", include("confcore.apps.notifications.urls")),
]
