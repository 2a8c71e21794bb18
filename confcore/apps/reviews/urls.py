from django.urls import path
from . import views

# Montado bajo /api/ (ver confcore/urls.py)
urlpatterns = [
    path("submissions/<int:submission_id>/assignments/", views.submission_assign, name="submission_assign"),
    path("submissions/<int:submission_id>/evaluations/", views.submission_evaluations, name="submission_evaluations"),
    path("submissions/<int:submission_id>/report/", views.submission_report, name="submission_report"),
    path("events/<int:event_id>/assignments/", views.event_assignments, name="event_assignments"),
    path("assignments/mine/", views.assignment_mine, name="assignment_mine"),
    path("assignments/<int:assignment_id>/", views.assignment_delete, name="assignment_delete"),
    path("evaluations/mine/", views.evaluation_mine, name="evaluation_mine"),
    path("evaluations/<int:evaluation_id>/", views.evaluation_update, name="evaluation_update"),
]
