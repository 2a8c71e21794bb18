from django.urls import path
from . import views

urlpatterns = [
    path("", views.submission_create, name="submission_create"),
    path("mine/", views.submission_mine, name="submission_mine"),
    path("<int:submission_id>/", views.submission_detail, name="submission_detail"),
    path("<int:submission_id>/status/", views.submission_status, name="submission_status"),
    path("<int:submission_id>/file/", views.submission_file, name="submission_file"),
]
