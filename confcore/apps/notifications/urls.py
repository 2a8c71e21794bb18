from django.urls import path
from . import views

urlpatterns = [
    path("", views.notification_list, name="notification_list"),
    path("unread-count/", views.notification_unread_count, name="notification_unread_count"),
    path("read-all/", views.notification_mark_all_read, name="notification_mark_all_read"),
    path("<int:notification_id>/read/", views.notification_mark_read, name="notification_mark_read"),
]
