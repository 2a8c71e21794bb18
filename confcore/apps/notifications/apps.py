from django.apps import AppConfig

class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "confcore.apps.notifications"
    verbose_name = "Notificaciones"
