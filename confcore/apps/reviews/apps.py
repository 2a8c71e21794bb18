from django.apps import AppConfig

class ReviewsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "confcore.apps.reviews"
    verbose_name = "Evaluaciones"
