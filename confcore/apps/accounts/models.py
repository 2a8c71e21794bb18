from django.db import models
from django.contrib.auth.models import User

class Profile(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE)
    institution = models.CharField("Institución", max_length=255, blank=True)
    research_field = models.CharField("Área de investigación", max_length=255, blank=True)
    country = models.CharField("País", max_length=120, blank=True)
    phone = models.CharField(max_length=32, blank=True)

    def __str__(self):
        return self.user.get_full_name() or self.user.username
