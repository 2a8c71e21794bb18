from django.contrib import admin
from .models import Profile

@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "institution", "research_field", "country", "phone")
    search_fields = ("user__username", "user__email", "institution")
