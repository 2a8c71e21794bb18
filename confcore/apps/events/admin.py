from __future__ import annotations

from django.contrib import admin, messages
from django.utils.translation import gettext_lazy as _

from .models import Event, CommitteeMember


# -----------------------------
# Inline para el comité científico
# -----------------------------
class CommitteeMemberInline(admin.TabularInline):
    model = CommitteeMember
    extra = 0
    raw_id_fields = ("user",)
    fields = ("user", "role_in_committee", "created_at")
    readonly_fields = ("created_at",)


# -----------------------------
# Event
# -----------------------------
@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ("title", "status", "organizer", "start_date", "submission_deadline")
    search_fields = ("title", "slug")
    list_filter = ("status",)
    raw_id_fields = ("organizer",)
    inlines = [CommitteeMemberInline]
    actions = ["action_close_submissions"]

    @admin.action(description=_("Cerrar la recepción de ponencias"))
    def action_close_submissions(self, request, queryset):
        updated = queryset.update(status="closed")
        self.message_user(request, f"{updated} eventos cerrados.", level=messages.SUCCESS)


@admin.register(CommitteeMember)
class CommitteeMemberAdmin(admin.ModelAdmin):
    list_display = ("event", "user", "role_in_committee", "created_at")
    list_filter = ("event",)
    search_fields = ("user__username", "user__email", "event__title")
    raw_id_fields = ("event", "user")
