from __future__ import annotations

from django.contrib import admin

from .models import Submission, SubmissionAuthor


class SubmissionAuthorInline(admin.TabularInline):
    model = SubmissionAuthor
    extra = 0
    fields = ("order", "name", "email", "institution")
    ordering = ("order",)


@admin.register(Submission)
class SubmissionAdmin(admin.ModelAdmin):
    list_display = ("title", "event", "author", "type", "status", "evaluations_count", "created_at")
    list_filter = ("event", "status", "type")
    search_fields = ("title", "author__username", "author__email")
    raw_id_fields = ("event", "author")
    inlines = [SubmissionAuthorInline]

    def evaluations_count(self, obj: Submission) -> int:
        return obj.evaluations.count()
    evaluations_count.short_description = "Evaluaciones"
