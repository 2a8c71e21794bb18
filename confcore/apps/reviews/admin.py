from __future__ import annotations

from django.contrib import admin

from .models import Evaluation, ReviewAssignment


@admin.register(ReviewAssignment)
class ReviewAssignmentAdmin(admin.ModelAdmin):
    list_display = ("submission", "evaluator", "assigned_by", "created_at")
    list_filter = ("submission__event",)
    search_fields = ("submission__title", "evaluator__username")
    raw_id_fields = ("submission", "evaluator", "assigned_by")


@admin.register(Evaluation)
class EvaluationAdmin(admin.ModelAdmin):
    list_display = ("submission", "evaluator", "score", "recommendation", "created_at")
    list_filter = ("recommendation", "submission__event")
    search_fields = ("submission__title", "evaluator__username")
    raw_id_fields = ("submission", "evaluator")
    readonly_fields = ("created_at", "updated_at")
