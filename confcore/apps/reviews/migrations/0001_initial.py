from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("submissions", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ReviewAssignment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("assigned_by", models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name="+",
                    to=settings.AUTH_USER_MODEL,
                )),
                ("evaluator", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="review_assignments",
                    to=settings.AUTH_USER_MODEL,
                )),
                ("submission", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="assignments",
                    to="submissions.submission",
                )),
            ],
            options={
                "ordering": ("-created_at", "-id"),
            },
        ),
        migrations.CreateModel(
            name="Evaluation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("score", models.FloatField()),
                ("relevance_score", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("quality_score", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("originality_score", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("comments", models.TextField(blank=True, default="")),
                ("recommendation", models.CharField(
                    choices=[("accept", "Aceptar"), ("reject", "Rechazar"), ("revision", "Revisión")],
                    max_length=16,
                )),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("evaluator", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="evaluations",
                    to=settings.AUTH_USER_MODEL,
                )),
                ("submission", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="evaluations",
                    to="submissions.submission",
                )),
            ],
            options={
                "ordering": ("created_at", "id"),
            },
        ),
        migrations.AddConstraint(
            model_name="reviewassignment",
            constraint=models.UniqueConstraint(
                fields=("submission", "evaluator"), name="uniq_assignment_submission_evaluator"
            ),
        ),
        migrations.AddConstraint(
            model_name="evaluation",
            constraint=models.UniqueConstraint(
                fields=("submission", "evaluator"), name="uniq_evaluation_submission_evaluator"
            ),
        ),
        migrations.AddConstraint(
            model_name="evaluation",
            constraint=models.CheckConstraint(
                condition=models.Q(("score__gte", 0), ("score__lte", 10)),
                name="evaluation_score_range",
            ),
        ),
        migrations.AddConstraint(
            model_name="evaluation",
            constraint=models.CheckConstraint(
                condition=models.Q(("relevance_score__isnull", True), models.Q(("relevance_score__gte", 1), ("relevance_score__lte", 5)), _connector="OR"),
                name="evaluation_relevance_range",
            ),
        ),
        migrations.AddConstraint(
            model_name="evaluation",
            constraint=models.CheckConstraint(
                condition=models.Q(("quality_score__isnull", True), models.Q(("quality_score__gte", 1), ("quality_score__lte", 5)), _connector="OR"),
                name="evaluation_quality_range",
            ),
        ),
        migrations.AddConstraint(
            model_name="evaluation",
            constraint=models.CheckConstraint(
                condition=models.Q(("originality_score__isnull", True), models.Q(("originality_score__gte", 1), ("originality_score__lte", 5)), _connector="OR"),
                name="evaluation_originality_range",
            ),
        ),
    ]
