from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("events", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Submission",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255)),
                ("abstract", models.TextField()),
                ("keywords", models.JSONField(blank=True, default=list)),
                ("type", models.CharField(
                    choices=[("oral", "Comunicación oral"), ("poster", "Póster"), ("display_panel", "Panel expuesto")],
                    max_length=16,
                )),
                ("status", models.CharField(
                    choices=[
                        ("pending", "Pendiente"),
                        ("under_review", "En evaluación"),
                        ("accepted", "Aceptada"),
                        ("rejected", "Rechazada"),
                        ("revision", "Revisión solicitada"),
                    ],
                    default="pending",
                    max_length=16,
                )),
                ("file", models.FileField(blank=True, upload_to="submissions/")),
                ("admin_comments", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("author", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="submissions",
                    to=settings.AUTH_USER_MODEL,
                )),
                ("event", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="submissions",
                    to="events.event",
                )),
            ],
            options={
                "ordering": ("-created_at", "-id"),
                "indexes": [models.Index(fields=["event", "status"], name="submission_event_status_idx")],
            },
        ),
        migrations.CreateModel(
            name="SubmissionAuthor",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("email", models.EmailField(max_length=254)),
                ("institution", models.CharField(blank=True, default="", max_length=255)),
                ("order", models.PositiveIntegerField(default=1)),
                ("submission", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="co_authors",
                    to="submissions.submission",
                )),
            ],
            options={
                "ordering": ("submission", "order"),
            },
        ),
    ]
