from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255)),
                ("slug", models.SlugField(unique=True)),
                ("location", models.CharField(blank=True, max_length=255)),
                ("description", models.TextField(blank=True)),
                ("start_date", models.DateField(blank=True, null=True)),
                ("end_date", models.DateField(blank=True, null=True)),
                ("submission_deadline", models.DateTimeField(
                    blank=True,
                    null=True,
                    help_text="Si está vacío, las ponencias se aceptan mientras el evento no esté cerrado.",
                )),
                ("status", models.CharField(
                    choices=[("draft", "Borrador"), ("published", "Publicado"), ("closed", "Cerrado"), ("finished", "Finalizado")],
                    default="draft",
                    max_length=16,
                )),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("organizer", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="organized_events",
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                "ordering": ("-start_date", "title"),
            },
        ),
        migrations.CreateModel(
            name="CommitteeMember",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("role_in_committee", models.CharField(blank=True, default="member", max_length=64)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("event", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="committee",
                    to="events.event",
                )),
                ("user", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="committee_memberships",
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                "ordering": ("event", "id"),
            },
        ),
        migrations.AddConstraint(
            model_name="committeemember",
            constraint=models.UniqueConstraint(fields=("event", "user"), name="uniq_committee_event_user"),
        ),
    ]
