# confcore/apps/events/management/commands/seed_demo_conference.py
from __future__ import annotations

from datetime import timedelta

from django.contrib.auth.models import User
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from confcore.apps.accounts.models import Profile
from confcore.apps.events.models import CommitteeMember, Event
from confcore.apps.reviews.models import Evaluation
from confcore.apps.reviews.services.assignment import assign_evaluator
from confcore.apps.reviews.services.evaluation import evaluate
from confcore.apps.submissions.models import Submission
from confcore.apps.submissions.services.store import create_submission

DEMO_PASSWORD = "demo1234"

DEMO_SUBMISSIONS = (
    ("Redes neuronales para la detección temprana de sequías", "oral", ["IA", "clima"]),
    ("Catálogo abierto de corpus en lenguas originarias", "poster", ["NLP", "datos abiertos"]),
    ("Sensores de bajo costo para calidad de aire urbano", "display_panel", ["IoT", "ambiente"]),
)

# (puntaje, relevancia, calidad, originalidad, recomendación) por evaluador
DEMO_SCORES = (
    (8.5, 5, 4, 4, "accept"),
    (6.0, 3, 3, 4, "revision"),
    (9.0, 5, 5, 4, "accept"),
)


class Command(BaseCommand):
    help = "Crea/actualiza una conferencia demo con organizador, comité, ponencias y (opcional) evaluaciones."

    def add_arguments(self, parser):
        parser.add_argument("--slug", default="conferencia-demo", help="Slug del evento a crear/actualizar.")
        parser.add_argument("--title", default="Conferencia Demo", help="Título del evento (si se crea).")
        parser.add_argument("--committee", type=int, default=3, help="Cantidad de miembros del comité.")
        parser.add_argument("--days-open", dest="days_open", type=int, default=30,
                            help="Días hasta la fecha límite de envío.")
        parser.add_argument("--with-evaluations", dest="with_evaluations", action="store_true",
                            help="Asigna el comité y carga evaluaciones de ejemplo.")

    def _user(self, username: str, first_name: str, institution: str = "") -> User:
        user, created = User.objects.get_or_create(
            username=username,
            defaults={"first_name": first_name, "email": f"{username}@demo.local"},
        )
        if created:
            user.set_password(DEMO_PASSWORD)
            user.save(update_fields=["password"])
        Profile.objects.get_or_create(user=user, defaults={"institution": institution})
        return user

    @transaction.atomic
    def handle(self, *args, **opts):
        now = timezone.now()
        organizer = self._user("organizador", "Organizadora Demo", "Universidad Demo")
        author = self._user("autor", "Autor Demo", "Instituto Demo")

        event, created = Event.objects.get_or_create(
            slug=opts["slug"],
            defaults={
                "title": opts["title"],
                "organizer": organizer,
                "status": "published",
                "location": "Campus central",
                "start_date": timezone.localdate() + timedelta(days=opts["days_open"] + 15),
                "end_date": timezone.localdate() + timedelta(days=opts["days_open"] + 17),
            },
        )
        event.submission_deadline = now + timedelta(days=opts["days_open"])
        if event.status in ("closed", "finished"):
            event.status = "published"
        event.save()
        self.stdout.write(self.style.SUCCESS(
            f"✓ Evento '{event.slug}' {'creado' if created else 'actualizado'}; envíos hasta {event.submission_deadline:%Y-%m-%d}"
        ))

        committee = []
        for i in range(1, opts["committee"] + 1):
            member = self._user(f"comite{i}", f"Evaluador {i}", "Comité científico")
            CommitteeMember.objects.get_or_create(event=event, user=member)
            committee.append(member)
        self.stdout.write(self.style.SUCCESS(f"✓ Comité: {len(committee)} miembros"))

        submissions = []
        for title, type_, keywords in DEMO_SUBMISSIONS:
            submission = Submission.objects.filter(event=event, author=author, title=title).first()
            if submission is None:
                submission = create_submission(
                    author_id=author.pk,
                    event_id=event.pk,
                    title=title,
                    abstract=f"Resumen de demostración para «{title}».",
                    keywords=keywords,
                    type=type_,
                    co_authors=[{"name": "Coautora Demo", "email": "coautora@demo.local", "institution": "Instituto Demo"}],
                )
            submissions.append(submission)
        self.stdout.write(self.style.SUCCESS(f"✓ Ponencias: {len(submissions)}"))

        if not opts["with_evaluations"]:
            return

        created_evals = 0
        for submission in submissions:
            for member, (score, rel, qual, orig, rec) in zip(committee, DEMO_SCORES):
                if Evaluation.objects.filter(submission=submission, evaluator=member).exists():
                    continue
                if not submission.assignments.filter(evaluator=member).exists():
                    assign_evaluator(submission.pk, member.pk, organizer.pk)
                evaluate(
                    submission.pk, member.pk, score,
                    relevance_score=rel, quality_score=qual, originality_score=orig,
                    comments="Evaluación de demostración.", recommendation=rec,
                )
                created_evals += 1
        self.stdout.write(self.style.SUCCESS(f"✓ Evaluaciones nuevas: {created_evals}"))
