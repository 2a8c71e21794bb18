from __future__ import annotations

import shutil
import tempfile
from datetime import timedelta
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from django.utils import timezone

from confcore.apps.core.errors import (
    NotFound,
    SubmissionLocked,
    SubmissionWindowClosed,
    Unauthorized,
    ValidationFailed,
)
from confcore.apps.events.models import CommitteeMember, Event
from confcore.apps.notifications.models import Notification
from confcore.apps.reviews.models import Evaluation
from confcore.apps.submissions.models import Submission
from confcore.apps.submissions.services import store

User = get_user_model()


def _payload(**overrides):
    data = dict(
        title="Modelos climáticos regionales",
        abstract="Un resumen suficientemente descriptivo.",
        keywords=["clima", "modelos"],
        type="oral",
    )
    data.update(overrides)
    return data


class SubmissionStoreTest(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.organizer = User.objects.create_user(username="org", password="Pass1234!")
        cls.author = User.objects.create_user(username="autor", password="Pass1234!")
        cls.member = User.objects.create_user(username="comite", password="Pass1234!")
        cls.outsider = User.objects.create_user(username="otro", password="Pass1234!")

        cls.event = Event.objects.create(
            title="Congreso Abierto",
            organizer=cls.organizer,
            status="published",
            submission_deadline=timezone.now() + timedelta(days=30),
        )
        cls.closed_event = Event.objects.create(
            title="Congreso Vencido",
            organizer=cls.organizer,
            status="published",
            submission_deadline=timezone.now() - timedelta(days=1),
        )
        CommitteeMember.objects.create(event=cls.event, user=cls.member)

    def _create(self, **overrides):
        return store.create_submission(author_id=self.author.pk, event_id=self.event.pk, **_payload(**overrides))

    # ---------- alta ----------
    def test_create_pending_with_co_authors(self):
        s = self._create(
            keywords="clima, modelos , ",
            co_authors=[
                {"name": "Luis", "email": "luis@example.com"},
                {"name": "Marta", "email": "marta@example.com", "institution": "UBA"},
            ],
        )
        self.assertEqual(s.status, "pending")
        self.assertEqual(s.keywords, ["clima", "modelos"])
        self.assertEqual([a.name for a in s.co_authors.all()], ["Luis", "Marta"])
        self.assertEqual([a.order for a in s.co_authors.all()], [1, 2])

    def test_create_validation(self):
        cases = [
            {"title": ""},
            {"type": "workshop"},
            {"keywords": []},
            {"keywords": [f"k{i}" for i in range(11)]},
            {"keywords": ["x" * 51]},
            {"abstract": "a" * 5001},
        ]
        for overrides in cases:
            with self.subTest(overrides=list(overrides)):
                with self.assertRaises(ValidationFailed):
                    self._create(**overrides)
        self.assertEqual(Submission.objects.count(), 0)

    def test_create_invalid_co_author(self):
        with self.assertRaises(ValidationFailed) as ctx:
            self._create(co_authors=[{"name": "Sin correo"}])
        self.assertIn("co_authors.0.email", ctx.exception.errors)

    def test_create_window_closed(self):
        with self.assertRaises(SubmissionWindowClosed):
            store.create_submission(author_id=self.author.pk, event_id=self.closed_event.pk, **_payload())
        self.assertEqual(Submission.objects.count(), 0)

    def test_window_check_goes_through_event_lookup(self):
        s = self._create()
        with mock.patch("confcore.apps.submissions.services.store.is_submission_open", return_value=False) as is_open:
            with self.assertRaises(SubmissionWindowClosed):
                self._create(title="Cerrada por el evento")
            with self.assertRaises(SubmissionWindowClosed):
                store.update_submission_content(s.pk, self.author.pk, {"title": "X"})
        self.assertEqual([c.args for c in is_open.call_args_list], [(self.event.pk,), (self.event.pk,)])
        self.assertEqual(Submission.objects.count(), 1)

    def test_create_unknown_event(self):
        with self.assertRaises(NotFound):
            store.create_submission(author_id=self.author.pk, event_id=999999, **_payload())

    # ---------- lectura ----------
    def test_read_permissions(self):
        s = self._create()
        for user in (self.author, self.organizer, self.member):
            self.assertEqual(store.get_submission(s.pk, user.pk).pk, s.pk)
        with self.assertRaises(Unauthorized):
            store.get_submission(s.pk, self.outsider.pk)

    def test_list_mine_and_event_filters(self):
        oral = self._create()
        poster = self._create(title="Póster", type="poster")
        Evaluation.objects.create(
            submission=oral, evaluator=self.member, score=7, recommendation="accept"
        )

        mine = list(store.list_my_submissions(self.author.pk))
        self.assertEqual([s.pk for s in mine], [poster.pk, oral.pk])
        self.assertEqual([s.evaluation_count for s in mine], [0, 1])

        self.assertEqual(
            [s.pk for s in store.list_event_submissions(self.event.pk, self.member.pk, type="poster")],
            [poster.pk],
        )
        self.assertEqual(
            store.list_event_submissions(self.event.pk, self.organizer.pk, status="accepted").count(), 0
        )
        with self.assertRaises(ValidationFailed):
            store.list_event_submissions(self.event.pk, self.organizer.pk, status="unknown")
        with self.assertRaises(Unauthorized):
            store.list_event_submissions(self.event.pk, self.author.pk)

    # ---------- edición ----------
    def test_update_content_partial(self):
        s = self._create()
        updated = store.update_submission_content(
            s.pk, self.author.pk, {"title": "Nuevo título", "status": "accepted"}
        )
        self.assertEqual(updated.title, "Nuevo título")
        self.assertEqual(updated.abstract, _payload()["abstract"])
        self.assertEqual(updated.status, "pending")

    def test_update_content_only_author(self):
        s = self._create()
        with self.assertRaises(Unauthorized):
            store.update_submission_content(s.pk, self.organizer.pk, {"title": "X"})

    def test_update_content_locked_once_review_starts(self):
        s = self._create()
        Submission.objects.filter(pk=s.pk).update(status="under_review")
        with self.assertRaises(SubmissionLocked):
            store.update_submission_content(s.pk, self.author.pk, {"title": "X"})
        s.refresh_from_db()
        self.assertEqual(s.title, _payload()["title"])

    def test_update_content_window_closed(self):
        s = self._create()
        Event.objects.filter(pk=self.event.pk).update(submission_deadline=timezone.now() - timedelta(hours=1))
        with self.assertRaises(SubmissionWindowClosed):
            store.update_submission_content(s.pk, self.author.pk, {"title": "X"})

    # ---------- estado ----------
    def test_status_without_evaluations_notifies_author_once(self):
        s = self._create()
        updated = store.update_submission_status(s.pk, self.organizer.pk, "accepted", admin_comments="Bien")
        self.assertEqual(updated.status, "accepted")
        self.assertEqual(updated.admin_comments, "Bien")

        notes = Notification.objects.filter(user=self.author)
        self.assertEqual(notes.count(), 1)
        self.assertEqual(notes.get().type, "submission_accepted")
        self.assertEqual(notes.get().data, {"submission_id": s.pk, "status": "accepted"})

    def test_status_is_permissive(self):
        s = self._create()
        for status in ("rejected", "pending", "revision", "under_review", "accepted"):
            self.assertEqual(store.update_submission_status(s.pk, self.organizer.pk, status).status, status)

    def test_status_requires_organizer(self):
        s = self._create()
        with self.assertRaises(Unauthorized):
            store.update_submission_status(s.pk, self.member.pk, "accepted")
        with self.assertRaises(ValidationFailed):
            store.update_submission_status(s.pk, self.organizer.pk, "maybe")
        s.refresh_from_db()
        self.assertEqual(s.status, "pending")
        self.assertFalse(Notification.objects.exists())

    # ---------- baja ----------
    def test_delete_cascades_evaluations(self):
        s = self._create()
        Evaluation.objects.create(submission=s, evaluator=self.member, score=5, recommendation="revision")
        with self.assertRaises(Unauthorized):
            store.delete_submission(s.pk, self.organizer.pk)
        store.delete_submission(s.pk, self.author.pk)
        self.assertFalse(Submission.objects.filter(pk=s.pk).exists())
        self.assertEqual(Evaluation.objects.count(), 0)


class SubmissionFileTest(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.organizer = User.objects.create_user(username="org", password="Pass1234!")
        cls.author = User.objects.create_user(username="autor", password="Pass1234!")
        cls.event = Event.objects.create(title="Congreso PDF", organizer=cls.organizer, status="published")
        cls.submission = Submission.objects.create(
            event=cls.event, author=cls.author, title="Con archivo",
            abstract="Resumen", keywords=["pdf"], type="poster",
        )

    def setUp(self):
        self.media_root = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.media_root, ignore_errors=True)
        override = override_settings(MEDIA_ROOT=self.media_root)
        override.enable()
        self.addCleanup(override.disable)

    def test_attach_and_remove_pdf(self):
        pdf = SimpleUploadedFile("paper.pdf", b"%PDF-1.4 demo", content_type="application/pdf")
        s = store.attach_submission_file(self.submission.pk, self.author.pk, pdf)
        self.assertTrue(s.file.name.endswith(".pdf"))
        self.assertTrue(s.file.storage.exists(s.file.name))

        name = s.file.name
        s = store.remove_submission_file(self.submission.pk, self.author.pk)
        self.assertFalse(s.file)
        self.assertFalse(s.file.storage.exists(name))

    def test_rejects_non_pdf_and_large_files(self):
        txt = SimpleUploadedFile("paper.txt", b"hola", content_type="text/plain")
        with self.assertRaises(ValidationFailed):
            store.attach_submission_file(self.submission.pk, self.author.pk, txt)

        with override_settings(SUBMISSION_FILE_MAX_BYTES=10):
            big = SimpleUploadedFile("big.pdf", b"%PDF" + b"0" * 20, content_type="application/pdf")
            with self.assertRaises(ValidationFailed):
                store.attach_submission_file(self.submission.pk, self.author.pk, big)

        with self.assertRaises(ValidationFailed):
            store.attach_submission_file(self.submission.pk, self.author.pk, None)

    def test_only_author_uploads(self):
        pdf = SimpleUploadedFile("paper.pdf", b"%PDF-1.4", content_type="application/pdf")
        with self.assertRaises(Unauthorized):
            store.attach_submission_file(self.submission.pk, self.organizer.pk, pdf)
