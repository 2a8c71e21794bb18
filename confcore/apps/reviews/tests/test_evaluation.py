from __future__ import annotations

from unittest import mock

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.test import TestCase

from confcore.apps.core.errors import AlreadyEvaluated, NotFound, Unauthorized, ValidationFailed
from confcore.apps.events.models import CommitteeMember, Event
from confcore.apps.notifications.models import Notification
from confcore.apps.reviews.models import Evaluation
from confcore.apps.reviews.services import evaluation as engine
from confcore.apps.submissions.models import Submission

User = get_user_model()


class EvaluationEngineTest(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.organizer = User.objects.create_user(username="org", password="Pass1234!")
        cls.author = User.objects.create_user(username="autor", password="Pass1234!")
        cls.outsider = User.objects.create_user(username="otro", password="Pass1234!")
        cls.evaluators = [
            User.objects.create_user(username=f"eval{i}", password="Pass1234!") for i in range(1, 4)
        ]
        cls.event = Event.objects.create(title="Congreso Evaluado", organizer=cls.organizer, status="published")
        for u in cls.evaluators:
            CommitteeMember.objects.create(event=cls.event, user=u)

    def setUp(self):
        self.submission = Submission.objects.create(
            event=self.event, author=self.author, title="Ponencia",
            abstract="Resumen", keywords=["x"], type="oral",
        )

    def _evaluate(self, user, score=7, recommendation="accept", **kw):
        return engine.evaluate(self.submission.pk, user.pk, score, recommendation=recommendation, **kw)

    def test_second_evaluation_by_same_evaluator_conflicts(self):
        self._evaluate(self.evaluators[0])
        with self.assertRaises(AlreadyEvaluated):
            self._evaluate(self.evaluators[0], score=3)
        self.assertEqual(Evaluation.objects.filter(submission=self.submission).count(), 1)

    def test_non_committee_cannot_evaluate(self):
        with self.assertRaises(Unauthorized):
            self._evaluate(self.outsider)
        with self.assertRaises(Unauthorized):
            self._evaluate(self.organizer)
        self.assertFalse(Evaluation.objects.exists())

    def test_unknown_submission(self):
        with self.assertRaises(NotFound):
            engine.evaluate(999999, self.evaluators[0].pk, 5, recommendation="accept")

    def test_pending_moves_to_under_review_once(self):
        self._evaluate(self.evaluators[0])
        self.submission.refresh_from_db()
        self.assertEqual(self.submission.status, "under_review")

        self._evaluate(self.evaluators[1])
        self.submission.refresh_from_db()
        self.assertEqual(self.submission.status, "under_review")

    def test_evaluation_does_not_override_final_status(self):
        Submission.objects.filter(pk=self.submission.pk).update(status="accepted")
        self._evaluate(self.evaluators[0])
        self.submission.refresh_from_db()
        self.assertEqual(self.submission.status, "accepted")

    def test_average_score(self):
        for user, score in zip(self.evaluators, (8, 6, 10)):
            self._evaluate(user, score=score)
        loaded = engine.load_submission_with_evaluations(self.submission.pk)
        self.assertEqual(loaded.count, 3)
        self.assertEqual(loaded.average_score, 8.0)

    def test_no_evaluations_no_aggregates(self):
        loaded = engine.load_submission_with_evaluations(self.submission.pk)
        self.assertEqual(loaded.count, 0)
        self.assertIsNone(loaded.average_score)
        self.assertIsNone(loaded.majority_recommendation)

    def test_majority_recommendation(self):
        for user, rec in zip(self.evaluators, ("accept", "accept", "reject")):
            self._evaluate(user, recommendation=rec)
        loaded = engine.load_submission_with_evaluations(self.submission.pk)
        self.assertEqual(loaded.majority_recommendation, "accept")

    def test_majority_tie_break(self):
        self.assertEqual(engine.majority_recommendation(["accept", "reject", "revision"]), "accept")
        self.assertEqual(engine.majority_recommendation(["reject", "revision"]), "revision")
        self.assertEqual(engine.majority_recommendation(["reject", "reject", "accept"]), "reject")
        self.assertIsNone(engine.majority_recommendation([]))

    def test_score_bounds(self):
        for bad in (10.1, -0.1, "abc", None, True):
            with self.subTest(score=bad):
                with self.assertRaises(ValidationFailed):
                    self._evaluate(self.evaluators[0], score=bad)
        self.assertFalse(Evaluation.objects.exists())

        self.assertEqual(self._evaluate(self.evaluators[0], score=0).score, 0)
        self.assertEqual(self._evaluate(self.evaluators[1], score=10).score, 10)

    def test_subscores_comments_and_recommendation_validation(self):
        invalid = [
            {"relevance_score": 0},
            {"quality_score": 6},
            {"originality_score": 2.5},
            {"comments": "x" * 2001},
            {"recommendation": "maybe"},
            {"recommendation": None},
        ]
        for kw in invalid:
            with self.subTest(kw=list(kw)):
                with self.assertRaises(ValidationFailed):
                    self._evaluate(self.evaluators[0], **kw)
        self.assertFalse(Evaluation.objects.exists())

        ev = self._evaluate(
            self.evaluators[0], relevance_score=5, quality_score=1, originality_score=3, comments="Sólida"
        )
        self.assertEqual((ev.relevance_score, ev.quality_score, ev.originality_score), (5, 1, 3))

    def test_subscore_averages_ignore_unset(self):
        self._evaluate(self.evaluators[0], relevance_score=4)
        self._evaluate(self.evaluators[1], relevance_score=2)
        self._evaluate(self.evaluators[2])
        loaded = engine.load_submission_with_evaluations(self.submission.pk)
        self.assertEqual(loaded.average_relevance, 3.0)
        self.assertIsNone(loaded.average_quality)

    def test_organizer_notified_of_new_evaluation(self):
        ev = self._evaluate(self.evaluators[0])
        note = Notification.objects.get(user=self.organizer)
        self.assertEqual(note.type, "new_evaluation")
        self.assertEqual(note.data, {"submission_id": self.submission.pk, "evaluation_id": ev.pk})

    def test_notification_failure_keeps_evaluation(self):
        with mock.patch.object(Notification.objects, "create", side_effect=DatabaseError("boom")):
            with self.assertLogs("confcore.apps.notifications.notifier", level="ERROR"):
                ev = self._evaluate(self.evaluators[0])
        self.assertTrue(Evaluation.objects.filter(pk=ev.pk).exists())
        self.submission.refresh_from_db()
        self.assertEqual(self.submission.status, "under_review")
        self.assertFalse(Notification.objects.exists())

    def test_constraint_race_maps_to_conflict(self):
        self._evaluate(self.evaluators[0])
        # Simula que el pre-chequeo no vio la fila insertada por otro request
        with mock.patch.object(engine.Evaluation.objects, "filter") as filter_mock:
            filter_mock.return_value.exists.return_value = False
            with self.assertRaises(AlreadyEvaluated):
                self._evaluate(self.evaluators[0], score=1)
        self.assertEqual(Evaluation.objects.count(), 1)

    # ---------- edición ----------
    def test_update_own_evaluation(self):
        ev = self._evaluate(self.evaluators[0], score=5, recommendation="revision")
        updated = engine.update_evaluation(ev.pk, self.evaluators[0].pk, {"score": 9, "recommendation": "accept"})
        self.assertEqual((updated.score, updated.recommendation), (9, "accept"))

        with self.assertRaises(ValidationFailed):
            engine.update_evaluation(ev.pk, self.evaluators[0].pk, {"score": 11})
        ev.refresh_from_db()
        self.assertEqual(ev.score, 9)

    def test_cannot_update_someone_elses_evaluation(self):
        mine = self._evaluate(self.evaluators[0], score=4, recommendation="reject")
        theirs = self._evaluate(self.evaluators[1], score=6, recommendation="revision")
        with self.assertRaises(Unauthorized):
            engine.update_evaluation(theirs.pk, self.evaluators[0].pk, {"score": 10})
        theirs.refresh_from_db()
        self.assertEqual((theirs.score, theirs.recommendation), (6, "revision"))
        self.assertEqual(mine.evaluator_id, self.evaluators[0].pk)

    # ---------- lectura ----------
    def test_list_submission_evaluations_permissions(self):
        self._evaluate(self.evaluators[0], score=8)
        self._evaluate(self.evaluators[1], score=6)
        loaded = engine.list_submission_evaluations(self.submission.pk, self.organizer.pk)
        self.assertEqual(loaded.average_score, 7.0)
        self.assertEqual(engine.list_submission_evaluations(self.submission.pk, self.evaluators[2].pk).count, 2)
        for user in (self.author, self.outsider):
            with self.assertRaises(Unauthorized):
                engine.list_submission_evaluations(self.submission.pk, user.pk)

    def test_list_my_evaluations(self):
        self._evaluate(self.evaluators[0])
        self._evaluate(self.evaluators[1])
        self.assertEqual(engine.list_my_evaluations(self.evaluators[0].pk).count(), 1)
        self.assertEqual(engine.list_my_evaluations(self.outsider.pk).count(), 0)
