from __future__ import annotations

import json
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone

from confcore.apps.events.models import CommitteeMember, Event
from confcore.apps.reviews.models import Evaluation
from confcore.apps.submissions.models import Submission

User = get_user_model()


class SubmissionApiTest(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.organizer = User.objects.create_user(username="org", password="Pass1234!")
        cls.author = User.objects.create_user(username="autor", password="Pass1234!")
        cls.member = User.objects.create_user(username="comite", password="Pass1234!")
        cls.outsider = User.objects.create_user(username="otro", password="Pass1234!")
        cls.event = Event.objects.create(
            title="Congreso API",
            organizer=cls.organizer,
            status="published",
            submission_deadline=timezone.now() + timedelta(days=7),
        )
        CommitteeMember.objects.create(event=cls.event, user=cls.member)

    def _login(self, user):
        self.client.force_login(user)

    def _post_json(self, url, data):
        return self.client.post(url, data=json.dumps(data), content_type="application/json")

    def _new_submission(self, **kw):
        data = dict(
            event=self.event, author=self.author, title="Ponencia API",
            abstract="Resumen", keywords=["api"], type="oral",
        )
        data.update(kw)
        return Submission.objects.create(**data)

    def test_health(self):
        r = self.client.get("/api/health/")
        self.assertEqual(r.json(), {"ok": True})

    def test_anonymous_gets_401(self):
        r = self._post_json("/api/submissions/", {})
        self.assertEqual(r.status_code, 401)

    def test_create_201(self):
        self._login(self.author)
        r = self._post_json("/api/submissions/", {
            "event_id": self.event.pk,
            "title": "Aprendizaje federado",
            "abstract": "Resumen",
            "keywords": ["ML"],
            "type": "poster",
            "co_authors": [{"name": "Eva", "email": "eva@example.com"}],
        })
        self.assertEqual(r.status_code, 201)
        body = r.json()["submission"]
        self.assertEqual(body["status"], "pending")
        self.assertEqual(body["co_authors"][0]["name"], "Eva")

    def test_create_validation_422(self):
        self._login(self.author)
        r = self._post_json("/api/submissions/", {"event_id": self.event.pk, "title": "Sin tipo"})
        self.assertEqual(r.status_code, 422)
        body = r.json()
        self.assertEqual(body["error"], "validation_error")
        self.assertIn("type", body["errors"])

    def test_create_window_closed_422(self):
        Event.objects.filter(pk=self.event.pk).update(status="closed")
        self._login(self.author)
        r = self._post_json("/api/submissions/", {
            "event_id": self.event.pk, "title": "Tarde", "abstract": "R", "keywords": ["x"], "type": "oral",
        })
        self.assertEqual(r.status_code, 422)
        self.assertEqual(r.json()["error"], "submission_window_closed")

    def test_bad_json_400(self):
        self._login(self.author)
        r = self.client.post("/api/submissions/", data="{no es json", content_type="application/json")
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["error"], "bad_request")

    def test_not_found_and_forbidden(self):
        s = self._new_submission()
        self._login(self.outsider)
        self.assertEqual(self.client.get("/api/submissions/999999/").status_code, 404)
        self.assertEqual(self.client.get(f"/api/submissions/{s.pk}/").status_code, 403)

    def test_wrong_method_405(self):
        self._login(self.author)
        self.assertEqual(self.client.put("/api/submissions/mine/").status_code, 405)

    def test_detail_includes_aggregates_once_evaluated(self):
        s = self._new_submission()
        self._login(self.author)
        body = self.client.get(f"/api/submissions/{s.pk}/").json()["submission"]
        self.assertEqual(body["evaluation_count"], 0)
        self.assertNotIn("average_score", body)

        Evaluation.objects.create(submission=s, evaluator=self.member, score=7.5, recommendation="revision")
        body = self.client.get(f"/api/submissions/{s.pk}/").json()["submission"]
        self.assertEqual(body["average_score"], 7.5)
        self.assertEqual(body["majority_recommendation"], "revision")

    def test_patch_locked_409(self):
        s = self._new_submission(status="under_review")
        self._login(self.author)
        r = self.client.patch(
            f"/api/submissions/{s.pk}/", data=json.dumps({"title": "X"}), content_type="application/json"
        )
        self.assertEqual(r.status_code, 409)
        self.assertEqual(r.json()["error"], "conflict")

    def test_status_by_organizer(self):
        s = self._new_submission()
        self._login(self.member)
        r = self._post_json(f"/api/submissions/{s.pk}/status/", {"status": "accepted"})
        self.assertEqual(r.status_code, 403)

        self._login(self.organizer)
        r = self._post_json(f"/api/submissions/{s.pk}/status/", {"status": "accepted"})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["submission"]["status"], "accepted")

    def test_mine_and_event_list(self):
        self._new_submission()
        self._new_submission(title="Otra", type="poster")

        self._login(self.author)
        body = self.client.get("/api/submissions/mine/").json()
        self.assertEqual(body["count"], 2)
        self.assertEqual(self.client.get(f"/api/events/{self.event.pk}/submissions/").status_code, 403)

        self._login(self.member)
        body = self.client.get(f"/api/events/{self.event.pk}/submissions/?type=poster").json()
        self.assertEqual(body["count"], 1)
        self.assertEqual(body["results"][0]["title"], "Otra")

    def test_delete(self):
        s = self._new_submission()
        self._login(self.author)
        r = self.client.delete(f"/api/submissions/{s.pk}/")
        self.assertEqual(r.json(), {"deleted": True})
        self.assertFalse(Submission.objects.filter(pk=s.pk).exists())
