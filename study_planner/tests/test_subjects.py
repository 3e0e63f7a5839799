"""Test cases for subject and task endpoints."""

from .base import TestBase


class SubjectAPITests(TestBase):
    """Test subject endpoints."""

    def setUp(self):
        super().setUp()
        self.user = self.register()

    def test_create_subject(self):
        subject = self.create_subject(name="Physics", exam_date="2024-06-01T00:00:00Z")
        self.assertEqual(subject["name"], "Physics")
        self.assertEqual(subject["examDate"], "2024-06-01T00:00:00Z")
        self.assertEqual(subject["userId"], self.user["id"])
        self.assertFalse(subject["completed"])

    def test_exam_date_offset_is_normalised_to_utc(self):
        subject = self.create_subject(exam_date="2024-06-01T05:30:00+05:30")
        self.assertEqual(subject["examDate"], "2024-06-01T00:00:00Z")

    def test_create_subject_validation(self):
        bad_payloads = [
            {"name": "Physics"},
            {"examDate": "2024-06-01T00:00:00Z"},
            {"name": "", "examDate": "2024-06-01T00:00:00Z"},
            {"name": "Physics", "examDate": "next tuesday"},
            {"name": 12, "examDate": "2024-06-01T00:00:00Z"},
        ]
        for payload in bad_payloads:
            with self.subTest(payload=payload):
                response = self.client.post("/api/subjects", json=payload)
                self.assertEqual(response.status_code, 400)

    def test_malformed_json_body(self):
        response = self.client.post(
            "/api/subjects", data="{not json", content_type="application/json"
        )
        self.assertEqual(response.status_code, 400)

    def test_list_subjects_only_own(self):
        self.create_subject(name="Physics")
        self.logout()
        self.register(username="other")
        self.create_subject(name="History")

        response = self.client.get("/api/subjects")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([s["name"] for s in response.get_json()], ["History"])

    def test_patch_completed_keeps_other_fields(self):
        subject = self.create_subject()
        response = self.client.patch(
            f"/api/subjects/{subject['id']}", json={"completed": True}
        )
        self.assertEqual(response.status_code, 200)
        updated = response.get_json()
        self.assertTrue(updated["completed"])
        for key in ("id", "userId", "name", "examDate"):
            self.assertEqual(updated[key], subject[key])

    def test_patch_missing_subject(self):
        response = self.client.patch("/api/subjects/999", json={"completed": True})
        self.assertEqual(response.status_code, 404)

    def test_patch_rejects_owner_change(self):
        subject = self.create_subject()
        response = self.client.patch(
            f"/api/subjects/{subject['id']}", json={"userId": 42}
        )
        self.assertEqual(response.status_code, 400)

    def test_patch_rejects_wrong_type(self):
        subject = self.create_subject()
        response = self.client.patch(
            f"/api/subjects/{subject['id']}", json={"completed": "yes"}
        )
        self.assertEqual(response.status_code, 400)


class TaskAPITests(TestBase):
    """Test task endpoints."""

    def setUp(self):
        super().setUp()
        self.register()
        self.subject = self.create_subject()

    def test_create_and_list_tasks(self):
        response = self.client.post(
            "/api/tasks",
            json={"description": "Read chapter 1", "subjectId": self.subject["id"]}
        )
        self.assertEqual(response.status_code, 201)
        task = response.get_json()
        self.assertFalse(task["completed"])
        self.assertEqual(task["subjectId"], self.subject["id"])

        other = self.create_subject(name="Chemistry")
        self.client.post(
            "/api/tasks", json={"description": "Elsewhere", "subjectId": other["id"]}
        )

        response = self.client.get(f"/api/subjects/{self.subject['id']}/tasks")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([t["id"] for t in response.get_json()], [task["id"]])

    def test_create_task_validation(self):
        bad_payloads = [
            {"description": "Read"},
            {"subjectId": self.subject["id"]},
            {"description": "Read", "subjectId": "1"},
            {"description": "Read", "subjectId": True},
        ]
        for payload in bad_payloads:
            with self.subTest(payload=payload):
                response = self.client.post("/api/tasks", json=payload)
                self.assertEqual(response.status_code, 400)

    def test_toggle_task(self):
        task = self.client.post(
            "/api/tasks",
            json={"description": "Read chapter 1", "subjectId": self.subject["id"]}
        ).get_json()

        response = self.client.patch(f"/api/tasks/{task['id']}", json={"completed": True})
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.get_json()["completed"])
        self.assertEqual(response.get_json()["description"], "Read chapter 1")

    def test_patch_missing_task(self):
        response = self.client.patch("/api/tasks/999", json={"completed": True})
        self.assertEqual(response.status_code, 404)

        response = self.client.get(f"/api/subjects/{self.subject['id']}/tasks")
        self.assertEqual(response.get_json(), [])

    def test_unknown_route_is_json(self):
        response = self.client.get("/api/nothing-here")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json(), {"error": "Not found"})
