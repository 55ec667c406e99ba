import unittest

from fastapi import FastAPI
from fastapi.testclient import TestClient

from interview_sim.api.interview import get_interview_engine, router
from interview_sim.errors import ServiceUnavailableError
from interview_sim.models.session import SessionConfig
from interview_sim.services.interview_engine import InterviewEngine
from interview_sim.services.state_store import MemoryStateStore

START_PAYLOAD = {"role": "Platform Engineer", "mode": "Technical", "difficulty": "Easy", "numQuestions": 2}


class StaticQuestionSource:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail

    async def generate_questions(self, config: SessionConfig) -> list[str]:
        if self.fail:
            raise ServiceUnavailableError("upstream down")
        return [f"How would you scale service {index + 1}?" for index in range(config.numQuestions)]


class InterviewApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = InterviewEngine(question_source=StaticQuestionSource(), store=MemoryStateStore())
        app = FastAPI()
        app.include_router(router)
        app.dependency_overrides[get_interview_engine] = lambda: self.engine
        self.client = TestClient(app)

    def test_full_flow(self) -> None:
        response = self.client.post("/interviews/start", json=START_PAYLOAD)
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(len(body["questions"]), 2)
        self.assertEqual(body["current"]["index"], 0)

        response = self.client.post("/interviews/answer", json={"answer": "Add a cache in front of the database."})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["questionIndex"], 0)

        response = self.client.post("/interviews/next")
        body = response.json()
        self.assertFalse(body["completed"])
        self.assertIsNone(body["summary"])
        self.assertEqual(body["current"]["index"], 1)

        self.assertEqual(self.client.get("/interviews/progress").json(), {"current": 1, "total": 2, "percentage": 50})

        response = self.client.post("/interviews/skip")
        self.assertEqual(response.json()["candidateAnswer"], "[SKIPPED]")

        response = self.client.post("/interviews/next")
        body = response.json()
        self.assertTrue(body["completed"])
        self.assertEqual(body["summary"]["skippedCount"], 1)

        export = self.client.get("/interviews/export").json()
        self.assertEqual(export["status"], "completed")
        self.assertEqual(export["summary"]["questionCount"], 2)

    def test_validation_errors_are_422(self) -> None:
        response = self.client.post("/interviews/start", json={"role": "", "mode": "Technical"})
        self.assertEqual(response.status_code, 422)
        self.assertIn("role is required", response.json()["detail"])

    def test_question_generation_failure_is_502(self) -> None:
        self.engine = InterviewEngine(question_source=StaticQuestionSource(fail=True), store=MemoryStateStore())
        response = self.client.post("/interviews/start", json=START_PAYLOAD)
        self.assertEqual(response.status_code, 502)
        self.assertIn("upstream down", response.json()["detail"])

    def test_empty_answer_is_422_and_out_of_state_is_409(self) -> None:
        self.assertEqual(self.client.post("/interviews/answer", json={"answer": "x"}).status_code, 409)
        self.client.post("/interviews/start", json=START_PAYLOAD)
        self.assertEqual(self.client.post("/interviews/answer", json={"answer": "  "}).status_code, 422)

    def test_drafts_and_reset(self) -> None:
        self.assertEqual(self.client.get("/interviews/drafts/0").status_code, 404)
        self.assertEqual(self.client.put("/interviews/drafts/0", json={"text": "thinking..."}).status_code, 200)
        self.assertEqual(self.client.get("/interviews/drafts/0").json(), {"text": "thinking..."})
        self.assertEqual(self.client.delete("/interviews/drafts/0").status_code, 204)
        self.assertEqual(self.client.get("/interviews/drafts/0").status_code, 404)

        self.client.post("/interviews/start", json=START_PAYLOAD)
        self.assertEqual(self.client.post("/interviews/reset").status_code, 204)
        self.assertIsNone(self.client.get("/interviews/current").json())


if __name__ == "__main__":
    unittest.main()
