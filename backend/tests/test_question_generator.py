import random
import unittest
from typing import Any

from interview_sim.errors import MalformedResponseError, ServiceUnavailableError
from interview_sim.models.session import SessionConfig
from interview_sim.services.llm_client import LLMClient
from interview_sim.services.question_generator import (
    OpenAIQuestionGenerator,
    build_question_prompt,
    extract_questions,
    prioritize_mode_questions,
)


class FakeLLMClient:
    def __init__(self, payload: Any) -> None:
        self.payload = payload
        self.calls: list[dict[str, Any]] = []

    async def complete_json(self, system_prompt: str, user_prompt: str, temperature: float = 0.2) -> Any:
        self.calls.append({"system": system_prompt, "user": user_prompt, "temperature": temperature})
        return self.payload


class QuestionParsingTests(unittest.TestCase):
    def test_extract_questions_from_object_or_list(self) -> None:
        self.assertEqual(
            extract_questions({"questions": ["  Explain   caching", "", 42, "What is a heap?"]}),
            ["Explain caching?", "What is a heap?"],
        )
        self.assertEqual(extract_questions(["Design a queue."]), ["Design a queue."])

    def test_extract_questions_rejects_missing_array(self) -> None:
        with self.assertRaises(MalformedResponseError):
            extract_questions({"items": []})
        with self.assertRaises(MalformedResponseError):
            extract_questions("Explain caching")

    def test_prioritize_mode_questions_tops_up_with_non_matching(self) -> None:
        questions = [
            "Tell me about a conflict on your team.",
            "What is your favourite colour?",
            "Describe a time you failed.",
            "Where do you see yourself in five years?",
        ]

        selected = prioritize_mode_questions(questions, "Behavioral", 3)

        self.assertEqual(
            selected,
            [
                "Tell me about a conflict on your team.",
                "Describe a time you failed.",
                "What is your favourite colour?",
            ],
        )

    def test_prioritize_mode_questions_keeps_all_matching(self) -> None:
        questions = ["Implement a trie.", "Explain the difference between TCP and UDP.", "What motivates you?"]
        self.assertEqual(
            prioritize_mode_questions(questions, "Technical", 2),
            ["Implement a trie.", "Explain the difference between TCP and UDP."],
        )

    def test_prompt_mentions_mode_and_defaults_domain(self) -> None:
        config = SessionConfig(role=" QA Lead ", mode="Behavioral", difficulty="Easy", numQuestions=4)
        prompt = build_question_prompt(config)
        self.assertIn("Generate 4 BEHAVIORAL interview questions for role: QA Lead.", prompt)
        self.assertIn("Domain: general.", prompt)


class OpenAIQuestionGeneratorTests(unittest.IsolatedAsyncioTestCase):
    async def test_generate_questions_returns_requested_count(self) -> None:
        client = FakeLLMClient(
            {
                "questions": [
                    "How would you design a URL shortener",
                    "Explain database indexing.",
                    "Implement an LRU cache.",
                    "What is the complexity of quicksort?",
                ]
            }
        )
        generator = OpenAIQuestionGenerator(client, rng=random.Random(7))
        config = SessionConfig(role="Backend Engineer", domain="fintech", mode="Technical", difficulty="Hard", numQuestions=3)

        questions = await generator.generate_questions(config)

        self.assertEqual(len(questions), 3)
        self.assertEqual(len(set(questions)), 3)
        self.assertEqual(client.calls[0]["temperature"], 0.4)
        self.assertIn("Domain: fintech.", client.calls[0]["user"])
        for question in questions:
            self.assertTrue(question.endswith(("?", ".")))

    async def test_client_without_key_is_unavailable(self) -> None:
        client = LLMClient(api_key=None)
        self.assertFalse(client.available)
        with self.assertRaises(ServiceUnavailableError):
            await client.complete_json("system", "user")


if __name__ == "__main__":
    unittest.main()
