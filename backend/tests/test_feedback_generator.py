import unittest

from interview_sim.analysis.text_features import analyze_answer
from interview_sim.scoring.feedback_generator import (
    FEEDBACK_TEMPLATES,
    generate_feedback_payload,
    generate_improvements,
    generate_resources,
    generate_summary_feedback,
    score_band,
)
from interview_sim.scoring.rubric import TECHNICAL_RUBRIC
from interview_sim.scoring.score_calculator import compute_breakdown


class FeedbackGeneratorTests(unittest.TestCase):
    def test_score_bands(self) -> None:
        self.assertEqual(score_band(9.0), "excellent")
        self.assertEqual(score_band(8.5), "excellent")
        self.assertEqual(score_band(7.0), "good")
        self.assertEqual(score_band(5.5), "decent")
        self.assertEqual(score_band(5.4), "needs_improvement")

    def test_summary_is_drawn_from_matching_band(self) -> None:
        for score, band in ((9.1, "excellent"), (7.2, "good"), (6.0, "decent"), (1.0, "needs_improvement")):
            self.assertIn(generate_summary_feedback(score), FEEDBACK_TEMPLATES[band])

    def test_improvements_are_capped_at_three(self) -> None:
        analysis = analyze_answer("short", "Behavioral")
        improvements = generate_improvements({}, analysis, "Behavioral")

        self.assertEqual(len(improvements), 3)
        self.assertEqual(improvements[0], "Provide more detailed explanations and elaborate on your key points")

    def test_technical_improvements_mention_complexity(self) -> None:
        analysis = analyze_answer(
            "- We use an algorithm with a cache and a queue\n- For example the api layer batches writes",
            "Technical",
        )
        improvements = generate_improvements({"efficiency": 1.0}, analysis, "Technical")

        self.assertIn("Discuss time and space complexity to show algorithmic thinking", improvements)

    def test_resources_are_capped_at_four(self) -> None:
        low = generate_resources("Technical", "Easy", 3.0)
        self.assertEqual(len(low), 4)
        self.assertEqual(low[0], "Fundamental concepts review materials")

        hard = generate_resources("Behavioral", "Hard", 9.0)
        self.assertEqual(len(hard), 4)
        self.assertIn("Executive Leadership Development Programs", hard)

        plain = generate_resources("Behavioral", "Medium", 8.0)
        self.assertEqual(len(plain), 3)

    def test_payload_shape(self) -> None:
        analysis = analyze_answer("I would hash the keys.", "Technical")
        breakdown = compute_breakdown(analysis, TECHNICAL_RUBRIC, "Medium")

        payload = generate_feedback_payload(breakdown, analysis, "Technical", "Medium")

        self.assertEqual(set(payload), {"summary", "improvements", "resources"})
        self.assertIn(payload["summary"], FEEDBACK_TEMPLATES["needs_improvement"])
        self.assertLessEqual(len(payload["improvements"]), 3)
        self.assertLessEqual(len(payload["resources"]), 4)


if __name__ == "__main__":
    unittest.main()
