import unittest
from pathlib import Path

from interview_sim.analysis.text_features import analyze_answer
from interview_sim.scoring.rubric import (
    BEHAVIORAL_RUBRIC,
    TECHNICAL_RUBRIC,
    BehavioralRubric,
    TechnicalRubric,
    rubric_for_mode,
    rubric_max_total,
)
from interview_sim.scoring.score_calculator import compute_breakdown, compute_total_score, round_score

FIXTURES = Path(__file__).resolve().parent / "fixtures"


class RubricScoringTests(unittest.TestCase):
    def test_rubrics_sum_to_ten_and_match_mode(self) -> None:
        self.assertEqual(rubric_max_total(TECHNICAL_RUBRIC), 10.0)
        self.assertEqual(rubric_max_total(BEHAVIORAL_RUBRIC), 10.0)
        self.assertIsInstance(rubric_for_mode("Technical"), TechnicalRubric)
        self.assertIsInstance(rubric_for_mode("Behavioral"), BehavioralRubric)
        with self.assertRaises(ValueError):
            rubric_for_mode("Trivia")

    def test_hard_technical_answer_clamps_to_criterion_maximum(self) -> None:
        text = (FIXTURES / "hard_technical_answer.txt").read_text(encoding="utf-8")
        analysis = analyze_answer(text, "Technical")

        breakdown = compute_breakdown(analysis, TECHNICAL_RUBRIC, "Hard")

        self.assertEqual(set(breakdown), {"correctness", "efficiency", "completeness", "clarity"})
        self.assertEqual(breakdown["correctness"], 4.0)
        self.assertEqual(breakdown["efficiency"], 2.0)
        self.assertEqual(breakdown["clarity"], 2.0)
        self.assertAlmostEqual(breakdown["completeness"], 1.8)
        self.assertEqual(compute_total_score(breakdown), 9.8)

    def test_hard_answer_with_algorithm_complexity_and_code_reaches_maxima(self) -> None:
        intro = "The algorithm scans the input once and the complexity stays linear."
        code = "\n```\nfor item in items:\n    print(item)\n```"
        for filler_words in (95, 400):
            text = intro + " " + " ".join(["then"] * filler_words) + code
            analysis = analyze_answer(text, "Technical")

            self.assertGreaterEqual(analysis.wordCount, 100)
            self.assertFalse(analysis.hasTechnicalTerms)
            self.assertFalse(analysis.hasStructure)
            self.assertTrue(analysis.hasComplexityAnalysis)

            breakdown = compute_breakdown(analysis, TECHNICAL_RUBRIC, "Hard")

            self.assertEqual(breakdown["correctness"], 4.0)
            self.assertEqual(breakdown["efficiency"], 2.0)

    def test_easy_multiplier_scales_down(self) -> None:
        analysis = analyze_answer("I did it.", "Behavioral")

        breakdown = compute_breakdown(analysis, BEHAVIORAL_RUBRIC, "Easy")

        self.assertEqual(set(breakdown), {"situation", "actions", "results", "reflection"})
        self.assertAlmostEqual(breakdown["situation"], 0.4)
        self.assertAlmostEqual(breakdown["actions"], 2.0)
        self.assertAlmostEqual(breakdown["results"], 0.4)
        self.assertAlmostEqual(breakdown["reflection"], 0.4)
        self.assertEqual(compute_total_score(breakdown), 3.2)

    def test_scores_stay_in_range_for_every_difficulty(self) -> None:
        answers = [
            "",
            "x",
            "The situation was a failed project. I decided to rebuild the pipeline and we improved "
            "throughput by 35%. I learned to involve stakeholders early, which was a great success.",
            (FIXTURES / "hard_technical_answer.txt").read_text(encoding="utf-8"),
        ]
        for mode in ("Technical", "Behavioral"):
            rubric = rubric_for_mode(mode)
            for difficulty in ("Easy", "Medium", "Hard"):
                for text in answers:
                    breakdown = compute_breakdown(analyze_answer(text, mode), rubric, difficulty)
                    total = compute_total_score(breakdown)
                    self.assertGreaterEqual(total, 0.0)
                    self.assertLessEqual(total, 10.0)
                    self.assertAlmostEqual(total, sum(breakdown.values()), delta=0.05)
                    for name, criterion in rubric.criteria.items():
                        self.assertLessEqual(breakdown[name], criterion.max_score)

    def test_round_score_rounds_half_up(self) -> None:
        self.assertEqual(round_score(5.25), 5.3)
        self.assertEqual(round_score(5.333), 5.3)
        self.assertEqual(round_score(0.05), 0.1)
        self.assertEqual(round_score(10.0), 10.0)


if __name__ == "__main__":
    unittest.main()
