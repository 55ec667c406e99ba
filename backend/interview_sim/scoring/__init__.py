from interview_sim.scoring.feedback_generator import (
    generate_feedback_payload,
    generate_improvements,
    generate_resources,
    generate_summary_feedback,
)
from interview_sim.scoring.llm_judge import OpenAIAnswerJudge, build_llm_judge_prompt
from interview_sim.scoring.performance import analyze_performance
from interview_sim.scoring.recommendations import generate_recommendations
from interview_sim.scoring.rubric import BEHAVIORAL_RUBRIC, TECHNICAL_RUBRIC, rubric_for_mode
from interview_sim.scoring.score_calculator import compute_breakdown, compute_total_score

__all__ = [
    "BEHAVIORAL_RUBRIC",
    "OpenAIAnswerJudge",
    "TECHNICAL_RUBRIC",
    "analyze_performance",
    "build_llm_judge_prompt",
    "compute_breakdown",
    "compute_total_score",
    "generate_feedback_payload",
    "generate_improvements",
    "generate_recommendations",
    "generate_resources",
    "generate_summary_feedback",
    "rubric_for_mode",
]
