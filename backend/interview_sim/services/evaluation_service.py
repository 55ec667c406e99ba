import logging
from typing import Any, Protocol

from interview_sim.analysis.text_features import analyze_answer
from interview_sim.errors import MalformedResponseError, ServiceError, ServiceUnavailableError
from interview_sim.models.evaluation import SKIPPED_ANSWER, Evaluation
from interview_sim.models.session import SessionConfig
from interview_sim.scoring.feedback_generator import MAX_IMPROVEMENTS, MAX_RESOURCES, generate_feedback_payload
from interview_sim.scoring.rubric import rubric_for_mode
from interview_sim.scoring.score_calculator import compute_breakdown, compute_total_score, round_score
from interview_sim.services.llm_client import DEFAULT_TIMEOUT_SECONDS, bounded_call

LOGGER = logging.getLogger(__name__)

FALLBACK_PREFIX = "LLM unavailable, used local scoring. "
DEFAULT_REMOTE_SCORE = 6.0
DEFAULT_REMOTE_FEEDBACK = "No feedback provided."

SKIPPED_SCORE = 2.0
SKIPPED_FEEDBACK = "Question was skipped. Consider practicing similar questions to build confidence."
SKIPPED_IMPROVEMENTS = ["Practice similar questions", "Build confidence in this topic area"]
SKIPPED_RESOURCES = ["Review fundamental concepts"]


class AnswerJudge(Protocol):
    async def evaluate(self, question: str, answer: str, config: SessionConfig) -> dict[str, Any]: ...


def evaluate_locally(question: str, answer: str, config: SessionConfig, question_index: int = 0) -> Evaluation:
    """Rubric-based evaluation: feature extraction, criterion scoring, then feedback."""
    analysis = analyze_answer(answer, config.mode)
    breakdown = compute_breakdown(analysis, rubric_for_mode(config.mode), config.difficulty)
    feedback = generate_feedback_payload(breakdown, analysis, config.mode, config.difficulty)
    return Evaluation(
        questionIndex=question_index,
        questionText=question,
        candidateAnswer=answer,
        score=compute_total_score(breakdown),
        breakdown=breakdown,
        feedback=feedback["summary"],
        improvements=feedback["improvements"],
        resources=feedback["resources"],
        analysis=analysis.model_dump(mode="json"),
    )


def build_skipped_evaluation(question: str, question_index: int) -> Evaluation:
    return Evaluation(
        questionIndex=question_index,
        questionText=question,
        candidateAnswer=SKIPPED_ANSWER,
        score=SKIPPED_SCORE,
        breakdown={},
        feedback=SKIPPED_FEEDBACK,
        improvements=list(SKIPPED_IMPROVEMENTS),
        resources=list(SKIPPED_RESOURCES),
        analysis={"skipped": True},
    )


def evaluation_from_remote(
    payload: dict[str, Any],
    question: str,
    answer: str,
    question_index: int,
) -> Evaluation:
    if not isinstance(payload, dict):
        raise MalformedResponseError("LLM evaluation is not a JSON object")

    raw_score = payload.get("score")
    if isinstance(raw_score, (int, float)) and not isinstance(raw_score, bool):
        score = round_score(max(0.0, min(10.0, float(raw_score))))
    else:
        score = DEFAULT_REMOTE_SCORE

    breakdown: dict[str, float] = {}
    raw_breakdown = payload.get("breakdown")
    if isinstance(raw_breakdown, dict):
        for key, value in raw_breakdown.items():
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                breakdown[str(key)] = float(value)

    feedback = payload.get("feedback")
    analysis = payload.get("analysis")
    return Evaluation(
        questionIndex=question_index,
        questionText=question,
        candidateAnswer=answer,
        score=score,
        breakdown=breakdown,
        feedback=feedback.strip() if isinstance(feedback, str) and feedback.strip() else DEFAULT_REMOTE_FEEDBACK,
        improvements=_string_list(payload.get("improvements"))[:MAX_IMPROVEMENTS],
        resources=_string_list(payload.get("resources"))[:MAX_RESOURCES],
        analysis=analysis if isinstance(analysis, dict) else {},
    )


class EvaluationService:
    """Evaluates answers remotely when a judge is configured, locally otherwise or on failure."""

    def __init__(self, judge: AnswerJudge | None = None, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._judge = judge
        self._timeout_seconds = timeout_seconds

    async def evaluate(
        self,
        question: str,
        answer: str,
        config: SessionConfig,
        question_index: int = 0,
    ) -> Evaluation:
        if self._judge is None:
            return evaluate_locally(question, answer, config, question_index)

        result = await self._try_remote(question, answer, config, question_index)
        if isinstance(result, Evaluation):
            return result

        LOGGER.warning("Remote evaluation failed, falling back to local scoring: %s", result)
        evaluation = evaluate_locally(question, answer, config, question_index)
        evaluation.feedback = f"{FALLBACK_PREFIX}{evaluation.feedback}"
        return evaluation

    async def _try_remote(
        self,
        question: str,
        answer: str,
        config: SessionConfig,
        question_index: int,
    ) -> Evaluation | ServiceError:
        try:
            payload = await bounded_call(
                self._judge.evaluate(question, answer, config),
                self._timeout_seconds,
            )
            return evaluation_from_remote(payload, question, answer, question_index)
        except ServiceError as exc:
            return exc
        except Exception as exc:  # external API protection
            return ServiceUnavailableError(f"Unexpected evaluation failure: {exc!r}")


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if str(item).strip()]
