import logging
import math
import statistics
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any, Protocol

from pydantic import ValidationError as SchemaValidationError

from interview_sim.errors import (
    EmptyAnswerError,
    QuestionGenerationError,
    ServiceError,
    SessionStateError,
    ValidationError,
)
from interview_sim.models.evaluation import Evaluation
from interview_sim.models.session import (
    DIFFICULTIES,
    INTERVIEW_MODES,
    MAX_QUESTIONS,
    MIN_QUESTIONS,
    CurrentQuestion,
    InterviewSession,
    Progress,
    SessionConfig,
)
from interview_sim.models.summary import InterviewExport, InterviewSummary
from interview_sim.scoring.performance import analyze_performance
from interview_sim.scoring.recommendations import generate_recommendations
from interview_sim.scoring.score_calculator import round_score
from interview_sim.services.evaluation_service import EvaluationService, build_skipped_evaluation
from interview_sim.services.events import (
    AnswerEvaluated,
    EventBus,
    QuestionChanged,
    QuestionSkipped,
    SessionCompleted,
    SessionStarted,
)
from interview_sim.services.llm_client import DEFAULT_TIMEOUT_SECONDS, bounded_call
from interview_sim.services.state_store import MemoryStateStore, StateStore

LOGGER = logging.getLogger(__name__)

STATE_KEY = "interviewState"
DRAFT_KEY_PREFIX = "draft_"
REQUIRED_CONFIG_FIELDS = ("role", "mode", "difficulty", "numQuestions")


class QuestionSource(Protocol):
    async def generate_questions(self, config: SessionConfig) -> list[str]: ...


def validate_config(raw: Mapping[str, Any] | SessionConfig) -> SessionConfig:
    """Validate a raw interview configuration, reporting every failing field at once."""
    data = raw.model_dump() if isinstance(raw, SessionConfig) else dict(raw or {})
    errors: list[str] = []

    for field in REQUIRED_CONFIG_FIELDS:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            errors.append(f"{field} is required")

    mode = data.get("mode")
    if mode and mode not in INTERVIEW_MODES:
        errors.append(f"mode must be one of {', '.join(INTERVIEW_MODES)}")
    difficulty = data.get("difficulty")
    if difficulty and difficulty not in DIFFICULTIES:
        errors.append(f"difficulty must be one of {', '.join(DIFFICULTIES)}")

    num_questions = _coerce_int(data.get("numQuestions"))
    if data.get("numQuestions") is not None and (
        num_questions is None or not MIN_QUESTIONS <= num_questions <= MAX_QUESTIONS
    ):
        errors.append(f"Number of questions must be between {MIN_QUESTIONS} and {MAX_QUESTIONS}")

    if errors:
        raise ValidationError(errors)

    domain = str(data.get("domain") or "").strip()
    return SessionConfig(
        role=str(data["role"]).strip(),
        domain=domain or None,
        mode=mode,
        difficulty=difficulty,
        numQuestions=num_questions,
    )


def build_summary(session: InterviewSession) -> InterviewSummary:
    """Session-level totals, analytics and recommendations; deterministic for a given session."""
    if session.config is None:
        raise SessionStateError("Interview has not been configured")

    evaluations = session.evaluations
    average = statistics.fmean(item.score for item in evaluations) if evaluations else 0.0
    skipped_count = sum(1 for item in evaluations if item.skipped)

    duration_minutes = 0
    if session.startTime is not None and session.endTime is not None:
        elapsed = (session.endTime - session.startTime).total_seconds()
        duration_minutes = max(0, math.floor(elapsed / 60.0 + 0.5))

    return InterviewSummary(
        sessionId=session.sessionId,
        config=session.config,
        totalScore=round_score(average),
        questionCount=len(session.questions),
        answeredCount=len(evaluations) - skipped_count,
        skippedCount=skipped_count,
        durationMinutes=duration_minutes,
        startTime=session.startTime,
        endTime=session.endTime,
        evaluations=[item.model_copy(deep=True) for item in evaluations],
        analysis=analyze_performance(evaluations),
        recommendations=generate_recommendations(evaluations, average, session.config),
    )


class InterviewEngine:
    """Owns one interview session: idle -> configured -> in_progress -> completed.

    Every mutation is persisted to the state store and announced on the event bus.
    """

    def __init__(
        self,
        question_source: QuestionSource,
        evaluation_service: EvaluationService | None = None,
        store: StateStore | None = None,
        event_bus: EventBus | None = None,
        clock: Callable[[], datetime] | None = None,
        question_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._question_source = question_source
        self._evaluation_service = evaluation_service or EvaluationService()
        self._store = store if store is not None else MemoryStateStore()
        self.events = event_bus or EventBus()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._question_timeout_seconds = question_timeout_seconds
        self._session = self._load_saved_state()

    @property
    def session(self) -> InterviewSession:
        return self._session.model_copy(deep=True)

    @property
    def status(self) -> str:
        return self._session.status

    async def start_interview(self, config: Mapping[str, Any] | SessionConfig) -> list[str]:
        validated = validate_config(config)
        session = InterviewSession(status="configured", config=validated)
        session.questions = await self._request_questions(validated)
        session.startTime = self._clock()
        session.status = "in_progress"

        self._clear_drafts()
        self._session = session
        self._persist()
        LOGGER.info(
            "Interview %s started: %s %s for %s (%d questions)",
            session.sessionId,
            validated.difficulty,
            validated.mode,
            validated.role,
            len(session.questions),
        )
        self.events.publish(SessionStarted(config=validated, questions=list(session.questions)))
        return list(session.questions)

    async def submit_answer(self, answer: str) -> Evaluation:
        if not answer or not answer.strip():
            raise EmptyAnswerError()

        index = self._require_open_question()
        session = self._session
        evaluation = await self._evaluation_service.evaluate(
            question=session.questions[index],
            answer=answer,
            config=session.config,
            question_index=index,
        )
        # The session may have moved on while the evaluation was in flight.
        if self._session is not session or self._require_open_question() != index:
            raise SessionStateError("Interview state changed while the answer was being evaluated")

        session.answers.append(answer)
        session.evaluations.append(evaluation)
        self.clear_draft(index)
        self._persist()
        LOGGER.info("Answer for question %d evaluated: %.1f", index + 1, evaluation.score)
        self.events.publish(AnswerEvaluated(evaluation=evaluation.model_copy(deep=True)))
        return evaluation.model_copy(deep=True)

    def skip_question(self) -> Evaluation:
        index = self._require_open_question()
        evaluation = build_skipped_evaluation(self._session.questions[index], index)

        self._session.answers.append(evaluation.candidateAnswer)
        self._session.evaluations.append(evaluation)
        self.clear_draft(index)
        self._persist()
        LOGGER.info("Question %d skipped", index + 1)
        self.events.publish(QuestionSkipped(evaluation=evaluation.model_copy(deep=True)))
        return evaluation.model_copy(deep=True)

    def next_question(self) -> CurrentQuestion | None:
        """Advance the question pointer; returns None once the interview has completed."""
        self._require_in_progress()
        self._session.currentIndex += 1

        if self._session.currentIndex >= len(self._session.questions):
            self._session.currentIndex = len(self._session.questions)
            self._complete()
            return None

        self._persist()
        current = self.get_current_question()
        self.events.publish(QuestionChanged(current=current, progress=self.get_progress()))
        return current

    def end_interview(self) -> InterviewSummary:
        if self._session.status == "completed":
            return build_summary(self._session)
        self._require_in_progress()
        return self._complete()

    def get_current_question(self) -> CurrentQuestion | None:
        session = self._session
        if session.status != "in_progress" or session.currentIndex >= len(session.questions):
            return None
        return CurrentQuestion(
            index=session.currentIndex,
            question=session.questions[session.currentIndex],
            total=len(session.questions),
        )

    def get_progress(self) -> Progress:
        total = len(self._session.questions)
        current = self._session.currentIndex
        percentage = math.floor(current / total * 100 + 0.5) if total else 0
        return Progress(current=current, total=total, percentage=percentage)

    def get_summary(self) -> InterviewSummary | None:
        if self._session.endTime is None:
            return None
        return build_summary(self._session)

    def export_data(self) -> InterviewExport:
        return InterviewExport(
            **self._session.model_dump(),
            summary=self.get_summary(),
            exportedAt=self._clock(),
        )

    def reset(self) -> None:
        self._clear_drafts()
        self._session = InterviewSession()
        self._store.set(STATE_KEY, None)
        LOGGER.info("Interview state cleared")

    def save_draft(self, index: int, text: str) -> None:
        self._store.set(f"{DRAFT_KEY_PREFIX}{index}", text)

    def load_draft(self, index: int) -> str | None:
        draft = self._store.get(f"{DRAFT_KEY_PREFIX}{index}")
        return draft if isinstance(draft, str) else None

    def clear_draft(self, index: int) -> None:
        self._store.set(f"{DRAFT_KEY_PREFIX}{index}", None)

    async def _request_questions(self, config: SessionConfig) -> list[str]:
        try:
            questions = await bounded_call(
                self._question_source.generate_questions(config),
                self._question_timeout_seconds,
            )
        except ServiceError as exc:
            raise QuestionGenerationError(exc) from exc
        except Exception as exc:  # external API protection
            LOGGER.warning("Question source failed unexpectedly: %r", exc)
            raise QuestionGenerationError(exc) from exc

        if not isinstance(questions, list):
            raise QuestionGenerationError("Question service returned a non-list result")
        cleaned = [item.strip() for item in questions if isinstance(item, str) and item.strip()]
        if not cleaned:
            raise QuestionGenerationError("No questions returned")
        if len(cleaned) < config.numQuestions:
            raise QuestionGenerationError(f"Expected {config.numQuestions} questions, received {len(cleaned)}")
        return cleaned[: config.numQuestions]

    def _clear_drafts(self) -> None:
        for index in range(MAX_QUESTIONS):
            self.clear_draft(index)

    def _complete(self) -> InterviewSummary:
        self._session.endTime = self._clock()
        self._session.status = "completed"
        summary = build_summary(self._session)
        self._persist()
        LOGGER.info("Interview %s completed. Final score: %.1f", summary.sessionId, summary.totalScore)
        self.events.publish(SessionCompleted(summary=summary))
        return summary

    def _require_in_progress(self) -> None:
        if self._session.status != "in_progress":
            raise SessionStateError(f"No interview in progress (status: {self._session.status})")

    def _require_open_question(self) -> int:
        self._require_in_progress()
        index = self._session.currentIndex
        if index >= len(self._session.questions):
            raise SessionStateError("No current question")
        if any(item.questionIndex == index for item in self._session.evaluations):
            raise SessionStateError(f"Question {index + 1} has already been answered")
        return index

    def _persist(self) -> None:
        self._store.set(STATE_KEY, self._session.model_dump(mode="json"))

    def _load_saved_state(self) -> InterviewSession:
        saved = self._store.get(STATE_KEY)
        if not isinstance(saved, dict) or not saved.get("sessionId"):
            return InterviewSession()
        try:
            session = InterviewSession.model_validate(saved)
        except SchemaValidationError as exc:
            LOGGER.warning("Discarding unreadable saved interview state: %s", exc)
            return InterviewSession()
        LOGGER.info("Restored interview %s (%s)", session.sessionId, session.status)
        return session


def _coerce_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def build_interview_engine(store: StateStore | None = None) -> InterviewEngine:
    """Engine wired to the OpenAI-backed services configured through the environment."""
    from interview_sim.scoring.llm_judge import OpenAIAnswerJudge
    from interview_sim.services.llm_client import LLMClient
    from interview_sim.services.question_generator import OpenAIQuestionGenerator
    from interview_sim.services.state_store import SqlStateStore

    client = LLMClient.from_env()
    if not client.available:
        LOGGER.warning("OPENAI_API_KEY is not set; question generation will fail and answers use local scoring")
    judge = OpenAIAnswerJudge(client) if client.available else None
    return InterviewEngine(
        question_source=OpenAIQuestionGenerator(client),
        evaluation_service=EvaluationService(judge=judge, timeout_seconds=client.timeout_seconds),
        store=store if store is not None else SqlStateStore(),
        question_timeout_seconds=client.timeout_seconds,
    )
