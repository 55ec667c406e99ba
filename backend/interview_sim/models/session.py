from datetime import datetime
from typing import Any, Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from interview_sim.models.evaluation import Evaluation

InterviewMode = Literal["Technical", "Behavioral"]
Difficulty = Literal["Easy", "Medium", "Hard"]
SessionStatus = Literal["idle", "configured", "in_progress", "completed"]

INTERVIEW_MODES: tuple[str, ...] = ("Technical", "Behavioral")
DIFFICULTIES: tuple[str, ...] = ("Easy", "Medium", "Hard")
MIN_QUESTIONS = 1
MAX_QUESTIONS = 10


class SessionConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: str
    domain: str | None = None
    mode: InterviewMode
    difficulty: Difficulty
    numQuestions: int


class InterviewSession(BaseModel):
    sessionId: str = Field(default_factory=lambda: uuid4().hex)
    status: SessionStatus = "idle"
    config: SessionConfig | None = None
    questions: list[str] = Field(default_factory=list)
    currentIndex: int = 0
    answers: list[str] = Field(default_factory=list)
    evaluations: list[Evaluation] = Field(default_factory=list)
    startTime: datetime | None = None
    endTime: datetime | None = None


class CurrentQuestion(BaseModel):
    index: int
    question: str
    total: int


class Progress(BaseModel):
    current: int
    total: int
    percentage: int


class StartInterviewRequest(BaseModel):
    role: str | None = None
    domain: str | None = None
    mode: str | None = None
    difficulty: str | None = None
    numQuestions: int | None = None


class StartInterviewResponse(BaseModel):
    sessionId: str
    message: str
    questions: list[str] = Field(default_factory=list)
    current: CurrentQuestion | None = None


class AnswerRequest(BaseModel):
    answer: str = ""


class NextQuestionResponse(BaseModel):
    completed: bool
    current: CurrentQuestion | None = None
    summary: dict[str, Any] | None = None


class DraftPayload(BaseModel):
    text: str = ""
