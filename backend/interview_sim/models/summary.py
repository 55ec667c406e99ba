from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from interview_sim.models.evaluation import Evaluation
from interview_sim.models.session import InterviewSession, SessionConfig

PerformanceTrend = Literal["improving", "declining", "consistent", "all_skipped", "incomplete"]
ConsistencyLevel = Literal["high", "moderate", "low", "no_attempts", "mixed_attempts"]


class PerformanceAnalysis(BaseModel):
    trend: PerformanceTrend
    consistency: ConsistencyLevel
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    averageScore: float = 0.0
    standardDeviation: float | None = None


class RecommendationSet(BaseModel):
    immediate: list[str] = Field(default_factory=list)
    shortTerm: list[str] = Field(default_factory=list)
    longTerm: list[str] = Field(default_factory=list)
    resources: list[str] = Field(default_factory=list)


class InterviewSummary(BaseModel):
    sessionId: str
    config: SessionConfig
    totalScore: float
    questionCount: int
    answeredCount: int
    skippedCount: int
    durationMinutes: int
    startTime: datetime | None = None
    endTime: datetime | None = None
    evaluations: list[Evaluation] = Field(default_factory=list)
    analysis: PerformanceAnalysis
    recommendations: RecommendationSet


class InterviewExport(InterviewSession):
    summary: InterviewSummary | None = None
    exportedAt: datetime
