from typing import Any, Literal
from uuid import uuid4

from pydantic import BaseModel, Field

SKIPPED_ANSWER = "[SKIPPED]"

ComplexityLevel = Literal["low", "medium", "high"]
SentimentLabel = Literal["positive", "negative", "neutral"]


class StarFlags(BaseModel):
    situation: bool = False
    task: bool = False
    action: bool = False
    result: bool = False


class CodeQuality(BaseModel):
    hasCode: bool
    hasComments: bool
    hasVariableNames: bool
    hasErrorHandling: bool


class Complexity(BaseModel):
    sentences: int
    avgWordsPerSentence: float
    level: ComplexityLevel


class Sentiment(BaseModel):
    positiveHits: int
    negativeHits: int
    overall: SentimentLabel


class TextAnalysis(BaseModel):
    wordCount: int
    charCount: int
    hasStructure: bool
    hasExamples: bool
    hasTechnicalTerms: bool
    hasQuantification: bool
    hasReflection: bool = False
    # Mentions of complexity or big-O notation.
    hasComplexityAnalysis: bool = False
    # Empty outside Behavioral mode.
    starFlags: StarFlags | None = None
    # Technical mode only, and only when code-like content is present.
    codeQuality: CodeQuality | None = None
    complexity: Complexity
    sentiment: Sentiment


class Evaluation(BaseModel):
    questionId: str = Field(default_factory=lambda: uuid4().hex)
    questionIndex: int = Field(..., ge=0)
    questionText: str
    candidateAnswer: str
    score: float = Field(..., ge=0.0, le=10.0)
    breakdown: dict[str, float] = Field(default_factory=dict)
    feedback: str
    improvements: list[str] = Field(default_factory=list)
    resources: list[str] = Field(default_factory=list)
    analysis: dict[str, Any] = Field(default_factory=dict)

    @property
    def skipped(self) -> bool:
        return self.candidateAnswer == SKIPPED_ANSWER
