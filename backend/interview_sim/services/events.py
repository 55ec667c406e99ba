from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from interview_sim.models.evaluation import Evaluation
from interview_sim.models.session import CurrentQuestion, Progress, SessionConfig
from interview_sim.models.summary import InterviewSummary


@dataclass(frozen=True)
class SessionStarted:
    config: SessionConfig
    questions: list[str]


@dataclass(frozen=True)
class AnswerEvaluated:
    evaluation: Evaluation


@dataclass(frozen=True)
class QuestionChanged:
    current: CurrentQuestion
    progress: Progress


@dataclass(frozen=True)
class QuestionSkipped:
    evaluation: Evaluation


@dataclass(frozen=True)
class SessionCompleted:
    summary: InterviewSummary


InterviewEvent = SessionStarted | AnswerEvaluated | QuestionChanged | QuestionSkipped | SessionCompleted

E = TypeVar("E", SessionStarted, AnswerEvaluated, QuestionChanged, QuestionSkipped, SessionCompleted)


class EventBus:
    """Per-event-type handler registry. Handlers run synchronously in subscription order."""

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable[[Any], None]]] = defaultdict(list)

    def subscribe(self, event_type: type[E], handler: Callable[[E], None]) -> Callable[[], None]:
        self._handlers[event_type].append(handler)

        def unsubscribe() -> None:
            handlers = self._handlers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def publish(self, event: InterviewEvent) -> None:
        for handler in list(self._handlers.get(type(event), [])):
            handler(event)
