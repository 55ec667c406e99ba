import logging
import random
import re
from typing import Any

from interview_sim.errors import MalformedResponseError
from interview_sim.models.session import SessionConfig
from interview_sim.services.llm_client import LLMClient

LOGGER = logging.getLogger(__name__)

SYSTEM_PROMPT = """
You are an expert interview question generator. Return a strict JSON object with this exact shape: { "questions": string[] }. Each string is a single interview question.

IMPORTANT MODE DISTINCTIONS:
- TECHNICAL questions: Focus on technical knowledge, coding, algorithms, system design, technical problem-solving, and domain expertise
- BEHAVIORAL questions: Focus on past experiences, soft skills, leadership, teamwork, conflict resolution, and STAR method responses

Tailor questions to the role, mode (Technical or Behavioral), difficulty (Easy/Medium/Hard), and optional domain. Avoid numbering and extra commentary.
""".strip()

BEHAVIORAL_PROMPT_TEMPLATE = (
    "Generate {num_questions} BEHAVIORAL interview questions for role: {role}. These should focus on past "
    "experiences, soft skills, leadership, teamwork, problem-solving in real situations, and STAR method "
    "responses. Difficulty: {difficulty}. Domain: {domain}. Examples: \"Tell me about a time when...\", "
    "\"Describe a situation where...\", \"How did you handle...\". Respond strictly as JSON with a top-level "
    "\"questions\" array."
)

TECHNICAL_PROMPT_TEMPLATE = (
    "Generate {num_questions} TECHNICAL interview questions for role: {role}. These should focus on technical "
    "knowledge, coding, algorithms, system design, technical problem-solving, and domain-specific expertise. "
    "Difficulty: {difficulty}. Domain: {domain}. Examples: \"How would you implement...\", \"Explain the "
    "difference between...\", \"Design a system that...\". Respond strictly as JSON with a top-level "
    "\"questions\" array."
)

MODE_MARKERS: dict[str, tuple[str, ...]] = {
    "Behavioral": (
        "tell me about",
        "describe a time",
        "situation",
        "experience",
        "how did you",
        "challenge",
        "conflict",
        "team",
        "leadership",
        "mistake",
        "failure",
        "success",
    ),
    "Technical": (
        "implement",
        "algorithm",
        "design",
        "code",
        "system",
        "database",
        "api",
        "optimize",
        "complexity",
        "architecture",
        "how would you",
        "explain",
        "difference between",
    ),
}


def build_question_prompt(config: SessionConfig) -> str:
    template = BEHAVIORAL_PROMPT_TEMPLATE if config.mode == "Behavioral" else TECHNICAL_PROMPT_TEMPLATE
    return template.format(
        num_questions=config.numQuestions,
        role=config.role.strip(),
        difficulty=config.difficulty,
        domain=(config.domain or "general").strip() or "general",
    )


def extract_questions(payload: Any) -> list[str]:
    if isinstance(payload, dict):
        payload = payload.get("questions")
    if not isinstance(payload, list):
        raise MalformedResponseError("Missing questions array in JSON response")
    questions = [_normalize_question_text(item) for item in payload if isinstance(item, str)]
    return [question for question in questions if question]


def prioritize_mode_questions(questions: list[str], mode: str, num_questions: int) -> list[str]:
    """Prefer questions that read as the requested mode, topping up with the rest."""
    markers = MODE_MARKERS.get(mode, ())
    matching = [question for question in questions if any(marker in question.lower() for marker in markers)]
    if len(matching) < len(questions):
        LOGGER.info(
            "%d of %d generated questions did not match %s mode markers",
            len(questions) - len(matching),
            len(questions),
            mode,
        )
    if len(matching) >= num_questions:
        return matching
    remainder = [question for question in questions if question not in matching]
    return matching + remainder[: num_questions - len(matching)]


class OpenAIQuestionGenerator:
    """Interview question source backed by a chat-completions model."""

    def __init__(self, client: LLMClient, rng: random.Random | None = None) -> None:
        self._client = client
        self._rng = rng or random.Random()

    async def generate_questions(self, config: SessionConfig) -> list[str]:
        LOGGER.info(
            "Generating %d %s questions for role=%s difficulty=%s domain=%s",
            config.numQuestions,
            config.mode,
            config.role,
            config.difficulty,
            config.domain or "general",
        )
        payload = await self._client.complete_json(
            system_prompt=SYSTEM_PROMPT,
            user_prompt=build_question_prompt(config),
            temperature=0.4,
        )
        questions = prioritize_mode_questions(extract_questions(payload), config.mode, config.numQuestions)
        self._rng.shuffle(questions)
        return questions[: config.numQuestions]


def _normalize_question_text(text: str) -> str:
    compact = re.sub(r"\s+", " ", str(text or "")).strip()
    if not compact:
        return ""
    if compact[-1] not in {"?", ".", "!"}:
        compact = f"{compact}?"
    return compact
