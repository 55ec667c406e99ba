import json
from typing import Any

from interview_sim.errors import MalformedResponseError
from interview_sim.models.session import SessionConfig
from interview_sim.services.llm_client import LLMClient

SYSTEM_PROMPT = (
    "You are an interview evaluator. Return ONLY strict JSON with fields: score (0-10 number), "
    "breakdown (object), feedback (string), improvements (array of strings 3-6 items), "
    "resources (array of strings 2-5 items), analysis (object). Consider role, mode, difficulty. "
    "No prose outside JSON."
)

USER_PROMPT_TEMPLATE = """
Evaluate the candidate's answer.
Question: {question}
Answer: {answer}
Config: {config_json}
""".strip()


def build_llm_judge_prompt(question: str, answer: str, config: SessionConfig) -> str:
    return USER_PROMPT_TEMPLATE.format(
        question=question.strip() or "No question provided.",
        answer=answer.strip(),
        config_json=json.dumps(config.model_dump(mode="json")),
    )


class OpenAIAnswerJudge:
    """Remote answer evaluation through a chat-completions model."""

    def __init__(self, client: LLMClient) -> None:
        self._client = client

    async def evaluate(self, question: str, answer: str, config: SessionConfig) -> dict[str, Any]:
        payload = await self._client.complete_json(
            system_prompt=SYSTEM_PROMPT,
            user_prompt=build_llm_judge_prompt(question, answer, config),
            temperature=0.2,
        )
        if not isinstance(payload, dict):
            raise MalformedResponseError("LLM evaluation is not a JSON object")
        return payload
