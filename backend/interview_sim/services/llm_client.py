import asyncio
import json
import logging
import os
from collections.abc import Awaitable
from typing import Any, TypeVar

from openai import APIError, APITimeoutError, AsyncOpenAI

from interview_sim.errors import MalformedResponseError, ServiceTimeoutError, ServiceUnavailableError

LOGGER = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TIMEOUT_SECONDS = 20.0

T = TypeVar("T")


def llm_timeout_seconds() -> float:
    try:
        return float(os.getenv("LLM_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS))
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS


async def bounded_call(awaitable: Awaitable[T], timeout_seconds: float) -> T:
    """Await a remote call, cancelling it once the timeout expires."""
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout_seconds)
    except asyncio.TimeoutError as exc:
        raise ServiceTimeoutError(timeout_seconds) from exc


class LLMClient:
    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        base_url: str | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self.model = model
        self.timeout_seconds = timeout_seconds
        self._client = client
        if self._client is None and api_key:
            self._client = AsyncOpenAI(
                api_key=api_key,
                base_url=base_url or None,
                timeout=timeout_seconds,
                max_retries=0,
            )

    @classmethod
    def from_env(cls) -> "LLMClient":
        return cls(
            api_key=os.getenv("OPENAI_API_KEY"),
            model=os.getenv("LLM_MODEL", DEFAULT_MODEL),
            base_url=os.getenv("LLM_BASE_URL"),
            timeout_seconds=llm_timeout_seconds(),
        )

    @property
    def available(self) -> bool:
        return self._client is not None

    async def complete_json(self, system_prompt: str, user_prompt: str, temperature: float = 0.2) -> Any:
        if self._client is None:
            raise ServiceUnavailableError("OPENAI_API_KEY is not configured")

        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=temperature,
                response_format={"type": "json_object"},
            )
        except APITimeoutError as exc:
            raise ServiceTimeoutError(self.timeout_seconds) from exc
        except APIError as exc:
            raise ServiceUnavailableError(f"LLM API error: {exc}") from exc

        if not response.choices:
            raise MalformedResponseError("LLM response contained no choices")
        content = response.choices[0].message.content or ""
        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            LOGGER.debug("Unparseable LLM content: %s", content[:200])
            raise MalformedResponseError(f"Invalid JSON from LLM: {exc}") from exc
