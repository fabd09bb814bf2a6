"""LLM answer generation for the RAG chat assistant.

The generator wraps a pydantic-ai ``Agent``. The agent is created on first use
from the configured model string (e.g. ``google-gla:gemini-2.5-flash``), so
the provider credentials are only needed when a question is actually asked.
Tests inject ``TestModel`` / ``FunctionModel`` instances instead.
"""

from __future__ import annotations

from typing import Optional, Union

from pydantic_ai import Agent
from pydantic_ai.exceptions import ModelHTTPError
from pydantic_ai.models import Model

from tesvik_portal.core.errors import RateLimitedError, ServiceUnavailableError, UpstreamServiceError
from tesvik_portal.core.logging_config import get_logger

logger = get_logger(__name__)

RATE_LIMITED_MESSAGE = "Şu anda çok fazla istek var. Lütfen birkaç saniye sonra tekrar deneyin."
UNAVAILABLE_MESSAGE = "AI servisi geçici olarak kullanılamıyor. Lütfen daha sonra tekrar deneyin."


class AnswerGenerator:
    def __init__(
        self,
        model: Union[str, Model],
        *,
        system_prompt: str,
        temperature: float = 0.3,
    ) -> None:
        self.model = model
        self.system_prompt = system_prompt
        self.temperature = temperature
        self._agent: Optional[Agent] = None

    @property
    def agent(self) -> Agent:
        if self._agent is None:
            logger.debug(f"Building answer agent with model {self.model}")
            self._agent = Agent(
                self.model,
                system_prompt=self.system_prompt,
                model_settings={"temperature": self.temperature},
            )
        return self._agent

    async def generate(self, prompt: str) -> str:
        """Run the agent on ``prompt`` and return the answer text.

        Raises:
            RateLimitedError: The provider answered 429.
            ServiceUnavailableError: The provider answered 402 (quota/billing).
            UpstreamServiceError: Any other provider HTTP error.
        """
        try:
            result = await self.agent.run(prompt)
        except ModelHTTPError as e:
            logger.error(f"Chat model error: {e.status_code} {e.body}")
            if e.status_code == 429:
                raise RateLimitedError(RATE_LIMITED_MESSAGE, upstream_status=429, details=e.body) from e
            if e.status_code == 402:
                raise ServiceUnavailableError(UNAVAILABLE_MESSAGE, upstream_status=402, details=e.body) from e
            raise UpstreamServiceError(
                f"Chat generation failed: {e.status_code}", upstream_status=e.status_code, details=e.body
            ) from e
        return str(result.output)
