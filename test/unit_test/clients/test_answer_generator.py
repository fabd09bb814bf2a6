"""Unit tests for the pydantic-ai answer generator."""

from __future__ import annotations

import pytest
from pydantic_ai.exceptions import ModelHTTPError
from pydantic_ai.messages import ModelMessage, ModelResponse, SystemPromptPart, TextPart
from pydantic_ai.models.function import AgentInfo, FunctionModel

from tesvik_portal.clients.answer_generator import RATE_LIMITED_MESSAGE, AnswerGenerator
from tesvik_portal.core.errors import RateLimitedError, ServiceUnavailableError, UpstreamServiceError


def failing_model(status_code: int) -> FunctionModel:
    def call(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
        raise ModelHTTPError(status_code=status_code, model_name="function", body={"error": "upstream"})

    return FunctionModel(call)


def test_agent_is_built_lazily():
    generator = AnswerGenerator("openai:gpt-4o-mini", system_prompt="Sistem")
    assert generator._agent is None


async def test_generate_with_test_model():
    from pydantic_ai.models.test import TestModel

    generator = AnswerGenerator(TestModel(custom_output_text="Merhaba"), system_prompt="Sistem")
    assert await generator.generate("Selam") == "Merhaba"


async def test_system_prompt_is_sent():
    seen = []

    def call(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
        seen.extend(p.content for p in messages[0].parts if isinstance(p, SystemPromptPart))
        return ModelResponse(parts=[TextPart("Tamam")])

    generator = AnswerGenerator(FunctionModel(call), system_prompt="Teşvik uzmanısın")
    assert await generator.generate("Soru") == "Tamam"
    assert seen == ["Teşvik uzmanısın"]


class TestProviderErrors:
    async def test_rate_limited(self):
        with pytest.raises(RateLimitedError) as exc_info:
            await AnswerGenerator(failing_model(429), system_prompt="s").generate("q")
        assert exc_info.value.status_code == 429
        assert exc_info.value.message == RATE_LIMITED_MESSAGE

    async def test_payment_required_is_unavailable(self):
        with pytest.raises(ServiceUnavailableError) as exc_info:
            await AnswerGenerator(failing_model(402), system_prompt="s").generate("q")
        assert exc_info.value.upstream_status == 402

    async def test_other_status(self):
        with pytest.raises(UpstreamServiceError) as exc_info:
            await AnswerGenerator(failing_model(500), system_prompt="s").generate("q")
        assert exc_info.value.upstream_status == 500
        assert exc_info.value.status_code == 502
