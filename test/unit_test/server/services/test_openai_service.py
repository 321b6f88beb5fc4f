"""Unit tests for the OpenAI chat-completion service."""

import httpx
import pytest

from sassify.server.services.errors import OpenAIServiceError
from sassify.server.services.openai_service import SYSTEM_MESSAGE

SIMPLE_PROJECT = {
    "basics": {"projectType": "vitrine", "technologies": "WordPress"},
    "features": {"selectedFeatures": ["contact-form"]},
    "constraints": {"tjmTarget": 400},
}

COMPLEX_PROJECT = {
    "basics": {"projectType": "saas", "technologies": ["Python", "React", "PostgreSQL", "Redis"]},
    "features": {"selectedFeatures": ["auth-sso", "erp-crm", "ecommerce"]},
}


class TestCallOpenAI:
    async def test_returns_parsed_json(self, openai_service, openai_transport, chat_completion):
        openai_transport.queue(chat_completion({"title": "Hello"}))

        result = await openai_service.call_openai("Write something")

        assert result == {"title": "Hello"}

    async def test_request_shape(self, openai_service, openai_transport, chat_completion):
        openai_transport.queue(chat_completion({}))

        await openai_service.call_openai("Prompt", {"model": "gpt-4", "max_tokens": 10, "purpose": "estimation"})

        request = openai_transport.requests[0]
        body = openai_transport.json_bodies()[0]
        assert str(request.url) == "http://mock/openai/chat/completions"
        assert request.headers["Authorization"] == "Bearer sk-test"
        assert body["model"] == "gpt-4"
        assert body["max_tokens"] == 10
        assert body["temperature"] == 0.3
        assert body["response_format"] == {"type": "json_object"}
        assert body["messages"] == [
            {"role": "system", "content": SYSTEM_MESSAGE},
            {"role": "user", "content": "Prompt"},
        ]
        assert "purpose" not in body

    async def test_http_error_is_wrapped(self, openai_service, openai_transport):
        openai_transport.queue(httpx.Response(429, json={"error": {"message": "rate limited"}}))

        with pytest.raises(OpenAIServiceError) as exc_info:
            await openai_service.call_openai("Prompt")

        assert exc_info.value.status_code == 429
        assert exc_info.value.message.startswith("Error while calling OpenAI")

    async def test_transport_error_is_wrapped(self, openai_service, openai_transport):
        def boom(request):
            raise httpx.ConnectError("connection refused", request=request)

        openai_transport.queue(boom)

        with pytest.raises(OpenAIServiceError, match="Error while calling OpenAI"):
            await openai_service.call_openai("Prompt")

    async def test_missing_content_is_rejected(self, openai_service, openai_transport):
        openai_transport.queue(httpx.Response(200, json={"choices": []}))

        with pytest.raises(OpenAIServiceError, match="Invalid OpenAI response"):
            await openai_service.call_openai("Prompt")

    async def test_non_json_content_is_rejected(self, openai_service, openai_transport, chat_completion):
        openai_transport.queue(chat_completion("this is not json"))

        with pytest.raises(OpenAIServiceError, match="Invalid JSON response"):
            await openai_service.call_openai("Prompt")

    async def test_json_array_content_is_rejected(self, openai_service, openai_transport, chat_completion):
        openai_transport.queue(chat_completion("[1, 2]"))

        with pytest.raises(OpenAIServiceError, match="expected an object"):
            await openai_service.call_openai("Prompt")


class TestGenerateEstimation:
    async def test_unknown_user_type(self, openai_service):
        with pytest.raises(ValueError, match="Unknown user type"):
            await openai_service.generate_estimation(SIMPLE_PROJECT, "agency")

    async def test_simple_project_uses_small_model(self, openai_service, openai_transport, chat_completion):
        openai_transport.queue(chat_completion({"totalDays": 5}))

        result = await openai_service.generate_estimation(SIMPLE_PROJECT, "freelance")

        body = openai_transport.json_bodies()[0]
        assert body["model"] == "gpt-3.5-turbo"
        assert body["max_tokens"] == 1500
        assert body["temperature"] == 0.2
        assert result["totalDays"] == 5
        assert result["optimization"] == {
            "model": "gpt-3.5-turbo",
            "complexityScore": 1,
            "fromCache": False,
            "tokensLimit": 1500,
        }

    async def test_complex_project_uses_gpt4(self, openai_service, openai_transport, chat_completion):
        openai_transport.queue(chat_completion({"totalDays": 60}))

        result = await openai_service.generate_estimation(COMPLEX_PROJECT, "freelance")

        assert openai_transport.json_bodies()[0]["model"] == "gpt-4"
        assert result["optimization"]["model"] == "gpt-4"
        assert result["optimization"]["tokensLimit"] == 2000
        assert result["optimization"]["complexityScore"] == 11

    async def test_gpt4_failure_falls_back(self, openai_service, openai_transport, chat_completion):
        openai_transport.queue(httpx.Response(503, text="overloaded"), chat_completion({"totalDays": 40}))

        result = await openai_service.generate_estimation(COMPLEX_PROJECT, "freelance")

        assert [b["model"] for b in openai_transport.json_bodies()] == ["gpt-4", "gpt-3.5-turbo"]
        assert result["optimization"]["model"] == "gpt-3.5-turbo"
        assert result["optimization"]["fallback"] is True
        assert result["optimization"]["tokensLimit"] == 1500

    async def test_small_model_failure_is_not_retried(self, openai_service, openai_transport):
        openai_transport.queue(httpx.Response(500, text="error"))

        with pytest.raises(OpenAIServiceError):
            await openai_service.generate_estimation(SIMPLE_PROJECT, "freelance")

        assert len(openai_transport.requests) == 1

    async def test_second_identical_request_is_served_from_cache(
        self, openai_service, openai_transport, chat_completion
    ):
        openai_transport.queue(chat_completion({"totalDays": 5}))

        first = await openai_service.generate_estimation(SIMPLE_PROJECT, "freelance")
        second = await openai_service.generate_estimation(SIMPLE_PROJECT, "freelance")

        assert len(openai_transport.requests) == 1
        assert first["optimization"]["fromCache"] is False
        assert second["optimization"]["fromCache"] is True
        assert second["totalDays"] == 5
