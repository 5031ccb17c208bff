import asyncio
import json

import httpx
import pytest

from code_corrector.application.completion_client import (
    GroqCompletionClient,
    classify_error_message,
    classify_status_code,
)
from code_corrector.core.exceptions import ProviderError, StatusCategory


def make_client(handler):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GroqCompletionClient(
        api_key="secret", base_url="https://groq.test/openai/v1", http_client=http_client
    )


def complete(client):
    async def go():
        try:
            return await client.complete("fix it", model="m", temperature=0.1, max_tokens=4000)
        finally:
            await client._client.aclose()

    return asyncio.run(go())


def chat_reply(content):
    return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": content}}]})


def test_sends_single_non_streaming_chat_request():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["authorization"]
        seen["body"] = json.loads(request.content)
        return chat_reply('{"correctedCode": "ok"}')

    assert complete(make_client(handler)) == '{"correctedCode": "ok"}'
    assert seen["url"] == "https://groq.test/openai/v1/chat/completions"
    assert seen["auth"] == "Bearer secret"
    assert seen["body"] == {
        "model": "m",
        "messages": [{"role": "user", "content": "fix it"}],
        "temperature": 0.1,
        "max_tokens": 4000,
        "top_p": 1.0,
        "stream": False,
    }


def test_null_content_becomes_empty_string():
    assert complete(make_client(lambda request: chat_reply(None))) == ""


@pytest.mark.parametrize(
    "status, body, category",
    [
        (401, {"error": {"message": "Invalid API Key"}}, StatusCategory.AUTH),
        (403, {"error": {"message": "forbidden"}}, StatusCategory.AUTH),
        (429, {"error": {"message": "Rate limit reached"}}, StatusCategory.RATE_LIMIT),
        (504, {"error": "gateway"}, StatusCategory.TIMEOUT),
        (400, {"error": {"message": "You exceeded your quota"}}, StatusCategory.RATE_LIMIT),
        (500, {"error": {"message": "internal"}}, StatusCategory.UNKNOWN),
    ],
)
def test_http_errors_are_classified(status, body, category):
    client = make_client(lambda request: httpx.Response(status, json=body))

    with pytest.raises(ProviderError) as exc_info:
        complete(client)

    assert exc_info.value.category is category
    assert str(status) in exc_info.value.details


def test_timeout_is_classified():
    def handler(request):
        raise httpx.ReadTimeout("read timed out", request=request)

    with pytest.raises(ProviderError) as exc_info:
        complete(make_client(handler))
    assert exc_info.value.category is StatusCategory.TIMEOUT


def test_connection_failure_is_classified_as_timeout():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ProviderError) as exc_info:
        complete(make_client(handler))
    assert exc_info.value.category is StatusCategory.TIMEOUT


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, content=b"<html>not json</html>"),
        httpx.Response(200, json={"choices": []}),
        httpx.Response(200, json={"unexpected": True}),
    ],
)
def test_malformed_provider_payload(response):
    with pytest.raises(ProviderError) as exc_info:
        complete(make_client(lambda request: response))
    assert exc_info.value.category is StatusCategory.MALFORMED_PROVIDER_RESPONSE


@pytest.mark.parametrize(
    "message, category",
    [
        ("Invalid API key provided", StatusCategory.AUTH),
        ("Authentication failed", StatusCategory.AUTH),
        ("401 Unauthorized", StatusCategory.AUTH),
        ("Rate limit reached for model", StatusCategory.RATE_LIMIT),
        ("quota exhausted", StatusCategory.RATE_LIMIT),
        ("Request timeout", StatusCategory.TIMEOUT),
        ("network unreachable", StatusCategory.TIMEOUT),
        ("Unexpected token in JSON", StatusCategory.MALFORMED_PROVIDER_RESPONSE),
        ("could not parse body", StatusCategory.MALFORMED_PROVIDER_RESPONSE),
        ("something odd", StatusCategory.UNKNOWN),
        ("", StatusCategory.UNKNOWN),
    ],
)
def test_classify_error_message(message, category):
    assert classify_error_message(message) is category


def test_status_code_wins_over_message():
    assert classify_status_code(429, "invalid json") is StatusCategory.RATE_LIMIT
    assert classify_status_code(502, "invalid json") is StatusCategory.MALFORMED_PROVIDER_RESPONSE
