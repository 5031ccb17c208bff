import pytest
from fastapi.testclient import TestClient

from code_corrector.core.config import Settings
from code_corrector.main import create_app


class FakeCompletionClient:
    """Stands in for the Groq client; records every call it receives."""

    def __init__(self, reply="", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def complete(self, prompt, model, temperature, max_tokens, top_p=1.0):
        self.calls.append(
            {
                "prompt": prompt,
                "model": model,
                "temperature": temperature,
                "max_tokens": max_tokens,
                "top_p": top_p,
            }
        )
        if self.error is not None:
            raise self.error
        return self.reply

    async def aclose(self):
        pass


@pytest.fixture
def settings():
    return Settings(groq_api_key="test-key", model_name="test-model")


@pytest.fixture
def fake_client():
    return FakeCompletionClient()


@pytest.fixture
def client(settings, fake_client):
    app = create_app(settings=settings, completion_client=fake_client)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_fake():
    return FakeCompletionClient
