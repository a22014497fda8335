"""Shared fixtures: an app wired to recording fake adapters."""
import pytest
from fastapi.testclient import TestClient

from ollama_gateway.main import create_app
from ollama_gateway.registry import DEFAULT_REGISTRY, ProviderKind


class RecordingAdapter:
    """Fake provider that records every conversation it is asked to answer."""

    def __init__(self, provider, reply="", error=None):
        self.provider = provider
        self.reply = reply
        self.error = error
        self.calls = []

    async def invoke(self, messages, backend_model_id):
        self.calls.append(([m.model_dump() for m in messages], backend_model_id))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def adapters():
    return {
        ProviderKind.ANTHROPIC: RecordingAdapter(
            ProviderKind.ANTHROPIC,
            reply="Hello from the anthropic side. Ünïcödé survives slicing too.",
        ),
        ProviderKind.OPENAI: RecordingAdapter(ProviderKind.OPENAI, reply="short"),
        ProviderKind.EMBEDDING: RecordingAdapter(ProviderKind.EMBEDDING, reply=""),
    }


@pytest.fixture
def client(adapters):
    app = create_app(registry=DEFAULT_REGISTRY, adapters=adapters)
    return TestClient(app)
