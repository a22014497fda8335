"""Provider adapters: generic conversation -> one complete text reply.

Each provider kind reachable through the registry has exactly one adapter.
Adapters render the conversation into the prompt shape their capability
expects, invoke it once and return the final text. Any failure of the
capability is re-raised as :class:`BackendInvocationError`.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Iterable, Mapping
from typing import Any, Protocol

from claude_agent_sdk import ClaudeAgentOptions
from claude_agent_sdk import query as claude_query
from openai import AsyncOpenAI

from .backend_client import client
from .errors import BackendInvocationError
from .models import ChatMessage
from .registry import ProviderKind

ROLE_LABELS = {"system": "System", "user": "User", "assistant": "Assistant"}


class Adapter(Protocol):
    provider: ProviderKind

    async def invoke(self, messages: list[ChatMessage], backend_model_id: str) -> str: ...


def render_claude_prompt(messages: Iterable[ChatMessage]) -> str:
    """System text as a prefix, then ``User:``/``Assistant:`` lines.

    When several system messages are present the last one wins.
    """
    system_prompt = ""
    parts = []
    for message in messages:
        if message.role == "system":
            system_prompt = message.content
        elif message.role in ("user", "assistant"):
            parts.append(f"{ROLE_LABELS[message.role]}: {message.content}")
    body = "\n".join(parts)
    return f"{system_prompt}\n\n{body}" if system_prompt else body


def render_transcript_prompt(messages: Iterable[ChatMessage]) -> str:
    """Every known role, system included, as ``Role: content`` lines."""
    return "\n".join(
        f"{ROLE_LABELS[message.role]}: {message.content}"
        for message in messages
        if message.role in ROLE_LABELS
    )


class ClaudeAdapter:
    """Single-shot, tool-less call through the Claude Agent SDK."""

    provider = ProviderKind.ANTHROPIC

    def __init__(self, query_fn: Callable[..., AsyncIterator[Any]] = claude_query):
        self._query = query_fn

    async def invoke(self, messages: list[ChatMessage], backend_model_id: str) -> str:
        prompt = render_claude_prompt(messages)
        options = ClaudeAgentOptions(model=backend_model_id, allowed_tools=[], max_turns=1)
        result = ""
        try:
            async for event in self._query(prompt=prompt, options=options):
                # Only the terminal result matters; intermediate events are dropped.
                text = getattr(event, "result", None)
                if text:
                    result = text
        except Exception as e:
            raise BackendInvocationError(self.provider.value, str(e) or type(e).__name__) from e
        return result


class OpenAIAdapter:
    """One fresh, unstored Responses API call per request."""

    provider = ProviderKind.OPENAI

    def __init__(self, client_factory: Callable[[], AsyncOpenAI] | None = None):
        self._client_factory = client_factory or client.openai

    async def invoke(self, messages: list[ChatMessage], backend_model_id: str) -> str:
        prompt = render_transcript_prompt(messages)
        try:
            response = await self._client_factory().responses.create(
                model=backend_model_id,
                input=prompt,
                store=False,
            )
        except Exception as e:
            raise BackendInvocationError(self.provider.value, str(e) or type(e).__name__) from e
        return getattr(response, "output_text", None) or ""


class EmbeddingAdapter:
    """The embedding pseudo-provider has no chat capability; chat replies are empty."""

    provider = ProviderKind.EMBEDDING

    async def invoke(self, messages: list[ChatMessage], backend_model_id: str) -> str:
        return ""


def default_adapters() -> dict[ProviderKind, Adapter]:
    return {
        ProviderKind.ANTHROPIC: ClaudeAdapter(),
        ProviderKind.OPENAI: OpenAIAdapter(),
        ProviderKind.EMBEDDING: EmbeddingAdapter(),
    }


def select_adapter(adapters: Mapping[ProviderKind, Adapter], provider: ProviderKind) -> Adapter:
    """Pure dispatch on provider kind; there is no fallback adapter."""
    try:
        return adapters[provider]
    except KeyError:
        raise RuntimeError(f"No adapter registered for provider '{provider.value}'") from None
