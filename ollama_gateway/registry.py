"""Compiled-in model registry: public alias -> (provider kind, backend model id)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Iterator

VERSION_SUFFIX = ":latest"


class ProviderKind(str, Enum):
    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    EMBEDDING = "embedding"


@dataclass(frozen=True)
class RegistryEntry:
    alias: str
    provider: ProviderKind
    backend_model_id: str


class ModelRegistry:
    """Immutable alias table, built once and shared read-only by every request."""

    def __init__(self, entries: Iterable[RegistryEntry]):
        table: dict[str, RegistryEntry] = {}
        for entry in entries:
            if entry.alias in table:
                raise ValueError(f"Duplicate model alias: {entry.alias}")
            table[entry.alias] = entry
        self._table = MappingProxyType(table)

    def resolve(self, raw_name: str) -> RegistryEntry | None:
        """Strip one trailing ``:latest`` and look the name up exactly."""
        name = raw_name
        if name.endswith(VERSION_SUFFIX):
            name = name[: -len(VERSION_SUFFIX)]
        return self._table.get(name)

    def enumerate(self) -> list[RegistryEntry]:
        return list(self._table.values())

    def aliases(self) -> list[str]:
        return list(self._table)

    def __iter__(self) -> Iterator[RegistryEntry]:
        return iter(self._table.values())

    def __len__(self) -> int:
        return len(self._table)


def _entries(provider: ProviderKind, *pairs: tuple[str, str]) -> list[RegistryEntry]:
    return [RegistryEntry(alias, provider, model_id) for alias, model_id in pairs]


DEFAULT_REGISTRY = ModelRegistry(
    _entries(
        ProviderKind.ANTHROPIC,
        ("claude-sonnet", "claude-sonnet-4-5-20250929"),
        ("claude-opus", "claude-opus-4-5-20251101"),
        ("claude-haiku", "claude-haiku-4-5-20251001"),
    )
    # Required by the notes client for AI search.
    + _entries(ProviderKind.EMBEDDING, ("nomic-embed-text", "nomic-embed-text"))
    + _entries(
        ProviderKind.OPENAI,
        *[
            (name, name)
            for name in (
                "gpt-5.3-codex",
                "gpt-5.3-codex-spark",
                "gpt-5.2-codex",
                "gpt-5.2",
                "gpt-5.1-codex-max",
                "gpt-5.1-codex",
                "gpt-5.1",
                "gpt-5-codex",
                "gpt-5-codex-mini",
                "gpt-5",
                "o3",
                "o4-mini",
                "gpt-4.1",
                "gpt-4o",
                "gpt-4o-mini",
            )
        ],
    )
)
