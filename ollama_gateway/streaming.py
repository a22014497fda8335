"""Synthetic NDJSON streaming over an already complete completion."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from datetime import datetime, timezone

from .models import ChatChunk, ChunkMessage

CHUNK_CHARS = 12
DONE_REASON = "stop"


def iso_timestamp(moment: datetime | None = None) -> str:
    """UTC timestamp with millisecond precision and a ``Z`` suffix."""
    ts = moment or datetime.now(timezone.utc)
    return ts.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def split_fixed_width(text: str, width: int = CHUNK_CHARS) -> list[str]:
    """Slice ``text`` into consecutive ``width``-character pieces (last may be shorter)."""
    if width <= 0:
        raise ValueError("width must be positive")
    return [text[i : i + width] for i in range(0, len(text), width)]


def content_chunk(model: str, content: str) -> ChatChunk:
    return ChatChunk(
        model=model,
        created_at=iso_timestamp(),
        message=ChunkMessage(content=content),
        done=False,
    )


def final_chunk(model: str, content: str = "") -> ChatChunk:
    return ChatChunk(
        model=model,
        created_at=iso_timestamp(),
        message=ChunkMessage(content=content),
        done=True,
        done_reason=DONE_REASON,
    )


def encode_line(chunk: ChatChunk) -> bytes:
    return (json.dumps(chunk.model_dump(exclude_none=True)) + "\n").encode("utf-8")


async def ndjson_stream(model: str, text: str, width: int = CHUNK_CHARS) -> AsyncIterator[bytes]:
    """Yield one encoded NDJSON line per frame.

    Timestamps are taken as each frame is produced. Exceptions raised while the
    body is being sent abort the response; the wire format has no error frame.
    """
    for piece in split_fixed_width(text, width):
        yield encode_line(content_chunk(model, piece))
    yield encode_line(final_chunk(model))
