"""Tests for the synthetic NDJSON streaming transform."""
import json
import re

import pytest

from ollama_gateway.streaming import (
    CHUNK_CHARS,
    final_chunk,
    iso_timestamp,
    ndjson_stream,
    split_fixed_width,
)

ISO_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def test_split_fixed_width():
    assert split_fixed_width("abcdefghijklmnopq", 5) == ["abcde", "fghij", "klmno", "pq"]
    assert split_fixed_width("") == []
    assert split_fixed_width("x" * CHUNK_CHARS) == ["x" * CHUNK_CHARS]


@pytest.mark.parametrize("text", ["", "a", "twelve chars", "thirteen char", "ü😀" * 20])
def test_split_reassembles(text):
    pieces = split_fixed_width(text)
    assert "".join(pieces) == text
    assert all(len(piece) == CHUNK_CHARS for piece in pieces[:-1])


def test_split_rejects_non_positive_width():
    with pytest.raises(ValueError):
        split_fixed_width("abc", 0)


def test_iso_timestamp_format():
    assert ISO_RE.match(iso_timestamp())


def test_final_chunk_shape():
    payload = final_chunk("m:latest", "full text").model_dump(exclude_none=True)
    assert payload["model"] == "m:latest"
    assert payload["message"] == {"role": "assistant", "content": "full text"}
    assert payload["done"] is True
    assert payload["done_reason"] == "stop"


async def _collect(stream):
    return [json.loads(line) async for line in stream]


@pytest.mark.asyncio
async def test_ndjson_stream_frames():
    text = "The answer is forty-two, obviously."
    frames = await _collect(ndjson_stream("claude-sonnet", text))

    body, terminal = frames[:-1], frames[-1]
    assert len(body) == 3
    assert all(frame["done"] is False for frame in body)
    assert all("done_reason" not in frame for frame in body)
    assert "".join(frame["message"]["content"] for frame in body) == text

    assert terminal["done"] is True
    assert terminal["done_reason"] == "stop"
    assert terminal["message"]["content"] == ""
    assert all(ISO_RE.match(frame["created_at"]) for frame in frames)


@pytest.mark.asyncio
async def test_ndjson_stream_empty_text_emits_only_terminal_frame():
    frames = await _collect(ndjson_stream("nomic-embed-text", ""))
    assert len(frames) == 1
    assert frames[0]["done"] is True


@pytest.mark.asyncio
async def test_ndjson_lines_are_newline_terminated():
    lines = [line async for line in ndjson_stream("m", "hello world, again")]
    assert all(line.endswith(b"\n") and line.count(b"\n") == 1 for line in lines)
