"""Tests for the deterministic pseudo-embedding."""
import random
import string

import pytest

from ollama_gateway.embeddings import (
    EMBEDDING_DIM,
    _remainder,
    rolling_hash,
    synthesize,
)

SAMPLES = [
    "",
    "a",
    "abc",
    "The quick brown fox jumps over the lazy dog",
    "Ünïcödé and emoji 😀",
    "x" * 2000,
]


def _reference(text):
    """Straightforward per-dimension rolling hash."""
    return [_remainder(rolling_hash(text, i), 10000) / 10000 for i in range(EMBEDDING_DIM)]


@pytest.mark.parametrize("text", SAMPLES)
def test_matches_per_dimension_hash(text):
    assert synthesize(text) == _reference(text)


@pytest.mark.parametrize("text", SAMPLES)
def test_length_and_determinism(text):
    first = synthesize(text)
    assert len(first) == EMBEDDING_DIM
    assert synthesize(text) == first


def test_empty_text_is_all_zero():
    assert synthesize("") == [0.0] * EMBEDDING_DIM


def test_known_values():
    # "abc" hashes like Java's String.hashCode: 96354.
    vector = synthesize("abc")
    assert vector[0] == 0.6354
    # Seed 1 adds 1 + 31 + 961 on top.
    assert vector[1] == 0.7347

    single = synthesize("a")
    assert single[0] == 0.0097
    assert single[5] == 0.0102


def test_uses_utf16_code_units():
    # U+1F600 is the surrogate pair D83D DE00.
    assert synthesize("😀")[0] == 0.2899


def test_negative_hashes_keep_their_sign():
    assert _remainder(-12345, 10000) == -2345
    assert _remainder(12345, 10000) == 2345
    vector = synthesize("The quick brown fox jumps over the lazy dog")
    assert any(value < 0 for value in vector)
    assert all(-1 < value < 1 for value in vector)


def test_distinct_texts_give_distinct_vectors():
    rng = random.Random(1234)
    texts = {
        "".join(rng.choice(string.printable) for _ in range(rng.randint(1, 40)))
        for _ in range(200)
    }
    vectors = {tuple(synthesize(text)) for text in texts}
    assert len(vectors) == len(texts)


def test_lone_surrogate_is_hashed_as_code_unit():
    vector = synthesize("\ud83d")
    assert len(vector) == EMBEDDING_DIM
    # 0xD83D == 55357
    assert vector[0] == 0.5357
    assert vector == _reference("\ud83d")
