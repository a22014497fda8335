"""Deterministic hash-based pseudo-embeddings.

There is no embedding backend behind the gateway. Clients that insist on an
embedding model (AI search in the notes app) get a stable 768-dimensional
vector derived from a rolling 32-bit string hash, one hash per dimension.
Identical text always yields an identical vector; there is no semantic
similarity between vectors of related texts.
"""

from __future__ import annotations

import struct

EMBEDDING_DIM = 768

_MASK32 = 0xFFFFFFFF
_SCALE = 10000


def _to_int32(value: int) -> int:
    value &= _MASK32
    return value - 0x100000000 if value & 0x80000000 else value


def _code_units(text: str) -> list[int]:
    """UTF-16 code units, i.e. what ``String.charCodeAt`` sees; lone surrogates included."""
    data = text.encode("utf-16-le", "surrogatepass")
    return [unit for (unit,) in struct.iter_unpack("<H", data)]


def rolling_hash(text: str, seed: int = 0) -> int:
    """Reference form: ``h = int32((h << 5) - h + code + seed)`` for each code unit."""
    h = 0
    for code in _code_units(text):
        h = _to_int32((h << 5) - h + code + seed)
    return h


def _remainder(value: int, modulus: int) -> int:
    # Truncated remainder: result takes the sign of the dividend.
    result = abs(value) % modulus
    return -result if value < 0 else result


def synthesize(text: str, dim: int = EMBEDDING_DIM) -> list[float]:
    """Return the pseudo-embedding of ``text``.

    Every step of the rolling hash is a ring operation modulo 2**32, so for
    dimension ``i`` the final hash is ``base + i * weight`` where ``base`` is
    the unseeded hash and ``weight`` is ``sum(31**k for k < len(units))``.
    That makes the vector O(len(text) + dim) instead of O(len(text) * dim)
    while staying bit-identical to :func:`rolling_hash` per dimension.
    """
    base = 0
    weight = 0
    for code in _code_units(text):
        base = (base * 31 + code) & _MASK32
        weight = (weight * 31 + 1) & _MASK32

    vector = []
    for i in range(dim):
        h = _to_int32(base + i * weight)
        vector.append(_remainder(h, _SCALE) / _SCALE)
    return vector
