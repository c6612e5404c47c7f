from __future__ import annotations

import os
from collections.abc import Hashable
from dataclasses import dataclass, field
from hashlib import blake2b
from typing import Protocol, runtime_checkable

DIGEST_BITS = 64
DIGEST_MASK = (1 << DIGEST_BITS) - 1
SEED_SIZE = 16


@runtime_checkable
class HashProvider(Protocol):
    """Maps a hashable value to an unsigned 64-bit digest.

    A provider must return the same digest for equal inputs for as long as it lives. Two providers are free to
    disagree with each other.
    """

    def digest(self, value: Hashable) -> int: ...


def digest_to_index(digest: int, size: int) -> int:
    return digest % size


@dataclass(frozen=True)
class BuiltinHashProvider:
    def digest(self, value: Hashable) -> int:
        return hash(value) & DIGEST_MASK


@dataclass(frozen=True)
class RandomStateHashProvider:
    seed: bytes = field(default_factory=lambda: os.urandom(SEED_SIZE), repr=False)

    def __post_init__(self) -> None:
        if len(self.seed) > blake2b.MAX_KEY_SIZE:
            raise ValueError(f"seed is limited to {blake2b.MAX_KEY_SIZE} bytes")

    @classmethod
    def from_seed(cls, seed: bytes | str) -> RandomStateHashProvider:
        if isinstance(seed, str):
            seed = seed.encode()
        return cls(blake2b(seed, digest_size=SEED_SIZE).digest())

    def digest(self, value: Hashable) -> int:
        hasher = blake2b(key=self.seed, digest_size=DIGEST_BITS // 8)
        hasher.update((hash(value) & DIGEST_MASK).to_bytes(DIGEST_BITS // 8, "little"))
        return int.from_bytes(hasher.digest(), "little")
