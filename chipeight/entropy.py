"""Random byte sources for the CXNN instruction."""

from typing import Iterable, Optional, Protocol, runtime_checkable

import jax
import jax.numpy as jnp


@runtime_checkable
class ByteSource(Protocol):
    """Anything that can produce a fresh random byte."""

    def next_byte(self) -> int:
        ...


class PRNGByteSource:
    """Byte source backed by a JAX PRNG key, split on every draw."""

    def __init__(self, rng: Optional[jax.random.PRNGKey] = None, seed: int = 0):
        self.rng = jax.random.PRNGKey(seed) if rng is None else rng

    def next_byte(self) -> int:
        self.rng, subkey = jax.random.split(self.rng)
        value = jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32)
        return int(value)


class SequenceByteSource:
    """Replays a fixed sequence of bytes, cycling when exhausted."""

    def __init__(self, values: Iterable[int]):
        self.values = tuple(int(value) for value in values)
        if not self.values:
            raise ValueError("SequenceByteSource needs at least one value")
        if any(not 0 <= value <= 0xFF for value in self.values):
            raise ValueError(f"Byte values must be in 0-255, got {list(self.values)}")
        self.position = 0

    def next_byte(self) -> int:
        value = self.values[self.position]
        self.position = (self.position + 1) % len(self.values)
        return value
