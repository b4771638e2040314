"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chipeight import Chip8, create_state
from chipeight.entropy import SequenceByteSource


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state(SequenceByteSource([0xA5, 0x3C, 0xFF, 0x00]))


@pytest.fixture
def clipping_state():
    """Provide a fresh state that clips off-screen sprite pixels."""
    return create_state(SequenceByteSource([0xA5]), clip_sprites=True)


@pytest.fixture
def machine():
    """Provide a machine with a deterministic random source."""
    return Chip8(random_source=SequenceByteSource([0x5A, 0xC3]))


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def set_registers(state, **registers):
    """Helper to set registers by name, e.g. set_registers(state, V1=0x10, VF=1)."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


def program_bytes(*words):
    """Encode instruction words as a big-endian program image."""
    return b"".join(word.to_bytes(2, "big") for word in words)
