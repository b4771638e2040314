"""CHIP-8 emulator state structures."""

import enum
from typing import Optional

import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from chipeight.constants import (
    MEMORY_SIZE, NUM_KEYS, NUM_REGISTERS, PROGRAM_START, FONT_START, FONT_DATA,
    SCREEN_WIDTH, SCREEN_HEIGHT, STACK_SIZE,
)
from chipeight.entropy import ByteSource, PRNGByteSource


class ExecutionStatus(enum.Enum):
    """Outcome of a single execution step."""
    RUNNING = "running"
    AWAITING_KEY_INPUT = "awaiting_key_input"


@dataclass(frozen=True)
class StackState:
    """Stack state for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state.

    ``display`` is indexed ``[x, y]``. ``draw_flag`` reports a possible
    framebuffer change during the last step and ``awaiting_key`` reports a
    blocked FX0A. ``clip_sprites`` and ``random_source`` are static
    configuration, carried unchanged through every ``replace``.
    """
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.astype(PROGRAM_START, jnp.uint16))
    display: jnp.ndarray = field(default_factory=lambda: jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.bool_))
    stack: StackState = StackState()
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    draw_flag: jnp.ndarray = field(default_factory=lambda: jnp.ones((), dtype=jnp.bool_))
    awaiting_key: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.bool_))
    clip_sprites: bool = field(pytree_node=False, default=False)
    random_source: Optional[ByteSource] = field(pytree_node=False, default=None)


def create_state(random_source: Optional[ByteSource] = None, clip_sprites: bool = False) -> EmulatorState:
    """Create initial emulator state with font data loaded.

    Each state gets its own ``PRNGByteSource`` unless one is supplied.
    """
    if random_source is None:
        random_source = PRNGByteSource()
    state = EmulatorState(clip_sprites=clip_sprites, random_source=random_source)
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(FONT_DATA))
