"""Helpers shared by the instruction handlers."""

import jax.numpy as jnp
from chipeight.constants import MEMORY_SIZE
from chipeight.errors import MemoryFault
from chipeight.state import EmulatorState


def advance_pc(state: EmulatorState, amount: int = 2) -> EmulatorState:
    """Move to the next instruction, or skip one when amount is 4."""
    return state.replace(pc=jnp.astype(state.pc + amount, jnp.uint16))


def skip_if(state: EmulatorState, condition) -> EmulatorState:
    """Advance by 4 when condition holds, otherwise by 2."""
    return advance_pc(state, 4 if bool(condition) else 2)


def check_memory_range(state: EmulatorState, start, length: int) -> None:
    """Raise MemoryFault unless memory[start:start + length] is addressable."""
    start = int(start)
    if length <= 0:
        return
    if start >= MEMORY_SIZE:
        raise MemoryFault(start, int(state.pc))
    if start + length > MEMORY_SIZE:
        raise MemoryFault(MEMORY_SIZE, int(state.pc))
