"""CHIP-8 memory and register operations."""

import jax.numpy as jnp
from chipeight.state import EmulatorState
from chipeight.decode import DecodedInstruction
from chipeight.instructions.common import advance_pc


def execute_set(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """6XNN - Set VX = NN."""
    return advance_pc(state.replace(V=state.V.at[instruction.x].set(instruction.nn)))


def execute_add(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """7XNN - Add NN to VX, wrapping; VF is untouched."""
    total = (int(state.V[instruction.x]) + instruction.nn) & 0xFF
    return advance_pc(state.replace(V=state.V.at[instruction.x].set(total)))


def execute_set_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return advance_pc(state.replace(I=jnp.astype(instruction.nnn, jnp.uint16)))


def execute_random(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """CXNN - Set VX = random & NN."""
    random_value = state.random_source.next_byte() & 0xFF
    return advance_pc(state.replace(V=state.V.at[instruction.x].set(random_value & instruction.nn)))
