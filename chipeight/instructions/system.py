"""CHIP-8 system instructions (0x0xxx)."""

import jax.numpy as jnp
from chipeight.state import EmulatorState
from chipeight.decode import DecodedInstruction
from chipeight.errors import InvalidInstruction
from chipeight.instructions.common import advance_pc
from chipeight.stack import pop


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    state = state.replace(display=jnp.zeros_like(state.display), draw_flag=jnp.array(True))
    return advance_pc(state)


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine.

    The popped address already points past the call, so pc is not advanced.
    """
    stack, address = pop(state.stack, int(state.pc))
    return state.replace(stack=stack, pc=address)


def execute_system_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch system instructions."""
    if instruction.raw == 0x00E0:
        return execute_clear_screen(state, instruction)
    if instruction.raw == 0x00EE:
        return execute_return(state, instruction)
    raise InvalidInstruction(instruction.raw, int(state.pc))
