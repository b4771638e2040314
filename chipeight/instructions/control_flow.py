"""CHIP-8 control flow instructions."""

import jax.numpy as jnp
from chipeight.constants import NUM_KEYS
from chipeight.state import EmulatorState
from chipeight.decode import DecodedInstruction
from chipeight.errors import InvalidInstruction, InvalidKey
from chipeight.instructions.common import skip_if
from chipeight.stack import push


def execute_jump(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=jnp.astype(instruction.nnn, jnp.uint16))


def execute_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, state.pc + 2, int(state.pc)))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn, strict_low_nibble: bool = False):
    """Factory for skip instructions.

    With ``strict_low_nibble`` the last nibble must be zero (5XY0, 9XY0).
    """
    def skip_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        if strict_low_nibble and instruction.n != 0:
            raise InvalidInstruction(instruction.raw, int(state.pc))
        return skip_if(state, condition_fn(state, instruction))
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: state.V[inst.x] == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: state.V[inst.x] != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: state.V[inst.x] == state.V[inst.y],
    strict_low_nibble=True,
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: state.V[inst.x] != state.V[inst.y],
    strict_low_nibble=True,
)


def execute_jump_with_offset(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """BNNN - Jump to address NNN + V0."""
    jump_address = instruction.nnn + int(state.V[0])
    return state.replace(pc=jnp.astype(jump_address, jnp.uint16))


def execute_skip_if_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """EX9E/EXA1 - Skip if key pressed/not pressed."""
    if instruction.nn not in (0x9E, 0xA1):
        raise InvalidInstruction(instruction.raw, int(state.pc))

    key_index = int(state.V[instruction.x])
    if key_index >= NUM_KEYS:
        raise InvalidKey(key_index, int(state.pc))

    key_pressed = bool(state.keypad[key_index])
    is_not_instruction = (instruction.nn == 0xA1)
    return skip_if(state, key_pressed ^ is_not_instruction)
