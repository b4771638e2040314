"""Main CHIP-8 emulator execution engine.

Every function here takes an ``EmulatorState`` and returns a new one; the
input state is never modified, so a raised error leaves the caller's state
exactly as it was.
"""

from typing import Union

import jax.numpy as jnp
from chipeight.state import EmulatorState, ExecutionStatus
from chipeight.decode import decode
from chipeight.constants import MAX_PROGRAM_SIZE, NUM_KEYS, PROGRAM_START
from chipeight.errors import InvalidKey, ProgramTooLarge
from chipeight.instructions.common import check_memory_range
from chipeight.instructions.system import execute_system_instruction
from chipeight.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset, execute_skip_if_key
)
from chipeight.instructions.alu import execute_alu_operation
from chipeight.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chipeight.instructions.display import execute_display
from chipeight.instructions.misc import execute_misc_instruction

# Indexed by the high nibble of the instruction word.
INSTRUCTION_TABLE = (
    execute_system_instruction,
    execute_jump,
    execute_call,
    execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate,
    execute_skip_if_equal_register,
    execute_set,
    execute_add,
    execute_alu_operation,
    execute_skip_if_not_equal_register,
    execute_set_index,
    execute_jump_with_offset,
    execute_random,
    execute_display,
    execute_skip_if_key,
    execute_misc_instruction,
)


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    Raises:
        InvalidInstruction: the word matches no known instruction
        MemoryFault, DisplayFault, StackError, InvalidKey: the instruction
            would leave the architectural limits
    """
    decoded_instruction = decode(instruction)
    return INSTRUCTION_TABLE[decoded_instruction.opcode](state, decoded_instruction)


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> int:
    """Pack two bytes into a 16-bit word."""
    return (int(high) << 8) | int(low)


def fetch(state: EmulatorState) -> int:
    """Fetch the big-endian instruction word at pc without advancing it."""
    pc = int(state.pc)
    check_memory_range(state, pc, 2)
    return _pack_u16(state.memory[pc], state.memory[pc + 1])


def step(state: EmulatorState) -> tuple[EmulatorState, ExecutionStatus]:
    """Run one fetch-decode-execute cycle.

    The redraw and key-wait flags are cleared first, so after the step they
    describe this instruction only.
    """
    state = state.replace(draw_flag=jnp.array(False), awaiting_key=jnp.array(False))
    state = execute(state, fetch(state))
    status = ExecutionStatus.AWAITING_KEY_INPUT if bool(state.awaiting_key) else ExecutionStatus.RUNNING
    return state, status


def load_program(state: EmulatorState, program: Union[bytes, bytearray, list]) -> EmulatorState:
    """Copy program bytes into CHIP-8 memory starting at 0x200."""
    rom_data = bytes(program)
    if len(rom_data) > MAX_PROGRAM_SIZE:
        raise ProgramTooLarge(len(rom_data), MAX_PROGRAM_SIZE)
    rom_array = jnp.array(list(rom_data), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(rom_data)].set(rom_array)
    return state.replace(memory=new_memory)


def advance_timers(state: EmulatorState) -> EmulatorState:
    """Decrement delay and sound timers by one, stopping at zero."""
    return state.replace(
        delay_timer=jnp.where(state.delay_timer > 0, state.delay_timer - 1, state.delay_timer),
        sound_timer=jnp.where(state.sound_timer > 0, state.sound_timer - 1, state.sound_timer),
    )


def _check_key(index: int) -> int:
    if not 0 <= int(index) < NUM_KEYS:
        raise InvalidKey(int(index))
    return int(index)


def press_key(state: EmulatorState, index: int) -> EmulatorState:
    """Mark key ``index`` (0-15) as held down."""
    return state.replace(keypad=state.keypad.at[_check_key(index)].set(True))


def release_key(state: EmulatorState, index: int) -> EmulatorState:
    """Mark key ``index`` (0-15) as released."""
    return state.replace(keypad=state.keypad.at[_check_key(index)].set(False))


def framebuffer(state: EmulatorState) -> jnp.ndarray:
    """Flat 2048-cell uint8 view of the display, cell ``y * 64 + x``."""
    return jnp.astype(state.display.T.reshape(-1), jnp.uint8)
