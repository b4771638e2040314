"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from chipeight.constants import ADDRESS_MASK, FLAG_REGISTER, FONT_GLYPH_SIZE, FONT_START, INDEX_MASK
from chipeight.state import EmulatorState
from chipeight.decode import DecodedInstruction
from chipeight.errors import InvalidInstruction
from chipeight.instructions.common import advance_pc, check_memory_range


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return advance_pc(state.replace(V=state.V.at[instruction.x].set(state.delay_timer)))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press (blocking).

    With no key down nothing changes except ``awaiting_key``, so the same
    instruction runs again on the next step.
    """
    if not bool(jnp.any(state.keypad)):
        return state.replace(awaiting_key=jnp.array(True))

    pressed_key = int(jnp.argmax(state.keypad))
    return advance_pc(state.replace(V=state.V.at[instruction.x].set(pressed_key)))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return advance_pc(state.replace(delay_timer=state.V[instruction.x]))


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return advance_pc(state.replace(sound_timer=state.V[instruction.x]))


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register.

    VF flags a result past 0xFFF; I itself is not masked to 12 bits.
    """
    total = int(state.I) + int(state.V[instruction.x])
    overflow_flag = int(total > ADDRESS_MASK)
    return advance_pc(state.replace(
        I=jnp.astype(total & INDEX_MASK, jnp.uint16),
        V=state.V.at[FLAG_REGISTER].set(overflow_flag)
    ))


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = int(state.V[instruction.x]) & 0xF
    font_address = FONT_START + digit * FONT_GLYPH_SIZE
    return advance_pc(state.replace(I=jnp.astype(font_address, jnp.uint16)))


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    start = int(state.I)
    check_memory_range(state, start, 3)

    digits = jnp.array([value // 100, (value // 10) % 10, value % 10], dtype=jnp.uint8)
    new_memory = state.memory.at[start:start + 3].set(digits)
    return advance_pc(state.replace(memory=new_memory))


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I, then I += X + 1."""
    count = instruction.x + 1
    start = int(state.I)
    check_memory_range(state, start, count)

    new_memory = state.memory.at[start:start + count].set(state.V[:count])
    return advance_pc(state.replace(
        memory=new_memory,
        I=jnp.astype((start + count) & INDEX_MASK, jnp.uint16)
    ))


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I, then I += X + 1."""
    count = instruction.x + 1
    start = int(state.I)
    check_memory_range(state, start, count)

    new_V = state.V.at[:count].set(state.memory[start:start + count])
    return advance_pc(state.replace(
        V=new_V,
        I=jnp.astype((start + count) & INDEX_MASK, jnp.uint16)
    ))


MISC_INSTRUCTIONS = {
    0x07: execute_get_delay_timer,
    0x0A: execute_wait_for_key,
    0x15: execute_set_delay_timer,
    0x18: execute_set_sound_timer,
    0x1E: execute_add_to_index,
    0x29: execute_font_character,
    0x33: execute_bcd_conversion,
    0x55: execute_store_registers,
    0x65: execute_load_registers,
}


def execute_misc_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch misc instructions on the low byte."""
    handler = MISC_INSTRUCTIONS.get(instruction.nn)
    if handler is None:
        raise InvalidInstruction(instruction.raw, int(state.pc))
    return handler(state, instruction)
