"""CHIP-8 emulator package."""

from chipeight.state import EmulatorState, ExecutionStatus, StackState, create_state
from chipeight.emulator import (
    execute, fetch, step, load_program, advance_timers, press_key, release_key, framebuffer
)
from chipeight.decode import DecodedInstruction, decode, disassemble
from chipeight.entropy import ByteSource, PRNGByteSource, SequenceByteSource
from chipeight.errors import (
    Chip8Error, InvalidInstruction, MemoryFault, DisplayFault, StackError,
    StackOverflow, StackUnderflow, ProgramTooLarge, InvalidKey,
)
from chipeight.machine import Chip8
from chipeight.constants import *

__all__ = [
    "Chip8",
    "EmulatorState",
    "ExecutionStatus",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "step",
    "load_program",
    "advance_timers",
    "press_key",
    "release_key",
    "framebuffer",
    "DecodedInstruction",
    "decode",
    "disassemble",
    "ByteSource",
    "PRNGByteSource",
    "SequenceByteSource",
    "Chip8Error",
    "InvalidInstruction",
    "MemoryFault",
    "DisplayFault",
    "StackError",
    "StackOverflow",
    "StackUnderflow",
    "ProgramTooLarge",
    "InvalidKey",
    "PROGRAM_START",
    "FONT_START",
    "MEMORY_SIZE",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
