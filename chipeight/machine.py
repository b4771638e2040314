"""Host-facing CHIP-8 machine.

``Chip8`` wraps the functional engine in ``chipeight.emulator`` behind a
small mutable interface for hosts that own the display, keyboard, audio and
timing loop::

    machine = Chip8()
    machine.load(program)
    while running:
        for _ in range(instructions_per_frame):
            machine.step()
        machine.advance_timers()
        if machine.consume_redraw_flag():
            paint(machine.framebuffer())

Each method replaces the held state only once the engine returns
successfully, so a raised ``Chip8Error`` leaves the machine as it was.
"""

from typing import Optional, Union

import jax.numpy as jnp
from chipeight import emulator
from chipeight.constants import PROGRAM_START
from chipeight.entropy import ByteSource
from chipeight.errors import Chip8Error
from chipeight.logging import TraceLogger
from chipeight.state import EmulatorState, ExecutionStatus, create_state


class Chip8:
    """Single CHIP-8 machine instance.

    Args:
        random_source: Byte source for CXNN. Defaults to a fresh PRNG source
            per machine.
        clip_sprites: Drop sprite pixels outside the screen instead of
            raising DisplayFault.
        logger: Trace logger. Defaults to one at WARNING, which only reports
            faults.
    """

    def __init__(
        self,
        random_source: Optional[ByteSource] = None,
        clip_sprites: bool = False,
        logger: Optional[TraceLogger] = None,
    ):
        self.random_source = random_source
        self.clip_sprites = clip_sprites
        self.logger = logger or TraceLogger(log_level="WARNING")
        self._state = create_state(random_source, clip_sprites=clip_sprites)
        self._redraw = bool(self._state.draw_flag)

    @property
    def state(self) -> EmulatorState:
        """Current immutable emulator state."""
        return self._state

    @property
    def sound_active(self) -> bool:
        """Whether the sound timer is running."""
        return int(self._state.sound_timer) > 0

    def reset(self):
        """Return to the power-on state, dropping any loaded program."""
        self._state = create_state(self._state.random_source, clip_sprites=self.clip_sprites)
        self._redraw = True

    def load(self, program: Union[bytes, bytearray, list]):
        """Copy a program image into memory at the entry offset."""
        try:
            self._state = emulator.load_program(self._state, program)
        except Chip8Error as error:
            self.logger.log_fault(error)
            raise
        self.logger.log_load(len(program), PROGRAM_START)

    def step(self) -> ExecutionStatus:
        """Execute one instruction and report whether the machine is blocked on a key."""
        pc = int(self._state.pc)
        try:
            instruction = emulator.fetch(self._state)
            state, status = emulator.step(self._state)
        except Chip8Error as error:
            self.logger.log_fault(error)
            raise
        self._state = state
        self._redraw = bool(state.draw_flag)
        self.logger.log_instruction(pc, instruction, status.value)
        return status

    def skip_instruction(self):
        """Advance pc past the current instruction without executing it."""
        self._state = self._state.replace(pc=jnp.astype(self._state.pc + 2, jnp.uint16))

    def advance_timers(self):
        """Decrement the delay and sound timers once."""
        self._state = emulator.advance_timers(self._state)

    def set_key_pressed(self, index: int):
        """Mark key ``index`` (0-15) as held down."""
        self._state = emulator.press_key(self._state, index)

    def set_key_released(self, index: int):
        """Mark key ``index`` (0-15) as released."""
        self._state = emulator.release_key(self._state, index)

    def framebuffer(self) -> jnp.ndarray:
        """Immutable 2048-cell snapshot of the screen, cell ``y * 64 + x``."""
        return emulator.framebuffer(self._state)

    def consume_redraw_flag(self) -> bool:
        """Report whether the screen changed since the last call, then clear the report."""
        redraw = self._redraw
        self._redraw = False
        return redraw
