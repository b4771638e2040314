"""CHIP-8 execution errors.

Every fault the engine can detect is raised as a subclass of ``Chip8Error``,
so a host can catch them all with a single except clause and decide whether
to halt, skip the instruction or reset::

    try:
        status = machine.step()
    except InvalidInstruction:
        machine.skip_instruction()
    except Chip8Error:
        machine.reset()

Hierarchy
---------
Chip8Error
├── InvalidInstruction - word matches no known instruction
├── MemoryFault - address outside the 4096 byte memory
├── DisplayFault - sprite pixel outside the 64x32 screen
├── StackError
│   ├── StackOverflow - more than 16 nested calls
│   └── StackUnderflow - return with an empty stack
├── ProgramTooLarge - program does not fit after the entry offset
└── InvalidKey - key index outside 0-15

Errors are raised before any new state is produced, so the state the caller
holds is never partially updated.
"""

from typing import Optional


def _format_pc(pc: Optional[int]) -> str:
    return "" if pc is None else f" at pc=0x{pc:03X}"


class Chip8Error(Exception):
    """Base exception for all CHIP-8 engine errors."""
    pass


class InvalidInstruction(Chip8Error):
    """Instruction word matches no known pattern.

    Attributes:
        instruction: The offending 16-bit word
        pc: Address the word was fetched from
    """

    def __init__(self, instruction: int, pc: int):
        self.instruction = instruction
        self.pc = pc
        super().__init__(f"invalid instruction 0x{instruction:04X}{_format_pc(pc)}")


class MemoryFault(Chip8Error):
    """Memory access outside the addressable range.

    Attributes:
        address: First out-of-range address touched
        pc: Address of the faulting instruction
    """

    def __init__(self, address: int, pc: Optional[int] = None):
        self.address = address
        self.pc = pc
        super().__init__(f"memory access out of range: 0x{address:04X}{_format_pc(pc)}")


class DisplayFault(Chip8Error):
    """Sprite pixel lands outside the framebuffer.

    Attributes:
        x: Destination column
        y: Destination row
        pc: Address of the faulting draw instruction
    """

    def __init__(self, x: int, y: int, pc: Optional[int] = None):
        self.x = x
        self.y = y
        self.pc = pc
        super().__init__(f"sprite pixel ({x}, {y}) outside the screen{_format_pc(pc)}")


class StackError(Chip8Error):
    """Base class for call stack faults."""

    def __init__(self, message: str, pc: Optional[int] = None):
        self.pc = pc
        super().__init__(f"{message}{_format_pc(pc)}")


class StackOverflow(StackError):
    """Subroutine call with all 16 stack slots in use."""

    def __init__(self, pc: Optional[int] = None):
        super().__init__("call stack overflow", pc)


class StackUnderflow(StackError):
    """Return with no matching call."""

    def __init__(self, pc: Optional[int] = None):
        super().__init__("return with empty call stack", pc)


class ProgramTooLarge(Chip8Error):
    """Program image does not fit between the entry offset and the end of memory.

    Attributes:
        size: Length of the rejected program in bytes
        capacity: Number of bytes available
    """

    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(f"program of {size} bytes exceeds the {capacity} bytes available")


class InvalidKey(Chip8Error):
    """Key index outside 0-15.

    Attributes:
        index: The rejected key index
        pc: Address of the instruction that used it, if any
    """

    def __init__(self, index: int, pc: Optional[int] = None):
        self.index = index
        self.pc = pc
        super().__init__(f"invalid key index {index}{_format_pc(pc)}")
