"""CHIP-8 instruction decoding and disassembly."""

from chex import dataclass


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


def decode(instruction: int) -> DecodedInstruction:
    """Decode 16-bit instruction into components."""
    instruction = int(instruction) & 0xFFFF
    return DecodedInstruction(
        raw=instruction,
        opcode=(instruction & 0xF000) >> 12,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        nn=instruction & 0x00FF,
        nnn=instruction & 0x0FFF
    )


_ALU_MNEMONICS = {
    0x0: "LD", 0x1: "OR", 0x2: "AND", 0x3: "XOR", 0x4: "ADD",
    0x5: "SUB", 0x6: "SHR", 0x7: "SUBN", 0xE: "SHL",
}

_MISC_MNEMONICS = {
    0x07: "LD V{x:X}, DT",
    0x0A: "LD V{x:X}, K",
    0x15: "LD DT, V{x:X}",
    0x18: "LD ST, V{x:X}",
    0x1E: "ADD I, V{x:X}",
    0x29: "LD F, V{x:X}",
    0x33: "LD B, V{x:X}",
    0x55: "LD [I], V{x:X}",
    0x65: "LD V{x:X}, [I]",
}


def disassemble(instruction: int) -> str:
    """Render an instruction word as a CHIP-8 assembly mnemonic.

    Words that decode to no instruction render as ``??? $WORD``.
    """
    inst = decode(instruction)
    x, y = inst.x, inst.y

    if inst.raw == 0x00E0:
        return "CLS"
    if inst.raw == 0x00EE:
        return "RET"
    if inst.opcode == 0x1:
        return f"JP ${inst.nnn:03X}"
    if inst.opcode == 0x2:
        return f"CALL ${inst.nnn:03X}"
    if inst.opcode == 0x3:
        return f"SE V{x:X}, ${inst.nn:02X}"
    if inst.opcode == 0x4:
        return f"SNE V{x:X}, ${inst.nn:02X}"
    if inst.opcode == 0x5 and inst.n == 0:
        return f"SE V{x:X}, V{y:X}"
    if inst.opcode == 0x6:
        return f"LD V{x:X}, ${inst.nn:02X}"
    if inst.opcode == 0x7:
        return f"ADD V{x:X}, ${inst.nn:02X}"
    if inst.opcode == 0x8 and inst.n in _ALU_MNEMONICS:
        return f"{_ALU_MNEMONICS[inst.n]} V{x:X}, V{y:X}"
    if inst.opcode == 0x9 and inst.n == 0:
        return f"SNE V{x:X}, V{y:X}"
    if inst.opcode == 0xA:
        return f"LD I, ${inst.nnn:03X}"
    if inst.opcode == 0xB:
        return f"JP V0, ${inst.nnn:03X}"
    if inst.opcode == 0xC:
        return f"RND V{x:X}, ${inst.nn:02X}"
    if inst.opcode == 0xD:
        return f"DRW V{x:X}, V{y:X}, {inst.n}"
    if inst.opcode == 0xE and inst.nn == 0x9E:
        return f"SKP V{x:X}"
    if inst.opcode == 0xE and inst.nn == 0xA1:
        return f"SKNP V{x:X}"
    if inst.opcode == 0xF and inst.nn in _MISC_MNEMONICS:
        return _MISC_MNEMONICS[inst.nn].format(x=x)

    return f"??? ${inst.raw:04X}"
