"""CHIP-8 display operations."""

import jax.numpy as jnp
from chipeight.constants import FLAG_REGISTER, SCREEN_WIDTH, SCREEN_HEIGHT, SPRITE_WIDTH
from chipeight.state import EmulatorState
from chipeight.decode import DecodedInstruction
from chipeight.errors import DisplayFault
from chipeight.instructions.common import advance_pc, check_memory_range

# Pre-computed coordinate grids for display operations
xx, yy = jnp.meshgrid(jnp.arange(SCREEN_WIDTH), jnp.arange(SCREEN_HEIGHT), indexing='ij')
sprite_cols = jnp.arange(SPRITE_WIDTH)


def sprite_mask(state: EmulatorState, sprite_x: int, sprite_y: int, height: int) -> jnp.ndarray:
    """Boolean (SCREEN_WIDTH, SCREEN_HEIGHT) mask of the pixels a sprite sets.

    Coordinates do not wrap. Pixels past the right or bottom edge raise
    DisplayFault, or are dropped when the state clips sprites.
    """
    start = int(state.I)
    check_memory_range(state, start, height)
    if height == 0:
        return jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.bool_)

    sprite_bytes = state.memory[start:start + height]
    bits = (sprite_bytes[:, None] >> (7 - sprite_cols[None, :])) & 1  # (height, 8), MSB first
    rows = jnp.arange(height)[:, None]
    outside = (bits == 1) & (
        (sprite_x + sprite_cols[None, :] >= SCREEN_WIDTH) | (sprite_y + rows >= SCREEN_HEIGHT)
    )
    if bool(jnp.any(outside)) and not state.clip_sprites:
        row, col = (int(v) for v in jnp.argwhere(outside)[0])
        raise DisplayFault(sprite_x + col, sprite_y + row, int(state.pc))

    in_screen = (xx >= sprite_x) & (xx < sprite_x + SPRITE_WIDTH) & (yy >= sprite_y) & (yy < sprite_y + height)

    row_offset = jnp.clip(yy - sprite_y, 0, height - 1)
    col_offset = jnp.clip(xx - sprite_x, 0, SPRITE_WIDTH - 1)
    sprite = (sprite_bytes[row_offset] >> (7 - col_offset)) & 1
    return (sprite == 1) & in_screen


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N."""
    sprite_x = int(state.V[instruction.x])
    sprite_y = int(state.V[instruction.y])
    sprite = sprite_mask(state, sprite_x, sprite_y, instruction.n)

    collision = bool(jnp.any(state.display & sprite))
    return advance_pc(state.replace(
        display=state.display ^ sprite,
        V=state.V.at[FLAG_REGISTER].set(int(collision)),
        draw_flag=jnp.array(True),
    ))
