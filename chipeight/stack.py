"""CHIP-8 stack operations."""

from typing import Optional

import jax.numpy as jnp
from chipeight.constants import INDEX_MASK, STACK_SIZE
from chipeight.errors import StackOverflow, StackUnderflow
from chipeight.state import StackState


def push(stack: StackState, address: jnp.ndarray, pc: Optional[int] = None) -> StackState:
    """Push return address onto stack."""
    if int(stack.pointer) >= STACK_SIZE:
        raise StackOverflow(pc)
    new_data = stack.data.at[stack.pointer].set(jnp.astype(address & INDEX_MASK, jnp.uint16))
    return stack.replace(data=new_data, pointer=stack.pointer + 1)


def pop(stack: StackState, pc: Optional[int] = None) -> tuple[StackState, jnp.ndarray]:
    """Pop return address from stack."""
    if int(stack.pointer) <= 0:
        raise StackUnderflow(pc)
    new_pointer = stack.pointer - 1
    popped_address = stack.data[new_pointer]
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address
