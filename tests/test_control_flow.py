"""Tests for control flow instructions."""

import pytest
from chipeight import execute, press_key, InvalidInstruction, InvalidKey
from conftest import set_registers


class TestJump:
    """Test jump instructions."""

    def test_execute_jump(self, fresh_state):
        """1NNN - Jump to address."""
        state = execute(fresh_state, 0x1001)
        assert state.pc == 1

    def test_jump_to_max_address(self, fresh_state):
        """1NNN - Jump target uses all 12 bits."""
        state = execute(fresh_state, 0x1FFE)
        assert state.pc == 0xFFE


class TestSkipInstructions:
    """Test all skip instruction variants."""

    def test_skip_if_equal_immediate_true(self, fresh_state):
        """3XNN - Should skip when VX == NN."""
        state = set_registers(fresh_state, V5=0x05)
        initial_pc = state.pc

        state = execute(state, 0x3505)  # Skip if V5 == 0x05
        assert state.pc == initial_pc + 4

    def test_skip_if_equal_immediate_false(self, fresh_state):
        """3XNN - Should not skip when VX != NN."""
        state = set_registers(fresh_state, V5=0x05)
        initial_pc = state.pc

        state = execute(state, 0x3506)  # Skip if V5 == 0x06
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_immediate_true(self, fresh_state):
        """4XNN - Should skip when VX != NN."""
        state = set_registers(fresh_state, V3=0x10)
        initial_pc = state.pc

        state = execute(state, 0x4320)  # Skip if V3 != 0x20
        assert state.pc == initial_pc + 4

    def test_skip_if_not_equal_immediate_false(self, fresh_state):
        """4XNN - Should not skip when VX == NN."""
        state = set_registers(fresh_state, V3=0x20)
        initial_pc = state.pc

        state = execute(state, 0x4320)  # Skip if V3 != 0x20
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_register_true(self, fresh_state):
        """5XY0 - Should skip when VX == VY."""
        state = set_registers(fresh_state, V1=0x55, V2=0x55)
        initial_pc = state.pc

        state = execute(state, 0x5120)  # Skip if V1 == V2
        assert state.pc == initial_pc + 4

    def test_skip_if_equal_register_false(self, fresh_state):
        """5XY0 - Should not skip when VX != VY."""
        state = set_registers(fresh_state, V1=0x55, V2=0x44)
        initial_pc = state.pc

        state = execute(state, 0x5120)  # Skip if V1 == V2
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_register_true(self, fresh_state):
        """9XY0 - Should skip when VX != VY."""
        state = set_registers(fresh_state, V7=0xAA, V8=0xBB)
        initial_pc = state.pc

        state = execute(state, 0x9780)  # Skip if V7 != V8
        assert state.pc == initial_pc + 4

    def test_skip_if_not_equal_register_false(self, fresh_state):
        """9XY0 - Should not skip when VX == VY."""
        state = set_registers(fresh_state, V7=0xCC, V8=0xCC)
        initial_pc = state.pc

        state = execute(state, 0x9780)  # Skip if V7 != V8
        assert state.pc == initial_pc + 2

    @pytest.mark.parametrize("instruction", [0x5121, 0x512F, 0x9781, 0x978E])
    def test_register_skip_requires_zero_low_nibble(self, fresh_state, instruction):
        """5XYN/9XYN with N != 0 are not instructions."""
        with pytest.raises(InvalidInstruction):
            execute(fresh_state, instruction)

    def test_skip_with_zero_values(self, fresh_state):
        """Test skip instructions with zero values."""
        state = fresh_state
        initial_pc = state.pc

        state = execute(state, 0x3000)  # Skip if V0 == 0
        assert state.pc == initial_pc + 4

    def test_skip_boundary_values(self, fresh_state):
        """Test skip instructions with boundary values."""
        state = set_registers(fresh_state, V0=0xFF)
        initial_pc = state.pc

        state = execute(state, 0x30FF)  # Skip if V0 == 255
        assert state.pc == initial_pc + 4


class TestJumpWithOffset:
    """Test jump with V0 offset."""

    def test_jump_with_offset(self, fresh_state):
        """BNNN - Jump to NNN + V0."""
        state = execute(fresh_state, 0x6010)  # V0 = 0x10
        state = execute(state, 0xB250)  # Jump to 0x250 + V0
        assert state.pc == 0x260

    def test_jump_with_offset_ignores_other_registers(self, fresh_state):
        """BNNN - Only V0 is used as the offset."""
        state = set_registers(fresh_state, V0=0x10, V2=0x30)

        state = execute(state, 0xB250)

        assert state.pc == 0x260

    def test_jump_with_offset_past_memory(self, fresh_state):
        """BNNN - The target is not masked to 12 bits."""
        state = set_registers(fresh_state, V0=0xFF)

        state = execute(state, 0xBFFF)

        assert state.pc == 0x10FE


class TestKeySkips:
    """Test EX9E / EXA1."""

    def test_skip_if_key_pressed(self, fresh_state):
        """EX9E - Skip if key pressed."""
        state = set_registers(fresh_state, V0=5)
        state = press_key(state, 5)
        initial_pc = state.pc

        state = execute(state, 0xE09E)
        assert state.pc == initial_pc + 4

    def test_no_skip_if_key_not_pressed(self, fresh_state):
        """EX9E - No skip when the key is up."""
        state = set_registers(fresh_state, V0=5)
        initial_pc = state.pc

        state = execute(state, 0xE09E)
        assert state.pc == initial_pc + 2

    def test_skip_if_key_not_pressed(self, fresh_state):
        """EXA1 - Skip if key not pressed."""
        state = set_registers(fresh_state, V0=5)
        initial_pc = state.pc

        state = execute(state, 0xE0A1)
        assert state.pc == initial_pc + 4

    def test_no_skip_if_key_pressed(self, fresh_state):
        """EXA1 - No skip when the key is down."""
        state = set_registers(fresh_state, V0=5)
        state = press_key(state, 5)
        initial_pc = state.pc

        state = execute(state, 0xE0A1)
        assert state.pc == initial_pc + 2

    def test_other_key_does_not_count(self, fresh_state):
        """EX9E - Only the key named by VX matters."""
        state = set_registers(fresh_state, V3=0xA)
        state = press_key(state, 0xB)

        state = execute(state, 0xE39E)
        assert state.pc == 0x202

    def test_key_index_out_of_range(self, fresh_state):
        """EX9E - VX above 15 does not name a key."""
        state = set_registers(fresh_state, V0=0x10)

        with pytest.raises(InvalidKey) as excinfo:
            execute(state, 0xE09E)

        assert excinfo.value.index == 0x10
        assert excinfo.value.pc == 0x200

    def test_unknown_key_instruction(self, fresh_state):
        """EXNN other than 9E/A1 is invalid."""
        with pytest.raises(InvalidInstruction):
            execute(fresh_state, 0xE09F)
