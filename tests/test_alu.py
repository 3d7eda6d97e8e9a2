"""
ALU Tests for ARM Invaders.

Flag derivation for ADD, SUB, MUL (didactic) and MOV on 32-bit words,
plus the inclusive random range helper. Expected values are worked out
by hand from the two's complement definitions in alu.py.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import random

import pytest
from arm_invaders import alu
from arm_invaders.regs import CC_N, CC_Z, CC_C, CC_V

MAX = 0xFFFFFFFF
INT_MIN = 0x80000000   # -2^31 as a word
INT_MAX = 0x7FFFFFFF

# Boundary operands used in the property sweeps below
EDGES = [0, 1, 2, 100, 0x7FFFFFFE, INT_MAX, INT_MIN, 0x80000001, 0xFFFF, 0x10000,
         0xFFFFFFFE, MAX]


def _s32(x):
    return x - (1 << 32) if x & 0x80000000 else x


# ═══════════════════════════════════════════════
# ADD
# ═══════════════════════════════════════════════

class TestAdd:

    def test_simple(self):
        """100 + 5 → 105, no flags"""
        assert alu.add32(100, 5) == (105, 0)

    def test_unsigned_wrap(self):
        """0xFFFFFFFF + 1 → 0, Z=1 C=1 V=0"""
        assert alu.add32(MAX, 1) == (0, CC_Z | CC_C)

    def test_signed_overflow(self):
        """0x7FFFFFFF + 1 → 0x80000000, N=1 V=1 C=0"""
        assert alu.add32(INT_MAX, 1) == (INT_MIN, CC_N | CC_V)

    def test_negative_plus_negative_overflow(self):
        """0x80000000 + 0x80000000 → 0, Z=1 C=1 V=1"""
        assert alu.add32(INT_MIN, INT_MIN) == (0, CC_Z | CC_C | CC_V)

    def test_negative_result_without_overflow(self):
        """0xFFFFFFFE + 1 → 0xFFFFFFFF, N=1 only"""
        assert alu.add32(0xFFFFFFFE, 1) == (MAX, CC_N)

    def test_minus_one_plus_minus_one(self):
        """-1 + -1 → -2: carry out but no signed overflow"""
        assert alu.add32(MAX, MAX) == (0xFFFFFFFE, CC_N | CC_C)

    def test_zero_plus_zero(self):
        assert alu.add32(0, 0) == (0, CC_Z)

    def test_result_and_carry_properties(self):
        for a in EDGES:
            for b in EDGES:
                result, flags = alu.add32(a, b)
                assert result == (a + b) % (1 << 32)
                assert bool(flags & CC_C) == (a + b > MAX), (a, b)
                assert bool(flags & CC_Z) == (result == 0)
                assert bool(flags & CC_N) == bool(result >> 31)
                overflow = not -(1 << 31) <= _s32(a) + _s32(b) < (1 << 31)
                assert bool(flags & CC_V) == overflow, (a, b)


# ═══════════════════════════════════════════════
# SUB
# ═══════════════════════════════════════════════

class TestSub:

    def test_to_zero(self):
        """100 - 100 → 0, Z=1 C=1 (no borrow)"""
        assert alu.sub32(100, 100) == (0, CC_Z | CC_C)

    def test_borrow_clears_carry(self):
        """0 - 1 → 0xFFFFFFFF, N=1 C=0"""
        assert alu.sub32(0, 1) == (MAX, CC_N)

    def test_no_borrow_sets_carry(self):
        """5 - 3 → 2, C=1"""
        assert alu.sub32(5, 3) == (2, CC_C)

    def test_signed_overflow(self):
        """0x80000000 - 1 → 0x7FFFFFFF: INT_MIN - 1 overflows, C=1"""
        assert alu.sub32(INT_MIN, 1) == (INT_MAX, CC_C | CC_V)

    def test_positive_minus_negative_overflow(self):
        """0x7FFFFFFF - 0xFFFFFFFF (i.e. INT_MAX - (-1)) → 0x80000000, N=1 V=1, borrow"""
        assert alu.sub32(INT_MAX, MAX) == (INT_MIN, CC_N | CC_V)

    def test_carry_is_unsigned_compare(self):
        for a in EDGES:
            for b in EDGES:
                result, flags = alu.sub32(a, b)
                assert result == (a - b) % (1 << 32)
                assert bool(flags & CC_C) == (a >= b), (a, b)
                overflow = not -(1 << 31) <= _s32(a) - _s32(b) < (1 << 31)
                assert bool(flags & CC_V) == overflow, (a, b)


# ═══════════════════════════════════════════════
# MUL (didactic flags)
# ═══════════════════════════════════════════════

class TestMulDidactic:

    def test_small_product(self):
        """100 * 100 → 10000, no flags"""
        assert alu.mul32_didactic(100, 100) == (10000, 0)

    def test_by_zero(self):
        assert alu.mul32_didactic(0xDEADBEEF, 0) == (0, CC_Z)

    def test_high_bits_discarded_sets_carry(self):
        """0x10000 * 0x10000 → low word 0, C=1, V=1"""
        assert alu.mul32_didactic(0x10000, 0x10000) == (0, CC_Z | CC_C | CC_V)

    def test_minus_one_squared(self):
        """-1 * -1: unsigned product overflows (C=1) but signed result 1 fits (V=0)"""
        assert alu.mul32_didactic(MAX, MAX) == (1, CC_C)

    def test_minus_one_times_two(self):
        """0xFFFFFFFF * 2 → 0xFFFFFFFE, N=1 C=1, signed -2 fits so V=0"""
        assert alu.mul32_didactic(MAX, 2) == (0xFFFFFFFE, CC_N | CC_C)

    def test_signed_overflow_without_carry(self):
        """0x40000000 * 2 → 0x80000000: fits unsigned (C=0), 2^31 overflows int32 (V=1)"""
        assert alu.mul32_didactic(0x40000000, 2) == (INT_MIN, CC_N | CC_V)

    def test_int_min_times_minus_one(self):
        """INT_MIN * -1 = 2^31 does not fit int32"""
        result, flags = alu.mul32_didactic(INT_MIN, MAX)
        assert result == INT_MIN
        assert flags & CC_V
        assert flags & CC_C

    def test_carry_property(self):
        for a in EDGES:
            for b in EDGES:
                result, flags = alu.mul32_didactic(a, b)
                assert result == (a * b) & MAX
                assert bool(flags & CC_C) == (a * b > MAX), (a, b)
                signed = _s32(a) * _s32(b)
                assert bool(flags & CC_V) == (not -(1 << 31) <= signed < (1 << 31)), (a, b)


# ═══════════════════════════════════════════════
# MOV / helpers
# ═══════════════════════════════════════════════

class TestMov:

    def test_zero(self):
        assert alu.mov_imm(0) == (0, CC_Z)

    def test_negative(self):
        assert alu.mov_imm(INT_MIN) == (INT_MIN, CC_N)

    def test_never_carry_or_overflow(self):
        for k in EDGES:
            _, flags = alu.mov_imm(k)
            assert not flags & (CC_C | CC_V)

    def test_to_signed32(self):
        assert alu.to_signed32(MAX) == -1
        assert alu.to_signed32(INT_MIN) == -(1 << 31)
        assert alu.to_signed32(INT_MAX) == INT_MAX


class TestRandRange:

    def test_within_bounds(self):
        rng = random.Random(7)
        for _ in range(500):
            assert 10 <= alu.rand_range(10, 20, rng) <= 20

    def test_swapped_bounds(self):
        rng = random.Random(7)
        for _ in range(200):
            assert 10 <= alu.rand_range(20, 10, rng) <= 20

    def test_single_value(self):
        rng = random.Random(7)
        assert alu.rand_range(42, 42, rng) == 42

    def test_full_word_span(self):
        rng = random.Random(7)
        for _ in range(100):
            assert 0 <= alu.rand_range(0, MAX, rng) <= MAX

    def test_both_ends_reachable(self):
        rng = random.Random(3)
        seen = {alu.rand_range(0, 1, rng) for _ in range(200)}
        assert seen == {0, 1}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
