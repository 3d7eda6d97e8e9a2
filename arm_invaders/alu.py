"""
ARM Invaders — ALU Operations

Every function is pure and returns a tuple: (result_word, ccr_flag_bits).
The interpreter writes the result to the destination register and the
flag bits to the bank; nothing here touches state.

Flag formulas (32-bit, two's complement):
  add: C = unsigned sum does not fit in 32 bits
       V = (A31 & B31 & ~R31) | (~A31 & ~B31 & R31)  (same sign in, other sign out)
  sub: C = a >= b  (carry set means NO borrow, ARM convention)
       V = (A31 ^ B31) & (A31 ^ R31)                  (signs differ, result took b's sign)
  mul: didactic rule, NOT ARM's MUL behavior:
       C = full unsigned product does not fit in 32 bits
       V = full signed product does not fit in int32
  mov: N, Z from the value; C = V = 0
"""

from .config import INT32_MAX, INT32_MIN, SIGN_BIT, WORD_MASK
from .regs import CC_C, CC_N, CC_V, CC_Z


def to_signed32(val: int) -> int:
    """Reinterpret a 32-bit word as a signed Python int."""
    val &= WORD_MASK
    if val & SIGN_BIT:
        return val - (1 << 32)
    return val


def flags_nz32(val: int) -> int:
    """N and Z flags for a 32-bit value."""
    flags = 0
    if val & SIGN_BIT:
        flags |= CC_N
    if not (val & WORD_MASK):
        flags |= CC_Z
    return flags


def add32(a: int, b: int) -> tuple:
    """Add two 32-bit values. Sets N, Z, C, V."""
    wide = a + b
    result = wide & WORD_MASK
    flags = flags_nz32(result)
    if wide > WORD_MASK:
        flags |= CC_C
    if (a & b & ~result | ~a & ~b & result) & SIGN_BIT:
        flags |= CC_V
    return (result, flags)


def sub32(a: int, b: int) -> tuple:
    """Subtract b from a. Sets N, Z, C (no-borrow), V."""
    result = (a - b) & WORD_MASK
    flags = flags_nz32(result)
    if a >= b:
        flags |= CC_C
    if (a ^ b) & (a ^ result) & SIGN_BIT:
        flags |= CC_V
    return (result, flags)


def mul32_didactic(a: int, b: int) -> tuple:
    """Multiply, keeping the low 32 bits. C/V follow the teaching rule above."""
    wide = a * b
    result = wide & WORD_MASK
    flags = flags_nz32(result)
    if wide > WORD_MASK:
        flags |= CC_C
    signed_wide = to_signed32(a) * to_signed32(b)
    if not INT32_MIN <= signed_wide <= INT32_MAX:
        flags |= CC_V
    return (result, flags)


def mov_imm(k: int) -> tuple:
    """Load an immediate. Sets N, Z; clears C and V."""
    result = k & WORD_MASK
    return (result, flags_nz32(result))


def rand_range(a: int, b: int, rng) -> int:
    """Uniform integer from the closed range spanned by a and b.

    Bounds may come in either order. rng is any object with a
    random.Random-style randint(lo, hi) (inclusive on both ends).
    """
    if a > b:
        a, b = b, a
    return rng.randint(a, b)
