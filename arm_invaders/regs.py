"""
ARM Invaders — Register Bank + NZCV Flag Management

Register model:
  r0..r7 — 32-bit unsigned general purpose registers (wrap modulo 2^32)
  CC     — 4-bit condition code nibble: N Z C V
           bit 3: N (Negative — bit 31 of result)
           bit 2: Z (Zero — result is zero)
           bit 1: C (Carry — unsigned carry out / no-borrow on SUB)
           bit 0: V (Overflow — signed overflow)
  turns  — executed instruction counter (in-memory only, never saved)

The bank only stores state. Flag values come from the pure functions in
alu.py; the interpreter writes them here with set_NZCV().
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from .config import NUM_REGS, RESET_VALUE, WORD_MASK

# CCR bit masks
CC_N = 0x08
CC_Z = 0x04
CC_C = 0x02
CC_V = 0x01

FLAG_NAMES = ('N', 'Z', 'C', 'V')

FLAG_MASKS = {
    'N': CC_N,
    'Z': CC_Z,
    'C': CC_C,
    'V': CC_V,
}


@dataclass(frozen=True)
class BankSnapshot:
    """Read-only copy of the bank handed to the display layer."""
    registers: Tuple[int, ...]
    flags: Dict[str, int]
    turns: int


class RegisterBank:
    """Eight 32-bit registers, the NZCV nibble and the turn counter."""

    __slots__ = ('_r', 'CC', 'turns')

    def __init__(self):
        self._r = [RESET_VALUE] * NUM_REGS
        self.CC: int = 0
        self.turns: int = 0

    # --- Registers ---

    def __getitem__(self, index: int) -> int:
        return self._r[index]

    def __setitem__(self, index: int, value: int):
        if not 0 <= index < NUM_REGS:
            raise IndexError(f"register r{index} out of range (r0..r{NUM_REGS - 1})")
        self._r[index] = value & WORD_MASK

    @property
    def registers(self) -> Tuple[int, ...]:
        return tuple(self._r)

    # --- CCR flag access ---

    def set_NZCV(self, flags: int):
        """Replace all four flags. Every instruction defines all of them."""
        self.CC = flags & 0x0F

    def get_flag(self, name: str) -> int:
        """Return one flag as 0/1 by letter ('N', 'Z', 'C' or 'V')."""
        return 1 if self.CC & FLAG_MASKS[name] else 0

    def set_flag(self, name: str, value: int):
        """Set one flag by letter. Any non-zero value counts as set."""
        mask = FLAG_MASKS[name]
        if value:
            self.CC |= mask
        else:
            self.CC &= ~mask & 0x0F

    @property
    def negative(self) -> bool:
        return bool(self.CC & CC_N)

    @property
    def zero(self) -> bool:
        return bool(self.CC & CC_Z)

    @property
    def carry(self) -> bool:
        return bool(self.CC & CC_C)

    @property
    def overflow(self) -> bool:
        return bool(self.CC & CC_V)

    def flags(self) -> Dict[str, int]:
        return {name: self.get_flag(name) for name in FLAG_NAMES}

    # --- Snapshot / display ---

    def snapshot(self) -> BankSnapshot:
        return BankSnapshot(registers=self.registers, flags=self.flags(),
                            turns=self.turns)

    def display(self) -> str:
        """One-line state dump for logs and debugging."""
        regs = " ".join(f"r{i}={v}" for i, v in enumerate(self._r))
        ccr = ''.join(c if self.get_flag(c) else '.' for c in FLAG_NAMES)
        return f"{regs} [{ccr}] turns={self.turns}"

    def reset(self):
        """All registers back to RESET_VALUE, flags clear, turn counter zero."""
        self._r = [RESET_VALUE] * NUM_REGS
        self.CC = 0
        self.turns = 0
