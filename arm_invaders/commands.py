"""
Command parsing for the ARM Invaders interpreter.

One parse step turns a raw input line into exactly one command object.
The set of command classes is closed: every line becomes one of

    Add | Sub | Mul | Mov | Rand          instructions (advance the turn counter)
    Save | Load | Script                  file commands
    Show | Help | Reset | Quit            session commands
    Blank | Unknown | Usage               nothing to run / report-only

Parsing never raises. A malformed operand produces a Usage command
carrying the usage hint for that keyword, so the interpreter can report
it without touching any state.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from .config import NUM_REGS, WORD_MASK


# ──────────────────────────────────────────────
# Command nodes
# ──────────────────────────────────────────────

class Command:
    """Base class for all parsed commands."""
    pass


class Instruction(Command, ABC):
    """A command that executes on the ALU and counts as one turn."""

    dest: int

    @abstractmethod
    def asm(self) -> str:
        """Assembly form used in the trace, e.g. ``ADD r1, r1, #5``."""


@dataclass(frozen=True)
class Add(Instruction):
    dest: int
    imm: int

    def asm(self) -> str:
        return f"ADD r{self.dest}, r{self.dest}, #{self.imm}"


@dataclass(frozen=True)
class Sub(Instruction):
    dest: int
    imm: int

    def asm(self) -> str:
        return f"SUB r{self.dest}, r{self.dest}, #{self.imm}"


@dataclass(frozen=True)
class Mul(Instruction):
    dest: int
    src: int

    def asm(self) -> str:
        return f"MUL r{self.dest}, r{self.dest}, r{self.src}"


@dataclass(frozen=True)
class Mov(Instruction):
    dest: int
    imm: int

    def asm(self) -> str:
        return f"MOV r{self.dest}, #{self.imm}"


@dataclass(frozen=True)
class Rand(Instruction):
    """RAND is sugar: pick a value in [lo, hi], then execute MOV."""
    dest: int
    lo: int
    hi: int

    def asm(self) -> str:
        return f"RAND r{self.dest}, #{self.lo}, #{self.hi}"


@dataclass(frozen=True)
class Save(Command):
    path: str


@dataclass(frozen=True)
class Load(Command):
    path: str


@dataclass(frozen=True)
class Script(Command):
    path: str


@dataclass(frozen=True)
class Show(Command):
    pass


@dataclass(frozen=True)
class Help(Command):
    pass


@dataclass(frozen=True)
class Reset(Command):
    pass


@dataclass(frozen=True)
class Quit(Command):
    pass


@dataclass(frozen=True)
class Blank(Command):
    """Empty or whitespace-only line."""
    pass


@dataclass(frozen=True)
class Unknown(Command):
    keyword: str


@dataclass(frozen=True)
class Usage(Command):
    """Known keyword with bad operands."""
    keyword: str
    hint: str


# ──────────────────────────────────────────────
# Usage hints
# ──────────────────────────────────────────────

USAGE = {
    'add':    "add x k",
    'sub':    "sub x k",
    'mul':    "mul x y",
    'mov':    "mov x k",
    'rand':   "rand x min max",
    'save':   "save file.txt",
    'load':   "load file.txt",
    'script': "script file.txt",
}

HELP_LINES = [
    ("add x k",       "r[x] = r[x] + k",        "add r2 10"),
    ("sub x k",       "r[x] = r[x] - k",        "sub 2 5"),
    ("mul x y",       "r[x] = r[x] * r[y]",     "mul r3 r1"),
    ("mov x k",       "r[x] = k",               "mov 7 0"),
    ("rand x a b",    "r[x] = random in [a,b]", "rand r0 0 500"),
    ("save file.txt", "save registers + flags", ""),
    ("load file.txt", "load registers + flags", ""),
    ("script file",   "run commands from file", ""),
    ("show/reset/help/quit/exit", "", ""),
]


# ──────────────────────────────────────────────
# Operand parsers
# ──────────────────────────────────────────────

def parse_reg(tok: Optional[str]) -> Optional[int]:
    """Parse a register reference: '3', 'r3' or 'R3'. None if invalid."""
    if not tok:
        return None
    if tok[0] in 'rR':
        tok = tok[1:]
    if not tok.isdigit() or not tok.isascii():
        return None
    idx = int(tok)
    if idx >= NUM_REGS:
        return None
    return idx


def parse_u32(tok: Optional[str]) -> Optional[int]:
    """Parse an unsigned 32-bit decimal immediate. None if invalid."""
    if not tok or not tok.isdigit() or not tok.isascii():
        return None
    val = int(tok)
    if val > WORD_MASK:
        return None
    return val


def tokenize(line: str) -> List[str]:
    """Split on whitespace; the keyword is lower-cased, operands are not."""
    tokens = line.split()
    if tokens:
        tokens[0] = tokens[0].lower()
    return tokens


# ──────────────────────────────────────────────
# Parser
# ──────────────────────────────────────────────

def _parse_reg_imm(cls, keyword, args):
    if len(args) == 2:
        dest, imm = parse_reg(args[0]), parse_u32(args[1])
        if dest is not None and imm is not None:
            return cls(dest, imm)
    return Usage(keyword, USAGE[keyword])


def _parse_mul(keyword, args):
    if len(args) == 2:
        dest, src = parse_reg(args[0]), parse_reg(args[1])
        if dest is not None and src is not None:
            return Mul(dest, src)
    return Usage(keyword, USAGE[keyword])


def _parse_rand(keyword, args):
    if len(args) == 3:
        dest, lo, hi = parse_reg(args[0]), parse_u32(args[1]), parse_u32(args[2])
        if dest is not None and lo is not None and hi is not None:
            return Rand(dest, lo, hi)
    return Usage(keyword, USAGE[keyword])


def _parse_path(cls, keyword, args):
    if len(args) == 1:
        return cls(args[0])
    return Usage(keyword, USAGE[keyword])


_PARSERS = {
    'add':    lambda kw, args: _parse_reg_imm(Add, kw, args),
    'sub':    lambda kw, args: _parse_reg_imm(Sub, kw, args),
    'mov':    lambda kw, args: _parse_reg_imm(Mov, kw, args),
    'mul':    _parse_mul,
    'rand':   _parse_rand,
    'save':   lambda kw, args: _parse_path(Save, kw, args),
    'load':   lambda kw, args: _parse_path(Load, kw, args),
    'script': lambda kw, args: _parse_path(Script, kw, args),
    'show':   lambda kw, args: Show(),
    'help':   lambda kw, args: Help(),
    'reset':  lambda kw, args: Reset(),
    'quit':   lambda kw, args: Quit(),
    'exit':   lambda kw, args: Quit(),
}


def parse_line(line: str) -> Command:
    """Parse one input line into a command object. Never raises."""
    tokens = tokenize(line)
    if not tokens:
        return Blank()
    keyword, args = tokens[0], tokens[1:]
    parser = _PARSERS.get(keyword)
    if parser is None:
        return Unknown(keyword)
    return parser(keyword, args)
