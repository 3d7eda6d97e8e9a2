"""
ARM Invaders — Command Interpreter

Owns one RegisterBank and one random source, and turns input lines into
state changes:

  1. Parse the line into a command object (commands.parse_line)
  2. Look up the handler for the command's class in the dispatch table
  3. Instructions: run the ALU function, write result + NZCV, count a turn
  4. Return a CommandResult describing what happened

Session states:
  AWAITING_COMMAND — normal operation
  TERMINATED       — after quit/exit; further lines are ignored

Nothing here raises for bad input or bad files. Usage errors, I/O failures
and unknown keywords all come back as a CommandResult with the matching
Outcome and a message for the user.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set, Tuple

from . import alu
from .commands import (
    Add, Blank, Command, Help, Instruction, Load, Mov, Mul, Quit, Rand,
    Reset, Save, Script, Show, Sub, Unknown, Usage, parse_line,
)
from .config import MAX_SCRIPT_DEPTH
from .regs import BankSnapshot, RegisterBank
from .script import run_script
from .state_io import load_state, save_state

log = logging.getLogger(__name__)


class Outcome(Enum):
    OK = 'OK'
    NOOP = 'NOOP'            # blank line
    USAGE = 'USAGE'          # known keyword, bad operands
    IO_ERROR = 'IO_ERROR'    # save/load/script path problem
    UNKNOWN = 'UNKNOWN'      # unrecognized keyword
    QUIT = 'QUIT'


class SessionState(Enum):
    AWAITING_COMMAND = 'AWAITING_COMMAND'
    TERMINATED = 'TERMINATED'


@dataclass
class CommandResult:
    outcome: Outcome
    messages: List[str] = field(default_factory=list)
    render: bool = False                 # display should redraw the HUD
    show_help: bool = False              # display should list the commands
    trace: List[str] = field(default_factory=list)   # executed instructions
    zeroed: Tuple[int, ...] = ()         # registers that hit zero this line

    @property
    def ok(self) -> bool:
        return self.outcome in (Outcome.OK, Outcome.NOOP, Outcome.QUIT)


class Interpreter:
    """Interactive/scripted command session over one register bank.

    Usage:
        interp = Interpreter(rng=random.Random(1234))
        result = interp.execute_line("sub r0 100")
        interp.regs[0]          # 0
        interp.was_zeroed(0)    # True
        interp.snapshot()       # BankSnapshot for the display
    """

    def __init__(self, bank: Optional[RegisterBank] = None, rng=None):
        self.regs = bank if bank is not None else RegisterBank()
        self.rng = rng if rng is not None else random.Random()
        self.state = SessionState.AWAITING_COMMAND

        # Per top-level line: zeroing events + executed instruction trace
        self._zeroed: Set[int] = set()
        self._trace: List[str] = []

        self._script_depth = 0
        self._dispatch = self._build_dispatch()

    # ══════════════════════════════════════════════
    # Public API
    # ══════════════════════════════════════════════

    @property
    def running(self) -> bool:
        return self.state is SessionState.AWAITING_COMMAND

    def execute_line(self, line: str) -> CommandResult:
        """Parse and execute one line of user input."""
        return self.execute(parse_line(line))

    def execute(self, cmd: Command) -> CommandResult:
        """Execute an already-parsed command as a top-level step.

        The zeroed-register signal and the instruction trace cover
        exactly this step (including any script it replays).
        """
        if not self.running:
            return CommandResult(Outcome.QUIT)
        self._zeroed.clear()
        self._trace = []
        result = self._run(cmd)
        result.trace = list(self._trace)
        result.zeroed = tuple(sorted(self._zeroed))
        return result

    def was_zeroed(self, index: int) -> bool:
        """True if register index was driven to zero by the last top-level step."""
        return index in self._zeroed

    def snapshot(self) -> BankSnapshot:
        return self.regs.snapshot()

    # ══════════════════════════════════════════════
    # Dispatch
    # ══════════════════════════════════════════════

    def _build_dispatch(self) -> dict:
        return {
            # ── Instructions ──
            Add:     self._op_add,
            Sub:     self._op_sub,
            Mul:     self._op_mul,
            Mov:     self._op_mov,
            Rand:    self._op_rand,

            # ── Files ──
            Save:    self._op_save,
            Load:    self._op_load,
            Script:  self._op_script,

            # ── Session ──
            Show:    self._op_show,
            Help:    self._op_help,
            Reset:   self._op_reset,
            Quit:    self._op_quit,

            # ── Report only ──
            Blank:   self._op_blank,
            Unknown: self._op_unknown,
            Usage:   self._op_usage,
        }

    def _run(self, cmd: Command) -> CommandResult:
        return self._dispatch[type(cmd)](cmd)

    # ── Instruction handlers ──

    def _commit(self, cmd: Instruction, result: int, flags: int,
                asm: Optional[str] = None) -> CommandResult:
        """Write an ALU result back and count the turn."""
        self.regs[cmd.dest] = result
        self.regs.set_NZCV(flags)
        self.regs.turns += 1
        asm = asm or cmd.asm()
        self._trace.append(asm)
        if result == 0:
            self._zeroed.add(cmd.dest)
        log.debug("%s -> %s", asm, self.regs.display())
        return CommandResult(Outcome.OK, render=True)

    def _op_add(self, cmd: Add) -> CommandResult:
        result, flags = alu.add32(self.regs[cmd.dest], cmd.imm)
        return self._commit(cmd, result, flags)

    def _op_sub(self, cmd: Sub) -> CommandResult:
        result, flags = alu.sub32(self.regs[cmd.dest], cmd.imm)
        return self._commit(cmd, result, flags)

    def _op_mul(self, cmd: Mul) -> CommandResult:
        result, flags = alu.mul32_didactic(self.regs[cmd.dest], self.regs[cmd.src])
        return self._commit(cmd, result, flags)

    def _op_mov(self, cmd: Mov) -> CommandResult:
        result, flags = alu.mov_imm(cmd.imm)
        return self._commit(cmd, result, flags)

    def _op_rand(self, cmd: Rand) -> CommandResult:
        value = alu.rand_range(cmd.lo, cmd.hi, self.rng)
        result, flags = alu.mov_imm(value)
        return self._commit(cmd, result, flags, asm=f"MOV r{cmd.dest}, #{value}")

    # ── File handlers ──

    def _op_save(self, cmd: Save) -> CommandResult:
        res = save_state(self.regs, cmd.path)
        if not res.ok:
            return CommandResult(Outcome.IO_ERROR,
                                 [f"Save failed ({res.error}). Usage: save file.txt"])
        return CommandResult(Outcome.OK, [f"State saved to '{cmd.path}'."])

    def _op_load(self, cmd: Load) -> CommandResult:
        res = load_state(self.regs, cmd.path)
        if not res.ok:
            return CommandResult(Outcome.IO_ERROR,
                                 [f"Load failed ({res.error}). Usage: load file.txt"])
        return CommandResult(Outcome.OK, [f"State loaded from '{cmd.path}'."],
                             render=True)

    def _op_script(self, cmd: Script) -> CommandResult:
        if self._script_depth >= MAX_SCRIPT_DEPTH:
            log.info("script %s not run: nesting limit %d reached",
                     cmd.path, MAX_SCRIPT_DEPTH)
            return CommandResult(Outcome.IO_ERROR, [
                f"Script '{cmd.path}' not run: scripts nested more than "
                f"{MAX_SCRIPT_DEPTH} deep."])

        messages: List[str] = []

        def execute(line: str) -> bool:
            command = parse_line(line)
            if isinstance(command, Quit):
                # quit/exit only ends an interactive session
                log.info("ignoring '%s' in script %s", line.strip(), cmd.path)
                return True
            messages.extend(self._run(command).messages)
            return True

        self._script_depth += 1
        try:
            res = run_script(cmd.path, execute)
        finally:
            self._script_depth -= 1

        if not res.ok:
            return CommandResult(Outcome.IO_ERROR,
                                 [f"Script failed ({res.error}). Usage: script file.txt"])
        return CommandResult(Outcome.OK, messages, render=True)

    # ── Session handlers ──

    def _op_show(self, cmd: Show) -> CommandResult:
        return CommandResult(Outcome.OK, render=True, show_help=True)

    def _op_help(self, cmd: Help) -> CommandResult:
        return CommandResult(Outcome.OK, render=True, show_help=True)

    def _op_reset(self, cmd: Reset) -> CommandResult:
        self.regs.reset()
        log.info("register bank reset")
        return CommandResult(Outcome.OK, render=True)

    def _op_quit(self, cmd: Quit) -> CommandResult:
        self.state = SessionState.TERMINATED
        return CommandResult(Outcome.QUIT)

    # ── Report-only handlers ──

    def _op_blank(self, cmd: Blank) -> CommandResult:
        return CommandResult(Outcome.NOOP)

    def _op_unknown(self, cmd: Unknown) -> CommandResult:
        return CommandResult(Outcome.UNKNOWN, [
            f"Unrecognized command '{cmd.keyword}'. Type 'help' for help."])

    def _op_usage(self, cmd: Usage) -> CommandResult:
        return CommandResult(Outcome.USAGE, [f"Usage: {cmd.hint}"])
