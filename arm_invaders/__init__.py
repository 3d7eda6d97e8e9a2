"""
ARM Invaders — didactic NZCV flag simulator
============================================
Eight 32-bit registers, four instructions (ADD, SUB, MUL, MOV + RAND),
and the N/Z/C/V flags they produce, driven from a command prompt or a
script file.

Architecture:
    ┌──────────┐    ┌───────────┐    ┌─────────────┐    ┌─────────┐    ┌──────────┐
    │  line    │───>│ commands  │───>│ interpreter │───>│  alu    │───>│  regs    │
    │ (prompt/ │    │ (parse to │    │ (dispatch,  │    │ (result,│    │ (bank +  │
    │  script) │    │  variant) │    │  results)   │    │  flags) │    │  NZCV)   │
    └──────────┘    └───────────┘    └─────────────┘    └─────────┘    └──────────┘

    - script.py:   replays a file through the same interpreter entry point
    - state_io.py: key=value save / merge-load of registers and flags
    - hud.py:      rich terminal display of a BankSnapshot
"""

__version__ = "1.0.0"

from .regs import RegisterBank, BankSnapshot, CC_N, CC_Z, CC_C, CC_V
from .alu import add32, sub32, mul32_didactic, mov_imm, rand_range
from .commands import parse_line, parse_reg, parse_u32
from .interpreter import Interpreter, CommandResult, Outcome, SessionState
from .state_io import save_state, load_state
from .script import run_script
