"""
ARM Invaders — Simulator Configuration
=======================================

Fixed machine parameters and session defaults. Everything the simulator
treats as a constant lives here so tests and the CLI read one source.
"""

# =============================================================================
#  MACHINE
# =============================================================================
NUM_REGS = 8               # r0..r7
WORD_BITS = 32
WORD_MASK = 0xFFFF_FFFF    # registers wrap modulo 2^32
SIGN_BIT = 1 << (WORD_BITS - 1)

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1

RESET_VALUE = 100          # every register after `reset` ("full health")


# =============================================================================
#  SESSION
# =============================================================================
PROMPT = "> "
MAX_SCRIPT_DEPTH = 8       # script -> script -> ... nesting limit

# Comment line written at the top of every save file
SAVE_HEADER = "# ARM Invaders save"


# =============================================================================
#  DISPLAY
# =============================================================================
BAR_WIDTH = 28             # cells in a register health bar
BAR_SCALE = 100            # values >= this draw a full bar
BAR_RED_MAX = 33           # <= 33 red, <= 66 yellow, else green
BAR_YELLOW_MAX = 66

LOG_NAME = "armsim"
