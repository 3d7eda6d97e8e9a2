#!/usr/bin/env python3
"""
armsim — ARM Invaders didactic flag simulator

Usage:
    python armsim.py [--seed N] [--log-dir DIR] [-v] [--no-color]

Commands at the prompt (case-insensitive):
    add x k          r[x] = r[x] + k
    sub x k          r[x] = r[x] - k
    mul x y          r[x] = r[x] * r[y]
    mov x k          r[x] = k
    rand x a b       r[x] = random value in [a, b]
    save file.txt    save registers + flags
    load file.txt    load registers + flags (merge)
    script file.txt  run commands from a file ('#' and blank lines skipped)
    show / reset / help / quit / exit

Registers may be written as 2, r2 or R2. The session ends on quit, exit
or end of input, always with exit code 0.
"""

import argparse
import logging
import random
import sys

from rich.console import Console

from arm_invaders import __version__
from arm_invaders.config import LOG_NAME, PROMPT
from arm_invaders.hud import Hud
from arm_invaders.interpreter import Interpreter, Outcome
from arm_invaders.log_setup import setup_logging


def run_session(interp: Interpreter, hud: Hud, read_line) -> int:
    """Prompt loop: read a line, execute it, show the result.

    read_line() returns the next line of input and raises EOFError when
    there is none left.
    """
    hud.draw(interp.snapshot())
    hud.help()

    while interp.running:
        try:
            line = read_line()
        except (EOFError, KeyboardInterrupt):
            hud.message("\nEOF received. Exiting.")
            break
        if not line.strip():
            continue

        result = interp.execute_line(line)
        hud.report(result, interp.snapshot())
        if result.outcome is Outcome.QUIT:
            hud.message("Exiting. See you!")

    return 0


def _console_level(verbose: int) -> int:
    if verbose <= 0:
        return logging.WARNING
    if verbose == 1:
        return logging.INFO
    return logging.DEBUG


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="armsim",
        description="ARM Invaders — didactic NZCV flag simulator",
    )
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for the rand command (default: unseeded)")
    parser.add_argument("--log-dir", default=None,
                        help="Write a DEBUG log file into this directory")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="More console logging (-v info, -vv debug)")
    parser.add_argument("--no-color", action="store_true",
                        help="Plain output without colors")
    parser.add_argument("--version", action="version",
                        version=f"armsim {__version__}")
    args = parser.parse_args(argv)

    log = setup_logging(
        LOG_NAME,
        console_level=_console_level(args.verbose),
        log_dir=args.log_dir,
        rich_console=not args.no_color,
    )
    log.debug("seed=%s", args.seed)

    console = Console(no_color=args.no_color, highlight=False)
    hud = Hud(console)
    interp = Interpreter(rng=random.Random(args.seed))

    return run_session(interp, hud, lambda: console.input(PROMPT))


if __name__ == "__main__":
    sys.exit(main())
