"""
Save / load of register bank state.

File format (one entry per line, '#' lines are comments):

    # ARM Invaders save
    r0=100
    ...
    r7=100
    N=0 Z=1 C=1 V=0

Loading is a merge: every whitespace-separated key=value pair found on a
non-comment line is applied, unknown keys and out-of-range registers are
skipped, and anything the file does not mention keeps its current value.
The turn counter is never saved and never touched by a load.

Neither function raises on I/O problems; both return a StateIOResult.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Union

from .config import NUM_REGS, SAVE_HEADER, WORD_MASK
from .regs import FLAG_NAMES, RegisterBank

log = logging.getLogger(__name__)


class StateFormatError(ValueError):
    """A key=value pair whose value is not a valid number."""
    pass


@dataclass
class StateIOResult:
    ok: bool
    path: str
    error: str = ""
    applied: int = 0     # load only: number of key=value pairs applied


# ──────────────────────────────────────────────
# Text form
# ──────────────────────────────────────────────

def format_state(bank: RegisterBank) -> str:
    """Render the bank in save-file form."""
    lines = [SAVE_HEADER]
    for i in range(NUM_REGS):
        lines.append(f"r{i}={bank[i]}")
    lines.append(" ".join(f"{name}={bank.get_flag(name)}" for name in FLAG_NAMES))
    return "\n".join(lines) + "\n"


def _parse_value(key: str, raw: str) -> int:
    if not raw.isdigit() or not raw.isascii():
        raise StateFormatError(f"{key}: not an unsigned decimal value: {raw!r}")
    return int(raw)


def parse_state(text: str) -> Dict[str, int]:
    """Collect the updates a save file asks for.

    Returns a dict keyed by register key ('r0'..'r7') or flag letter.
    Later entries win over earlier ones for the same key.
    """
    updates: Dict[str, int] = {}
    for lineno, line in enumerate(text.splitlines(), 1):
        stripped = line.strip()
        if not stripped or stripped.startswith('#'):
            continue
        for pair in stripped.split():
            key, sep, raw = pair.partition('=')
            if not sep or not key:
                continue
            try:
                if key in FLAG_NAMES:
                    updates[key] = 1 if _parse_value(key, raw) else 0
                elif key[0] == 'r' and key[1:].isdigit() and key[1:].isascii():
                    idx = int(key[1:])
                    if idx >= NUM_REGS:
                        log.debug("line %d: register %s out of range, skipped", lineno, key)
                        continue
                    updates[f"r{idx}"] = _parse_value(key, raw) & WORD_MASK
                else:
                    log.debug("line %d: unknown key %r, skipped", lineno, key)
            except StateFormatError as e:
                log.debug("line %d: %s, skipped", lineno, e)
    return updates


def apply_state(bank: RegisterBank, updates: Dict[str, int]) -> int:
    """Write parsed updates into the bank. Returns how many were applied."""
    for key, value in updates.items():
        if key in FLAG_NAMES:
            bank.set_flag(key, value)
        else:
            bank[int(key[1:])] = value
    return len(updates)


# ──────────────────────────────────────────────
# File I/O
# ──────────────────────────────────────────────

def save_state(bank: RegisterBank, path: Union[str, Path]) -> StateIOResult:
    """Write the bank to path."""
    text = format_state(bank)
    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)
    except OSError as e:
        log.info("save to %s failed: %s", path, e)
        return StateIOResult(ok=False, path=str(path), error=str(e))
    log.info("state saved to %s", path)
    return StateIOResult(ok=True, path=str(path))


def load_state(bank: RegisterBank, path: Union[str, Path]) -> StateIOResult:
    """Merge the state stored at path into the bank.

    The whole file is read and parsed before anything is applied, so a
    read failure leaves the bank untouched.
    """
    try:
        text = Path(path).read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        log.info("load from %s failed: %s", path, e)
        return StateIOResult(ok=False, path=str(path), error=str(e))
    applied = apply_state(bank, parse_state(text))
    log.info("state loaded from %s (%d entries)", path, applied)
    return StateIOResult(ok=True, path=str(path), applied=applied)
