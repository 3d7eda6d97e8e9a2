"""
Script replay.

A script is a plain text file with one command per line. Blank lines and
lines whose first non-blank character is '#' are skipped; every other line
is handed, unchanged, to the same line executor the interactive prompt
uses, so keyword case handling is identical for both sources.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Iterator, Union

log = logging.getLogger(__name__)


@dataclass
class ScriptResult:
    ok: bool
    path: str
    lines_run: int = 0
    stopped: bool = False   # a line asked the session to end
    error: str = ""


def command_lines(lines: Iterable[str]) -> Iterator[str]:
    """Yield the lines that should be executed, without trailing newlines."""
    for line in lines:
        body = line.lstrip()
        if not body or body.startswith('#'):
            continue
        yield line.rstrip('\r\n')


def run_lines(lines: Iterable[str], execute: Callable[[str], bool]) -> tuple:
    """Feed lines to execute() until the source ends or execute() returns False.

    Returns (lines_run, stopped).
    """
    count = 0
    for line in command_lines(lines):
        count += 1
        if not execute(line):
            return (count, True)
    return (count, False)


def run_script(path: Union[str, Path], execute: Callable[[str], bool]) -> ScriptResult:
    """Replay the file at path. An unreadable file runs zero lines."""
    try:
        text = Path(path).read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        log.info("script %s could not be read: %s", path, e)
        return ScriptResult(ok=False, path=str(path), error=str(e))

    log.info("running script %s", path)
    count, stopped = run_lines(text.splitlines(), execute)
    log.info("script %s finished: %d line(s)%s", path, count,
             ", stopped by quit" if stopped else "")
    return ScriptResult(ok=True, path=str(path), lines_run=count, stopped=stopped)
