"""The interactive read-evaluate-print loop."""

from __future__ import annotations

import logging
from typing import Callable, TextIO

from dblib.term.helpers import DisplayOptions, GenericExecer
from dblib.term.parse import parse_and_exec_queries

_log = logging.getLogger(__name__)


def make_prompt(database_name: str, multiline: bool) -> str:
    """Return the prompt for the current database and input state."""
    prompt = ">>> " if multiline else "> "
    return f"{database_name}{prompt}" if database_name else prompt


def repl(
    execer: GenericExecer,
    options: DisplayOptions | None = None,
    read_line: Callable[[str], str] | None = None,
    out: TextIO | None = None,
) -> None:
    """Read statements, execute them once they end with ";" and print results.

    read_line gets the prompt and returns a line; it raises EOFError at the
    end of input. Pending statements are executed before returning on EOF.
    """
    options = options if options is not None else DisplayOptions()
    read_line = read_line if read_line is not None else input

    cmds: list[str] = []
    multiline = False

    while True:
        prompt = make_prompt(options.database_name, multiline)
        try:
            line = read_line(prompt)
            eof = False
        except EOFError:
            line = ""
            eof = True

        line = line.strip()
        if line:
            cmds.append(line)

        if eof and not cmds:
            return

        if line and not line.endswith(";"):
            multiline = True
            continue

        multiline = False
        query = " ".join(cmds)
        cmds = []

        try:
            parse_and_exec_queries(execer, query, options, out)
        except Exception as exc:  # keep the session alive after a failed statement
            _log.error("term: failed to process query: %s", exc)

        if eof:
            return