"""Entry point shared by interactive database clients."""

from __future__ import annotations

import os
from typing import Callable, Sequence, TextIO

from dblib.term.helpers import DisplayOptions, GenericExecer
from dblib.term.parse import parse_and_exec_queries
from dblib.term.repl import repl


def entrypoint(
    execer: GenericExecer,
    args: Sequence[str],
    input_file: str | os.PathLike[str] | None = None,
    options: DisplayOptions | None = None,
    read_line: Callable[[str], str] | None = None,
    out: TextIO | None = None,
) -> None:
    """Run the queries from args or from input_file, or start the interactive loop."""
    if not args and not input_file:
        repl(execer, options, read_line, out)
        return

    query = " ".join(args) + ";"

    if input_file:
        with open(input_file, encoding="utf-8") as fh:
            query = fh.read()

    parse_and_exec_queries(execer, query, options, out)