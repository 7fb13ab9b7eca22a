"""Splitting of input lines into queries and their execution."""

from __future__ import annotations

from typing import TextIO

from dblib.term.helpers import DisplayOptions, GenericExecer, process

_QUOTES = frozenset("\"'")


def split_queries(line: str) -> list[str]:
    """Split a line at semicolons that are not inside quotes.

    Every semicolon ends a query, even an empty one; trailing text after
    the last semicolon forms a query if it is not empty.
    """
    queries = []
    current: list[str] = []
    quoted = False

    for chr_ in line:
        if chr_ in _QUOTES:
            quoted = not quoted
            current.append(chr_)
        elif chr_ == ";" and not quoted:
            queries.append("".join(current))
            current = []
        else:
            current.append(chr_)

    if current:
        queries.append("".join(current))

    return queries


def parse_and_exec_queries(
    execer: GenericExecer,
    line: str,
    options: DisplayOptions | None = None,
    out: TextIO | None = None,
) -> None:
    """Split a line into queries and execute them in order."""
    for query in split_queries(line):
        process(execer, query, options, out)