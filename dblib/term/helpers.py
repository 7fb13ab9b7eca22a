"""Execution of single queries and tabular printing of their results."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Protocol, Sequence, TextIO

from dblib.values import NamedValue

_DECIMAL_TYPES = frozenset({"DECIMAL", "DECN", "NUMN"})
_BINARY_TYPES = frozenset({"IMAGE", "BINARY", "LONGBINARY", "VARBINARY"})
_NIL = "<nil>"
_ELLIPSIS = "..."


@dataclass
class DisplayOptions:
    """Settings for interactive clients and their result tables."""

    # Maximum number of characters to print for a column
    max_col_length: int = 50
    # Display the column type next to the column name
    print_col_type: bool = False
    # Database name shown in the interactive prompt
    database_name: str = ""


class GenericExecer(Protocol):
    """A connection that sends SQL statements to the server."""

    def generic_exec(self, query: str, args: Sequence[NamedValue]) -> tuple[Any, Any]:
        """Execute a query and return its rows and its result, either may be None."""
        ...


def _format_cell(cell: Any, type_name: str) -> str:
    if cell is None:
        return _NIL
    if type_name in _BINARY_TYPES:
        return bytes(cell).hex()
    if type_name in _DECIMAL_TYPES:
        return str(cell)
    if isinstance(cell, bool):
        return str(cell).lower()
    return str(cell)


def _column_width(rows: Any, index: int, name: str, type_name: str, options: DisplayOptions) -> int:
    width = len(name)
    if options.print_col_type:
        width += 1 + len(type_name)

    length = rows.column_type_length(index)
    if length is not None and length > width:
        width = length

    display_length = getattr(rows, "column_type_display_length", None)
    if callable(display_length):
        length = display_length(index)
        if length is not None and length > width:
            width = length

    return min(width, options.max_col_length)


def process_rows(rows: Any, options: DisplayOptions | None = None, out: TextIO | None = None) -> None:
    """Print all result sets of rows as a table."""
    options = options if options is not None else DisplayOptions()
    out = out if out is not None else sys.stdout

    if not callable(getattr(rows, "column_type_length", None)):
        raise TypeError("rows does not support column_type_length")
    if not callable(getattr(rows, "column_type_database_type_name", None)):
        raise TypeError("rows does not support column_type_database_type_name")

    while True:
        names = list(rows.columns())
        if not names:
            return

        type_names = [rows.column_type_database_type_name(i) for i in range(len(names))]
        widths = [
            _column_width(rows, i, name, type_name, options)
            for i, (name, type_name) in enumerate(zip(names, type_names))
        ]

        header = "|"
        for name, type_name, width in zip(names, type_names, widths):
            label = f"{name} {type_name}" if options.print_col_type else name
            header += f" {label.ljust(width)} |"
        out.write(header + "\n")

        for cells in rows:
            line = "|"
            for cell, type_name, width in zip(cells, type_names, widths):
                text = _format_cell(cell, type_name)
                if len(text) > width:
                    text = text[: max(width - 3, 0)] + _ELLIPSIS
                line += f" {text.ljust(width)} |"
            out.write(line + "\n")

        next_result_set = getattr(rows, "next_result_set", None)
        if not callable(next_result_set) or not next_result_set():
            return


def process_result(result: Any, out: TextIO | None = None) -> None:
    """Print the number of affected rows if the result reports one."""
    out = out if out is not None else sys.stdout
    affected = result.rows_affected()
    if affected >= 0:
        out.write(f"Rows affected: {affected}\n")


def process(
    execer: GenericExecer,
    query: str,
    options: DisplayOptions | None = None,
    out: TextIO | None = None,
) -> None:
    """Execute one query and print its rows and result."""
    options = options if options is not None else DisplayOptions()
    out = out if out is not None else sys.stdout

    generic_exec = getattr(execer, "generic_exec", None)
    if not callable(generic_exec):
        raise TypeError("invalid driver, must support generic_exec")

    rows, result = generic_exec(query, [])

    if rows is not None:
        try:
            process_rows(rows, options, out)
        finally:
            close = getattr(rows, "close", None)
            if callable(close):
                close()

    if result is not None:
        process_result(result, out)