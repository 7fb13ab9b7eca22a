# dblib

Building blocks for clients of the Tabular Data Stream (TDS) protocol, and
helpers for interactive SQL terminals. The package uses only the standard
library.

## `dblib.values`

`values_to_named_values(values)` turns positional query arguments into
`NamedValue` records. Each record has an empty `name`, a 1-based `ordinal`
and the `value`.

```python
from dblib.values import values_to_named_values

values_to_named_values([0, "string"])
# [NamedValue(name='', ordinal=1, value=0),
#  NamedValue(name='', ordinal=2, value='string')]
```

## `dblib.tds`

- `token`: the `Token` enumeration of TDS token bytes.
- `version`: `Version(major, minor, sp, patch)`. Each part must fit into one
  byte. You can build one with `version_from_bytes(bs)`, which takes exactly
  four bytes, or with `version_from_string("a.b.c.d")`. `compare(other)`
  returns -1, 0 or 1, and `to_bytes()` returns the four bytes.
- `packet_header`: `PacketHeader` is the 8-byte, big-endian packet header.
  It has `to_bytes`, `from_bytes`, `read_from(reader)` and
  `write_to(writer)`. The module also holds the `PacketHeaderType` and
  `PacketHeaderStatus` enumerations. `read_from` raises
  `EOFAfterZeroReadError` when the stream ends before any header byte
  arrives, and `EOFError` on a short header.
- `packet`: `Packet` is a header plus a payload. `new_packet(packet_size)`
  allocates an empty packet. `Packet.read_from(reader, timeout)` reads a
  payload that may arrive in pieces. The timeout is in seconds and starts
  again after every read that delivers data. `to_bytes` and `write_to`
  produce the wire form.
- `packet_queue`: `PacketQueue(packet_size, byteorder="little")` is a byte
  channel spread over packets. Writes fill packets and add new ones as
  needed, and reads continue across packet boundaries. It offers:
  - typed readers: `uint8` … `int64`, `byte`, `string`, `read_bytes`;
  - typed writers: `write_uint8` … `write_int64`, `write_byte`,
    `write_string`, `write_bytes`;
  - file-like `read` and `write`;
  - position handling: `position`, `set_position`,
    `discard_until_current_position`, `all_packets_consumed`, `is_eom`,
    `add_packet`, `reset`.

  A read past the queued data raises `NotEnoughBytesError`.
- Token packages, each with `read_from(ch)` and `write_to(ch)` on a
  `PacketQueue`. Except for `ReturnStatusPackage` and `TokenlessPackage`,
  `write_to` writes the token byte first. `read_from` expects the token to
  have been consumed already.
  - `simple_packages`:
    - `LogoutPackage`: only option 0 is accepted on read.
    - `ReturnStatusPackage`
    - `HeaderOnlyPackage`: both methods raise `TypeError`.
    - `TokenlessPackage`: reads everything left in the channel.
  - `eed`: `EEDPackage` and `EEDStatus`.
  - `env_change`: `EnvChangePackage`, `EnvChangePackageField` and
    `EnvChangeType`.
  - `error_package`: `ErrorPackage`.
  - `language`: `LanguagePackage` and `LanguageStatus`.
  - `login_ack`: `LoginAckPackage` and `LoginAckStatus`.
  - `msg`: `MsgPackage`, `MsgStatus`, `MsgId` and `OpaqueSecurityToken`.
  - `option_cmd`: `OptionCmdPackage`, `OptionCmd` and `OptionCmdOption`.
  - `order_by`: `OrderByPackage` (one-byte column numbers) and
    `OrderBy2Package` (two-byte column numbers).

Reading a package body checks the declared length and raises `ValueError`
on a mismatch. Writing raises `ValueError` when a field does not fit its
length prefix.

```python
from dblib.tds.packet_queue import PacketQueue
from dblib.tds.simple_packages import LogoutPackage
from dblib.tds.version import version_from_string

v = version_from_string("99.1.0.4")
v.to_bytes()                                 # b"c\x01\x00\x04"
v.compare(version_from_string("0.0.0.0"))    # 1

queue = PacketQueue(lambda: 512)
LogoutPackage().write_to(queue)
queue.set_position(0, 0)
queue.byte()                                 # 0x71, the logout token
```

## `dblib.term`

Parts of an interactive SQL client. They work with any object that has a
`generic_exec(query, args)` method (the `GenericExecer` protocol) returning
a `(rows, result)` pair, where either may be `None`.

- `rows` must provide:
  - `columns()`;
  - `column_type_database_type_name(i)`;
  - `column_type_length(i)`, returning an int or `None`;
  - iteration over rows of cells.

  It may also provide `column_type_display_length(i)`, `next_result_set()`
  and `close()`.
- `result` must provide `rows_affected()`.

The modules are:

- `helpers`: `process(execer, query, options, out)` runs one query.
  `process_rows` prints result sets as padded tables. It shows `<nil>` for
  `None`, hex for binary column types, and cuts long cells with `...`.
  `process_result` prints `Rows affected: N` when N is not negative.
  `DisplayOptions` has these fields:
  - `max_col_length`, default 50;
  - `print_col_type`, default off;
  - `database_name`, shown in the prompt.
- `parse`: `split_queries(line)` splits at semicolons that are outside
  quotes. `parse_and_exec_queries` runs each query in turn.
- `repl`: `repl(execer, options, read_line, out)` gathers lines until one
  ends with `;`, then runs them. Failed statements are logged and the loop
  goes on. `read_line` defaults to `input`, and the loop ends on
  `EOFError`. `make_prompt(database_name, multiline)` builds the prompt
  (`> ` or `>>> `).
- `entrypoint`: `entrypoint(execer, args, input_file, ...)` starts the REPL
  when there are no arguments and no input file. Otherwise it runs the
  joined arguments as one statement, or the contents of the file.

```python
from dblib.term.parse import split_queries

split_queries("select 'a;b'; select 2")
# ["select 'a;b'", " select 2"]
```

## What this package does not do

- It opens no network connections and has no login sequence, database
  driver or `GenericExecer` implementation. You supply the connection
  object.
- It has no row, parameter-format, row-format or key packages, so it
  cannot decode result data from a server by itself.
- It installs no command-line program. `entrypoint` and `repl` are library
  functions for a client to call with its own connection.