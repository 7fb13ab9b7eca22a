"""The package that sets or resets a session option."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from dblib.tds.packet_queue import PacketQueue
from dblib.tds.token import Token

_UINT8_MAX = 0xFF


class OptionCmd(enum.IntEnum):
    """What to do with an option."""

    TDS_OPT_SET = 1
    TDS_OPT_DEFAULT = 2
    TDS_OPT_LIST = 3
    TDS_OPT_INFO = 4

    def __str__(self) -> str:
        return self.name


class OptionCmdOption(enum.IntEnum):
    """Which option is being configured."""

    TDS_OPT_UNUSED = 0
    TDS_OPT_DATEFIRST = 1
    TDS_OPT_TEXTSIZE = 2
    TDS_OPT_STAT_TIME = 3
    TDS_OPT_STAT_IO = 4
    TDS_OPT_ROWCOUNT = 5
    TDS_OPT_NATLANG = 6
    TDS_OPT_DATEFORMAT = 7
    TDS_OPT_ISOLATION = 8
    TDS_OPT_AUTHON = 9
    TDS_OPT_CHARSET = 10
    TDS_OPT_PLAN = 11
    TDS_OPT_ERRLVL = 12
    TDS_OPT_SHOWPLAN = 13
    TDS_OPT_NOEXEC = 14
    TDS_OPT_ARITHIGNOREON = 15
    TDS_OPT_ARITHABORTON = 16
    TDS_OPT_PARSEONLY = 17
    TDS_OPT_ESTIMATE = 18
    TDS_OPT_GETDATA = 19
    TDS_OPT_NOCOUNT = 20
    TDS_OPT_FORCEPLAN = 21
    TDS_OPT_FORMATONLY = 22
    TDS_OPT_CHAINXACTS = 23
    TDS_OPT_CURCLOSEONXACT = 24
    TDS_OPT_FIPSFLAG = 25
    TDS_OPT_RESTREES = 26
    TDS_OPT_IDENTITYON = 27
    TDS_OPT_CURREAD = 28
    TDS_OPT_CURWRITE = 29
    TDS_OPT_IDENTITYOFF = 30
    TDS_OPT_AUTHOFF = 31
    TDS_OPT_ANSINULL = 32
    TDS_OPT_QUOTED_IDENT = 33
    TDS_OPT_ANSIPERM = 34
    TDS_OPT_STR_RTRUNC = 35
    TDS_OPT_SORTMERGE = 36
    TDS_OPT_JTC = 37
    TDS_OPT_CLIENTREALNAME = 38
    TDS_OPT_CLIENTHOSTNAME = 39
    TDS_OPT_CLIENTAPPLNAME = 40
    TDS_OPT_IDENTITYUPD_ON = 41
    TDS_OPT_IDENTITYUPD_OFF = 42
    TDS_OPT_NODATA = 43
    TDS_OPT_CIPHERTEXT = 44
    TDS_OPT_SHOW_FI = 45
    TDS_OPT_HIDE_VCC = 46
    TDS_OPT_LOBLOCATOR = 47
    TDS_REQ_LOBLOCATOR = 48
    TDS_OPT_LOBLOCATORFETCHSIZE = 49
    TDS_OPT_ISOLATION_MODE = 102

    def __str__(self) -> str:
        return self.name


def _to_enum(enum_type: type[enum.IntEnum], value: int) -> enum.IntEnum | int:
    try:
        return enum_type(value)
    except ValueError:
        return value


def _describe(enum_type: type[enum.IntEnum], value: int) -> str:
    if isinstance(value, enum_type):
        return value.name
    return f"{enum_type.__name__}({int(value)})"


@dataclass
class OptionCmdPackage:
    """Sets or resets an option; the meaning of the argument depends on the option."""

    cmd: OptionCmd | int = OptionCmd.TDS_OPT_SET
    option: OptionCmdOption | int = OptionCmdOption.TDS_OPT_UNUSED
    option_arg: bytes = b""

    def read_from(self, ch: PacketQueue) -> None:
        """Read the package body that follows the token."""
        ch.uint16()  # length
        self.cmd = _to_enum(OptionCmd, ch.uint8())
        self.option = _to_enum(OptionCmdOption, ch.uint8())
        arg_length = ch.uint8()
        self.option_arg = ch.read_bytes(arg_length)

    def write_to(self, ch: PacketQueue) -> None:
        """Write token and package body."""
        arg = bytes(self.option_arg)
        if len(arg) > _UINT8_MAX:
            raise ValueError(f"option argument is {len(arg)} bytes long, at most {_UINT8_MAX} bytes fit")

        ch.write_byte(Token.TDS_OPTIONCMD)
        # cmd 1, option 1, argument length 1, argument
        ch.write_uint16(3 + len(arg))
        ch.write_uint8(int(self.cmd))
        ch.write_uint8(int(self.option))
        ch.write_uint8(len(arg))
        ch.write_bytes(arg)

    def __str__(self) -> str:
        return (
            f"{type(self).__name__}({_describe(OptionCmd, self.cmd)}, "
            f"{_describe(OptionCmdOption, self.option)}, {list(self.option_arg)})"
        )