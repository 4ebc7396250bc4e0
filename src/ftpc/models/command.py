"""FTP command values and their wire encoding.

Example:
    >>> encode_command(Cwd("/pub"))
    'CWD /pub\\n'
    >>> encode_command(Port("127.0.0.1", 5136))
    'PORT 127,0,0,1,20,16\\n'
"""

from dataclasses import dataclass
from typing import ClassVar, Union

from .address import encode_address
from .mode import TransferType


@dataclass(frozen=True)
class _Command:
    verb: ClassVar[str] = ""

    def argument(self) -> str:
        """Return the argument rendered after the verb (empty if none)."""
        return ""


@dataclass(frozen=True)
class _PathCommand(_Command):
    path: str

    def argument(self) -> str:
        return self.path


@dataclass(frozen=True)
class User(_Command):
    verb: ClassVar[str] = "USER"

    name: str

    def argument(self) -> str:
        return self.name


@dataclass(frozen=True)
class Pass(_Command):
    verb: ClassVar[str] = "PASS"

    password: str

    def argument(self) -> str:
        return self.password


@dataclass(frozen=True)
class Cwd(_PathCommand):
    verb: ClassVar[str] = "CWD"


@dataclass(frozen=True)
class Pwd(_Command):
    verb: ClassVar[str] = "PWD"


@dataclass(frozen=True)
class Mkd(_PathCommand):
    verb: ClassVar[str] = "MKD"


@dataclass(frozen=True)
class Rmd(_PathCommand):
    verb: ClassVar[str] = "RMD"


@dataclass(frozen=True)
class Dele(_PathCommand):
    verb: ClassVar[str] = "DELE"


@dataclass(frozen=True)
class List(_Command):
    verb: ClassVar[str] = "LIST"

    path: str = ""

    def argument(self) -> str:
        return self.path


@dataclass(frozen=True)
class Retr(_PathCommand):
    verb: ClassVar[str] = "RETR"


@dataclass(frozen=True)
class Stor(_PathCommand):
    verb: ClassVar[str] = "STOR"


@dataclass(frozen=True)
class Port(_Command):
    verb: ClassVar[str] = "PORT"

    host: str
    port: int

    def argument(self) -> str:
        return encode_address(self.host, self.port)


@dataclass(frozen=True)
class Pasv(_Command):
    verb: ClassVar[str] = "PASV"


@dataclass(frozen=True)
class Quit(_Command):
    verb: ClassVar[str] = "QUIT"


@dataclass(frozen=True)
class Type(_Command):
    verb: ClassVar[str] = "TYPE"

    transfer_type: TransferType

    def argument(self) -> str:
        return self.transfer_type.value


Command = Union[
    User, Pass, Cwd, Pwd, Mkd, Rmd, Dele, List, Retr, Stor, Port, Pasv, Quit, Type
]

# Commands that open a data connection once the channel is negotiated.
TransferCommand = Union[Retr, Stor, List]


def encode_command(command: Command) -> str:
    """Render a command as a single newline-terminated line.

    The argument is written verbatim; callers must not pass newlines.
    """
    argument = command.argument()
    if argument:
        return f"{command.verb} {argument}\n"
    return f"{command.verb}\n"


def redacted(command: Command) -> str:
    """Return the command line for logging, with the password masked."""
    if isinstance(command, Pass):
        return "PASS ****"
    return encode_command(command).rstrip("\n")
