"""Protocol data models for the FTP client."""

from .address import HostPort, decode_address, encode_address, parse_pasv_text
from .command import (
    Command,
    Cwd,
    Dele,
    List,
    Mkd,
    Pass,
    Pasv,
    Port,
    Pwd,
    Quit,
    Retr,
    Rmd,
    Stor,
    TransferCommand,
    Type,
    User,
    encode_command,
    redacted,
)
from .mode import ActiveMode, PassiveMode, TransferMode, TransferType
from .response import Response, StatusCode, parse_response

__all__ = [
    "ActiveMode",
    "Command",
    "Cwd",
    "Dele",
    "HostPort",
    "List",
    "Mkd",
    "Pass",
    "PassiveMode",
    "Pasv",
    "Port",
    "Pwd",
    "Quit",
    "Response",
    "Retr",
    "Rmd",
    "StatusCode",
    "Stor",
    "TransferCommand",
    "TransferMode",
    "TransferType",
    "Type",
    "User",
    "decode_address",
    "encode_address",
    "encode_command",
    "parse_pasv_text",
    "parse_response",
    "redacted",
]
