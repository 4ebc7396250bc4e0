"""Status line parsing."""

import re
from dataclasses import dataclass
from enum import IntEnum

from ftpc.errors import InvalidResponse

_CONTINUATION = re.compile(r"^(\d{3})-")


class StatusCode(IntEnum):
    """Reply codes the client understands."""

    OPEN_DATA_CONNECTION = 150
    SUCCESS = 200
    READY_FOR_NEW_USER = 220
    CLOSING_DATA_CONNECTION = 226
    ENTERING_PASSIVE_MODE = 227
    LOGIN_SUCCESSFUL = 230
    FILE_ACTION_OK = 250
    PATHNAME_CREATED = 257
    USERNAME_OK_NEED_PASSWORD = 331
    INVALID_USERNAME_OR_PASSWORD = 430
    NOT_LOGGED_IN = 530
    OPERATION_FAILED = 550


@dataclass(frozen=True)
class Response:
    """A single server reply: numeric code plus trailing text."""

    code: int
    text: str

    def __str__(self) -> str:
        return f"{self.code} {self.text}"


def parse_response(line: str) -> Response:
    """Split a status line into code and trimmed text.

    Args:
        line: Raw line read from the control channel

    Returns:
        Parsed Response

    Raises:
        InvalidResponse: If the line has no space or the code is not numeric
    """
    pos = line.find(" ")
    if pos < 0:
        raise InvalidResponse(line)

    try:
        code = int(line[:pos])
    except ValueError:
        raise InvalidResponse(line)

    return Response(code=code, text=line[pos + 1:].strip())


def is_continuation(line: str) -> bool:
    """Return True if the line opens a multi-line reply (``NNN-text``)."""
    return _CONTINUATION.match(line) is not None


def continuation_code(line: str) -> str:
    """Return the three-digit code of a continuation opening line."""
    match = _CONTINUATION.match(line)
    if match is None:
        raise InvalidResponse(line)
    return match.group(1)
