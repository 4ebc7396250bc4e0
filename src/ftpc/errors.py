"""Error taxonomy for the FTP client engine."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ftpc.models.response import Response


class FTPError(Exception):
    """Base class for all engine errors."""


class InvalidResponse(FTPError):
    """Server response is in invalid format."""

    def __init__(self, line: str):
        self.line = line
        super().__init__(
            f'Server response is in invalid format. Received line: "{line.rstrip()}".'
        )


class UnexpectedReturnCode(FTPError):
    """Reply code is valid but not one the operation accepts."""

    def __init__(self, code: int, text: str):
        self.code = code
        self.text = text
        super().__init__(
            f'Received unexpected return code {code}. Description "{text}".'
        )


class OperationFailed(FTPError):
    """Server refused the requested action (reply 550)."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Operation failed: {text}")


class IoError(FTPError):
    """Transport or local file failure.

    The underlying exception is available as ``cause`` and is also chained
    as ``__cause__`` by the code raising this error.
    """

    def __init__(self, cause: Optional[BaseException] = None, message: str = ""):
        self.cause = cause
        super().__init__(f"Communication IO error: {message or cause}")


class EncodingError(FTPError):
    """Listing bytes are not valid UTF-8."""

    def __init__(self, cause: UnicodeDecodeError):
        self.cause = cause
        super().__init__(f"Listing is not valid UTF-8 text: {cause}")


def error_for_response(response: "Response") -> FTPError:
    """Build the error describing a reply the caller did not accept."""
    from ftpc.models.response import StatusCode

    if response.code == StatusCode.OPERATION_FAILED:
        return OperationFailed(response.text)
    return UnexpectedReturnCode(response.code, response.text)
