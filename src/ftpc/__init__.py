"""ftpc - synchronous FTP client engine."""

from .errors import (
    EncodingError,
    FTPError,
    InvalidResponse,
    IoError,
    OperationFailed,
    UnexpectedReturnCode,
)
from .models import ActiveMode, PassiveMode, TransferType
from .session import FTPSession, SessionState

__all__ = [
    "ActiveMode",
    "EncodingError",
    "FTPError",
    "FTPSession",
    "InvalidResponse",
    "IoError",
    "OperationFailed",
    "PassiveMode",
    "SessionState",
    "TransferType",
    "UnexpectedReturnCode",
]
