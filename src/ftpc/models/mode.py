"""Transfer mode and representation type."""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Union


class TransferType(Enum):
    """Representation type negotiated with TYPE before a transfer."""

    BINARY = "I"
    TEXT = "A"


@dataclass(frozen=True)
class ActiveMode:
    """Client listens, server connects back.

    When ``port`` is None the listener starts at the control channel's
    local port + 1.
    """

    name: ClassVar[str] = "active"

    host: str = "127.0.0.1"
    port: Optional[int] = None


@dataclass(frozen=True)
class PassiveMode:
    """Server listens, client connects to the announced address."""

    name: ClassVar[str] = "passive"


TransferMode = Union[ActiveMode, PassiveMode]
