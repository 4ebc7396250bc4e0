"""Abstract base class for data channel establishment."""

import socket
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ftpc.control import ControlChannel
    from ftpc.models import TransferCommand, TransferMode


class DataChannelEstablisher(ABC):
    """Negotiates one data connection over the control channel."""

    def __init__(self, control: "ControlChannel", mode: "TransferMode"):
        """Initialize establisher.

        Args:
            control: Control channel used for negotiation
            mode: Transfer mode this establisher implements
        """
        self.control = control
        self.mode = mode

    @abstractmethod
    def establish(self, command: "TransferCommand") -> socket.socket:
        """Negotiate a data channel and issue the transfer command.

        The representation type must already have been accepted.

        Args:
            command: RETR, STOR or LIST to issue once the channel is ready

        Returns:
            Connected data socket, owned by the caller

        Raises:
            FTPError: If negotiation fails
        """
        pass

    def _apply_timeout(self, sock: socket.socket) -> None:
        sock.settimeout(self.control.timeout)


class EstablisherFactory:
    """Factory for creating data channel establishers."""

    _handlers: dict[str, type[DataChannelEstablisher]] = {}

    @classmethod
    def register(
        cls, mode_name: str, handler_class: type[DataChannelEstablisher]
    ) -> None:
        """Register an establisher.

        Args:
            mode_name: Mode identifier (e.g., "active", "passive")
            handler_class: Establisher class to register
        """
        cls._handlers[mode_name.lower()] = handler_class

    @classmethod
    def create(
        cls, mode: "TransferMode", control: "ControlChannel", **kwargs
    ) -> DataChannelEstablisher:
        """Create the establisher for a transfer mode.

        Args:
            mode: ActiveMode or PassiveMode
            control: Control channel used for negotiation
            **kwargs: Extra establisher options

        Returns:
            Establisher instance

        Raises:
            ValueError: If the mode is not supported
        """
        handler_class = cls._handlers.get(mode.name.lower())
        if handler_class is None:
            supported = ", ".join(cls._handlers.keys())
            raise ValueError(
                f"Unsupported transfer mode: {mode.name}. "
                f"Supported modes: {supported}"
            )
        return handler_class(control, mode, **kwargs)
